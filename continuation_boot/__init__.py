"""continuation-boot: sélection du prochain boot GRUB et commande à exécuter au redémarrage."""

__version__ = "1.0.0"
