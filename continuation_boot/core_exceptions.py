"""Module d'exceptions personnalisées pour continuation-boot.

Fournit une hiérarchie d'exceptions spécifiques. Chaque exception porte son
propre code de sortie: une exécution échouée se termine toujours avec un statut
non nul distinct selon la cause.
"""

from __future__ import annotations


class ContinuationBootError(Exception):
    """Exception de base pour toutes les erreurs de continuation-boot.

    Toutes les exceptions spécifiques à l'application héritent de cette classe.
    Permet de capturer toutes les erreurs métier avec `except ContinuationBootError`.

    Example:
        try:
            manager.run(options)
        except ContinuationBootError as e:
            logger.error(f"Erreur: {e}")
            raise SystemExit(e.exit_code)
    """

    exit_code: int = 1


class UsageError(ContinuationBootError):
    """Arguments de ligne de commande invalides.

    Levée par le parseur d'arguments. Le message est destiné à l'utilisateur
    tel quel (il peut contenir le texte d'aide complet).

    Example:
        if offset < 0:
            raise UsageError(f"Invalid ENTRY_OFFSET: {raw}")
    """

    exit_code = 1


class GrubConfigReadError(ContinuationBootError):
    """grub.cfg introuvable ou illisible.

    Fatal: aucune nouvelle tentative, l'exécution s'arrête.

    Example:
        if not Path(path).is_file():
            raise GrubConfigReadError(f"Fichier de configuration introuvable: {path}")
    """

    exit_code = 3


class GrubParsingError(ContinuationBootError):
    """Incohérence d'imbrication des accolades dans grub.cfg.

    Levée lorsqu'une accolade fermante n'a pas d'ouvrante correspondante.
    Aucune resynchronisation n'est tentée.

    Example:
        if not stack:
            raise GrubParsingError(f"Accolade fermante orpheline à l'offset {pos}")
    """

    exit_code = 4


class EntryPatternError(ContinuationBootError):
    """Expression régulière fournie par l'utilisateur invalide.

    Example:
        try:
            re.compile(pattern)
        except re.error as e:
            raise EntryPatternError(str(e)) from e
    """

    exit_code = 5


class EntryNotFoundError(ContinuationBootError):
    """Aucune entrée à l'offset demandé parmi les entrées filtrées.

    Ne jamais se rabattre sur une autre entrée: la cible de boot doit être exacte.

    Example:
        if offset >= len(matches):
            raise EntryNotFoundError(f"Boot entry not found at offset {offset}")
    """

    exit_code = 6


class ExternalCommandError(ContinuationBootError):
    """Erreur lors de l'exécution d'une commande système.

    Levée lorsqu'une commande externe (grub-reboot, systemctl) se termine avec
    un code de retour non nul.

    Attributes:
        command: La commande qui a échoué
        returncode: Code de retour
        stderr: Sortie d'erreur
    """

    exit_code = 7

    def __init__(
        self,
        message: str,
        command: str | None = None,
        returncode: int | None = None,
        stderr: str | None = None,
    ):
        """Initialise ExternalCommandError avec contexte de la commande.

        Args:
            message: Message d'erreur descriptif
            command: Commande qui a échoué (optionnel)
            returncode: Code de retour de la commande (optionnel)
            stderr: Sortie d'erreur (optionnel)
        """
        super().__init__(message)
        self.command = command
        self.returncode = returncode
        self.stderr = stderr

    def __str__(self) -> str:
        """Représentation textuelle enrichie de l'erreur."""
        parts = [super().__str__()]
        if self.command:
            parts.append(f"Commande: {self.command}")
        if self.returncode is not None:
            parts.append(f"Code retour: {self.returncode}")
        if self.stderr:
            parts.append(f"Stderr: {self.stderr[:200]}")  # Limiter la taille
        return " | ".join(parts)


class ServiceDeployError(ContinuationBootError):
    """Déploiement du service systemd refusé ou impossible.

    Levée lorsqu'un fichier de service étranger existe déjà à l'emplacement
    cible, ou lorsque l'écriture échoue.

    Example:
        if not text.startswith(SERVICE_HEADER):
            raise ServiceDeployError(f"Overwriting existed service is prohibited: {path}")
    """

    exit_code = 8
