"""Chemins système GRUB et systemd.

Module séparé pour éviter les dépendances circulaires et clarifier les responsabilités.
"""

from __future__ import annotations

import os
from typing import Final

# Certains systèmes utilisent /boot/grub2/grub.cfg.
GRUB_CFG_PATHS: Final[list[str]] = ["/boot/grub/grub.cfg", "/boot/grub2/grub.cfg"]

# Service one-shot exécuté au prochain démarrage
SERVICE_PATH: Final[str] = "/etc/systemd/system/continuation-boot.service"

# Répertoires ajoutés au PATH: sous pkexec/sudo, /usr/sbin est souvent absent.
SYSTEM_BIN_DIRS: Final[list[str]] = ["/usr/sbin", "/sbin", "/usr/bin", "/bin"]


def resolve_grub_cfg_path(candidates: list[str] | None = None) -> str:
    """Retourne le premier grub.cfg existant parmi les candidats.

    Si aucun n'existe, renvoie le premier candidat: la lecture échouera
    ensuite avec un message explicite sur ce chemin.
    """
    ordered = list(candidates or GRUB_CFG_PATHS)
    for path in ordered:
        if os.path.isfile(path):
            return path
    return ordered[0]
