"""Commandes système lancées par le core (grub-reboot, systemctl)."""

from __future__ import annotations

import os
import shutil
import subprocess
from dataclasses import dataclass

from loguru import logger

from ..config.core_paths import SYSTEM_BIN_DIRS


@dataclass(frozen=True)
class CommandResult:
    """Résultat d'une commande système lancée par le core."""

    returncode: int
    stdout: str
    stderr: str


def _search_path() -> str:
    base_path = os.environ.get("PATH", "")
    return ":".join([base_path, *SYSTEM_BIN_DIRS])


def which_system(cmd: str) -> str | None:
    """Comme `shutil.which`, avec les répertoires sbin ajoutés au PATH."""
    return shutil.which(cmd, path=_search_path())


def resolve_grub_reboot() -> str:
    """Nom de l'outil de sélection du prochain boot.

    Fedora/RHEL l'installent sous le nom `grub2-reboot`.
    """
    for candidate in ("grub-reboot", "grub2-reboot"):
        if which_system(candidate):
            return candidate
    return "grub-reboot"


def run_command(args: list[str]) -> CommandResult:
    """Execute `args` and return stdout/stderr + return code.

    DEV: Under pkexec, environment is often cleared and PATH may not contain
    /usr/sbin. Absolute path is resolved with expanded PATH.
    """
    name = args[0]
    cmd = which_system(name) or name
    logger.debug(f"[run_command] Exécution: {cmd} {' '.join(args[1:])}")
    try:
        res = subprocess.run([cmd, *args[1:]], capture_output=True, text=True, check=False)
    except FileNotFoundError as e:
        logger.error(f"[run_command] ERREUR: Commande '{name}' introuvable - {e}")
        return CommandResult(127, "", f"Commande '{name}' introuvable.")

    logger.debug(
        f"[run_command] Résultat: returncode={res.returncode}, "
        f"stdout_len={len(res.stdout)}, stderr_len={len(res.stderr)}"
    )
    if res.returncode != 0 and res.stderr:
        logger.error(f"[run_command] Stderr: {res.stderr[:200]}")
    return CommandResult(res.returncode, res.stdout, res.stderr)


class SubprocessCommandRunner:
    """Runner réel: exécute les commandes via subprocess."""

    # pylint: disable=too-few-public-methods

    def invoke(self, args: list[str]) -> int:
        """Exécute la commande et renvoie son code de retour."""
        return run_command(args).returncode
