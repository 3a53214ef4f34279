"""Filtrage et sélection de l'entrée GRUB pour le prochain démarrage."""

from __future__ import annotations

import re
from collections.abc import Sequence

from loguru import logger

from ..core_exceptions import EntryNotFoundError, EntryPatternError, ExternalCommandError
from ..io.core_grub_menu_parser import BootEntry
from ..system.core_system_commands import resolve_grub_reboot
from .core_managers_protocol import ICommandRunner


def filter_entries(entries: Sequence[BootEntry], pattern: str) -> list[BootEntry]:
    """Garde les entrées dont le nom OU le nom qualifié contient le motif.

    Recherche non ancrée (`re.search`), sensible à la casse, mode multiligne.
    L'ordre d'origine est conservé.

    Raises:
        EntryPatternError: motif invalide
    """
    logger.info(f"Filtering entries with pattern: /{pattern}/m")
    try:
        matcher = re.compile(pattern, re.MULTILINE)
    # Répétition trop grande ou imbrication trop profonde: OverflowError/RecursionError
    except (re.error, OverflowError, RecursionError) as e:
        logger.error(f"[filter_entries] ERREUR: motif invalide - {e}")
        raise EntryPatternError(f"Invalid ENTRY_PATTERN /{pattern}/: {e}") from e

    matched = [
        entry for entry in entries if matcher.search(entry.name) or matcher.search(entry.qualified_id)
    ]

    logger.info(f"\tGathered {len(matched)} bootable entries:")
    for index, entry in enumerate(matched):
        logger.info(f"\t\t[{index}] {entry.name}")
    return matched


def select_entry(matches: Sequence[BootEntry], offset: int) -> BootEntry:
    """Retourne l'entrée filtrée à l'offset donné (compté à partir de zéro).

    Raises:
        EntryNotFoundError: offset hors de la liste filtrée
    """
    if offset >= len(matches):
        logger.error(f"[select_entry] {len(matches)} entrée(s) filtrée(s), offset {offset} demandé")
        raise EntryNotFoundError(f"Boot entry not found at offset {offset}")
    return matches[offset]


def set_next_boot(entry: BootEntry, runner: ICommandRunner) -> None:
    """Demande à GRUB de démarrer sur `entry` au prochain boot uniquement.

    Raises:
        ExternalCommandError: grub-reboot a échoué
    """
    qualified_id = entry.qualified_id
    args = [resolve_grub_reboot(), qualified_id]
    status = runner.invoke(args)

    if status != 0:
        logger.error(
            "Failed to set boot entry to:"
            f"\n\tHuman name: {entry.name}"
            f"\n\tGRUB name: {qualified_id}"
            f"\n\tReturn code: {status}"
        )
        raise ExternalCommandError(
            f"Failed to set boot entry to {qualified_id}",
            command=" ".join(args),
            returncode=status,
        )

    logger.success(f"Set boot entry to:\n\tHuman name: {entry.name}\n\tGRUB name: {qualified_id}")
