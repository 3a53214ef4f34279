"""Extraction des entrées GRUB depuis grub.cfg (lecture seule).

Les matches de regex seuls ne donnent pas la profondeur d'imbrication: un
sous-menu et une entrée ont la même forme à tous les niveaux. On parcourt donc
le texte caractère par caractère entre deux matches et on compte les
accolades pour savoir quel sous-menu est ouvert.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from loguru import logger

from ..core_exceptions import GrubParsingError
from .grub_parsing_utils import MENUENTRY, SUBMENU, MenuMatch, iter_menu_matches, read_grub_cfg_text

PATH_SEPARATOR = ">"

# Bloc ouvert sans sous-menu (menuentry, function, ${var}...)
NO_SUBMENU = "ERR_SUBMENU_NULL"


@dataclass(frozen=True)
class BootEntry:
    """Entrée de menu GRUB sélectionnable.

    name: libellé affichable (non unique)
    path: ids des sous-menus englobants, du plus externe au plus interne,
          puis l'id de l'entrée elle-même
    """

    name: str
    path: tuple[str, ...]

    @property
    def qualified_id(self) -> str:
        """Nom complet attendu par grub-reboot (ex: "gnulinux-advanced>gnulinux-1")."""
        return PATH_SEPARATOR.join(self.path)


def _scan_braces(text: str, start: int, stop: int, stack: list[str], current: str) -> str:
    """Applique les accolades de text[start:stop] à la pile et renvoie le scope courant."""
    for pos in range(start, stop):
        ch = text[pos]
        if ch == "{":
            stack.append(current)
            current = NO_SUBMENU
        elif ch == "}":
            if not stack:
                raise GrubParsingError(f"Accolade fermante sans ouvrante à l'offset {pos}")
            current = stack.pop()
    return current


def flatten_menu(text: str, matches: Iterable[MenuMatch]) -> list[BootEntry]:
    """Construit la liste plate des entrées avec leur chemin qualifié.

    Le parcours est séquentiel: chaque portion de texte entre deux matches est
    scannée avant de traiter le match suivant.

    Raises:
        GrubParsingError: accolade fermante orpheline
    """
    stack: list[str] = []
    current = NO_SUBMENU
    cursor = 0
    entries: list[BootEntry] = []

    for match in matches:
        current = _scan_braces(text, cursor, match.start, stack, current)
        cursor = match.start

        if match.kind == SUBMENU:
            # L'accolade de ce sous-menu sera empilée au prochain scan
            current = match.menu_id
        elif match.kind == MENUENTRY:
            entries.append(BootEntry(name=match.name, path=(*stack, match.menu_id)))

    _scan_braces(text, cursor, len(text), stack, current)
    if stack:
        logger.warning(f"[flatten_menu] {len(stack)} bloc(s) non fermé(s) en fin de fichier")

    return entries


def parse_grub_menu(text: str) -> list[BootEntry]:
    """Parse le texte de grub.cfg en entrées de boot."""
    return flatten_menu(text, iter_menu_matches(text))


def read_boot_entries(path: str) -> list[BootEntry]:
    """Lit grub.cfg et renvoie les entrées de boot dans l'ordre de déclaration.

    Raises:
        GrubConfigReadError: fichier absent ou illisible
        GrubParsingError: imbrication des accolades incohérente
    """
    logger.info(f"Parsing GRUB config file: {path}")
    entries = parse_grub_menu(read_grub_cfg_text(path))
    logger.info(f"\tLoaded {len(entries)} bootable entries")
    return entries
