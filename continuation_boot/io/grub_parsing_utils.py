"""Utilitaires de parsing pour GRUB.

Ce module centralise l'expression régulière qui reconnaît l'ouverture d'un
`submenu` ou d'un `menuentry` dans grub.cfg, ainsi que la lecture du fichier.
"""

from __future__ import annotations

import re
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Final

from loguru import logger

from ..core_exceptions import GrubConfigReadError

SUBMENU: Final[str] = "submenu"
MENUENTRY: Final[str] = "menuentry"

# menuentry 'Titre' <options ignorées> 'id' ...
# Le titre et l'id sont entre quotes simples, sans échappement.
# Le match ne déborde jamais sur la ligne suivante: une entrée sans id est ignorée.
_MENU_ITEM_RE: Final = re.compile(
    r"^[ \t]*(?P<kind>menuentry|submenu)[ \t]+'(?P<name>[^'\n]+)'[ \t]+[^'\n]+[ \t]+'(?P<id>[^'\n]+)'\s",
    re.MULTILINE,
)


@dataclass(frozen=True)
class MenuMatch:
    """Ouverture d'un bloc `submenu` ou `menuentry` trouvée dans le texte.

    start/end: offsets (caractères) du match dans le texte source
    """

    kind: str
    name: str
    menu_id: str
    start: int
    end: int


def iter_menu_matches(text: str) -> Iterator[MenuMatch]:
    """Produit les ouvertures de blocs dans l'ordre du document."""
    for m in _MENU_ITEM_RE.finditer(text):
        yield MenuMatch(
            kind=m.group("kind"),
            name=m.group("name"),
            menu_id=m.group("id"),
            start=m.start(),
            end=m.end(),
        )


def read_grub_cfg_text(path: str) -> str:
    """Lit grub.cfg en entier.

    Raises:
        GrubConfigReadError: fichier absent ou illisible
    """
    logger.debug(f"[read_grub_cfg_text] Lecture {path}")
    try:
        with open(path, encoding="utf-8", errors="replace") as f:
            return f.read()
    except OSError as e:
        logger.error(f"[read_grub_cfg_text] ERREUR: Impossible de lire {path}: {e}")
        raise GrubConfigReadError(f"Impossible de lire {path}: {e}") from e
