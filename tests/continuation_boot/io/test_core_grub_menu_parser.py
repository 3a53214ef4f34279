"""Tests pour io/core_grub_menu_parser.py - Extraction des entrées GRUB."""

from __future__ import annotations

from pathlib import Path

import pytest

from continuation_boot.core_exceptions import GrubConfigReadError, GrubParsingError
from continuation_boot.io.core_grub_menu_parser import (
    NO_SUBMENU,
    BootEntry,
    flatten_menu,
    parse_grub_menu,
    read_boot_entries,
)
from continuation_boot.io.grub_parsing_utils import iter_menu_matches

SCENARIO_CFG = """menuentry 'Linux 6.1' x 'gnulinux-1'
submenu 'Advanced' x 'gnulinux-advanced'
{
menuentry 'Linux 6.1 recovery' x 'gnulinux-1-recovery'
}
"""

# Extrait réaliste d'un grub.cfg Debian/Ubuntu
REAL_CFG = """### BEGIN /etc/grub.d/00_header ###
function load_video {
  if [ x$feature_all_video_module = xy ]; then
    insmod all_video
  fi
}
if [ "${next_entry}" ] ; then
   set default="${next_entry}"
fi
### END /etc/grub.d/00_header ###

### BEGIN /etc/grub.d/10_linux ###
menuentry 'Debian GNU/Linux' --class debian --class gnu-linux $menuentry_id_option 'gnulinux-simple-1234' {
\tload_video
\tlinux\t/boot/vmlinuz-6.1.0-13-amd64 root=UUID=1234 ro quiet
}
submenu 'Advanced options for Debian GNU/Linux' $menuentry_id_option 'gnulinux-advanced-1234' {
\tmenuentry 'Debian GNU/Linux, with Linux 6.1.0-13-amd64' --class debian $menuentry_id_option 'gnulinux-6.1.0-13-amd64-advanced-1234' {
\t\tlinux\t/boot/vmlinuz-6.1.0-13-amd64 root=UUID=1234 ro quiet
\t}
\tmenuentry 'Debian GNU/Linux, with Linux 6.1.0-13-amd64 (recovery mode)' --class debian $menuentry_id_option 'gnulinux-6.1.0-13-amd64-recovery-1234' {
\t\tlinux\t/boot/vmlinuz-6.1.0-13-amd64 root=UUID=1234 ro single
\t}
}
### END /etc/grub.d/10_linux ###

### BEGIN /etc/grub.d/30_uefi-firmware ###
menuentry 'UEFI Firmware Settings' $menuentry_id_option 'uefi-firmware' {
\tfwsetup
}
### END /etc/grub.d/30_uefi-firmware ###
"""


class TestBootEntry:
    """Tests pour BootEntry."""

    def test_qualified_id_joins_path(self):
        """Vérifie la jointure du chemin avec '>'."""
        entry = BootEntry(name="Test", path=("a", "b", "c"))
        assert entry.qualified_id == "a>b>c"

    def test_qualified_id_single_token(self):
        """Pas de séparateur pour une entrée de premier niveau."""
        assert BootEntry(name="Test", path=("a",)).qualified_id == "a"

    def test_frozen_dataclass(self):
        """Vérifie que BootEntry est immuable."""
        entry = BootEntry(name="Test", path=("a",))
        with pytest.raises(AttributeError):
            entry.name = "Other"


class TestParseGrubMenu:
    """Tests pour parse_grub_menu / flatten_menu."""

    def test_scenario(self):
        """Une entrée de premier niveau et une entrée dans un sous-menu."""
        entries = parse_grub_menu(SCENARIO_CFG)
        assert entries == [
            BootEntry(name="Linux 6.1", path=("gnulinux-1",)),
            BootEntry(name="Linux 6.1 recovery", path=("gnulinux-advanced", "gnulinux-1-recovery")),
        ]

    def test_nested_submenus(self):
        """Sous-menu A > sous-menu B > entrée E donne exactement [A, B, E]."""
        text = (
            "submenu 'A' x 'A' {\n"
            "  submenu 'B' x 'B' {\n"
            "    menuentry 'E' x 'E' {\n"
            "    }\n"
            "  }\n"
            "}\n"
        )
        entries = parse_grub_menu(text)
        assert len(entries) == 1
        assert entries[0].path == ("A", "B", "E")

    def test_siblings_share_prefix(self):
        """Deux entrées sœurs partagent le préfixe du sous-menu."""
        text = (
            "submenu 'Sub' x 'sub' {\n"
            "  menuentry 'One' x 'one' {\n"
            "  }\n"
            "  menuentry 'Two' x 'two' {\n"
            "  }\n"
            "}\n"
        )
        first, second = parse_grub_menu(text)
        assert first.path[:-1] == second.path[:-1] == ("sub",)
        assert first.path[-1] == "one"
        assert second.path[-1] == "two"

    def test_order_preserved(self):
        """Les entrées sont émises dans l'ordre de déclaration."""
        entries = parse_grub_menu(REAL_CFG)
        assert [e.name for e in entries] == [
            "Debian GNU/Linux",
            "Debian GNU/Linux, with Linux 6.1.0-13-amd64",
            "Debian GNU/Linux, with Linux 6.1.0-13-amd64 (recovery mode)",
            "UEFI Firmware Settings",
        ]

    def test_real_config_paths(self):
        """Les blocs function/${var} n'altèrent pas les chemins."""
        entries = parse_grub_menu(REAL_CFG)
        assert [e.qualified_id for e in entries] == [
            "gnulinux-simple-1234",
            "gnulinux-advanced-1234>gnulinux-6.1.0-13-amd64-advanced-1234",
            "gnulinux-advanced-1234>gnulinux-6.1.0-13-amd64-recovery-1234",
            "uefi-firmware",
        ]

    def test_indentation_is_irrelevant(self):
        """Seules les accolades comptent, pas l'indentation."""
        text = (
            "submenu 'Sub' x 'sub'\n"
            "{\n"
            "menuentry 'In' x 'in' {\n"
            "}\n"
            "}\n"
            "        menuentry 'Out' x 'out' {\n"
            "        }\n"
        )
        entries = parse_grub_menu(text)
        assert entries[0].path == ("sub", "in")
        assert entries[1].path == ("out",)

    def test_submenu_without_entries(self):
        """Un sous-menu vide ne produit aucune entrée."""
        assert parse_grub_menu("submenu 'Empty' x 'empty' {\n}\n") == []

    def test_lines_without_id_are_ignored(self):
        """Une entrée sans id entre quotes n'est pas reconnue."""
        assert parse_grub_menu("menuentry 'No id' {\n}\n") == []

    def test_entry_without_id_does_not_swallow_next_entry(self):
        """Une entrée sans id (40_custom) ne prend pas le titre de l'entrée suivante comme id."""
        text = (
            "menuentry 'Custom' {\n"
            "\tchainloader +1\n"
            "}\n"
            "menuentry 'Next' --class debian $menuentry_id_option 'next-id' {\n"
            "}\n"
        )
        assert parse_grub_menu(text) == [BootEntry(name="Next", path=("next-id",))]

    def test_submenu_without_id_does_not_span_lines(self):
        """Un sous-menu sans id n'absorbe pas l'entrée qu'il contient."""
        text = (
            "submenu 'Old' {\n"
            "  menuentry 'Inner' x 'inner' {\n"
            "  }\n"
            "}\n"
        )
        assert parse_grub_menu(text) == [BootEntry(name="Inner", path=(NO_SUBMENU, "inner"))]

    def test_empty_text(self):
        """Texte vide: aucune entrée."""
        assert parse_grub_menu("") == []

    def test_entry_inside_anonymous_block(self):
        """Une entrée dans un bloc sans sous-menu hérite de la sentinelle."""
        entries = parse_grub_menu("if_block {\nmenuentry 'X' x 'x'\n}\n")
        assert entries[0].path == (NO_SUBMENU, "x")

    def test_unclosed_block_is_not_fatal(self):
        """Des blocs non fermés en fin de fichier ne sont qu'un avertissement."""
        entries = parse_grub_menu("submenu 'S' x 's' {\nmenuentry 'E' x 'e' {\n")
        assert entries == [BootEntry(name="E", path=("s", "e"))]


class TestBraceUnderflow:
    """Une accolade fermante orpheline est fatale."""

    def test_trailing_unmatched_brace(self):
        """Entrée immédiatement suivie d'une accolade fermante orpheline."""
        with pytest.raises(GrubParsingError):
            parse_grub_menu("menuentry 'Linux' x 'linux'\n}\n")

    def test_unmatched_brace_between_entries(self):
        """Accolade orpheline entre deux entrées."""
        text = "menuentry 'A' x 'a'\n}\nmenuentry 'B' x 'b'\n"
        with pytest.raises(GrubParsingError):
            parse_grub_menu(text)

    def test_flatten_with_explicit_matches(self):
        """flatten_menu accepte la séquence de matches fournie."""
        text = "menuentry 'A' x 'a' {\n}\n}\n"
        with pytest.raises(GrubParsingError, match="offset"):
            flatten_menu(text, iter_menu_matches(text))


class TestReadBootEntries:
    """Tests pour read_boot_entries."""

    def test_read_from_file(self, tmp_path: Path):
        """Lecture depuis un fichier."""
        cfg = tmp_path / "grub.cfg"
        cfg.write_text(REAL_CFG, encoding="utf-8")

        entries = read_boot_entries(str(cfg))
        assert len(entries) == 4

    def test_missing_file(self, tmp_path: Path):
        """Fichier absent: GrubConfigReadError."""
        with pytest.raises(GrubConfigReadError):
            read_boot_entries(str(tmp_path / "missing.cfg"))

    def test_directory_is_unreadable(self, tmp_path: Path):
        """Un répertoire n'est pas un grub.cfg lisible."""
        with pytest.raises(GrubConfigReadError):
            read_boot_entries(str(tmp_path))
