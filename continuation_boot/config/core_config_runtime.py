"""Utilities for CLI entry points.

This module centralizes shared runtime helpers used by `main.py`
(logging, verbosity flags and the positional argument grammar).
"""

from __future__ import annotations

import shlex
import sys
from dataclasses import dataclass

from loguru import logger

from ..core_exceptions import UsageError

COMMAND_SEPARATOR = "--"

HELP_TEXT = """continuation-boot

NAME
\tcontinuation-boot - automatic kernel selection and evaluation continuation tool

SYNOPSIS
\tcontinuation-boot [--debug|--quiet] ENTRY_PATTERN [ENTRY_OFFSET] [-- COMMAND]

DESCRIPTION
\tSelect the next-boot kernel based on input, and execute a command on next startup.

\tENTRY_PATTERN is a regular expression. It is matched against the human-readable name
\tand the full qualified name of the boot entries. Matched boot entries will be
\tconsidered for next boot.

\tENTRY_OFFSET is an integer. If multiple boot entries are matched by ENTRY_PATTERN,
\tthe offset selects the desired one. Counts from zero. Optional.

\tCOMMAND is the command to be executed. You may provide arguments for the command
\tas well. It will run in $PWD as root user. Optional.
"""


@dataclass(frozen=True)
class JobOptions:
    """Travail demandé sur la ligne de commande.

    command: ligne de commande déjà échappée pour ExecStart (vide si aucune)
    """

    pattern: str
    offset: int = 0
    command: str = ""


def configure_logging(*, debug: bool = False, quiet: bool = False) -> None:
    """Configure Loguru for the whole process.

    Politique:
    - Sans flag: INFO, message seul (ce sont les lignes de progression de l'outil).
    - --quiet: WARNING.
    - --debug: DEBUG (+ horodatage, backtrace/diagnose).
    """
    logger.remove()

    if debug:
        logger.add(
            sys.stderr,
            level="DEBUG",
            backtrace=True,
            diagnose=True,
            format=(
                "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> " "<level>{level: <8}</level> " "<level>{message}</level>"
            ),
        )
        return

    logger.add(
        sys.stderr,
        level="WARNING" if quiet else "INFO",
        backtrace=False,
        diagnose=False,
        format="<level>{message}</level>",
    )


def parse_verbosity_flags(argv: list[str]) -> tuple[bool, bool, list[str]]:
    """Parse argv et extrait `--debug` et `--quiet`.

    Seuls les arguments situés avant le séparateur `--` sont examinés: ce qui
    suit appartient à la commande utilisateur.

    Returns:
        (debug_enabled, quiet_enabled, remaining_argv)
    """
    debug = False
    quiet = False
    remaining: list[str] = []
    for index, arg in enumerate(argv):
        if arg == COMMAND_SEPARATOR:
            remaining.extend(argv[index:])
            break
        if arg == "--debug":
            debug = True
        elif arg == "--quiet":
            quiet = True
        else:
            remaining.append(arg)
    return debug, quiet, remaining


def build_service_command(words: list[str]) -> str:
    """Construit la ligne ExecStart: la commande est exécutée via bash."""
    return shlex.join(["/usr/bin/env", "bash", "-c", *words])


def _parse_offset(raw: str) -> int:
    # Chiffres ASCII uniquement: ni signe, ni espaces, ni "_" (un index ne peut pas être négatif)
    if not (raw.isascii() and raw.isdigit()):
        raise UsageError(f"Invalid ENTRY_OFFSET: {raw}")
    return int(raw)


def parse_arguments(argv: list[str]) -> JobOptions:
    """Parse `ENTRY_PATTERN [ENTRY_OFFSET] [-- COMMAND...]`.

    Raises:
        UsageError: arguments manquants ou invalides (le message est affichable tel quel)
    """
    if not argv or argv[0] in ("-h", "--help"):
        raise UsageError(HELP_TEXT)

    pattern = argv[0]
    offset = 0
    cmd_part = 1

    if len(argv) > 1 and argv[1] != COMMAND_SEPARATOR:
        offset = _parse_offset(argv[1])
        cmd_part = 2

    if len(argv) <= cmd_part:
        return JobOptions(pattern=pattern, offset=offset)

    if argv[cmd_part] != COMMAND_SEPARATOR:
        raise UsageError(f"Unrecognized argument: {argv[cmd_part]}")

    words = argv[cmd_part + 1 :]
    if not words:
        raise UsageError("Missing command line")

    logger.debug(f"[parse_arguments] Commande: {words}")
    return JobOptions(pattern=pattern, offset=offset, command=build_service_command(words))
