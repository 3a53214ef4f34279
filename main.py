"""Point d'entrée principal (production).

Usage: continuation-boot [--debug|--quiet] ENTRY_PATTERN [ENTRY_OFFSET] [-- COMMAND]

Configure le logging, parse les arguments puis sélectionne le prochain boot
GRUB et, si demandé, programme une commande pour le prochain démarrage.
"""

import sys

from loguru import logger

from continuation_boot.config.core_config_runtime import (
    configure_logging,
    parse_arguments,
    parse_verbosity_flags,
)
from continuation_boot.core_exceptions import ContinuationBootError, UsageError
from continuation_boot.managers.core_continuation_manager import ContinuationBootManager
from continuation_boot.system.core_system_commands import SubprocessCommandRunner


def _run_main(argv: list[str]) -> int:
    """Exécute l'outil et retourne un code de sortie."""
    debug, quiet, remaining_argv = parse_verbosity_flags(argv)
    configure_logging(debug=debug, quiet=quiet)
    logger.debug(f"[main] Debug mode: {debug}, quiet: {quiet}, remaining args: {remaining_argv}")

    try:
        options = parse_arguments(remaining_argv)
    except UsageError as exc:
        print(exc, file=sys.stderr)
        return exc.exit_code

    manager = ContinuationBootManager(SubprocessCommandRunner())
    try:
        manager.run(options)
    except ContinuationBootError as exc:
        logger.error(str(exc))
        return exc.exit_code

    logger.info("Done")
    return 0


def main() -> None:
    """Point d'entrée Python (console script)."""
    raise SystemExit(_run_main(sys.argv[1:]))


if __name__ == "__main__":
    main()
