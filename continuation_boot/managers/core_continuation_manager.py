"""Orchestration d'une exécution complète.

grub.cfg -> entrées -> filtrage -> sélection -> grub-reboot, puis, si une
commande est fournie, déploiement et activation du service one-shot. Toute
erreur interrompt la chaîne: aucune étape dépendante n'est exécutée ensuite.
"""

from __future__ import annotations

import os

from loguru import logger

from ..config.core_config_runtime import JobOptions
from ..config.core_paths import SERVICE_PATH, resolve_grub_cfg_path
from ..io.core_grub_menu_parser import BootEntry, read_boot_entries
from ..io.core_service_io import deploy_service_descriptor, enable_service
from .core_entry_selector import filter_entries, select_entry, set_next_boot
from .core_managers_protocol import ICommandRunner


class ContinuationBootManager:
    """Exécute un travail `JobOptions` de bout en bout."""

    # pylint: disable=too-few-public-methods

    def __init__(
        self,
        runner: ICommandRunner,
        grub_cfg_path: str | None = None,
        service_path: str = SERVICE_PATH,
        working_dir: str | None = None,
    ):
        """Initialise le gestionnaire.

        Args:
            runner: exécuteur des commandes externes
            grub_cfg_path: grub.cfg à lire (défaut: premier chemin standard existant)
            service_path: emplacement du service systemd
            working_dir: répertoire de travail de la commande (défaut: cwd)
        """
        self.runner = runner
        self.grub_cfg_path = grub_cfg_path or resolve_grub_cfg_path()
        self.service_path = service_path
        self.working_dir = working_dir or os.getcwd()

    def run(self, options: JobOptions) -> BootEntry:
        """Applique le travail et renvoie l'entrée sélectionnée.

        Raises:
            ContinuationBootError: à la première étape en échec
        """
        logger.info(
            "Job received:"
            f"\n\tPattern: /{options.pattern}/m"
            f"\n\tOffset: {options.offset}"
            f"\n\tCommand: {options.command}"
            f"\n\tWorking directory: {self.working_dir}"
        )

        entries = read_boot_entries(self.grub_cfg_path)
        matches = filter_entries(entries, options.pattern)
        entry = select_entry(matches, options.offset)
        set_next_boot(entry, self.runner)

        if not options.command:
            logger.debug("[run] Aucune commande, pas de service à déployer")
            return entry

        deploy_service_descriptor(self.service_path, self.working_dir, options.command)
        enable_service(self.service_path, self.runner)
        return entry
