"""Écriture et activation du service systemd exécuté une fois au prochain démarrage.

Le service se désactive lui-même après exécution (ExecStartPost). Un fichier
de service existant n'est réécrit que s'il a été produit par cet outil.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Final

from loguru import logger

from ..core_exceptions import ExternalCommandError, ServiceDeployError
from ..managers.core_managers_protocol import ICommandRunner

SERVICE_HEADER: Final[str] = "# continuation-boot version 1\n"

_SERVICE_TEMPLATE: Final[str] = """{header}
[Unit]
Description=Continuation boot invoker service
After=syslog.target network.target multi-user.target

[Service]
User=root
WorkingDirectory={working_dir}
ExecStartPre=/bin/sleep 30
ExecStart={command}
ExecStartPost=systemctl disable {unit}

[Install]
WantedBy=multi-user.target
"""


def render_service_descriptor(path: str, working_dir: str, command: str) -> str:
    """Retourne le contenu du fichier .service."""
    return _SERVICE_TEMPLATE.format(
        header=SERVICE_HEADER,
        working_dir=os.path.normpath(working_dir),
        command=command,
        unit=Path(path).name,
    )


def deploy_service_descriptor(path: str, working_dir: str, command: str) -> None:
    """Écrit le service one-shot.

    Raises:
        ServiceDeployError: service étranger déjà présent, ou écriture impossible
    """
    logger.info("Deploying invoker service descriptor")
    service_path = Path(path)

    if service_path.exists():
        logger.info("\tChecking invoker service descriptor")
        try:
            existing = service_path.read_text(encoding="utf-8", errors="replace")
        except OSError as e:
            raise ServiceDeployError(f"Impossible de lire {path}: {e}") from e
        if not existing.startswith(SERVICE_HEADER):
            logger.error(f"\tOverwriting existed service is prohibited: {path}")
            raise ServiceDeployError(f"Overwriting existed service is prohibited: {path}")

    logger.info("\tWriting invoker service descriptor")
    try:
        with open(service_path, "w", encoding="utf-8") as f:
            f.write(render_service_descriptor(path, working_dir, command))
    except OSError as e:
        logger.error(f"[deploy_service_descriptor] ERREUR: Écriture échouée - {e}")
        raise ServiceDeployError(f"Écriture échouée: {e}") from e
    logger.debug(f"[deploy_service_descriptor] Succès - {path}")


def enable_service(path: str, runner: ICommandRunner) -> None:
    """Active le service pour le prochain démarrage.

    Raises:
        ExternalCommandError: systemctl enable a échoué
    """
    args = ["systemctl", "enable", Path(path).name]
    status = runner.invoke(args)
    if status != 0:
        logger.error(f"Failed to enable service descriptor\n\tPath: {path}\n\tReturn code: {status}")
        raise ExternalCommandError("Failed to enable service descriptor", command=" ".join(args), returncode=status)
    logger.success(f"Enabled service descriptor\n\tPath: {path}")
