"""Configuration pytest: harnais de tests avec sécurité.

Active:
- Racine du projet dans sys.path
- Loguru sans enqueue
- Blocage subprocess (sécurité: jamais de vrai grub-reboot/systemctl)
- Faux runner de commandes enregistrant les appels
"""

import subprocess
import sys
from pathlib import Path

# Ajouter le dossier racine du projet au PYTHONPATH
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

import pytest
from loguru import logger


class FakeCommandRunner:
    """Runner de test: enregistre les commandes et renvoie des codes scriptés."""

    def __init__(self, statuses: dict[str, int] | None = None):
        self.statuses = statuses or {}
        self.calls: list[list[str]] = []

    def invoke(self, args: list[str]) -> int:
        self.calls.append(list(args))
        return self.statuses.get(args[0], 0)


def pytest_configure(config):
    """Configuration globale de pytest."""
    del config
    # Stabiliser Loguru pendant les tests: pas d'enqueue (thread/queue) pour éviter
    # des crashes lors du shutdown Python/GC.
    try:
        logger.remove()
        logger.add(sys.stderr, enqueue=False)
    except Exception:
        pass


@pytest.fixture
def fake_runner():
    """Runner de commandes factice, toutes les commandes réussissent."""
    return FakeCommandRunner()


@pytest.fixture
def runner_factory():
    """Construit un runner factice avec des codes de retour par commande."""
    return FakeCommandRunner


@pytest.fixture(autouse=True)
def secure_subprocess(monkeypatch):
    """Empêche les appels subprocess réels pendant les tests."""

    def mocked_run(*args, **kwargs):
        cmd = args[0] if args else kwargs.get("args")
        raise RuntimeError(f"SÉCURITÉ : Appel subprocess non autorisé dans les tests : {cmd}")

    monkeypatch.setattr(subprocess, "run", mocked_run)
    monkeypatch.setattr(subprocess, "Popen", mocked_run)
    monkeypatch.setattr(subprocess, "call", mocked_run)
    monkeypatch.setattr(subprocess, "check_call", mocked_run)
    monkeypatch.setattr(subprocess, "check_output", mocked_run)

    yield


def pytest_sessionfinish(session, exitstatus):
    """Arrête proprement les handlers Loguru en fin de session."""
    del session, exitstatus
    try:
        logger.complete()
    except Exception:
        pass
    try:
        logger.remove()
    except Exception:
        pass
