"""Protocols (interfaces) des managers core.

Objectif: découpler la logique de sélection/déploiement de l'exécution réelle
des commandes système (tests avec un faux runner).
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class ICommandRunner(Protocol):
    """Interface d'exécution d'une commande externe."""

    # pylint: disable=too-few-public-methods

    def invoke(self, args: list[str]) -> int:
        """Exécute `args` et renvoie le code de retour du processus."""
        raise NotImplementedError
