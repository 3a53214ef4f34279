"""Exécution des commandes système externes."""
