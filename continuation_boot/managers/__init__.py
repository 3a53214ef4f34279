"""Filtrage/sélection des entrées et orchestration d'une exécution."""
