"""Configuration: chemins système et options d'exécution."""
