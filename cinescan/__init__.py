"""
CineScan - Ingestion d'une vidéothèque distante.

Ce package découvre les fichiers vidéo d'un partage réseau, les identifie
via TMDB, télécharge leurs visuels et persiste des enregistrements
normalisés et dédoublonnés dans SQLite.

Architecture : Hexagonale (Ports et Adaptateurs)
- core/ : Couche domaine (entités, ports, objets valeur, erreurs)
- services/ : Couche application (parcours, enrichissement, visuels, pipeline)
- adapters/ : Couche infrastructure (CLI, clients API, partages, parsing)
- infrastructure/ : Persistance SQLite (SQLModel)
"""

__version__ = "0.1.0"
