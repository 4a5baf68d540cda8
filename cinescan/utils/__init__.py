"""
Utilitaires et constantes pour CineScan.

Ce module contient les constantes et fonctions utilitaires partagees.
"""

from cinescan.utils.constants import (
    DEFAULT_IMAGE_WORKERS,
    DEFAULT_MOVIE_WORKERS,
    FEATURETTE_DIRECTORIES,
    SPECIAL_DIRECTORIES,
    VIDEO_EXTENSIONS,
)

__all__ = [
    "DEFAULT_IMAGE_WORKERS",
    "DEFAULT_MOVIE_WORKERS",
    "FEATURETTE_DIRECTORIES",
    "SPECIAL_DIRECTORIES",
    "VIDEO_EXTENSIONS",
]
