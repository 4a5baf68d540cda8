"""
Adaptateurs de parsing pour CineScan.

Ce package contient le parser de chemins de films:
- MovieFilenameParser: Extrait titre, annee et tag d'un nom "Titre (Annee) [Tag].ext"
"""

from cinescan.adapters.parsing.filename_parser import MovieFilenameParser, parse_movie_path

__all__ = [
    "MovieFilenameParser",
    "parse_movie_path",
]
