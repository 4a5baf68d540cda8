"""
Objets valeur immutables representant des concepts du domaine sans identite.

Exports :
- MovieCandidate : Film deduit d'un chemin de fichier
"""

from cinescan.core.value_objects.candidate import MovieCandidate

__all__ = [
    "MovieCandidate",
]
