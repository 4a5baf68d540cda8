"""
Objet valeur pour les films candidats deduits d'un chemin de fichier.

Un candidat est construit une seule fois par le parser de noms de fichiers,
avant toute recherche externe. Son chemin est la seule identite durable
d'un film: il sert de cle de dedoublonnage en base.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class MovieCandidate:
    """
    Film deduit d'un chemin de fichier.

    Attributs:
        path: Chemin canonique en minuscules (cle unique)
        title: Titre extrait du nom de fichier
        year: Annee extraite des parentheses (chaine brute)
        extra_tag: Information optionnelle entre crochets (ex: edition)
    """

    path: str
    title: str
    year: Optional[str] = None
    extra_tag: Optional[str] = None

    @property
    def numeric_year(self) -> Optional[int]:
        """Retourne l'annee sous forme d'entier, ou None si non numerique."""
        if self.year and self.year.isdigit():
            return int(self.year)
        return None
