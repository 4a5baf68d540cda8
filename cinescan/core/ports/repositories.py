"""
Interfaces ports pour les repositories.

Interface abstraite (port) définissant le contrat de persistance des films
enrichis. L'implémentation concrète (SQLite via SQLModel) se trouve dans
infrastructure/persistence.
"""

from abc import ABC, abstractmethod
from typing import Optional, Sequence

from cinescan.core.entities import CreditedPerson, EnrichedMovie, Genre


class IMovieStore(ABC):
    """
    Interface de stockage des films, genres et personnes.

    Les écritures sont idempotentes : réingérer un même chemin ne crée
    aucune ligne supplémentaire.
    """

    @abstractmethod
    async def persist(
        self,
        movie: EnrichedMovie,
        genres: Sequence[Genre],
        people: Sequence[CreditedPerson],
    ) -> int:
        """
        Persiste un film et ses enfants dans une transaction unique.

        Retourne :
            ID interne de la ligne Movie (existante ou créée)

        Raises :
            PersistError : Toute erreur survenue pendant la transaction
        """
        ...

    @abstractmethod
    def get_movie_id(self, path: str) -> Optional[int]:
        """Récupère l'ID interne d'un film par son chemin."""
        ...
