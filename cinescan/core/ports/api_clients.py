"""
Interfaces ports pour le fournisseur de métadonnées.

Interface abstraite (port) définissant le contrat du fournisseur externe
(TMDB) : recherche par titre, genres et crédits par identifiant, et
téléchargement des images. Toute erreur de transport ou de désérialisation
est signalée par ProviderError.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Optional

from cinescan.core.entities import CreditedPerson, Genre


@dataclass(frozen=True)
class SearchMatch:
    """
    Résultat de recherche depuis le fournisseur.

    Attributs :
        id : ID TMDB du film
        title : Titre localisé
        original_title : Titre original
        popularity : Score de popularité TMDB (critère de sélection)
        vote_average : Note moyenne (0-10)
        release_date : Date de sortie ISO, vide si inconnue
        overview : Synopsis
        poster_ref : Référence distante de l'affiche (poster_path)
        backdrop_ref : Référence distante du fond d'écran (backdrop_path)
    """

    id: int
    title: str
    original_title: str = ""
    popularity: float = 0.0
    vote_average: float = 0.0
    release_date: str = ""
    overview: str = ""
    poster_ref: Optional[str] = None
    backdrop_ref: Optional[str] = None


@dataclass(frozen=True)
class MovieCredits:
    """Crédits bruts d'un film, avant filtrage."""

    cast: list[CreditedPerson] = field(default_factory=list)
    crew: list[CreditedPerson] = field(default_factory=list)


class IMetadataProvider(ABC):
    """
    Interface du fournisseur de métadonnées de films.

    Chaque méthode lève ProviderError en cas d'échec réseau, de statut HTTP
    en erreur ou de réponse invalide.
    """

    @abstractmethod
    async def search_by_title(
        self, title: str, year: Optional[int] = None
    ) -> list[SearchMatch]:
        """
        Recherche des films par titre.

        Args :
            title : Titre à rechercher
            year : Année de sortie optionnelle pour filtrer

        Retourne :
            Correspondances dans l'ordre de la réponse du fournisseur
        """
        ...

    @abstractmethod
    async def fetch_genres(self, provider_id: int) -> list[Genre]:
        """Récupère les genres d'un film par son ID."""
        ...

    @abstractmethod
    async def fetch_credits(self, provider_id: int) -> MovieCredits:
        """Récupère l'ensemble des acteurs et de l'équipe d'un film."""
        ...

    @abstractmethod
    async def fetch_image_bytes(self, ref: str, size: str) -> bytes:
        """
        Télécharge une image.

        Args :
            ref : Référence distante de l'image (ex: "/abc.jpg")
            size : Résolution demandée (ex: "w185", "w780")

        Retourne :
            Contenu brut de l'image
        """
        ...
