"""
Service d'enrichissement des films via le fournisseur de metadonnees.

Pour chaque candidat:
1. Identification: recherche par titre (+ annee si numerique), choix de la
   correspondance la plus populaire
2. Genres du film identifie
3. Credits, filtres par importance (acteurs credites, equipe principale)

Aucun retry a ce niveau: chaque echec est journalise avec le chemin du
candidat puis absorbe, les champs concernes restant vides. Le film reste
persistable dans tous les cas.
"""

from dataclasses import dataclass, field
from typing import Optional, Sequence

from loguru import logger

from cinescan.core.entities import CreditedPerson, EnrichedMovie
from cinescan.core.errors import NotFoundError, ProviderError
from cinescan.core.ports.api_clients import IMetadataProvider, SearchMatch
from cinescan.core.value_objects import MovieCandidate
from cinescan.services.credit_filter import filter_cast, filter_crew


@dataclass
class EnrichmentResult:
    """
    Resultat de l'enrichissement d'un candidat.

    Attributes:
        movie: Film enrichi (eventuellement partiellement)
        people: Acteurs et equipe retenus apres filtrage
        identity_error: Echec de l'identification (NotFoundError inclus)
        genres_error: Echec de la recuperation des genres
        credits_error: Echec de la recuperation des credits
    """

    movie: EnrichedMovie
    people: list[CreditedPerson] = field(default_factory=list)
    identity_error: Optional[ProviderError] = None
    genres_error: Optional[ProviderError] = None
    credits_error: Optional[ProviderError] = None

    @property
    def errors(self) -> list[ProviderError]:
        """Erreurs rencontrees, dans l'ordre des etapes."""
        return [
            error
            for error in (self.identity_error, self.genres_error, self.credits_error)
            if error is not None
        ]

    @property
    def not_found(self) -> bool:
        return isinstance(self.identity_error, NotFoundError)


def select_most_popular(matches: Sequence[SearchMatch]) -> SearchMatch:
    """
    Retourne la correspondance la plus populaire.

    En cas d'egalite, la premiere rencontree l'emporte (max() conserve le
    premier element maximal).

    Raises:
        ValueError: Si matches est vide
    """
    return max(matches, key=lambda match: match.popularity)


class MetadataEnricher:
    """
    Enrichit un EnrichedMovie a partir du fournisseur de metadonnees.

    Le film est mute uniquement via EnrichedMovie.apply().
    """

    def __init__(self, provider: IMetadataProvider) -> None:
        self._provider = provider

    async def resolve_identity(self, movie: EnrichedMovie) -> SearchMatch:
        """
        Identifie le film et copie ses metadonnees principales.

        Args:
            movie: Film a identifier (titre et annee issus du nom de fichier)

        Returns:
            Correspondance retenue

        Raises:
            NotFoundError: Aucune correspondance
            ProviderError: Erreur de transport ou donnees invalides
        """
        candidate = movie.candidate
        matches = await self._provider.search_by_title(
            candidate.title, candidate.numeric_year
        )
        if not matches:
            raise NotFoundError(candidate.title, candidate.numeric_year)

        best = select_most_popular(matches)
        try:
            movie.apply(
                provider_id=best.id,
                original_title=best.original_title,
                title=best.title,
                summary=best.overview,
                poster_large=best.poster_ref,
                poster_snapshot=best.poster_ref,
                backdrop=best.backdrop_ref,
            )
        except ValueError as e:
            raise ProviderError(f"Donnees invalides pour le film {best.id}: {e}") from e

        # Une note ou une date invalide ne vide que son propre champ
        for name, value in (
            ("vote_average", best.vote_average),
            ("release_date", best.release_date),
        ):
            try:
                movie.apply(**{name: value})
            except ValueError as e:
                logger.warning(
                    "Champ fournisseur ignore",
                    path=movie.path,
                    provider_id=best.id,
                    field=name,
                    error=str(e),
                )

        logger.debug(
            "Film identifie",
            path=movie.path,
            provider_id=best.id,
            candidates=len(matches),
        )
        return best

    async def resolve_genres(self, movie: EnrichedMovie) -> Optional[ProviderError]:
        """
        Recupere les genres du film identifie.

        Returns:
            None en cas de succes, l'erreur sinon (genres laisses vides)
        """
        try:
            genres = await self._provider.fetch_genres(movie.provider_id)
        except ProviderError as e:
            logger.warning(
                "Genres indisponibles",
                path=movie.path,
                provider_id=movie.provider_id,
                error=str(e),
            )
            return e

        movie.apply(genres=genres)
        return None

    async def resolve_credits(
        self, movie: EnrichedMovie
    ) -> tuple[list[CreditedPerson], Optional[ProviderError]]:
        """
        Recupere et filtre les credits du film identifie.

        Returns:
            (personnes retenues, None) en cas de succes,
            ([], erreur) en cas d'echec
        """
        try:
            credits = await self._provider.fetch_credits(movie.provider_id)
        except ProviderError as e:
            logger.warning(
                "Credits indisponibles",
                path=movie.path,
                provider_id=movie.provider_id,
                error=str(e),
            )
            return [], e

        people = filter_cast(credits.cast) + filter_crew(credits.crew)
        logger.debug(
            "Credits filtres",
            path=movie.path,
            kept=len(people),
            total=len(credits.cast) + len(credits.crew),
        )
        return people, None

    async def enrich(self, candidate: MovieCandidate) -> EnrichmentResult:
        """
        Enrichit un candidat de bout en bout.

        Ne leve jamais d'erreur fournisseur: un film non identifie garde
        uniquement les donnees du nom de fichier, les genres et credits
        n'etant alors pas demandes.

        Args:
            candidate: Candidat issu du parcours

        Returns:
            EnrichmentResult avec le film et les personnes retenues
        """
        result = EnrichmentResult(movie=EnrichedMovie.from_candidate(candidate))

        try:
            await self.resolve_identity(result.movie)
        except NotFoundError as e:
            logger.info("Aucune correspondance TMDB", path=candidate.path, title=candidate.title)
            result.identity_error = e
            return result
        except ProviderError as e:
            logger.warning("Identification en echec", path=candidate.path, error=str(e))
            result.identity_error = e
            return result

        result.genres_error = await self.resolve_genres(result.movie)
        result.people, result.credits_error = await self.resolve_credits(result.movie)
        return result
