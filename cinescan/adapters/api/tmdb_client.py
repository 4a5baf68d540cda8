"""
Client TMDB pour la recherche, les genres, les credits et les images de films.

Implemente l'interface IMetadataProvider pour TMDB (The Movie Database).
Utilise le cache disque et le mecanisme de retry pour gerer le rate
limiting. Toute autre erreur (reseau, timeout, statut HTTP, JSON invalide)
est traduite en ProviderError.

Usage:
    cache = TMDBCache()
    client = TMDBClient(api_key="your_key", cache=cache)
    matches = await client.search_by_title("alien", year=1979)
    credits = await client.fetch_credits(matches[0].id)
    await client.close()
"""

from typing import Any, Optional

import httpx
from loguru import logger

from cinescan.adapters.api.cache import TMDBCache
from cinescan.adapters.api.retry import request_with_retry
from cinescan.core.entities import CreditedPerson, Genre, RoleKind
from cinescan.core.errors import ProviderError
from cinescan.core.ports.api_clients import IMetadataProvider, MovieCredits, SearchMatch
from cinescan.utils.helpers import strip_invisible_chars


class TMDBClient(IMetadataProvider):
    """
    Client API TMDB.

    Implemente IMetadataProvider avec:
    - Recherche de films par titre (filtre primary_release_year optionnel)
    - Genres via le detail du film, credits via /movie/{id}/credits
    - Telechargement d'images sur le CDN TMDB
    - Cache disque (24h recherches, 7j details et credits)
    - Retry automatique sur rate limiting (429)

    Attributes:
        TMDB_BASE_URL: URL de base de l'API TMDB v3
        TMDB_IMAGE_BASE_URL: URL de base du CDN d'images (suivie de /<taille>/<ref>)
    """

    TMDB_BASE_URL = "https://api.themoviedb.org/3"
    TMDB_IMAGE_BASE_URL = "https://image.tmdb.org/t/p"

    def __init__(
        self,
        api_key: str,
        cache: TMDBCache,
        language: str = "en-US",
        timeout: float = 30.0,
    ) -> None:
        """
        Args:
            api_key: Cle API v3 ou Read Access Token v4
            cache: Instance TMDBCache partagee
            language: Langue des reponses TMDB
            timeout: Timeout des requetes en secondes
        """
        self._api_key = api_key or ""
        self._cache = cache
        self._language = language
        self._timeout = timeout
        self._client: Optional[httpx.AsyncClient] = None
        self._image_client: Optional[httpx.AsyncClient] = None

    def _get_client(self) -> httpx.AsyncClient:
        """
        Retourne le client HTTP de l'API, le cree si necessaire (lazy init).

        Supporte les deux modes d'authentification TMDB:
        - API Key v3 (32 caracteres hex) : passee en parametre api_key
        - Read Access Token v4 (long JWT) : passe en header Bearer
        """
        if self._client is None or self._client.is_closed:
            is_v4_token = len(self._api_key) > 40

            headers = {"Accept": "application/json"}
            params = {}
            if is_v4_token:
                headers["Authorization"] = f"Bearer {self._api_key}"
            else:
                params["api_key"] = self._api_key

            self._client = httpx.AsyncClient(
                base_url=self.TMDB_BASE_URL,
                headers=headers,
                params=params,
                timeout=self._timeout,
            )
        return self._client

    def _get_image_client(self) -> httpx.AsyncClient:
        """Client du CDN d'images, sans authentification."""
        if self._image_client is None or self._image_client.is_closed:
            self._image_client = httpx.AsyncClient(
                base_url=self.TMDB_IMAGE_BASE_URL,
                timeout=self._timeout,
                follow_redirects=True,
            )
        return self._image_client

    async def _get_json(self, path: str, params: Optional[dict] = None) -> dict[str, Any]:
        """
        GET sur l'API avec retry 429 et traduction des erreurs.

        Raises:
            ProviderError: Reseau, timeout, statut d'erreur ou JSON invalide
        """
        try:
            response = await request_with_retry(
                self._get_client(), "GET", path, params=params or {}
            )
            data = response.json()
        except httpx.HTTPStatusError as e:
            raise ProviderError(
                f"TMDB {path}: HTTP {e.response.status_code}"
            ) from e
        except httpx.HTTPError as e:
            raise ProviderError(f"TMDB {path}: {e.__class__.__name__} {e}") from e
        except ValueError as e:
            raise ProviderError(f"TMDB {path}: reponse JSON invalide") from e

        if not isinstance(data, dict):
            raise ProviderError(f"TMDB {path}: reponse inattendue")
        return data

    async def search_by_title(
        self, title: str, year: Optional[int] = None
    ) -> list[SearchMatch]:
        """
        Recherche des films par titre.

        Pattern cache-first: le cache est consulte AVANT l'appel API.

        Args:
            title: Titre a rechercher
            year: Annee de sortie (primary_release_year) optionnelle

        Returns:
            SearchMatch dans l'ordre de la reponse (vide si aucun resultat)
        """
        results = await self._cache.get_search(self._language, title, year)

        if results is None:
            params: dict[str, Any] = {
                "query": title,
                "language": self._language,
                "page": 1,
                "include_adult": "false",
            }
            if year is not None:
                params["primary_release_year"] = year

            data = await self._get_json("/search/movie", params)
            results = data.get("results") or []
            await self._cache.set_search(self._language, title, year, results)

        try:
            return [self._to_search_match(item) for item in results]
        except (KeyError, TypeError, ValueError) as e:
            raise ProviderError(f"Resultat de recherche invalide pour {title!r}") from e

    @staticmethod
    def _to_search_match(item: dict[str, Any]) -> SearchMatch:
        title = strip_invisible_chars(item.get("title") or "")
        original_title = strip_invisible_chars(item.get("original_title") or "")
        return SearchMatch(
            id=int(item["id"]),
            title=title or original_title,
            original_title=original_title,
            popularity=float(item.get("popularity") or 0.0),
            vote_average=float(item.get("vote_average") or 0.0),
            release_date=item.get("release_date") or "",
            overview=item.get("overview") or "",
            poster_ref=item.get("poster_path"),
            backdrop_ref=item.get("backdrop_path"),
        )

    async def fetch_genres(self, provider_id: int) -> list[Genre]:
        """
        Recupere les genres d'un film depuis son detail.

        Returns:
            Genres dans l'ordre TMDB
        """
        data = await self._cache.get_details(self._language, provider_id)

        if data is None:
            data = await self._get_json(
                f"/movie/{provider_id}", {"language": self._language}
            )
            await self._cache.set_details(self._language, provider_id, data)

        try:
            return [
                Genre(id=int(genre["id"]), name=genre.get("name") or "")
                for genre in data.get("genres") or []
            ]
        except (KeyError, TypeError, ValueError) as e:
            raise ProviderError(f"Genres invalides pour le film {provider_id}") from e

    async def fetch_credits(self, provider_id: int) -> MovieCredits:
        """
        Recupere tous les acteurs et l'equipe d'un film (non filtres).

        Returns:
            MovieCredits avec cast (ordre du generique) et crew
        """
        data = await self._cache.get_credits(provider_id)

        if data is None:
            data = await self._get_json(f"/movie/{provider_id}/credits")
            await self._cache.set_credits(provider_id, data)

        try:
            cast = [
                CreditedPerson(
                    provider_id=int(item["id"]),
                    name=strip_invisible_chars(item.get("name") or ""),
                    role_kind=RoleKind.CAST,
                    character=item.get("character") or "",
                    image_ref=item.get("profile_path"),
                    order=item.get("order"),
                )
                for item in data.get("cast") or []
            ]
            crew = [
                CreditedPerson(
                    provider_id=int(item["id"]),
                    name=strip_invisible_chars(item.get("name") or ""),
                    role_kind=RoleKind.CREW,
                    department=item.get("department") or "",
                    job=item.get("job") or "",
                    image_ref=item.get("profile_path"),
                )
                for item in data.get("crew") or []
            ]
        except (KeyError, TypeError, ValueError) as e:
            raise ProviderError(f"Credits invalides pour le film {provider_id}") from e

        logger.debug(
            "Credits recuperes",
            provider_id=provider_id,
            cast=len(cast),
            crew=len(crew),
        )
        return MovieCredits(cast=cast, crew=crew)

    async def fetch_image_bytes(self, ref: str, size: str) -> bytes:
        """
        Telecharge une image depuis le CDN TMDB.

        Args:
            ref: Reference TMDB (ex: "/abc.jpg")
            size: Resolution (ex: "w185")

        Returns:
            Contenu brut de l'image

        Raises:
            ProviderError: Statut d'erreur, reseau, ou contenu non image
        """
        path = f"/{size}/{ref.lstrip('/')}"
        try:
            response = await request_with_retry(self._get_image_client(), "GET", path)
        except httpx.HTTPStatusError as e:
            raise ProviderError(f"Image {path}: HTTP {e.response.status_code}") from e
        except httpx.HTTPError as e:
            raise ProviderError(f"Image {path}: {e.__class__.__name__} {e}") from e

        content_type = response.headers.get("content-type", "")
        if not content_type.startswith("image/"):
            raise ProviderError(f"Image {path}: type de contenu inattendu {content_type!r}")
        return response.content

    async def close(self) -> None:
        """
        Ferme les clients HTTP.

        Doit etre appele a la fin de l'utilisation pour liberer les
        ressources reseau.
        """
        for client in (self._client, self._image_client):
            if client is not None and not client.is_closed:
                await client.aclose()
        self._client = None
        self._image_client = None
