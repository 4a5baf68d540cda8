"""
Cache disque des trois lectures TMDB d'une ingestion.

- recherche par titre (+ annee): liste brute "results", 24 heures
- detail d'un film (genres): document brut, 7 jours
- credits d'un film: document brut, 7 jours

Le cache utilise diskcache: les reponses sont conservees entre deux
executions, ce qui evite de reinterroger TMDB pour toute la videotheque
lors d'une reingestion. Seul le JSON brut est stocke, jamais des entites
du domaine: un changement de mapping s'applique aussi aux entrees en cache.
"""

import asyncio
from functools import partial
from typing import Any, Optional

from diskcache import Cache

SEARCH_TTL = 24 * 60 * 60  # 86400 s
DETAILS_TTL = 7 * 24 * 60 * 60  # 604800 s


def _key(*parts: Any) -> str:
    # None -> "-": ("alien", None) et ("alien", 1979) restent distincts
    return ":".join(["tmdb", *("-" if part is None else str(part).lower() for part in parts)])


def search_key(language: str, title: str, year: Optional[int]) -> str:
    return _key("search", language, title, year)


def details_key(language: str, movie_id: int) -> str:
    return _key("movie", language, movie_id)


def credits_key(movie_id: int) -> str:
    return _key("credits", movie_id)


class TMDBCache:
    """
    Cache asynchrone des reponses TMDB, une paire get/set par lecture.

    Les operations diskcache (bloquantes, SQLite) sont executees via
    run_in_executor pour ne pas bloquer la boucle. Un get retourne None
    si l'entree est absente ou expiree.

    Example:
        cache = TMDBCache(cache_dir=".cache/api")
        results = await cache.get_search("en-US", "alien", 1979)
        if results is None:
            results = ...
            await cache.set_search("en-US", "alien", 1979, results)
    """

    def __init__(self, cache_dir: str = ".cache/api") -> None:
        """
        Args:
            cache_dir: Repertoire du cache (cree si inexistant)
        """
        self._cache = Cache(str(cache_dir))

    async def get_search(
        self, language: str, title: str, year: Optional[int]
    ) -> Optional[list[dict[str, Any]]]:
        return await self._get(search_key(language, title, year))

    async def set_search(
        self, language: str, title: str, year: Optional[int], results: list[dict[str, Any]]
    ) -> None:
        await self._set(search_key(language, title, year), results, SEARCH_TTL)

    async def get_details(self, language: str, movie_id: int) -> Optional[dict[str, Any]]:
        return await self._get(details_key(language, movie_id))

    async def set_details(self, language: str, movie_id: int, data: dict[str, Any]) -> None:
        await self._set(details_key(language, movie_id), data, DETAILS_TTL)

    async def get_credits(self, movie_id: int) -> Optional[dict[str, Any]]:
        return await self._get(credits_key(movie_id))

    async def set_credits(self, movie_id: int, data: dict[str, Any]) -> None:
        await self._set(credits_key(movie_id), data, DETAILS_TTL)

    async def clear(self) -> None:
        """Supprime toutes les entrees du cache."""
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(None, self._cache.clear)

    def close(self) -> None:
        """Ferme le cache (fichiers SQLite sous-jacents)."""
        self._cache.close()

    async def _get(self, key: str) -> Optional[Any]:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self._cache.get, key)

    async def _set(self, key: str, value: Any, ttl: int) -> None:
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(None, partial(self._cache.set, key, value, expire=ttl))
