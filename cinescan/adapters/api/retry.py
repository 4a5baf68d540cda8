"""
Mecanisme de retry avec backoff exponentiel pour l'API TMDB.

Seules les reponses 429 (rate limiting) sont relancees, avec un delai
croissant et du jitter aleatoire. Les autres statuts d'erreur et les
erreurs reseau sont propages immediatement: c'est au client de les
traduire en ProviderError.

Usage:
    response = await request_with_retry(client, "GET", "/search/movie", params=...)
"""

from typing import Optional

import httpx
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_random_exponential,
)

from cinescan.core.errors import ProviderError


class RateLimitError(ProviderError):
    """
    Levee quand l'API repond 429 Too Many Requests.

    Propagee telle quelle (ProviderError) une fois les tentatives epuisees.

    Attributes:
        retry_after: Secondes a attendre (header Retry-After), ou None
    """

    def __init__(self, retry_after: Optional[int] = None) -> None:
        self.retry_after = retry_after
        super().__init__(f"Rate limited. Retry after: {retry_after}s")


def with_retry(max_attempts: int = 5, max_wait: int = 60):
    """
    Decorateur relancant une coroutine sur RateLimitError.

    wait_random_exponential ajoute du jitter: les workers concurrents ne
    relancent pas tous au meme instant.

    Args:
        max_attempts: Nombre maximum de tentatives
        max_wait: Delai maximum entre deux tentatives (secondes)
    """
    return retry(
        retry=retry_if_exception_type(RateLimitError),
        wait=wait_random_exponential(multiplier=1, min=1, max=max_wait),
        stop=stop_after_attempt(max_attempts),
        reraise=True,
    )


def _parse_retry_after(value: Optional[str]) -> Optional[int]:
    """Header Retry-After en secondes (les dates HTTP sont ignorees)."""
    if value and value.strip().isdigit():
        return int(value.strip())
    return None


async def request_with_retry(
    client: httpx.AsyncClient,
    method: str,
    url: str,
    max_attempts: int = 5,
    max_wait: int = 60,
    **kwargs,
) -> httpx.Response:
    """
    Execute une requete HTTP avec retry automatique sur 429.

    Args:
        client: Client httpx async
        method: Methode HTTP
        url: URL (relative au base_url du client ou absolue)
        max_attempts: Nombre maximum de tentatives
        max_wait: Delai maximum entre deux tentatives (secondes)
        **kwargs: Arguments passes a client.request()

    Returns:
        httpx.Response avec un statut 2xx

    Raises:
        RateLimitError: Toujours 429 apres epuisement des tentatives
        httpx.HTTPStatusError: Autres statuts 4xx/5xx, sans retry
        httpx.HTTPError: Erreurs reseau et timeouts, sans retry
    """

    @with_retry(max_attempts=max_attempts, max_wait=max_wait)
    async def _do_request() -> httpx.Response:
        response = await client.request(method, url, **kwargs)
        if response.status_code == 429:
            raise RateLimitError(_parse_retry_after(response.headers.get("Retry-After")))
        response.raise_for_status()
        return response

    return await _do_request()
