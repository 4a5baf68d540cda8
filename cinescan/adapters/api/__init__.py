"""
Clients API pour le fournisseur de metadonnees.

Ce module expose:
- TMDBClient: Client pour The Movie Database
- TMDBCache: Cache disque des recherches, details et credits
- RateLimitError, request_with_retry, with_retry: Retry sur 429
"""

from cinescan.adapters.api.cache import TMDBCache
from cinescan.adapters.api.retry import RateLimitError, request_with_retry, with_retry
from cinescan.adapters.api.tmdb_client import TMDBClient

__all__ = [
    "TMDBCache",
    "RateLimitError",
    "TMDBClient",
    "request_with_retry",
    "with_retry",
]
