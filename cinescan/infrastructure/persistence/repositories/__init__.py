"""
Implementations SQLModel des repositories.

Ce module contient l'implementation concrete de IMovieStore
(cinescan/core/ports/repositories.py) pour la persistance SQLite.
"""

from cinescan.infrastructure.persistence.repositories.movie_store import (
    SQLModelMovieStore,
)

__all__ = [
    "SQLModelMovieStore",
]
