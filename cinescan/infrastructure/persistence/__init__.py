"""
Module de persistance SQLite pour CineScan.

Ce module fournit l'infrastructure de stockage utilisant SQLModel (SQLAlchemy):

- database.py : Creation de l'engine SQLite, initialisation du schema
- models.py : Modeles SQLModel (movies, people, genres, movie_genres)
- repositories/ : Implementation de IMovieStore

Usage:
    from cinescan.infrastructure.persistence import create_db_engine, init_db
    from cinescan.infrastructure.persistence.repositories import SQLModelMovieStore

    engine = init_db(create_db_engine("sqlite:///movie_db.db"))
    store = SQLModelMovieStore(engine)
"""

from cinescan.infrastructure.persistence.database import (
    create_db_engine,
    get_engine,
    init_db,
)
from cinescan.infrastructure.persistence.models import (
    GenreModel,
    MovieGenreModel,
    MovieModel,
    PersonModel,
)

__all__ = [
    "create_db_engine",
    "get_engine",
    "init_db",
    "GenreModel",
    "MovieGenreModel",
    "MovieModel",
    "PersonModel",
]
