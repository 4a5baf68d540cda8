"""
Implementation SQLModel du stockage des films.

Implemente l'interface IMovieStore: un film, ses genres et ses personnes
sont ecrits dans une transaction unique, avec des insertions idempotentes
(INSERT ... ON CONFLICT DO NOTHING). Reingerer un meme chemin ne cree
aucune ligne et ne modifie pas le film existant.
"""

import asyncio
from datetime import datetime, timezone
from typing import Optional, Sequence

from loguru import logger
from sqlalchemy import Connection, Engine, func, select
from sqlalchemy.dialects.sqlite import insert
from sqlalchemy.exc import SQLAlchemyError

from cinescan.core.entities import CreditedPerson, EnrichedMovie, Genre
from cinescan.core.errors import PersistError
from cinescan.core.ports.repositories import IMovieStore
from cinescan.infrastructure.persistence.models import (
    GenreModel,
    MovieGenreModel,
    MovieModel,
    PersonModel,
)


class SQLModelMovieStore(IMovieStore):
    """
    Stockage SQLite des films enrichis.

    Un seul ecrivain a la fois: les transactions sont serialisees par un
    asyncio.Lock et executees dans un thread de travail pour ne pas bloquer
    la boucle.
    """

    def __init__(self, engine: Engine) -> None:
        """
        Args:
            engine: Engine SQLAlchemy dont le schema est deja initialise
        """
        self._engine = engine
        self._write_lock = asyncio.Lock()

    async def persist(
        self,
        movie: EnrichedMovie,
        genres: Sequence[Genre],
        people: Sequence[CreditedPerson],
    ) -> int:
        """
        Persiste un film, ses genres et ses personnes.

        Returns:
            ID interne du film

        Raises:
            PersistError: La transaction a echoue (aucune ecriture conservee)
        """
        async with self._write_lock:
            try:
                movie_id = await asyncio.to_thread(
                    self._persist_sync, movie, list(genres), list(people)
                )
            except SQLAlchemyError as e:
                logger.error("Transaction en echec", path=movie.path, error=str(e))
                raise PersistError(movie.path, str(e)) from e

        logger.debug(
            "Film persiste",
            path=movie.path,
            movie_id=movie_id,
            genres=len(genres),
            people=len(people),
        )
        return movie_id

    def _persist_sync(
        self,
        movie: EnrichedMovie,
        genres: list[Genre],
        people: list[CreditedPerson],
    ) -> int:
        # engine.begin(): commit en sortie, rollback sur exception
        with self._engine.begin() as connection:
            movie_id = self._insert_movie(connection, movie)
            self._insert_genres(connection, movie_id, genres)
            self._insert_people(connection, movie_id, people)
        return movie_id

    @staticmethod
    def _insert_movie(connection: Connection, movie: EnrichedMovie) -> int:
        candidate = movie.candidate
        stmt = (
            insert(MovieModel)
            .values(
                path=movie.path,
                provider_id=movie.provider_id,
                title=movie.title or candidate.title,
                original_title=movie.original_title,
                vote_average=movie.vote_average,
                release_date=movie.release_date,
                summary=movie.summary,
                poster_large=movie.poster_large,
                poster_snapshot=movie.poster_snapshot,
                backdrop=movie.backdrop,
                file_title=candidate.title,
                file_year=candidate.year,
                extra_tag=candidate.extra_tag,
                created_at=datetime.now(timezone.utc),
            )
            .on_conflict_do_nothing(index_elements=["path"])
        )
        connection.execute(stmt)
        return connection.execute(
            select(MovieModel.id).where(MovieModel.path == movie.path)
        ).scalar_one()

    @staticmethod
    def _insert_genres(connection: Connection, movie_id: int, genres: list[Genre]) -> None:
        if not genres:
            return
        connection.execute(
            insert(GenreModel)
            .values([{"id": genre.id, "name": genre.name} for genre in genres])
            .on_conflict_do_nothing(index_elements=["id"])
        )
        connection.execute(
            insert(MovieGenreModel)
            .values([{"movie_id": movie_id, "genre_id": genre.id} for genre in genres])
            .on_conflict_do_nothing(index_elements=["movie_id", "genre_id"])
        )

    @staticmethod
    def _insert_people(
        connection: Connection, movie_id: int, people: list[CreditedPerson]
    ) -> None:
        if not people:
            return
        rows = [
            {
                "provider_id": person.provider_id,
                "movie_id": movie_id,
                "name": person.name,
                "role_label": person.role_label,
                "character": person.character,
                "department": person.department,
                "image_ref": person.image_ref,
                "local_image_path": person.local_image_path,
                "cast_order": person.order,
            }
            for person in people
        ]
        connection.execute(
            insert(PersonModel)
            .values(rows)
            .on_conflict_do_nothing(
                index_elements=["provider_id", "movie_id", "character", "role_label"]
            )
        )

    def get_movie_id(self, path: str) -> Optional[int]:
        """Recupere l'ID interne d'un film par son chemin (insensible a la casse)."""
        with self._engine.connect() as connection:
            return connection.execute(
                select(MovieModel.id).where(MovieModel.path == path.strip().lower())
            ).scalar_one_or_none()

    def count_rows(self) -> dict[str, int]:
        """Nombre de lignes par table."""
        with self._engine.connect() as connection:
            return {
                model.__tablename__: connection.execute(
                    select(func.count()).select_from(model)
                ).scalar_one()
                for model in (MovieModel, PersonModel, GenreModel, MovieGenreModel)
            }
