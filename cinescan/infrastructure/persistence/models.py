"""
Modeles SQLModel pour la base de donnees CineScan.

Ces modeles representent les tables de la base de donnees SQLite.
Ils sont distincts des entites de domaine (dataclass dans core/entities/)
selon l'architecture hexagonale.

Tables:
- movies: Un film par chemin de fichier (cle de dedoublonnage)
- people: Acteurs et membres de l'equipe, rattaches a un film
- genres: Genres TMDB (donnees de reference, jamais modifiees)
- movie_genres: Association film <-> genre
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import UniqueConstraint
from sqlmodel import Field, SQLModel


class MovieModel(SQLModel, table=True):
    """
    Film ingere depuis le partage.

    Les colonnes file_* conservent les donnees deduites du nom de fichier,
    seules disponibles pour un film non identifie sur TMDB.
    """

    __tablename__ = "movies"

    id: Optional[int] = Field(default=None, primary_key=True)
    path: str = Field(unique=True)
    provider_id: int = Field(default=0, index=True)  # ID TMDB, 0 si non identifie
    title: str = Field(default="", index=True)
    original_title: str = ""
    vote_average: float = 0.0
    release_date: str = Field(default="", index=True)  # YYYY-MM-DD
    summary: str = ""
    poster_large: Optional[str] = None
    poster_snapshot: Optional[str] = None
    backdrop: Optional[str] = None
    file_title: str = ""
    file_year: Optional[str] = None
    extra_tag: Optional[str] = None
    created_at: Optional[datetime] = None


class PersonModel(SQLModel, table=True):
    """
    Personne creditee sur un film.

    role_label vaut "actor" pour les acteurs et le poste TMDB pour l'equipe.
    Une meme personne peut apparaitre plusieurs fois sur un film avec des
    roles differents.
    """

    __tablename__ = "people"
    __table_args__ = (
        UniqueConstraint(
            "provider_id", "movie_id", "character", "role_label",
            name="uq_people_credit",
        ),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    provider_id: int
    movie_id: int = Field(foreign_key="movies.id", index=True)
    name: str = Field(index=True)
    role_label: str = Field(index=True)
    character: str = ""
    department: str = ""
    image_ref: Optional[str] = None
    local_image_path: Optional[str] = None
    cast_order: Optional[int] = None


class GenreModel(SQLModel, table=True):
    """Genre TMDB, l'ID TMDB sert de cle primaire."""

    __tablename__ = "genres"

    id: int = Field(primary_key=True, sa_column_kwargs={"autoincrement": False})
    name: str


class MovieGenreModel(SQLModel, table=True):
    """Association entre un film et un genre."""

    __tablename__ = "movie_genres"
    __table_args__ = (
        UniqueConstraint("movie_id", "genre_id", name="uq_movie_genre"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    movie_id: int = Field(foreign_key="movies.id", index=True)
    genre_id: int = Field(foreign_key="genres.id")
