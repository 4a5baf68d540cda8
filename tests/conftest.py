"""
Fixtures pytest partagees pour les tests CineScan.

Ce module contient les fixtures communes utilisees dans les tests:
- Mock du fournisseur de metadonnees (IMetadataProvider)
- Base SQLite temporaire et store associe
- Settings de test avec chemins temporaires
- Candidats et films types
"""

from pathlib import Path
from unittest.mock import AsyncMock

import pytest
from sqlalchemy import Engine

from cinescan.config import Settings
from cinescan.core.entities import CreditedPerson, EnrichedMovie, Genre, RoleKind
from cinescan.core.ports.api_clients import IMetadataProvider, MovieCredits
from cinescan.core.value_objects import MovieCandidate
from cinescan.infrastructure.persistence.database import create_db_engine, init_db
from cinescan.infrastructure.persistence.repositories import SQLModelMovieStore
from tests.fixtures.images import PNG_BYTES


@pytest.fixture
def mock_provider() -> AsyncMock:
    """
    Mock de IMetadataProvider pour les tests.

    Par defaut: aucune correspondance, aucun genre, aucun credit, et une
    image PNG minimale pour chaque telechargement.
    """
    mock = AsyncMock(spec=IMetadataProvider)
    mock.search_by_title.return_value = []
    mock.fetch_genres.return_value = []
    mock.fetch_credits.return_value = MovieCredits()
    mock.fetch_image_bytes.return_value = PNG_BYTES
    return mock


@pytest.fixture
def engine(tmp_path: Path) -> Engine:
    """Engine SQLite temporaire avec schema initialise."""
    return init_db(create_db_engine(f"sqlite:///{tmp_path}/test.db"))


@pytest.fixture
def store(engine: Engine) -> SQLModelMovieStore:
    return SQLModelMovieStore(engine)


@pytest.fixture
def test_settings(tmp_path: Path) -> Settings:
    """Settings de test isoles dans tmp_path."""
    library = tmp_path / "library"
    library.mkdir()
    return Settings(
        local_root=library,
        tmdb_api_key="test_api_key",
        database_url=f"sqlite:///{tmp_path}/test.db",
        assets_dir=tmp_path / "assets",
        cache_dir=tmp_path / "cache",
        log_file=tmp_path / "test.log",
    )


@pytest.fixture
def alien_candidate() -> MovieCandidate:
    return MovieCandidate(
        path="films/alien (1979)/alien (1979) [director's cut].mkv",
        title="alien",
        year="1979",
        extra_tag="director's cut",
    )


@pytest.fixture
def alien_movie(alien_candidate: MovieCandidate) -> EnrichedMovie:
    """Film identifie avec ses references distantes."""
    return EnrichedMovie.from_candidate(alien_candidate).apply(
        provider_id=348,
        title="Alien",
        original_title="Alien",
        vote_average=8.2,
        release_date="1979-05-25",
        summary="In space no one can hear you scream.",
        poster_large="/poster.jpg",
        poster_snapshot="/poster.jpg",
        backdrop="/backdrop.jpg",
        genres=[Genre(27, "Horror"), Genre(878, "Science Fiction")],
    )


@pytest.fixture
def alien_people() -> list[CreditedPerson]:
    return [
        CreditedPerson(
            provider_id=10205,
            name="Sigourney Weaver",
            role_kind=RoleKind.CAST,
            character="Ellen Ripley",
            image_ref="/weaver.jpg",
            order=0,
        ),
        CreditedPerson(
            provider_id=578,
            name="Ridley Scott",
            role_kind=RoleKind.CREW,
            department="Directing",
            job="Director",
            image_ref="/scott.jpg",
        ),
    ]
