"""
Tests unitaires pour PipelineOrchestrator.

Ces tests verifient:
- Traitement de bout en bout de chaque candidat decouvert
- Isolation des echecs (persistance, erreur inattendue)
- Films non identifies persistes avec les donnees du nom de fichier
- Racine illisible fatale, sous-repertoires illisibles consignes
- Callback en echec sans blocage, worker mort interrompant le run
- Nombre de candidats traites simultanement borne par movie_workers
"""

import asyncio
from pathlib import Path
from typing import Optional, Sequence
from unittest.mock import AsyncMock

import pytest

from cinescan.adapters.parsing import MovieFilenameParser
from cinescan.core.entities import CreditedPerson, EnrichedMovie, Genre, RoleKind
from cinescan.core.errors import PersistError, ShareListingError
from cinescan.core.ports.api_clients import MovieCredits, SearchMatch
from cinescan.core.ports.repositories import IMovieStore
from cinescan.infrastructure.persistence.repositories import SQLModelMovieStore
from cinescan.services import (
    AssetFetcher,
    CandidateState,
    DirectoryWalker,
    MetadataEnricher,
    PipelineOrchestrator,
)
from tests.fixtures.shares import InMemoryShare

LIBRARY = {
    "Alien (1979)": {"Alien (1979).mkv": 1},
    "Heat (1995).mkv": 1,
    "Unknown Movie (2031).avi": 1,
    "readme.mkv": 1,
    "Private": {"Secret (2000).mkv": 1},
}

MATCHES = {
    "alien": SearchMatch(id=348, title="Alien", popularity=95.2, poster_ref="/alien.jpg"),
    "heat": SearchMatch(id=949, title="Heat", popularity=40.1, poster_ref="/heat.jpg"),
}


class RecordingStore(IMovieStore):
    """Store en memoire, echouant pour les chemins donnes."""

    def __init__(self, failing_paths: frozenset = frozenset()) -> None:
        self.failing_paths = failing_paths
        self.persisted: dict[str, tuple[EnrichedMovie, list[CreditedPerson]]] = {}

    async def persist(
        self,
        movie: EnrichedMovie,
        genres: Sequence[Genre],
        people: Sequence[CreditedPerson],
    ) -> int:
        if movie.path in self.failing_paths:
            raise PersistError(movie.path, "disk I/O error")
        self.persisted[movie.path] = (movie, list(people))
        return len(self.persisted)

    def get_movie_id(self, path: str) -> Optional[int]:
        return None


@pytest.fixture
def provider(mock_provider: AsyncMock) -> AsyncMock:
    async def search(title: str, year: Optional[int] = None) -> list[SearchMatch]:
        match = MATCHES.get(title)
        return [match] if match else []

    mock_provider.search_by_title.side_effect = search
    mock_provider.fetch_genres.return_value = [Genre(80, "Crime")]
    mock_provider.fetch_credits.return_value = MovieCredits(
        cast=[CreditedPerson(1, "Actor One", RoleKind.CAST, character="Lead", image_ref="/one.jpg")],
        crew=[
            CreditedPerson(2, "Director", RoleKind.CREW, department="Directing", job="Director"),
            CreditedPerson(3, "Grip", RoleKind.CREW, department="Crew", job="Key Grip"),
        ],
    )
    return mock_provider


def _orchestrator(
    share: InMemoryShare,
    provider: AsyncMock,
    store: IMovieStore,
    assets_root: Path,
    **kwargs,
) -> PipelineOrchestrator:
    return PipelineOrchestrator(
        walker=DirectoryWalker(share, MovieFilenameParser()),
        enricher=MetadataEnricher(provider),
        asset_fetcher=AssetFetcher(provider, assets_root, image_workers=4),
        store=store,
        **kwargs,
    )


class TestRun:
    @pytest.mark.asyncio
    async def test_every_candidate_is_persisted(
        self, provider: AsyncMock, tmp_path: Path
    ) -> None:
        store = RecordingStore()
        orchestrator = _orchestrator(InMemoryShare(LIBRARY), provider, store, tmp_path)

        report = await orchestrator.run()

        assert report.discovered == 4
        assert report.persisted == 4
        assert report.failed == 0
        assert set(store.persisted) == {
            "alien (1979)/alien (1979).mkv",
            "heat (1995).mkv",
            "unknown movie (2031).avi",
            "private/secret (2000).mkv",
        }
        assert [r.path for r in report.walk_errors] == ["readme.mkv"]

    @pytest.mark.asyncio
    async def test_identified_movie_is_fully_enriched(
        self, provider: AsyncMock, tmp_path: Path
    ) -> None:
        store = RecordingStore()
        orchestrator = _orchestrator(InMemoryShare(LIBRARY), provider, store, tmp_path)

        await orchestrator.run()

        movie, people = store.persisted["alien (1979)/alien (1979).mkv"]
        assert movie.provider_id == 348
        assert movie.genres == [Genre(80, "Crime")]
        assert Path(movie.poster_large).exists()
        assert [p.name for p in people] == ["Actor One", "Director"]
        assert Path(people[0].local_image_path).exists()
        assert people[1].local_image_path is None

    @pytest.mark.asyncio
    async def test_unknown_movie_is_persisted_without_enrichment(
        self, provider: AsyncMock, tmp_path: Path
    ) -> None:
        store = RecordingStore()
        orchestrator = _orchestrator(InMemoryShare(LIBRARY), provider, store, tmp_path)

        report = await orchestrator.run()

        movie, people = store.persisted["unknown movie (2031).avi"]
        assert not movie.is_identified
        assert people == []
        assert report.not_found == 2  # unknown movie, secret
        outcome = next(o for o in report.outcomes if o.path == "unknown movie (2031).avi")
        assert outcome.state is CandidateState.PERSISTED

    @pytest.mark.asyncio
    async def test_persist_failure_is_isolated(
        self, provider: AsyncMock, tmp_path: Path
    ) -> None:
        store = RecordingStore(failing_paths=frozenset({"heat (1995).mkv"}))
        orchestrator = _orchestrator(InMemoryShare(LIBRARY), provider, store, tmp_path)

        report = await orchestrator.run()

        assert report.failed == 1
        assert report.persisted == 3
        failed = next(o for o in report.outcomes if o.state is CandidateState.FAILED)
        assert failed.path == "heat (1995).mkv"
        assert isinstance(failed.error, PersistError)

    @pytest.mark.asyncio
    async def test_unexpected_error_is_isolated(
        self, provider: AsyncMock, tmp_path: Path
    ) -> None:
        async def search(title: str, year: Optional[int] = None) -> list[SearchMatch]:
            if title == "alien":
                raise RuntimeError("boom")
            return []

        provider.search_by_title.side_effect = search
        store = RecordingStore()
        orchestrator = _orchestrator(InMemoryShare(LIBRARY), provider, store, tmp_path)

        report = await orchestrator.run()

        assert report.failed == 1
        assert report.persisted == 3
        assert "alien (1979)/alien (1979).mkv" not in store.persisted

    @pytest.mark.asyncio
    async def test_unreadable_sub_directory_is_reported(
        self, provider: AsyncMock, tmp_path: Path
    ) -> None:
        share = InMemoryShare(LIBRARY, unreadable=frozenset({"Private"}))
        orchestrator = _orchestrator(share, provider, RecordingStore(), tmp_path)

        report = await orchestrator.run()

        assert report.persisted == 3
        assert any(isinstance(r.error, ShareListingError) for r in report.walk_errors)

    @pytest.mark.asyncio
    async def test_unreadable_root_is_fatal(self, provider: AsyncMock, tmp_path: Path) -> None:
        share = InMemoryShare(LIBRARY, unreadable=frozenset({""}))
        orchestrator = _orchestrator(share, provider, RecordingStore(), tmp_path)

        with pytest.raises(ShareListingError):
            await orchestrator.run()

    @pytest.mark.asyncio
    async def test_on_outcome_is_called_for_each_candidate(
        self, provider: AsyncMock, tmp_path: Path
    ) -> None:
        seen: list[str] = []
        orchestrator = _orchestrator(
            InMemoryShare(LIBRARY),
            provider,
            RecordingStore(),
            tmp_path,
            on_outcome=lambda outcome: seen.append(outcome.path),
        )

        await orchestrator.run()

        assert len(seen) == 4

    @pytest.mark.asyncio
    async def test_movie_workers_bound_concurrency(
        self, provider: AsyncMock, tmp_path: Path
    ) -> None:
        library = {f"Movie {i} (2000).mkv": 1 for i in range(12)}
        running = 0
        peak = 0

        async def search(title: str, year: Optional[int] = None) -> list[SearchMatch]:
            nonlocal running, peak
            running += 1
            peak = max(peak, running)
            await asyncio.sleep(0.01)
            running -= 1
            return []

        provider.search_by_title.side_effect = search
        orchestrator = _orchestrator(
            InMemoryShare(library), provider, RecordingStore(), tmp_path,
            movie_workers=3, queue_size=2,
        )

        report = await orchestrator.run()

        assert report.persisted == 12
        assert 1 < peak <= 3

    @pytest.mark.asyncio
    async def test_failing_callback_does_not_stall_the_run(
        self, provider: AsyncMock, tmp_path: Path
    ) -> None:
        library = {f"Movie {i} (2000).mkv": 1 for i in range(5)}

        def on_outcome(outcome) -> None:
            raise RuntimeError("progress bar gone")

        orchestrator = _orchestrator(
            InMemoryShare(library), provider, RecordingStore(), tmp_path,
            movie_workers=1, queue_size=1, on_outcome=on_outcome,
        )

        report = await asyncio.wait_for(orchestrator.run(), timeout=3)

        assert report.persisted == 5

    @pytest.mark.asyncio
    async def test_dead_worker_aborts_the_run(self, provider: AsyncMock, tmp_path: Path) -> None:
        library = {f"Movie {i} (2000).mkv": 1 for i in range(5)}
        orchestrator = _orchestrator(
            InMemoryShare(library), provider, RecordingStore(), tmp_path,
            movie_workers=1, queue_size=1,
        )
        orchestrator.process = AsyncMock(side_effect=RuntimeError("worker crashed"))

        with pytest.raises(RuntimeError, match="worker crashed"):
            await asyncio.wait_for(orchestrator.run(), timeout=3)

    @pytest.mark.asyncio
    async def test_reingestion_with_sqlite_store_is_idempotent(
        self, provider: AsyncMock, store: SQLModelMovieStore, tmp_path: Path
    ) -> None:
        orchestrator = _orchestrator(InMemoryShare(LIBRARY), provider, store, tmp_path)

        await orchestrator.run()
        first = store.count_rows()
        await orchestrator.run()

        assert store.count_rows() == first
        assert first["movies"] == 4


class TestConfiguration:
    @pytest.mark.parametrize("kwargs", [{"movie_workers": 0}, {"queue_size": 0}])
    def test_bounds_must_be_positive(
        self, mock_provider: AsyncMock, tmp_path: Path, kwargs: dict
    ) -> None:
        with pytest.raises(ValueError):
            _orchestrator(InMemoryShare({}), mock_provider, RecordingStore(), tmp_path, **kwargs)
