"""
Orchestrateur du pipeline d'ingestion.

Le parcours du partage alimente une file bornee consommee par N workers.
Chaque worker traite un candidat de bout en bout, sequentiellement:

    DISCOVERED -> ENRICHING -> ASSETS_FETCHING -> PERSISTED | FAILED

Un candidat en echec n'interrompt jamais le run: seules les erreurs de
demarrage (connexion au partage, racine illisible) sont propagees.
"""

import asyncio
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Optional

from loguru import logger

from cinescan.core.errors import CineScanError, NotFoundError, ProviderError
from cinescan.core.ports.repositories import IMovieStore
from cinescan.core.value_objects import MovieCandidate
from cinescan.services.asset_fetcher import AssetFetcher
from cinescan.services.directory_walker import DirectoryWalker, WalkResult
from cinescan.services.metadata_enricher import MetadataEnricher
from cinescan.utils.constants import DEFAULT_MOVIE_WORKERS

DEFAULT_QUEUE_SIZE = 20

# Signal de fin envoye a chaque worker
_STOP = None


class CandidateState(str, Enum):
    """Etat d'un candidat dans le pipeline."""

    DISCOVERED = "discovered"
    ENRICHING = "enriching"
    ASSETS_FETCHING = "assets_fetching"
    PERSISTED = "persisted"
    FAILED = "failed"


@dataclass
class CandidateOutcome:
    """
    Bilan du traitement d'un candidat.

    Attributes:
        path: Chemin du fichier
        state: Dernier etat atteint (PERSISTED ou FAILED en fin de run)
        movie_id: ID interne du film une fois persiste
        provider_id: ID TMDB (0 si non identifie)
        people: Nombre de personnes retenues
        enrichment_errors: Erreurs fournisseur absorbees
        asset_failures: Nombre de visuels non telecharges
        error: Erreur ayant fait echouer le candidat
    """

    path: str
    state: CandidateState = CandidateState.DISCOVERED
    movie_id: Optional[int] = None
    provider_id: int = 0
    people: int = 0
    enrichment_errors: list[ProviderError] = field(default_factory=list)
    asset_failures: int = 0
    error: Optional[BaseException] = None

    @property
    def not_found(self) -> bool:
        return any(isinstance(e, NotFoundError) for e in self.enrichment_errors)

    @property
    def succeeded(self) -> bool:
        return self.state is CandidateState.PERSISTED


@dataclass
class PipelineReport:
    """Bilan d'un run: un outcome par candidat et les erreurs de parcours."""

    outcomes: list[CandidateOutcome] = field(default_factory=list)
    walk_errors: list[WalkResult] = field(default_factory=list)

    @property
    def discovered(self) -> int:
        return len(self.outcomes)

    @property
    def persisted(self) -> int:
        return sum(1 for o in self.outcomes if o.succeeded)

    @property
    def failed(self) -> int:
        return sum(1 for o in self.outcomes if o.state is CandidateState.FAILED)

    @property
    def not_found(self) -> int:
        return sum(1 for o in self.outcomes if o.not_found)


class PipelineOrchestrator:
    """
    Execute le pipeline complet sur un partage deja connecte.

    Example:
        orchestrator = PipelineOrchestrator(walker, enricher, fetcher, store)
        report = await orchestrator.run()
        print(report.persisted, report.failed)
    """

    def __init__(
        self,
        walker: DirectoryWalker,
        enricher: MetadataEnricher,
        asset_fetcher: AssetFetcher,
        store: IMovieStore,
        movie_workers: int = DEFAULT_MOVIE_WORKERS,
        queue_size: int = DEFAULT_QUEUE_SIZE,
        on_outcome: Optional[Callable[[CandidateOutcome], None]] = None,
    ) -> None:
        """
        Args:
            walker: Parcours du partage
            enricher: Enrichissement TMDB
            asset_fetcher: Telechargement des visuels
            store: Stockage des films
            movie_workers: Nombre de candidats traites simultanement
            queue_size: Capacite de la file entre parcours et workers
            on_outcome: Callback appele apres chaque candidat (progression CLI)
        """
        if movie_workers < 1:
            raise ValueError(f"movie_workers doit etre >= 1: {movie_workers}")
        if queue_size < 1:
            raise ValueError(f"queue_size doit etre >= 1: {queue_size}")
        self._walker = walker
        self._enricher = enricher
        self._asset_fetcher = asset_fetcher
        self._store = store
        self._movie_workers = movie_workers
        self._queue_size = queue_size
        self._on_outcome = on_outcome

    async def run(self, root: str = "") -> PipelineReport:
        """
        Parcourt le partage et traite tous les candidats.

        Args:
            root: Repertoire de depart relatif a la racine du partage

        Returns:
            PipelineReport une fois tous les candidats traites

        Raises:
            ShareListingError: Si la racine est illisible
            Exception: Toute erreur arretant un worker (les autres taches sont annulees)
        """
        report = PipelineReport()
        queue: asyncio.Queue[Optional[MovieCandidate]] = asyncio.Queue(self._queue_size)
        workers = [
            asyncio.create_task(self._worker(queue, report), name=f"movie-worker-{i}")
            for i in range(self._movie_workers)
        ]
        producer = asyncio.create_task(
            self._produce(root, queue, report, len(workers)), name="movie-producer"
        )

        # Le premier echec (racine illisible, worker mort) annule les autres taches
        tasks = [producer, *workers]
        try:
            await asyncio.gather(*tasks)
        except BaseException:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

        logger.info(
            "Ingestion terminee",
            discovered=report.discovered,
            persisted=report.persisted,
            failed=report.failed,
            not_found=report.not_found,
            walk_errors=len(report.walk_errors),
        )
        return report

    async def _produce(
        self,
        root: str,
        queue: "asyncio.Queue[Optional[MovieCandidate]]",
        report: PipelineReport,
        worker_count: int,
    ) -> None:
        """Producteur: pousse les candidats (bloque si file pleine) puis un _STOP par worker."""
        async for result in self._walker.walk(root):
            if result.ok:
                await queue.put(result.candidate)
            else:
                report.walk_errors.append(result)
        for _ in range(worker_count):
            await queue.put(_STOP)

    async def _worker(
        self,
        queue: "asyncio.Queue[Optional[MovieCandidate]]",
        report: PipelineReport,
    ) -> None:
        while True:
            candidate = await queue.get()
            try:
                if candidate is _STOP:
                    return
                outcome = await self.process(candidate)
                report.outcomes.append(outcome)
                self._notify(outcome)
            finally:
                queue.task_done()

    def _notify(self, outcome: CandidateOutcome) -> None:
        if self._on_outcome is None:
            return
        try:
            self._on_outcome(outcome)
        except Exception:
            logger.exception("Callback de progression en echec", path=outcome.path)

    async def process(self, candidate: MovieCandidate) -> CandidateOutcome:
        """
        Traite un candidat: enrichissement, visuels, persistance.

        Ne leve jamais d'exception (hors annulation): tout echec est
        consigne dans l'outcome retourne.
        """
        outcome = CandidateOutcome(path=candidate.path)
        try:
            await self._process(candidate, outcome)
        except CineScanError as e:
            outcome.state = CandidateState.FAILED
            outcome.error = e
        except Exception as e:
            logger.exception("Erreur inattendue", path=candidate.path)
            outcome.state = CandidateState.FAILED
            outcome.error = e

        logger.info(
            "Candidat traite",
            path=outcome.path,
            state=outcome.state.value,
            provider_id=outcome.provider_id,
            movie_id=outcome.movie_id,
            people=outcome.people,
            enrichment_errors=len(outcome.enrichment_errors),
            asset_failures=outcome.asset_failures,
            error=str(outcome.error) if outcome.error else None,
        )
        return outcome

    async def _process(self, candidate: MovieCandidate, outcome: CandidateOutcome) -> None:
        outcome.state = CandidateState.ENRICHING
        enrichment = await self._enricher.enrich(candidate)
        movie = enrichment.movie
        people = enrichment.people
        outcome.provider_id = movie.provider_id
        outcome.enrichment_errors = enrichment.errors

        outcome.state = CandidateState.ASSETS_FETCHING
        if movie.is_identified:
            people, assets = await self._asset_fetcher.fetch_all(movie, people)
            outcome.asset_failures = assets.failed

        # PersistError remonte a process() qui marque le candidat FAILED
        outcome.movie_id = await self._store.persist(movie, movie.genres, people)
        outcome.people = len(people)
        outcome.state = CandidateState.PERSISTED
