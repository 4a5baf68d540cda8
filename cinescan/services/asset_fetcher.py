"""
Service de telechargement des visuels (affiches, fonds, portraits).

Arborescence deterministe sous la racine des visuels:
    images/movie/<titre>/<id tmdb>_<type><ext>
    images/person/<nom>/<id tmdb><ext>

Un fichier deja present n'est jamais retelecharge. Un telechargement en
echec laisse le chemin local vide sans interrompre les autres.
"""

import asyncio
import os
from dataclasses import dataclass, field, replace
from pathlib import Path, PurePosixPath
from typing import Optional, Sequence

from loguru import logger

from cinescan.core.entities import AssetKind, CreditedPerson, EnrichedMovie, RoleKind
from cinescan.core.errors import AssetError, ProviderError
from cinescan.core.ports.api_clients import IMetadataProvider
from cinescan.utils.constants import DEFAULT_IMAGE_WORKERS
from cinescan.utils.helpers import safe_path_segment

# Resolution TMDB des portraits
PERSON_IMAGE_SIZE = "w185"

IMAGES_DIR = "images"
MOVIE_CATEGORY = "movie"
PERSON_CATEGORY = "person"


@dataclass
class AssetReport:
    """Compteurs de telechargement pour un film."""

    downloaded: int = 0
    reused: int = 0
    failed: int = 0
    errors: list[AssetError] = field(default_factory=list)

    def record(self, downloaded: bool) -> None:
        if downloaded:
            self.downloaded += 1
        else:
            self.reused += 1

    def record_failure(self, error: AssetError) -> None:
        self.failed += 1
        self.errors.append(error)

    def merge(self, other: "AssetReport") -> None:
        self.downloaded += other.downloaded
        self.reused += other.reused
        self.failed += other.failed
        self.errors.extend(other.errors)


def _suffix(ref: str) -> str:
    """Extension de la reference distante (.jpg par defaut)."""
    return PurePosixPath(ref).suffix.lower() or ".jpg"


class AssetFetcher:
    """
    Telecharge les visuels d'un film et de ses personnes.

    Les telechargements d'un meme lot (acteurs, puis equipe) sont executes
    en parallele, limites par un semaphore, et appliques par index au fil
    de leur completion.
    """

    def __init__(
        self,
        provider: IMetadataProvider,
        assets_root: Path,
        image_workers: int = DEFAULT_IMAGE_WORKERS,
    ) -> None:
        """
        Args:
            provider: Fournisseur des images
            assets_root: Repertoire sous lequel images/ est cree
            image_workers: Telechargements simultanes maximum par lot
        """
        if image_workers < 1:
            raise ValueError(f"image_workers doit etre >= 1: {image_workers}")
        self._provider = provider
        self._images_root = Path(assets_root) / IMAGES_DIR
        self._image_workers = image_workers
        # Telechargements en cours, partages entre workers pour un meme fichier
        self._in_flight: dict[Path, asyncio.Future] = {}

    def movie_asset_path(self, movie: EnrichedMovie, kind: AssetKind, ref: str) -> Path:
        """Chemin local d'un visuel de film."""
        folder = safe_path_segment(movie.title or movie.candidate.title)
        file_name = f"{movie.provider_id}_{kind.value}{_suffix(ref)}"
        return self._images_root / MOVIE_CATEGORY / folder / file_name

    def person_image_path(self, person: CreditedPerson, ref: str) -> Path:
        """Chemin local du portrait d'une personne."""
        folder = safe_path_segment(person.name)
        return self._images_root / PERSON_CATEGORY / folder / f"{person.provider_id}{_suffix(ref)}"

    async def fetch(self, ref: str, size: str, target: Path) -> bool:
        """
        Telecharge une image vers target si elle est absente.

        Deux demandes simultanees du meme fichier partagent un seul
        telechargement.

        Returns:
            True si l'image a ete telechargee, False si elle existait deja

        Raises:
            AssetError: Echec du telechargement ou de l'ecriture
        """
        if await asyncio.to_thread(target.exists):
            return False

        pending = self._in_flight.get(target)
        if pending is None:
            pending = asyncio.ensure_future(self._download(ref, size, target))
            self._in_flight[target] = pending
            pending.add_done_callback(lambda _: self._in_flight.pop(target, None))
        await asyncio.shield(pending)
        return True

    async def _download(self, ref: str, size: str, target: Path) -> None:
        try:
            content = await self._provider.fetch_image_bytes(ref, size)
        except ProviderError as e:
            raise AssetError(f"Telechargement impossible de {ref}: {e}") from e

        try:
            await asyncio.to_thread(_write_atomic, target, content)
        except OSError as e:
            raise AssetError(f"Ecriture impossible de {target}: {e}") from e
        logger.debug("Image telechargee", ref=ref, size=size, target=str(target))

    async def fetch_movie_assets(self, movie: EnrichedMovie) -> AssetReport:
        """
        Telecharge affiche, vignette et fond d'ecran du film.

        Chaque reference distante est remplacee par le chemin local, ou
        effacee (None) en cas d'echec.
        """
        report = AssetReport()
        kinds = [kind for kind in AssetKind if movie.asset_ref(kind)]

        async def download(kind: AssetKind) -> tuple[AssetKind, Path, bool]:
            ref = movie.asset_ref(kind)
            target = self.movie_asset_path(movie, kind, ref)
            return kind, target, await self.fetch(ref, kind.image_size, target)

        outcomes = await asyncio.gather(
            *(download(kind) for kind in kinds), return_exceptions=True
        )

        changes: dict[str, Optional[str]] = {}
        for kind, outcome in zip(kinds, outcomes):
            if isinstance(outcome, AssetError):
                logger.warning(
                    "Visuel indisponible", path=movie.path, kind=kind.value, error=str(outcome)
                )
                report.record_failure(outcome)
                changes[kind.value] = None
            elif isinstance(outcome, BaseException):
                raise outcome
            else:
                _, target, downloaded = outcome
                report.record(downloaded)
                changes[kind.value] = str(target)

        if changes:
            movie.apply(**changes)
        return report

    async def fetch_people_images(
        self, people: Sequence[CreditedPerson]
    ) -> tuple[list[CreditedPerson], AssetReport]:
        """
        Telecharge les portraits d'un lot de personnes.

        Les personnes sans reference d'image sont conservees telles quelles.
        Toutes les entrees sont traitees avant le retour.

        Returns:
            (personnes avec local_image_path renseigne si succes, rapport)
        """
        updated = list(people)
        report = AssetReport()
        semaphore = asyncio.Semaphore(self._image_workers)

        async def download(index: int, person: CreditedPerson) -> tuple[int, Path, bool]:
            async with semaphore:
                target = self.person_image_path(person, person.image_ref)
                try:
                    downloaded = await self.fetch(person.image_ref, PERSON_IMAGE_SIZE, target)
                except AssetError as e:
                    raise AssetError(f"{person.name} ({person.provider_id}): {e}") from e
                return index, target, downloaded

        tasks = [
            asyncio.ensure_future(download(index, person))
            for index, person in enumerate(people)
            if person.image_ref
        ]
        try:
            for next_done in asyncio.as_completed(tasks):
                try:
                    index, target, downloaded = await next_done
                except AssetError as e:
                    logger.debug("Portrait indisponible", error=str(e))
                    report.record_failure(e)
                    continue
                updated[index] = replace(updated[index], local_image_path=str(target))
                report.record(downloaded)
        finally:
            for task in tasks:
                task.cancel()

        return updated, report

    async def fetch_all(
        self, movie: EnrichedMovie, people: Sequence[CreditedPerson]
    ) -> tuple[list[CreditedPerson], AssetReport]:
        """
        Telecharge tous les visuels d'un film: le film, puis le lot des
        acteurs, puis celui de l'equipe. L'ordre des personnes est conserve.
        """
        report = await self.fetch_movie_assets(movie)
        updated = list(people)

        for role_kind in RoleKind:
            indices = [i for i, person in enumerate(people) if person.role_kind is role_kind]
            if not indices:
                continue
            batch, batch_report = await self.fetch_people_images([people[i] for i in indices])
            for i, person in zip(indices, batch):
                updated[i] = person
            report.merge(batch_report)

        if report.failed:
            logger.info(
                "Visuels partiellement telecharges",
                path=movie.path,
                failed=report.failed,
                downloaded=report.downloaded,
            )
        return updated, report


def _write_atomic(target: Path, content: bytes) -> None:
    """Ecrit via un fichier temporaire puis renommage (jamais de fichier tronque)."""
    target.parent.mkdir(parents=True, exist_ok=True)
    partial = target.with_name(f".{target.name}.part")
    partial.write_bytes(content)
    os.replace(partial, target)
