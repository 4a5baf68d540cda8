"""
Service de parcours du partage distant.

Parcourt l'arborescence en profondeur a l'aide d'une pile explicite (pas de
recursion) et produit paresseusement un WalkResult par fichier video:
- un candidat si le nom de fichier est exploitable
- une erreur sinon, le parcours continuant avec les fichiers voisins

Les repertoires de bonus (featurette, featurettes, feat) sont ignores avec
tout leur contenu pour ne pas ingerer les bonus comme des films.
"""

from dataclasses import dataclass
from pathlib import PurePosixPath
from typing import AsyncIterator, Optional

from loguru import logger

from cinescan.adapters.parsing import MovieFilenameParser
from cinescan.core.errors import CineScanError, ParseError, ShareListingError
from cinescan.core.ports.remote_share import IRemoteShare
from cinescan.core.value_objects import MovieCandidate
from cinescan.utils.constants import (
    FEATURETTE_DIRECTORIES,
    SPECIAL_DIRECTORIES,
    VIDEO_EXTENSIONS,
)
from cinescan.utils.helpers import join_remote


@dataclass(frozen=True)
class WalkResult:
    """
    Element produit par le parcours.

    Exactement un des deux champs candidate / error est renseigne.

    Attributs:
        path: Chemin relatif du fichier (ou du repertoire illisible)
        candidate: Candidat construit depuis le nom de fichier
        error: Erreur de parsing ou de listage
    """

    path: str
    candidate: Optional[MovieCandidate] = None
    error: Optional[CineScanError] = None

    @property
    def ok(self) -> bool:
        return self.candidate is not None


def is_video_file(file_name: str) -> bool:
    """Verifie l'extension d'un fichier (insensible a la casse)."""
    return PurePosixPath(file_name).suffix.lower() in VIDEO_EXTENSIONS


def is_featurette_directory(directory_name: str) -> bool:
    """Verifie si un repertoire contient des bonus a ignorer."""
    return directory_name.lower() in FEATURETTE_DIRECTORIES


class DirectoryWalker:
    """
    Parcours en profondeur d'un partage, un seul passage par execution.

    Le parcours reprend toujours depuis la racine: il n'est pas possible de
    le reprendre en cours de route.
    """

    def __init__(self, share: IRemoteShare, filename_parser: MovieFilenameParser) -> None:
        """
        Args:
            share: Partage a parcourir (deja connecte)
            filename_parser: Parser des noms de fichiers video
        """
        self._share = share
        self._filename_parser = filename_parser

    async def walk(self, root: str = "") -> AsyncIterator[WalkResult]:
        """
        Parcourt l'arborescence depuis root.

        Args:
            root: Repertoire de depart, relatif a la racine du partage

        Yields:
            WalkResult pour chaque fichier video, ou pour chaque
            sous-repertoire illisible

        Raises:
            ShareListingError: Si la racine elle-meme est illisible
        """
        pending: list[str] = [root]

        while pending:
            directory = pending.pop()
            try:
                entries = await self._share.list_entries(directory)
            except ShareListingError as e:
                if directory == root:
                    raise
                logger.error("Repertoire illisible", path=directory, error=str(e))
                yield WalkResult(path=directory, error=e)
                continue

            subdirectories: list[str] = []
            for entry in entries:
                if entry.is_directory:
                    if entry.name in SPECIAL_DIRECTORIES:
                        continue
                    sub_path = join_remote(directory, entry.name)
                    if is_featurette_directory(entry.name):
                        logger.debug("Repertoire de bonus ignore", path=sub_path)
                        continue
                    subdirectories.append(sub_path)
                elif is_video_file(entry.name):
                    yield self._build_result(join_remote(directory, entry.name))

            # Ordre de listage conserve: le premier sous-repertoire est depile en premier
            pending.extend(reversed(subdirectories))

    def _build_result(self, file_path: str) -> WalkResult:
        """Construit le candidat d'un fichier video ou capture l'erreur de parsing."""
        try:
            candidate = self._filename_parser.parse(file_path)
        except ParseError as e:
            logger.warning("Nom de fichier inexploitable", path=file_path, error=str(e))
            return WalkResult(path=file_path, error=e)

        logger.debug("Film trouve", path=candidate.path)
        return WalkResult(path=file_path, candidate=candidate)
