"""
Adaptateur pour une videotheque accessible localement.

Implementation de IRemoteShare sur un repertoire local (disque, montage
NFS/CIFS). Sert aussi de partage de reference pour les tests d'integration.
"""

import asyncio
import os
from pathlib import Path

from cinescan.core.errors import ShareConnectionError, ShareListingError
from cinescan.core.ports.remote_share import IRemoteShare, RemoteEntry


class LocalShare(IRemoteShare):
    """Partage adosse a un repertoire du systeme de fichiers local."""

    def __init__(self, root: Path) -> None:
        self.root = Path(root).expanduser()

    async def connect(self) -> None:
        """Verifie que la racine existe et est un repertoire."""
        if not self.root.is_dir():
            raise ShareConnectionError(f"Repertoire introuvable: {self.root}")

    async def list_entries(self, relative_path: str) -> list[RemoteEntry]:
        """Liste un repertoire local (non recursif, liens symboliques non suivis)."""
        directory = self.root / relative_path if relative_path else self.root
        try:
            return await asyncio.to_thread(self._scan, directory)
        except OSError as e:
            raise ShareListingError(relative_path, str(e)) from e

    @staticmethod
    def _scan(directory: Path) -> list[RemoteEntry]:
        with os.scandir(directory) as entries:
            return [
                RemoteEntry(name=entry.name, is_directory=entry.is_dir(follow_symlinks=False))
                for entry in entries
            ]
