"""
Interfaces ports pour le partage de fichiers distant.

Le partage expose une connexion authentifiée et le listage non récursif
d'un répertoire. Le parcours récursif est assuré par DirectoryWalker.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class RemoteEntry:
    """Entrée d'un répertoire distant (fichier ou sous-répertoire)."""

    name: str
    is_directory: bool


class IRemoteShare(ABC):
    """
    Interface d'accès à un partage de fichiers.

    Les chemins relatifs utilisent "/" comme séparateur, la racine du
    partage est la chaîne vide.
    """

    @abstractmethod
    async def connect(self) -> None:
        """
        Établit la connexion authentifiée au partage.

        Raises :
            ShareAuthError : Identifiants refusés
            ShareConnectionError : Partage injoignable ou adresse invalide
        """
        ...

    @abstractmethod
    async def list_entries(self, relative_path: str) -> list[RemoteEntry]:
        """
        Liste les entrées d'un répertoire.

        Args :
            relative_path : Chemin du répertoire relatif à la racine

        Raises :
            ShareListingError : Répertoire illisible ou inexistant
        """
        ...

    async def close(self) -> None:
        """Libère la connexion (no-op par défaut)."""
        return None
