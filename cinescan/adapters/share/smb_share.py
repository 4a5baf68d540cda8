"""
Adaptateur SMB pour le partage distant.

Implementation de IRemoteShare basee sur smbclient (smbprotocol). Les appels
smbclient etant bloquants, ils sont executes dans un thread pour ne pas
bloquer la boucle asyncio.

Usage:
    share = SMBShare(r"\\\\nas\\videos\\films", "user", "secret")
    await share.connect()
    entries = await share.list_entries("Alien (1979)")
    await share.close()
"""

import asyncio

import smbclient
from loguru import logger
from smbprotocol.exceptions import SMBAuthenticationError, SMBException

from cinescan.core.errors import ShareAuthError, ShareConnectionError, ShareListingError
from cinescan.core.ports.remote_share import IRemoteShare, RemoteEntry


def parse_unc_address(address: str) -> tuple[str, str]:
    """
    Decoupe une adresse de partage en (serveur, chemin UNC de base).

    Accepte les formes "\\\\serveur\\partage\\dossier" et "//serveur/partage/dossier".

    Raises:
        ShareConnectionError: Si le serveur ou le nom du partage est absent
    """
    parts = [p for p in address.replace("\\", "/").split("/") if p]
    if len(parts) < 2:
        raise ShareConnectionError(f"Adresse de partage invalide: {address!r}")
    server = parts[0]
    base = "\\\\" + "\\".join(parts)
    return server, base


class SMBShare(IRemoteShare):
    """
    Partage SMB authentifie.

    Attributes:
        server: Nom ou adresse du serveur SMB
        base_path: Chemin UNC de la racine de la videotheque
    """

    def __init__(
        self,
        address: str,
        username: str,
        password: str,
        port: int = 445,
        connection_timeout: int = 60,
    ) -> None:
        self.server, self.base_path = parse_unc_address(address)
        self._username = username
        self._password = password
        self._port = port
        self._connection_timeout = connection_timeout
        self._connected = False

    def _unc(self, relative_path: str) -> str:
        """Construit le chemin UNC complet d'un chemin relatif."""
        relative = relative_path.strip("/").replace("/", "\\")
        if not relative:
            return self.base_path
        return f"{self.base_path}\\{relative}"

    async def connect(self) -> None:
        """
        Ouvre la session SMB et verifie l'acces a la racine.

        Raises:
            ShareAuthError: Identifiants refuses
            ShareConnectionError: Serveur injoignable ou partage inaccessible
        """
        try:
            await asyncio.to_thread(
                smbclient.register_session,
                self.server,
                username=self._username,
                password=self._password,
                port=self._port,
                connection_timeout=self._connection_timeout,
            )
            await asyncio.to_thread(smbclient.listdir, self.base_path)
        except SMBAuthenticationError as e:
            raise ShareAuthError(f"Authentification refusee par {self.server}") from e
        except (SMBException, OSError, ValueError) as e:
            raise ShareConnectionError(
                f"Connexion impossible a {self.base_path}: {e}"
            ) from e

        self._connected = True
        logger.info("Connecte au partage SMB", server=self.server, path=self.base_path)

    async def list_entries(self, relative_path: str) -> list[RemoteEntry]:
        """Liste un repertoire du partage (non recursif)."""
        unc = self._unc(relative_path)
        try:
            return await asyncio.to_thread(self._scan, unc)
        except (SMBException, OSError) as e:
            raise ShareListingError(relative_path, str(e)) from e

    @staticmethod
    def _scan(unc: str) -> list[RemoteEntry]:
        return [
            RemoteEntry(name=entry.name, is_directory=entry.is_dir())
            for entry in smbclient.scandir(unc)
        ]

    async def close(self) -> None:
        """Ferme la session SMB si elle a ete ouverte."""
        if not self._connected:
            return
        try:
            await asyncio.to_thread(smbclient.delete_session, self.server, port=self._port)
        except (SMBException, OSError) as e:
            logger.warning("Fermeture de session SMB en echec", server=self.server, error=str(e))
        self._connected = False
