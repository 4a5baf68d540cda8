"""
Configuration de l'application via pydantic-settings.

La configuration est chargée depuis les variables d'environnement avec le préfixe CINESCAN_,
et peut optionnellement être fournie via un fichier .env.

Les paramètres du partage et la clé TMDB sont optionnels : la CLI les demande
interactivement s'ils sont absents.
"""

from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from cinescan.utils.constants import DEFAULT_IMAGE_WORKERS, DEFAULT_MOVIE_WORKERS

# Fichier .env à la racine du projet (parent de cinescan/)
_PROJECT_ROOT = Path(__file__).parent.parent
_ENV_FILE = _PROJECT_ROOT / ".env"


class Settings(BaseSettings):
    """Paramètres de l'application avec support des variables d'environnement.

    Tous les paramètres peuvent être surchargés via des variables d'environnement
    avec le préfixe CINESCAN_.
    Exemple : CINESCAN_MOVIE_WORKERS=4

    Les chemins sont automatiquement étendus (~ -> répertoire home).
    """

    model_config = SettingsConfigDict(
        env_prefix="CINESCAN_",
        env_file=_ENV_FILE if _ENV_FILE.exists() else ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Partage distant (\\serveur\partage\dossier)
    share_address: Optional[str] = Field(default=None)
    share_username: Optional[str] = Field(default=None)
    share_password: Optional[str] = Field(default=None)
    # Répertoire local utilisé à la place du partage SMB s'il est défini
    local_root: Optional[Path] = Field(default=None)

    # TMDB (clé v3 ou jeton v4)
    tmdb_api_key: Optional[str] = Field(default=None)
    tmdb_language: str = Field(default="en-US")

    # Stockage
    database_url: str = Field(default="sqlite:///movie_db.db")
    assets_dir: Path = Field(default=Path("."))
    cache_dir: Path = Field(default=Path(".cache/api"))

    # Concurrence
    movie_workers: int = Field(default=DEFAULT_MOVIE_WORKERS, ge=1)
    image_workers: int = Field(default=DEFAULT_IMAGE_WORKERS, ge=1)
    queue_size: int = Field(default=20, ge=1)

    # Logging (fichier + stderr, rotation 10MB, 5 fichiers de rétention)
    log_level: str = Field(default="INFO")
    log_file: Path = Field(default=Path("logs/cinescan.log"))
    log_rotation_size: str = Field(default="10 MB")
    log_retention_count: int = Field(default=5)

    @field_validator("local_root", "assets_dir", "cache_dir", "log_file", mode="before")
    @classmethod
    def expand_path(cls, v: Optional[str | Path]) -> Optional[Path]:
        """Étend ~ vers le répertoire home dans les chemins."""
        if v is None or v == "":
            return None
        return Path(v).expanduser()

    @property
    def tmdb_enabled(self) -> bool:
        """Vérifie si l'API TMDB est configurée."""
        return bool(self.tmdb_api_key)

    @property
    def uses_local_share(self) -> bool:
        """Vérifie si la vidéothèque est lue depuis un répertoire local."""
        return self.local_root is not None
