"""
Tests unitaires pour Settings (pydantic-settings).
"""

from pathlib import Path

import pytest
from pydantic import ValidationError

from cinescan.config import Settings
from cinescan.utils.constants import DEFAULT_IMAGE_WORKERS, DEFAULT_MOVIE_WORKERS


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Isole les tests des variables CINESCAN_ et du fichier .env du poste."""
    monkeypatch.chdir(tmp_path)
    for name in (
        "SHARE_ADDRESS",
        "SHARE_USERNAME",
        "SHARE_PASSWORD",
        "LOCAL_ROOT",
        "TMDB_API_KEY",
        "MOVIE_WORKERS",
        "IMAGE_WORKERS",
    ):
        monkeypatch.delenv(f"CINESCAN_{name}", raising=False)


class TestDefaults:
    def test_default_values(self) -> None:
        settings = Settings(_env_file=None)

        assert settings.database_url == "sqlite:///movie_db.db"
        assert settings.tmdb_language == "en-US"
        assert settings.movie_workers == DEFAULT_MOVIE_WORKERS == 10
        assert settings.image_workers == DEFAULT_IMAGE_WORKERS == 20
        assert settings.queue_size == 20
        assert not settings.tmdb_enabled
        assert not settings.uses_local_share


class TestEnvironment:
    def test_values_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CINESCAN_SHARE_ADDRESS", r"\\nas\videos")
        monkeypatch.setenv("CINESCAN_TMDB_API_KEY", "abc123")
        monkeypatch.setenv("CINESCAN_MOVIE_WORKERS", "4")

        settings = Settings(_env_file=None)

        assert settings.share_address == r"\\nas\videos"
        assert settings.tmdb_enabled
        assert settings.movie_workers == 4

    def test_env_file_is_read(self, tmp_path: Path) -> None:
        env_file = tmp_path / "custom.env"
        env_file.write_text("CINESCAN_IMAGE_WORKERS=5\nCINESCAN_TMDB_LANGUAGE=fr-FR\n")

        settings = Settings(_env_file=env_file)

        assert settings.image_workers == 5
        assert settings.tmdb_language == "fr-FR"

    @pytest.mark.parametrize("name", ["CINESCAN_MOVIE_WORKERS", "CINESCAN_IMAGE_WORKERS"])
    def test_workers_must_be_positive(self, monkeypatch: pytest.MonkeyPatch, name: str) -> None:
        monkeypatch.setenv(name, "0")

        with pytest.raises(ValidationError):
            Settings(_env_file=None)


class TestPaths:
    def test_home_is_expanded(self) -> None:
        settings = Settings(_env_file=None, local_root="~/films", cache_dir="~/.cache/cinescan")

        assert settings.local_root == Path.home() / "films"
        assert settings.cache_dir == Path.home() / ".cache" / "cinescan"
        assert settings.uses_local_share

    def test_empty_local_root_means_smb(self) -> None:
        settings = Settings(_env_file=None, local_root="")

        assert settings.local_root is None
        assert not settings.uses_local_share
