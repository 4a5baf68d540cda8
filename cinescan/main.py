"""
Point d'entrée CLI de CineScan.

Configure le logging et monte les commandes CLI.
"""

from typing import Annotated

import typer
from loguru import logger

from . import __version__
from .adapters.cli.commands import ingest, init_db_command, scan
from .config import Settings
from .logging_config import configure_logging

app = typer.Typer(
    name="cinescan",
    help="Ingestion d'une vidéothèque distante avec les métadonnées TMDB",
)


def _configure_logging(settings: Settings, log_level: str) -> None:
    configure_logging(
        log_level=log_level,
        log_file=settings.log_file,
        rotation_size=settings.log_rotation_size,
        retention_count=settings.log_retention_count,
    )


@app.callback()
def main_callback(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Logs console au niveau DEBUG"),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option("--quiet", "-q", help="Mode silencieux (erreurs uniquement)"),
    ] = False,
) -> None:
    """CineScan - Ingestion de vidéothèque."""
    settings = Settings()
    if quiet:
        _configure_logging(settings, "ERROR")
    elif verbose:
        _configure_logging(settings, "DEBUG")
    else:
        _configure_logging(settings, settings.log_level)


# Monter les commandes depuis commands.py
app.command()(ingest)
app.command()(scan)
app.command(name="init-db")(init_db_command)


@app.command()
def info() -> None:
    """Affiche la configuration actuelle."""
    config = Settings()
    logger.info("Configuration CineScan")
    if config.uses_local_share:
        typer.echo(f"Vidéothèque : {config.local_root} (locale)")
    else:
        typer.echo(f"Partage SMB : {config.share_address or 'non configuré'}")
    typer.echo(f"Base de données : {config.database_url}")
    typer.echo(f"Visuels : {config.assets_dir / 'images'}")
    typer.echo(f"Cache API : {config.cache_dir}")
    typer.echo(f"API TMDB : {'activée' if config.tmdb_enabled else 'désactivée'} ({config.tmdb_language})")
    typer.echo(f"Workers : {config.movie_workers} films, {config.image_workers} images")
    typer.echo(f"Niveau de log : {config.log_level}")


@app.command()
def version() -> None:
    """Affiche les informations de version."""
    typer.echo(f"CineScan v{__version__}")


def main() -> None:
    """Point d'entrée de l'application."""
    app()


if __name__ == "__main__":
    main()
