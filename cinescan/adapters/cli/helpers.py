"""
Utilitaires partages pour les commandes CLI de CineScan.

Ce module fournit :
- console : instance Rich Console partagee
- suppress_loguru : context manager coupant la sortie console loguru
- with_container : decorateur injectant un container initialise
- resolve_settings : configuration completee par les options et les saisies
"""

from contextlib import contextmanager
from functools import wraps
from pathlib import Path
from typing import Optional

import typer
from dependency_injector import providers
from rich.console import Console
from rich.markup import escape
from sqlalchemy.exc import SQLAlchemyError

from cinescan.config import Settings
from cinescan.container import Container
from cinescan.logging_config import pause_console_logging, resume_console_logging

console = Console()


@contextmanager
def suppress_loguru():
    """
    Context manager pour couper la sortie console loguru pendant l'affichage Rich.

    Seul le handler console est retire: le fichier JSON continue de recevoir
    les lignes structurees du run.

    Usage:
        with suppress_loguru():
            console.print(...)
    """
    pause_console_logging()
    try:
        yield
    finally:
        resume_console_logging()


def with_container(requires_db: bool = True):
    """
    Decorateur qui injecte un container initialise en premier argument.

    La fonction decoree recoit les Settings deja resolus en premier
    argument positionnel; ils remplacent la configuration du container.

    Args:
        requires_db: Si True (defaut), initialise la base de donnees.
            Un echec d'ouverture termine la commande avec le code 1.

    Usage:
        @with_container()
        async def my_command(container, ...):
            config = container.config()

        asyncio.run(my_command(settings, ...))
    """
    def decorator(func):
        @wraps(func)
        async def wrapper(settings: Settings, *args, **kwargs):
            container = Container()
            container.config.override(providers.Object(settings))
            if requires_db:
                try:
                    container.database.init()
                except SQLAlchemyError as e:
                    console.print(
                        f"[red]Erreur:[/red] Base de donnees inaccessible: {escape(str(e))}"
                    )
                    raise typer.Exit(code=1) from e
            return await func(container, *args, **kwargs)
        return wrapper
    return decorator


def resolve_settings(
    local: Optional[Path] = None,
    workers: Optional[int] = None,
    require_share: bool = True,
    require_tmdb: bool = True,
) -> Settings:
    """
    Charge la configuration et demande les valeurs manquantes.

    Args:
        local: Repertoire local remplacant le partage SMB
        workers: Nombre de films traites simultanement
        require_share: Demander l'adresse et les identifiants SMB absents
        require_tmdb: Demander la cle TMDB si elle est absente

    Returns:
        Settings completes
    """
    settings = Settings()
    updates: dict = {}

    if local is not None:
        updates["local_root"] = local.expanduser()
    if workers is not None:
        updates["movie_workers"] = workers

    if require_share and local is None and settings.local_root is None:
        if not settings.share_address:
            updates["share_address"] = typer.prompt("Adresse du partage (\\\\serveur\\partage)")
        if not settings.share_username:
            updates["share_username"] = typer.prompt("Utilisateur")
        if not settings.share_password:
            updates["share_password"] = typer.prompt("Mot de passe", hide_input=True)

    if require_tmdb and not settings.tmdb_enabled:
        updates["tmdb_api_key"] = typer.prompt("Cle API TMDB", hide_input=True)

    return settings.model_copy(update=updates)
