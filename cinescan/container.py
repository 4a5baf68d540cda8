"""
Container d'injection de dependances via dependency-injector.

Fournit une gestion centralisee des dependances pour la CLI: configuration,
base de donnees, client TMDB, partage et services du pipeline.
"""

from dependency_injector import containers, providers

from .adapters.api.cache import TMDBCache
from .adapters.api.tmdb_client import TMDBClient
from .adapters.parsing import MovieFilenameParser
from .adapters.share import LocalShare, SMBShare
from .config import Settings
from .core.errors import ShareConnectionError
from .core.ports.remote_share import IRemoteShare
from .infrastructure.persistence.database import create_db_engine, init_db
from .infrastructure.persistence.repositories import SQLModelMovieStore
from .services.asset_fetcher import AssetFetcher
from .services.directory_walker import DirectoryWalker
from .services.metadata_enricher import MetadataEnricher
from .services.pipeline import PipelineOrchestrator


def build_share(settings: Settings) -> IRemoteShare:
    """
    Construit le partage a parcourir selon la configuration.

    Un local_root defini l'emporte sur le partage SMB.

    Raises:
        ShareConnectionError: Ni repertoire local ni adresse de partage
    """
    if settings.local_root is not None:
        return LocalShare(settings.local_root)
    if not settings.share_address:
        raise ShareConnectionError("Aucun partage configure (CINESCAN_SHARE_ADDRESS)")
    return SMBShare(
        settings.share_address,
        settings.share_username or "",
        settings.share_password or "",
    )


class Container(containers.DeclarativeContainer):
    """Container DI de l'application.

    Utilisation :
        container = Container()
        container.database.init()  # Cree le schema une fois
        orchestrator = container.pipeline()

    La CLI remplace la configuration (valeurs saisies interactivement) via
    container.config.override(providers.Object(settings)).
    """

    # Configuration - singleton charge une seule fois
    config = providers.Singleton(Settings)

    # Database - engine partage, Resource pour la creation unique du schema
    engine = providers.Singleton(
        create_db_engine,
        database_url=config.provided.database_url,
    )
    database = providers.Resource(init_db, engine=engine)

    movie_store = providers.Singleton(SQLModelMovieStore, engine=engine)

    # Cache API - Singleton partage par le client
    tmdb_cache = providers.Singleton(
        TMDBCache,
        cache_dir=config.provided.cache_dir,
    )

    tmdb_client = providers.Singleton(
        TMDBClient,
        api_key=config.provided.tmdb_api_key,
        cache=tmdb_cache,
        language=config.provided.tmdb_language,
    )

    # Partage - Singleton: une seule session par run
    share = providers.Singleton(build_share, settings=config)

    filename_parser = providers.Singleton(MovieFilenameParser)

    # Services
    directory_walker = providers.Factory(
        DirectoryWalker,
        share=share,
        filename_parser=filename_parser,
    )

    metadata_enricher = providers.Factory(
        MetadataEnricher,
        provider=tmdb_client,
    )

    asset_fetcher = providers.Factory(
        AssetFetcher,
        provider=tmdb_client,
        assets_root=config.provided.assets_dir,
        image_workers=config.provided.image_workers,
    )

    pipeline = providers.Factory(
        PipelineOrchestrator,
        walker=directory_walker,
        enricher=metadata_enricher,
        asset_fetcher=asset_fetcher,
        store=movie_store,
        movie_workers=config.provided.movie_workers,
        queue_size=config.provided.queue_size,
    )
