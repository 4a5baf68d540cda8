"""
Configuration de la base de donnees SQLite pour CineScan.

Ce module fournit :
- Creation d'engine SQLite utilisable depuis des threads de travail
- Fonction d'initialisation des tables

La base de donnees est configuree via CINESCAN_DATABASE_URL
(defaut: sqlite:///movie_db.db).
"""

from pathlib import Path
from typing import Optional

from loguru import logger
from sqlalchemy import Engine
from sqlmodel import SQLModel, create_engine

# Engine global - initialise lors du premier appel a get_engine()
_engine: Optional[Engine] = None


def create_db_engine(database_url: str) -> Engine:
    """
    Cree un engine pour l'URL donnee.

    Le repertoire parent d'un fichier SQLite est cree si necessaire.
    check_same_thread est desactive: les transactions s'executent dans un
    thread de travail (asyncio.to_thread).
    """
    if database_url.startswith("sqlite:///") and not database_url.startswith("sqlite:///:memory:"):
        db_path = Path(database_url.replace("sqlite:///", "", 1))
        db_path.parent.mkdir(exist_ok=True, parents=True)

    connect_args = {"check_same_thread": False} if database_url.startswith("sqlite") else {}
    return create_engine(database_url, echo=False, connect_args=connect_args)


def get_engine() -> Engine:
    """
    Retourne l'engine de l'application, en le creant si necessaire.

    Utilise la configuration de l'application pour l'URL de la BDD.
    """
    global _engine
    if _engine is None:
        from cinescan.config import Settings

        _engine = create_db_engine(Settings().database_url)
    return _engine


def init_db(engine: Optional[Engine] = None) -> Engine:
    """
    Cree les tables si elles n'existent pas deja.

    Args:
        engine: Engine cible (engine de l'application par defaut)

    Returns:
        L'engine initialise
    """
    # Import des modeles pour enregistrer leurs metadonnees
    from cinescan.infrastructure.persistence import models  # noqa: F401

    engine = engine or get_engine()
    SQLModel.metadata.create_all(engine)
    logger.debug("Schema initialise", url=str(engine.url))
    return engine
