"""
Configuration du logging de l'application via loguru.

Fournit un logging structuré avec :
- Sortie console : lisible par l'humain, colorée, pour la surveillance en temps réel
- Sortie fichier : sérialisée en JSON, avec rotation, pour l'analyse d'un run

Les modules passent le contexte en arguments nommés (path=..., provider_id=...),
conservé dans le champ "extra" des lignes JSON.

La sortie console peut être suspendue seule (pause_console_logging) pendant
qu'une barre de progression Rich occupe le terminal; le fichier JSON continue
de recevoir chaque ligne.
"""

import sys
from pathlib import Path
from typing import Optional

from loguru import logger

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<level>{message}</level> {extra}"
)

# Handler console courant: id loguru (None si suspendu ou non configuré), niveau, suspension
_console: dict = {"id": None, "level": "INFO", "paused": False}


def _add_console_handler(log_level: str) -> int:
    handler_id = logger.add(
        sys.stderr,
        level=log_level,
        format=CONSOLE_FORMAT,
        colorize=True,
    )
    _console["id"] = handler_id
    _console["level"] = log_level
    return handler_id


def configure_logging(
    log_level: str = "INFO",
    log_file: Path = Path("logs/cinescan.log"),
    rotation_size: str = "10 MB",
    retention_count: int = 5,
) -> int:
    """Configure le logging de l'application.

    Args :
        log_level : Niveau de log minimum pour la sortie console (DEBUG, INFO, WARNING, ERROR)
        log_file : Chemin vers le fichier de log
        rotation_size : Taille maximale du fichier avant rotation (ex: "10 MB", "1 GB")
        retention_count : Nombre de fichiers rotatifs à conserver

    Returns :
        L'id loguru du handler console
    """
    logger.remove()
    _console["paused"] = False

    # Handler console - lisible par l'humain, contexte structuré en fin de ligne
    console_id = _add_console_handler(log_level.upper())

    # Handler fichier - JSON pour l'analyse
    log_file.parent.mkdir(parents=True, exist_ok=True)
    logger.add(
        log_file,
        level="DEBUG",
        format="{message}",
        serialize=True,
        rotation=rotation_size,
        retention=retention_count,
        compression="zip",
        enqueue=True,  # Thread-safe (transactions en thread de travail)
    )

    logger.debug("Logging configuré", log_file=str(log_file), rotation=rotation_size)
    return console_id


def pause_console_logging() -> Optional[int]:
    """Retire le handler console; retourne son id, ou None s'il n'était pas actif."""
    handler_id = _console["id"]
    if handler_id is None:
        return None
    _console["id"] = None
    try:
        logger.remove(handler_id)
    except ValueError:
        # Déjà retiré par un logger.remove() global: rien à rétablir
        return None
    _console["paused"] = True
    return handler_id


def resume_console_logging() -> Optional[int]:
    """Rétablit le handler console suspendu par pause_console_logging()."""
    if not _console["paused"]:
        return _console["id"]
    _console["paused"] = False
    return _add_console_handler(_console["level"])
