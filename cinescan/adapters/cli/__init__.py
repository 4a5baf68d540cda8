"""Interface ligne de commande (Typer + Rich)."""

from cinescan.adapters.cli.commands import ingest, init_db_command, scan

__all__ = [
    "ingest",
    "init_db_command",
    "scan",
]
