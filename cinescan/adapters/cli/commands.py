"""
Commandes CLI de CineScan.

- ingest : pipeline complet (parcours, enrichissement, visuels, persistance)
- scan : parcours seul, liste les films trouves et les noms inexploitables
- init-db : creation du schema
"""

import asyncio
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.progress import (
    BarColumn,
    Progress,
    SpinnerColumn,
    TaskProgressColumn,
    TextColumn,
)
from rich.markup import escape
from rich.table import Table

from cinescan.adapters.cli.helpers import (
    console,
    resolve_settings,
    suppress_loguru,
    with_container,
)
from cinescan.core.errors import ShareConnectionError, ShareListingError
from cinescan.services.pipeline import CandidateOutcome, CandidateState, PipelineReport

LocalOption = Annotated[
    Optional[Path],
    typer.Option("--local", help="Repertoire local a parcourir a la place du partage SMB"),
]
RootOption = Annotated[
    str,
    typer.Option("--root", help="Sous-repertoire de depart, relatif a la racine du partage"),
]


# ============================================================================
# Commande ingest
# ============================================================================


def ingest(
    local: LocalOption = None,
    workers: Annotated[
        Optional[int],
        typer.Option("--workers", "-w", min=1, help="Films traites simultanement"),
    ] = None,
    root: RootOption = "",
) -> None:
    """Ingere la videotheque: identification TMDB, visuels et base de donnees."""
    settings = resolve_settings(local=local, workers=workers, require_tmdb=True)
    asyncio.run(_ingest_async(settings, root))


@with_container()
async def _ingest_async(container, root: str) -> None:
    """Implementation async de l'ingestion."""
    share = await _connect_share(container)
    tmdb_client = container.tmdb_client()

    try:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            TaskProgressColumn(),
            console=console,
        ) as progress:
            task = progress.add_task("[cyan]Ingestion en cours...", total=None)

            def on_outcome(outcome: CandidateOutcome) -> None:
                progress.update(task, advance=1, description=f"[cyan]{escape(outcome.path)}")

            orchestrator = container.pipeline(on_outcome=on_outcome)
            with suppress_loguru():
                report = await orchestrator.run(root)

            progress.update(
                task,
                total=report.discovered,
                completed=report.discovered,
                description="[green]Termine",
            )
    except ShareListingError as e:
        console.print(f"[red]Erreur:[/red] {escape(str(e))}")
        raise typer.Exit(code=1) from e
    finally:
        await share.close()
        await tmdb_client.close()
        container.tmdb_cache().close()

    _display_report(report)


async def _connect_share(container):
    """Connecte le partage configure, ou termine la commande (code 1)."""
    try:
        share = container.share()
        await share.connect()
    except ShareConnectionError as e:
        console.print(f"[red]Erreur:[/red] {escape(str(e))}")
        raise typer.Exit(code=1) from e
    return share


def _display_report(report: PipelineReport) -> None:
    """Affiche le resume final et le detail des echecs."""
    table = Table(title="Resume de l'ingestion")
    table.add_column("Statut")
    table.add_column("Films", justify="right")
    table.add_row("[green]Persistes[/green]", str(report.persisted))
    table.add_row("[yellow]Non trouves sur TMDB[/yellow]", str(report.not_found))
    table.add_row("[red]Echecs[/red]", str(report.failed))
    table.add_row("[red]Erreurs de parcours[/red]", str(len(report.walk_errors)))
    console.print()
    console.print(table)

    for outcome in report.outcomes:
        if outcome.state is CandidateState.FAILED:
            console.print(
                f"  [red]Echec:[/red] {escape(outcome.path)}: {escape(str(outcome.error))}"
            )
    for walk_error in report.walk_errors:
        console.print(
            f"  [yellow]Ignore:[/yellow] {escape(walk_error.path)}: {escape(str(walk_error.error))}"
        )


# ============================================================================
# Commande scan
# ============================================================================


def scan(
    local: LocalOption = None,
    root: RootOption = "",
) -> None:
    """Parcourt la videotheque et liste les films trouves, sans rien ecrire."""
    settings = resolve_settings(local=local, require_tmdb=False)
    asyncio.run(_scan_async(settings, root))


@with_container(requires_db=False)
async def _scan_async(container, root: str) -> None:
    """Implementation async du parcours."""
    share = await _connect_share(container)
    walker = container.directory_walker()

    found = 0
    ignored = 0
    try:
        with suppress_loguru():
            async for result in walker.walk(root):
                if result.ok:
                    candidate = result.candidate
                    found += 1
                    console.print(
                        f"Found movie: [bold]{escape(candidate.title)}[/bold] ({candidate.year})"
                    )
                    if candidate.extra_tag:
                        console.print(f"  Tag: {escape(candidate.extra_tag)}")
                    console.print(f"  [dim]{escape(candidate.path)}[/dim]")
                else:
                    ignored += 1
                    console.print(
                        f"[yellow]Ignore:[/yellow] {escape(result.path)}: {escape(str(result.error))}"
                    )
    except ShareListingError as e:
        console.print(f"[red]Erreur:[/red] {escape(str(e))}")
        raise typer.Exit(code=1) from e
    finally:
        await share.close()

    console.print(f"\nTotal: [green]{found}[/green] film(s), [yellow]{ignored}[/yellow] ignore(s)")


# ============================================================================
# Commande init-db
# ============================================================================


def init_db_command() -> None:
    """Cree les tables de la base de donnees si necessaire."""
    settings = resolve_settings(require_share=False, require_tmdb=False)
    asyncio.run(_init_db_async(settings))


@with_container()
async def _init_db_async(container) -> None:
    """Affiche le contenu de la base apres creation du schema."""
    counts = container.movie_store().count_rows()
    console.print(f"[green]Base initialisee:[/green] {container.config().database_url}")
    for table_name, count in counts.items():
        console.print(f"  {table_name}: {count} ligne(s)")
