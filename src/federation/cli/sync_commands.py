"""Bulk synchronization CLI commands."""

from datetime import datetime

import typer
from rich.markup import escape

from src.federation.core.exceptions import RealmNotFoundError
from src.federation.core.models import SyncResult

from .utils import console, get_db_service, get_provider_factory

sync_app = typer.Typer(help="Import the external registry into a realm")


def _report(realm: str, result: SyncResult) -> None:
    if not result.ok:
        console.print(f"[red]❌ Synchronization of realm '{realm}' {escape(str(result))}[/red]")
        raise typer.Exit(code=1)
    console.print(
        f"[green]✅ Synchronized realm '{realm}': {result.added} added, "
        f"{result.existing} already present[/green]"
    )


@sync_app.command("full")
def sync(realm: str = typer.Argument(..., help="Realm id or name")) -> None:
    """Provision every registry entry in one transaction."""
    factory = get_provider_factory(get_db_service())
    try:
        result = factory.sync(realm)
    except RealmNotFoundError as e:
        console.print(f"[red]❌ {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e
    _report(realm, result)


@sync_app.command("since")
def sync_since(
    realm: str = typer.Argument(..., help="Realm id or name"),
    since: datetime = typer.Option(None, "--since", help="Last sync time (ignored: always full)"),
) -> None:
    """Changed-since synchronization; performs a full run."""
    factory = get_provider_factory(get_db_service())
    try:
        result = factory.sync_since(since, realm)
    except RealmNotFoundError as e:
        console.print(f"[red]❌ {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e
    _report(realm, result)
