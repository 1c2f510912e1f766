"""Realm and role catalog CLI commands."""

import typer
from rich.table import Table
from sqlalchemy.exc import IntegrityError

from src.federation.entities.realm import Realm, RealmRepository
from src.federation.entities.role import Role, RoleRepository

from .utils import console, get_db_service

realm_app = typer.Typer(help="Manage realms")
role_app = typer.Typer(help="Manage realm roles")


@realm_app.command("create")
def create_realm(name: str = typer.Argument(..., help="Realm name")) -> None:
    """Create a realm."""
    db_service = get_db_service()
    try:
        with db_service.session_scope() as session:
            realm = RealmRepository(session).create(Realm(name=name))
    except IntegrityError as e:
        console.print(f"[red]❌ Realm '{name}' already exists[/red]")
        raise typer.Exit(code=1) from e

    console.print(f"[green]✅ Created realm '{realm.name}' ({realm.id})[/green]")


@realm_app.command("list")
def list_realms() -> None:
    """List all realms."""
    db_service = get_db_service()
    with db_service.session_scope() as session:
        realms = RealmRepository(session).list_all()

    if not realms:
        console.print("[yellow]No realms found[/yellow]")
        return

    table = Table(title="Realms")
    table.add_column("ID", style="cyan")
    table.add_column("Name", style="green")
    for realm in realms:
        table.add_row(realm.id, realm.name)
    console.print(table)


@role_app.command("create")
def create_role(
    realm: str = typer.Argument(..., help="Realm id or name"),
    name: str = typer.Argument(..., help="Role name"),
    description: str = typer.Option(None, "--description", "-d", help="Role description"),
) -> None:
    """Add a role to a realm's catalog."""
    db_service = get_db_service()
    with db_service.session_scope() as session:
        resolved = RealmRepository(session).resolve(realm)
    if resolved is None:
        console.print(f"[red]❌ Realm '{realm}' not found[/red]")
        raise typer.Exit(code=1)

    try:
        with db_service.session_scope() as session:
            RoleRepository(session).create(
                Role(realm_id=resolved.id, name=name, description=description)
            )
    except IntegrityError as e:
        console.print(f"[red]❌ Role '{name}' already exists in realm '{realm}'[/red]")
        raise typer.Exit(code=1) from e

    console.print(f"[green]✅ Created role '{name}' in realm '{realm}'[/green]")
