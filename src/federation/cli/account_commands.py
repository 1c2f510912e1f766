"""Local account CLI commands."""

import typer
from rich.markup import escape
from rich.table import Table

from src.federation.core.exceptions import ProvisioningError
from src.federation.core.models import PASSWORD
from src.federation.entities.account import LocalAccountRepository
from src.federation.entities.realm import RealmRepository

from .utils import console, get_db_service, get_provider_factory

accounts_app = typer.Typer(help="Inspect local accounts and test logins")


@accounts_app.command("list")
def list_accounts(realm: str = typer.Argument(..., help="Realm id or name")) -> None:
    """List local accounts of a realm."""
    db_service = get_db_service()
    with db_service.session_scope() as session:
        resolved = RealmRepository(session).resolve(realm)
        accounts = (
            LocalAccountRepository(session).list_for_realm(resolved.id) if resolved else None
        )

    if accounts is None:
        console.print(f"[red]❌ Realm '{realm}' not found[/red]")
        raise typer.Exit(code=1)

    if not accounts:
        console.print(f"[yellow]No accounts found in realm '{realm}'[/yellow]")
        return

    table = Table(title=f"Accounts in realm '{realm}'")
    table.add_column("Username", style="green")
    table.add_column("Enabled", style="yellow")
    table.add_column("Roles", style="magenta")
    table.add_column("Attributes", style="blue")
    table.add_column("Credentials", style="cyan")
    for account in accounts:
        table.add_row(
            account.username,
            "✅" if account.enabled else "❌",
            ", ".join(sorted(account.roles)),
            ", ".join(f"{k}={v}" for k, v in sorted(account.attributes.items())),
            str(len(account.credentials)),
        )
    console.print(table)
    console.print(f"\n[green]Found {len(accounts)} accounts[/green]")


@accounts_app.command("validate")
def validate(
    realm: str = typer.Argument(..., help="Realm id or name"),
    username: str = typer.Argument(..., help="External id to log in as"),
    password: str = typer.Option(..., "--password", "-p", prompt=True, hide_input=True),
) -> None:
    """Check a password against the registry, provisioning on success."""
    db_service = get_db_service()
    with db_service.session_scope() as session:
        resolved = RealmRepository(session).resolve(realm)
    if resolved is None:
        console.print(f"[red]❌ Realm '{realm}' not found[/red]")
        raise typer.Exit(code=1)

    provider = get_provider_factory(db_service).create()
    user = provider.get_user_by_username(username)
    if user is None:
        console.print(f"[red]❌ '{username}' is not in the registry[/red]")
        raise typer.Exit(code=1)

    try:
        valid = provider.is_valid(resolved, user, PASSWORD, password)
    except ProvisioningError as e:
        console.print(f"[red]❌ {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e
    finally:
        provider.close()

    if not valid:
        console.print(f"[red]❌ Invalid credentials for '{username}'[/red]")
        raise typer.Exit(code=1)
    console.print(f"[green]✅ '{username}' authenticated and provisioned[/green]")
