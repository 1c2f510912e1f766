"""Main CLI application module."""

import typer

from src.federation.api.utils.app_startup import configure_logging
from src.federation.runtime.context import get_config

from .account_commands import accounts_app
from .realm_commands import realm_app, role_app
from .sync_commands import sync_app
from .utils import console, get_db_service

app = typer.Typer(
    help="Registry federation admin tool",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

app.add_typer(realm_app, name="realm")
app.add_typer(role_app, name="role")
app.add_typer(sync_app, name="sync")
app.add_typer(accounts_app, name="accounts")


@app.callback()
def _setup() -> None:
    configure_logging()


@app.command("serve")
def serve(
    host: str = typer.Option(None, "--host", help="Bind address (default from config)"),
    port: int = typer.Option(None, "--port", help="Port (default from config)"),
    reload: bool = typer.Option(False, "--reload", help="Reload on code changes"),
) -> None:
    """Run the HTTP service."""
    import uvicorn

    app_config = get_config().app
    uvicorn.run(
        "src.federation.api.http.app:app",
        host=host or app_config.host,
        port=port or app_config.port,
        reload=reload,
    )


@app.command("init-db")
def init_db() -> None:
    """Create the database tables."""
    get_db_service()
    console.print("[green]✅ Database initialized[/green]")


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
