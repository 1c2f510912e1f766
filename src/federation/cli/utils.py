"""Shared helpers for CLI commands."""

from rich.console import Console

from src.federation.core.services import DbSessionService, RegistryProviderFactory
from src.federation.core.services.database.db_manage import create_all

console = Console()


def get_db_service() -> DbSessionService:
    """Database service built from the active configuration, tables ensured."""
    db_service = DbSessionService()
    create_all(db_service)
    return db_service


def get_provider_factory(db_service: DbSessionService) -> RegistryProviderFactory:
    factory = RegistryProviderFactory(db_service)
    factory.init()
    return factory
