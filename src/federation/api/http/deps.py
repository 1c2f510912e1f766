"""FastAPI dependency implementations."""

from __future__ import annotations

from fastapi import Depends, HTTPException, Request

from src.federation.api.http.app_data import ApplicationDependencies
from src.federation.core.services import (
    BulkSynchronizer,
    DbSessionService,
    RegistryFederationProvider,
    RegistryProviderFactory,
)
from src.federation.entities.realm import Realm, RealmRepository


def get_app_dependencies(request: Request) -> ApplicationDependencies:
    return request.app.state.app_dependencies


def get_database_service(
    deps: ApplicationDependencies = Depends(get_app_dependencies),
) -> DbSessionService:
    """Get the database session service instance."""
    return deps.database_service


def get_provider_factory(
    deps: ApplicationDependencies = Depends(get_app_dependencies),
) -> RegistryProviderFactory:
    """Get the registry provider factory instance."""
    return deps.provider_factory


def get_provider(factory: RegistryProviderFactory = Depends(get_provider_factory)):
    """Yield a provider scoped to the current request."""
    provider: RegistryFederationProvider = factory.create()
    try:
        yield provider
    finally:
        provider.close()


def get_synchronizer(
    factory: RegistryProviderFactory = Depends(get_provider_factory),
) -> BulkSynchronizer:
    return factory.synchronizer()


def get_realm(
    realm: str, db_service: DbSessionService = Depends(get_database_service)
) -> Realm:
    """Resolve the ``realm`` path parameter by id or name, or answer 404."""
    with db_service.session_scope() as session:
        resolved = RealmRepository(session).resolve(realm)
    if resolved is None:
        raise HTTPException(status_code=404, detail=f"Realm '{realm}' not found")
    return resolved
