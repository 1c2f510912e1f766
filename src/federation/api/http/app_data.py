from dataclasses import dataclass

from src.federation.core.services import DbSessionService, RegistryProviderFactory


@dataclass
class ApplicationDependencies:
    database_service: DbSessionService
    provider_factory: RegistryProviderFactory
