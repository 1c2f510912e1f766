"""Core services exports."""

from .credentials.validator import CredentialValidator
from .database.db_session import DbSessionService
from .identity.resolver import IdentityResolver
from .provider import RegistryFederationProvider, RegistryProviderFactory
from .provisioning.engine import ProvisioningEngine
from .registry.external_registry import ExternalRegistry
from .sync.synchronizer import BulkSynchronizer

__all__ = [
    "BulkSynchronizer",
    "CredentialValidator",
    "DbSessionService",
    "ExternalRegistry",
    "IdentityResolver",
    "ProvisioningEngine",
    "RegistryFederationProvider",
    "RegistryProviderFactory",
]
