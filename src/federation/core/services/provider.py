"""Read-only storage provider backed by the external registry.

``RegistryProviderFactory`` loads the registry once and hands out a fresh
``RegistryFederationProvider`` per request, so lookup state never leaks
between requests.
"""

from datetime import datetime

from loguru import logger

from src.federation.core.models import SyncResult, VirtualUser
from src.federation.core.services.credentials.validator import CredentialValidator
from src.federation.core.services.database.db_session import DbSessionService
from src.federation.core.services.identity.resolver import IdentityResolver
from src.federation.core.services.provisioning.engine import ProvisioningEngine
from src.federation.core.services.registry.external_registry import ExternalRegistry
from src.federation.core.services.sync.synchronizer import BulkSynchronizer
from src.federation.entities.realm import Realm
from src.federation.runtime.config.config_data import FederationConfig
from src.federation.runtime.context import get_config


class RegistryFederationProvider:
    """Lookup and credential operations for a single request."""

    def __init__(
        self,
        registry: ExternalRegistry,
        provisioning: ProvisioningEngine,
        db_service: DbSessionService,
        config: FederationConfig,
    ):
        self._resolver = IdentityResolver(registry, config.provider_id)
        self._validator = CredentialValidator(registry, provisioning, db_service, config)
        self._loaded_users: dict[str, VirtualUser] = {}

    # Lookup

    def get_user_by_username(self, username: str) -> VirtualUser | None:
        return self._resolver.get_user_by_username(username, self._loaded_users)

    def get_user_by_id(self, composite_id: str) -> VirtualUser | None:
        return self._resolver.get_user_by_id(composite_id, self._loaded_users)

    def get_user_by_email(self, email: str) -> None:
        return self._resolver.get_user_by_email(email)

    # Credentials

    def supports_credential_type(self, credential_type: str) -> bool:
        return self._validator.supports_credential_type(credential_type)

    def is_configured_for(self, user: VirtualUser, credential_type: str) -> bool:
        return self._validator.is_configured_for(user, credential_type)

    def is_valid(
        self, realm: Realm, user: VirtualUser, credential_type: str, secret: str
    ) -> bool:
        return self._validator.validate(realm, user, credential_type, secret)

    def update_credential(self, realm: Realm, user: VirtualUser, credential_type: str) -> bool:
        logger.info("updateCredential: user={}, realm={}", user.username, realm.name)
        return False

    def disable_credential_type(
        self, realm: Realm, user: VirtualUser, credential_type: str
    ) -> None:
        logger.info(
            "disableCredentialType: user={}, realm={}, credentialType={}",
            user.username,
            realm.name,
            credential_type,
        )

    def get_disableable_credential_types(
        self, realm: Realm, user: VirtualUser
    ) -> frozenset[str]:
        return frozenset()

    # Registration: the registry is read-only

    def add_user(self, realm: Realm, username: str) -> None:
        return None

    def remove_user(self, realm: Realm, user: VirtualUser) -> bool:
        return False

    def close(self) -> None:
        self._loaded_users.clear()


class RegistryProviderFactory:
    """Owns the loaded registry and builds providers and synchronizers."""

    def __init__(
        self,
        db_service: DbSessionService,
        config: FederationConfig | None = None,
        registry: ExternalRegistry | None = None,
    ):
        self._db_service = db_service
        self._config = config or get_config().federation
        self._registry = registry
        self._provisioning = ProvisioningEngine(self._config)

    @property
    def provider_id(self) -> str:
        return self._config.provider_id

    @property
    def registry(self) -> ExternalRegistry:
        if self._registry is None:
            self.init()
        return self._registry

    def init(self) -> None:
        """Load the registry file named in the configuration, once."""
        if self._registry is None:
            self._registry = ExternalRegistry.from_properties(self._config.registry_path)

    def create(self) -> RegistryFederationProvider:
        return RegistryFederationProvider(
            self.registry, self._provisioning, self._db_service, self._config
        )

    def synchronizer(self) -> BulkSynchronizer:
        return BulkSynchronizer(self.registry, self._provisioning, self._db_service)

    def sync(self, realm_id: str) -> SyncResult:
        return self.synchronizer().sync(realm_id)

    def sync_since(self, last_sync: datetime | None, realm_id: str) -> SyncResult:
        return self.synchronizer().sync_since(last_sync, realm_id)
