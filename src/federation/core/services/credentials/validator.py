"""Password validation against the external registry with JIT provisioning."""

import hmac

from loguru import logger
from sqlalchemy.exc import IntegrityError

from src.federation.core.exceptions import ProvisioningError
from src.federation.core.models import CredentialRecord, VirtualUser
from src.federation.core.services.database.db_session import DbSessionService
from src.federation.core.services.provisioning.engine import ProvisioningEngine
from src.federation.core.services.registry.external_registry import ExternalRegistry
from src.federation.entities.realm import Realm
from src.federation.runtime.config.config_data import FederationConfig
from src.federation.runtime.context import get_config


class CredentialValidator:
    """Checks submitted secrets and promotes matching users to local accounts."""

    def __init__(
        self,
        registry: ExternalRegistry,
        provisioning: ProvisioningEngine,
        db_service: DbSessionService,
        config: FederationConfig | None = None,
    ):
        self._registry = registry
        self._provisioning = provisioning
        self._db_service = db_service
        self._config = config or get_config().federation

    def supports_credential_type(self, credential_type: str) -> bool:
        logger.debug("supportsCredentialType: credentialType={}", credential_type)
        return credential_type == self._config.credential_type

    def is_configured_for(self, user: VirtualUser, credential_type: str) -> bool:
        logger.debug(
            "isConfiguredFor: user={}, credentialType={}", user.username, credential_type
        )
        return (
            self.supports_credential_type(credential_type)
            and self._registry.get_secret(user.username) is not None
        )

    def validate(
        self, realm: Realm, user: VirtualUser, credential_type: str, secret: str
    ) -> bool:
        """Check ``secret`` against the registry entry of ``user``.

        On a match the local account is materialized (or found, if an earlier
        login already created it) before ``True`` is returned. A mismatch
        writes nothing.

        Raises:
            ProvisioningError: The secret matched but the account could not be
                materialized. Nothing was committed.
        """
        logger.info(
            "isValid: user={}, realm={}, credentialType={}",
            user.username,
            realm.name,
            credential_type,
        )

        if not self.supports_credential_type(credential_type):
            return False

        expected = self._registry.get_secret(user.username)
        if expected is None:
            return False

        if not hmac.compare_digest(expected.encode("utf-8"), secret.encode("utf-8")):
            logger.info("isValid: credential rejected for {}", user.username)
            return False

        logger.info("isValid: provisioning local account for {}", user.username)
        credential = CredentialRecord(type=credential_type, value=secret)
        with self._provisioning.lock_for(realm.id, user.username):
            try:
                self._provision(realm, user, credential)
            except ProvisioningError as e:
                if not isinstance(e.__cause__, IntegrityError):
                    raise
                # Another writer committed the account first; the retry finds it.
                logger.warning(
                    "isValid: account {} created concurrently, retrying", user.username
                )
                self._provision(realm, user, credential)

        return True

    def _provision(self, realm: Realm, user: VirtualUser, credential: CredentialRecord) -> None:
        try:
            with self._db_service.session_scope() as session:
                role = self._provisioning.resolve_default_role(session, realm)
                self._provisioning.materialize(
                    session, realm, user.username, role=role, credential=credential
                )
        except ProvisioningError:
            raise
        except Exception as e:
            raise ProvisioningError(user.username, str(e)) from e
