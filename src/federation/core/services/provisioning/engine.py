"""Materialization of local accounts from validated external identities."""

import threading
from collections.abc import Iterator, Mapping
from contextlib import contextmanager

from loguru import logger
from sqlmodel import Session

from src.federation.core.exceptions import ProvisioningError
from src.federation.core.models import CredentialRecord
from src.federation.entities.account import LocalAccount, LocalAccountRepository
from src.federation.entities.realm import Realm
from src.federation.entities.role import Role, RoleRepository
from src.federation.runtime.config.config_data import FederationConfig
from src.federation.runtime.context import get_config


class ProvisioningEngine:
    """Creates and sets up local accounts inside a caller-owned transaction.

    The engine never commits. Callers run it inside
    ``DbSessionService.session_scope`` so that a failed step rolls back every
    earlier one.
    """

    def __init__(self, config: FederationConfig | None = None):
        self._config = config or get_config().federation
        self._locks: dict[tuple[str, str], threading.Lock] = {}
        self._lock_holders: dict[tuple[str, str], int] = {}
        self._locks_guard = threading.Lock()

    @property
    def attributes(self) -> dict[str, str]:
        return dict(self._config.attributes)

    @contextmanager
    def lock_for(self, realm_id: str, external_id: str) -> Iterator[None]:
        """Serialize provisioning of one external id within this process.

        The per-key lock lives only while some thread holds or waits for it.
        """
        key = (realm_id, external_id)
        with self._locks_guard:
            lock = self._locks.setdefault(key, threading.Lock())
            self._lock_holders[key] = self._lock_holders.get(key, 0) + 1
        try:
            with lock:
                yield
        finally:
            with self._locks_guard:
                self._lock_holders[key] -= 1
                if not self._lock_holders[key]:
                    del self._lock_holders[key]
                    del self._locks[key]

    def resolve_default_role(self, session: Session, realm: Realm) -> Role | None:
        """Look up the configured default role; a missing role is not an error."""
        if not self._config.default_role:
            return None
        role = RoleRepository(session).get_by_name(realm.id, self._config.default_role)
        logger.info("Default role for realm {}: {}", realm.name, role.name if role else None)
        return role

    def materialize(
        self,
        session: Session,
        realm: Realm,
        external_id: str,
        role: Role | None = None,
        attributes: Mapping[str, str] | None = None,
        credential: CredentialRecord | None = None,
    ) -> LocalAccount:
        """Create, enable and set up the local account for ``external_id``.

        An account that already exists is returned unchanged.

        Args:
            session: Open session whose transaction receives every write
            realm: Realm that will own the account
            external_id: Registry key, used as the username
            role: Role to grant, if any
            attributes: Attributes to set; defaults to the configured template
            credential: Credential to register, if any

        Raises:
            ProvisioningError: Any step failed. The caller must roll back.
        """
        accounts = LocalAccountRepository(session)
        attributes = self.attributes if attributes is None else attributes

        try:
            existing = accounts.get_by_username(realm.id, external_id)
            if existing is not None:
                logger.info("Account {} already present in realm {}", external_id, realm.name)
                return existing

            account = accounts.create(LocalAccount(realm_id=realm.id, username=external_id))
            logger.info("Created account {} in realm {}", external_id, realm.name)

            if role is not None:
                accounts.grant_role(account.id, role.id)

            accounts.set_enabled(account.id, True)

            for name, value in attributes.items():
                accounts.set_single_attribute(account.id, name, value)

            if credential is not None:
                accounts.add_credential(account.id, credential)

            return accounts.get(account.id)
        except ProvisioningError:
            raise
        except Exception as e:
            logger.error("Provisioning of {} failed: {}", external_id, e)
            raise ProvisioningError(external_id, str(e)) from e
