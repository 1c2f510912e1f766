"""All-or-nothing import of the whole external registry."""

import threading
from datetime import datetime

from loguru import logger

from src.federation.core.exceptions import RealmNotFoundError, SyncCancelledError
from src.federation.core.models import SyncResult
from src.federation.core.services.database.db_session import DbSessionService
from src.federation.core.services.provisioning.engine import ProvisioningEngine
from src.federation.core.services.registry.external_registry import ExternalRegistry
from src.federation.entities.account import LocalAccountRepository
from src.federation.entities.realm import RealmRepository


class BulkSynchronizer:
    """Provisions every registry entry in a single transaction.

    Unlike JIT validation, the bulk path never registers a credential: the
    registry secret is not copied into the local store.
    """

    def __init__(
        self,
        registry: ExternalRegistry,
        provisioning: ProvisioningEngine,
        db_service: DbSessionService,
    ):
        self._registry = registry
        self._provisioning = provisioning
        self._db_service = db_service

    def sync(self, realm_id: str, cancel_event: threading.Event | None = None) -> SyncResult:
        """Run a full synchronization into ``realm_id`` (realm id or name).

        Either every new account is committed or none is. Failures and
        cancellation come back as a non-success :class:`SyncResult`.

        Raises:
            RealmNotFoundError: The realm does not exist; nothing was written.
        """
        logger.info("synchronize: {} entries into realm {}", len(self._registry), realm_id)
        result = SyncResult()

        try:
            with self._db_service.session_scope() as session:
                realm = RealmRepository(session).resolve(realm_id)
                if realm is None:
                    raise RealmNotFoundError(realm_id)

                accounts = LocalAccountRepository(session)
                role = self._provisioning.resolve_default_role(session, realm)

                for external_id in self._registry:
                    if cancel_event is not None and cancel_event.is_set():
                        processed = result.added + result.existing
                        raise SyncCancelledError(
                            f"cancelled after {processed} of {len(self._registry)} entries"
                        )

                    logger.debug("sync: username: {}", external_id)
                    if accounts.exists(realm.id, external_id):
                        result.increase_existing()
                        continue

                    self._provisioning.materialize(session, realm, external_id, role=role)
                    result.increase_added()
        except RealmNotFoundError:
            raise
        except SyncCancelledError as e:
            logger.warning("Synchronization of realm {} cancelled: {}", realm_id, e)
            return SyncResult.cancelled(str(e))
        except Exception as e:
            logger.exception("Synchronization of realm {} rolled back", realm_id)
            return SyncResult.failure(str(e))

        logger.info("Synchronization of realm {} finished: {}", realm_id, result)
        return result

    def sync_since(
        self,
        last_sync: datetime | None,
        realm_id: str,
        cancel_event: threading.Event | None = None,
    ) -> SyncResult:
        """There is no delta sync: this always runs a full :meth:`sync`."""
        logger.info("syncSince: {} ignored, running full sync", last_sync)
        return self.sync(realm_id, cancel_event)
