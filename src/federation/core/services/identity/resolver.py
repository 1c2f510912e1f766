"""Identity resolution against the external registry.

Resolution never touches the local store; a hit yields a :class:`VirtualUser`
and a miss yields ``None``.
"""

from loguru import logger

from src.federation.core.models import StorageId, VirtualUser
from src.federation.core.services.registry.external_registry import ExternalRegistry


class IdentityResolver:
    def __init__(self, registry: ExternalRegistry, provider_id: str):
        self._registry = registry
        self._provider_id = provider_id

    @property
    def provider_id(self) -> str:
        return self._provider_id

    def get_user_by_username(
        self, username: str, loaded: dict[str, VirtualUser] | None = None
    ) -> VirtualUser | None:
        """Resolve a raw external id.

        ``loaded`` is an optional per-request cache; hits are stored in it so
        repeated lookups in one request return the same view.
        """
        if loaded is not None and username in loaded:
            return loaded[username]

        if self._registry.get_secret(username) is None:
            return None

        user = VirtualUser(username=username, provider_id=self._provider_id)
        if loaded is not None:
            loaded[username] = user
        return user

    def get_user_by_id(
        self, composite_id: str, loaded: dict[str, VirtualUser] | None = None
    ) -> VirtualUser | None:
        """Resolve a composite storage id.

        Raises:
            MalformedIdentifierError: ``composite_id`` cannot be decomposed.
        """
        logger.info("getUserById: id={}", composite_id)
        storage_id = StorageId.parse(composite_id)
        return self.get_user_by_username(storage_id.external_id, loaded)

    def get_user_by_email(self, email: str) -> None:
        # The registry has no email index.
        logger.info("getUserByEmail: email={}", email)
        return None
