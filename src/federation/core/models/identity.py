"""External identity value types."""

from __future__ import annotations

from dataclasses import dataclass, field

from src.federation.core.exceptions import MalformedIdentifierError

FEDERATED_PREFIX = "f"


@dataclass(frozen=True)
class ExternalRecord:
    """One key/secret entry of the external registry."""

    external_id: str
    secret: str = field(repr=False)


@dataclass(frozen=True)
class StorageId:
    """Composite identifier pairing a provider scope with an external id.

    Two spellings are understood:

    * ``<scope>.<external_id>``, split at the first dot so that external ids
      may themselves contain dots (``saas.maria.b@example.com``).
    * ``f:<scope>:<external_id>``, the federated-storage form produced by
      :meth:`compose`.
    """

    provider_id: str
    external_id: str

    @classmethod
    def parse(cls, composite_id: str) -> StorageId:
        if not composite_id:
            raise MalformedIdentifierError(composite_id, "empty identifier")

        if composite_id.startswith(f"{FEDERATED_PREFIX}:"):
            parts = composite_id.split(":", 2)
            if len(parts) != 3:
                raise MalformedIdentifierError(composite_id, "missing external id")
            _, provider_id, external_id = parts
        elif "." in composite_id:
            provider_id, external_id = composite_id.split(".", 1)
        else:
            raise MalformedIdentifierError(composite_id, "no provider scope")

        if not provider_id:
            raise MalformedIdentifierError(composite_id, "empty provider scope")
        if not external_id:
            raise MalformedIdentifierError(composite_id, "empty external id")

        return cls(provider_id=provider_id, external_id=external_id)

    @classmethod
    def compose(cls, provider_id: str, external_id: str) -> str:
        return str(cls(provider_id=provider_id, external_id=external_id))

    def __str__(self) -> str:
        return f"{FEDERATED_PREFIX}:{self.provider_id}:{self.external_id}"


@dataclass(frozen=True)
class VirtualUser:
    """A non-persistent view of a registry entry.

    Lives only for one lookup or validation call; it carries the username and
    nothing else from the registry.
    """

    username: str
    provider_id: str

    @property
    def id(self) -> str:
        return StorageId.compose(self.provider_id, self.username)
