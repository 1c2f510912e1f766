"""Exceptions raised across the federation core.

Lookup misses and unsupported credential kinds are not errors; they come
back as ``None`` or ``False``. Only the conditions below raise.
"""


class FederationError(Exception):
    """Base class for federation failures."""


class MalformedIdentifierError(FederationError, ValueError):
    """A composite storage identifier could not be decomposed."""

    def __init__(self, composite_id: str, reason: str = "unrecognized format"):
        self.composite_id = composite_id
        super().__init__(f"Malformed storage id {composite_id!r}: {reason}")


class RealmNotFoundError(FederationError, LookupError):
    def __init__(self, realm_ref: str):
        self.realm_ref = realm_ref
        super().__init__(f"Realm {realm_ref!r} not found")


class ProvisioningError(FederationError):
    """Materializing a local account failed; no partial account survives."""

    def __init__(self, external_id: str, message: str):
        self.external_id = external_id
        super().__init__(f"Provisioning of {external_id!r} failed: {message}")


class SyncError(FederationError):
    """A bulk synchronization run was rolled back."""


class SyncCancelledError(SyncError):
    """A bulk synchronization run was cancelled before it completed."""
