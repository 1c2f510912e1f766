"""Value types shared by the federation services."""

from src.federation.entities.account.entity import PASSWORD, CredentialRecord

from .identity import ExternalRecord, StorageId, VirtualUser
from .sync import SyncResult, SyncStatus

__all__ = [
    "PASSWORD",
    "CredentialRecord",
    "ExternalRecord",
    "StorageId",
    "VirtualUser",
    "SyncResult",
    "SyncStatus",
]
