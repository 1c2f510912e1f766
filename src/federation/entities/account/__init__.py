"""Local account entity module.

This module contains all LocalAccount-related classes organized by responsibility:
- LocalAccount: Domain entity for a materialized, persistent identity
- CredentialRecord: Value type for a credential registered on an account
- LocalAccountTable and its satellite tables: Database persistence models
- LocalAccountRepository: Data access layer
"""

from .entity import PASSWORD, CredentialRecord, LocalAccount
from .repository import LocalAccountRepository
from .table import (
    AccountAttributeTable,
    AccountRoleTable,
    CredentialTable,
    LocalAccountTable,
)

__all__ = [
    "PASSWORD",
    "CredentialRecord",
    "LocalAccount",
    "LocalAccountRepository",
    "LocalAccountTable",
    "AccountAttributeTable",
    "AccountRoleTable",
    "CredentialTable",
]
