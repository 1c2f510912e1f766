"""Realm entity module.

- Realm: Domain entity naming an isolated set of accounts and roles
- RealmTable: Database persistence model
- RealmRepository: Data access layer
"""

from .entity import Realm
from .repository import RealmRepository
from .table import RealmTable

__all__ = ["Realm", "RealmTable", "RealmRepository"]
