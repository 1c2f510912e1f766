"""Role entity module.

- Role: Domain entity for an entry in a realm's role catalog
- RoleTable: Database persistence model
- RoleRepository: Data access layer
"""

from .entity import Role
from .repository import RoleRepository
from .table import RoleTable

__all__ = ["Role", "RoleTable", "RoleRepository"]
