"""Role database table model."""

from sqlalchemy import Column, String, UniqueConstraint
from sqlmodel import Field

from src.federation.entities._base import EntityTable


class RoleTable(EntityTable, table=True):
    """Database persistence model for realm roles."""

    __table_args__ = (UniqueConstraint("realm_id", "name", name="uq_role_realm_name"),)

    realm_id: str = Field(foreign_key="realmtable.id", index=True)
    name: str = Field(sa_column=Column(String(255), nullable=False, index=True))
    description: str | None = None
