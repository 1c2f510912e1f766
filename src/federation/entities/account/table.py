"""Local account database table models."""

from sqlalchemy import Column, String, UniqueConstraint
from sqlmodel import Field

from src.federation.entities._base import EntityTable


class LocalAccountTable(EntityTable, table=True):
    """Database persistence model for local accounts.

    Satellite tables hold attributes, role grants and credentials so each can
    be written by its own store operation.
    """

    __table_args__ = (
        UniqueConstraint("realm_id", "username", name="uq_account_realm_username"),
    )

    realm_id: str = Field(foreign_key="realmtable.id", index=True)
    username: str = Field(sa_column=Column(String(512), nullable=False, index=True))
    enabled: bool = False


class AccountAttributeTable(EntityTable, table=True):
    __table_args__ = (
        UniqueConstraint("account_id", "name", name="uq_attribute_account_name"),
    )

    account_id: str = Field(foreign_key="localaccounttable.id", index=True)
    name: str = Field(sa_column=Column(String(255), nullable=False))
    value: str


class AccountRoleTable(EntityTable, table=True):
    __table_args__ = (
        UniqueConstraint("account_id", "role_id", name="uq_account_role"),
    )

    account_id: str = Field(foreign_key="localaccounttable.id", index=True)
    role_id: str = Field(foreign_key="roletable.id", index=True)


class CredentialTable(EntityTable, table=True):
    account_id: str = Field(foreign_key="localaccounttable.id", index=True)
    type: str = Field(sa_column=Column(String(64), nullable=False))
    value: str
    position: int = Field(default=0, description="Order of registration on the account")
