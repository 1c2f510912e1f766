"""Local account domain entity."""

from pydantic import BaseModel, Field

from src.federation.entities._base import Entity

PASSWORD = "password"


class CredentialRecord(BaseModel):
    """A credential registered against a local account."""

    type: str = Field(default=PASSWORD, description="Credential kind")
    value: str = Field(repr=False, description="Credential secret")


class LocalAccount(Entity):
    """The persistent identity record owned by the local store.

    Created once per external id by provisioning; afterwards it is only
    changed through local-store operations.
    """

    realm_id: str = Field(description="Realm that owns the account")
    username: str = Field(description="Username, equal to the external id")
    enabled: bool = Field(default=False, description="Whether the account may log in")
    attributes: dict[str, str] = Field(default_factory=dict)
    roles: set[str] = Field(default_factory=set, description="Names of granted roles")
    credentials: list[CredentialRecord] = Field(default_factory=list)
