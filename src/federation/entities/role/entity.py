"""Role domain entity."""

from pydantic import Field

from src.federation.entities._base import Entity


class Role(Entity):
    """A realm role that can be granted to local accounts."""

    realm_id: str = Field(description="Realm this role belongs to")
    name: str = Field(description="Role name, unique within the realm")
    description: str | None = Field(default=None, description="Role description")
