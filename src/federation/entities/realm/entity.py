"""Realm domain entity."""

from pydantic import Field

from src.federation.entities._base import Entity


class Realm(Entity):
    """A realm groups local accounts and the role catalog they draw from."""

    name: str = Field(description="Unique realm name")
