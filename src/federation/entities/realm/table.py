"""Realm database table model."""

from sqlalchemy import Column, String
from sqlmodel import Field

from src.federation.entities._base import EntityTable


class RealmTable(EntityTable, table=True):
    """Database persistence model for realms."""

    name: str = Field(sa_column=Column(String(255), nullable=False, unique=True, index=True))
