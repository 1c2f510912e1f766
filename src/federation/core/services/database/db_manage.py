from loguru import logger
from sqlmodel import SQLModel

from src.federation.core.services.database.db_session import DbSessionService


def create_all(db_service: DbSessionService) -> None:
    """Create all federation tables."""
    from src.federation.entities.account import (  # noqa: F401
        AccountAttributeTable,
        AccountRoleTable,
        CredentialTable,
        LocalAccountTable,
    )
    from src.federation.entities.realm import RealmTable  # noqa: F401
    from src.federation.entities.role import RoleTable  # noqa: F401

    SQLModel.metadata.create_all(db_service.engine)
    logger.info("Database initialized with tables.")
