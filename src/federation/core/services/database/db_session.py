"""Database engine and session factory used across the application."""

from collections.abc import Iterator
from contextlib import contextmanager

from loguru import logger
from sqlalchemy import text
from sqlalchemy.engine import Engine
from sqlmodel import Session, create_engine

from src.federation.runtime.config.config_data import DatabaseConfig
from src.federation.runtime.context import get_config


class DbSessionService:
    def __init__(self, engine: Engine | None = None, db_config: DatabaseConfig | None = None):
        """Initialize the shared database engine and session factory.

        An explicit ``engine`` is used as-is; otherwise one is built from the
        database section of the current configuration.
        """
        if engine is not None:
            self._engine = engine
            return

        db_config = db_config or get_config().database
        logger.info("Setting up database engine and session factory")

        engine_kwargs = {
            "pool_pre_ping": True,
            "echo": False,
            "connect_args": self._get_connect_args(db_config),
        }
        if not db_config.url.startswith("sqlite"):
            engine_kwargs.update(
                {
                    "pool_size": db_config.pool_size,
                    "max_overflow": db_config.max_overflow,
                    "pool_timeout": db_config.pool_timeout,
                    "pool_recycle": db_config.pool_recycle,
                }
            )

        self._engine = create_engine(db_config.connection_string, **engine_kwargs)

    def _get_connect_args(self, db_config: DatabaseConfig) -> dict:
        """Get database-specific connection arguments."""
        connect_args = {}

        if "postgresql" in db_config.url:
            connect_args.update(
                {
                    "application_name": "registry_federation",
                    "connect_timeout": 30,
                }
            )
        elif "sqlite" in db_config.url:
            connect_args.update(
                {
                    "check_same_thread": False,
                    "timeout": 20,
                }
            )
            if get_config().app.environment == "production":
                logger.warning(
                    "SQLite is not recommended for production use. "
                    "Consider PostgreSQL for better performance and reliability."
                )

        return connect_args

    @property
    def engine(self) -> Engine:
        return self._engine

    def get_session(self) -> Session:
        """Return a new SQLModel session bound to the shared engine."""
        return Session(
            self._engine,
            expire_on_commit=False,
            autoflush=True,
        )

    @contextmanager
    def session_scope(self) -> Iterator[Session]:
        """One transaction: commit on success, roll back on any error.

        The session is always closed.
        """
        db = self.get_session()
        try:
            yield db
            db.commit()
        except Exception as e:
            db.rollback()
            logger.error(
                "Database transaction rolled back",
                error_type=type(e).__name__,
                error_message=str(e),
            )
            raise
        finally:
            db.close()

    def health_check(self) -> bool:
        """Perform a health check on the database connection."""
        try:
            with self._engine.connect() as connection:
                connection.execute(text("SELECT 1"))
                return True
        except Exception as e:
            logger.error(
                "Database health check failed",
                error_type=type(e).__name__,
                error_message=str(e),
            )
            return False
