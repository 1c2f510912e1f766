"""Pydantic models for parsing the config.yaml configuration file.

This module contains Pydantic models that correspond to the structure of config.yaml.
These models handle validation and type conversion of the YAML configuration data.
"""

from __future__ import annotations

import os
from typing import Literal

from loguru import logger
from pydantic import BaseModel, Field, computed_field


class LoggingConfig(BaseModel):
    """Logging configuration model."""

    level: str = Field(default="INFO", description="Logging level")
    format: Literal["json", "plain"] = Field(default="plain", description="Log format")
    file: str | None = Field(default=None, description="Log file path")
    max_size_mb: int = Field(default=10, description="Maximum log file size in MB")
    backup_count: int = Field(
        default=5, description="Number of backup log files to keep"
    )


class DatabaseConfig(BaseModel):
    """Database configuration model."""

    url: str = Field(
        default="sqlite:///./federation.db",
        description="Database connection URL",
    )
    pool_size: int = Field(default=20, description="Connection pool size")
    max_overflow: int = Field(default=10, description="Maximum pool overflow")
    pool_timeout: int = Field(default=30, description="Pool timeout in seconds")
    pool_recycle: int = Field(default=1800, description="Pool recycle time in seconds")
    password_env_var: str | None = Field(
        default=None,
        description="Environment variable name containing database password",
    )

    @computed_field
    @property
    def connection_string(self) -> str:
        """Construct the database connection string with password if provided."""
        from sqlalchemy.engine import make_url

        base_url = make_url(self.url)
        if base_url.password or not self.password_env_var:
            return self.url

        password = os.getenv(self.password_env_var)
        if not password:
            logger.warning(
                "Environment variable {} is not set; connecting without a password",
                self.password_env_var,
            )
            return self.url

        return base_url.set(password=password).render_as_string(hide_password=False)


class AppConfig(BaseModel):
    """Application configuration model."""

    environment: Literal["development", "production", "test"] = Field(
        default="development", description="Application environment"
    )
    host: str = Field(default="localhost", description="Application host")
    port: int = Field(default=8000, description="Application port")


class FederationConfig(BaseModel):
    """Settings for the registry federation provider."""

    provider_id: str = Field(
        default="saas", description="Identifier of the federation provider"
    )
    registry_path: str = Field(
        default="users.properties",
        description="Path to the key=secret registry file",
    )
    default_realm: str = Field(
        default="master", description="Realm used when a command names none"
    )
    default_role: str | None = Field(
        default="montage",
        description="Realm role granted to every provisioned account, if it exists",
    )
    credential_type: str = Field(
        default="password", description="The only credential kind this provider checks"
    )
    attributes: dict[str, str] = Field(
        default_factory=lambda: {"phone": "79031112233"},
        description="Attributes set on every provisioned account",
    )


class ConfigData(BaseModel):
    """Root configuration model that matches the config.yaml structure."""

    app: AppConfig = Field(
        default_factory=AppConfig, description="Application configuration"
    )
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig, description="Logging configuration"
    )
    database: DatabaseConfig = Field(
        default_factory=DatabaseConfig, description="Database configuration"
    )
    federation: FederationConfig = Field(
        default_factory=FederationConfig, description="Federation configuration"
    )
