from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class EnvironmentVariables(BaseSettings):
    """Process-level settings read from the environment and .env files.

    Everything else lives in config.yaml; this only says where to find it.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        extra="ignore",
    )

    config_path: str = Field(default="config.yaml", alias="FEDERATION_CONFIG")
