"""Tests for YAML configuration loading and context overrides."""

from pathlib import Path

import pytest

from src.federation.runtime.config.config_data import ConfigData, DatabaseConfig
from src.federation.runtime.config.config_template import (
    load_templated_yaml,
    substitute_env_vars,
)
from src.federation.runtime.context import get_config, with_context


class TestSubstituteEnvVars:
    def test_required_variable(self, monkeypatch):
        monkeypatch.setenv("REGISTRY_FILE", "/etc/users.properties")

        assert substitute_env_vars("path: ${REGISTRY_FILE}") == "path: /etc/users.properties"

    def test_default_value(self, monkeypatch):
        monkeypatch.delenv("FEDERATION_ROLE", raising=False)

        assert substitute_env_vars("${FEDERATION_ROLE:-montage}") == "montage"

    def test_missing_required_variable(self, monkeypatch):
        monkeypatch.delenv("FEDERATION_MISSING", raising=False)

        with pytest.raises(ValueError, match="FEDERATION_MISSING"):
            substitute_env_vars("${FEDERATION_MISSING}")

    def test_custom_error_message(self, monkeypatch):
        monkeypatch.delenv("FEDERATION_MISSING", raising=False)

        with pytest.raises(ValueError, match="set the registry path"):
            substitute_env_vars("${FEDERATION_MISSING:?set the registry path}")


class TestLoadTemplatedYaml:
    def test_missing_file_gives_defaults(self, tmp_path):
        config = load_templated_yaml(tmp_path / "absent.yaml")

        assert config == ConfigData()
        assert config.federation.default_role == "montage"
        assert config.federation.attributes == {"phone": "79031112233"}

    def test_federation_section(self, tmp_path, monkeypatch):
        monkeypatch.setenv("TEST_REGISTRY", "legacy.properties")
        path = tmp_path / "config.yaml"
        path.write_text(
            "config:\n"
            "  federation:\n"
            "    provider_id: legacy\n"
            "    registry_path: ${TEST_REGISTRY}\n"
            "    default_role: staff\n"
            "    attributes:\n"
            "      source: legacy\n",
            encoding="utf-8",
        )

        config = load_templated_yaml(path)

        assert config.federation.provider_id == "legacy"
        assert config.federation.registry_path == "legacy.properties"
        assert config.federation.default_role == "staff"
        assert config.federation.attributes == {"source": "legacy"}
        assert config.federation.credential_type == "password"

    def test_invalid_configuration(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("config:\n  app:\n    port: not-a-port\n", encoding="utf-8")

        with pytest.raises(ValueError, match="Invalid configuration"):
            load_templated_yaml(path)

    def test_empty_file(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("", encoding="utf-8")

        with pytest.raises(ValueError):
            load_templated_yaml(path)

    def test_repository_config_file_parses(self):
        config = load_templated_yaml(Path(__file__).parents[3] / "config.yaml")

        assert config.federation.provider_id == "saas"


class TestWithContext:
    def test_override_is_scoped(self):
        original = get_config().federation.default_role
        override = ConfigData()
        override.federation.default_role = "staff"

        with with_context(override):
            assert get_config().federation.default_role == "staff"
            assert get_config().federation.provider_id == "saas"

        assert get_config().federation.default_role == original

    def test_rejects_other_types(self):
        with pytest.raises(ValueError):
            with with_context({"federation": {}}):
                pass


class TestDatabaseConfig:
    def test_connection_string_without_password_env(self):
        assert DatabaseConfig(url="sqlite:///x.db").connection_string == "sqlite:///x.db"

    def test_password_from_environment(self, monkeypatch):
        monkeypatch.setenv("FED_DB_PASSWORD", "s3cret")
        config = DatabaseConfig(
            url="postgresql://fed@db:5432/fed", password_env_var="FED_DB_PASSWORD"
        )

        assert config.connection_string == "postgresql://fed:s3cret@db:5432/fed"


class TestEnvironmentVariables:
    def test_config_path_from_environment(self, monkeypatch):
        from src.federation.runtime.settings import EnvironmentVariables

        monkeypatch.setenv("FEDERATION_CONFIG", "/etc/federation/config.yaml")

        assert EnvironmentVariables().config_path == "/etc/federation/config.yaml"
