"""Unit tests for password validation and JIT provisioning."""

from concurrent.futures import ThreadPoolExecutor
from unittest.mock import Mock, patch

import pytest
from sqlalchemy.exc import IntegrityError

from src.federation.core.exceptions import ProvisioningError
from src.federation.core.models import CredentialRecord, VirtualUser
from src.federation.core.services import CredentialValidator, ExternalRegistry
from src.federation.entities.account import LocalAccount, LocalAccountRepository
from tests.utils import count_accounts, load_account


def _user(username: str) -> VirtualUser:
    return VirtualUser(username=username, provider_id="saas")


class TestCredentialKinds:
    def test_supports_only_password(self, validator):
        assert validator.supports_credential_type("password") is True
        assert validator.supports_credential_type("otp") is False

    def test_is_configured_for_known_user(self, validator):
        assert validator.is_configured_for(_user("alice"), "password") is True

    def test_is_not_configured_for_unknown_user(self, validator):
        assert validator.is_configured_for(_user("mallory"), "password") is False

    def test_is_not_configured_for_other_kinds(self, validator):
        assert validator.is_configured_for(_user("alice"), "otp") is False


class TestValidate:
    def test_correct_secret_provisions_account(self, validator, db_service, realm, default_role):
        assert validator.validate(realm, _user("alice"), "password", "pw1") is True

        account = load_account(db_service, realm, "alice")
        assert account is not None
        assert account.enabled is True
        assert account.attributes == {"phone": "79031112233"}
        assert account.roles == {"montage"}
        assert account.credentials == [CredentialRecord(type="password", value="pw1")]

    def test_wrong_secret_writes_nothing(self, validator, db_service, realm):
        assert validator.validate(realm, _user("alice"), "password", "wrong") is False

        assert load_account(db_service, realm, "alice") is None
        assert count_accounts(db_service, realm) == 0

    def test_secret_comparison_is_exact(self, validator, db_service, realm):
        assert validator.validate(realm, _user("alice"), "password", "PW1") is False
        assert validator.validate(realm, _user("alice"), "password", "pw1 ") is False

    def test_unknown_user_is_rejected(self, validator, db_service, realm):
        assert validator.validate(realm, _user("mallory"), "password", "pw1") is False
        assert count_accounts(db_service, realm) == 0

    def test_unsupported_kind_does_not_touch_registry(
        self, provisioning, db_service, federation_config, realm
    ):
        registry = Mock(spec=ExternalRegistry)
        validator = CredentialValidator(registry, provisioning, db_service, federation_config)

        assert validator.validate(realm, _user("alice"), "otp", "pw1") is False
        registry.get_secret.assert_not_called()

    def test_missing_default_role_is_tolerated(self, validator, db_service, realm):
        assert validator.validate(realm, _user("bob"), "password", "pw2") is True

        account = load_account(db_service, realm, "bob")
        assert account.roles == set()
        assert account.enabled is True

    def test_repeated_success_provisions_once(self, validator, db_service, realm, default_role):
        assert validator.validate(realm, _user("alice"), "password", "pw1") is True
        assert validator.validate(realm, _user("alice"), "password", "pw1") is True

        assert count_accounts(db_service, realm) == 1
        account = load_account(db_service, realm, "alice")
        assert len(account.credentials) == 1

    def test_non_ascii_secret(self, provisioning, db_service, federation_config, realm):
        registry = ExternalRegistry.from_mapping({"jose": "contraseña"})
        validator = CredentialValidator(registry, provisioning, db_service, federation_config)

        assert validator.validate(realm, _user("jose"), "password", "contraseña") is True
        assert validator.validate(realm, _user("jose"), "password", "contrasena") is False

    def test_provisioning_failure_is_surfaced_and_rolled_back(
        self, validator, db_service, realm, default_role
    ):
        with patch.object(
            LocalAccountRepository, "add_credential", side_effect=RuntimeError("disk full")
        ):
            with pytest.raises(ProvisioningError, match="disk full"):
                validator.validate(realm, _user("alice"), "password", "pw1")

        assert count_accounts(db_service, realm) == 0


class TestConcurrentProvisioning:
    def test_account_created_by_another_writer_is_accepted(
        self, validator, db_service, realm, default_role
    ):
        original_lookup = LocalAccountRepository.get_by_username
        raced: list[str] = []

        def lookup_then_race(self, realm_id, username):
            found = original_lookup(self, realm_id, username)
            if not raced:
                raced.append(username)
                with db_service.session_scope() as other:
                    LocalAccountRepository(other).create(
                        LocalAccount(realm_id=realm_id, username=username)
                    )
            return found

        with patch.object(LocalAccountRepository, "get_by_username", lookup_then_race):
            assert validator.validate(realm, _user("alice"), "password", "pw1") is True

        assert raced == ["alice"]
        assert count_accounts(db_service, realm) == 1

    def test_persistent_conflict_is_surfaced(self, validator, db_service, realm):
        conflict = IntegrityError("INSERT", {}, Exception("UNIQUE constraint failed"))

        with patch.object(LocalAccountRepository, "create", side_effect=conflict) as create:
            with pytest.raises(ProvisioningError, match="UNIQUE constraint failed"):
                validator.validate(realm, _user("alice"), "password", "pw1")

        assert create.call_count == 2
        assert count_accounts(db_service, realm) == 0

    def test_other_failures_are_not_retried(self, validator, db_service, realm):
        with patch.object(
            LocalAccountRepository, "create", side_effect=RuntimeError("disk full")
        ) as create:
            with pytest.raises(ProvisioningError, match="disk full"):
                validator.validate(realm, _user("alice"), "password", "pw1")

        assert create.call_count == 1

    def test_parallel_logins_provision_once(
        self, validator, provisioning, db_service, realm, default_role
    ):
        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(
                pool.map(
                    lambda _: validator.validate(realm, _user("alice"), "password", "pw1"),
                    range(8),
                )
            )

        assert results == [True] * 8
        assert count_accounts(db_service, realm) == 1
        account = load_account(db_service, realm, "alice")
        assert account.credentials == [CredentialRecord(type="password", value="pw1")]
        assert provisioning._locks == {}
