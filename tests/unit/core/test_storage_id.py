"""Unit tests for composite storage identifiers."""

import pytest

from src.federation.core.exceptions import MalformedIdentifierError
from src.federation.core.models import StorageId


class TestStorageIdParsing:
    def test_dotted_form(self):
        storage_id = StorageId.parse("provider.alice")

        assert storage_id.provider_id == "provider"
        assert storage_id.external_id == "alice"

    def test_dotted_form_splits_at_first_dot(self):
        """External ids may contain dots themselves."""
        storage_id = StorageId.parse("saas.maria.b@example.com")

        assert storage_id.provider_id == "saas"
        assert storage_id.external_id == "maria.b@example.com"

    def test_federated_form(self):
        storage_id = StorageId.parse("f:saas:alice")

        assert storage_id.provider_id == "saas"
        assert storage_id.external_id == "alice"

    def test_federated_form_keeps_colons_in_external_id(self):
        assert StorageId.parse("f:saas:a:b").external_id == "a:b"

    @pytest.mark.parametrize(
        "composite_id",
        ["", "garbage", ".alice", "provider.", "f:saas", "f::alice", "f:saas:"],
    )
    def test_malformed_ids_raise(self, composite_id):
        with pytest.raises(MalformedIdentifierError):
            StorageId.parse(composite_id)

    def test_malformed_error_is_a_value_error(self):
        with pytest.raises(ValueError, match="garbage"):
            StorageId.parse("garbage")


class TestStorageIdComposition:
    def test_compose_uses_federated_form(self):
        assert StorageId.compose("saas", "alice") == "f:saas:alice"

    def test_composed_id_parses_back(self):
        composed = StorageId.compose("saas", "maria.b@example.com")

        assert StorageId.parse(composed) == StorageId("saas", "maria.b@example.com")
