"""Unit tests for identity resolution against the registry."""

from unittest.mock import Mock

import pytest

from src.federation.core.exceptions import MalformedIdentifierError
from src.federation.core.models import VirtualUser
from src.federation.core.services import ExternalRegistry, IdentityResolver
from tests.fixtures.services import REGISTRY_ENTRIES


class TestResolveByUsername:
    @pytest.mark.parametrize("username", sorted(REGISTRY_ENTRIES))
    def test_known_usernames_resolve(self, resolver, username):
        user = resolver.get_user_by_username(username)

        assert user == VirtualUser(username=username, provider_id="saas")

    def test_unknown_username_is_not_found(self, resolver):
        assert resolver.get_user_by_username("mallory") is None

    def test_virtual_user_id_is_composite(self, resolver):
        assert resolver.get_user_by_username("alice").id == "f:saas:alice"

    def test_request_cache_is_filled_and_reused(self):
        registry = Mock(spec=ExternalRegistry)
        registry.get_secret.return_value = "pw1"
        resolver = IdentityResolver(registry, "saas")
        loaded: dict[str, VirtualUser] = {}

        first = resolver.get_user_by_username("alice", loaded)
        second = resolver.get_user_by_username("alice", loaded)

        assert first is second
        assert loaded == {"alice": first}
        registry.get_secret.assert_called_once_with("alice")

    def test_misses_are_not_cached(self, resolver):
        loaded: dict[str, VirtualUser] = {}

        resolver.get_user_by_username("mallory", loaded)

        assert loaded == {}


class TestResolveById:
    def test_dotted_composite_id(self, resolver):
        user = resolver.get_user_by_id("provider.alice")

        assert user is not None
        assert user.username == "alice"

    def test_federated_composite_id(self, resolver):
        assert resolver.get_user_by_id("f:saas:maria.b@example.com").username == (
            "maria.b@example.com"
        )

    def test_unknown_external_id_is_not_found(self, resolver):
        assert resolver.get_user_by_id("provider.mallory") is None

    def test_malformed_id_raises(self, resolver):
        with pytest.raises(MalformedIdentifierError):
            resolver.get_user_by_id("garbage")


class TestResolveByEmail:
    def test_email_lookup_never_matches(self, resolver):
        assert resolver.get_user_by_email("alice") is None
        assert resolver.get_user_by_email("maria.b@example.com") is None
