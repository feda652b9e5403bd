"""Tests for DirectoryCredentialProvider."""

from __future__ import annotations

import pytest

from storepnl.core.exceptions import AuthenticationError
from storepnl.models.links import UserAccount
from storepnl.models.session import Role
from storepnl.services.credentials import DirectoryCredentialProvider
from tests.fakes import MemoryCacheBackend, MemoryUserDirectory


@pytest.fixture
def cache():
    return MemoryCacheBackend()


@pytest.fixture
def provider(cache):
    users = MemoryUserDirectory([
        UserAccount(id="u1", email="Owner@Example.com", role=Role.CLIENT,
                    stores=["Kifisia"], password="s3cret"),
    ])
    return DirectoryCredentialProvider(users, cache, ttl=60)


class TestLogin:
    def test_issues_token_and_caches_context(self, provider, cache):
        token = provider.login("owner@example.com ", "s3cret")
        assert token
        assert cache.get(f"session:{token}") is not None

        context = provider.resolve(token)
        assert context.role == Role.CLIENT
        assert context.assigned_stores == ["Kifisia"]
        assert context.user_id == "u1"

    def test_wrong_password(self, provider):
        with pytest.raises(AuthenticationError):
            provider.login("owner@example.com", "nope")

    def test_unknown_user(self, provider):
        with pytest.raises(AuthenticationError):
            provider.login("ghost@example.com", "s3cret")


class TestResolveAndLogout:
    def test_unknown_token(self, provider):
        with pytest.raises(AuthenticationError):
            provider.resolve("not-a-token")

    def test_empty_token(self, provider):
        with pytest.raises(AuthenticationError):
            provider.resolve("")

    def test_logout_invalidates(self, provider):
        token = provider.login("owner@example.com", "s3cret")
        provider.logout(token)
        with pytest.raises(AuthenticationError):
            provider.resolve(token)


class TestPasswordComparison:
    @pytest.fixture
    def greek_provider(self, cache):
        users = MemoryUserDirectory([
            UserAccount(id="u2", email="a@b.gr", password="κωδικός"),
            UserAccount(id="u3", email="pad@b.gr", password=" pass phrase "),
        ])
        return DirectoryCredentialProvider(users, cache)

    def test_correct_non_ascii_password(self, greek_provider):
        token = greek_provider.login("a@b.gr", "κωδικός")
        assert greek_provider.resolve(token).user_id == "u2"

    def test_wrong_non_ascii_password(self, greek_provider):
        with pytest.raises(AuthenticationError):
            greek_provider.login("a@b.gr", "λάθος")

    def test_surrounding_spaces_are_part_of_the_password(self, greek_provider):
        assert greek_provider.login("pad@b.gr", " pass phrase ")
        with pytest.raises(AuthenticationError):
            greek_provider.login("pad@b.gr", "pass phrase")


class TestUserAccount:
    def test_identity_fields_trimmed_password_kept(self):
        user = UserAccount(id=" u1 ", email=" x@y.gr ", stores=[" Kifisia "], password="  pw ")
        assert (user.id, user.email, user.stores) == ("u1", "x@y.gr", ["Kifisia"])
        assert user.password == "  pw "
