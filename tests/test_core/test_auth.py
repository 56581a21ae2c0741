"""
Tests for authentication mode resolution.
"""

import logging

import pytest

from src.pfsense_provider.core.auth import ResolvedAuth, is_present, resolve_auth
from src.pfsense_provider.core.exceptions import AmbiguousAuthError, MissingCredentialError
from src.pfsense_provider.core.models import AuthMode


class TestResolveAuth:
    """Test resolve_auth."""

    def test_no_credentials_resolves_to_none(self):
        auth = resolve_auth()

        assert auth.mode == AuthMode.NONE
        assert auth == ResolvedAuth()

    def test_jwt_only(self):
        auth = resolve_auth(jwt_token="jwt-value")

        assert auth.mode == AuthMode.JWT
        assert auth.jwt_token == "jwt-value"
        assert auth.user is None

    def test_local_user_and_password(self):
        auth = resolve_auth(user="admin", password="pfsense")

        assert auth.mode == AuthMode.LOCAL
        assert auth.user == "admin"
        assert auth.password == "pfsense"

    def test_token_pair(self):
        auth = resolve_auth(api_client_id="cid", api_client_token="ctoken")

        assert auth.mode == AuthMode.TOKEN
        assert auth.api_client_id == "cid"
        assert auth.api_client_token == "ctoken"

    def test_user_without_password(self):
        with pytest.raises(MissingCredentialError) as exc_info:
            resolve_auth(user="admin")

        assert "password is required" in exc_info.value.message
        assert exc_info.value.error_code == "MissingCredential"

    def test_client_id_without_token(self):
        with pytest.raises(MissingCredentialError) as exc_info:
            resolve_auth(api_client_id="cid")

        assert "api_client_token is required" in exc_info.value.message

    def test_empty_string_counts_as_absent(self):
        with pytest.raises(MissingCredentialError):
            resolve_auth(user="admin", password="")

        assert resolve_auth(jwt_token="", user="").mode == AuthMode.NONE

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"user": "admin", "password": "x", "jwt_token": "y"},
            {"jwt_token": "y", "api_client_id": "cid", "api_client_token": "t"},
            {"user": "admin", "password": "x", "api_client_id": "cid", "api_client_token": "t"},
            {
                "user": "admin",
                "password": "x",
                "jwt_token": "y",
                "api_client_id": "cid",
                "api_client_token": "t",
            },
        ],
    )
    def test_multiple_groups_are_ambiguous(self, kwargs):
        with pytest.raises(AmbiguousAuthError) as exc_info:
            resolve_auth(**kwargs)

        assert "only one form of authentication" in exc_info.value.message
        assert len(exc_info.value.context["modes"]) >= 2

    def test_missing_credential_reported_before_ambiguity(self):
        with pytest.raises(MissingCredentialError):
            resolve_auth(user="admin", jwt_token="y")

    def test_orphaned_password_is_ignored(self, caplog):
        with caplog.at_level(logging.WARNING, logger="pfsense-provider"):
            auth = resolve_auth(password="x", jwt_token="y")

        assert auth.mode == AuthMode.JWT
        assert "password is set without user" in caplog.text

    def test_orphaned_client_token_is_ignored(self, caplog):
        with caplog.at_level(logging.WARNING, logger="pfsense-provider"):
            auth = resolve_auth(api_client_token="t")

        assert auth.mode == AuthMode.NONE
        assert "api_client_token is set without api_client_id" in caplog.text

    def test_repr_hides_credentials(self):
        auth = resolve_auth(user="admin", password="super-secret")

        assert "super-secret" not in repr(auth)
        assert "local" in repr(auth)


def test_is_present():
    assert is_present("x")
    assert not is_present("")
    assert not is_present(None)
