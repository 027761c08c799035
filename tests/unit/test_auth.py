"""Unit tests for bookstore_apitests.auth module."""

import pytest

from bookstore_apitests.auth import auth_headers, authenticate, extract_token
from bookstore_apitests.errors import SetupError


@pytest.mark.cli_unit
class TestAuthHeaders:
    """Tests for auth_headers function."""

    def test_auth_headers_with_token(self):
        """Test auth headers with token."""
        headers = auth_headers("my-token")

        assert headers == {"Authorization": "Bearer my-token"}

    def test_auth_headers_without_token(self):
        """Test auth headers without token."""
        assert auth_headers(None) == {}
        assert auth_headers("") == {}


@pytest.mark.cli_unit
class TestExtractToken:
    """Tests for extract_token function."""

    @pytest.mark.parametrize(
        "body,expected",
        [
            ('{"token": "abc"}', "abc"),
            ('{"accessToken": "abc"}', "abc"),
            ('{"access_token": " abc "}', "abc"),
            ('"abc"', "abc"),
            ("abc.def.ghi", "abc.def.ghi"),
        ],
    )
    def test_token_shapes(self, body, expected):
        assert extract_token(body) == expected

    @pytest.mark.parametrize("body", ["", "   ", "null", '""', '{"token": ""}', '{"user": "x"}', "[]"])
    def test_missing_token(self, body):
        assert extract_token(body) is None


@pytest.mark.cli_unit
class TestAuthenticate:
    """Tests for authenticate against the mock API."""

    def test_returns_token(self, api, mock_server):
        token = authenticate(api, **mock_server.credentials)

        assert token
        assert token in mock_server.tokens
        assert mock_server.login_count == 1

    def test_wrong_password_is_setup_error(self, api):
        with pytest.raises(SetupError, match="HTTP 401"):
            authenticate(api, "john.doe@example.com", "wrong")

    def test_empty_token_is_setup_error(self, api, mock_server):
        mock_server.faults.empty_token = True

        with pytest.raises(SetupError, match="should not be null or empty"):
            authenticate(api, **mock_server.credentials)

    def test_custom_login_path(self, api, mock_server):
        with pytest.raises(SetupError, match="HTTP 404"):
            authenticate(api, **mock_server.credentials, login_path="/auth/login")
