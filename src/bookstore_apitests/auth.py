"""Authentication utilities.

Exchanges credentials for a bearer token once per scenario. Tokens are opaque
strings and are never cached between scenarios.
"""

import json
from typing import TYPE_CHECKING, Any

from .errors import SetupError
from .shared.logging import get_logger

if TYPE_CHECKING:
    from .client import BookstoreClient

logger = get_logger(__name__)

TOKEN_FIELDS = ("token", "accessToken", "access_token")


def auth_headers(token: str | None) -> dict[str, str]:
    """Build Authorization header dict.

    Args:
        token: Bearer token string

    Returns:
        Dict with Authorization header, or empty dict if no token
    """
    if token:
        return {"Authorization": f"Bearer {token}"}
    return {}


def extract_token(body: str) -> str | None:
    """Pull the token out of a login response body.

    Accepts a JSON string, a JSON object carrying one of TOKEN_FIELDS, or
    the raw text body.

    Args:
        body: Raw response text

    Returns:
        Token string, or None when the body carries none
    """
    text = body.strip()
    if not text:
        return None

    try:
        payload: Any = json.loads(text)
    except ValueError:
        return text

    if isinstance(payload, str):
        return payload.strip() or None
    if isinstance(payload, dict):
        for key in TOKEN_FIELDS:
            value = payload.get(key)
            if isinstance(value, str) and value.strip():
                return value.strip()
    return None


def authenticate(
    client: "BookstoreClient",
    email: str,
    password: str,
    login_path: str = "/users/login",
) -> str:
    """Log in and return a bearer token.

    Args:
        client: Open bookstore client
        email: Account email
        password: Account password
        login_path: Login endpoint path

    Returns:
        Non-empty bearer token

    Raises:
        SetupError: If the login is rejected or yields no token
    """
    response = client.post(login_path, json={"email": email, "password": password})
    if not response.ok:
        raise SetupError(
            f"Login failed for {email}: HTTP {response.status_code}",
            data={"status_code": response.status_code},
        )

    token = extract_token(response.text)
    if not token:
        raise SetupError("Authentication token should not be null or empty")

    logger.debug("authenticated", email=email)
    return token
