"""
Authentication state for the login-gated sources.

``AuthState`` only holds the flag and the opaque session token. The
service layer validates credentials, obtains the token and purges the
result cache on logout.
"""

import logging
import secrets
from typing import Any, Optional

import httpx

from models.search import AuthContext

__all__ = ["AuthState", "LoginError", "request_session_token"]

API_TIMEOUT = 15.0

logger = logging.getLogger(__name__)


class LoginError(Exception):
    """The identity provider refused the credentials or could not be reached."""


class AuthState:
    """Mutable holder of the current session. Starts logged out."""

    def __init__(self):
        self._authenticated = False
        self._token: Optional[str] = None

    @property
    def is_authenticated(self) -> bool:
        return self._authenticated

    @property
    def token(self) -> Optional[str]:
        return self._token

    def set_session(self, token: str) -> None:
        self._authenticated = True
        self._token = token
        logger.info("Auth status updated: Logged in")

    def clear(self) -> None:
        self._authenticated = False
        self._token = None
        logger.info("Auth status updated: Logged out")

    def snapshot(self) -> AuthContext:
        return AuthContext(is_authenticated=self._authenticated, token=self._token)


async def request_session_token(
    username: str, password: str, servicenow_config: dict[str, Any]
) -> str:
    """
    Obtain an opaque session token for the given credentials.

    With an instance URL and OAuth client configured this performs an
    OAuth password grant against ``/oauth_token.do``. Otherwise no backend
    exists and a random token is issued locally.

    Raises:
        LoginError: If the instance rejects the credentials or errors out
    """
    instance_url = servicenow_config.get("instance_url")
    client_id = servicenow_config.get("client_id")
    client_secret = servicenow_config.get("client_secret")

    if not (instance_url and client_id and client_secret):
        return secrets.token_urlsafe(32)

    try:
        async with httpx.AsyncClient(timeout=API_TIMEOUT) as client:
            response = await client.post(
                f"{instance_url.rstrip('/')}/oauth_token.do",
                data={
                    "grant_type": "password",
                    "client_id": client_id,
                    "client_secret": client_secret,
                    "username": username,
                    "password": password,
                },
            )
            response.raise_for_status()
            data = response.json()
    except httpx.HTTPStatusError as e:
        raise LoginError(f"Login rejected ({e.response.status_code})") from e
    except (httpx.HTTPError, ValueError) as e:
        raise LoginError(f"Login request failed: {e}") from e

    token = data.get("access_token")
    if not token:
        raise LoginError("Login response did not include an access token")
    return token
