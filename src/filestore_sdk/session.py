# Author: PB and Claude
# Date: 2026-10-17
# License: (c) HRDAG, 2026, GPL-2 or newer
#
# ---
# src/filestore_sdk/session.py

"""
Session handshake for the FileStore API.

Login is a two-step exchange:
    1. GET  /api/auth/csrf                   -> {"csrfToken": "..."}
    2. POST /api/auth/callback/credentials   form: csrfToken, token=<api key>

The server answers step 2 by setting a jwt_token cookie. That cookie value
is the bearer credential for every later request. Both steps share one
requests.Session so cookies set by step 1 ride along with step 2.
"""

import logging
import threading
from typing import Optional

import requests

from filestore_sdk.errors import (
    CredentialCookieMissing,
    CsrfFetchFailed,
    LoginRequestFailed,
)
from filestore_sdk.types import CsrfResponse

logger = logging.getLogger(__name__)

CSRF_ENDPOINT = "/api/auth/csrf"
CREDENTIALS_ENDPOINT = "/api/auth/callback/credentials"
CREDENTIAL_COOKIE = "jwt_token"


class SessionManager:
    """Owns the login handshake and the bearer credential derived from it."""

    def __init__(
        self,
        http: requests.Session,
        base_url: str,
        api_key: str,
        timeout: float = 60,
    ):
        """
        Args:
            http: Shared session; its cookie jar accumulates handshake cookies
            base_url: Server root, without trailing slash
            api_key: Static API key exchanged for a session credential
            timeout: Per-request timeout in seconds
        """
        self.http = http
        self.base_url = base_url
        self._api_key = api_key
        self.timeout = timeout
        self.csrf_token: Optional[str] = None
        self._credential: Optional[str] = None
        self._lock = threading.Lock()

    @property
    def credential(self) -> Optional[str]:
        return self._credential

    @property
    def is_authenticated(self) -> bool:
        return self._credential is not None

    def login(self) -> str:
        """
        Run the CSRF + credential exchange and store the resulting credential.

        Returns:
            The jwt_token cookie value

        Raises:
            CsrfFetchFailed: CSRF request failed or returned no csrfToken
            LoginRequestFailed: Credential exchange failed at transport level
            CredentialCookieMissing: No jwt_token cookie after the exchange
        """
        with self._lock:
            return self._login()

    def refresh(self, stale: Optional[str]) -> str:
        """
        Re-login after `stale` was rejected.

        When another caller already replaced the rejected credential, the
        current one is returned without a second handshake.
        """
        with self._lock:
            if self._credential is not None and self._credential != stale:
                logger.debug("refresh: credential already replaced, skipping login")
                return self._credential
            return self._login()

    def _login(self) -> str:
        # A failed handshake leaves the session unauthenticated.
        self._credential = None
        self._drop_credential_cookies()
        self.csrf_token = self._fetch_csrf_token()

        url = f"{self.base_url}{CREDENTIALS_ENDPOINT}"
        logger.debug(f"login: POST {url}")
        try:
            response = self.http.post(
                url,
                data={"csrfToken": self.csrf_token, "token": self._api_key},
                headers={"Accept": "application/json"},
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as e:
            raise LoginRequestFailed(f"Login request failed: {e}") from e

        # Only the cookie decides success; the status code is informational.
        logger.debug(f"login: credentials exchange status {response.status_code}")

        for cookie in self.http.cookies:
            if cookie.name == CREDENTIAL_COOKIE:
                self._credential = cookie.value
                logger.info("login: obtained session credential")
                return self._credential

        raise CredentialCookieMissing(
            f"{CREDENTIAL_COOKIE} cookie not found after login "
            f"(status {response.status_code})"
        )

    def _fetch_csrf_token(self) -> str:
        url = f"{self.base_url}{CSRF_ENDPOINT}"
        logger.debug(f"login: GET {url}")
        try:
            response = self.http.get(url, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            raise CsrfFetchFailed(f"Failed to fetch CSRF token: {e}") from e

        try:
            return CsrfResponse.from_json(response.content).csrf_token
        except ValueError as e:
            raise CsrfFetchFailed(
                f"CSRF token not found in response (status {response.status_code}): {e}"
            ) from e

    def _drop_credential_cookies(self) -> None:
        """Forget any previous jwt_token so only a fresh one can satisfy login."""
        stale = [c for c in self.http.cookies if c.name == CREDENTIAL_COOKIE]
        for cookie in stale:
            self.http.cookies.clear(cookie.domain, cookie.path, cookie.name)
