# Author: PB and Claude
# Date: 2026-10-17
# License: (c) HRDAG, 2026, GPL-2 or newer
#
# ---
# src/filestore_sdk/api.py

"""
Authenticated request execution for the FileStore API.

Every authenticated call goes through AuthenticatedRequestExecutor.execute,
which attaches the bearer credential, re-logs in once on 401, and turns the
response into an ApiResponse or a typed error.

Debug logging:
    Enable with: FILESTORE_DEBUG=1 or by setting log level to DEBUG
    Example: FILESTORE_DEBUG=1 filestore get reports/q1.pdf -o q1.pdf
"""

import json
import logging
import os
from typing import Optional

import requests
from requests.structures import CaseInsensitiveDict

from filestore_sdk.errors import (
    ApiError,
    MalformedResponse,
    TransportError,
    body_snippet,
)
from filestore_sdk.session import SessionManager
from filestore_sdk.types import ApiResponse
from filestore_sdk.upload import MultipartBody

# Configure logger for this module
logger = logging.getLogger(__name__)

# Enable debug logging via environment variable
if os.environ.get("FILESTORE_DEBUG"):
    logging.basicConfig(
        level=logging.DEBUG,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )
    logging.getLogger("filestore_sdk").setLevel(logging.DEBUG)

HTTP_UNAUTHORIZED = 401


class AuthenticatedRequestExecutor:
    """Runs one logical authenticated operation with at most one re-login."""

    def __init__(self, http: requests.Session, sessions: SessionManager, timeout: float = 60):
        self.http = http
        self.sessions = sessions
        self.timeout = timeout

    def _request(self, method: str, url: str, **kwargs) -> requests.Response:
        """Make one HTTP request; only transport failures raise."""
        logger.debug(f"Request: {method} {url}")
        kwargs.setdefault("timeout", self.timeout)

        try:
            response = self.http.request(method, url, **kwargs)
        except requests.exceptions.RequestException as e:
            raise TransportError(f"{method} {url} failed: {e}") from e

        logger.debug(f"Response status: {response.status_code}")
        logger.debug(f"Response headers: {dict(response.headers)}")
        if logger.isEnabledFor(logging.DEBUG):
            # Truncate body for logging (first 2000 bytes)
            preview = response.content[:2000] if response.content else b"(empty)"
            logger.debug(f"Response body: {preview!r}")

        return response

    def execute(
        self,
        method: str,
        url: str,
        allow_retry: bool = True,
        decode_json: bool = True,
        headers: Optional[dict] = None,
        body: Optional[MultipartBody] = None,
        **options,
    ) -> ApiResponse:
        """
        Perform an authenticated request.

        Args:
            method: HTTP method
            url: Absolute URL
            allow_retry: If True, a 401 triggers one re-login and one retry
            decode_json: If False, the raw body bytes are returned
            headers: Extra request headers
            body: Multipart body, re-encoded for each attempt
            **options: Passed through to requests (params, data, ...)

        Returns:
            ApiResponse with decoded JSON or raw bytes in .body
            (None for an empty 2xx body when decode_json is set)

        Raises:
            TransportError: Network failure (not retried)
            AuthError: Re-login after a 401 failed
            ApiError: Non-2xx status, including a 401 after the retry
            MalformedResponse: 2xx body that is not JSON when decode_json
        """
        retried = False
        while True:
            credential = self.sessions.credential
            request_headers = dict(headers or {})
            if credential:
                request_headers["Authorization"] = f"Bearer {credential}"

            kwargs = dict(options)
            if body is not None:
                encoder = body.encoder()
                kwargs["data"] = encoder
                request_headers["Content-Type"] = encoder.content_type

            response = self._request(method, url, headers=request_headers, **kwargs)

            if response.status_code == HTTP_UNAUTHORIZED and allow_retry and not retried:
                logger.info(f"{method} {url}: 401, re-authenticating once")
                retried = True
                self.sessions.refresh(credential)
                continue
            break

        status = response.status_code
        if status < 200 or status >= 300:
            raise ApiError(
                f"Request failed with status {status}: {body_snippet(response.content)}",
                status_code=status,
                body=response.content,
            )

        headers_out = CaseInsensitiveDict(response.headers)
        if not decode_json:
            return ApiResponse(status_code=status, headers=headers_out, body=response.content)

        if not response.content.strip():
            # 204 and friends carry nothing to decode
            return ApiResponse(status_code=status, headers=headers_out, body=None)

        try:
            decoded = json.loads(response.content)
        except ValueError as e:
            raise MalformedResponse(
                f"Invalid JSON response (status {status}): {e}",
                status_code=status,
                body=response.content,
            ) from e
        return ApiResponse(status_code=status, headers=headers_out, body=decoded)
