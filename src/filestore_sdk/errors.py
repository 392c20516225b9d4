# Author: PB and Claude
# Date: 2026-10-17
# License: (c) HRDAG, 2026, GPL-2 or newer
#
# ---
# src/filestore_sdk/errors.py

"""
FileStore error hierarchy.

Every failure surfaced by the library derives from FileStoreError:

    TransportError        network/IO failure, never retried
    AuthError             login handshake failures
      CsrfFetchFailed
      LoginRequestFailed
      CredentialCookieMissing
    StateError            preconditions, raised before any network call
      NotAuthenticated
      NoBucketSelected
    ApiError              non-2xx status (status_code + body attached)
      MalformedResponse   2xx body that is not valid JSON
    ConfigError           missing or invalid configuration
"""

# Longest body excerpt carried in an error message
BODY_SNIPPET_CHARS = 500


def body_snippet(body) -> str:
    """Decode and truncate a response body for error messages."""
    if body is None:
        return ""
    if isinstance(body, bytes):
        body = body.decode("utf-8", errors="replace")
    if len(body) > BODY_SNIPPET_CHARS:
        return body[:BODY_SNIPPET_CHARS] + "..."
    return body


class FileStoreError(Exception):
    """Base exception for FileStore operations."""
    pass


class TransportError(FileStoreError):
    """Raised when the HTTP transport fails (DNS, connect, timeout)."""
    pass


class AuthError(FileStoreError):
    """Raised when the login handshake fails."""
    pass


class CsrfFetchFailed(AuthError):
    """CSRF endpoint unreachable or its response had no csrfToken."""
    pass


class LoginRequestFailed(AuthError):
    """Credential exchange request failed at the transport level."""
    pass


class CredentialCookieMissing(AuthError):
    """Handshake completed but no jwt_token cookie was set."""
    pass


class StateError(FileStoreError):
    """Raised when an operation is attempted in the wrong client state."""
    pass


class NotAuthenticated(StateError):
    pass


class NoBucketSelected(StateError):
    pass


class ApiError(FileStoreError):
    """Raised when the API answers with a non-2xx status."""

    def __init__(self, message: str, status_code: int = None, body: bytes = None):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class MalformedResponse(ApiError):
    """Raised when a successful response cannot be decoded as JSON."""
    pass


class ConfigError(FileStoreError):
    """Raised when config is missing required fields."""
    pass
