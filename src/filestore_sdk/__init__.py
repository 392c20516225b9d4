# Author: PB and Claude
# Date: 2026-10-17
# License: (c) HRDAG, 2026, GPL-2 or newer
#
# ---
# src/filestore_sdk/__init__.py

"""
FileStore SDK

A Python client for a FileStore object-storage server that authenticates
with a CSRF handshake and a session cookie.

Basic usage:
    from filestore_sdk import StorageClient, FileContent

    client = StorageClient("https://files.example.org", api_key)
    client.login()
    client.set_bucket("docs")
    data = client.get_file("reports/q1.pdf")
    client.upload_content_list("reports/q2.pdf", [FileContent("q2.pdf")])

Config-driven:
    from filestore_sdk import load_config, download

    config = load_config()
    download("reports/q1.pdf", Path("q1.pdf"), config)
"""

# Client
from filestore_sdk.client import StorageClient

# Config
from filestore_sdk.config import (
    FileStoreConfig,
    load_config,
)

# Types
from filestore_sdk.types import (
    ApiResponse,
    ContentDescriptor,
    FileContent,
    HtmlContent,
    PathContent,
)

# Operations
from filestore_sdk.operations import (
    download,
    get_client,
    upload,
)

# Errors
from filestore_sdk.errors import (
    ApiError,
    AuthError,
    ConfigError,
    CredentialCookieMissing,
    CsrfFetchFailed,
    FileStoreError,
    LoginRequestFailed,
    MalformedResponse,
    NoBucketSelected,
    NotAuthenticated,
    StateError,
    TransportError,
)

__all__ = [
    # Client
    "StorageClient",
    # Config
    "FileStoreConfig",
    "load_config",
    # Types
    "ApiResponse",
    "ContentDescriptor",
    "FileContent",
    "HtmlContent",
    "PathContent",
    # Operations
    "download",
    "get_client",
    "upload",
    # Errors
    "ApiError",
    "AuthError",
    "ConfigError",
    "CredentialCookieMissing",
    "CsrfFetchFailed",
    "FileStoreError",
    "LoginRequestFailed",
    "MalformedResponse",
    "NoBucketSelected",
    "NotAuthenticated",
    "StateError",
    "TransportError",
]
