# Author: PB and Claude
# Date: 2026-10-17
# License: (c) HRDAG, 2026, GPL-2 or newer
#
# ---
# src/filestore_sdk/client.py

"""
StorageClient: public entry point of the FileStore SDK.

    client = StorageClient("https://files.example.org", api_key)
    client.login()
    client.set_bucket("docs")
    pdf = client.get_file("reports/q1.pdf")
    client.upload_content_list("notes/a.html", [HtmlContent("<p>hi</p>")])
"""

import logging
from typing import Iterable, Optional

import requests

from filestore_sdk.api import AuthenticatedRequestExecutor
from filestore_sdk.config import DEFAULT_TIMEOUT, FileStoreConfig
from filestore_sdk.errors import NoBucketSelected, NotAuthenticated
from filestore_sdk.session import SessionManager
from filestore_sdk.types import ApiResponse
from filestore_sdk.upload import ContentUploadBuilder

logger = logging.getLogger(__name__)

FILE_ENDPOINT = "/api/v2/file"


class StorageClient:
    """Client for one FileStore server and API key."""

    def __init__(self, base_url: str, api_key: str, timeout: float = DEFAULT_TIMEOUT):
        """
        Args:
            base_url: Server root (e.g. "https://files.example.org")
            api_key: Static API key used by the login handshake
            timeout: Per-request timeout in seconds
        """
        self.base_url = base_url.rstrip("/")
        self.bucket: Optional[str] = None
        self.http = requests.Session()
        self.sessions = SessionManager(self.http, self.base_url, api_key, timeout=timeout)
        self.executor = AuthenticatedRequestExecutor(self.http, self.sessions, timeout=timeout)
        self.uploads = ContentUploadBuilder()

    @classmethod
    def from_config(cls, config: FileStoreConfig) -> "StorageClient":
        """Create a client from config; the bucket is preselected when configured."""
        config.require()
        client = cls(config.base_url, config.api_key, timeout=config.timeout)
        if config.bucket:
            client.set_bucket(config.bucket)
        return client

    @property
    def credential(self) -> Optional[str]:
        return self.sessions.credential

    @property
    def is_authenticated(self) -> bool:
        return self.sessions.is_authenticated

    def set_bucket(self, name: str) -> None:
        self.bucket = name

    def login(self) -> str:
        """Authenticate and return the session credential."""
        return self.sessions.login()

    def _require_session_and_bucket(self) -> None:
        if not self.sessions.is_authenticated:
            raise NotAuthenticated("Not authenticated. Please login first.")
        if not self.bucket:
            raise NoBucketSelected("No bucket set. Please select bucket first.")

    def _file_url(self, path: str) -> str:
        return f"{self.base_url}{FILE_ENDPOINT}/{self.bucket}/{path}"

    def get_file(self, path: str) -> bytes:
        """
        Download a file from the selected bucket.

        The body is returned byte-for-byte; it is never JSON-decoded.
        """
        self._require_session_and_bucket()
        url = self._file_url(path)
        logger.debug(f"get_file: {url}")
        response = self.executor.execute(
            "GET",
            url,
            headers={"Accept": "*/*"},
            decode_json=False,
        )
        return response.body

    def upload_content_list(
        self,
        target_path: str,
        descriptors: Iterable,
        mime_type: Optional[str] = None,
        request_url: bool = False,
        decode_json: bool = True,
    ) -> ApiResponse:
        """
        Upload content to `target_path` in the selected bucket.

        Args:
            target_path: Folder and filename inside the bucket
            descriptors: FileContent/PathContent/HtmlContent items (or
                {"type": "file"|"path"|"html", "value": ...} dicts)
            mime_type: Optional MIME type (e.g. "application/pdf")
            request_url: If True, the response includes a link to the file
            decode_json: Whether to decode the response body as JSON

        Returns:
            ApiResponse
        """
        self._require_session_and_bucket()
        url = self._file_url(target_path)

        with self.uploads.build(descriptors, mime_type=mime_type, request_url=request_url) as body:
            logger.info(f"upload: {target_path} fields={body.field_names()}")
            return self.executor.execute(
                "PUT",
                url,
                headers={"Accept": "application/json"},
                body=body,
                decode_json=decode_json,
            )
