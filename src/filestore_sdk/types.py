# Author: PB and Claude
# Date: 2026-10-17
# License: (c) HRDAG, 2026, GPL-2 or newer
#
# ---
# src/filestore_sdk/types.py

"""
FileStore Type Definitions

Content descriptors accepted by uploads, and typed results for the
endpoints the client consumes.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, BinaryIO, Optional, Union
import json

from requests.structures import CaseInsensitiveDict


# Multipart field names understood by PUT /api/v2/file/{bucket}/{path}
FIELD_CONTENT_FILE = "content_file"
FIELD_CONTENT_PATH = "content_path"
FIELD_CONTENT_HTML = "content_html"
FIELD_TYPE = "type"
FIELD_GET_URL = "get_url"


@dataclass(frozen=True)
class FileContent:
    """Local file bytes, sent as a streamed binary part.

    source is either a filesystem path or an open binary file object.
    filename defaults to the basename of the path (or of source.name).
    """
    source: Union[str, Path, BinaryIO]
    filename: Optional[str] = None

    tag = "file"

    def resolved_filename(self) -> str:
        if self.filename:
            return self.filename
        if isinstance(self.source, (str, Path)):
            return Path(self.source).name
        name = getattr(self.source, "name", None)
        if isinstance(name, str) and name:
            return Path(name).name
        return "upload.bin"


@dataclass(frozen=True)
class PathContent:
    """A path the server already knows about."""
    path: str

    tag = "path"


@dataclass(frozen=True)
class HtmlContent:
    """Inline markup stored as the file content."""
    html: str

    tag = "html"


ContentDescriptor = Union[FileContent, PathContent, HtmlContent]


def descriptor_from_dict(data: dict) -> Optional[ContentDescriptor]:
    """
    Build a descriptor from {"type": "file"|"path"|"html", "value": ...}.

    Returns None for an unrecognized type; callers skip those entries.
    """
    kind = data.get("type")
    value = data.get("value")
    if kind == FileContent.tag:
        return FileContent(source=value, filename=data.get("filename"))
    if kind == PathContent.tag:
        return PathContent(path=value)
    if kind == HtmlContent.tag:
        return HtmlContent(html=value)
    return None


@dataclass(frozen=True)
class CsrfResponse:
    """Body of GET /api/auth/csrf."""
    csrf_token: str

    @classmethod
    def from_json(cls, raw: Union[str, bytes]) -> "CsrfResponse":
        """
        Parse the CSRF endpoint body.

        Raises:
            ValueError: If the body is not JSON or has no string csrfToken
        """
        data = json.loads(raw)
        if not isinstance(data, dict):
            raise ValueError("CSRF response is not a JSON object")
        token = data.get("csrfToken")
        if not isinstance(token, str) or not token:
            raise ValueError("csrfToken not found in response")
        return cls(csrf_token=token)


@dataclass
class ApiResponse:
    """Result of a successful authenticated request."""
    status_code: int
    headers: CaseInsensitiveDict = field(default_factory=CaseInsensitiveDict)
    body: Any = None                # Decoded JSON, or raw bytes when not decoded

    def __post_init__(self):
        # Header names are case-insensitive, as in requests
        self.headers = CaseInsensitiveDict(self.headers)

    @property
    def is_json(self) -> bool:
        return not isinstance(self.body, (bytes, bytearray))

    @property
    def url(self) -> Optional[str]:
        """Link to the uploaded file, when the upload asked for get_url."""
        if isinstance(self.body, dict):
            return self.body.get("url")
        return None

    def to_dict(self) -> dict:
        return {
            "status_code": self.status_code,
            "headers": dict(self.headers),
            "body": self.body if self.is_json else None,
        }

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)
