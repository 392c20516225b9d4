# Author: PB and Claude
# Date: 2026-10-17
# License: (c) HRDAG, 2026, GPL-2 or newer
#
# ---
# src/filestore_sdk/upload.py

"""
Multipart body assembly for content uploads.

Each content descriptor becomes one form part, in input order:

    FileContent  -> content_file  (binary, with filename)
    PathContent  -> content_path  (text)
    HtmlContent  -> content_html  (text)

followed by the optional `type` and `get_url` fields. Descriptors of any
other kind are skipped.

The body streams through requests_toolbelt's MultipartEncoder. An encoder
can only be read once, so MultipartBody.encoder() builds a fresh one for
every send attempt. File parts start at the position their handle had when
the body was built, and retries seek back there. Streams that cannot seek
(pipes, sockets, stdin) are read into memory once at build time.
"""

import io
import logging
from dataclasses import dataclass
from typing import Any, BinaryIO, Iterable, Optional

from requests_toolbelt import MultipartEncoder

from filestore_sdk.types import (
    FIELD_CONTENT_FILE,
    FIELD_CONTENT_HTML,
    FIELD_CONTENT_PATH,
    FIELD_GET_URL,
    FIELD_TYPE,
    FileContent,
    HtmlContent,
    PathContent,
    descriptor_from_dict,
)

logger = logging.getLogger(__name__)


@dataclass
class MultipartPart:
    """One form field of an upload body."""
    name: str
    value: Any                          # str for text parts, file handle for binary
    filename: Optional[str] = None
    content_type: Optional[str] = None
    start: int = 0                      # handle position at build time

    @property
    def is_file(self) -> bool:
        return self.filename is not None


class MultipartBody:
    """Ordered upload parts plus the file handles opened to fill them."""

    def __init__(self, parts: list[MultipartPart], owned_handles: list[BinaryIO] = None):
        self.parts = parts
        self._owned = owned_handles or []
        self._encoded = False

    def __enter__(self) -> "MultipartBody":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def close(self) -> None:
        """Close the handles this body opened; caller-supplied handles stay open."""
        for fh in self._owned:
            fh.close()
        self._owned = []

    def field_names(self) -> list[str]:
        return [p.name for p in self.parts]

    def encoder(self) -> MultipartEncoder:
        """Build an encoder for one send attempt; later attempts rewind file parts."""
        if self._encoded:
            for part in self.parts:
                if part.is_file:
                    part.value.seek(part.start)
        self._encoded = True

        fields = []
        for part in self.parts:
            if part.is_file:
                fields.append(
                    (part.name, (part.filename, part.value, part.content_type))
                )
            else:
                fields.append((part.name, part.value))
        encoder = MultipartEncoder(fields=fields)
        logger.debug(f"multipart: {self.field_names()} content_length={encoder.len}")
        return encoder


def _rewindable(source) -> BinaryIO:
    """Return source if it can seek, else an in-memory copy of its remaining bytes."""
    seekable = getattr(source, "seekable", None)
    if callable(seekable) and seekable():
        return source
    data = source.read()
    logger.debug(f"build: buffered {len(data)} bytes from non-seekable stream")
    return io.BytesIO(data)


class ContentUploadBuilder:
    """Translates content descriptors into a MultipartBody."""

    def build(
        self,
        descriptors: Iterable,
        mime_type: Optional[str] = None,
        request_url: bool = False,
    ) -> MultipartBody:
        """
        Assemble the upload body.

        Args:
            descriptors: FileContent/PathContent/HtmlContent instances or
                {"type": ..., "value": ...} dicts, in the order to send
            mime_type: Optional MIME type sent as the `type` field
            request_url: If True, send get_url=true so the response links
                to the stored file

        Returns:
            MultipartBody; use it as a context manager so opened files close
        """
        parts = []
        owned = []
        try:
            for item in descriptors:
                descriptor = descriptor_from_dict(item) if isinstance(item, dict) else item

                if isinstance(descriptor, FileContent):
                    source = descriptor.source
                    if hasattr(source, "read"):
                        fh = _rewindable(source)
                    else:
                        fh = open(source, "rb")
                        owned.append(fh)
                    parts.append(MultipartPart(
                        name=FIELD_CONTENT_FILE,
                        value=fh,
                        filename=descriptor.resolved_filename(),
                        content_type="application/octet-stream",
                        start=fh.tell(),
                    ))
                elif isinstance(descriptor, PathContent):
                    parts.append(MultipartPart(name=FIELD_CONTENT_PATH, value=descriptor.path))
                elif isinstance(descriptor, HtmlContent):
                    parts.append(MultipartPart(name=FIELD_CONTENT_HTML, value=descriptor.html))
                else:
                    logger.debug(f"build: skipping unrecognized content descriptor {item!r}")
        except Exception:
            for fh in owned:
                fh.close()
            raise

        if mime_type:
            parts.append(MultipartPart(name=FIELD_TYPE, value=mime_type))
        if request_url:
            parts.append(MultipartPart(name=FIELD_GET_URL, value="true"))

        return MultipartBody(parts, owned)
