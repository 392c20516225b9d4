# Author: PB and Claude
# Date: 2026-10-17
# License: (c) HRDAG, 2026, GPL-2 or newer
#
# ---
# test/test_integration.py

"""Integration tests requiring a running FileStore server."""

import tempfile
import uuid
from pathlib import Path

import pytest

from filestore_sdk.config import load_config
from filestore_sdk.operations import download, upload
from filestore_sdk.types import FileContent


@pytest.mark.integration
def test_upload_and_get_file():
    """End-to-end: upload a file, then download it again."""
    config = load_config()
    remote_path = f"integration/{uuid.uuid4().hex}.txt"

    with tempfile.NamedTemporaryFile(mode="w", suffix=".txt", delete=False) as f:
        f.write("test content for get operation")
        test_file = Path(f.name)

    try:
        upload(remote_path, [FileContent(test_file)], config, mime_type="text/plain")

        with tempfile.TemporaryDirectory() as tmpdir:
            dest = Path(tmpdir) / "downloaded.txt"
            download(remote_path, dest, config)

            assert dest.exists(), "Downloaded file not found"
            assert dest.read_text() == "test content for get operation"
    finally:
        test_file.unlink()
