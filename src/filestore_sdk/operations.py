# Author: PB and Claude
# Date: 2026-10-17
# License: (c) HRDAG, 2026, GPL-2 or newer
#
# ---
# src/filestore_sdk/operations.py

"""
FileStore Operations

High-level operations driven by config. Each one builds a client, logs in,
and performs a single task.
"""

import logging
from pathlib import Path
from typing import Iterable, Optional

from filestore_sdk.client import StorageClient
from filestore_sdk.config import FileStoreConfig
from filestore_sdk.errors import ConfigError
from filestore_sdk.types import ApiResponse

logger = logging.getLogger(__name__)


def get_client(config: FileStoreConfig, bucket: str = None, login: bool = True) -> StorageClient:
    """
    Create a StorageClient from config.

    Args:
        config: FileStoreConfig with base_url and api_key
        bucket: Override the configured bucket
        login: If True, run the login handshake before returning

    Raises:
        ConfigError: If config lacks base_url or api_key
        AuthError: If login fails
    """
    client = StorageClient.from_config(config)
    if bucket:
        client.set_bucket(bucket)
    if login:
        client.login()
    return client


def _bucket_client(config: FileStoreConfig, bucket: str = None) -> StorageClient:
    """Create a client, check that a bucket is selected, then log in."""
    client = get_client(config, bucket=bucket, login=False)
    if not client.bucket:
        raise ConfigError("No bucket given and no storage.bucket in config")
    client.login()
    return client


def download(
    remote_path: str,
    dest: Path,
    config: FileStoreConfig,
    bucket: str = None,
) -> int:
    """
    Download a file and write it to dest.

    Returns:
        Number of bytes written
    """
    client = _bucket_client(config, bucket=bucket)
    data = client.get_file(remote_path)

    dest = Path(dest)
    if dest.parent and not dest.parent.exists():
        dest.parent.mkdir(parents=True, exist_ok=True)
    dest.write_bytes(data)
    logger.info(f"download: {remote_path} -> {dest} ({len(data)} bytes)")
    return len(data)


def upload(
    target_path: str,
    contents: Iterable,
    config: FileStoreConfig,
    bucket: str = None,
    mime_type: Optional[str] = None,
    request_url: bool = False,
    decode_json: bool = True,
) -> ApiResponse:
    """
    Upload content descriptors to target_path.

    See StorageClient.upload_content_list for the descriptor forms.
    """
    client = _bucket_client(config, bucket=bucket)
    return client.upload_content_list(
        target_path,
        contents,
        mime_type=mime_type,
        request_url=request_url,
        decode_json=decode_json,
    )
