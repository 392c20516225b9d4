# Author: PB and Claude
# Date: 2026-10-17
# License: (c) HRDAG, 2026, GPL-2 or newer
#
# ---
# src/filestore_sdk/config.py

"""
FileStore Configuration Management

Reads two toml files:
  /etc/filestore/filestore.toml  -- system-wide defaults (server url, timeout)
  ~/.filestore.toml              -- per-user settings (api key file, bucket)

The API key lives in a separate file referenced by [server].api_key_file,
or comes from the FILESTORE_API_KEY environment variable.
Deep merge: the system file is base, the user file overrides at section level.
"""

import os
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from filestore_sdk.errors import ConfigError


DEFAULT_SYSTEM_CONFIG = Path("/etc/filestore/filestore.toml")
DEFAULT_USER_CONFIG = Path.home() / ".filestore.toml"
API_KEY_ENV = "FILESTORE_API_KEY"
DEFAULT_TIMEOUT = 60


@dataclass
class FileStoreConfig:
    """Complete FileStore client configuration."""
    base_url: Optional[str] = None
    api_key: Optional[str] = None
    bucket: Optional[str] = None
    timeout: float = DEFAULT_TIMEOUT

    def require(self) -> None:
        """Raise ConfigError unless the config can build a client."""
        errors, _ = self.validate()
        if errors:
            raise ConfigError("; ".join(errors))

    def validate(self) -> tuple[list[str], list[str]]:
        """
        Validate configuration, return (errors, warnings).
        Empty errors list means config is valid for operations.
        """
        errors = []
        warnings = []

        if not self.base_url:
            errors.append("server.base_url is not set")
        elif not self.base_url.startswith(("http://", "https://")):
            errors.append(f"server.base_url '{self.base_url}' is not an http(s) URL")

        if not self.api_key:
            errors.append(f"no API key (set server.api_key_file or {API_KEY_ENV})")

        if self.timeout <= 0:
            errors.append(f"server.timeout must be positive, got {self.timeout}")

        # Bucket can also be passed per command
        if not self.bucket:
            warnings.append("storage.bucket is not set")

        if self.base_url and self.base_url.startswith("http://"):
            warnings.append("server.base_url uses plain http; the API key is sent unencrypted")

        return errors, warnings


def _deep_merge(base: dict, override: dict) -> dict:
    """Merge override into base at section level.

    For top-level keys that are both dicts (TOML sections), merge their
    contents with override winning on key conflict.
    For non-dict values, override replaces base.
    """
    merged = dict(base)
    for key, val in override.items():
        if key in merged and isinstance(merged[key], dict) and isinstance(val, dict):
            merged[key] = {**merged[key], **val}
        else:
            merged[key] = val
    return merged


def _load_api_key(key_file: Path) -> str:
    """Read the API key file.

    Raises:
        FileNotFoundError: If the key file doesn't exist
        ValueError: If the key file is empty
    """
    if not key_file.exists():
        raise FileNotFoundError(f"API key file not found: {key_file}")

    key = key_file.read_text().strip()
    if not key:
        raise ValueError(f"API key file is empty: {key_file}")
    return key


def _read_toml(path: Path) -> dict:
    with open(path, "rb") as f:
        return tomllib.load(f)


def load_config(
    config_path: Path = None, system_path: Path = None
) -> FileStoreConfig:
    """Load config from the system and user toml files.

    Args:
        config_path: User config. Default: ~/.filestore.toml. If given
            explicitly it must exist.
        system_path: System config. Default: /etc/filestore/filestore.toml

    Returns:
        FileStoreConfig object

    Raises:
        FileNotFoundError: If an explicit config file or the key file is missing
        ValueError: If config files are invalid
    """
    system_file = system_path or DEFAULT_SYSTEM_CONFIG
    user_file = config_path or DEFAULT_USER_CONFIG

    # Both files are optional unless named explicitly
    system = _read_toml(system_file) if system_file.exists() else {}

    if config_path is not None and not user_file.exists():
        raise FileNotFoundError(f"Config file not found: {user_file}")
    user = _read_toml(user_file) if user_file.exists() else {}

    config = _deep_merge(system, user)

    server = config.get("server", {})
    storage = config.get("storage", {})

    api_key = os.environ.get(API_KEY_ENV)
    if not api_key and "api_key_file" in server:
        api_key = _load_api_key(Path(server["api_key_file"]).expanduser())

    timeout = server.get("timeout", DEFAULT_TIMEOUT)
    if not isinstance(timeout, (int, float)):
        raise ValueError(f"server.timeout must be a number, got {timeout!r}")

    base_url = server.get("base_url")
    if base_url:
        base_url = base_url.rstrip("/")

    return FileStoreConfig(
        base_url=base_url,
        api_key=api_key,
        bucket=storage.get("bucket"),
        timeout=timeout,
    )
