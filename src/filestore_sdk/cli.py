# Author: PB and Claude
# Date: 2026-10-17
# License: (c) HRDAG, 2026, GPL-2 or newer
#
# ---
# src/filestore_sdk/cli.py

"""
FileStore Command Line Interface

Thin wrapper around the operations module.
"""

import json
import sys
from pathlib import Path

import click

from filestore_sdk import config as config_module
from filestore_sdk import operations
from filestore_sdk.errors import ApiError, FileStoreError
from filestore_sdk.types import FileContent, HtmlContent, PathContent


def handle_api_error(func):
    """Decorator to report library errors and exit non-zero."""
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except ApiError as e:
            click.echo(f"Error: API error: {e}", err=True)
            sys.exit(1)
        except FileStoreError as e:
            click.echo(f"Error: {e}", err=True)
            sys.exit(1)
        except FileNotFoundError as e:
            click.echo(f"Error: {e}", err=True)
            sys.exit(1)
        except ValueError as e:
            # Malformed toml, bad setting values, empty key file
            click.echo(f"Error: invalid config: {e}", err=True)
            sys.exit(1)
    wrapper.__name__ = func.__name__
    wrapper.__doc__ = func.__doc__
    return wrapper


config_file_option = click.option(
    "--config-file",
    type=click.Path(exists=True, path_type=Path),
    help="Config file path (default: ~/.filestore.toml)",
)

bucket_option = click.option(
    "--bucket",
    help="Bucket to use (default: storage.bucket from config)",
)


@click.group()
def cli():
    """FileStore CLI."""
    pass


@cli.command()
@config_file_option
@handle_api_error
def login(config_file: Path) -> None:
    """
    Check that the configured API key can log in.
    """
    config = config_module.load_config(config_file)
    client = operations.get_client(config)
    click.echo(f"logged in to {client.base_url}")


@cli.command()
@click.argument("remote_path", required=True)
@click.option(
    "--output", "-o",
    type=click.Path(path_type=Path),
    required=True,
    help="Local file to write",
)
@config_file_option
@bucket_option
@handle_api_error
def get(remote_path: str, output: Path, config_file: Path, bucket: str) -> None:
    """
    Download a file from the bucket.

    Examples:

        filestore get reports/q1.pdf -o q1.pdf --bucket docs
    """
    config = config_module.load_config(config_file)
    size = operations.download(remote_path, output, config, bucket=bucket)
    click.echo(f"wrote {size} bytes to {output}")


@cli.command()
@click.argument("target_path", required=True)
@click.option(
    "--file", "files",
    multiple=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Local file to send as content_file (repeatable)",
)
@click.option(
    "--path", "paths",
    multiple=True,
    help="Server-side path to send as content_path (repeatable)",
)
@click.option(
    "--html", "htmls",
    multiple=True,
    help="Inline HTML to send as content_html (repeatable)",
)
@click.option("--type", "mime_type", help="MIME type of the stored content")
@click.option("--get-url", is_flag=True, help="Ask the server for a link to the file")
@click.option("--raw", is_flag=True, help="Print the response body without JSON decoding")
@config_file_option
@bucket_option
@handle_api_error
def upload(
    target_path: str,
    files: tuple,
    paths: tuple,
    htmls: tuple,
    mime_type: str,
    get_url: bool,
    raw: bool,
    config_file: Path,
    bucket: str,
) -> None:
    """
    Upload content to TARGET_PATH in the bucket.

    Examples:

        filestore upload reports/q1.pdf --file q1.pdf --type application/pdf

        filestore upload notes/hello.html --html "<p>hello</p>" --get-url
    """
    contents = (
        [FileContent(f) for f in files]
        + [PathContent(p) for p in paths]
        + [HtmlContent(h) for h in htmls]
    )
    if not contents:
        raise click.UsageError("give at least one of --file, --path, --html")

    config = config_module.load_config(config_file)
    result = operations.upload(
        target_path,
        contents,
        config,
        bucket=bucket,
        mime_type=mime_type,
        request_url=get_url,
        decode_json=not raw,
    )

    if raw:
        click.echo(result.body.decode("utf-8", errors="replace"))
    else:
        click.echo(json.dumps(result.body, indent=2))


@cli.command()
@config_file_option
@click.option(
    "--validate-only",
    is_flag=True,
    help="Only validate config, don't display it",
)
def config(config_file: Path, validate_only: bool) -> None:
    """
    Display and validate FileStore configuration.

    Examples:

        filestore config

        filestore config --validate-only
    """
    config_path = config_file or config_module.DEFAULT_USER_CONFIG

    try:
        cfg = config_module.load_config(config_file)
    except (FileNotFoundError, ValueError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    errors, warnings = cfg.validate()

    if not validate_only:
        click.echo(f"Config file: {config_path}")
        click.echo()
        click.echo("Settings:")
        click.echo(f"  base_url: {cfg.base_url or '(not set)'}")
        click.echo(f"  api_key: {'configured' if cfg.api_key else '(not set)'}")
        click.echo(f"  bucket: {cfg.bucket or '(not set)'}")
        click.echo(f"  timeout: {cfg.timeout}")
        click.echo()

    if errors:
        click.echo("Errors:", err=True)
        for e in errors:
            click.echo(f"  ✗ {e}", err=True)
    if warnings:
        click.echo("Warnings:")
        for w in warnings:
            click.echo(f"  ⚠ {w}")
    if not errors and not warnings:
        click.echo("✓ Config is valid")

    sys.exit(1 if errors else 0)
