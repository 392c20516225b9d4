# Author: PB and Claude
# Date: 2026-10-17
# License: (c) HRDAG, 2026, GPL-2 or newer
#
# ---
# test/test_cli.py

"""Tests for the filestore click CLI."""

import json

import pytest
from click.testing import CliRunner

from filestore_sdk.cli import cli
from filestore_sdk.config import API_KEY_ENV


@pytest.fixture
def config_file(tmp_path, monkeypatch):
    monkeypatch.setenv(API_KEY_ENV, "test-api-key")
    # Keep a real /etc/filestore/filestore.toml out of the picture
    monkeypatch.setattr(
        "filestore_sdk.config.DEFAULT_SYSTEM_CONFIG", tmp_path / "system.toml"
    )
    path = tmp_path / "filestore.toml"
    path.write_text(
        "[server]\n"
        'base_url = "https://files.example.org"\n'
        "timeout = 5\n"
        "\n"
        "[storage]\n"
        'bucket = "docs"\n'
    )
    return path


@pytest.fixture
def runner():
    return CliRunner()


class TestLogin:
    def test_success(self, server, runner, config_file):
        server.handshake()
        result = runner.invoke(cli, ["login", "--config-file", str(config_file)])
        assert result.exit_code == 0
        assert "logged in to https://files.example.org" in result.output

    def test_failure_reported(self, server, runner, config_file):
        server.on("GET", "/api/auth/csrf", {"body": b"nope"})
        result = runner.invoke(cli, ["login", "--config-file", str(config_file)])
        assert result.exit_code == 1
        assert "Error:" in result.output


class TestGet:
    def test_writes_output(self, server, runner, config_file, tmp_path):
        server.handshake()
        server.on("GET", "/api/v2/file/docs/reports/q1.pdf", {"body": b"abc"})
        out = tmp_path / "q1.pdf"

        result = runner.invoke(
            cli,
            ["get", "reports/q1.pdf", "-o", str(out), "--config-file", str(config_file)],
        )

        assert result.exit_code == 0
        assert "wrote 3 bytes" in result.output
        assert out.read_bytes() == b"abc"

    def test_api_error(self, server, runner, config_file, tmp_path):
        server.handshake()
        server.on("GET", "/api/v2/file/docs/a.txt", {"status": 403, "body": b"denied"})

        result = runner.invoke(
            cli,
            ["get", "a.txt", "-o", str(tmp_path / "a.txt"), "--config-file", str(config_file)],
        )

        assert result.exit_code == 1
        assert "API error" in result.output
        assert "403" in result.output


class TestUpload:
    def test_requires_content(self, server, runner, config_file):
        result = runner.invoke(cli, ["upload", "a.txt", "--config-file", str(config_file)])
        assert result.exit_code == 2
        assert server.calls == []

    def test_prints_json(self, server, runner, config_file, tmp_path):
        source = tmp_path / "a.txt"
        source.write_text("hello")
        server.handshake()
        server.on("PUT", "/api/v2/file/docs/notes/a.txt", {"body": {"url": "/s/1"}})

        result = runner.invoke(
            cli,
            [
                "upload", "notes/a.txt",
                "--file", str(source),
                "--type", "text/plain",
                "--get-url",
                "--config-file", str(config_file),
            ],
        )

        assert result.exit_code == 0
        assert json.loads(result.output) == {"url": "/s/1"}
        body = server.calls_to("PUT", "/api/v2/file/docs/notes/a.txt")[0]["body_bytes"]
        assert b'filename="a.txt"' in body
        assert b'name="get_url"' in body

    def test_raw_output(self, server, runner, config_file):
        server.handshake()
        server.on("PUT", "/api/v2/file/other/a.html", {"body": b"stored ok"})

        result = runner.invoke(
            cli,
            [
                "upload", "a.html",
                "--html", "<p>hi</p>",
                "--raw",
                "--bucket", "other",
                "--config-file", str(config_file),
            ],
        )

        assert result.exit_code == 0
        assert result.output.strip() == "stored ok"


class TestConfig:
    def test_valid(self, runner, config_file):
        result = runner.invoke(cli, ["config", "--config-file", str(config_file)])
        assert result.exit_code == 0
        assert "api_key: configured" in result.output
        assert "bucket: docs" in result.output

    def test_invalid(self, runner, tmp_path, monkeypatch):
        monkeypatch.delenv(API_KEY_ENV, raising=False)
        monkeypatch.setattr(
            "filestore_sdk.config.DEFAULT_SYSTEM_CONFIG", tmp_path / "system.toml"
        )
        path = tmp_path / "filestore.toml"
        path.write_text("[storage]\nbucket = \"docs\"\n")

        result = runner.invoke(
            cli, ["config", "--validate-only", "--config-file", str(path)]
        )

        assert result.exit_code == 1
        assert "base_url is not set" in result.output


class TestBrokenConfig:
    def test_malformed_toml(self, server, runner, tmp_path):
        path = tmp_path / "filestore.toml"
        path.write_text("[server\nbase_url=")

        result = runner.invoke(cli, ["login", "--config-file", str(path)])

        assert result.exit_code == 1
        assert "Error: invalid config" in result.output
        assert server.calls == []

    def test_bad_timeout(self, server, runner, tmp_path, monkeypatch):
        monkeypatch.setenv(API_KEY_ENV, "test-api-key")
        monkeypatch.setattr(
            "filestore_sdk.config.DEFAULT_SYSTEM_CONFIG", tmp_path / "system.toml"
        )
        path = tmp_path / "filestore.toml"
        path.write_text('[server]\nbase_url = "https://files.example.org"\ntimeout = "soon"\n')

        result = runner.invoke(
            cli, ["get", "a.txt", "-o", str(tmp_path / "a.txt"), "--config-file", str(path)]
        )

        assert result.exit_code == 1
        assert "timeout" in result.output
        assert server.calls == []
