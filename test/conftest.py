# Author: PB and Claude
# Date: 2026-10-17
# License: (c) HRDAG, 2026, GPL-2 or newer
#
# ---
# test/conftest.py

"""Shared fixtures: a scripted stand-in for the FileStore server."""

import json
from unittest.mock import patch
from urllib.parse import urlparse

import pytest
import requests
from requests.structures import CaseInsensitiveDict


BASE_URL = "https://files.example.org"
API_KEY = "test-api-key"


def make_response(status=200, body=b"", headers=None):
    """Build a real requests.Response without touching the network."""
    if isinstance(body, (dict, list)):
        body = json.dumps(body).encode()
    elif isinstance(body, str):
        body = body.encode()
    response = requests.Response()
    response.status_code = status
    response._content = body
    response.headers = CaseInsensitiveDict(headers or {})
    return response


class FakeServer:
    """
    Replays scripted responses keyed by (method, path).

    Each route holds a queue of replies; the last reply repeats once the
    queue is drained. A reply is a dict with optional status, body,
    headers, cookies (set on the client's jar), or an exception instance
    to raise as a transport failure.
    """

    def __init__(self):
        self.routes = {}
        self.calls = []

    def on(self, method, path, *replies):
        self.routes[(method, path)] = list(replies)
        return self

    def calls_to(self, method, path):
        return [c for c in self.calls if c["method"] == method and c["path"] == path]

    def __call__(self, session, method, url, **kwargs):
        path = urlparse(url).path
        data = kwargs.get("data")
        # Drain streamed bodies the way a real transport would
        if hasattr(data, "read"):
            kwargs["body_bytes"] = data.read()
        self.calls.append({"method": method, "url": url, "path": path, **kwargs})

        replies = self.routes.get((method, path))
        if not replies:
            return make_response(404, b"not found")
        reply = replies.pop(0) if len(replies) > 1 else replies[0]

        if isinstance(reply, Exception):
            raise reply
        for name, value in reply.get("cookies", {}).items():
            session.cookies.set(name, value, domain="files.example.org", path="/")
        return make_response(
            reply.get("status", 200),
            reply.get("body", b""),
            reply.get("headers"),
        )

    def handshake(self, token="xyz", csrf="abc"):
        """Script a successful CSRF + credentials exchange issuing `token`."""
        self.on("GET", "/api/auth/csrf", {"body": {"csrfToken": csrf}})
        self.on(
            "POST",
            "/api/auth/callback/credentials",
            {"body": {"url": "/"}, "cookies": {"jwt_token": token}},
        )
        return self


@pytest.fixture
def server():
    fake = FakeServer()
    with patch.object(requests.Session, "request", autospec=True, side_effect=fake):
        yield fake
