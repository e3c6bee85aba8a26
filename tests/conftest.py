# tests/conftest.py
from __future__ import annotations

from dataclasses import dataclass, field
import os
import sys
import logging

import pytest

from hac_session import HACClient, HACConfig
from tests import pages


@pytest.fixture(scope="session", autouse=True)
def _tests_log_to_stdout():
    """Send test logs to stdout so they show up under pytest -s."""
    root = logging.getLogger()
    if not any(
        isinstance(h, logging.StreamHandler) and getattr(h, "stream", None) is sys.stdout
        for h in root.handlers
    ):
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
        root.addHandler(handler)
    root.setLevel(os.getenv("TEST_LOG_LEVEL", "INFO").upper())


# Run anyio-marked tests on asyncio only
@pytest.fixture(scope="session")
def anyio_backend():
    return "asyncio"


# ==============================================================
# Scripted stand-in for aiohttp.ClientSession
# ==============================================================

@dataclass
class RecordedRequest:
    method: str
    url: str
    data: str | None
    headers: dict[str, str]
    timeout: object = None


class FakeResponse:
    def __init__(self, body: str, status: int = 200):
        self.status = status
        self._body = body

    async def text(self):
        return self._body

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        return False


class UndecodableResponse(FakeResponse):
    """Response whose body is not valid in its declared charset."""

    def __init__(self, status: int = 200):
        super().__init__("", status)

    async def text(self):
        raise UnicodeDecodeError("utf-8", b"<html>\xff\xfe bad</html>", 6, 7, "invalid start byte")


@dataclass
class FakeCookieJar:
    cleared: int = 0
    domains: list[str] = field(default_factory=list)

    def clear(self, predicate=None):
        self.cleared += 1

    def clear_domain(self, domain):
        self.cleared += 1
        self.domains.append(domain)


@dataclass
class FakeSession:
    """Answers requests from a queue of bodies, responses or exceptions."""

    responses: list = field(default_factory=list)
    requests: list[RecordedRequest] = field(default_factory=list)
    cookie_jar: FakeCookieJar = field(default_factory=FakeCookieJar)
    closed: bool = False

    def queue(self, *items):
        self.responses.extend(items)
        return self

    def request(self, method, url, *, data=None, headers=None, timeout=None):
        self.requests.append(RecordedRequest(method, url, data, dict(headers or {}), timeout))
        if not self.responses:
            raise AssertionError(f"Unexpected request: {method} {url}")
        item = self.responses.pop(0)
        if isinstance(item, BaseException):
            raise item
        if isinstance(item, str):
            return FakeResponse(item)
        return item

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        self.closed = True
        return False


@pytest.fixture
def config():
    return HACConfig.from_dict(
        {
            "host": "hac.example.org",
            "username": "student1",
            "password": "p@ss word!",
            "hac_name": "Example ISD",
            "timeout": 15,
        }
    )


@pytest.fixture
def session():
    return FakeSession()


@pytest.fixture
def client(config, session):
    return HACClient(config, session)


@pytest.fixture
async def logged_in_client(anyio_backend, client, session):
    session.queue(pages.login_page(), pages.landing_page())
    result = await client.login()
    assert result
    session.requests.clear()
    return client
