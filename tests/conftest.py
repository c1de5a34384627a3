import asyncio
import sys
from pathlib import Path

import httpx
import pytest

# Ensure pytest-asyncio plugin is loaded so @pytest.mark.asyncio works with pytest>=9.
pytest_plugins = ["pytest_asyncio"]


# Ensure project root is on sys.path for local test runs without installation.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from benchlab.models import HttpResponse  # noqa: E402


class _FakeResponse:
    def __init__(self, status_code: int = 200, text: str = "{}", reason_phrase: str = "OK", headers=None) -> None:
        self.status_code = status_code
        self.text = text
        self.reason_phrase = reason_phrase
        self.headers = httpx.Headers(headers or {"Content-Type": "application/json"})

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300


class FakeHttpxClient:
    def __init__(self, response: _FakeResponse | None = None) -> None:
        self.requests: list[tuple[str, str, bytes | None, dict[str, str]]] = []
        self.response = response or _FakeResponse()

    async def request(self, method: str, url: str, headers=None, content=None):
        self.requests.append((method, url, content, headers or {}))
        return self.response


@pytest.fixture
def fake_httpx_client():
    return FakeHttpxClient()


@pytest.fixture
def fake_client_factory(fake_httpx_client):
    async def factory():
        return fake_httpx_client

    return factory


def make_response(
    status: int = 200, text: str = "{}", status_text: str = "OK", content_type: str | None = "application/json"
):
    headers = {"Content-Type": content_type} if content_type else {}
    return HttpResponse(status=status, status_text=status_text, ok=200 <= status < 300, headers=headers, text=text)


class RecordingSender:
    """Stands in for the HTTP transport; optionally parks until ``gate`` is set."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, str, dict[str, str], bytes | None]] = []
        self.responses: list[HttpResponse] = []
        self.error: Exception | None = None
        self.gate: asyncio.Event | None = None

    async def __call__(self, method: str, url: str, headers: dict[str, str], content: bytes | None) -> HttpResponse:
        self.calls.append((method, url, headers, content))
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        if self.responses:
            return self.responses.pop(0)
        return make_response()


@pytest.fixture
def sender():
    return RecordingSender()


@pytest.fixture
def response_factory():
    return make_response
