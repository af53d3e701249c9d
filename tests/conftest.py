from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import pytest

from polyimage.core.transport import HttpResponse


@dataclass
class RecordedCall:
    kind: str
    method: str
    url: str
    headers: dict[str, str]
    params: Any = None
    json: Any = None
    fields: Any = None


class FakeTransport:
    """Replays queued responses and records every request."""

    def __init__(self) -> None:
        self.calls: list[RecordedCall] = []
        self._queue: list[HttpResponse | BaseException] = []
        self.closed = False

    def queue(self, status: int = 200, body: Any = None) -> None:
        self._queue.append(HttpResponse(status=status, body=body))

    def queue_error(self, exc: BaseException) -> None:
        self._queue.append(exc)

    def _next(self) -> HttpResponse:
        if not self._queue:
            return HttpResponse(status=200, body={})
        item = self._queue.pop(0)
        if isinstance(item, BaseException):
            raise item
        return item

    async def request_json(self, method, url, *, headers=None, params=None, json=None):
        self.calls.append(
            RecordedCall("json", method, url, dict(headers or {}), params=params, json=json)
        )
        return self._next()

    async def request_multipart(self, method, url, *, fields, headers=None):
        self.calls.append(
            RecordedCall("multipart", method, url, dict(headers or {}), fields=dict(fields))
        )
        return self._next()

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture(autouse=True)
def _clear_api_keys(monkeypatch):
    for name in ("OPENAI_API_KEY", "GEMINI_API_KEY", "XAI_API_KEY"):
        monkeypatch.delenv(name, raising=False)
