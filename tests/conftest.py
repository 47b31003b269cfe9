from __future__ import annotations

import sys
import json
import asyncio
from pathlib import Path
from typing import Any
from collections.abc import Callable, Awaitable

import pytest
from websockets.exceptions import ConnectionClosedOK

_END = object()


def pytest_configure() -> None:
    # Keep `import interview_relay...` working when running `pytest` from the repo root.
    repo_root = Path(__file__).resolve().parents[1]
    repo_root_str = str(repo_root)
    if repo_root_str not in sys.path:
        sys.path.insert(0, repo_root_str)


class FakeUpstreamConnection:
    """Stands in for a websockets client connection to the transcription service."""

    def __init__(
        self,
        *,
        replies: list[str | dict[str, Any]] | None = None,
        close_after_replies: bool = False,
    ) -> None:
        self.sent: list[str | bytes] = []
        self.closed = False
        self.close_calls = 0
        self.close_code: int | None = None
        self.close_reason: str = ""
        # Messages emitted once, after the first binary frame arrives.
        self._replies = list(replies or [])
        self._close_after_replies = close_after_replies
        self._incoming: asyncio.Queue[Any] = asyncio.Queue()

    @property
    def binary_frames(self) -> list[bytes]:
        return [item for item in self.sent if isinstance(item, bytes)]

    @property
    def text_frames(self) -> list[str]:
        return [item for item in self.sent if isinstance(item, str)]

    def push(self, message: str | bytes | dict[str, Any]) -> None:
        if isinstance(message, dict):
            message = json.dumps(message)
        self._incoming.put_nowait(message)

    def fail(self, exc: BaseException) -> None:
        self.closed = True
        self.close_code = 1006
        self._incoming.put_nowait(exc)

    def remote_close(self, code: int = 1000, reason: str = "") -> None:
        self.closed = True
        self.close_code = code
        self.close_reason = reason
        self._incoming.put_nowait(_END)

    async def send(self, data: str | bytes) -> None:
        if self.closed:
            raise ConnectionClosedOK(None, None)
        self.sent.append(data)
        if isinstance(data, bytes) and self._replies:
            for reply in self._replies:
                self.push(reply)
            self._replies = []
            if self._close_after_replies:
                self.remote_close(1000, "")

    async def close(self) -> None:
        self.close_calls += 1
        if self.closed:
            return
        self.remote_close(1000, "")

    def __aiter__(self) -> FakeUpstreamConnection:
        return self

    async def __anext__(self) -> str | bytes:
        item = await self._incoming.get()
        if item is _END:
            raise StopAsyncIteration
        if isinstance(item, BaseException):
            raise item
        return item


class FakeConnect:
    """Replacement for ``websockets.connect`` returning a fake connection."""

    def __init__(
        self,
        conn: FakeUpstreamConnection | None = None,
        *,
        error: BaseException | None = None,
        gate: asyncio.Event | None = None,
    ) -> None:
        self.conn = conn or FakeUpstreamConnection()
        self.error = error
        self.gate = gate
        self.calls: list[tuple[str, dict[str, Any]]] = []

    async def __call__(self, url: str, **kwargs: Any) -> FakeUpstreamConnection:
        self.calls.append((url, kwargs))
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        return self.conn


class FakeClientWebSocket:
    """Minimal stand-in for the accepted client WebSocket."""

    def __init__(self, *, fail_send: bool = False) -> None:
        self.fail_send = fail_send
        self.sent_text: list[str] = []
        self.close_calls: list[tuple[int, str | None]] = []
        self.accepted = False
        self._inbound: asyncio.Queue[dict[str, Any]] = asyncio.Queue()

    @property
    def messages(self) -> list[dict[str, Any]]:
        return [json.loads(text) for text in self.sent_text]

    async def accept(self) -> None:
        self.accepted = True

    async def receive(self) -> dict[str, Any]:
        return await self._inbound.get()

    def feed(self, message: dict[str, Any]) -> None:
        self._inbound.put_nowait(message)

    async def send_text(self, text: str) -> None:
        if self.fail_send:
            raise RuntimeError("client transport severed")
        self.sent_text.append(text)

    async def close(self, code: int = 1000, reason: str | None = None) -> None:
        self.close_calls.append((code, reason))


@pytest.fixture
def upstream_conn() -> FakeUpstreamConnection:
    return FakeUpstreamConnection()


@pytest.fixture
def fake_connect_cls() -> type[FakeConnect]:
    return FakeConnect


@pytest.fixture
def upstream_conn_cls() -> type[FakeUpstreamConnection]:
    return FakeUpstreamConnection


@pytest.fixture
def client_ws_cls() -> type[FakeClientWebSocket]:
    return FakeClientWebSocket


@pytest.fixture
def wait_until() -> Callable[..., Awaitable[None]]:
    async def _wait(predicate: Callable[[], bool], timeout: float = 1.0) -> None:
        async def _poll() -> None:
            while not predicate():
                await asyncio.sleep(0.005)

        await asyncio.wait_for(_poll(), timeout=timeout)

    return _wait
