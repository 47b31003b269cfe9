from __future__ import annotations

import json
import asyncio
from urllib.parse import parse_qs, urlsplit

import pytest
from websockets.exceptions import ConnectionClosedError

from interview_relay.state import LinkState
from interview_relay.relay.link import UpstreamTranscriptionLink, build_upstream_url


class _Recorder:
    def __init__(self, link: UpstreamTranscriptionLink) -> None:
        self.opened = asyncio.Event()
        self.events: list[dict] = []
        self.errors: list[BaseException] = []
        self.closes: list[tuple[int | None, str]] = []
        link.on_open(self._open)
        link.on_event(self._event)
        link.on_error(self._error)
        link.on_close(self._close)

    async def _open(self) -> None:
        self.opened.set()

    async def _event(self, event: dict) -> None:
        self.events.append(event)

    async def _error(self, exc: BaseException) -> None:
        self.errors.append(exc)

    async def _close(self, code: int | None, reason: str) -> None:
        self.closes.append((code, reason))


def _link(connect) -> UpstreamTranscriptionLink:
    return UpstreamTranscriptionLink(url="wss://upstream.test/v3/ws", api_key="secret", connect_fn=connect)


def test_build_upstream_url_carries_fixed_parameters() -> None:
    url = build_upstream_url("wss://streaming.assemblyai.com/v3/ws")
    parts = urlsplit(url)
    assert f"{parts.scheme}://{parts.netloc}{parts.path}" == "wss://streaming.assemblyai.com/v3/ws"
    assert parse_qs(parts.query) == {
        "sample_rate": ["16000"],
        "format_turns": ["true"],
        "turn_detection_silence_threshold_ms": ["1500"],
        "word_limit": ["50"],
    }


def test_build_upstream_url_appends_to_existing_query() -> None:
    url = build_upstream_url("wss://example.test/ws?region=eu", {"sample_rate": "16000"})
    assert url == "wss://example.test/ws?region=eu&sample_rate=16000"


@pytest.mark.asyncio
async def test_open_is_non_blocking_and_sends_credentials(fake_connect_cls, wait_until) -> None:
    gate = asyncio.Event()
    connect = fake_connect_cls(gate=gate)
    link = _link(connect)
    rec = _Recorder(link)

    task = link.open()
    assert not task.done()
    assert link.state is LinkState.CONNECTING

    gate.set()
    await asyncio.wait_for(rec.opened.wait(), timeout=1.0)
    assert link.state is LinkState.OPEN
    url, kwargs = connect.calls[0]
    assert url == "wss://upstream.test/v3/ws"
    assert kwargs["additional_headers"] == {"Authorization": "secret"}

    await link.close()
    await link.wait_closed()


@pytest.mark.asyncio
async def test_frames_before_open_are_dropped(fake_connect_cls) -> None:
    gate = asyncio.Event()
    connect = fake_connect_cls(gate=gate)
    link = _link(connect)
    rec = _Recorder(link)
    link.open()

    assert await link.send_audio(b"early-1") is False
    assert await link.send_audio(b"early-2") is False

    gate.set()
    await asyncio.wait_for(rec.opened.wait(), timeout=1.0)
    assert await link.send_audio(b"late-1") is True
    assert await link.send_audio(b"late-2") is True

    assert connect.conn.binary_frames == [b"late-1", b"late-2"]
    await link.close()
    await link.wait_closed()


@pytest.mark.asyncio
async def test_events_are_decoded_and_malformed_payloads_dropped(fake_connect_cls, wait_until) -> None:
    connect = fake_connect_cls()
    link = _link(connect)
    rec = _Recorder(link)
    link.open()
    await asyncio.wait_for(rec.opened.wait(), timeout=1.0)

    connect.conn.push("{not json")
    connect.conn.push("[1, 2, 3]")
    connect.conn.push({"type": "Turn", "transcript": "hi", "turn_is_formatted": False})
    await wait_until(lambda: len(rec.events) == 1)

    assert rec.events == [{"type": "Turn", "transcript": "hi", "turn_is_formatted": False}]
    assert rec.errors == []
    assert link.state is LinkState.OPEN

    await link.close()
    await link.wait_closed()


@pytest.mark.asyncio
async def test_request_termination_sends_terminate_once_then_closes(fake_connect_cls) -> None:
    connect = fake_connect_cls()
    link = _link(connect)
    rec = _Recorder(link)
    link.open()
    await asyncio.wait_for(rec.opened.wait(), timeout=1.0)

    await link.send_audio(b"frame")
    await link.request_termination()
    await link.request_termination()
    await link.wait_closed()

    assert [json.loads(t) for t in connect.conn.text_frames] == [{"type": "Terminate"}]
    assert connect.conn.sent[-1] == connect.conn.text_frames[-1]
    assert connect.conn.closed is True
    assert rec.closes == [(1000, "")]
    assert link.state is LinkState.CLOSED
    assert await link.send_audio(b"after") is False


@pytest.mark.asyncio
async def test_remote_close_fires_close_once_without_terminate(fake_connect_cls) -> None:
    connect = fake_connect_cls()
    link = _link(connect)
    rec = _Recorder(link)
    link.open()
    await asyncio.wait_for(rec.opened.wait(), timeout=1.0)

    connect.conn.remote_close(3005, "session expired")
    await link.wait_closed()
    await link.close()

    assert rec.closes == [(3005, "session expired")]
    assert rec.errors == []
    assert connect.conn.text_frames == []


@pytest.mark.asyncio
async def test_transport_error_reports_error_then_close(fake_connect_cls) -> None:
    connect = fake_connect_cls()
    link = _link(connect)
    rec = _Recorder(link)
    link.open()
    await asyncio.wait_for(rec.opened.wait(), timeout=1.0)

    connect.conn.fail(ConnectionClosedError(None, None))
    await link.wait_closed()

    assert len(rec.errors) == 1
    assert isinstance(rec.errors[0], ConnectionClosedError)
    assert len(rec.closes) == 1
    assert link.state is LinkState.CLOSED


@pytest.mark.asyncio
async def test_connect_failure_reports_error_then_close(fake_connect_cls) -> None:
    connect = fake_connect_cls(error=OSError("connection refused"))
    link = _link(connect)
    rec = _Recorder(link)
    link.open()
    await link.wait_closed()

    assert not rec.opened.is_set()
    assert len(rec.errors) == 1
    assert rec.closes == [(None, "")]
    assert link.state is LinkState.CLOSED


@pytest.mark.asyncio
async def test_close_while_connecting_cancels_handshake(fake_connect_cls) -> None:
    gate = asyncio.Event()
    connect = fake_connect_cls(gate=gate)
    link = _link(connect)
    rec = _Recorder(link)
    link.open()
    await asyncio.sleep(0)

    await link.close()
    await link.wait_closed()

    assert not rec.opened.is_set()
    assert rec.closes == [(None, "")]
    assert link.state is LinkState.CLOSED


@pytest.mark.asyncio
async def test_close_before_open_fires_close_once() -> None:
    link = _link(None)
    rec = _Recorder(link)

    await link.close()
    await link.close()

    assert rec.closes == [(None, "")]
    assert link.state is LinkState.CLOSED


def test_handlers_register_once() -> None:
    link = _link(None)

    async def _noop(*_args) -> None:
        return None

    link.on_event(_noop)
    with pytest.raises(RuntimeError):
        link.on_event(_noop)
