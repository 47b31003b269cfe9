"""Relay session: one client WebSocket paired with one upstream transcription link."""

from __future__ import annotations

import uuid
import asyncio
import logging
from typing import Any

from fastapi import WebSocket

from interview_relay.state import SessionState
from interview_relay.errors import MalformedUpstreamMessage
from interview_relay.handlers.websocket.errors import safe_close, safe_send_json
from interview_relay.config.websocket import (
    WS_CLOSE_NORMAL_CODE,
    WS_CLOSE_UPSTREAM_GONE_CODE,
    WS_CLOSE_UPSTREAM_GONE_REASON,
)

from .link import UpstreamTranscriptionLink
from .normalizer import TranscriptEvent, SessionTerminated, normalize

logger = logging.getLogger(__name__)

_LIVE_STATES = frozenset({SessionState.CONNECTING, SessionState.ACTIVE})


class RelaySession:
    """Moves audio client -> upstream and transcripts upstream -> client.

    States: CONNECTING -> ACTIVE -> CLOSING -> CLOSED. A client disconnect asks
    upstream to terminate gracefully; an upstream close or error closes the
    client without a termination request. Every transition happens between
    awaits, so handlers of one session never interleave a check with its update.
    """

    def __init__(
        self,
        client: WebSocket,
        link: UpstreamTranscriptionLink,
        *,
        session_id: str | None = None,
    ) -> None:
        self.session_id = session_id or uuid.uuid4().hex[:12]
        self._client: WebSocket | None = client
        self._link: UpstreamTranscriptionLink | None = link
        self._state = SessionState.CONNECTING

        self._client_closed = False
        self._upstream_closed = False
        self._upstream_failed = False
        self._closed = asyncio.Event()

        link.on_open(self._handle_upstream_open)
        link.on_event(self._handle_upstream_event)
        link.on_error(self._handle_upstream_error)
        link.on_close(self._handle_upstream_close)

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def link(self) -> UpstreamTranscriptionLink | None:
        """The upstream link; ``None`` once the session is CLOSED."""
        return self._link

    def start(self) -> None:
        if self._link is not None:
            self._link.open()

    async def forward_audio(self, frame: bytes) -> bool:
        # Frames that race the client's own close are dropped, never queued.
        link = self._link
        if self._state not in _LIVE_STATES or link is None:
            return False
        return await link.send_audio(frame)

    async def client_disconnected(self) -> None:
        if self._client_closed and self._state not in _LIVE_STATES:
            return
        self._client_closed = True
        if self._state in _LIVE_STATES:
            self._state = SessionState.CLOSING
            logger.info("Client disconnected session_id=%s", self.session_id)
            link = self._link
            if link is not None:
                await link.request_termination()
        self._maybe_finish()

    async def wait_closed(self) -> None:
        link = self._link
        await self._closed.wait()
        if link is not None:
            await link.wait_closed()

    async def aclose(self) -> None:
        """Tear down whatever is still open, without a graceful termination."""
        link = self._link
        if self._state is not SessionState.CLOSED:
            await self._abort("relay handler exited")
        if link is not None:
            await link.wait_closed()

    async def _abort(self, reason: str) -> None:
        if self._state is SessionState.CLOSED:
            return
        logger.warning("Closing relay session_id=%s: %s", self.session_id, reason)
        self._state = SessionState.CLOSED
        client, link = self._client, self._link
        if not self._client_closed and client is not None:
            self._client_closed = True
            await safe_close(client, code=WS_CLOSE_NORMAL_CODE)
        if link is not None:
            await link.close()
        self._maybe_finish()

    def _maybe_finish(self) -> None:
        if not (self._client_closed and self._upstream_closed):
            return
        self._state = SessionState.CLOSED
        # Both transports are closed; drop the handles so nothing can reach them again.
        self._client = None
        self._link = None
        if not self._closed.is_set():
            self._closed.set()
            logger.debug("relay session_id=%s closed", self.session_id)

    async def _handle_upstream_open(self) -> None:
        if self._state is SessionState.CONNECTING:
            self._state = SessionState.ACTIVE

    async def _handle_upstream_event(self, event: dict[str, Any]) -> None:
        client = self._client
        if self._state is SessionState.CLOSED or self._client_closed or client is None:
            return
        try:
            result = normalize(event)
        except MalformedUpstreamMessage:
            logger.warning("dropping malformed upstream event session_id=%s", self.session_id, exc_info=True)
            return

        if isinstance(result, TranscriptEvent):
            if not await safe_send_json(client, result.to_message()):
                await self._abort("client transport severed")
            return

        if isinstance(result, SessionTerminated):
            logger.info(
                "Transcription session terminated session_id=%s: %ss processed",
                self.session_id,
                result.audio_duration_seconds,
            )
            return

        logger.debug("ignoring upstream event type=%r session_id=%s", result.event_type, self.session_id)

    async def _handle_upstream_error(self, exc: BaseException) -> None:
        logger.error("Transcription service error session_id=%s: %s", self.session_id, exc)
        self._upstream_failed = True
        if self._state in _LIVE_STATES:
            self._state = SessionState.CLOSING

    async def _handle_upstream_close(self, code: int | None, reason: str) -> None:
        self._upstream_closed = True
        if self._state in _LIVE_STATES:
            self._state = SessionState.CLOSING
        client = self._client
        if not self._client_closed and client is not None:
            self._client_closed = True
            if self._upstream_failed:
                await safe_close(client, code=WS_CLOSE_UPSTREAM_GONE_CODE, reason=WS_CLOSE_UPSTREAM_GONE_REASON)
            else:
                await safe_close(client, code=WS_CLOSE_NORMAL_CODE)
        self._maybe_finish()


__all__ = ["RelaySession"]
