"""Factories pairing accepted client WebSockets with upstream transcription links."""

from __future__ import annotations

import logging

from fastapi import WebSocket

from interview_relay.state.settings import UpstreamSettings

from .session import RelaySession
from .link import ConnectFn, UpstreamTranscriptionLink, build_upstream_url

logger = logging.getLogger(__name__)


class RelayBridge:
    def __init__(self, *, upstream: UpstreamSettings, connect_fn: ConnectFn | None = None) -> None:
        self._upstream = upstream
        self._url = build_upstream_url(upstream.endpoint)
        self._connect_fn = connect_fn
        if not upstream.api_key:
            logger.warning("ASSEMBLYAI_API_KEY is not set; upstream sessions will be rejected")

    @property
    def url(self) -> str:
        return self._url

    def new_link(self) -> UpstreamTranscriptionLink:
        return UpstreamTranscriptionLink(
            url=self._url,
            api_key=self._upstream.api_key,
            open_timeout_s=self._upstream.open_timeout_s,
            connect_fn=self._connect_fn,
        )

    def new_session(self, ws: WebSocket) -> RelaySession:
        return RelaySession(ws, self.new_link())


__all__ = ["RelayBridge"]
