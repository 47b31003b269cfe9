"""Outbound WebSocket link to the realtime transcription service."""

from __future__ import annotations

import asyncio
import logging
import contextlib
from typing import Any
from urllib.parse import urlencode
from collections.abc import Callable, Awaitable

import orjson
import websockets
from websockets.exceptions import ConnectionClosed

from interview_relay.state import LinkState
from interview_relay.errors import MalformedUpstreamMessage
from interview_relay.config.assemblyai import ASSEMBLYAI_URL_PARAMS, UPSTREAM_TYPE_TERMINATE

from .normalizer import decode_upstream_message

logger = logging.getLogger(__name__)

OpenHandler = Callable[[], Awaitable[None]]
EventHandler = Callable[[dict[str, Any]], Awaitable[None]]
ErrorHandler = Callable[[BaseException], Awaitable[None]]
CloseHandler = Callable[[int | None, str], Awaitable[None]]
ConnectFn = Callable[..., Awaitable[Any]]

_TERMINATE_MESSAGE: str = orjson.dumps({"type": UPSTREAM_TYPE_TERMINATE}).decode("utf-8")


def build_upstream_url(endpoint: str, params: dict[str, str] | None = None) -> str:
    query = urlencode(ASSEMBLYAI_URL_PARAMS if params is None else params)
    separator = "&" if "?" in endpoint else "?"
    return f"{endpoint}{separator}{query}"


class UpstreamTranscriptionLink:
    """One streaming session with the transcription service.

    ``open()`` returns immediately; connection success and failure are reported
    through the registered callbacks. ``on_close`` fires exactly once per link,
    whatever ended it (local close, remote close, failed connect, error).
    """

    def __init__(
        self,
        *,
        url: str,
        api_key: str,
        open_timeout_s: float | None = None,
        connect_fn: ConnectFn | None = None,
    ) -> None:
        self._url = url
        self._headers = {"Authorization": api_key}
        self._open_timeout_s = open_timeout_s
        self._connect = connect_fn or websockets.connect

        self._state = LinkState.CONNECTING
        self._ws: Any = None
        self._task: asyncio.Task | None = None
        self._closing = False
        self._termination_sent = False
        self._close_fired = False

        self._on_open: OpenHandler | None = None
        self._on_event: EventHandler | None = None
        self._on_error: ErrorHandler | None = None
        self._on_close: CloseHandler | None = None

    @property
    def state(self) -> LinkState:
        return self._state

    @property
    def is_open(self) -> bool:
        return self._state is LinkState.OPEN and not self._closing

    @staticmethod
    def _register(current: Any, handler: Any, name: str) -> Any:
        if current is not None:
            raise RuntimeError(f"upstream link {name} handler is already registered")
        return handler

    def on_open(self, handler: OpenHandler) -> None:
        self._on_open = self._register(self._on_open, handler, "open")

    def on_event(self, handler: EventHandler) -> None:
        self._on_event = self._register(self._on_event, handler, "event")

    def on_error(self, handler: ErrorHandler) -> None:
        self._on_error = self._register(self._on_error, handler, "error")

    def on_close(self, handler: CloseHandler) -> None:
        self._on_close = self._register(self._on_close, handler, "close")

    def open(self) -> asyncio.Task:
        if self._task is None:
            self._task = asyncio.create_task(self._run())
        return self._task

    async def send_audio(self, frame: bytes) -> bool:
        """Forward one audio frame; frames sent while not open are dropped."""
        ws = self._ws
        if not self.is_open or ws is None:
            return False
        try:
            await ws.send(frame)
        except ConnectionClosed:
            logger.debug("dropping audio frame; upstream connection closed")
            return False
        return True

    async def request_termination(self) -> None:
        """Ask upstream to flush final results, then close the transport."""
        ws = self._ws
        if self.is_open and ws is not None and not self._termination_sent:
            self._termination_sent = True
            try:
                await ws.send(_TERMINATE_MESSAGE)
            except ConnectionClosed:
                logger.debug("upstream closed before termination was sent")
        await self.close()

    async def close(self) -> None:
        """Close without a termination message."""
        if self._state is LinkState.CLOSED or self._closing:
            return
        self._closing = True

        if self._task is None:
            self._state = LinkState.CLOSED
            await self._fire_close(None, "")
            return

        if self._ws is None:
            # Still connecting: abandon the handshake. A task cancelled before its
            # first step never reaches its cleanup, so close is fired here too.
            self._task.cancel()
            await asyncio.wait({self._task})
            self._state = LinkState.CLOSED
            await self._fire_close(None, "")
            return

        try:
            await self._ws.close()
        except Exception:
            logger.debug("upstream close failed", exc_info=True)

    async def wait_closed(self) -> None:
        if self._task is None:
            return
        await asyncio.wait({self._task})

    async def _run(self) -> None:
        code: int | None = None
        reason = ""
        try:
            try:
                ws = await self._connect(
                    self._url,
                    additional_headers=self._headers,
                    open_timeout=self._open_timeout_s,
                )
            except asyncio.CancelledError:
                raise
            except Exception as exc:
                logger.error("upstream connect failed: %s", exc)
                await self._fire_error(exc)
                return

            self._ws = ws
            self._state = LinkState.OPEN
            logger.info("Connected to transcription service")
            if self._on_open is not None:
                await self._on_open()

            try:
                async for message in ws:
                    await self._dispatch(message)
            except ConnectionClosed as exc:
                logger.error("upstream connection error: %s", exc)
                await self._fire_error(exc)
            except Exception as exc:
                logger.exception("upstream reader failed")
                await self._fire_error(exc)
        finally:
            self._state = LinkState.CLOSED
            if self._ws is not None:
                with contextlib.suppress(Exception):
                    await self._ws.close()
                code = getattr(self._ws, "close_code", None)
                reason = getattr(self._ws, "close_reason", None) or ""
            await self._fire_close(code, reason)

    async def _dispatch(self, message: str | bytes) -> None:
        try:
            event = decode_upstream_message(message)
        except MalformedUpstreamMessage:
            logger.warning("dropping malformed upstream message", exc_info=True)
            return
        if self._on_event is not None:
            await self._on_event(event)

    async def _fire_error(self, exc: BaseException) -> None:
        if self._on_error is None:
            return
        try:
            await self._on_error(exc)
        except Exception:
            logger.exception("upstream error handler failed")

    async def _fire_close(self, code: int | None, reason: str) -> None:
        if self._close_fired:
            return
        self._close_fired = True
        logger.info("Transcription service connection closed: %s - %s", code, reason)
        if self._on_close is None:
            return
        try:
            await self._on_close(code, reason)
        except Exception:
            logger.exception("upstream close handler failed")


__all__ = ["UpstreamTranscriptionLink", "build_upstream_url"]
