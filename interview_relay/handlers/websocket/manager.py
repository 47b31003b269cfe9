"""Primary WebSocket connection handler orchestration."""

from __future__ import annotations

import asyncio
import logging
import contextlib

from fastapi import WebSocket

from interview_relay.state import RuntimeDeps
from interview_relay.relay import RelaySession
from interview_relay.config.websocket import WS_CLOSE_BUSY_CODE, WS_CLOSE_BUSY_REASON

from .errors import reject_connection
from .message_loop import run_message_loop

logger = logging.getLogger(__name__)


async def _prepare_connection(ws: WebSocket, runtime_deps: RuntimeDeps) -> bool:
    if not await runtime_deps.connections.connect(ws):
        await reject_connection(ws, close_code=WS_CLOSE_BUSY_CODE, reason=WS_CLOSE_BUSY_REASON)
        return False

    try:
        await ws.accept()
    except Exception:
        runtime_deps.connections.disconnect(ws)
        raise
    return True


async def _relay_until_closed(ws: WebSocket, session: RelaySession) -> None:
    loop_task = asyncio.create_task(run_message_loop(ws, session))
    closed_task = asyncio.create_task(session.wait_closed())
    try:
        done, _pending = await asyncio.wait({loop_task, closed_task}, return_when=asyncio.FIRST_COMPLETED)
        if loop_task in done:
            # Client went away first; surface loop errors, then let upstream flush and close.
            loop_task.result()
            await closed_task
    finally:
        pending = {task for task in (loop_task, closed_task) if not task.done()}
        for task in pending:
            task.cancel()
        if pending:
            await asyncio.wait(pending)


async def handle_websocket_connection(ws: WebSocket, runtime_deps: RuntimeDeps) -> None:
    admitted = False
    session: RelaySession | None = None
    try:
        if not await _prepare_connection(ws, runtime_deps):
            logger.info("WebSocket connection rejected; at capacity")
            return
        admitted = True

        session = runtime_deps.relay_bridge.new_session(ws)
        logger.info(
            "Client connected session_id=%s. Active: %s",
            session.session_id,
            runtime_deps.connections.get_connection_count(),
        )
        session.start()
        await _relay_until_closed(ws, session)
    finally:
        # Release the slot before the first await; a cancelled teardown may not reach any later line.
        if admitted:
            runtime_deps.connections.disconnect(ws)
            logger.info(
                "WebSocket connection closed session_id=%s. Active: %s",
                session.session_id if session is not None else None,
                runtime_deps.connections.get_connection_count(),
            )

        if session is not None:
            # Shielded: the upstream link still closes if this handler is cancelled again.
            with contextlib.suppress(Exception):
                await asyncio.shield(session.aclose())


__all__ = ["handle_websocket_connection"]
