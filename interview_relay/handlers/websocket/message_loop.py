"""Inbound client message loop: binary frames are audio, everything else is ignored."""

from __future__ import annotations

import logging

from fastapi import WebSocket, WebSocketDisconnect

from interview_relay.relay import RelaySession

logger = logging.getLogger(__name__)

_MSG_RECEIVE = "websocket.receive"
_MSG_DISCONNECT = "websocket.disconnect"


async def run_message_loop(ws: WebSocket, session: RelaySession) -> None:
    try:
        while True:
            message = await ws.receive()
            msg_type = message.get("type")
            if msg_type == _MSG_DISCONNECT:
                break
            if msg_type != _MSG_RECEIVE:
                continue

            frame = message.get("bytes")
            if frame is None:
                # Text frames carry nothing meaningful for the relay.
                continue
            await session.forward_audio(frame)
    except WebSocketDisconnect:
        pass
    finally:
        await session.client_disconnected()


__all__ = ["run_message_loop"]
