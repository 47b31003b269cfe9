"""Send and close helpers for the client WebSocket."""

from __future__ import annotations

import logging
from typing import Any

import orjson
from fastapi import WebSocket, WebSocketDisconnect

from interview_relay.config.websocket import WS_CLOSE_NORMAL_CODE

logger = logging.getLogger(__name__)


async def safe_send_text(ws: WebSocket, text: str) -> bool:
    try:
        await ws.send_text(text)
    except WebSocketDisconnect:
        return False
    except Exception:
        logger.debug("WebSocket send failed", exc_info=True)
        return False
    return True


async def safe_send_json(ws: WebSocket, data: dict[str, Any]) -> bool:
    return await safe_send_text(ws, orjson.dumps(data).decode("utf-8"))


async def safe_close(ws: WebSocket, *, code: int = WS_CLOSE_NORMAL_CODE, reason: str | None = None) -> bool:
    try:
        await ws.close(code=code, reason=reason)
    except Exception:
        logger.debug("WebSocket close failed", exc_info=True)
        return False
    return True


async def reject_connection(ws: WebSocket, *, close_code: int, reason: str) -> None:
    # Accept so the close code and reason reach the client.
    try:
        await ws.accept()
    except Exception:
        return
    await safe_close(ws, code=close_code, reason=reason)


__all__ = ["reject_connection", "safe_close", "safe_send_json", "safe_send_text"]
