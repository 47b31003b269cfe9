"""Registry of live relay sessions with optional admission control."""

from __future__ import annotations

import asyncio
from typing import Any


class ConnectionManager:
    def __init__(self, *, max_connections: int = 0) -> None:
        # 0 (or less) means unlimited.
        self._max = max(0, int(max_connections))
        self._lock = asyncio.Lock()
        self._active: set[int] = set()

    @property
    def max_connections(self) -> int:
        return self._max

    async def connect(self, ws: Any) -> bool:
        """Attempt to admit a websocket connection (without accepting it)."""
        key = id(ws)
        async with self._lock:
            if self._max and len(self._active) >= self._max:
                return False
            self._active.add(key)
            return True

    def disconnect(self, ws: Any) -> None:
        """Release a slot. Never awaits, so it also runs from a cancelled teardown."""
        self._active.discard(id(ws))

    def get_connection_count(self) -> int:
        return len(self._active)


__all__ = ["ConnectionManager"]
