"""Lifecycle states for relay sessions and upstream links."""

from __future__ import annotations

from enum import Enum


class SessionState(str, Enum):
    CONNECTING = "connecting"
    ACTIVE = "active"
    CLOSING = "closing"
    CLOSED = "closed"


class LinkState(str, Enum):
    CONNECTING = "connecting"
    OPEN = "open"
    CLOSED = "closed"


__all__ = ["LinkState", "SessionState"]
