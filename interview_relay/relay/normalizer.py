"""Translate upstream streaming events into the client-facing transcript shape."""

from __future__ import annotations

from typing import Any
from dataclasses import dataclass

import orjson

from interview_relay.errors import MalformedUpstreamMessage
from interview_relay.config.assemblyai import UPSTREAM_TYPE_TURN, UPSTREAM_TYPE_TERMINATION
from interview_relay.config.websocket import (
    WS_KEY_TEXT,
    WS_KEY_TYPE,
    WS_MESSAGE_FINAL,
    WS_MESSAGE_PARTIAL,
    WS_TYPE_TRANSCRIPT,
    WS_KEY_MESSAGE_TYPE,
)


@dataclass(frozen=True, slots=True)
class TranscriptEvent:
    kind: str
    text: str = ""

    @property
    def is_final(self) -> bool:
        return self.kind == WS_MESSAGE_FINAL

    def to_message(self) -> dict[str, str]:
        return {
            WS_KEY_TYPE: WS_TYPE_TRANSCRIPT,
            WS_KEY_MESSAGE_TYPE: self.kind,
            WS_KEY_TEXT: self.text,
        }


@dataclass(frozen=True, slots=True)
class SessionTerminated:
    """Upstream acknowledged the end of the session. Informational only."""

    audio_duration_seconds: float | None = None


@dataclass(frozen=True, slots=True)
class Ignored:
    event_type: Any = None


NormalizedEvent = TranscriptEvent | SessionTerminated | Ignored


def decode_upstream_message(raw: str | bytes) -> dict[str, Any]:
    try:
        event = orjson.loads(raw)
    except orjson.JSONDecodeError as exc:
        raise MalformedUpstreamMessage(f"invalid JSON: {exc}") from exc
    if not isinstance(event, dict):
        raise MalformedUpstreamMessage("upstream message must be a JSON object")
    return event


def _duration_or_none(value: Any) -> float | None:
    if isinstance(value, bool) or not isinstance(value, int | float):
        return None
    return float(value)


def normalize(event: dict[str, Any]) -> NormalizedEvent:
    """Map one decoded upstream event to its outward form.

    Turns become Partial/Final transcripts depending only on ``turn_is_formatted``;
    a missing or non-string ``transcript`` yields empty text.
    """
    if not isinstance(event, dict):
        raise MalformedUpstreamMessage("upstream message must be a JSON object")

    event_type = event.get("type")
    if event_type == UPSTREAM_TYPE_TURN:
        kind = WS_MESSAGE_FINAL if event.get("turn_is_formatted") is True else WS_MESSAGE_PARTIAL
        text = event.get("transcript")
        return TranscriptEvent(kind=kind, text=text if isinstance(text, str) else "")

    if event_type == UPSTREAM_TYPE_TERMINATION:
        return SessionTerminated(audio_duration_seconds=_duration_or_none(event.get("audio_duration_seconds")))

    return Ignored(event_type=event_type)


__all__ = [
    "Ignored",
    "NormalizedEvent",
    "SessionTerminated",
    "TranscriptEvent",
    "decode_upstream_message",
    "normalize",
]
