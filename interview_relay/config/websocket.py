"""Client WebSocket protocol configuration and constants."""

from __future__ import annotations

ENV_WS_ENDPOINT_PATH = "WS_ENDPOINT_PATH"
DEFAULT_WS_ENDPOINT_PATH = "/"

# Outbound message keys
WS_KEY_TYPE = "type"
WS_KEY_MESSAGE_TYPE = "message_type"
WS_KEY_TEXT = "text"

WS_TYPE_TRANSCRIPT = "transcript"
WS_MESSAGE_PARTIAL = "PartialTranscript"
WS_MESSAGE_FINAL = "FinalTranscript"

# Close codes
WS_CLOSE_NORMAL_CODE = 1000
WS_CLOSE_BUSY_CODE = 1013
WS_CLOSE_UPSTREAM_GONE_CODE = 1011

WS_CLOSE_BUSY_REASON = "server at capacity"
WS_CLOSE_UPSTREAM_GONE_REASON = "transcription session ended"

__all__ = [
    "DEFAULT_WS_ENDPOINT_PATH",
    "ENV_WS_ENDPOINT_PATH",
    "WS_CLOSE_BUSY_CODE",
    "WS_CLOSE_BUSY_REASON",
    "WS_CLOSE_NORMAL_CODE",
    "WS_CLOSE_UPSTREAM_GONE_CODE",
    "WS_CLOSE_UPSTREAM_GONE_REASON",
    "WS_KEY_MESSAGE_TYPE",
    "WS_KEY_TEXT",
    "WS_KEY_TYPE",
    "WS_MESSAGE_FINAL",
    "WS_MESSAGE_PARTIAL",
    "WS_TYPE_TRANSCRIPT",
]
