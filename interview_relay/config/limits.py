"""Admission control configuration."""

from __future__ import annotations

ENV_MAX_CONCURRENT_CONNECTIONS = "MAX_CONCURRENT_CONNECTIONS"

# 0 disables the cap: every inbound connection gets its own relay.
DEFAULT_MAX_CONCURRENT_CONNECTIONS = 0

__all__ = [
    "DEFAULT_MAX_CONCURRENT_CONNECTIONS",
    "ENV_MAX_CONCURRENT_CONNECTIONS",
]
