"""Logging configuration (env-resolved constants only)."""

from __future__ import annotations

import os

LOG_LEVEL: str = (os.getenv("LOG_LEVEL") or "INFO").strip().upper()
LOG_FORMAT: str = "%(asctime)s %(levelname)s %(name)s: %(message)s"

ENV_SHOW_THIRD_PARTY_LOGS = "SHOW_THIRD_PARTY_LOGS"
THIRD_PARTY_LOGGERS: tuple[str, ...] = ("websockets", "httpx", "httpcore", "openai")

__all__ = ["ENV_SHOW_THIRD_PARTY_LOGS", "LOG_FORMAT", "LOG_LEVEL", "THIRD_PARTY_LOGGERS"]
