"""Logging initialization."""

from __future__ import annotations

import os
import logging

from interview_relay.config.logging import LOG_LEVEL, LOG_FORMAT, THIRD_PARTY_LOGGERS, ENV_SHOW_THIRD_PARTY_LOGS


def configure_logging() -> None:
    # Client libraries log every frame at DEBUG. Keep them tame unless explicitly enabled.
    if (os.getenv(ENV_SHOW_THIRD_PARTY_LOGS) or "").strip().lower() not in {"1", "true", "yes"}:
        for name in THIRD_PARTY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)
    logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT)


__all__ = ["configure_logging"]
