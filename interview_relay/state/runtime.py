"""Typed runtime state objects for dependency wiring."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from interview_relay.relay.bridge import RelayBridge
    from interview_relay.state.settings import AppSettings
    from interview_relay.extraction.client import TranscriptExtractor
    from interview_relay.handlers.connections import ConnectionManager


@dataclass(slots=True)
class RuntimeDeps:
    connections: ConnectionManager
    relay_bridge: RelayBridge
    extractor: TranscriptExtractor
    settings: AppSettings

    async def shutdown(self) -> None:
        try:
            await self.extractor.aclose()
        except Exception:
            logger.exception("runtime shutdown failed")


__all__ = ["RuntimeDeps"]
