"""Runtime dependency construction (relay factory, extraction client, admission control)."""

from __future__ import annotations

import logging

from interview_relay.state import RuntimeDeps
from interview_relay.relay.bridge import RelayBridge
from interview_relay.state.settings import AppSettings
from interview_relay.extraction.client import TranscriptExtractor
from interview_relay.handlers.connections import ConnectionManager

from .settings_loader import load_settings

logger = logging.getLogger(__name__)


def build_runtime_deps(settings: AppSettings | None = None) -> RuntimeDeps:
    settings = settings or load_settings()

    relay_bridge = RelayBridge(upstream=settings.upstream)
    extractor = TranscriptExtractor(settings=settings.extraction)
    connections = ConnectionManager(max_connections=settings.limits.max_concurrent_connections)

    logger.info(
        "runtime: upstream=%s max_connections=%s",
        settings.upstream.endpoint,
        settings.limits.max_concurrent_connections or "unlimited",
    )
    return RuntimeDeps(
        connections=connections,
        relay_bridge=relay_bridge,
        extractor=extractor,
        settings=settings,
    )


__all__ = ["RuntimeDeps", "build_runtime_deps"]
