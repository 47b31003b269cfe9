"""Runtime settings (dataclasses only)."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class UpstreamSettings:
    api_key: str
    endpoint: str
    open_timeout_s: float


@dataclass(frozen=True, slots=True)
class ExtractionSettings:
    api_key: str
    base_url: str
    model: str


@dataclass(frozen=True, slots=True)
class LimitsSettings:
    max_concurrent_connections: int


@dataclass(frozen=True, slots=True)
class ServerSettings:
    host: str
    port: int
    ws_endpoint_path: str
    cors_allow_origins: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class AppSettings:
    upstream: UpstreamSettings
    extraction: ExtractionSettings
    limits: LimitsSettings
    server: ServerSettings


__all__ = [
    "AppSettings",
    "ExtractionSettings",
    "LimitsSettings",
    "ServerSettings",
    "UpstreamSettings",
]
