"""Environment parsing for runtime settings."""

from __future__ import annotations

import os

from interview_relay.state.settings import (
    AppSettings,
    LimitsSettings,
    ServerSettings,
    UpstreamSettings,
    ExtractionSettings,
)
from interview_relay.config.websocket import ENV_WS_ENDPOINT_PATH, DEFAULT_WS_ENDPOINT_PATH
from interview_relay.config.limits import ENV_MAX_CONCURRENT_CONNECTIONS, DEFAULT_MAX_CONCURRENT_CONNECTIONS
from interview_relay.config.extraction import (
    ENV_XAI_MODEL,
    ENV_XAI_API_KEY,
    ENV_XAI_BASE_URL,
    DEFAULT_XAI_MODEL,
    DEFAULT_XAI_BASE_URL,
)
from interview_relay.config.server import (
    ENV_HOST,
    ENV_PORT,
    DEFAULT_HOST,
    DEFAULT_PORT,
    ENV_CORS_ALLOW_ORIGINS,
    DEFAULT_CORS_ALLOW_ORIGINS,
)
from interview_relay.config.assemblyai import (
    ENV_ASSEMBLYAI_API_KEY,
    ENV_ASSEMBLYAI_ENDPOINT,
    DEFAULT_ASSEMBLYAI_ENDPOINT,
    ENV_ASSEMBLYAI_OPEN_TIMEOUT_S,
    DEFAULT_ASSEMBLYAI_OPEN_TIMEOUT_S,
)


def _str_env(name: str, default: str) -> str:
    raw = os.getenv(name)
    if raw is None:
        return default
    v = raw.strip()
    return v if v else default


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except Exception:
        return default


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except Exception:
        return default


def _csv_env(name: str, default: str) -> tuple[str, ...]:
    items = [item.strip() for item in _str_env(name, default).split(",")]
    return tuple(item for item in items if item)


def _normalize_path(path: str) -> str:
    return path if path.startswith("/") else f"/{path}"


def _load_upstream_settings() -> UpstreamSettings:
    open_timeout = _float_env(ENV_ASSEMBLYAI_OPEN_TIMEOUT_S, DEFAULT_ASSEMBLYAI_OPEN_TIMEOUT_S)
    if open_timeout <= 0:
        open_timeout = DEFAULT_ASSEMBLYAI_OPEN_TIMEOUT_S
    return UpstreamSettings(
        api_key=(os.getenv(ENV_ASSEMBLYAI_API_KEY) or "").strip(),
        endpoint=_str_env(ENV_ASSEMBLYAI_ENDPOINT, DEFAULT_ASSEMBLYAI_ENDPOINT),
        open_timeout_s=open_timeout,
    )


def _load_extraction_settings() -> ExtractionSettings:
    return ExtractionSettings(
        api_key=(os.getenv(ENV_XAI_API_KEY) or "").strip(),
        base_url=_str_env(ENV_XAI_BASE_URL, DEFAULT_XAI_BASE_URL),
        model=_str_env(ENV_XAI_MODEL, DEFAULT_XAI_MODEL),
    )


def _load_limits_settings() -> LimitsSettings:
    max_connections = _int_env(ENV_MAX_CONCURRENT_CONNECTIONS, DEFAULT_MAX_CONCURRENT_CONNECTIONS)
    return LimitsSettings(max_concurrent_connections=max(0, max_connections))


def _load_server_settings() -> ServerSettings:
    port = _int_env(ENV_PORT, DEFAULT_PORT)
    if port <= 0:
        port = DEFAULT_PORT
    return ServerSettings(
        host=_str_env(ENV_HOST, DEFAULT_HOST),
        port=port,
        ws_endpoint_path=_normalize_path(_str_env(ENV_WS_ENDPOINT_PATH, DEFAULT_WS_ENDPOINT_PATH)),
        cors_allow_origins=_csv_env(ENV_CORS_ALLOW_ORIGINS, DEFAULT_CORS_ALLOW_ORIGINS),
    )


def load_settings() -> AppSettings:
    return AppSettings(
        upstream=_load_upstream_settings(),
        extraction=_load_extraction_settings(),
        limits=_load_limits_settings(),
        server=_load_server_settings(),
    )


__all__ = ["load_settings"]
