"""HTTP server configuration."""

from __future__ import annotations

ENV_HOST = "HOST"
ENV_PORT = "PORT"
ENV_CORS_ALLOW_ORIGINS = "CORS_ALLOW_ORIGINS"

DEFAULT_HOST = "0.0.0.0"  # noqa: S104
DEFAULT_PORT = 3000
DEFAULT_CORS_ALLOW_ORIGINS = "*"

HEALTH_MESSAGE = "Opportunity Interview Backend is running"

__all__ = [
    "DEFAULT_CORS_ALLOW_ORIGINS",
    "DEFAULT_HOST",
    "DEFAULT_PORT",
    "ENV_CORS_ALLOW_ORIGINS",
    "ENV_HOST",
    "ENV_PORT",
    "HEALTH_MESSAGE",
]
