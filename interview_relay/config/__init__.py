"""Configuration module exports (env names and defaults only)."""

from .assemblyai import ASSEMBLYAI_URL_PARAMS, DEFAULT_ASSEMBLYAI_ENDPOINT

__all__ = [
    "ASSEMBLYAI_URL_PARAMS",
    "DEFAULT_ASSEMBLYAI_ENDPOINT",
]
