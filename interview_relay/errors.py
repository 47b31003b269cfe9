"""Shared error types for the interview relay server."""

from __future__ import annotations


class MalformedUpstreamMessage(ValueError):
    """Raised when an upstream payload is not valid JSON or not a JSON object."""


class ExtractionError(Exception):
    """Raised when the language model call or its output validation fails."""


__all__ = ["ExtractionError", "MalformedUpstreamMessage"]
