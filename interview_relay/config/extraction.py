"""Structured extraction (xAI, OpenAI-compatible) configuration."""

from __future__ import annotations

ENV_XAI_API_KEY = "XAI_API_KEY"
ENV_XAI_BASE_URL = "XAI_BASE_URL"
ENV_XAI_MODEL = "XAI_MODEL"

DEFAULT_XAI_BASE_URL = "https://api.x.ai/v1"
DEFAULT_XAI_MODEL = "grok-4"

EXTRACTION_SCHEMA_NAME = "interview_data"

# Field bounds enforced on the model output.
COMPETITOR_NAME_MAX_CHARS = 255
OBJECTION_TYPE_MAX_CHARS = 50
OBJECTION_TEXT_MAX_CHARS = 130000

EXTRACTION_SYSTEM_PROMPT = """You are a helpful assistant that extracts information from opportunity interview \
transcripts. Output strictly in JSON matching the schema.
Extract:
- Full transcript as-is.
- Competitors: Array of competitor names mentioned (empty if none).
- Objections: Array of objects with:
  - type: 1-word summary (e.g., "Price", "Features").
  - description: Concise summary of the objection (<130,000 chars).
  - address: Concise summary of how it was overcome (<130,000 chars).
Infer from context; if no competitors or objections, use empty arrays. Output only JSON; no additional text."""

ERROR_TRANSCRIPT_REQUIRED = "Transcript is required"
ERROR_EXTRACTION_FAILED = "Failed to process transcript"

__all__ = [
    "COMPETITOR_NAME_MAX_CHARS",
    "DEFAULT_XAI_BASE_URL",
    "DEFAULT_XAI_MODEL",
    "ENV_XAI_API_KEY",
    "ENV_XAI_BASE_URL",
    "ENV_XAI_MODEL",
    "ERROR_EXTRACTION_FAILED",
    "ERROR_TRANSCRIPT_REQUIRED",
    "EXTRACTION_SCHEMA_NAME",
    "EXTRACTION_SYSTEM_PROMPT",
    "OBJECTION_TEXT_MAX_CHARS",
    "OBJECTION_TYPE_MAX_CHARS",
]
