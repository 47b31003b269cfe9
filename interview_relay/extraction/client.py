"""Language model client for structured transcript extraction."""

from __future__ import annotations

import logging
from typing import Any

from openai import OpenAIError, AsyncOpenAI
from pydantic import ValidationError

from interview_relay.errors import ExtractionError
from interview_relay.state.settings import ExtractionSettings
from interview_relay.config.extraction import EXTRACTION_SCHEMA_NAME, EXTRACTION_SYSTEM_PROMPT

from .schema import InterviewData, interview_json_schema

logger = logging.getLogger(__name__)


def build_messages(transcript: str) -> list[dict[str, str]]:
    return [
        {"role": "system", "content": EXTRACTION_SYSTEM_PROMPT},
        {"role": "user", "content": f"Transcript: {transcript}"},
    ]


def build_response_format() -> dict[str, Any]:
    return {
        "type": "json_schema",
        "json_schema": {
            "name": EXTRACTION_SCHEMA_NAME,
            "strict": True,
            "schema": interview_json_schema(),
        },
    }


def parse_completion(completion: Any) -> InterviewData:
    """Validate the first choice of a chat completion against the extraction schema."""
    choices = getattr(completion, "choices", None) or []
    if not choices:
        raise ExtractionError("language model returned no choices")
    content = choices[0].message.content
    if not isinstance(content, str) or not content.strip():
        raise ExtractionError("language model returned empty content")
    try:
        return InterviewData.model_validate_json(content)
    except ValidationError as exc:
        raise ExtractionError(f"language model output failed validation: {exc}") from exc


class TranscriptExtractor:
    def __init__(self, *, settings: ExtractionSettings, client: AsyncOpenAI | None = None) -> None:
        self._model = settings.model
        # An empty key still builds a client; requests then fail upstream with 401.
        self._client = client or AsyncOpenAI(api_key=settings.api_key, base_url=settings.base_url)

    async def extract(self, transcript: str) -> InterviewData:
        try:
            completion = await self._client.chat.completions.create(
                model=self._model,
                messages=build_messages(transcript),
                response_format=build_response_format(),
            )
        except OpenAIError as exc:
            raise ExtractionError(f"language model request failed: {exc}") from exc
        return parse_completion(completion)

    async def aclose(self) -> None:
        await self._client.close()


__all__ = ["TranscriptExtractor", "build_messages", "build_response_format", "parse_completion"]
