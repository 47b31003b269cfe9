"""HTTP endpoint submitting a finished transcript for structured extraction."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import Request, APIRouter
from fastapi.responses import ORJSONResponse

from interview_relay.state import RuntimeDeps
from interview_relay.errors import ExtractionError
from interview_relay.config.extraction import ERROR_EXTRACTION_FAILED, ERROR_TRANSCRIPT_REQUIRED

logger = logging.getLogger(__name__)

router = APIRouter()


def _runtime_deps(request: Request) -> RuntimeDeps:
    runtime_deps = getattr(request.app.state, "runtime_deps", None)
    if runtime_deps is None:
        raise RuntimeError("Runtime dependencies are not initialized")
    return runtime_deps


async def _read_transcript(request: Request) -> str | None:
    try:
        body: Any = await request.json()
    except ValueError:
        return None
    if not isinstance(body, dict):
        return None
    transcript = body.get("transcript")
    if not isinstance(transcript, str) or not transcript:
        return None
    return transcript


@router.post("/process-transcript")
async def process_transcript(request: Request) -> ORJSONResponse:
    transcript = await _read_transcript(request)
    if transcript is None:
        return ORJSONResponse({"error": ERROR_TRANSCRIPT_REQUIRED}, status_code=400)

    extractor = _runtime_deps(request).extractor
    try:
        result = await extractor.extract(transcript)
    except ExtractionError:
        logger.exception("Error processing transcript")
        return ORJSONResponse({"error": ERROR_EXTRACTION_FAILED}, status_code=500)
    return ORJSONResponse(result.model_dump())


__all__ = ["router"]
