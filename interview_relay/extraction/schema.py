"""Validated shape of the structured interview extraction."""

from __future__ import annotations

from typing import Any, Annotated

from pydantic import Field, BaseModel, ConfigDict, StringConstraints

from interview_relay.config.extraction import (
    COMPETITOR_NAME_MAX_CHARS,
    OBJECTION_TYPE_MAX_CHARS,
    OBJECTION_TEXT_MAX_CHARS,
)

# Strict structured output requires closed objects in the schema; validation still ignores extras.
_CLOSED_OBJECT = ConfigDict(json_schema_extra={"additionalProperties": False})

CompetitorName = Annotated[str, StringConstraints(max_length=COMPETITOR_NAME_MAX_CHARS)]


class Objection(BaseModel):
    model_config = _CLOSED_OBJECT

    type: str = Field(max_length=OBJECTION_TYPE_MAX_CHARS)
    description: str = Field(max_length=OBJECTION_TEXT_MAX_CHARS)
    address: str = Field(max_length=OBJECTION_TEXT_MAX_CHARS)


class InterviewData(BaseModel):
    model_config = _CLOSED_OBJECT

    transcript: str
    competitors: list[CompetitorName]
    objections: list[Objection]


def interview_json_schema() -> dict[str, Any]:
    return InterviewData.model_json_schema()


__all__ = ["CompetitorName", "InterviewData", "Objection", "interview_json_schema"]
