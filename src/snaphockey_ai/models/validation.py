"""Validation models — the yes/no gate run before a full analysis."""

from __future__ import annotations

from pydantic import BaseModel, Field


class ValidationResponse(BaseModel):
    """Whether the clip plausibly shows the expected hockey activity.

    The angle flags are only requested by the two-camera AI Coach flow.
    """

    is_valid: bool
    confidence: float = Field(ge=0, le=1)
    reason: str | None = None
    has_front_angle: bool | None = None
    has_side_angle: bool | None = None


VALIDATION_SCHEMA: dict = {
    "type": "object",
    "properties": {
        "is_valid": {"type": "boolean"},
        "confidence": {"type": "number", "minimum": 0, "maximum": 1},
        "reason": {"type": "string"},
    },
    "required": ["is_valid", "confidence"],
}

ANGLE_VALIDATION_SCHEMA: dict = {
    "type": "object",
    "properties": {
        **VALIDATION_SCHEMA["properties"],
        "has_front_angle": {"type": "boolean"},
        "has_side_angle": {"type": "boolean"},
    },
    "required": ["is_valid", "confidence", "has_front_angle", "has_side_angle"],
}
