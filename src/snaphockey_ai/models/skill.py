"""Skill Check models — wire response, response schema, and assembled result."""

from __future__ import annotations

import uuid

from pydantic import BaseModel, Field, computed_field

from .common import ResponseMetadata, VideoAnalysisMetadata, score_label


class SkillCheckContext(BaseModel):
    """What the player asked the coach to look at. Empty means no focus."""

    user_request: str = ""

    @property
    def prompt_context(self) -> str:
        if not self.user_request:
            return ""
        return (
            "\n\nUSER'S SPECIFIC REQUEST:\n"
            f'"{self.user_request}"\n\n'
            "Focus your analysis and feedback on what the user asked about. "
            "Address their specific request directly in your response."
        )


class SkillCheckResponse(BaseModel):
    confidence: float = Field(ge=0, le=1)
    overall_rating: int = Field(ge=0, le=100)
    category: str | None = None
    ai_comment: str
    what_you_did_well: list[str]
    what_to_work_on: list[str]
    how_to_improve: list[str]
    metadata: ResponseMetadata | None = None

    @property
    def premium_breakdown(self) -> PremiumSkillBreakdown:
        return PremiumSkillBreakdown(
            what_you_did_well=self.what_you_did_well,
            what_to_work_on=self.what_to_work_on,
            how_to_improve=self.how_to_improve,
        )


def _three(description: str, item: str) -> dict:
    return {
        "type": "array",
        "description": f"EXACTLY 3 items. {description}",
        "items": {"type": "string", "description": item},
        "minItems": 3,
        "maxItems": 3,
    }


SKILL_CHECK_SCHEMA: dict = {
    "type": "object",
    "properties": {
        "confidence": {"type": "number", "minimum": 0, "maximum": 1},
        "overall_rating": {
            "type": "integer",
            "minimum": 0,
            "maximum": 100,
            "description": "Overall skill rating (0-100). Never a multiple of 5.",
        },
        "category": {
            "type": "string",
            "description": "Detected skill category (e.g. stickhandling, deke, shot, pass, skating)",
        },
        "ai_comment": {
            "type": "string",
            "description": "Encouraging, slightly cheeky 1-2 sentence comment referencing the video.",
        },
        "what_you_did_well": _three(
            "Specific things the player did well.",
            "A specific positive observation about technique or execution",
        ),
        "what_to_work_on": _three(
            "Specific areas for improvement.",
            "A specific area that needs improvement",
        ),
        "how_to_improve": _three(
            "Practical drills with a brief description.",
            "A drill or exercise that addresses a weakness",
        ),
        "metadata": {
            "type": "object",
            "properties": {
                "frames_analyzed": {"type": "integer", "minimum": 0},
                "fps": {"type": "integer", "minimum": 1, "maximum": 120},
                "video_duration": {"type": "number", "minimum": 0},
            },
        },
    },
    "required": [
        "confidence",
        "overall_rating",
        "ai_comment",
        "what_you_did_well",
        "what_to_work_on",
        "how_to_improve",
    ],
}


class PremiumSkillBreakdown(BaseModel):
    what_you_did_well: list[str] = Field(default_factory=list)
    what_to_work_on: list[str] = Field(default_factory=list)
    how_to_improve: list[str] = Field(default_factory=list)


class SkillAnalysisResult(BaseModel):
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    confidence: float
    overall_score: int
    category: str | None = None
    ai_comment: str
    premium_breakdown: PremiumSkillBreakdown
    video_path: str | None = None
    analysis_metadata: VideoAnalysisMetadata = Field(default_factory=VideoAnalysisMetadata)

    @computed_field
    @property
    def score_label(self) -> str:
        return score_label(self.overall_score)
