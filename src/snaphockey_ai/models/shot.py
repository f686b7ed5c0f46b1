"""Shot Rater models — wire response, response schema, and assembled result."""

from __future__ import annotations

from pydantic import BaseModel, Field, computed_field

from .common import (
    ResponseMetadata,
    ScoredReason,
    ShotType,
    VideoAnalysisMetadata,
    score_color_name,
    score_label,
    star_rating,
)

TIPS_SEPARATOR = "|||"


class ShotRaterResponse(BaseModel):
    """Exactly what Gemini returns for a shot rating."""

    confidence: float = Field(ge=0, le=1)
    overall_rating: int = Field(ge=0, le=100)
    technique_score: int = Field(ge=0, le=100)
    technique_reason: str
    power_score: int = Field(ge=0, le=100)
    power_reason: str
    summary: str
    metadata: ResponseMetadata | None = None

    @property
    def overall_label(self) -> str:
        return score_label(self.overall_rating)


SHOT_RATER_SCHEMA: dict = {
    "type": "object",
    "properties": {
        "confidence": {"type": "number", "minimum": 0, "maximum": 1},
        "overall_rating": {"type": "integer", "minimum": 0, "maximum": 100},
        "technique_score": {"type": "integer", "minimum": 0, "maximum": 100},
        "technique_reason": {"type": "string"},
        "power_score": {"type": "integer", "minimum": 0, "maximum": 100},
        "power_reason": {"type": "string"},
        "summary": {"type": "string"},
        "metadata": {
            "type": "object",
            "properties": {
                "frames_analyzed": {"type": "integer"},
                "fps": {"type": "number"},
                "video_duration": {"type": "number"},
            },
        },
    },
    "required": [
        "confidence",
        "overall_rating",
        "technique_score",
        "technique_reason",
        "power_score",
        "power_reason",
        "summary",
    ],
}


class ShotMetrics(BaseModel):
    technique: ScoredReason
    power: ScoredReason


class ShotAnalysisResult(BaseModel):
    """Assembled Shot Rater result, persisted for deep-link recovery."""

    type: ShotType
    confidence: float
    overall_score: int | None = None
    metrics: ShotMetrics
    tips: str = ""
    video_path: str | None = None
    analysis_metadata: VideoAnalysisMetadata = Field(default_factory=VideoAnalysisMetadata)
    detected_type: ShotType | None = None
    has_type_mismatch: bool = False

    @computed_field
    @property
    def star_rating(self) -> int | None:
        return star_rating(self.overall_score)

    @computed_field
    @property
    def score_label(self) -> str:
        return score_label(self.overall_score)

    @property
    def score_color_name(self) -> str:
        return score_color_name(self.overall_score)

    @property
    def summary(self) -> str:
        return self.tips.split(TIPS_SEPARATOR)[0]

    @property
    def detailed_tips(self) -> str:
        parts = self.tips.split(TIPS_SEPARATOR)
        return parts[1] if len(parts) > 1 else self.tips

    @property
    def mismatch_message(self) -> str | None:
        if not self.has_type_mismatch or self.detected_type is None:
            return None
        return f"Detected {self.detected_type.display_name} instead of {self.type.display_name}"

    @property
    def id(self) -> str:
        name = self.video_path.rsplit("/", 1)[-1] if self.video_path else "none"
        millis = int(self.analysis_metadata.processing_time * 1000)
        return f"{self.type.value}|{self.analysis_metadata.selected_shot_type}|{millis}|{name}"

    @classmethod
    def no_shot_detected(cls, shot_type: ShotType, video_path: str | None) -> ShotAnalysisResult:
        """Placeholder shown when the clip contains no recognisable shot."""
        missing = ScoredReason(score=None, reason="No hockey shot detected")
        return cls(
            type=shot_type,
            confidence=1.0,
            overall_score=None,
            metrics=ShotMetrics(technique=missing, power=missing),
            tips=(
                "No hockey shot was detected in the video. Please ensure you're recording "
                f"a clear {shot_type.display_name} with good lighting and the full motion visible."
            ),
            video_path=video_path,
            analysis_metadata=VideoAnalysisMetadata(selected_shot_type=shot_type.value),
        )
