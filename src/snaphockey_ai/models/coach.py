"""AI Coach models — two-angle biomechanics response and derived radar metrics.

The wire model mirrors the JSON the coaching prompt asks for. Everything the
results screen needs (descriptors, status bands, focus area) is derived from
it rather than requested from the model.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field

from .common import ShotType
from .profile import PlayerProfile

FOCUS_TARGET_SCORE = 85


class VideoContextItem(BaseModel):
    text: str


class VideoContext(BaseModel):
    items: list[VideoContextItem] = Field(default_factory=list)


class RadarMetrics(BaseModel):
    stance_score: int = Field(ge=0, le=100)
    balance_score: int = Field(ge=0, le=100)
    follow_through_score: int = Field(ge=0, le=100)
    explosive_power_score: int = Field(ge=0, le=100)
    release_point_score: int = Field(ge=0, le=100)


class MetricNotes(BaseModel):
    """Per-metric free text, used for both reasoning and short tips."""

    stance: str
    balance: str
    follow_through: str
    power: str
    release: str


class PrimaryFocus(BaseModel):
    metric: str
    specific_issue: str
    why_it_matters: str
    how_to_improve: str
    coaching_cues: list[str]
    drill: str


class CoachMetadata(BaseModel):
    frames_analyzed: int = 0
    fps: float = 0
    angles_processed: int = 2


class CoachResponse(BaseModel):
    confidence: float = Field(ge=0, le=1)
    overall_rating: int = Field(ge=0, le=100)
    key_observation: str
    video_context: VideoContext
    radar_metrics: RadarMetrics
    metric_reasoning: MetricNotes
    primary_focus: PrimaryFocus
    improvement_tips: MetricNotes
    metadata: CoachMetadata

    @property
    def overall_label(self) -> str:
        if self.overall_rating >= 90:
            return "Elite"
        return coach_descriptor(self.overall_rating)


def _strings(*names: str) -> dict:
    return {
        "type": "object",
        "properties": {name: {"type": "string"} for name in names},
        "required": list(names),
    }


_METRIC_KEYS = ("stance", "balance", "follow_through", "power", "release")
_SCORE_KEYS = (
    "stance_score",
    "balance_score",
    "follow_through_score",
    "explosive_power_score",
    "release_point_score",
)

COACH_SCHEMA: dict = {
    "type": "object",
    "properties": {
        "confidence": {"type": "number", "minimum": 0, "maximum": 1},
        "overall_rating": {"type": "integer", "minimum": 0, "maximum": 100},
        "key_observation": {"type": "string"},
        "video_context": {
            "type": "object",
            "properties": {
                "items": {
                    "type": "array",
                    "minItems": 3,
                    "maxItems": 5,
                    "items": _strings("text"),
                },
            },
            "required": ["items"],
        },
        "radar_metrics": {
            "type": "object",
            "properties": {
                key: {"type": "integer", "minimum": 0, "maximum": 100} for key in _SCORE_KEYS
            },
            "required": list(_SCORE_KEYS),
        },
        "metric_reasoning": _strings(*_METRIC_KEYS),
        "primary_focus": {
            "type": "object",
            "properties": {
                "metric": {"type": "string"},
                "specific_issue": {"type": "string"},
                "why_it_matters": {"type": "string"},
                "how_to_improve": {"type": "string"},
                "coaching_cues": {
                    "type": "array",
                    "items": {"type": "string"},
                    "minItems": 5,
                    "maxItems": 5,
                },
                "drill": {"type": "string"},
            },
            "required": [
                "metric",
                "specific_issue",
                "why_it_matters",
                "how_to_improve",
                "coaching_cues",
                "drill",
            ],
        },
        "improvement_tips": _strings(*_METRIC_KEYS),
        "metadata": {
            "type": "object",
            "properties": {
                "frames_analyzed": {"type": "integer"},
                "fps": {"type": "integer"},
                "angles_processed": {"type": "integer"},
            },
            "required": ["frames_analyzed", "fps", "angles_processed"],
        },
    },
    "required": [
        "confidence",
        "overall_rating",
        "key_observation",
        "video_context",
        "radar_metrics",
        "metric_reasoning",
        "primary_focus",
        "improvement_tips",
        "metadata",
    ],
}


def coach_descriptor(score: int) -> str:
    if score >= 90:
        return "Excellent"
    if score >= 80:
        return "Strong"
    if score >= 70:
        return "Good"
    if score >= 60:
        return "Developing"
    return "Needs Work"


class MetricStatus(str, Enum):
    EXCELLENT = "excellent"
    GOOD = "good"
    NEEDS_WORK = "needs_work"

    @classmethod
    def for_score(cls, score: int) -> MetricStatus:
        if score >= 80:
            return cls.EXCELLENT
        if score >= 70:
            return cls.GOOD
        return cls.NEEDS_WORK


class MetricScore(BaseModel):
    name: str
    key: str
    score: int
    descriptor: str
    status: MetricStatus

    @classmethod
    def build(cls, name: str, key: str, score: int) -> MetricScore:
        return cls(
            name=name,
            key=key,
            score=score,
            descriptor=coach_descriptor(score),
            status=MetricStatus.for_score(score),
        )


def progress_note(score: int) -> str:
    """Short distance-to-target message for the focus card."""
    gap = FOCUS_TARGET_SCORE - score
    if gap <= 0:
        return "Excellent - maintain and refine"
    if gap <= 5:
        return "Almost there - minor adjustments needed"
    if gap <= 10:
        return "Good foundation - room to grow"
    if gap <= 15:
        return "Key area for improvement"
    return "Primary development area"


class FocusArea(BaseModel):
    metric: MetricScore
    improvement_tip: str
    current_vs_target: str
    primary_focus: PrimaryFocus


class CoachAnalysisResult(BaseModel):
    shot_type: ShotType
    player_profile: PlayerProfile
    front_net_video: str
    side_angle_video: str
    processing_time: float
    response: CoachResponse

    @property
    def overall_rating(self) -> int:
        return self.response.overall_rating

    @property
    def confidence(self) -> float:
        return self.response.confidence

    @property
    def frames_analyzed(self) -> int:
        return self.response.metadata.frames_analyzed

    @property
    def biomechanics(self) -> list[MetricScore]:
        radar = self.response.radar_metrics
        return [
            MetricScore.build("Stance", "stance", radar.stance_score),
            MetricScore.build("Balance", "balance", radar.balance_score),
            MetricScore.build("Follow Through", "follow_through", radar.follow_through_score),
            MetricScore.build("Power", "power", radar.explosive_power_score),
            MetricScore.build("Release", "release", radar.release_point_score),
        ]

    @property
    def focus_area(self) -> FocusArea:
        """The lowest-scoring metric; ties go to the earlier metric."""
        lowest = min(self.biomechanics, key=lambda m: m.score)
        return FocusArea(
            metric=lowest,
            improvement_tip=getattr(self.response.improvement_tips, lowest.key),
            current_vs_target=progress_note(lowest.score),
            primary_focus=self.response.primary_focus,
        )

    def reasoning_for(self, metric: str) -> str:
        key = metric.strip().lower().replace(" ", "_")
        if key not in _METRIC_KEYS:
            return "Analysis not available for this metric."
        return getattr(self.response.metric_reasoning, key)
