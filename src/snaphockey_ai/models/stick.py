"""Stick Analyzer models — flex, length, curve, kick point and lie recommendations.

The wire model is flat, the way the prompt asks for it; ``StickRecommendations``
regroups it into ranges and typed kick points for display.
"""

from __future__ import annotations

import uuid
from enum import Enum

from pydantic import BaseModel, Field

from .common import ShotType
from .profile import PlayerProfile


class KickPoint(str, Enum):
    LOW = "Low"
    MID = "Mid"
    HIGH = "High"

    @property
    def description(self) -> str:
        return _KICK_POINT_DESCRIPTIONS[self]

    @classmethod
    def parse(cls, value: str) -> KickPoint:
        """Unrecognized kick points fall back to ``MID``."""
        try:
            return cls(value.strip().capitalize())
        except ValueError:
            return cls.MID


_KICK_POINT_DESCRIPTIONS = {
    KickPoint.LOW: "Quick release, good for wrist shots",
    KickPoint.MID: "Balanced for all shot types",
    KickPoint.HIGH: "Maximum power for slap shots",
}


class PriorityFocus(str, Enum):
    POWER = "Power"
    ACCURACY = "Accuracy"
    BALANCE = "Balance"


class ShootingZone(str, Enum):
    POINT = "Point"
    SLOT = "Slot"
    CLOSE_RANGE = "Close Range"
    VARIES = "Varies"


class ShootingQuestionnaire(BaseModel):
    priority_focus: PriorityFocus = PriorityFocus.BALANCE
    primary_shot: ShotType = ShotType.WRIST_SHOT
    shooting_zone: ShootingZone = ShootingZone.VARIES


# ── wire model ────────────────────────────────────────────────────────────


class AIRecommendedStick(BaseModel):
    brand: str
    model: str
    flex: int
    curve: str
    kick_point: str
    price: str | None = None
    reasoning: str
    match_score: int = Field(ge=0, le=100)


class StickAnalysisResponse(BaseModel):
    confidence: float = Field(ge=0, le=1)
    ideal_flex_min: int
    ideal_flex_max: int
    flex_reasoning: str
    ideal_length_min: float
    ideal_length_max: float
    length_reasoning: str
    ideal_curves: list[str]
    curve_reasoning: str
    ideal_kick_point: str
    kick_point_reasoning: str
    ideal_lie: int
    lie_reasoning: str
    recommended_sticks: list[AIRecommendedStick]


STICK_SCHEMA: dict = {
    "type": "object",
    "properties": {
        "confidence": {"type": "number", "minimum": 0, "maximum": 1},
        "ideal_flex_min": {"type": "integer", "minimum": 30, "maximum": 120},
        "ideal_flex_max": {"type": "integer", "minimum": 30, "maximum": 120},
        "flex_reasoning": {"type": "string"},
        "ideal_length_min": {"type": "number", "minimum": 46, "maximum": 70},
        "ideal_length_max": {"type": "number", "minimum": 46, "maximum": 70},
        "length_reasoning": {"type": "string"},
        "ideal_curves": {
            "type": "array",
            "items": {"type": "string"},
            "minItems": 1,
            "maxItems": 5,
        },
        "curve_reasoning": {"type": "string"},
        "ideal_kick_point": {"type": "string", "enum": [k.value for k in KickPoint]},
        "kick_point_reasoning": {"type": "string"},
        "ideal_lie": {"type": "integer", "minimum": 3, "maximum": 7},
        "lie_reasoning": {"type": "string"},
        "recommended_sticks": {
            "type": "array",
            "minItems": 3,
            "maxItems": 5,
            "items": {
                "type": "object",
                "properties": {
                    "brand": {"type": "string"},
                    "model": {"type": "string"},
                    "flex": {"type": "integer"},
                    "curve": {"type": "string"},
                    "kick_point": {"type": "string"},
                    "price": {"type": "string"},
                    "reasoning": {"type": "string"},
                    "match_score": {"type": "integer", "minimum": 0, "maximum": 100},
                },
                "required": ["brand", "model", "flex", "curve", "kick_point", "reasoning", "match_score"],
            },
        },
    },
    "required": [
        "confidence",
        "ideal_flex_min",
        "ideal_flex_max",
        "flex_reasoning",
        "ideal_length_min",
        "ideal_length_max",
        "length_reasoning",
        "ideal_curves",
        "curve_reasoning",
        "ideal_kick_point",
        "kick_point_reasoning",
        "ideal_lie",
        "lie_reasoning",
        "recommended_sticks",
    ],
}


# ── result ────────────────────────────────────────────────────────────────


class FlexRange(BaseModel):
    min: int
    max: int
    reasoning: str

    @property
    def display(self) -> str:
        return f"{self.min}-{self.max}"


class LengthRange(BaseModel):
    min_inches: float
    max_inches: float
    reasoning: str

    @property
    def display(self) -> str:
        return f"{int(self.min_inches)}-{int(self.max_inches)}\""


class RecommendedStick(BaseModel):
    brand: str
    model: str
    flex: int
    curve: str
    kick_point: KickPoint
    price: str | None = None
    reasoning: str
    match_score: int

    @property
    def display_name(self) -> str:
        return f"{self.brand} {self.model}"


class StickRecommendations(BaseModel):
    ideal_flex: FlexRange
    ideal_length: LengthRange
    ideal_curves: list[str]
    ideal_kick_point: KickPoint
    ideal_lie: int
    top_stick_models: list[RecommendedStick]
    curve_reasoning: str | None = None
    kick_point_reasoning: str | None = None
    lie_reasoning: str | None = None

    @classmethod
    def from_response(cls, response: StickAnalysisResponse) -> StickRecommendations:
        return cls(
            ideal_flex=FlexRange(
                min=response.ideal_flex_min,
                max=response.ideal_flex_max,
                reasoning=response.flex_reasoning,
            ),
            ideal_length=LengthRange(
                min_inches=response.ideal_length_min,
                max_inches=response.ideal_length_max,
                reasoning=response.length_reasoning,
            ),
            ideal_curves=response.ideal_curves,
            ideal_kick_point=KickPoint.parse(response.ideal_kick_point),
            ideal_lie=response.ideal_lie,
            top_stick_models=[
                RecommendedStick(
                    brand=stick.brand,
                    model=stick.model,
                    flex=stick.flex,
                    curve=stick.curve,
                    kick_point=KickPoint.parse(stick.kick_point),
                    price=stick.price,
                    reasoning=stick.reasoning,
                    match_score=stick.match_score,
                )
                for stick in response.recommended_sticks
            ],
            curve_reasoning=response.curve_reasoning,
            kick_point_reasoning=response.kick_point_reasoning,
            lie_reasoning=response.lie_reasoning,
        )


class StickAnalysisResult(BaseModel):
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    confidence: float
    player_profile: PlayerProfile
    questionnaire: ShootingQuestionnaire
    shot_video: str
    recommendations: StickRecommendations
    processing_time: float = 0.0
