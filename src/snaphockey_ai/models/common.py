"""Shared domain types — shot types, video metadata, score bands."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class ShotType(str, Enum):
    """Shot categories a player can submit. Values are the display names."""

    WRIST_SHOT = "Wrist Shot"
    SLAP_SHOT = "Slap Shot"
    BACKHAND = "Backhand"
    SNAP_SHOT = "Snap Shot"

    @property
    def display_name(self) -> str:
        return self.value

    @property
    def description(self) -> str:
        return _SHOT_DESCRIPTIONS[self]


_SHOT_DESCRIPTIONS = {
    ShotType.WRIST_SHOT: "Test your accuracy and quick release technique",
    ShotType.SLAP_SHOT: "Measure your power and wind-up mechanics",
    ShotType.BACKHAND: "Rate your backhand lift and deception",
    ShotType.SNAP_SHOT: "Evaluate your quick release and shot velocity",
}


class VideoAnalysisMetadata(BaseModel):
    """Locally computed facts about the submitted clip.

    Extraction failures fall back to the defaults below; the pipeline
    overwrites ``processing_time`` and ``selected_shot_type`` after decode.
    """

    video_duration: float = 0.0
    video_resolution: tuple[int, int] = (0, 0)
    video_file_size: int = 0
    frame_rate: float = 30.0
    is_landscape: bool = False
    processing_time: float = 0.0
    selected_shot_type: str = ""


class ResponseMetadata(BaseModel):
    """Sampling details the model reports back about what it looked at."""

    frames_analyzed: int = 0
    fps: float = 0.0
    video_duration: float = 0.0


class ScoredReason(BaseModel):
    score: int | None = Field(default=None, ge=0, le=100)
    reason: str = ""


def score_label(score: int | None) -> str:
    """Five-band label used by Shot Rater and Skill Check."""
    if score is None:
        return "No Score"
    if score >= 90:
        return "Excellent"
    if score >= 70:
        return "Good"
    if score >= 50:
        return "Fair"
    if score >= 30:
        return "Needs Work"
    return "Poor"


_COLOR_BY_LABEL = {
    "Excellent": "green",
    "Good": "blue",
    "Fair": "yellow",
    "Needs Work": "orange",
    "Poor": "red",
    "No Score": "gray",
}


def score_color_name(score: int | None) -> str:
    return _COLOR_BY_LABEL[score_label(score)]


def star_rating(score: int | None) -> int | None:
    """Map a 0-100 score onto 1-5 stars."""
    if score is None:
        return None
    if score >= 90:
        return 5
    if score >= 70:
        return 4
    if score >= 50:
        return 3
    if score >= 30:
        return 2
    return 1
