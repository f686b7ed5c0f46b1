"""Player profile — optional context the AI Coach folds into its prompt."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel


class Gender(str, Enum):
    MALE = "Male"
    FEMALE = "Female"


class Position(str, Enum):
    CENTER = "Center"
    LEFT_WING = "Left Wing"
    RIGHT_WING = "Right Wing"
    LEFT_DEFENSE = "Left Defense"
    RIGHT_DEFENSE = "Right Defense"
    GOALIE = "Goalie"


class Handedness(str, Enum):
    LEFT = "Left"
    RIGHT = "Right"


class PlayStyle(str, Enum):
    PLAYMAKER = "Playmaker"
    SNIPER = "Sniper"
    POWER_FORWARD = "Power Forward"
    TWO_WAY_FORWARD = "Two-Way Forward"
    GRINDER = "Grinder"
    SPEEDSTER = "Speedster"
    DANGLER = "Dangler"
    NET_FRONT_PRESENCE = "Net-Front Presence"
    OFFENSIVE_DEFENSEMAN = "Offensive Defenseman"
    STAY_AT_HOME_DEFENSEMAN = "Stay-at-home Defenseman"
    TWO_WAY_DEFENSEMAN = "Two-Way Defenseman"
    PHYSICAL_DEFENSEMAN = "Physical Defenseman"
    POKE_CHECK_SPECIALIST = "Poke-Check Specialist"
    BUTTERFLY = "Butterfly"
    HYBRID = "Hybrid"
    STAND_UP = "Stand-up"
    AGGRESSIVE = "Aggressive"
    POSITIONAL = "Positional"


class PlayerProfile(BaseModel):
    """Height is stored in inches, weight in pounds. Every field is optional."""

    name: str | None = None
    height: float | None = None
    weight: float | None = None
    age: int | None = None
    gender: Gender | None = None
    position: Position | None = None
    handedness: Handedness | None = None
    play_style: PlayStyle | None = None
    custom_play_style: str | None = None
    jersey_number: str | None = None

    @property
    def height_display(self) -> str:
        if self.height is None:
            return ""
        feet, inches = divmod(int(self.height), 12)
        return f"{feet}'{inches}\""

    @property
    def is_complete(self) -> bool:
        required = (self.height, self.weight, self.age, self.gender, self.position, self.handedness)
        has_style = self.play_style is not None or bool(self.custom_play_style)
        return all(value is not None for value in required) and has_style

    def prompt_context(self) -> str:
        """One-line profile summary for the coaching prompt."""
        parts = []
        if self.height is not None:
            parts.append(f"Height: {self.height_display}")
        if self.weight is not None:
            parts.append(f"Weight: {int(self.weight)} lbs")
        if self.age is not None:
            parts.append(f"Age: {self.age}")
        if self.gender is not None:
            parts.append(f"Gender: {self.gender.value}")
        if self.position is not None:
            parts.append(f"Position: {self.position.value}")
        if self.handedness is not None:
            parts.append(f"Shoots: {self.handedness.value}")
        if self.play_style is not None:
            parts.append(f"Play Style: {self.play_style.value}")
        elif self.custom_play_style:
            parts.append(f"Play Style: {self.custom_play_style}")
        return ", ".join(parts) if parts else "General player"
