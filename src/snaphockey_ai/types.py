"""Shared type aliases for tool parameters."""

from __future__ import annotations

import json
from typing import Annotated, Literal

from pydantic import Field

ShotTypeName = Literal["Wrist Shot", "Slap Shot", "Backhand", "Snap Shot"]

VideoFilePath = Annotated[str, Field(
    min_length=1,
    description="Path to a local video file (mp4, mov, m4v, webm, avi, mkv, 3gpp)",
)]
ResultId = Annotated[str, Field(min_length=1, description="Identifier the result was saved under")]
UserRequest = Annotated[str, Field(
    max_length=500,
    description="Optional note on what the player wants feedback on",
)]


def coerce_json_param(value: str | dict | None, expected_type: type) -> dict | list | None:
    """Parse a JSON-string tool argument back into a dict or list.

    Some MCP transports serialize object arguments as strings; anything that
    does not parse to *expected_type* is returned unchanged for pydantic to
    reject.
    """
    if not isinstance(value, str):
        return value
    try:
        parsed = json.loads(value)
    except (json.JSONDecodeError, TypeError):
        return value
    return parsed if isinstance(parsed, expected_type) else value
