"""Validation prompt templates.

Both prompts are sent at 1 fps; the angle variant is used by the two-camera
AI Coach flow so the caller can check that front and side views were supplied.
"""

from __future__ import annotations

_BASE = """\
Is this a hockey-related video with a player and stick?

Requirements:
- Player visible with hockey stick
- Hockey-related activity (shooting, passing, stick handling - any is OK)

Return JSON with:
- is_valid: true if requirements met, false otherwise
- confidence: 0.0 to 1.0
- reason: brief explanation only if invalid (null if valid)"""

HOCKEY_SHOT_VALIDATION = _BASE

HOCKEY_SHOT_VALIDATION_WITH_ANGLES = (
    _BASE
    + """
- has_front_angle: true if this appears to be from front/net view
- has_side_angle: true if this appears to be from side view"""
)
