"""Shared test fixtures for snaphockey-ai."""

from __future__ import annotations

import json
from typing import Any
from unittest.mock import AsyncMock

import pytest

from snaphockey_ai.analytics import PerformanceAnalytics, RecordingAnalyticsSink
from snaphockey_ai.pipeline import AnalysisPipeline
from snaphockey_ai.preflight import Connectivity
from snaphockey_ai.store import KeyValueStore

SHOT_JSON = json.dumps({
    "confidence": 0.92,
    "overall_rating": 78,
    "technique_score": 80,
    "technique_reason": "good extension",
    "power_score": 70,
    "power_reason": "limited hip rotation",
    "summary": "Solid shot, work on power.",
})

SKILL_JSON = json.dumps({
    "confidence": 0.88,
    "overall_rating": 73,
    "category": "stickhandling",
    "ai_comment": "Those hands are getting quicker, the puck barely noticed.",
    "what_you_did_well": ["Soft hands", "Head up", "Wide reach"],
    "what_to_work_on": ["Knee bend", "Puck protection", "Tempo changes"],
    "how_to_improve": ["Figure-eight drill", "Toe drag reps", "Tennis ball dribble"],
})

COACH_PAYLOAD: dict[str, Any] = {
    "confidence": 0.9,
    "overall_rating": 76,
    "key_observation": "Weight transfer stalls before release.",
    "video_context": {"items": [{"text": "Outdoor rink"}, {"text": "Right-handed"}, {"text": "Wrist shot"}]},
    "radar_metrics": {
        "stance_score": 82,
        "balance_score": 74,
        "follow_through_score": 78,
        "explosive_power_score": 68,
        "release_point_score": 81,
    },
    "metric_reasoning": {
        "stance": "Shoulder-width base.",
        "balance": "Slight lean back.",
        "follow_through": "Stick finishes low.",
        "power": "Hips open late.",
        "release": "Quick release off the heel.",
    },
    "primary_focus": {
        "metric": "Power",
        "specific_issue": "Hips open late",
        "why_it_matters": "Power comes from the hips",
        "how_to_improve": "Lead with the back hip",
        "coaching_cues": ["Hips first", "Load back leg", "Drive through", "Snap wrists", "Finish high"],
        "drill": "Medicine ball rotational throws",
    },
    "improvement_tips": {
        "stance": "Keep it.",
        "balance": "Stay over the puck.",
        "follow_through": "Point at the target.",
        "power": "Rotate hips earlier.",
        "release": "Release further forward.",
    },
    "metadata": {"frames_analyzed": 60, "fps": 10, "angles_processed": 2},
}
COACH_JSON = json.dumps(COACH_PAYLOAD)

STICK_PAYLOAD: dict[str, Any] = {
    "confidence": 0.86,
    "ideal_flex_min": 65,
    "ideal_flex_max": 75,
    "flex_reasoning": "At 150 lbs a mid-range flex loads fully on wrist shots.",
    "ideal_length_min": 57.0,
    "ideal_length_max": 59.0,
    "length_reasoning": "Chin height with skates on for a 5'9\" forward.",
    "ideal_curves": ["P92", "P28"],
    "curve_reasoning": "Open mid-toe curves lift the puck quickly from the slot.",
    "ideal_kick_point": "Low",
    "kick_point_reasoning": "Quick release suits the player's snap-heavy game.",
    "ideal_lie": 5,
    "lie_reasoning": "Blade stays flat in the player's upright stance.",
    "recommended_sticks": [
        {"brand": "Bauer", "model": "Nexus", "flex": 70, "curve": "P92", "kick_point": "Mid",
         "price": "$199", "reasoning": "Balanced feel.", "match_score": 91},
        {"brand": "CCM", "model": "Jetspeed", "flex": 70, "curve": "P28", "kick_point": "low",
         "reasoning": "Fast release.", "match_score": 88},
        {"brand": "Warrior", "model": "Alpha", "flex": 65, "curve": "W03", "kick_point": "Toe-ish",
         "price": "$149", "reasoning": "Light and quick.", "match_score": 80},
    ],
}
STICK_JSON = json.dumps(STICK_PAYLOAD)


def validation_json(is_valid: bool = True, confidence: float = 0.95, **extra: Any) -> str:
    return json.dumps({"is_valid": is_valid, "confidence": confidence, **extra})


def unwrap_tool(tool: Any) -> Any:
    """Extract the raw coroutine from a FastMCP FunctionTool, if wrapped.

    FastMCP 2.x wraps @server.tool functions in FunctionTool (not callable).
    FastMCP 3.x preserves the original function.
    """
    return getattr(tool, "fn", tool)


class FakeFacade:
    """Stand-in AI facade: availability flag plus an AsyncMock ``generate``."""

    def __init__(self, available: bool = True) -> None:
        self.available = available
        self.generate = AsyncMock(return_value=SHOT_JSON)

    def is_available(self) -> bool:
        return self.available


@pytest.fixture(autouse=True)
def _set_dummy_api_key(monkeypatch):
    """Ensure tests never hit real Gemini API."""
    monkeypatch.setenv("GEMINI_API_KEY", "test-key-not-real")


@pytest.fixture(autouse=True)
def _disable_tracing(monkeypatch):
    """Disable MLflow tracing in all tests to avoid real tracking-server calls."""
    monkeypatch.setenv("SNAPHOCKEY_TRACING_ENABLED", "false")


@pytest.fixture(autouse=True)
def _isolate_dotenv(tmp_path, monkeypatch):
    """Prevent tests from loading the user's real ~/.config/snaphockey-ai/.env."""
    monkeypatch.setattr(
        "snaphockey_ai.dotenv.DEFAULT_ENV_PATH",
        tmp_path / "nonexistent.env",
    )


@pytest.fixture(autouse=True)
def _isolate_store(tmp_path, monkeypatch):
    """Point the default result store at a temp database."""
    monkeypatch.setenv("SNAPHOCKEY_STORE_PATH", str(tmp_path / "store.db"))


@pytest.fixture(autouse=True)
def clean_config():
    """Reset the config singleton between tests.

    Tool modules build their tracing decorators at import time, which can
    leave a config cached from collection.
    """
    import snaphockey_ai.config as cfg_mod

    cfg_mod._config = None
    yield
    cfg_mod._config = None


@pytest.fixture()
def fake_facade():
    return FakeFacade()


@pytest.fixture()
def recording_sink():
    return RecordingAnalyticsSink()


@pytest.fixture()
def connectivity():
    return Connectivity()


@pytest.fixture()
def pipeline(fake_facade, recording_sink, connectivity):
    """Pipeline wired to the fake facade and an in-memory analytics sink."""
    return AnalysisPipeline(
        facade=fake_facade,
        analytics=PerformanceAnalytics(recording_sink, connectivity),
    )


@pytest.fixture()
def kv_store(tmp_path):
    store = KeyValueStore(str(tmp_path / "kv.db"))
    yield store
    store.close()


@pytest.fixture()
def video_file(tmp_path):
    """A small file with a supported extension. Not a decodable video."""
    path = tmp_path / "shot.mp4"
    path.write_bytes(b"\x00" * 2048)
    return str(path)
