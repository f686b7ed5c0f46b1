"""Analysis tools — validation and analysis for every feature on a FastMCP sub-server."""

from __future__ import annotations

import asyncio
import logging
from typing import Annotated

from fastmcp import FastMCP
from mcp.types import ToolAnnotations
from pydantic import Field

from ..errors import make_tool_error
from ..models.coach import CoachAnalysisResult
from ..models.common import ShotType
from ..models.profile import PlayerProfile
from ..models.shot import ShotAnalysisResult
from ..models.skill import SkillCheckContext
from ..models.stick import ShootingQuestionnaire
from ..tracing import trace
from ..types import ShotTypeName, UserRequest, VideoFilePath, coerce_json_param
from ._runtime import get_runtime

logger = logging.getLogger(__name__)
analysis_server = FastMCP("analysis")

_READ_ONLY = ToolAnnotations(
    readOnlyHint=True,
    destructiveHint=False,
    idempotentHint=True,
    openWorldHint=True,
)
_ANALYZE = ToolAnnotations(
    readOnlyHint=False,
    destructiveHint=False,
    idempotentHint=False,
    openWorldHint=True,
)


def coach_result_payload(result: CoachAnalysisResult) -> dict:
    """Serialize a coach result with the derived radar metrics and focus area."""
    payload = result.model_dump(mode="json")
    payload["overall_label"] = result.response.overall_label
    payload["biomechanics"] = [m.model_dump(mode="json") for m in result.biomechanics]
    payload["focus_area"] = result.focus_area.model_dump(mode="json")
    return payload


async def _analyze_and_save(video_path: str, shot_type: ShotType, validate_first: bool) -> ShotAnalysisResult:
    runtime = get_runtime()
    result = await runtime.shot_rater.analyze_shot(
        video_path, shot_type, validate_first=validate_first
    )
    await asyncio.to_thread(runtime.results.save, result, result.id)
    return result


@analysis_server.tool(annotations=_READ_ONLY)
@trace(name="shot_rater_validate", span_type="TOOL")
async def shot_rater_validate(video_path: VideoFilePath) -> dict:
    """Check that a clip shows a player with a stick before rating it.

    Returns:
        Dict with is_valid, confidence and an optional reason.
    """
    try:
        result = await get_runtime().shot_rater.validate_shot(video_path)
        return result.model_dump(mode="json")
    except Exception as exc:
        return make_tool_error(exc)


@analysis_server.tool(annotations=_ANALYZE)
@trace(name="shot_rater_analyze", span_type="TOOL")
async def shot_rater_analyze(
    video_path: VideoFilePath,
    shot_type: ShotTypeName = "Wrist Shot",
    validate_first: Annotated[bool, Field(description="Reject non-hockey clips before analysis")] = False,
    background: Annotated[bool, Field(
        description="Start the analysis and return immediately; poll shot_rater_background_status",
    )] = False,
) -> dict:
    """Rate a hockey shot on technique, power and overall quality (0-100).

    The result is saved under its id so it can be reloaded later with
    ``shot_rater_result_load``.

    Returns:
        Dict matching ShotAnalysisResult plus ``result_id``, or
        ``{"status": "started"}`` when ``background`` is set.
    """
    kind = ShotType(shot_type)
    try:
        if background:
            get_runtime().background.start_analysis(
                kind, _analyze_and_save(video_path, kind, validate_first)
            )
            logger.info("Started background %s analysis: %s", kind.value, video_path)
            return {"status": "started", "shot_type": kind.value}
        result = await _analyze_and_save(video_path, kind, validate_first)
        return {**result.model_dump(mode="json"), "result_id": result.id}
    except Exception as exc:
        return make_tool_error(exc)


@analysis_server.tool(annotations=_READ_ONLY)
@trace(name="skill_check_validate", span_type="TOOL")
async def skill_check_validate(video_path: VideoFilePath) -> dict:
    """Check that a clip shows a hockey skill before analyzing it."""
    try:
        result = await get_runtime().skill_check.validate_skill(video_path)
        return result.model_dump(mode="json")
    except Exception as exc:
        return make_tool_error(exc)


@analysis_server.tool(annotations=_ANALYZE)
@trace(name="skill_check_analyze", span_type="TOOL")
async def skill_check_analyze(
    video_path: VideoFilePath,
    user_request: UserRequest = "",
    validate_first: Annotated[bool, Field(description="Reject non-hockey clips before analysis")] = False,
) -> dict:
    """Evaluate whatever hockey skill the clip shows.

    Returns:
        Dict matching SkillAnalysisResult: overall score, category, a short
        comment, and three-item what-went-well / work-on / drills lists.
    """
    try:
        result = await get_runtime().skill_check.analyze_skill(
            video_path,
            SkillCheckContext(user_request=user_request),
            validate_first=validate_first,
        )
        return result.model_dump(mode="json")
    except Exception as exc:
        return make_tool_error(exc)


@analysis_server.tool(annotations=_READ_ONLY)
@trace(name="ai_coach_validate", span_type="TOOL")
async def ai_coach_validate(
    front_net_video: VideoFilePath,
    side_angle_video: VideoFilePath,
) -> dict:
    """Validate both coaching angles. Clips that time out count as valid."""
    try:
        result = await get_runtime().ai_coach.validate_shots([front_net_video, side_angle_video])
        return result.model_dump(mode="json")
    except Exception as exc:
        return make_tool_error(exc)


@analysis_server.tool(annotations=_ANALYZE)
@trace(name="ai_coach_analyze", span_type="TOOL")
async def ai_coach_analyze(
    front_net_video: VideoFilePath,
    side_angle_video: VideoFilePath,
    shot_type: ShotTypeName = "Wrist Shot",
    player_profile: Annotated[dict | str | None, Field(
        description="Optional profile: height (inches), weight (lbs), age, gender, position, "
        "handedness, play_style",
    )] = None,
    validate_first: Annotated[bool, Field(description="Validate both clips before analysis")] = False,
) -> dict:
    """Biomechanics coaching from a front-net and a side-angle clip of the same shot.

    Returns:
        Dict with the full coach response, five radar metrics with
        descriptors, and the focus area (the lowest metric).
    """
    try:
        raw_profile = coerce_json_param(player_profile, dict)
        profile = PlayerProfile.model_validate(raw_profile or {})
        result = await get_runtime().ai_coach.analyze_shot(
            front_net_video,
            side_angle_video,
            ShotType(shot_type),
            profile,
            validate_first=validate_first,
        )
        return coach_result_payload(result)
    except Exception as exc:
        return make_tool_error(exc)


@analysis_server.tool(annotations=_READ_ONLY)
@trace(name="stick_analyzer_validate", span_type="TOOL")
async def stick_analyzer_validate(video_path: VideoFilePath) -> dict:
    """Check that a shooting clip shows a player with a stick."""
    try:
        result = await get_runtime().stick_analyzer.validate_stick(video_path)
        return result.model_dump(mode="json")
    except Exception as exc:
        return make_tool_error(exc)


@analysis_server.tool(annotations=_ANALYZE)
@trace(name="stick_analyzer_analyze", span_type="TOOL")
async def stick_analyzer_analyze(
    video_path: VideoFilePath,
    player_profile: Annotated[dict | str | None, Field(
        description="Optional profile: height (inches), weight (lbs), age, gender, position",
    )] = None,
    questionnaire: Annotated[dict | str | None, Field(
        description="Optional answers: priority_focus (Power/Accuracy/Balance), primary_shot, "
        "shooting_zone (Point/Slot/Close Range/Varies)",
    )] = None,
    validate_first: Annotated[bool, Field(description="Reject non-hockey clips before analysis")] = False,
) -> dict:
    """Recommend stick flex, length, curve, kick point, lie and 3-5 stick models.

    Returns:
        Dict matching StickAnalysisResult.
    """
    try:
        profile = PlayerProfile.model_validate(coerce_json_param(player_profile, dict) or {})
        answers = ShootingQuestionnaire.model_validate(coerce_json_param(questionnaire, dict) or {})
        result = await get_runtime().stick_analyzer.analyze_stick(
            video_path, profile, answers, validate_first=validate_first
        )
        return result.model_dump(mode="json")
    except Exception as exc:
        return make_tool_error(exc)
