"""Result tools — saved Shot Rater results and background analysis control."""

from __future__ import annotations

import asyncio

from fastmcp import FastMCP
from mcp.types import ToolAnnotations

from ..errors import make_tool_error
from ..models.common import ShotType
from ..tracing import trace
from ..types import ResultId, ShotTypeName
from ._runtime import get_runtime

results_server = FastMCP("results")


@results_server.tool(
    annotations=ToolAnnotations(
        readOnlyHint=True,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    )
)
@trace(name="shot_rater_result_load", span_type="TOOL")
async def shot_rater_result_load(result_id: ResultId) -> dict:
    """Reload a saved Shot Rater result, e.g. when reopening it from a link.

    Returns:
        Dict matching ShotAnalysisResult, or ``{"found": False}``.
    """
    result = await asyncio.to_thread(get_runtime().results.load, result_id)
    if result is None:
        return {"found": False, "result_id": result_id}
    return {"found": True, "result_id": result_id, **result.model_dump(mode="json")}


@results_server.tool(
    annotations=ToolAnnotations(
        readOnlyHint=True,
        destructiveHint=False,
        idempotentHint=False,
        openWorldHint=False,
    )
)
@trace(name="shot_rater_background_status", span_type="TOOL")
async def shot_rater_background_status(shot_type: ShotTypeName = "Wrist Shot") -> dict:
    """Report whether a background analysis is running and return its result if done.

    Reading the status also consumes a pending cancellation, so
    ``was_cancelled`` is reported once per cancel.
    """
    manager = get_runtime().background
    kind = ShotType(shot_type)
    latest = manager.latest_result(kind)
    return {
        "shot_type": kind.value,
        "analyzing": manager.is_analyzing(kind),
        "was_cancelled": manager.consume_cancellation_flag(kind),
        "error": manager.last_error(kind),
        "result": latest.model_dump(mode="json") if latest else None,
        "result_id": latest.id if latest else None,
    }


@results_server.tool(
    annotations=ToolAnnotations(
        readOnlyHint=False,
        destructiveHint=True,
        idempotentHint=True,
        openWorldHint=False,
    )
)
@trace(name="shot_rater_background_cancel", span_type="TOOL")
async def shot_rater_background_cancel(
    shot_type: ShotTypeName = "Wrist Shot",
    broadcast: bool = True,
) -> dict:
    """Cancel a running background analysis and discard its result."""
    try:
        kind = ShotType(shot_type)
        get_runtime().background.cancel_analysis(kind, broadcast=broadcast)
        return {"shot_type": kind.value, "cancelled": True}
    except Exception as exc:
        return make_tool_error(exc)
