"""Analysis orchestration shared by Shot Rater, Skill Check, AI Coach and validation.

One call runs, in order: availability gate, non-blocking preflight notice,
metadata extraction, a single dispatch, sanitize, typed decode, assembly.
It ends in exactly one of {result, AnalyzerError}. Nothing is retried.
"""

from __future__ import annotations

import logging
import os
import time
from collections.abc import Callable
from typing import Protocol, TypeVar

from pydantic import BaseModel, ValidationError

from .analytics import AIFeature, PerformanceAnalytics, QualityIssue
from .client import GeminiFacade
from .errors import ErrorKind, ResponseParsingError, ServiceUnavailableError, classify_exception
from .media import extract_video_metadata
from .models.common import VideoAnalysisMetadata
from .preflight import CellularNotice, Connectivity
from .request import AnalysisRequest
from .sanitize import sanitize_json

logger = logging.getLogger(__name__)

ANALYSIS_PARSE_FAILURE = "Analysis completed but results couldn't be processed. Please try again."
VALIDATION_PARSE_FAILURE = "Could not validate video. Please try again."

ResponseT = TypeVar("ResponseT", bound=BaseModel)
ResultT = TypeVar("ResultT")


class AIFacade(Protocol):
    def is_available(self) -> bool: ...

    async def generate(self, request: AnalysisRequest) -> str: ...


def decode_response(
    raw: str,
    response_type: type[ResponseT],
    *,
    failure_message: str = ANALYSIS_PARSE_FAILURE,
    stage: str = "analysis",
) -> ResponseT:
    """Sanitize *raw* and decode it into *response_type*.

    The decoder's own error never reaches the caller; it is logged at DEBUG
    together with a preview of the cleaned text.
    """
    cleaned = sanitize_json(raw)
    try:
        return response_type.model_validate_json(cleaned)
    except ValidationError as exc:
        logger.debug(
            "%s parsing failed: %s\nResponse preview: %s",
            response_type.__name__,
            exc,
            cleaned[:500],
        )
        raise ResponseParsingError(failure_message, stage=stage) from None


def _size_kb(videos: tuple[str, ...]) -> int:
    total = 0
    for video in videos:
        try:
            total += os.path.getsize(video)
        except OSError:
            continue
    return total // 1024


class AnalysisPipeline:
    """Runs one request through the full validate-dispatch-decode sequence."""

    def __init__(
        self,
        facade: AIFacade = GeminiFacade,
        analytics: PerformanceAnalytics | None = None,
        notice: CellularNotice | None = None,
    ) -> None:
        self.facade = facade
        self.analytics = analytics or PerformanceAnalytics()
        self.notice = notice or CellularNotice(Connectivity())

    async def run(
        self,
        request: AnalysisRequest,
        response_type: type[ResponseT],
        assemble: Callable[[ResponseT, VideoAnalysisMetadata], ResultT],
        *,
        feature: AIFeature,
        extract_metadata: bool = True,
        stage: str = "analysis",
        context: str | None = None,
        quality_check: Callable[[ResponseT], QualityIssue | None] | None = None,
    ) -> ResultT:
        """Execute *request* and return the assembled result.

        Args:
            request: Fully built provider request.
            response_type: Wire model the sanitized output must decode into.
            assemble: Builds the domain result from the decoded response and
                the local metadata (``processing_time`` already filled in).
            feature: Feature name used for telemetry.
            extract_metadata: Read duration/resolution/size/fps from the
                first video before dispatch.
            stage: ``"analysis"`` or ``"validation"``; selects the
                parse-failure message and title.
            context: Optional telemetry context.
            quality_check: Flags a decoded-but-weak response for telemetry.

        Raises:
            ServiceUnavailableError: The facade is unavailable; nothing was sent.
            AnalyzerError: Classified dispatch or decode failure.
        """
        if not self.facade.is_available():
            error = ServiceUnavailableError()
            self.analytics.analysis_failed(
                feature,
                kind=ErrorKind.SERVICE_UNAVAILABLE,
                message=error.failure_reason,
                duration=0.0,
            )
            raise error

        self.notice.show_if_needed()

        started = time.monotonic()
        if extract_metadata:
            metadata = await extract_video_metadata(request.videos[0])
        else:
            metadata = VideoAnalysisMetadata()

        size_kb = _size_kb(request.videos)
        self.analytics.analysis_started(feature, size_kb=size_kb, context=context)

        failure_message = VALIDATION_PARSE_FAILURE if stage == "validation" else ANALYSIS_PARSE_FAILURE
        try:
            raw = await self.facade.generate(request)
            response = decode_response(
                raw, response_type, failure_message=failure_message, stage=stage
            )
        except Exception as exc:
            error = classify_exception(exc)
            self.analytics.analysis_failed(
                feature,
                kind=error.kind or ErrorKind.UNKNOWN,
                message=error.failure_reason,
                duration=time.monotonic() - started,
                size_kb=size_kb,
            )
            if error is exc:
                raise
            raise error from exc

        elapsed = time.monotonic() - started
        issue = quality_check(response) if quality_check else None
        if issue is not None:
            self.analytics.quality_issue(
                feature,
                issue,
                score=getattr(response, "overall_rating", None),
                has_comment=bool(getattr(response, "ai_comment", None) or getattr(response, "summary", None)),
                has_premium_data=False,
            )
        self.analytics.analysis_completed(
            feature,
            duration=elapsed,
            size_kb=size_kb,
            score=getattr(response, "overall_rating", None),
            has_premium_data=(issue is None) if quality_check else None,
        )

        return assemble(response, metadata.model_copy(update={"processing_time": elapsed}))
