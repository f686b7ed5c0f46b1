"""Analysis telemetry — property-bag events sent to a pluggable sink.

Events:
    ai_analysis_started, ai_analysis_completed, ai_analysis_failed,
    ai_response_quality_issue, ai_validation_failed.

``retry_count`` is always recorded as 0: nothing in the analysis path
retries automatically.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Protocol

from .config import get_config
from .errors import ErrorKind
from .preflight import Connectivity

logger = logging.getLogger(__name__)

PROVIDER = "gemini"


class AIFeature(str, Enum):
    SHOT_RATER = "shot_rater"
    SKILL_CHECK = "skill_check"
    AI_COACH = "ai_coach"
    STICK_ANALYZER = "stick_analyzer"


class QualityIssue(str, Enum):
    MISSING_COMMENT = "missing_comment"
    INVALID_SCORE = "invalid_score"
    MISSING_PREMIUM_DATA = "missing_premium_data"
    MALFORMED_JSON = "malformed_json"
    INCOMPLETE_DATA = "incomplete_data"


class AnalyticsSink(Protocol):
    def track(self, event_name: str, properties: dict[str, Any]) -> None: ...


class LoggingAnalyticsSink:
    """Default sink: stamps environment and build type, then logs at INFO."""

    def track(self, event_name: str, properties: dict[str, Any]) -> None:
        cfg = get_config()
        payload = {**properties, "environment": cfg.environment, "build_type": cfg.build_type}
        logger.info("analytics %s %s", event_name, payload)


class RecordingAnalyticsSink:
    """Keeps events in memory, in order."""

    def __init__(self) -> None:
        self.events: list[tuple[str, dict[str, Any]]] = []

    def track(self, event_name: str, properties: dict[str, Any]) -> None:
        self.events.append((event_name, dict(properties)))

    def named(self, event_name: str) -> list[dict[str, Any]]:
        return [props for name, props in self.events if name == event_name]


class PerformanceAnalytics:
    """Builds the analysis events and hands them to *sink*."""

    def __init__(
        self,
        sink: AnalyticsSink | None = None,
        connectivity: Connectivity | None = None,
        *,
        provider: str = PROVIDER,
    ) -> None:
        self.sink = sink or LoggingAnalyticsSink()
        self.connectivity = connectivity or Connectivity()
        self.provider = provider

    def _base(self, feature: AIFeature, size_kb: int) -> dict[str, Any]:
        return {
            "feature": feature.value,
            "provider": self.provider,
            "image_size_kb": size_kb,
            "network_type": self.connectivity.network_type,
        }

    def analysis_started(self, feature: AIFeature, *, size_kb: int, context: str | None = None) -> None:
        props = self._base(feature, size_kb)
        if context:
            props["context"] = context
        self.sink.track("ai_analysis_started", props)

    def analysis_completed(
        self,
        feature: AIFeature,
        *,
        duration: float,
        size_kb: int,
        response_valid: bool = True,
        score: int | None = None,
        has_premium_data: bool | None = None,
    ) -> None:
        props = self._base(feature, size_kb)
        props["duration_seconds"] = duration
        props["response_valid"] = response_valid
        if score is not None:
            props["score_generated"] = score
        if has_premium_data is not None:
            props["has_premium_data"] = has_premium_data
        self.sink.track("ai_analysis_completed", props)

    def analysis_failed(
        self,
        feature: AIFeature,
        *,
        kind: ErrorKind,
        message: str,
        duration: float,
        size_kb: int = 0,
    ) -> None:
        props = self._base(feature, size_kb)
        props.update(
            error_type=kind.value,
            error_message=message,
            duration_before_failure=duration,
            retry_count=0,
        )
        self.sink.track("ai_analysis_failed", props)

    def quality_issue(
        self,
        feature: AIFeature,
        issue: QualityIssue,
        *,
        score: int | None = None,
        has_comment: bool,
        has_premium_data: bool,
    ) -> None:
        props: dict[str, Any] = {
            "feature": feature.value,
            "issue_type": issue.value,
            "has_comment": has_comment,
            "has_premium_data": has_premium_data,
        }
        if score is not None:
            props["score"] = score
        self.sink.track("ai_response_quality_issue", props)

    def validation_failed(self, feature: AIFeature, *, reason: str, duration: float) -> None:
        self.sink.track(
            "ai_validation_failed",
            {"feature": feature.value, "validation_type": reason, "duration": duration},
        )
