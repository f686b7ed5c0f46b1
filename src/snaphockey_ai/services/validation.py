"""Shared video validation — the cheap 1 fps gate in front of every analysis."""

from __future__ import annotations

import asyncio
import logging
import time

from ..analytics import AIFeature
from ..config import get_config
from ..errors import InvalidContentError, ProcessingFailedError, ServiceUnavailableError
from ..models.validation import ANGLE_VALIDATION_SCHEMA, VALIDATION_SCHEMA, ValidationResponse
from ..pipeline import AnalysisPipeline
from ..prompts.validation import HOCKEY_SHOT_VALIDATION, HOCKEY_SHOT_VALIDATION_WITH_ANGLES
from ..request import VALIDATION_FRAME_RATE, AnalysisRequest, GenerationConfig

logger = logging.getLogger(__name__)

TIMEOUT_CONFIDENCE_CAP = 0.7
FAILURE_CONFIDENCE_CAP = 0.5
DEFAULT_INVALID_REASON = "Not a valid hockey shot"


def _validation_config(schema: dict) -> GenerationConfig:
    return GenerationConfig(
        temperature=0.1,
        top_k=10,
        top_p=0.8,
        max_output_tokens=1024,
        response_schema=schema,
    )


def require_valid(validation: ValidationResponse) -> ValidationResponse:
    """Raise ``InvalidContentError`` unless the clip passed validation."""
    if not validation.is_valid:
        raise InvalidContentError(validation.reason or DEFAULT_INVALID_REASON)
    return validation


class ValidationService:
    """Validation calls for one feature, sharing that feature's pipeline."""

    def __init__(self, pipeline: AnalysisPipeline, feature: AIFeature) -> None:
        self.pipeline = pipeline
        self.feature = feature

    async def _validate(self, video: str, prompt: str, schema: dict) -> ValidationResponse:
        started = time.monotonic()
        request = AnalysisRequest.single_video(
            video,
            prompt,
            generation_config=_validation_config(schema),
            frame_rate=VALIDATION_FRAME_RATE,
        )
        result = await self.pipeline.run(
            request,
            ValidationResponse,
            lambda response, _metadata: response,
            feature=self.feature,
            extract_metadata=False,
            stage="validation",
            context="validation",
        )
        if not result.is_valid:
            self.pipeline.analytics.validation_failed(
                self.feature,
                reason=result.reason or DEFAULT_INVALID_REASON,
                duration=time.monotonic() - started,
            )
        return result

    async def validate_hockey_shot(self, video: str) -> ValidationResponse:
        """Is there a player with a stick doing something hockey-related?"""
        return await self._validate(video, HOCKEY_SHOT_VALIDATION, VALIDATION_SCHEMA)

    async def validate_hockey_shot_with_angles(self, video: str) -> ValidationResponse:
        """Like ``validate_hockey_shot`` but also reports which camera angle was used."""
        return await self._validate(
            video, HOCKEY_SHOT_VALIDATION_WITH_ANGLES, ANGLE_VALIDATION_SCHEMA
        )

    async def validate_multiple_shots(self, videos: list[str]) -> ValidationResponse:
        """Validate each clip in turn and fold the verdicts into one.

        A clip that times out or fails to validate counts as valid, with its
        confidence capped, so a flaky connection never blocks the player.
        """
        if not videos:
            raise ProcessingFailedError("No videos provided for validation")
        if not self.pipeline.facade.is_available():
            raise ServiceUnavailableError()

        timeout = get_config().validation_timeout
        all_valid = True
        min_confidence = 1.0
        has_front = False
        has_side = False
        reasons: list[str] = []

        for index, video in enumerate(videos, start=1):
            try:
                result = await asyncio.wait_for(
                    self.validate_hockey_shot_with_angles(video), timeout=timeout
                )
            except TimeoutError:
                logger.warning("Video %d validation timed out after %.0fs, assuming valid", index, timeout)
                min_confidence = min(min_confidence, TIMEOUT_CONFIDENCE_CAP)
                has_front = has_side = True
                continue
            except Exception as exc:
                logger.warning("Video %d validation failed, assuming valid: %s", index, exc)
                min_confidence = min(min_confidence, FAILURE_CONFIDENCE_CAP)
                has_front = has_side = True
                continue

            if not result.is_valid:
                all_valid = False
                if result.reason:
                    reasons.append(f"Video {index}: {result.reason}")
            min_confidence = min(min_confidence, result.confidence)
            has_front = has_front or bool(result.has_front_angle)
            has_side = has_side or bool(result.has_side_angle)

        return ValidationResponse(
            is_valid=all_valid,
            confidence=min_confidence,
            reason="; ".join(reasons) or None,
            has_front_angle=has_front,
            has_side_angle=has_side,
        )
