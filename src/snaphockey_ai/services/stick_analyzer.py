"""Stick Analyzer — stick fit recommendations from a shooting clip and a profile."""

from __future__ import annotations

import logging

from ..analytics import AIFeature, QualityIssue
from ..models.common import VideoAnalysisMetadata
from ..models.profile import PlayerProfile
from ..models.stick import (
    STICK_SCHEMA,
    ShootingQuestionnaire,
    StickAnalysisResponse,
    StickAnalysisResult,
    StickRecommendations,
)
from ..models.validation import ValidationResponse
from ..pipeline import AnalysisPipeline
from ..prompts.stick import STICK_ANALYSIS
from ..request import ANALYSIS_FRAME_RATE, AnalysisRequest, GenerationConfig
from ..tracing import trace
from .validation import ValidationService, require_valid

logger = logging.getLogger(__name__)

NOT_SPECIFIED = "Not specified"

STICK_CONFIG = GenerationConfig(
    temperature=0.1,
    top_k=10,
    top_p=0.8,
    max_output_tokens=8192,
    response_schema=STICK_SCHEMA,
)


def build_stick_prompt(profile: PlayerProfile, questionnaire: ShootingQuestionnaire) -> str:
    return STICK_ANALYSIS.format(
        height=profile.height_display or NOT_SPECIFIED,
        weight=f"{int(profile.weight)} lbs" if profile.weight is not None else NOT_SPECIFIED,
        age=profile.age if profile.age is not None else NOT_SPECIFIED,
        gender=profile.gender.value if profile.gender else NOT_SPECIFIED,
        position=profile.position.value if profile.position else NOT_SPECIFIED,
        priority=questionnaire.priority_focus.value,
        primary_shot=questionnaire.primary_shot.value,
        shooting_zone=questionnaire.shooting_zone.value,
    )


def build_stick_request(
    video: str,
    profile: PlayerProfile,
    questionnaire: ShootingQuestionnaire,
) -> AnalysisRequest:
    return AnalysisRequest.single_video(
        video,
        build_stick_prompt(profile, questionnaire),
        generation_config=STICK_CONFIG,
        frame_rate=ANALYSIS_FRAME_RATE,
    )


def stick_quality_issue(response: StickAnalysisResponse) -> QualityIssue | None:
    if not response.recommended_sticks:
        return QualityIssue.MISSING_PREMIUM_DATA
    return None


class StickAnalyzerService:
    def __init__(self, pipeline: AnalysisPipeline | None = None) -> None:
        self.pipeline = pipeline or AnalysisPipeline()
        self.validation = ValidationService(self.pipeline, AIFeature.STICK_ANALYZER)

    async def validate_stick(self, video: str) -> ValidationResponse:
        """Same player-with-a-stick check the Shot Rater uses."""
        return await self.validation.validate_hockey_shot(video)

    @trace(name="stick_analyzer_analyze", span_type="CHAIN")
    async def analyze_stick(
        self,
        video: str,
        player_profile: PlayerProfile | None = None,
        questionnaire: ShootingQuestionnaire | None = None,
        *,
        validate_first: bool = False,
    ) -> StickAnalysisResult:
        """Recommend flex, length, curve, kick point, lie and 3-5 stick models.

        No score is produced; ``has_premium_data`` in telemetry reports whether
        any stick models came back.
        """
        profile = player_profile or PlayerProfile()
        answers = questionnaire or ShootingQuestionnaire()
        if validate_first:
            require_valid(await self.validate_stick(video))

        logger.info("Analyzing stick fit: %s", video)

        def assemble(response: StickAnalysisResponse, metadata: VideoAnalysisMetadata) -> StickAnalysisResult:
            return StickAnalysisResult(
                confidence=response.confidence,
                player_profile=profile,
                questionnaire=answers,
                shot_video=video,
                recommendations=StickRecommendations.from_response(response),
                processing_time=metadata.processing_time,
            )

        return await self.pipeline.run(
            build_stick_request(video, profile, answers),
            StickAnalysisResponse,
            assemble,
            feature=AIFeature.STICK_ANALYZER,
            context="stick_recommendation",
            quality_check=stick_quality_issue,
        )
