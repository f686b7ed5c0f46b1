"""Skill Check — open-ended feedback on whatever hockey skill the clip shows."""

from __future__ import annotations

from ..analytics import AIFeature, QualityIssue
from ..models.common import VideoAnalysisMetadata
from ..models.skill import (
    SKILL_CHECK_SCHEMA,
    SkillAnalysisResult,
    SkillCheckContext,
    SkillCheckResponse,
)
from ..models.validation import ValidationResponse
from ..pipeline import AnalysisPipeline
from ..prompts.skill import SKILL_ANALYSIS
from ..request import ANALYSIS_FRAME_RATE, AnalysisRequest, GenerationConfig
from ..tracing import trace
from .validation import ValidationService, require_valid

SKILL_CHECK_CONFIG = GenerationConfig(
    temperature=0.1,
    top_k=10,
    max_output_tokens=4096,
    response_schema=SKILL_CHECK_SCHEMA,
)

BREAKDOWN_ITEMS = 3


def build_skill_prompt(context: SkillCheckContext | None = None) -> str:
    return SKILL_ANALYSIS + (context.prompt_context if context else "")


def skill_quality_issue(response: SkillCheckResponse) -> QualityIssue | None:
    """Flag responses that decoded but miss what the results screen shows."""
    if not response.ai_comment.strip():
        return QualityIssue.MISSING_COMMENT
    lists = (response.what_you_did_well, response.what_to_work_on, response.how_to_improve)
    if not any(lists):
        return QualityIssue.MISSING_PREMIUM_DATA
    if any(len(items) != BREAKDOWN_ITEMS for items in lists):
        return QualityIssue.INCOMPLETE_DATA
    return None


def assemble_skill_result(
    response: SkillCheckResponse, metadata: VideoAnalysisMetadata, *, video: str
) -> SkillAnalysisResult:
    return SkillAnalysisResult(
        confidence=response.confidence,
        overall_score=response.overall_rating,
        category=response.category,
        ai_comment=response.ai_comment,
        premium_breakdown=response.premium_breakdown,
        video_path=video,
        analysis_metadata=metadata,
    )


class SkillCheckService:
    def __init__(self, pipeline: AnalysisPipeline | None = None) -> None:
        self.pipeline = pipeline or AnalysisPipeline()
        self.validation = ValidationService(self.pipeline, AIFeature.SKILL_CHECK)

    async def validate_skill(self, video: str) -> ValidationResponse:
        return await self.validation.validate_hockey_shot(video)

    @trace(name="skill_check_analyze", span_type="CHAIN")
    async def analyze_skill(
        self,
        video: str,
        context: SkillCheckContext | None = None,
        *,
        validate_first: bool = False,
    ) -> SkillAnalysisResult:
        if validate_first:
            require_valid(await self.validate_skill(video))

        request = AnalysisRequest.single_video(
            video,
            build_skill_prompt(context),
            generation_config=SKILL_CHECK_CONFIG,
            frame_rate=ANALYSIS_FRAME_RATE,
        )
        return await self.pipeline.run(
            request,
            SkillCheckResponse,
            lambda response, metadata: assemble_skill_result(response, metadata, video=video),
            feature=AIFeature.SKILL_CHECK,
            context=context.user_request if context else None,
            quality_check=skill_quality_issue,
        )
