"""Shot Rater — technique, power and overall score for one shot clip."""

from __future__ import annotations

import logging

from ..analytics import AIFeature
from ..models.common import ScoredReason, ShotType, VideoAnalysisMetadata
from ..models.shot import SHOT_RATER_SCHEMA, ShotAnalysisResult, ShotMetrics, ShotRaterResponse
from ..models.validation import ValidationResponse
from ..pipeline import AnalysisPipeline
from ..prompts.shot import SHOT_ANALYSIS
from ..request import ANALYSIS_FRAME_RATE, AnalysisRequest, GenerationConfig
from ..tracing import trace
from .validation import ValidationService, require_valid

logger = logging.getLogger(__name__)

SHOT_RATER_CONFIG = GenerationConfig(
    temperature=0.1,
    top_k=10,
    max_output_tokens=4096,
    response_schema=SHOT_RATER_SCHEMA,
)


def build_shot_request(video: str, shot_type: ShotType) -> AnalysisRequest:
    return AnalysisRequest.single_video(
        video,
        SHOT_ANALYSIS.format(shot_name=shot_type.display_name),
        generation_config=SHOT_RATER_CONFIG,
        frame_rate=ANALYSIS_FRAME_RATE,
    )


def assemble_shot_result(
    response: ShotRaterResponse,
    metadata: VideoAnalysisMetadata,
    *,
    shot_type: ShotType,
    video: str,
) -> ShotAnalysisResult:
    """Merge the decoded response with local metadata.

    ``selected_shot_type`` is always the type the player picked, never
    anything the model says.
    """
    return ShotAnalysisResult(
        type=shot_type,
        confidence=response.confidence,
        overall_score=response.overall_rating,
        metrics=ShotMetrics(
            technique=ScoredReason(score=response.technique_score, reason=response.technique_reason),
            power=ScoredReason(score=response.power_score, reason=response.power_reason),
        ),
        tips=response.summary,
        video_path=video,
        analysis_metadata=metadata.model_copy(update={"selected_shot_type": shot_type.value}),
    )


class ShotRaterService:
    def __init__(self, pipeline: AnalysisPipeline | None = None) -> None:
        self.pipeline = pipeline or AnalysisPipeline()
        self.validation = ValidationService(self.pipeline, AIFeature.SHOT_RATER)

    async def validate_shot(self, video: str) -> ValidationResponse:
        return await self.validation.validate_hockey_shot(video)

    @trace(name="shot_rater_analyze", span_type="CHAIN")
    async def analyze_shot(
        self,
        video: str,
        shot_type: ShotType,
        *,
        validate_first: bool = False,
    ) -> ShotAnalysisResult:
        """Rate *video* as a *shot_type*.

        With ``validate_first`` the clip must pass validation, otherwise
        ``InvalidContentError`` is raised before the full analysis is sent.
        """
        if validate_first:
            require_valid(await self.validate_shot(video))

        logger.info("Analyzing %s: %s", shot_type.value, video)
        return await self.pipeline.run(
            build_shot_request(video, shot_type),
            ShotRaterResponse,
            lambda response, metadata: assemble_shot_result(
                response, metadata, shot_type=shot_type, video=video
            ),
            feature=AIFeature.SHOT_RATER,
            context=shot_type.value,
        )
