"""AI Coach — two-angle biomechanics analysis with a single focus area."""

from __future__ import annotations

from ..analytics import AIFeature
from ..models.coach import COACH_SCHEMA, CoachAnalysisResult, CoachResponse
from ..models.common import ShotType, VideoAnalysisMetadata
from ..models.profile import PlayerProfile
from ..models.validation import ValidationResponse
from ..pipeline import AnalysisPipeline
from ..prompts.coach import COACH_ANALYSIS
from ..request import ANALYSIS_FRAME_RATE, AnalysisRequest, GenerationConfig
from ..tracing import trace
from .validation import ValidationService, require_valid

COACH_CONFIG = GenerationConfig(
    temperature=0.1,
    top_k=10,
    max_output_tokens=8192,
    response_schema=COACH_SCHEMA,
)


def build_coach_request(
    front_net_video: str,
    side_angle_video: str,
    shot_type: ShotType,
    profile: PlayerProfile,
) -> AnalysisRequest:
    prompt = COACH_ANALYSIS.format(
        shot_name=shot_type.value,
        profile_context=profile.prompt_context(),
    )
    return AnalysisRequest.multiple_videos(
        [front_net_video, side_angle_video],
        prompt,
        generation_config=COACH_CONFIG,
        frame_rate=ANALYSIS_FRAME_RATE,
    )


class AICoachService:
    def __init__(self, pipeline: AnalysisPipeline | None = None) -> None:
        self.pipeline = pipeline or AnalysisPipeline()
        self.validation = ValidationService(self.pipeline, AIFeature.AI_COACH)

    async def validate_shot(self, video: str) -> ValidationResponse:
        return await self.validation.validate_hockey_shot_with_angles(video)

    async def validate_shots(self, videos: list[str]) -> ValidationResponse:
        return await self.validation.validate_multiple_shots(videos)

    @trace(name="ai_coach_analyze", span_type="CHAIN")
    async def analyze_shot(
        self,
        front_net_video: str,
        side_angle_video: str,
        shot_type: ShotType,
        player_profile: PlayerProfile | None = None,
        *,
        validate_first: bool = False,
    ) -> CoachAnalysisResult:
        """Analyze one shot filmed from the net and from the side.

        Metadata extraction is skipped; only processing time is recorded.
        """
        profile = player_profile or PlayerProfile()
        if validate_first:
            require_valid(await self.validate_shots([front_net_video, side_angle_video]))

        def assemble(response: CoachResponse, metadata: VideoAnalysisMetadata) -> CoachAnalysisResult:
            return CoachAnalysisResult(
                shot_type=shot_type,
                player_profile=profile,
                front_net_video=front_net_video,
                side_angle_video=side_angle_video,
                processing_time=metadata.processing_time,
                response=response,
            )

        return await self.pipeline.run(
            build_coach_request(front_net_video, side_angle_video, shot_type, profile),
            CoachResponse,
            assemble,
            feature=AIFeature.AI_COACH,
            extract_metadata=False,
            context=shot_type.value,
        )
