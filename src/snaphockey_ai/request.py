"""Request builder — immutable provider requests with forced JSON output."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .schema_guard import check_schema_complexity

JSON_MIME_TYPE = "application/json"
ANALYSIS_FRAME_RATE = 10
VALIDATION_FRAME_RATE = 1

class GenerationConfig(BaseModel):
    """Sampling limits plus the response schema the provider must follow."""

    model_config = ConfigDict(frozen=True)

    temperature: float = 0.1
    top_k: int = 10
    top_p: float | None = None
    max_output_tokens: int = 4096
    response_mime_type: str = JSON_MIME_TYPE
    response_schema: dict = Field(default_factory=dict)

    @field_validator("response_schema")
    @classmethod
    def validate_schema(cls, value: dict) -> dict:
        if value:
            check_schema_complexity(value)
        return value


class AnalysisRequest(BaseModel):
    """One dispatch: video(s), prompt, frame sampling and generation config."""

    model_config = ConfigDict(frozen=True)

    videos: tuple[str, ...]
    prompt: str
    frame_rate: int = ANALYSIS_FRAME_RATE
    generation_config: GenerationConfig

    @field_validator("videos")
    @classmethod
    def validate_videos(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        if not value:
            raise ValueError("No videos provided")
        return value

    @classmethod
    def single_video(
        cls,
        video: str,
        prompt: str,
        *,
        generation_config: GenerationConfig,
        frame_rate: int = ANALYSIS_FRAME_RATE,
    ) -> AnalysisRequest:
        return cls(
            videos=(video,),
            prompt=prompt,
            frame_rate=frame_rate,
            generation_config=generation_config,
        )

    @classmethod
    def multiple_videos(
        cls,
        videos: list[str],
        prompt: str,
        *,
        generation_config: GenerationConfig,
        frame_rate: int = ANALYSIS_FRAME_RATE,
    ) -> AnalysisRequest:
        return cls(
            videos=tuple(videos),
            prompt=prompt,
            frame_rate=frame_rate,
            generation_config=generation_config,
        )
