"""Tests for the Shot Rater, Skill Check, AI Coach and Stick Analyzer services."""

from __future__ import annotations

import json

import pytest
from conftest import COACH_JSON, SHOT_JSON, SKILL_JSON, STICK_PAYLOAD, validation_json

from snaphockey_ai.analytics import QualityIssue
from snaphockey_ai.config import update_config
from snaphockey_ai.errors import InvalidContentError
from snaphockey_ai.models.common import ShotType
from snaphockey_ai.models.profile import Gender, Handedness, PlayerProfile, Position
from snaphockey_ai.models.skill import SkillCheckContext, SkillCheckResponse
from snaphockey_ai.models.stick import KickPoint, PriorityFocus, ShootingQuestionnaire, ShootingZone
from snaphockey_ai.services.ai_coach import AICoachService, build_coach_request
from snaphockey_ai.services.shot_rater import ShotRaterService, build_shot_request
from snaphockey_ai.services.skill_check import SkillCheckService, build_skill_prompt, skill_quality_issue
from snaphockey_ai.services.stick_analyzer import StickAnalyzerService, build_stick_prompt, build_stick_request


class TestShotRaterService:
    def test_prompt_names_the_shot(self):
        request = build_shot_request("/clips/a.mp4", ShotType.SLAP_SHOT)
        assert "Slap Shot" in request.prompt
        assert request.generation_config.max_output_tokens == 4096

    async def test_analyze(self, pipeline, video_file):
        result = await ShotRaterService(pipeline).analyze_shot(video_file, ShotType.BACKHAND)
        assert result.type is ShotType.BACKHAND
        assert result.overall_score == 78
        assert result.tips == "Solid shot, work on power."
        assert result.analysis_metadata.selected_shot_type == "Backhand"
        assert result.video_path == video_file

    async def test_validate_first_rejects(self, pipeline, fake_facade, video_file):
        fake_facade.generate.return_value = validation_json(False, 0.9, reason="This is soccer")
        with pytest.raises(InvalidContentError, match="This is soccer"):
            await ShotRaterService(pipeline).analyze_shot(
                video_file, ShotType.WRIST_SHOT, validate_first=True
            )
        assert fake_facade.generate.await_count == 1

    async def test_validate_first_then_analyze(self, pipeline, fake_facade, video_file):
        fake_facade.generate.side_effect = [validation_json(True, 0.9), SHOT_JSON]
        result = await ShotRaterService(pipeline).analyze_shot(
            video_file, ShotType.WRIST_SHOT, validate_first=True
        )
        assert result.overall_score == 78
        frame_rates = [call.args[0].frame_rate for call in fake_facade.generate.await_args_list]
        assert frame_rates == [1, 10]


class TestSkillCheckService:
    def test_prompt_context_appended(self):
        assert build_skill_prompt(None) == build_skill_prompt(SkillCheckContext())
        prompt = build_skill_prompt(SkillCheckContext(user_request="crossovers"))
        assert prompt.rstrip().endswith("Address their specific request directly in your response.")
        assert '"crossovers"' in prompt

    async def test_analyze(self, pipeline, fake_facade, recording_sink, video_file):
        fake_facade.generate.return_value = SKILL_JSON
        result = await SkillCheckService(pipeline).analyze_skill(
            video_file, SkillCheckContext(user_request="hands")
        )
        assert result.overall_score == 73
        assert result.category == "stickhandling"
        assert result.premium_breakdown.what_to_work_on[0] == "Knee bend"
        assert recording_sink.named("ai_analysis_started")[0]["context"] == "hands"
        assert recording_sink.named("ai_analysis_completed")[0]["has_premium_data"] is True
        assert recording_sink.named("ai_response_quality_issue") == []

    async def test_results_get_distinct_ids(self, pipeline, fake_facade, video_file):
        fake_facade.generate.return_value = SKILL_JSON
        service = SkillCheckService(pipeline)
        first = await service.analyze_skill(video_file)
        second = await service.analyze_skill(video_file)
        assert first.id != second.id

    @pytest.mark.parametrize(
        "overrides, issue",
        [
            ({"ai_comment": " "}, QualityIssue.MISSING_COMMENT),
            (
                {"what_you_did_well": [], "what_to_work_on": [], "how_to_improve": []},
                QualityIssue.MISSING_PREMIUM_DATA,
            ),
            ({"how_to_improve": ["Only one drill"]}, QualityIssue.INCOMPLETE_DATA),
            ({}, None),
        ],
    )
    def test_quality_issue(self, overrides, issue):
        response = SkillCheckResponse.model_validate({**json.loads(SKILL_JSON), **overrides})
        assert skill_quality_issue(response) is issue


class TestAICoachService:
    def test_request_has_both_angles_and_profile(self):
        profile = PlayerProfile(position=Position.RIGHT_WING, handedness=Handedness.RIGHT)
        request = build_coach_request("/front.mp4", "/side.mp4", ShotType.SNAP_SHOT, profile)
        assert request.videos == ("/front.mp4", "/side.mp4")
        assert "Snap Shot" in request.prompt
        assert "Position: Right Wing, Shoots: Right" in request.prompt
        assert request.generation_config.max_output_tokens == 8192

    def test_default_profile_context(self):
        request = build_coach_request("/f.mp4", "/s.mp4", ShotType.WRIST_SHOT, PlayerProfile())
        assert "General player" in request.prompt

    async def test_analyze(self, pipeline, fake_facade):
        fake_facade.generate.return_value = COACH_JSON
        result = await AICoachService(pipeline).analyze_shot("/front.mp4", "/side.mp4", ShotType.WRIST_SHOT)
        assert result.overall_rating == 76
        assert result.frames_analyzed == 60
        assert result.focus_area.metric.name == "Power"
        assert result.processing_time >= 0
        assert result.player_profile == PlayerProfile()

    async def test_validate_first_rejects_on_any_invalid(self, pipeline, fake_facade):
        fake_facade.generate.side_effect = [
            validation_json(True, 0.9, has_front_angle=True, has_side_angle=False),
            validation_json(False, 0.9, reason="Not hockey", has_front_angle=False, has_side_angle=False),
        ]
        with pytest.raises(InvalidContentError, match="Video 2: Not hockey"):
            await AICoachService(pipeline).analyze_shot(
                "/front.mp4", "/side.mp4", ShotType.WRIST_SHOT, validate_first=True
            )
        assert fake_facade.generate.await_count == 2


class TestStickAnalyzerService:
    def test_prompt_carries_profile_and_answers(self):
        profile = PlayerProfile(height=69, weight=150.6, age=17, gender=Gender.FEMALE, position=Position.CENTER)
        answers = ShootingQuestionnaire(
            priority_focus=PriorityFocus.ACCURACY,
            primary_shot=ShotType.SNAP_SHOT,
            shooting_zone=ShootingZone.SLOT,
        )
        prompt = build_stick_prompt(profile, answers)
        assert "- Height: 5'9\"" in prompt
        assert "- Weight: 150 lbs" in prompt
        assert "- Gender: Female" in prompt
        assert "- Priority: Accuracy" in prompt
        assert "- Primary Shot: Snap Shot" in prompt
        assert "- Shooting Zone: Slot" in prompt

    def test_missing_profile_fields_marked(self):
        prompt = build_stick_prompt(PlayerProfile(), ShootingQuestionnaire())
        assert "- Height: Not specified" in prompt
        assert "- Weight: Not specified" in prompt
        assert "- Position: Not specified" in prompt
        assert "- Shooting Zone: Varies" in prompt

    def test_request_config(self):
        request = build_stick_request("/clips/a.mp4", PlayerProfile(), ShootingQuestionnaire())
        config = request.generation_config
        assert (config.temperature, config.top_k, config.top_p) == (0.1, 10, 0.8)
        assert config.max_output_tokens == 8192
        assert request.frame_rate == 10

    async def test_analyze(self, pipeline, fake_facade, recording_sink, video_file):
        fake_facade.generate.return_value = json.dumps(STICK_PAYLOAD)
        result = await StickAnalyzerService(pipeline).analyze_stick(video_file)
        recs = result.recommendations
        assert recs.ideal_flex.display == "65-75"
        assert recs.ideal_kick_point is KickPoint.LOW
        assert [stick.kick_point for stick in recs.top_stick_models] == [KickPoint.MID, KickPoint.LOW, KickPoint.MID]
        assert result.questionnaire == ShootingQuestionnaire()
        assert result.shot_video == video_file

        started = recording_sink.named("ai_analysis_started")[0]
        assert started["feature"] == "stick_analyzer"
        assert started["context"] == "stick_recommendation"
        completed = recording_sink.named("ai_analysis_completed")[0]
        assert completed["has_premium_data"] is True
        assert "score_generated" not in completed

    async def test_no_sticks_is_a_quality_issue(self, pipeline, fake_facade, recording_sink, video_file):
        fake_facade.generate.return_value = json.dumps({**STICK_PAYLOAD, "recommended_sticks": []})
        result = await StickAnalyzerService(pipeline).analyze_stick(video_file)
        assert result.recommendations.top_stick_models == []
        issue = recording_sink.named("ai_response_quality_issue")[0]
        assert issue["issue_type"] == QualityIssue.MISSING_PREMIUM_DATA.value
        assert recording_sink.named("ai_analysis_completed")[0]["has_premium_data"] is False

    async def test_validate_first_rejects(self, pipeline, fake_facade, recording_sink, video_file):
        fake_facade.generate.return_value = validation_json(False, 0.9, reason="No stick visible")
        with pytest.raises(InvalidContentError, match="No stick visible"):
            await StickAnalyzerService(pipeline).analyze_stick(video_file, validate_first=True)
        assert fake_facade.generate.await_count == 1
        assert recording_sink.named("ai_validation_failed")[0]["feature"] == "stick_analyzer"


class TestFrameRates:
    async def test_sampling_ignores_environment(self, monkeypatch, pipeline, fake_facade, video_file):
        monkeypatch.setenv("SNAPHOCKEY_ANALYSIS_FPS", "30")
        monkeypatch.setenv("SNAPHOCKEY_VALIDATION_FPS", "30")
        update_config(analysis_fps=30, validation_fps=30)

        fake_facade.generate.side_effect = [validation_json(True, 0.9), SHOT_JSON, SKILL_JSON, COACH_JSON]
        await ShotRaterService(pipeline).analyze_shot(video_file, ShotType.WRIST_SHOT, validate_first=True)
        await SkillCheckService(pipeline).analyze_skill(video_file)
        await AICoachService(pipeline).analyze_shot(video_file, video_file, ShotType.WRIST_SHOT)

        frame_rates = [call.args[0].frame_rate for call in fake_facade.generate.await_args_list]
        assert frame_rates == [1, 10, 10, 10]
        assert build_shot_request(video_file, ShotType.SLAP_SHOT).frame_rate == 10
