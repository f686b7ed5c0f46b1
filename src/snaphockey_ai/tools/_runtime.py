"""Process-wide wiring shared by the tool sub-servers."""

from __future__ import annotations

from dataclasses import dataclass, field

from ..background import BackgroundAnalysisManager
from ..pipeline import AnalysisPipeline
from ..services.ai_coach import AICoachService
from ..services.shot_rater import ShotRaterService
from ..services.skill_check import SkillCheckService
from ..services.stick_analyzer import StickAnalyzerService
from ..store import KeyValueStore, Preferences, ShotRaterResultStore


@dataclass
class Runtime:
    pipeline: AnalysisPipeline = field(default_factory=AnalysisPipeline)
    background: BackgroundAnalysisManager = field(default_factory=BackgroundAnalysisManager)
    kv: KeyValueStore = field(default_factory=KeyValueStore)

    def __post_init__(self) -> None:
        self.shot_rater = ShotRaterService(self.pipeline)
        self.skill_check = SkillCheckService(self.pipeline)
        self.ai_coach = AICoachService(self.pipeline)
        self.stick_analyzer = StickAnalyzerService(self.pipeline)
        self.results = ShotRaterResultStore(self.kv)
        self.preferences = Preferences(self.kv)


_runtime: Runtime | None = None


def get_runtime() -> Runtime:
    global _runtime
    if _runtime is None:
        _runtime = Runtime()
    return _runtime


def set_runtime(runtime: Runtime | None) -> None:
    """Install *runtime* (or clear it so the next access rebuilds)."""
    global _runtime
    _runtime = runtime


def current_runtime() -> Runtime | None:
    """The installed runtime, without building one."""
    return _runtime
