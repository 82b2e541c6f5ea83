from __future__ import annotations

from typing import Sequence

from skillpath.catalog import Catalog, load_catalog
from skillpath.config import Settings
from skillpath.errors import InvalidInputError
from skillpath.gap_analyzer import SkillGapAnalyzer, validate_skill_list
from skillpath.models import GapAnalysisResult, RoadmapPlan, RoleSuggestion, RoleSummary, SkillResources
from skillpath.resources import recommend_resources
from skillpath.scheduler import RoadmapScheduler
from skillpath.suggester import DEFAULT_LIMIT, RoleSuggester


class SkillPathEngine:
    """Entry point for callers: one catalog, one normalizer, every operation."""

    def __init__(self, catalog: Catalog, settings: Settings | None = None):
        self.catalog = catalog
        self.settings = settings or Settings()
        self.normalizer = catalog.normalizer()
        self.gap_analyzer = SkillGapAnalyzer(catalog, self.normalizer, self.settings.match_threshold)
        self.scheduler = RoadmapScheduler(catalog, self.normalizer, self.settings.roadmap)
        self.suggester = RoleSuggester(catalog, self.normalizer, self.settings.min_suggestion_score)

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "SkillPathEngine":
        settings = settings or Settings.from_env()
        return cls(load_catalog(settings.data_dir), settings)

    def normalize(self, raw: str) -> str:
        return self.normalizer.normalize(raw)

    def analyze_gap(self, candidate_skills: Sequence[str], target_role: str) -> GapAnalysisResult:
        return self.gap_analyzer.analyze(candidate_skills, target_role)

    def generate_roadmap(self, missing_skills: Sequence[str], target_role: str | None = None) -> RoadmapPlan:
        return self.scheduler.schedule(missing_skills, target_role)

    def suggest_roles(self, candidate_skills: Sequence[str], limit: int = DEFAULT_LIMIT) -> list[RoleSuggestion]:
        return self.suggester.suggest(candidate_skills, limit)

    def recommend_resources(self, skills: Sequence[str], per_skill: int = 2) -> list[SkillResources]:
        skills = validate_skill_list(skills)
        if isinstance(per_skill, bool) or not isinstance(per_skill, int) or per_skill < 1:
            raise InvalidInputError("per_skill must be a positive integer")
        return recommend_resources(skills, self.catalog, self.normalizer, per_skill)

    def available_roles(self) -> list[RoleSummary]:
        return self.gap_analyzer.available_roles()
