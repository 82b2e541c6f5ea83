from __future__ import annotations

import logging
from typing import Sequence

from skillpath.catalog import Catalog
from skillpath.errors import InvalidInputError
from skillpath.models import GapAnalysisResult, PartialMatch, RoleRequirement, RoleSummary
from skillpath.normalizer import SkillNormalizer
from skillpath.similarity import similarity

logger = logging.getLogger(__name__)

DEFAULT_MATCH_THRESHOLD = 0.7
PREFERRED_BONUS_PER_SKILL = 5
PREFERRED_BONUS_CAP = 20


def percent(part: int, whole: int) -> int:
    """Whole-number percentage rounded half up; 0 when ``whole`` is 0."""
    if whole <= 0:
        return 0
    return int(100 * part / whole + 0.5)


def skill_level(match_percentage: float) -> str:
    if match_percentage >= 80:
        return "Expert"
    if match_percentage >= 60:
        return "Advanced"
    if match_percentage >= 40:
        return "Intermediate"
    if match_percentage >= 20:
        return "Beginner"
    return "Novice"


def readiness_score(match_percentage: int, matched_preferred: int) -> int:
    bonus = min(PREFERRED_BONUS_CAP, PREFERRED_BONUS_PER_SKILL * matched_preferred)
    return min(100, match_percentage + bonus)


def validate_skill_list(skills: Sequence[str], label: str = "Skills") -> list[str]:
    if not isinstance(skills, (list, tuple)):
        raise InvalidInputError(f"{label} must be a list of strings")
    if not all(isinstance(skill, str) for skill in skills):
        raise InvalidInputError(f"{label} must contain only strings")
    return list(skills)


class SkillGapAnalyzer:
    """Partitions a role's required skills into matched, partial and missing."""

    def __init__(
        self,
        catalog: Catalog,
        normalizer: SkillNormalizer | None = None,
        match_threshold: float = DEFAULT_MATCH_THRESHOLD,
    ):
        self.catalog = catalog
        self.normalizer = normalizer or catalog.normalizer()
        self.match_threshold = match_threshold

    def _best_partial(self, required: str, candidates: list[str]) -> PartialMatch | None:
        best: PartialMatch | None = None
        for candidate in candidates:
            score = similarity(candidate, required)
            contained = candidate in required or required in candidate
            if not contained and score <= self.match_threshold:
                continue
            # strict comparison keeps the earliest candidate on ties
            if best is None or score > best.similarity:
                best = PartialMatch(required=required, candidate=candidate, similarity=round(score, 4))
        return best

    def analyze(
        self, candidate_skills: Sequence[str], target_role: str | RoleRequirement
    ) -> GapAnalysisResult:
        skills = validate_skill_list(candidate_skills, "Candidate skills")
        role = target_role if isinstance(target_role, RoleRequirement) else self.catalog.resolve_role(target_role)

        candidates = self.normalizer.normalize_all(skills)
        candidate_set = set(candidates)
        core = self.normalizer.normalize_all(role.core)
        preferred = self.normalizer.normalize_all(role.preferred)
        all_required = self.normalizer.normalize_all([*core, *preferred])
        required_set = set(all_required)

        matched: list[str] = []
        partial: list[PartialMatch] = []
        missing: list[str] = []
        for required in all_required:
            if required in candidate_set:
                matched.append(required)
                continue
            hit = self._best_partial(required, candidates)
            if hit is not None:
                partial.append(hit)
            else:
                missing.append(required)

        matched_set = set(matched)
        matched_preferred = [skill for skill in preferred if skill in matched_set]
        additional = [skill for skill in candidates if skill not in required_set]

        total = len(all_required)
        match_pct = percent(len(matched), total)
        result = GapAnalysisResult(
            role=role.identity,
            role_name=role.name,
            matched=matched,
            partial=partial,
            missing=missing,
            additional=additional,
            matched_preferred=matched_preferred,
            match_percentage=match_pct,
            skill_gap_percentage=percent(len(missing), total),
            readiness_score=readiness_score(match_pct, len(matched_preferred)),
            skill_level=skill_level(match_pct),
            total_required=total,
        )
        logger.debug(
            "Gap analysis for %s: %d matched, %d partial, %d missing of %d",
            role.identity,
            len(matched),
            len(partial),
            len(missing),
            total,
        )
        return result

    def available_roles(self) -> list[RoleSummary]:
        return [
            RoleSummary(
                role=role.identity,
                name=role.name,
                core_count=len(role.core),
                preferred_count=len(role.preferred),
                bonus_count=len(role.bonus),
            )
            for role in self.catalog.roles.values()
        ]
