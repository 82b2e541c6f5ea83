from __future__ import annotations

import logging
from typing import Sequence

import numpy as np

from skillpath.catalog import Catalog
from skillpath.errors import InvalidInputError
from skillpath.gap_analyzer import validate_skill_list
from skillpath.models import RoleRequirement, RoleSuggestion
from skillpath.normalizer import SkillNormalizer

logger = logging.getLogger(__name__)

TIER_WEIGHTS = np.array([50.0, 30.0, 20.0])
DEFAULT_MIN_SCORE = 20.0
DEFAULT_LIMIT = 5


def _tier_ratio(matches: int, size: int) -> float:
    if size == 0:
        return 0.0
    return matches / size


def _rationale(score: float, core: list[str], preferred: list[str]) -> str:
    parts = [f"Strong match with {score:.1f}% compatibility."]
    if core:
        parts.append(f"Has core skills: {', '.join(core)}.")
    if preferred:
        parts.append(f"Also knows preferred technologies: {', '.join(preferred)}.")
    if score >= 70:
        parts.append("Excellent fit for this role with strong foundational knowledge.")
    elif score >= 50:
        parts.append("Good fit with room to grow in preferred technologies.")
    else:
        parts.append("Potential fit with focus on core skill development.")
    return " ".join(parts)


class RoleSuggester:
    """Ranks catalog roles by weighted core/preferred/bonus skill coverage."""

    def __init__(
        self,
        catalog: Catalog,
        normalizer: SkillNormalizer | None = None,
        min_score: float = DEFAULT_MIN_SCORE,
    ):
        self.catalog = catalog
        self.normalizer = normalizer or catalog.normalizer()
        self.min_score = min_score

    def score_role(self, skill_set: set[str], role: RoleRequirement) -> RoleSuggestion:
        required = [self.normalizer.normalize_all(tier) for tier in (role.core, role.preferred, role.bonus)]
        tiers = [[skill for skill in tier if skill in skill_set] for tier in required]
        ratios = np.array([_tier_ratio(len(hit), len(tier)) for hit, tier in zip(tiers, required)])
        score = float(np.dot(TIER_WEIGHTS, ratios))
        return RoleSuggestion(
            role=role.identity,
            title=role.name,
            score=score,
            core_matches=len(tiers[0]),
            preferred_matches=len(tiers[1]),
            bonus_matches=len(tiers[2]),
            matched_skills=[skill for tier in tiers for skill in tier],
            rationale=_rationale(score, tiers[0], tiers[1]),
            growth=list(role.growth),
        )

    def suggest(self, candidate_skills: Sequence[str], limit: int = DEFAULT_LIMIT) -> list[RoleSuggestion]:
        skills = validate_skill_list(candidate_skills, "Candidate skills")
        if isinstance(limit, bool) or not isinstance(limit, int) or limit < 0:
            raise InvalidInputError("limit must be a non-negative integer")

        skill_set = set(self.normalizer.normalize_all(skills))
        scored = [self.score_role(skill_set, role) for role in self.catalog.roles.values()]
        kept = [s for s in scored if s.score > self.min_score]
        kept.sort(key=lambda s: s.score, reverse=True)
        logger.debug("%d of %d roles scored above %.1f", len(kept), len(scored), self.min_score)
        return kept[:limit]
