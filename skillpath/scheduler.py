from __future__ import annotations

import logging
import math
import zlib
from typing import Sequence

from skillpath.catalog import Catalog, format_duration, generic_steps
from skillpath.config import RoadmapPolicy
from skillpath.gap_analyzer import validate_skill_list
from skillpath.models import Milestone, RoadmapPlan, RoleRequirement, SkillRecord, WeekBlock
from skillpath.normalizer import SkillNormalizer
from skillpath.resources import build_search_resources

logger = logging.getLogger(__name__)

EMPTY_OUTCOME = "No missing skills identified. Continue practicing current skills!"
MILESTONE_POINTS = (25, 50, 75, 100)

OUTCOME_TEMPLATES = (
    "Master {skills} through hands-on projects",
    "Build practical applications with {skills}",
    "Implement real-world solutions using {skills}",
    "Develop proficiency in {skills} with exercises",
    "Create portfolio projects showcasing {skills}",
)

BASE_TIPS = (
    "Create a consistent study schedule and stick to it",
    "Practice every day, even if it's just for 30 minutes",
    "Build projects as you learn to reinforce your understanding",
    "Join online communities related to your target role",
    "Don't be afraid to ask questions and seek help",
)


def week_outcome(skills: Sequence[SkillRecord]) -> str:
    names = ", ".join(skill.name for skill in skills)
    template = OUTCOME_TEMPLATES[zlib.crc32(names.encode("utf-8")) % len(OUTCOME_TEMPLATES)]
    return template.format(skills=names)


def build_milestones(weeks: Sequence[WeekBlock]) -> list[Milestone]:
    sequence = [(block.week, skill) for block in weeks for skill in block.skills]
    if not sequence:
        return []
    milestones = []
    for point in MILESTONE_POINTS:
        index = max(0, math.ceil(len(sequence) * point / 100) - 1)
        week, skill = sequence[index]
        milestones.append(
            Milestone(
                percentage=point,
                skill=skill.identity,
                name=skill.name,
                week=week,
                title=f"{point}% Complete: {skill.name}",
            )
        )
    return milestones


def build_tips(scheduled: Sequence[SkillRecord]) -> list[str]:
    tips = list(BASE_TIPS)
    if len(scheduled) > 3:
        tips.append("Focus on one skill at a time to avoid overwhelm")
    if any(skill.prerequisites for skill in scheduled):
        tips.append("Review prerequisites before starting skills that build on them")
    return tips


class RoadmapScheduler:
    """Packs missing skills into capped weekly study blocks.

    Skills without prerequisites come first, then easier before harder; the
    original input order only breaks remaining ties. Blocks are closed
    greedily as soon as the next skill would exceed the skill-count or the
    difficulty cap, and scheduling stops once ``policy.max_weeks`` blocks
    exist. Skills that do not fit are reported in ``RoadmapPlan.truncated``.
    """

    def __init__(
        self,
        catalog: Catalog,
        normalizer: SkillNormalizer | None = None,
        policy: RoadmapPolicy | None = None,
    ):
        self.catalog = catalog
        self.normalizer = normalizer or catalog.normalizer()
        self.policy = policy or RoadmapPolicy()

    def resolve(self, identity: str) -> SkillRecord:
        record = self.catalog.skills.get(identity)
        if record is not None:
            return record
        return SkillRecord(
            identity=identity,
            name=identity,
            difficulty=self.policy.fallback_difficulty,
            duration_days=self.policy.fallback_duration_days,
            prerequisites=(),
            resources=build_search_resources(identity),
            steps=generic_steps(identity),
        )

    def priorities(self, records: Sequence[SkillRecord], role: RoleRequirement | None) -> dict[str, str]:
        """Core skills of the target role are high priority, preferred ones medium, the rest low."""
        if role is None:
            return {record.identity: "medium" for record in records}
        core = set(self.normalizer.normalize_all(role.core))
        preferred = set(self.normalizer.normalize_all(role.preferred))
        out = {}
        for record in records:
            if record.identity in core:
                out[record.identity] = "high"
            elif record.identity in preferred:
                out[record.identity] = "medium"
            else:
                out[record.identity] = "low"
        return out

    def order(self, records: Sequence[SkillRecord]) -> list[SkillRecord]:
        return sorted(records, key=lambda r: (len(r.prerequisites) > 0, r.difficulty))

    def pack(self, ordered: Sequence[SkillRecord]) -> tuple[list[WeekBlock], list[SkillRecord]]:
        policy = self.policy
        weeks: list[WeekBlock] = []
        current: list[SkillRecord] = []
        load = 0
        dropped: list[SkillRecord] = []

        for index, record in enumerate(ordered):
            too_many = len(current) >= policy.max_skills_per_week
            too_hard = load + record.difficulty > policy.max_difficulty_per_week
            if current and (too_many or too_hard):
                weeks.append(WeekBlock(week=len(weeks) + 1, skills=current, outcome=week_outcome(current)))
                current, load = [], 0
                if len(weeks) >= policy.max_weeks:
                    dropped = list(ordered[index:])
                    break
            if record.difficulty > policy.max_difficulty_per_week:
                logger.warning(
                    "Skill %s has difficulty %d above the weekly cap of %d; scheduling it alone",
                    record.identity,
                    record.difficulty,
                    policy.max_difficulty_per_week,
                )
            current.append(record)
            load += record.difficulty

        if current:
            weeks.append(WeekBlock(week=len(weeks) + 1, skills=current, outcome=week_outcome(current)))
        return weeks, dropped

    def schedule(
        self,
        missing_skills: Sequence[str],
        target_role: str | RoleRequirement | None = None,
    ) -> RoadmapPlan:
        skills = validate_skill_list(missing_skills, "Missing skills")
        role = target_role
        if isinstance(target_role, str):
            role = self.catalog.resolve_role(target_role)
        identities = self.normalizer.normalize_all(skills)
        if not identities:
            return RoadmapPlan(
                weeks=[WeekBlock(week=1, skills=[], outcome=EMPTY_OUTCOME)],
                tips=build_tips([]),
                next_step="No learning needed",
            )

        ordered = self.order([self.resolve(identity) for identity in identities])
        weeks, dropped = self.pack(ordered)
        if dropped:
            logger.warning(
                "Roadmap limited to %d weeks; %d skills not scheduled: %s",
                self.policy.max_weeks,
                len(dropped),
                ", ".join(r.identity for r in dropped),
            )

        scheduled = [skill for block in weeks for skill in block.skills]
        ranked = self.priorities(scheduled, role)
        for block in weeks:
            block.priorities = {skill.identity: ranked[skill.identity] for skill in block.skills}
        total_days = sum(skill.duration_days for skill in scheduled)
        average = sum(skill.difficulty for skill in scheduled) / len(scheduled)
        plan = RoadmapPlan(
            weeks=weeks,
            total_duration_days=total_days,
            total_duration=format_duration(total_days),
            average_difficulty=round(average, 1),
            study_hours=total_days * self.policy.study_hours_per_day,
            milestones=build_milestones(weeks),
            tips=build_tips(scheduled),
            next_step=f"Start with Week 1: {', '.join(s.name for s in weeks[0].skills)}",
            truncated=[r.identity for r in dropped],
        )
        logger.debug("Scheduled %d skills into %d weeks", len(scheduled), len(weeks))
        return plan
