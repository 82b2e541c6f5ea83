from __future__ import annotations

from dataclasses import asdict, dataclass, field


@dataclass(frozen=True)
class LearningResource:
    title: str
    url: str
    kind: str
    level: str


@dataclass(frozen=True)
class SkillRecord:
    identity: str
    name: str
    difficulty: int
    duration_days: int
    prerequisites: tuple[str, ...] = ()
    resources: tuple[LearningResource, ...] = ()
    steps: tuple[str, ...] = ()


@dataclass(frozen=True)
class RoleRequirement:
    identity: str
    name: str
    core: tuple[str, ...]
    preferred: tuple[str, ...] = ()
    bonus: tuple[str, ...] = ()
    growth: tuple[str, ...] = ()


@dataclass
class PartialMatch:
    required: str
    candidate: str
    similarity: float


@dataclass
class GapAnalysisResult:
    role: str
    role_name: str
    matched: list[str]
    partial: list[PartialMatch]
    missing: list[str]
    additional: list[str]
    matched_preferred: list[str]
    match_percentage: int
    skill_gap_percentage: int
    readiness_score: int
    skill_level: str
    total_required: int

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class WeekBlock:
    week: int
    skills: list[SkillRecord]
    outcome: str
    # skill identity -> "high" / "medium" / "low"
    priorities: dict[str, str] = field(default_factory=dict)

    @property
    def total_difficulty(self) -> int:
        return sum(skill.difficulty for skill in self.skills)

    def priority(self, identity: str) -> str:
        return self.priorities.get(identity, "medium")

    def to_dict(self) -> dict:
        return {
            "week": self.week,
            "focus": [skill.identity for skill in self.skills],
            "skills": [{**asdict(skill), "priority": self.priority(skill.identity)} for skill in self.skills],
            "total_difficulty": self.total_difficulty,
            "outcome": self.outcome,
        }


@dataclass
class Milestone:
    percentage: int
    skill: str
    name: str
    week: int
    title: str


@dataclass
class RoadmapPlan:
    weeks: list[WeekBlock]
    total_duration_days: int = 0
    total_duration: str = "0 days"
    average_difficulty: float = 0.0
    study_hours: int = 0
    milestones: list[Milestone] = field(default_factory=list)
    tips: list[str] = field(default_factory=list)
    next_step: str = ""
    truncated: list[str] = field(default_factory=list)

    @property
    def scheduled(self) -> list[SkillRecord]:
        return [skill for block in self.weeks for skill in block.skills]

    def to_dict(self) -> dict:
        return {
            "roadmap": [block.to_dict() for block in self.weeks],
            "total_weeks": len(self.weeks),
            "total_skills": len(self.scheduled),
            "total_duration_days": self.total_duration_days,
            "total_estimated_duration": self.total_duration,
            "summary": {
                "average_difficulty": self.average_difficulty,
                "recommended_study_hours": self.study_hours,
                "milestones": [asdict(m) for m in self.milestones],
                "tips": list(self.tips),
            },
            "next_step": self.next_step,
            "truncated": list(self.truncated),
        }


@dataclass
class RoleSuggestion:
    role: str
    title: str
    score: float
    core_matches: int
    preferred_matches: int
    bonus_matches: int
    matched_skills: list[str]
    rationale: str
    growth: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class RoleSummary:
    role: str
    name: str
    core_count: int
    preferred_count: int
    bonus_count: int


@dataclass
class SkillResources:
    skill: str
    links: list[LearningResource]

    def to_dict(self) -> dict:
        return asdict(self)
