from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from skillpath.errors import InvalidInputError

PACKAGE_DIR = Path(__file__).resolve().parent
DEFAULT_DATA_DIR = PACKAGE_DIR / "data"


def _env_number(name: str, default: float, cast=int):
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return cast(raw)
    except ValueError as exc:
        raise InvalidInputError(f"{name} must be a number, got {raw!r}") from exc


@dataclass(frozen=True)
class RoadmapPolicy:
    max_weeks: int = 8
    max_skills_per_week: int = 3
    max_difficulty_per_week: int = 8
    study_hours_per_day: int = 2
    fallback_difficulty: int = 3
    fallback_duration_days: int = 14

    def __post_init__(self):
        for name in ("max_weeks", "max_skills_per_week", "max_difficulty_per_week"):
            if getattr(self, name) < 1:
                raise InvalidInputError(f"{name} must be at least 1")
        if self.study_hours_per_day < 0:
            raise InvalidInputError("study_hours_per_day must not be negative")

    @classmethod
    def from_env(cls) -> "RoadmapPolicy":
        return cls(
            max_weeks=_env_number("SKILLPATH_MAX_WEEKS", cls.max_weeks),
            max_skills_per_week=_env_number("SKILLPATH_MAX_SKILLS_PER_WEEK", cls.max_skills_per_week),
            max_difficulty_per_week=_env_number(
                "SKILLPATH_MAX_DIFFICULTY_PER_WEEK", cls.max_difficulty_per_week
            ),
            study_hours_per_day=_env_number("SKILLPATH_STUDY_HOURS_PER_DAY", cls.study_hours_per_day),
        )


@dataclass(frozen=True)
class Settings:
    data_dir: Path = DEFAULT_DATA_DIR
    match_threshold: float = 0.7
    min_suggestion_score: float = 20.0
    roadmap: RoadmapPolicy = field(default_factory=RoadmapPolicy)

    def __post_init__(self):
        if not 0.0 <= self.match_threshold <= 1.0:
            raise InvalidInputError("match_threshold must be between 0 and 1")

    @classmethod
    def from_env(cls) -> "Settings":
        data_dir = os.getenv("SKILLPATH_DATA_DIR")
        return cls(
            data_dir=Path(data_dir) if data_dir else DEFAULT_DATA_DIR,
            match_threshold=_env_number("SKILLPATH_MATCH_THRESHOLD", cls.match_threshold, float),
            min_suggestion_score=_env_number(
                "SKILLPATH_MIN_SUGGESTION_SCORE", cls.min_suggestion_score, float
            ),
            roadmap=RoadmapPolicy.from_env(),
        )
