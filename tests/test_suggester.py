from __future__ import annotations

from pathlib import Path

import pytest

from skillpath.catalog import build_catalog, load_catalog
from skillpath.errors import InvalidInputError
from skillpath.suggester import RoleSuggester

BASE_DIR = Path(__file__).resolve().parents[1]


def _suggester() -> RoleSuggester:
    return RoleSuggester(load_catalog(BASE_DIR / "skillpath" / "data"))


def test_suggestions_sorted_filtered_and_limited():
    skills = ["HTML", "CSS", "JS", "React", "Git", "Node", "Python", "SQL"]
    for limit in (0, 1, 3, 5, 20):
        results = _suggester().suggest(skills, limit=limit)
        assert len(results) <= limit
        scores = [r.score for r in results]
        assert scores == sorted(scores, reverse=True)
        assert all(score > 20 for score in scores)
        assert all(score <= 100 for score in scores)


def test_frontend_profile_ranks_frontend_roles_first():
    results = _suggester().suggest(["HTML", "CSS", "JavaScript", "React", "Git"])
    assert results[0].role in {"frontend_developer", "junior_developer"}
    top = {r.role: r for r in results}
    frontend = top["frontend_developer"]
    # 3/3 core, 1/5 preferred, 1/3 bonus
    assert frontend.score == pytest.approx(50 + 6 + 20 / 3)
    assert frontend.core_matches == 3
    assert frontend.matched_skills[:3] == ["html", "css", "javascript"]
    assert frontend.growth[0] == "Senior Frontend Developer"


def test_rationale_mentions_matched_tiers():
    results = _suggester().suggest(["python", "statistics", "data analysis", "machine learning", "R", "SQL"])
    data = next(r for r in results if r.role == "data_scientist")
    assert "Has core skills: python, statistics, data analysis." in data.rationale
    assert "Also knows preferred technologies: machine learning, r, sql." in data.rationale
    assert "Excellent fit" in data.rationale


def test_empty_tiers_contribute_zero():
    catalog = build_catalog({}, {}, {"solo": {"name": "Solo", "core": ["go"]}})
    results = RoleSuggester(catalog).suggest(["go"])
    assert len(results) == 1
    assert results[0].score == pytest.approx(50.0)


def test_no_skills_means_no_suggestions():
    assert _suggester().suggest([]) == []


def test_invalid_arguments_rejected():
    with pytest.raises(InvalidInputError):
        _suggester().suggest("python")
    with pytest.raises(InvalidInputError):
        _suggester().suggest(["python"], limit=-1)
    with pytest.raises(InvalidInputError):
        _suggester().suggest(["python"], limit=True)
