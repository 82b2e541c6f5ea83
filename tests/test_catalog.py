from __future__ import annotations

import json
from pathlib import Path

import pytest

from skillpath.catalog import build_catalog, format_duration, load_catalog, parse_duration
from skillpath.errors import CatalogLoadError, InvalidInputError, UnknownRoleError

BASE_DIR = Path(__file__).resolve().parents[1]


def test_reference_catalog_loads():
    catalog = load_catalog(BASE_DIR / "skillpath" / "data")
    assert "javascript" in catalog.skills
    assert "frontend_developer" in catalog.roles
    node = catalog.skills["node.js"]
    assert node.difficulty == 4
    assert node.prerequisites == ("javascript",)


def test_role_skills_are_normalized_on_load():
    catalog = load_catalog(BASE_DIR / "skillpath" / "data")
    devops = catalog.roles["devops_engineer"]
    assert "cloud platforms" in devops.preferred
    assert "ci/cd" in devops.preferred


def test_catalog_tables_are_read_only():
    catalog = load_catalog(BASE_DIR / "skillpath" / "data")
    with pytest.raises(TypeError):
        catalog.skills["new"] = catalog.skills["git"]


def test_missing_catalog_file_is_fatal(tmp_path):
    (tmp_path / "aliases.json").write_text("{}", encoding="utf-8")
    with pytest.raises(CatalogLoadError):
        load_catalog(tmp_path)


def test_malformed_catalog_json_is_fatal(tmp_path):
    (tmp_path / "aliases.json").write_text("{}", encoding="utf-8")
    (tmp_path / "skills.json").write_text("{not json", encoding="utf-8")
    (tmp_path / "roles.json").write_text("{}", encoding="utf-8")
    with pytest.raises(CatalogLoadError):
        load_catalog(tmp_path)


def test_skill_without_difficulty_is_rejected():
    with pytest.raises(CatalogLoadError):
        build_catalog({}, {"go": {"duration_days": 7}}, {})


def test_duration_strings_are_parsed():
    catalog = build_catalog({}, {"go": {"difficulty": 3, "duration": "2-3 weeks"}}, {})
    assert catalog.skills["go"].duration_days == 14
    assert parse_duration("2 months") == 60
    assert parse_duration("10 days") == 10
    assert parse_duration("a while") == 30


def test_format_duration():
    assert format_duration(0) == "0 days"
    assert format_duration(30) == "1 month"
    assert format_duration(74) == "2 months 14 days"
    assert format_duration(1) == "1 day"


def test_resolve_role_exact_name_and_substring():
    catalog = load_catalog(BASE_DIR / "skillpath" / "data")
    assert catalog.resolve_role("Frontend Developer").identity == "frontend_developer"
    assert catalog.resolve_role("ui/ux designer").identity == "ui_ux_designer"
    assert catalog.resolve_role("devops").identity == "devops_engineer"
    assert catalog.resolve_role("Senior Data Scientist").identity == "data_scientist"


def test_unknown_role_lists_known_roles():
    catalog = load_catalog(BASE_DIR / "skillpath" / "data")
    with pytest.raises(UnknownRoleError) as excinfo:
        catalog.resolve_role("Astronaut")
    assert "Frontend Developer" in excinfo.value.known_roles


def test_blank_role_is_invalid_input():
    catalog = load_catalog(BASE_DIR / "skillpath" / "data")
    with pytest.raises(InvalidInputError):
        catalog.resolve_role("   ")


def test_aliases_in_reference_data_are_well_formed():
    with (BASE_DIR / "skillpath" / "data" / "aliases.json").open("r", encoding="utf-8") as f:
        raw = json.load(f)
    spellings = [s.lower() for values in raw.values() for s in values]
    assert len(spellings) == len(set(spellings))


def test_skill_steps_loaded_or_generated():
    catalog = load_catalog(BASE_DIR / "skillpath" / "data")
    assert catalog.skills["react"].steps[0] == "Learn JSX"
    assert catalog.skills["git"].steps == (
        "Research Git fundamentals",
        "Find online courses or tutorials",
        "Practice with hands-on projects",
        "Build portfolio projects",
    )


def test_malformed_steps_rejected():
    with pytest.raises(CatalogLoadError):
        build_catalog({}, {"go": {"difficulty": 2, "duration_days": 7, "steps": "learn go"}}, {})
