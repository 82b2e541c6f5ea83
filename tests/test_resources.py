from __future__ import annotations

from pathlib import Path

from skillpath.catalog import load_catalog
from skillpath.resources import build_search_resources, recommend_resources

BASE_DIR = Path(__file__).resolve().parents[1]


def _recommend(skills, per_skill=2):
    catalog = load_catalog(BASE_DIR / "skillpath" / "data")
    return recommend_resources(skills, catalog, catalog.normalizer(), per_skill)


def test_catalog_resources_are_used_for_known_skills():
    results = _recommend(["ReactJS"])
    assert results[0].skill == "react"
    assert [link.title for link in results[0].links] == [
        "React Documentation - Tutorial",
        "The Net Ninja - React Course",
    ]


def test_advanced_resources_are_skipped():
    results = _recommend(["Deep Learning"])
    assert [link.level for link in results[0].links] == ["intermediate"]


def test_per_skill_cap():
    results = _recommend(["HTML"], per_skill=1)
    assert len(results[0].links) == 1


def test_unknown_skill_falls_back_to_search_links():
    results = _recommend(["Rust Macros"])
    links = results[0].links
    assert {link.kind for link in links} == {"search", "video"}
    assert all("rust+macros+tutorial+for+beginners" in link.url for link in links)


def test_search_resources_quote_special_characters():
    google, youtube = build_search_resources("c++")
    assert "c%2B%2B" in google.url
    assert youtube.url.startswith("https://www.youtube.com/results?search_query=")


def test_duplicate_spellings_yield_one_entry():
    results = _recommend(["JS", "javascript", ""])
    assert [r.skill for r in results] == ["javascript"]
    assert results[0].to_dict()["links"][0]["title"] == "JavaScript.info - Modern Tutorial"
