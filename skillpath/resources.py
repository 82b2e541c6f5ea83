from __future__ import annotations

from typing import Iterable
from urllib.parse import quote_plus

from skillpath.catalog import Catalog
from skillpath.models import LearningResource, SkillResources
from skillpath.normalizer import SkillNormalizer

RECOMMENDED_LEVELS = {"beginner", "intermediate"}


def build_search_resources(skill: str) -> tuple[LearningResource, ...]:
    query = quote_plus(f"{skill} tutorial for beginners")
    return (
        LearningResource(
            title=f"{skill} - Search Tutorials",
            url=f"https://www.google.com/search?q={query}",
            kind="search",
            level="beginner",
        ),
        LearningResource(
            title=f"{skill} - YouTube Tutorial",
            url=f"https://www.youtube.com/results?search_query={query}",
            kind="video",
            level="beginner",
        ),
    )


def recommend_resources(
    skills: Iterable[str],
    catalog: Catalog,
    normalizer: SkillNormalizer,
    per_skill: int = 2,
) -> list[SkillResources]:
    results: list[SkillResources] = []
    for identity in normalizer.normalize_all(skills):
        record = catalog.skills.get(identity)
        links: list[LearningResource] = []
        if record is not None:
            links = [r for r in record.resources if r.level in RECOMMENDED_LEVELS][:per_skill]
        if not links:
            links = list(build_search_resources(identity))
        results.append(SkillResources(skill=identity, links=links))
    return results
