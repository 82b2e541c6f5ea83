from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping

from skillpath.errors import CatalogLoadError, InvalidInputError, UnknownRoleError
from skillpath.models import LearningResource, RoleRequirement, SkillRecord
from skillpath.normalizer import SkillNormalizer

logger = logging.getLogger(__name__)

ALIASES_FILE = "aliases.json"
SKILLS_FILE = "skills.json"
ROLES_FILE = "roles.json"

_ROLE_KEY_RE = re.compile(r"[^a-z0-9]+")
_FIRST_INT_RE = re.compile(r"\d+")
_UNIT_DAYS = (("month", 30), ("week", 7), ("day", 1))


def role_key(name: str) -> str:
    return _ROLE_KEY_RE.sub("_", name.lower()).strip("_")


def parse_duration(text: str) -> int:
    """Converts "1-2 weeks" / "2 months" / "10 days" to days using the first number."""
    lowered = text.lower()
    match = _FIRST_INT_RE.search(lowered)
    for unit, days in _UNIT_DAYS:
        if unit in lowered:
            count = int(match.group()) if match else 1
            return count * days
    return 30


def generic_steps(name: str) -> tuple[str, ...]:
    return (
        f"Research {name} fundamentals",
        "Find online courses or tutorials",
        "Practice with hands-on projects",
        "Build portfolio projects",
    )


def format_duration(days: int) -> str:
    months, remaining = divmod(max(0, int(days)), 30)
    parts = []
    if months:
        parts.append(f"{months} month{'s' if months != 1 else ''}")
    if remaining or not months:
        parts.append(f"{remaining} day{'s' if remaining != 1 else ''}")
    return " ".join(parts)


@dataclass(frozen=True)
class Catalog:
    """Immutable alias, skill and role tables shared by every component."""

    aliases: Mapping[str, tuple[str, ...]] = field(default_factory=dict)
    skills: Mapping[str, SkillRecord] = field(default_factory=dict)
    roles: Mapping[str, RoleRequirement] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "aliases", MappingProxyType(dict(self.aliases)))
        object.__setattr__(self, "skills", MappingProxyType(dict(self.skills)))
        object.__setattr__(self, "roles", MappingProxyType(dict(self.roles)))

    def normalizer(self) -> SkillNormalizer:
        return SkillNormalizer(self.aliases)

    def role_names(self) -> list[str]:
        return [role.name for role in self.roles.values()]

    def resolve_role(self, target_role: str) -> RoleRequirement:
        if not isinstance(target_role, str) or not target_role.strip():
            raise InvalidInputError("Target role is required")
        key = role_key(target_role)
        if not key:
            raise UnknownRoleError(target_role, self.role_names())
        if key in self.roles:
            return self.roles[key]
        for role in self.roles.values():
            if role_key(role.name) == key:
                return role
        for identity, role in self.roles.items():
            if key in identity or identity in key:
                return role
        raise UnknownRoleError(target_role, self.role_names())


def _read_json(path: Path) -> Any:
    try:
        with path.open("r", encoding="utf-8") as f:
            return json.load(f)
    except FileNotFoundError as exc:
        raise CatalogLoadError(f"Catalog file not found: {path}") from exc
    except (OSError, json.JSONDecodeError) as exc:
        raise CatalogLoadError(f"Catalog file {path} could not be parsed: {exc}") from exc


def _require_mapping(raw: Any, source: str) -> dict:
    if not isinstance(raw, dict):
        raise CatalogLoadError(f"{source} must contain a JSON object")
    return raw


def _string_list(value: Any, source: str) -> list[str]:
    if value is None:
        return []
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise CatalogLoadError(f"{source} must be a list of strings")
    return value


def _build_resources(items: Any, source: str) -> tuple[LearningResource, ...]:
    if items is None:
        return ()
    if not isinstance(items, list):
        raise CatalogLoadError(f"{source} must be a list")
    resources = []
    for item in items:
        if not isinstance(item, dict) or "title" not in item or "url" not in item:
            raise CatalogLoadError(f"{source} entries need a title and url")
        resources.append(
            LearningResource(
                title=item["title"],
                url=item["url"],
                kind=item.get("type", "documentation"),
                level=item.get("level", "beginner"),
            )
        )
    return tuple(resources)


def build_catalog(
    aliases_raw: Mapping[str, Any],
    skills_raw: Mapping[str, Any],
    roles_raw: Mapping[str, Any],
) -> Catalog:
    """Validates decoded catalog tables and builds a Catalog from them."""
    aliases = {
        canonical: tuple(_string_list(spellings, f"aliases[{canonical!r}]"))
        for canonical, spellings in _require_mapping(aliases_raw, ALIASES_FILE).items()
    }
    normalizer = SkillNormalizer(aliases)

    skills: dict[str, SkillRecord] = {}
    for key, item in _require_mapping(skills_raw, SKILLS_FILE).items():
        source = f"skills[{key!r}]"
        if not isinstance(item, dict):
            raise CatalogLoadError(f"{source} must be an object")
        identity = normalizer.normalize(key)
        try:
            difficulty = int(item["difficulty"])
            if "duration_days" in item:
                duration_days = int(item["duration_days"])
            else:
                duration_days = parse_duration(str(item["duration"]))
        except (KeyError, TypeError, ValueError) as exc:
            raise CatalogLoadError(f"{source} needs a difficulty and a duration: {exc}") from exc
        if difficulty < 1 or duration_days < 0:
            raise CatalogLoadError(f"{source} has an out-of-range difficulty or duration")
        name = item.get("name", key)
        steps = _string_list(item.get("steps"), f"{source}.steps")
        skills[identity] = SkillRecord(
            identity=identity,
            name=name,
            difficulty=difficulty,
            duration_days=duration_days,
            prerequisites=tuple(
                normalizer.normalize_all(_string_list(item.get("prerequisites"), source))
            ),
            resources=_build_resources(item.get("resources"), f"{source}.resources"),
            steps=tuple(steps) if steps else generic_steps(name),
        )

    roles: dict[str, RoleRequirement] = {}
    for key, item in _require_mapping(roles_raw, ROLES_FILE).items():
        source = f"roles[{key!r}]"
        if not isinstance(item, dict):
            raise CatalogLoadError(f"{source} must be an object")
        identity = role_key(key)
        roles[identity] = RoleRequirement(
            identity=identity,
            name=item.get("name", key),
            core=tuple(normalizer.normalize_all(_string_list(item.get("core"), source))),
            preferred=tuple(normalizer.normalize_all(_string_list(item.get("preferred"), source))),
            bonus=tuple(normalizer.normalize_all(_string_list(item.get("bonus"), source))),
            growth=tuple(_string_list(item.get("growth"), source)),
        )

    return Catalog(aliases=aliases, skills=skills, roles=roles)


def load_catalog(data_dir: Path | str) -> Catalog:
    data_dir = Path(data_dir)
    catalog = build_catalog(
        _read_json(data_dir / ALIASES_FILE),
        _read_json(data_dir / SKILLS_FILE),
        _read_json(data_dir / ROLES_FILE),
    )
    logger.info(
        "Loaded catalog from %s: %d aliases, %d skills, %d roles",
        data_dir,
        len(catalog.aliases),
        len(catalog.skills),
        len(catalog.roles),
    )
    return catalog
