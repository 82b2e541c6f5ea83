from __future__ import annotations

import logging
import re
from types import MappingProxyType
from typing import Iterable, Mapping

logger = logging.getLogger(__name__)

_SPACE_RE = re.compile(r"\s+")


def clean_skill(raw: str | None) -> str:
    """Lower-cases, trims and collapses inner whitespace."""
    if raw is None:
        return ""
    return _SPACE_RE.sub(" ", str(raw).lower()).strip()


class SkillNormalizer:
    """Maps raw skill spellings onto canonical skill identities.

    ``aliases`` maps a canonical identity to the spellings that mean it, e.g.
    ``{"javascript": ["js", "ecmascript"]}``. Lookup is exact after cleaning;
    unknown spellings come back cleaned but otherwise unchanged. A spelling
    that is itself a canonical identity always keeps that identity, so the
    mapping never chains and normalizing twice is a no-op.
    """

    def __init__(self, aliases: Mapping[str, Iterable[str]] | None = None):
        aliases = aliases or {}
        canonicals = {clean_skill(c) for c in aliases} - {""}
        table: dict[str, str] = {c: c for c in canonicals}
        for canonical, spellings in aliases.items():
            target = clean_skill(canonical)
            if not target:
                continue
            for spelling in spellings:
                key = clean_skill(spelling)
                if not key or key in canonicals:
                    continue
                if key in table and table[key] != target:
                    logger.warning("Alias %r remapped from %r to %r", key, table[key], target)
                table[key] = target
        self._table = MappingProxyType(table)

    @property
    def aliases(self) -> Mapping[str, str]:
        return self._table

    def normalize(self, raw: str | None) -> str:
        cleaned = clean_skill(raw)
        return self._table.get(cleaned, cleaned)

    def normalize_all(self, skills: Iterable[str]) -> list[str]:
        """Normalizes a list, dropping empties and duplicates (first seen wins)."""
        out: list[str] = []
        seen: set[str] = set()
        for skill in skills:
            identity = self.normalize(skill)
            if identity and identity not in seen:
                seen.add(identity)
                out.append(identity)
        return out
