from __future__ import annotations


class SkillPathError(Exception):
    """Base class for every error raised by the skillpath engine."""


class InvalidInputError(SkillPathError, ValueError):
    """Malformed or missing arguments, e.g. a skill list that is not a list."""


class UnknownRoleError(SkillPathError, LookupError):
    """The target role could not be resolved against the role catalog."""

    def __init__(self, role: str, known_roles: list[str]):
        self.role = role
        self.known_roles = list(known_roles)
        super().__init__(
            f"Role {role!r} not found. Known roles: {', '.join(self.known_roles) or 'none'}"
        )


class CatalogLoadError(SkillPathError):
    """Static catalog tables could not be read or are structurally invalid."""
