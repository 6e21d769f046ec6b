from __future__ import annotations


class QuiverError(Exception):
    """Base exception for all Quiver errors."""


# ── Config Errors ────────────────────────────────────────────────────

class ConfigError(QuiverError):
    """Invalid or missing configuration."""


# ── Extension Errors ─────────────────────────────────────────────────

class ExtensionError(QuiverError):
    """Extension manifest could not be read or is malformed."""


# ── Skill Errors ─────────────────────────────────────────────────────

class SkillError(QuiverError):
    """Base for skill-related errors."""


class SkillNotFoundError(SkillError):
    """Skill not found in any skill directory."""


class SkillParseError(SkillError):
    """SKILL.md has no usable frontmatter block."""


class SkillValidationError(SkillError):
    """Skill frontmatter violates the declaration schema.

    ``errors`` holds every field-level violation, not just the first.
    """

    def __init__(self, message: str, errors: list[str] | None = None) -> None:
        super().__init__(message)
        self.errors: list[str] = list(errors or [])
