"""Quiver Skills: discovery, parsing, validation, and command synthesis for Agent Skills."""
from __future__ import annotations

from quiver_skills.listing import list_installed_skills
from quiver_skills.loader import SkillLoader
from quiver_skills.parser import parse_frontmatter, read_frontmatter_summary
from quiver_skills.registry import SkillCommandRegistry
from quiver_skills.scanner import SKILL_FILENAME, scan_source
from quiver_skills.sources import resolve_skill_sources
from quiver_skills.synthesizer import COMMAND_PREFIX, SkillSynthesizer, build_prompt
from quiver_skills.types import (
    FailureReason,
    FieldError,
    LoadFailure,
    PromptSubmission,
    SkillAction,
    SkillDeclaration,
    SkillFile,
    SkillManifest,
    SkillSource,
    SkillSummary,
    SourceKind,
)
from quiver_skills.validator import SkillValidator

__all__ = [
    "COMMAND_PREFIX",
    "SKILL_FILENAME",
    "FailureReason",
    "FieldError",
    "LoadFailure",
    "PromptSubmission",
    "SkillAction",
    "SkillCommandRegistry",
    "SkillDeclaration",
    "SkillFile",
    "SkillLoader",
    "SkillManifest",
    "SkillSource",
    "SkillSummary",
    "SkillSynthesizer",
    "SkillValidator",
    "SourceKind",
    "build_prompt",
    "list_installed_skills",
    "parse_frontmatter",
    "read_frontmatter_summary",
    "resolve_skill_sources",
    "scan_source",
]
