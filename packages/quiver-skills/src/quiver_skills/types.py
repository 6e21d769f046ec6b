"""Skill types for the quiver-skills package."""
from __future__ import annotations

import enum
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path


class SourceKind(enum.StrEnum):
    """Where a skill root comes from."""

    GLOBAL = "global"
    PROJECT = "project"
    EXTENSION = "extension"


@dataclass(frozen=True, slots=True)
class SkillSource:
    """One ranked directory scanned for skill packages."""

    path: Path
    kind: SourceKind
    extension_name: str | None = None
    extension_id: str | None = None


@dataclass(frozen=True, slots=True)
class SkillFile:
    """A ``SKILL.md`` found one level below a source root."""

    path: Path
    source: SkillSource

    @property
    def directory_name(self) -> str:
        return self.path.parent.name


@dataclass(frozen=True, slots=True)
class ParsedFrontmatter:
    """Flat ``key: value`` header fields plus the free-text body."""

    fields: dict[str, str] = field(default_factory=dict)
    body: str = ""


@dataclass(frozen=True, slots=True)
class FieldError:
    """A single schema violation on one frontmatter field."""

    field: str
    message: str

    def __str__(self) -> str:
        return f"{self.field}: {self.message}"


@dataclass(frozen=True, slots=True)
class SkillDeclaration:
    """Validated frontmatter of a SKILL.md file."""

    name: str
    description: str
    license: str | None = None
    compatibility: str | None = None
    metadata: dict[str, str] = field(default_factory=dict)
    allowed_tools: str | None = None


@dataclass(frozen=True, slots=True)
class PromptSubmission:
    """Outbound payload asking the host to submit ``text`` as a prompt."""

    text: str
    type: str = "submit_prompt"


@dataclass(frozen=True, slots=True)
class SkillAction:
    """An invokable command synthesized from a validated skill package.

    ``name`` is the host-visible identifier (``skill:<skill_name>``).
    The prompt builder is bound at synthesis time, so invoking the action
    never touches the filesystem.
    """

    name: str
    description: str
    skill_name: str
    source: SkillSource
    instructions: str
    build_prompt: Callable[[str], PromptSubmission] = field(repr=False, compare=False)
    kind: str = "skill"

    @property
    def extension_name(self) -> str | None:
        return self.source.extension_name

    @property
    def extension_id(self) -> str | None:
        return self.source.extension_id

    def invoke(self, args: str = "") -> PromptSubmission:
        """Build the prompt payload for an invocation with *args*."""
        return self.build_prompt(args)


class FailureReason(enum.StrEnum):
    READ_ERROR = "read_error"
    NO_FRONTMATTER = "no_frontmatter"
    INVALID = "invalid"
    ERROR = "error"


@dataclass(frozen=True, slots=True)
class LoadFailure:
    """A skill package that was skipped during loading."""

    path: Path
    reason: FailureReason
    errors: list[str] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class SkillManifest:
    """A snapshot of one load cycle: actions, roots scanned and failures."""

    actions: list[SkillAction] = field(default_factory=list)
    sources: list[SkillSource] = field(default_factory=list)
    failures: list[LoadFailure] = field(default_factory=list)
    cancelled: bool = False
    loaded_at: float = field(default_factory=time.time)


@dataclass(frozen=True, slots=True)
class SkillSummary:
    """Best-effort listing entry (name and description only)."""

    name: str
    description: str
    kind: SourceKind
    extension_name: str | None = None
