"""Skill root resolution: the ranked list of directories to scan."""
from __future__ import annotations

from typing import TYPE_CHECKING

from quiver_skills.types import SkillSource, SourceKind

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path

    from quiver_core.types import ExtensionInfo

EXTENSION_SKILLS_DIRNAME = "skills"


def resolve_skill_sources(
    user_skills_dir: Path,
    project_skills_dir: Path,
    extensions: Iterable[ExtensionInfo] = (),
) -> list[SkillSource]:
    """Return skill roots in load order.

    1. the user-wide (global) skills directory;
    2. the project skills directory, whether or not it exists;
    3. ``<install path>/skills`` of every active extension, sorted by
       extension name so discovery and conflict handling are reproducible.
    """
    sources = [
        SkillSource(path=user_skills_dir, kind=SourceKind.GLOBAL),
        SkillSource(path=project_skills_dir, kind=SourceKind.PROJECT),
    ]

    active = sorted(
        (ext for ext in extensions if ext.is_active),
        key=lambda ext: ext.name,
    )
    sources.extend(
        SkillSource(
            path=ext.path / EXTENSION_SKILLS_DIRNAME,
            kind=SourceKind.EXTENSION,
            extension_name=ext.name,
            extension_id=ext.id,
        )
        for ext in active
    )
    return sources
