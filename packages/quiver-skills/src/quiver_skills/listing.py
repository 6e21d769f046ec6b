"""Best-effort listing of installed skills for display.

Unlike :class:`~quiver_skills.loader.SkillLoader` this path does no
validation: it only wants a name and a description, falls back to the
directory name, and silently skips anything it cannot read.
"""
from __future__ import annotations

import os
from typing import TYPE_CHECKING

from quiver_skills.parser import read_frontmatter_summary
from quiver_skills.scanner import SKILL_FILENAME
from quiver_skills.types import SkillSummary

if TYPE_CHECKING:
    from collections.abc import Iterable

    from quiver_skills.types import SkillSource

NO_DESCRIPTION = "No description"


def scan_skill_summaries(source: SkillSource) -> list[SkillSummary]:
    summaries: list[SkillSummary] = []
    try:
        with os.scandir(source.path) as it:
            entries = sorted(it, key=lambda e: e.name)
    except OSError:
        return summaries

    for entry in entries:
        try:
            if not entry.is_dir():
                continue
            content = (source.path / entry.name / SKILL_FILENAME).read_text(
                encoding="utf-8"
            )
        except (OSError, UnicodeDecodeError):
            continue

        fields = read_frontmatter_summary(content)
        if fields is None:
            continue

        summaries.append(SkillSummary(
            name=fields.get("name") or entry.name,
            description=fields.get("description") or NO_DESCRIPTION,
            kind=source.kind,
            extension_name=source.extension_name,
        ))
    return summaries


def list_installed_skills(sources: Iterable[SkillSource]) -> list[SkillSummary]:
    """Summaries for every skill under *sources*, in source order."""
    summaries: list[SkillSummary] = []
    for source in sources:
        summaries.extend(scan_skill_summaries(source))
    return summaries
