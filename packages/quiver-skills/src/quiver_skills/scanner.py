"""Package scanning: finds ``<root>/<dir>/SKILL.md`` under a skill root."""
from __future__ import annotations

import logging
import os
from typing import TYPE_CHECKING, Protocol

from quiver_skills.types import SkillFile

if TYPE_CHECKING:
    from quiver_skills.types import SkillSource

logger = logging.getLogger("quiver.skills.scanner")

SKILL_FILENAME = "SKILL.md"


class CancelSignal(Protocol):
    """Anything that can report cancellation, e.g. ``threading.Event``."""

    def is_set(self) -> bool: ...


class ScanCancelled(Exception):
    """Raised inside a scan when the cancel signal fires mid-enumeration."""


def scan_source(
    source: SkillSource,
    cancel: CancelSignal | None = None,
) -> list[SkillFile]:
    """List the skill files exactly one level below *source*.

    Symlinked directories are followed and hidden directories included.
    Entries are sorted by name so a fixed tree always scans the same way.

    A missing root yields an empty list.  Any other ``OSError`` is logged
    and also yields an empty list; it never propagates.

    Raises:
        ScanCancelled: If *cancel* fires while entries are being enumerated.
    """
    root = source.path
    try:
        with os.scandir(root) as it:
            entries = sorted(it, key=lambda e: e.name)
    except FileNotFoundError:
        logger.debug("Skipping non-existent skill root: %s", root)
        return []
    except OSError:
        logger.error("Error listing skill root %s", root, exc_info=True)
        return []

    found: list[SkillFile] = []
    for entry in entries:
        if cancel is not None and cancel.is_set():
            raise ScanCancelled(str(root))
        candidate = root / entry.name / SKILL_FILENAME
        try:
            if not entry.is_dir(follow_symlinks=True) or not candidate.is_file():
                continue
        except OSError:
            logger.warning("Cannot stat %s", candidate, exc_info=True)
            continue

        found.append(SkillFile(path=candidate, source=source))

    return found
