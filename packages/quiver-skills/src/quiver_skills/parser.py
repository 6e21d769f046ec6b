"""SKILL.md parser: splits the frontmatter header from the instruction body.

The header is deliberately *not* YAML.  It is a flat list of single-line
``key: value`` pairs between two ``---`` lines:

* blank lines and lines starting with ``#`` are skipped;
* each remaining line is split at its first colon, key and value trimmed;
* a value wrapped in one matching pair of ``"`` or ``'`` loses that pair;
* lines without a colon are ignored;
* a repeated key keeps its last value.

Lists, nested mappings, block scalars and escape sequences are not
interpreted.  Such lines end up as plain (possibly unrelated) string
values, which is the documented limit of the format.
"""
from __future__ import annotations

import re
from typing import TYPE_CHECKING

from quiver_core.errors import SkillParseError

from quiver_skills.types import ParsedFrontmatter

if TYPE_CHECKING:
    from pathlib import Path

_DELIMITER = "---"

# Opening delimiter on the first line, closing delimiter on a line of its own.
_FRONTMATTER_RE = re.compile(r"\A---\r?\n(.*?)\r?\n---\r?\n(.*)\Z", re.DOTALL)
# Looser variant used for listings: the closing line may end the file.
_SUMMARY_RE = re.compile(r"\A---\r?\n(.*?)\r?\n---(?:\r?\n|\Z)", re.DOTALL)

_QUOTES = ('"', "'")


def parse_frontmatter(text: str) -> ParsedFrontmatter | None:
    """Split *text* into header fields and body.

    Returns:
        The parsed header and body, or ``None`` if *text* does not start
        with a ``---`` line followed later by a closing ``---`` line.
    """
    match = _FRONTMATTER_RE.match(text)
    if match is None:
        return None

    header, body = match.groups()
    return ParsedFrontmatter(fields=parse_header_lines(header), body=body)


def parse_skill_text(text: str, path: Path) -> ParsedFrontmatter:
    """Like :func:`parse_frontmatter` but raises for non-declaration files.

    Raises:
        SkillParseError: If no frontmatter block is present.
    """
    parsed = parse_frontmatter(text)
    if parsed is None:
        msg = f"SKILL.md has no valid '{_DELIMITER}' frontmatter block: {path}"
        raise SkillParseError(msg)
    return parsed


def parse_header_lines(header: str) -> dict[str, str]:
    """Parse the lines between the delimiters into a flat mapping."""
    fields: dict[str, str] = {}
    for line in header.split("\n"):
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue

        key, sep, value = stripped.partition(":")
        if not sep:
            continue

        fields[key.strip()] = _unquote(value.strip())
    return fields


def read_frontmatter_summary(text: str) -> dict[str, str] | None:
    """Extract ``name`` and ``description`` for listing purposes.

    Tolerates a header that is not followed by any body.  Returns ``None``
    when there is no header at all; missing keys are simply absent.
    """
    match = _SUMMARY_RE.match(text)
    if match is None:
        return None

    fields = parse_header_lines(match.group(1))
    return {k: v for k, v in fields.items() if k in ("name", "description")}


def _unquote(value: str) -> str:
    """Strip exactly one matching pair of outer quotes."""
    if len(value) >= 2 and value[0] in _QUOTES and value[-1] == value[0]:
        return value[1:-1]
    return value
