"""Tests for the flat SKILL.md frontmatter parser."""
from __future__ import annotations

import textwrap
from pathlib import Path

import pytest
from quiver_core.errors import SkillParseError
from quiver_skills.parser import (
    parse_frontmatter,
    parse_header_lines,
    parse_skill_text,
    read_frontmatter_summary,
)


class TestParseFrontmatter:
    def test_splits_header_and_body(self) -> None:
        text = textwrap.dedent("""\
            ---
            name: analyze-code
            description: Analyze code quality
            ---

            # Analyze Code

            Body text.
        """)

        parsed = parse_frontmatter(text)

        assert parsed is not None
        assert parsed.fields == {
            "name": "analyze-code",
            "description": "Analyze code quality",
        }
        assert parsed.body == "\n# Analyze Code\n\nBody text.\n"

    def test_crlf_line_endings(self) -> None:
        text = "---\r\nname: win\r\ndescription: Windows file\r\n---\r\nBody\r\n"

        parsed = parse_frontmatter(text)

        assert parsed is not None
        assert parsed.fields["name"] == "win"
        assert parsed.fields["description"] == "Windows file"
        assert parsed.body.strip() == "Body"

    def test_no_opening_delimiter(self) -> None:
        assert parse_frontmatter("Just a plain markdown file.\n") is None

    def test_opening_delimiter_not_on_first_line(self) -> None:
        assert parse_frontmatter("\n---\nname: x\n---\nbody\n") is None

    def test_no_closing_delimiter(self) -> None:
        text = "---\nname: open-ended\ndescription: never closed\n\nBody.\n"
        assert parse_frontmatter(text) is None

    def test_closing_delimiter_must_be_own_line(self) -> None:
        text = "---\nname: x\n--- trailing\nbody\n"
        assert parse_frontmatter(text) is None

    def test_empty_body(self) -> None:
        parsed = parse_frontmatter("---\nname: x\ndescription: y\n---\n")

        assert parsed is not None
        assert parsed.body == ""

    def test_body_may_contain_delimiters(self) -> None:
        text = "---\nname: x\n---\nfirst\n---\nsecond\n"

        parsed = parse_frontmatter(text)

        assert parsed is not None
        assert parsed.fields == {"name": "x"}
        assert parsed.body == "first\n---\nsecond\n"


class TestParseHeaderLines:
    def test_skips_blank_and_comment_lines(self) -> None:
        header = "\n# a comment\n   # indented comment\nname: x\n\n"
        assert parse_header_lines(header) == {"name": "x"}

    def test_lines_without_colon_are_ignored(self) -> None:
        assert parse_header_lines("just words\nname: x") == {"name": "x"}

    def test_splits_at_first_colon_only(self) -> None:
        fields = parse_header_lines("description: Use when: the build fails")
        assert fields["description"] == "Use when: the build fails"

    def test_only_line_feeds_split_lines(self) -> None:
        header = "name: x\r\ndescription: first\x85second\u2028third half\r\n"
        fields = parse_header_lines(header)
        assert fields == {"name": "x", "description": "first\x85second\u2028third half"}

    def test_trims_key_and_value(self) -> None:
        assert parse_header_lines("  name   :   spaced-out   ") == {"name": "spaced-out"}

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ('"abc"', "abc"),
            ("'abc'", "abc"),
            ('"abc\'', '"abc\''),
            ("'abc", "'abc"),
            ('abc"', 'abc"'),
            ('""', ""),
            ('"', '"'),
            ("\"'abc'\"", "'abc'"),
        ],
    )
    def test_quote_stripping(self, raw: str, expected: str) -> None:
        assert parse_header_lines(f"key: {raw}")["key"] == expected

    def test_last_duplicate_wins(self) -> None:
        fields = parse_header_lines("name: first\nname: second")
        assert fields == {"name": "second"}

    def test_nested_structures_are_flattened_verbatim(self) -> None:
        header = textwrap.dedent("""\
            metadata:
              author: someone
            allowed-tools: [Read, Bash]
            description: |
        """)

        fields = parse_header_lines(header)

        assert fields["metadata"] == ""
        assert fields["author"] == "someone"
        assert fields["allowed-tools"] == "[Read, Bash]"
        assert fields["description"] == "|"


class TestParseSkillText:
    def test_raises_for_missing_frontmatter(self) -> None:
        with pytest.raises(SkillParseError, match="no valid '---' frontmatter"):
            parse_skill_text("no header here", Path("SKILL.md"))

    def test_returns_parsed_frontmatter(self) -> None:
        parsed = parse_skill_text("---\nname: x\n---\nbody", Path("SKILL.md"))
        assert parsed.fields == {"name": "x"}


class TestReadFrontmatterSummary:
    def test_only_name_and_description(self) -> None:
        text = "---\nname: x\ndescription: 'Quoted'\nlicense: MIT\n---\nBody\n"
        assert read_frontmatter_summary(text) == {"name": "x", "description": "Quoted"}

    def test_header_without_body(self) -> None:
        assert read_frontmatter_summary("---\nname: x\n---") == {"name": "x"}

    def test_no_header(self) -> None:
        assert read_frontmatter_summary("# Title\n") is None
