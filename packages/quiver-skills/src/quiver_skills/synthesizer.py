"""Action synthesis: turns a validated declaration into a host command."""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from quiver_skills.types import PromptSubmission, SkillAction, SourceKind

if TYPE_CHECKING:
    from collections.abc import Callable

    from quiver_skills.types import SkillDeclaration, SkillFile

logger = logging.getLogger("quiver.skills.synthesizer")

COMMAND_PREFIX = "skill:"


def command_name(skill_name: str) -> str:
    """Host-visible identifier for a skill."""
    return f"{COMMAND_PREFIX}{skill_name}"


def build_prompt(skill_name: str, instructions: str, args: str = "") -> str:
    """Assemble the prompt text submitted when a skill is invoked.

    The ``## User Request`` section is only present when *args* has
    non-whitespace content.
    """
    user_request = (args or "").strip()

    prompt = f'You are using the "{skill_name}" skill.\n\n'
    prompt += f"## Skill Instructions\n\n{instructions}\n\n"
    if user_request:
        prompt += f"## User Request\n\n{user_request}\n"
    return prompt


class SkillSynthesizer:
    """Builds SkillAction objects from validated declarations."""

    def synthesize(
        self,
        declaration: SkillDeclaration,
        body: str,
        skill_file: SkillFile,
    ) -> SkillAction:
        source = skill_file.source

        if skill_file.directory_name != declaration.name:
            logger.warning(
                "Skill directory '%s' doesn't match frontmatter name '%s' in %s",
                skill_file.directory_name,
                declaration.name,
                skill_file.path,
            )

        description = declaration.description
        if source.kind is SourceKind.EXTENSION and source.extension_name:
            description = f"[{source.extension_name}] {description}"

        instructions = body.strip()

        return SkillAction(
            name=command_name(declaration.name),
            description=description,
            skill_name=declaration.name,
            source=source,
            instructions=instructions,
            build_prompt=_prompt_builder(declaration.name, instructions),
        )


def _prompt_builder(
    skill_name: str, instructions: str
) -> Callable[[str], PromptSubmission]:
    def submit(args: str = "") -> PromptSubmission:
        return PromptSubmission(text=build_prompt(skill_name, instructions, args))

    return submit
