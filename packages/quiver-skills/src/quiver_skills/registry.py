"""Command registry: applies the precedence rules between skill roots."""
from __future__ import annotations

import dataclasses
import logging
from typing import TYPE_CHECKING

from quiver_core.errors import SkillNotFoundError

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from quiver_skills.types import SkillAction

logger = logging.getLogger("quiver.skills.registry")


class SkillCommandRegistry:
    """Holds skill actions by visible name, in the order the loader emits them.

    Precedence:

    * User and project actions are last-registered-wins.  Since project
      roots load after the user root, a project skill overrides a user
      skill with the same name.
    * Extension actions never shadow an existing command.  On conflict the
      extension action is renamed ``<extension>.<name>`` (with a numeric
      suffix if that is taken too).
    """

    def __init__(self) -> None:
        self._commands: dict[str, SkillAction] = {}

    def register(self, action: SkillAction) -> SkillAction:
        """Register *action* and return it under its final name."""
        name = action.name
        if name in self._commands:
            if action.extension_name:
                name = self._extension_alias(action)
                logger.info(
                    "Extension '%s' command '%s' conflicts with an existing "
                    "command; registered as '%s'",
                    action.extension_name,
                    action.name,
                    name,
                )
                action = dataclasses.replace(action, name=name)
            else:
                logger.info(
                    "Skill command '%s' from %s overrides an earlier definition",
                    name,
                    action.source.path,
                )
        self._commands[name] = action
        return action

    def register_all(self, actions: Iterable[SkillAction]) -> list[SkillAction]:
        return [self.register(action) for action in actions]

    def get(self, name: str) -> SkillAction:
        """Look up a command by visible name.

        Raises:
            SkillNotFoundError: If nothing is registered under *name*.
        """
        try:
            return self._commands[name]
        except KeyError:
            msg = f"No skill command registered as '{name}'"
            raise SkillNotFoundError(msg) from None

    def list(self) -> list[SkillAction]:
        return list(self._commands.values())

    def __contains__(self, name: object) -> bool:
        return name in self._commands

    def __len__(self) -> int:
        return len(self._commands)

    def __iter__(self) -> Iterator[SkillAction]:
        return iter(self._commands.values())

    def _extension_alias(self, action: SkillAction) -> str:
        base = f"{action.extension_name}.{action.name}"
        alias = base
        suffix = 1
        while alias in self._commands:
            alias = f"{base}{suffix}"
            suffix += 1
        return alias
