"""Skill validation: checks frontmatter fields against the agentskills.io schema."""
from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

from quiver_core.errors import SkillValidationError

from quiver_skills.types import FieldError, SkillDeclaration

NAME_PATTERN = re.compile(r"^[a-z0-9]+(-[a-z0-9]+)*$")
NAME_MAX_LENGTH = 64
DESCRIPTION_MAX_LENGTH = 1024
COMPATIBILITY_MAX_LENGTH = 500


class SkillValidator:
    """Validates parsed SKILL.md frontmatter.

    Every violation is collected; nothing is defaulted.  Keys the schema
    does not know about are ignored.
    """

    def validate(self, fields: Mapping[str, Any]) -> list[FieldError]:
        """Return all field errors.  An empty list means the fields are valid."""
        errors: list[FieldError] = []

        # Name checks
        name = fields.get("name")
        if name is None:
            errors.append(FieldError("name", "The 'name' field is required."))
        elif not isinstance(name, str):
            errors.append(FieldError("name", "The 'name' field must be a string."))
        else:
            if not name:
                errors.append(FieldError("name", "Name must not be empty."))
            elif len(name) > NAME_MAX_LENGTH:
                errors.append(FieldError(
                    "name",
                    f"Name exceeds {NAME_MAX_LENGTH} characters ({len(name)} chars).",
                ))
            if name and not NAME_PATTERN.fullmatch(name):
                errors.append(FieldError(
                    "name",
                    "Name must be lowercase alphanumeric with hyphens, "
                    f"cannot start/end with hyphen: '{name}'.",
                ))

        # Description checks
        description = fields.get("description")
        if description is None:
            errors.append(
                FieldError("description", "The 'description' field is required.")
            )
        elif not isinstance(description, str):
            errors.append(
                FieldError("description", "The 'description' field must be a string.")
            )
        elif not description:
            errors.append(FieldError("description", "Description must not be empty."))
        elif len(description) > DESCRIPTION_MAX_LENGTH:
            errors.append(FieldError(
                "description",
                f"Description exceeds {DESCRIPTION_MAX_LENGTH} characters "
                f"({len(description)} chars).",
            ))

        for key in ("license", "allowed-tools"):
            value = fields.get(key)
            if value is not None and not isinstance(value, str):
                errors.append(FieldError(key, f"The '{key}' field must be a string."))

        compatibility = fields.get("compatibility")
        if compatibility is not None:
            if not isinstance(compatibility, str):
                errors.append(
                    FieldError("compatibility", "The 'compatibility' field must be a string.")
                )
            elif len(compatibility) > COMPATIBILITY_MAX_LENGTH:
                errors.append(FieldError(
                    "compatibility",
                    f"Compatibility exceeds {COMPATIBILITY_MAX_LENGTH} characters "
                    f"({len(compatibility)} chars).",
                ))

        errors.extend(_check_metadata(fields.get("metadata")))
        return errors

    def to_declaration(self, fields: Mapping[str, Any]) -> SkillDeclaration:
        """Validate *fields* and build a SkillDeclaration.

        Raises:
            SkillValidationError: With every field error attached.
        """
        errors = self.validate(fields)
        if errors:
            messages = [str(e) for e in errors]
            label = fields.get("name") or "<unnamed>"
            msg = f"Skill '{label}' validation failed: {'; '.join(messages)}"
            raise SkillValidationError(msg, messages)

        metadata = fields.get("metadata")
        return SkillDeclaration(
            name=fields["name"],
            description=fields["description"],
            license=fields.get("license"),
            compatibility=fields.get("compatibility"),
            metadata=dict(metadata) if isinstance(metadata, Mapping) else {},
            allowed_tools=fields.get("allowed-tools"),
        )


def _check_metadata(metadata: Any) -> list[FieldError]:
    # The flat header yields "" for a bare ``metadata:`` line; treat it as absent.
    if metadata is None or metadata == "":
        return []
    if isinstance(metadata, str):
        return [FieldError(
            "metadata",
            "The 'metadata' field must be a mapping; nested mappings are not "
            "supported in SKILL.md frontmatter.",
        )]
    if not isinstance(metadata, Mapping):
        return [FieldError("metadata", "The 'metadata' field must be a mapping.")]

    return [
        FieldError("metadata", f"Metadata entry '{key}' must map a string to a string.")
        for key, value in metadata.items()
        if not isinstance(key, str) or not isinstance(value, str)
    ]
