from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path

from quiver_core.errors import ConfigError
from quiver_core.logging import get_logger

logger = get_logger("config")


def quiver_home() -> Path:
    """User-wide Quiver directory, overridable with $QUIVER_HOME."""
    override = os.environ.get("QUIVER_HOME")
    if override:
        return Path(override).expanduser()
    return Path.home() / ".quiver"


def _load_toml(path: Path) -> dict:
    """Load a TOML file, returning empty dict if missing."""
    if not path.exists():
        return {}
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as exc:
        msg = f"Invalid TOML in {path}: {exc}"
        raise ConfigError(msg) from exc
    except OSError:
        logger.warning("Could not read config file %s", path, exc_info=True)
        return {}


def _deep_merge(base: dict, override: dict) -> dict:
    """Merge override into base (1 level deep for TOML sections)."""
    merged = dict(base)
    for key, val in override.items():
        if (
            key in merged
            and isinstance(merged[key], dict)
            and isinstance(val, dict)
        ):
            merged[key] = {**merged[key], **val}
        else:
            merged[key] = val
    return merged


@dataclass(frozen=True, slots=True)
class SecurityConfig:
    folder_trust: bool = False
    trusted_folders: list[str] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class SkillsConfig:
    enabled: bool = True
    user_dir: str | None = None


@dataclass(frozen=True, slots=True)
class ExtensionsConfig:
    dir: str | None = None
    disabled: list[str] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class QuiverConfig:
    """Top-level configuration, parsed from quiver.toml."""
    security: SecurityConfig = field(default_factory=SecurityConfig)
    skills: SkillsConfig = field(default_factory=SkillsConfig)
    extensions: ExtensionsConfig = field(default_factory=ExtensionsConfig)

    @classmethod
    def from_toml(
        cls, path: Path | str = "quiver.toml"
    ) -> QuiverConfig:
        path = Path(path)
        raw = _load_toml(path)
        return cls._from_raw(raw)

    @classmethod
    def load(
        cls, project_dir: Path | str | None = None
    ) -> QuiverConfig:
        """Load config with global → project layering.

        Resolution order (later wins):
        1. Built-in defaults
        2. $QUIVER_HOME/config.toml (global, default ~/.quiver)
        3. .quiver/config.toml or quiver.toml (project)
        """
        global_path = quiver_home() / "config.toml"

        project_dir = (
            Path.cwd() if project_dir is None else Path(project_dir)
        )

        # Project config: .quiver/config.toml takes priority
        project_path = project_dir / ".quiver" / "config.toml"
        if not project_path.exists():
            project_path = project_dir / "quiver.toml"

        global_raw = _load_toml(global_path)
        project_raw = _load_toml(project_path)
        merged = _deep_merge(global_raw, project_raw)

        return cls._from_raw(merged)

    @classmethod
    def _from_raw(cls, raw: dict) -> QuiverConfig:
        """Build QuiverConfig from a raw TOML dict."""

        def _pick(section: object, dc: type) -> dict:
            if not isinstance(section, dict):
                msg = f"Config section for {dc.__name__} must be a table"
                raise ConfigError(msg)
            fields = dc.__dataclass_fields__
            return {
                k: v for k, v in section.items() if k in fields
            }

        try:
            return cls(
                security=SecurityConfig(
                    **_pick(raw.get("security", {}), SecurityConfig)
                ),
                skills=SkillsConfig(
                    **_pick(raw.get("skills", {}), SkillsConfig)
                ),
                extensions=ExtensionsConfig(
                    **_pick(raw.get("extensions", {}), ExtensionsConfig)
                ),
            )
        except TypeError as exc:
            msg = f"Invalid configuration: {exc}"
            raise ConfigError(msg) from exc
