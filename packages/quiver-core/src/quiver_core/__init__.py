"""Quiver Core: shared errors, config, storage paths, and logging."""
from __future__ import annotations

from quiver_core._version import __version__
from quiver_core.config import (
    ExtensionsConfig,
    QuiverConfig,
    SecurityConfig,
    SkillsConfig,
    quiver_home,
)
from quiver_core.errors import (
    ConfigError,
    ExtensionError,
    QuiverError,
    SkillError,
    SkillNotFoundError,
    SkillParseError,
    SkillValidationError,
)
from quiver_core.extensions import discover_extensions, load_extension
from quiver_core.logging import get_logger, setup_logging
from quiver_core.storage import Storage
from quiver_core.types import ExtensionInfo, TrustState

__all__ = [
    # Errors
    "ConfigError",
    "ExtensionError",
    # Types
    "ExtensionInfo",
    # Config
    "ExtensionsConfig",
    "QuiverConfig",
    "QuiverError",
    "SecurityConfig",
    "SkillError",
    "SkillNotFoundError",
    "SkillParseError",
    "SkillValidationError",
    "SkillsConfig",
    "Storage",
    "TrustState",
    # Version
    "__version__",
    "discover_extensions",
    # Logging
    "get_logger",
    "load_extension",
    "quiver_home",
    "setup_logging",
]
