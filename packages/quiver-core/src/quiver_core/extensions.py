"""Enumerates installed extensions from their manifest files."""
from __future__ import annotations

import tomllib
from typing import TYPE_CHECKING

from quiver_core.errors import ExtensionError
from quiver_core.logging import get_logger
from quiver_core.types import ExtensionInfo

if TYPE_CHECKING:
    from pathlib import Path

logger = get_logger("extensions")

MANIFEST_FILENAME = "quiver-extension.toml"


def load_extension(ext_dir: Path, disabled: frozenset[str] = frozenset()) -> ExtensionInfo:
    """Read ``quiver-extension.toml`` from *ext_dir*.

    The manifest must provide ``name``; ``id`` defaults to the name.

    Raises:
        ExtensionError: If the manifest is missing, unreadable or has
            no ``name``.
    """
    manifest = ext_dir / MANIFEST_FILENAME
    try:
        with open(manifest, "rb") as f:
            raw = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        msg = f"Cannot read extension manifest {manifest}: {exc}"
        raise ExtensionError(msg) from exc

    name = raw.get("name")
    if not isinstance(name, str) or not name:
        msg = f"Extension manifest missing 'name': {manifest}"
        raise ExtensionError(msg)

    ext_id = raw.get("id") or name
    return ExtensionInfo(
        name=name,
        id=str(ext_id),
        path=ext_dir.resolve(),
        is_active=name not in disabled,
    )


def discover_extensions(
    extensions_dir: Path,
    disabled: list[str] | None = None,
) -> list[ExtensionInfo]:
    """Return every extension installed under *extensions_dir*.

    Disabled extensions are still returned, with ``is_active=False``.
    Broken manifests are logged and skipped.
    """
    if not extensions_dir.is_dir():
        logger.debug("No extensions directory at %s", extensions_dir)
        return []

    disabled_names = frozenset(disabled or [])
    found: list[ExtensionInfo] = []
    for ext_dir in sorted(extensions_dir.iterdir()):
        if not ext_dir.is_dir():
            continue
        try:
            found.append(load_extension(ext_dir, disabled_names))
        except ExtensionError as exc:
            logger.warning("Skipping extension: %s", exc)
    return found
