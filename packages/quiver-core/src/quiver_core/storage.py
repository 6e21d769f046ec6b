"""Filesystem locations for user-wide and per-project Quiver state."""
from __future__ import annotations

from pathlib import Path

from quiver_core.config import quiver_home

_PROJECT_DIR_NAME = ".quiver"
_SKILLS_DIR_NAME = "skills"


class Storage:
    """Resolves storage paths for a project root.

    None of the returned paths are required to exist.
    """

    def __init__(self, project_root: Path | str) -> None:
        self._project_root = Path(project_root)

    @property
    def project_root(self) -> Path:
        return self._project_root

    @staticmethod
    def user_dir() -> Path:
        return quiver_home()

    @staticmethod
    def user_skills_dir() -> Path:
        return quiver_home() / _SKILLS_DIR_NAME

    @staticmethod
    def user_extensions_dir() -> Path:
        return quiver_home() / "extensions"

    def project_dir(self) -> Path:
        return self._project_root / _PROJECT_DIR_NAME

    def project_skills_dir(self) -> Path:
        return self.project_dir() / _SKILLS_DIR_NAME
