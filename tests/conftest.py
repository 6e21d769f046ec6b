from __future__ import annotations

import logging
import textwrap
from dataclasses import dataclass
from pathlib import Path

import pytest


def write_skill_md(skill_dir: Path, content: str) -> Path:
    """Write a SKILL.md into the given directory and return its path."""
    skill_dir.mkdir(parents=True, exist_ok=True)
    skill_file = skill_dir / "SKILL.md"
    skill_file.write_text(content, encoding="utf-8")
    return skill_file


def skill_md(name: str, description: str, body: str = "Do the thing.") -> str:
    header = textwrap.dedent(f"""\
        ---
        name: {name}
        description: {description}
        ---
    """)
    return f"{header}\n{body}\n"


@dataclass
class SkillTree:
    """Temporary user home and project root with their skill directories."""

    home: Path
    project: Path

    @property
    def user_skills(self) -> Path:
        return self.home / "skills"

    @property
    def project_skills(self) -> Path:
        return self.project / ".quiver" / "skills"

    def extension(self, name: str) -> Path:
        path = self.home / "extensions" / name
        path.mkdir(parents=True, exist_ok=True)
        (path / "quiver-extension.toml").write_text(
            f'name = "{name}"\nid = "{name}-id"\n', encoding="utf-8"
        )
        return path


@pytest.fixture
def skill_tree(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> SkillTree:
    home = tmp_path / "home"
    project = tmp_path / "project"
    home.mkdir()
    project.mkdir()
    monkeypatch.setenv("QUIVER_HOME", str(home))
    return SkillTree(home=home, project=project)


@pytest.fixture(autouse=True)
def _reset_quiver_logger():
    """Drop handlers installed by setup_logging so tests don't leak streams."""
    yield
    logger = logging.getLogger("quiver")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
