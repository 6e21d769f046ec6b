from __future__ import annotations

from pathlib import Path

import pytest
from quiver_core.errors import ExtensionError
from quiver_core.extensions import MANIFEST_FILENAME, discover_extensions, load_extension


def _write_manifest(ext_dir: Path, content: str) -> None:
    ext_dir.mkdir(parents=True, exist_ok=True)
    (ext_dir / MANIFEST_FILENAME).write_text(content, encoding="utf-8")


class TestExtensions:
    def test_load_extension(self, tmp_path: Path):
        _write_manifest(tmp_path / "kit", 'name = "kit"\nid = "kit-123"\n')

        ext = load_extension(tmp_path / "kit")

        assert ext.name == "kit"
        assert ext.id == "kit-123"
        assert ext.path == (tmp_path / "kit").resolve()
        assert ext.is_active

    def test_id_defaults_to_name(self, tmp_path: Path):
        _write_manifest(tmp_path / "kit", 'name = "kit"\n')
        assert load_extension(tmp_path / "kit").id == "kit"

    def test_missing_name(self, tmp_path: Path):
        _write_manifest(tmp_path / "kit", 'id = "x"\n')
        with pytest.raises(ExtensionError, match="missing 'name'"):
            load_extension(tmp_path / "kit")

    def test_discover_skips_broken_and_marks_disabled(self, tmp_path: Path):
        _write_manifest(tmp_path / "b-kit", 'name = "b-kit"\n')
        _write_manifest(tmp_path / "a-kit", 'name = "a-kit"\n')
        _write_manifest(tmp_path / "broken", "name = [\n")
        (tmp_path / "no-manifest").mkdir()
        (tmp_path / "stray.txt").write_text("x", encoding="utf-8")

        found = discover_extensions(tmp_path, disabled=["b-kit"])

        assert [(e.name, e.is_active) for e in found] == [("a-kit", True), ("b-kit", False)]

    def test_discover_missing_dir(self, tmp_path: Path):
        assert discover_extensions(tmp_path / "nope") == []
