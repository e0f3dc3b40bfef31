"""Tests for project metadata."""

from pathlib import Path

import pytest

tomllib = pytest.importorskip("tomllib")

ROOT = Path(__file__).resolve().parent.parent


class TestProjectMetadata:
    """Tests for pyproject.toml."""

    def test_readme_is_project_readme(self) -> None:
        project = tomllib.loads((ROOT / "pyproject.toml").read_text(encoding="utf-8"))["project"]
        assert project["readme"] == "README.md"
        readme = (ROOT / project["readme"]).read_text(encoding="utf-8")
        assert readme.startswith("# Letterlight")
