"""
Checks that the package metadata matches what the package actually uses.
"""

from __future__ import annotations

import re
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[2]
PACKAGE_DIR = REPO_ROOT / "era5_merge"


def _pyproject() -> str:
    return (REPO_ROOT / "pyproject.toml").read_text(encoding="utf-8")


def _runtime_dependencies() -> str:
    match = re.search(r"^dependencies = \[(.*?)\]", _pyproject(), re.S | re.M)
    assert match is not None
    return match.group(1)


class TestPyproject:
    def test_readme_exists(self):
        match = re.search(r'^readme = "(.+)"', _pyproject(), re.M)
        assert match is not None
        assert match.group(1) == "README.md"
        assert (REPO_ROOT / match.group(1)).is_file()

    def test_numpy_is_test_only(self):
        """The package never imports numpy, so it is not a runtime requirement."""
        assert "numpy" not in _runtime_dependencies()
        for source in PACKAGE_DIR.rglob("*.py"):
            text = source.read_text(encoding="utf-8")
            assert not re.search(r"^\s*(import|from)\s+numpy\b", text, re.M), source

    def test_runtime_stack_declared(self):
        deps = _runtime_dependencies()
        for name in ("pandas", "pyarrow", "pydantic", "pyyaml", "openpyxl"):
            assert name in deps
