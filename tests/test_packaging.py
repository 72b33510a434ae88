from __future__ import annotations

import importlib
from pathlib import Path

import pytest

tomllib = pytest.importorskip("tomllib")

ROOT = Path(__file__).resolve().parents[1]


@pytest.fixture(scope="module")
def project() -> dict:
    with (ROOT / "pyproject.toml").open("rb") as fh:
        return tomllib.load(fh)["project"]


def test_readme_when_declared_is_a_real_readme(project):
    readme = project.get("readme")
    if readme is None:
        return
    path = ROOT / (readme if isinstance(readme, str) else readme["file"])
    assert path.is_file()
    assert path.name.lower().startswith("readme")


def test_entry_points_resolve(project):
    scripts = {**project.get("scripts", {}), **project.get("gui-scripts", {})}
    assert set(scripts) == {"mdpdf", "mdpdf-gui"}
    for target in scripts.values():
        module, _, attr = target.partition(":")
        assert callable(getattr(importlib.import_module(module), attr))
