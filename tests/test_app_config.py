# tests/test_app_config.py
from __future__ import annotations

from pathlib import Path

import pytest

from mdpdf.services.config.app_config import AppConfig, build_app_config


def _write(p: Path, text: str) -> None:
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(text, encoding="utf-8")


class FakeIni:
    """IniConfigService stand-in backed by a plain dict of sections."""

    def __init__(
        self,
        values: dict[str, dict[str, str]] | None = None,
        *,
        version: str = "0.0.0",
        loaded_from: Path | None = None,
    ) -> None:
        self._values = values or {}
        self._version = version
        self._loaded_from = loaded_from

    def app_version(self) -> str:
        return self._version

    def get(self, section: str, key: str, default: str | None = None) -> str | None:
        return self._values.get(section, {}).get(key, default)

    def get_int(self, section: str, key: str, default: int | None = None) -> int | None:
        return default

    def get_bool(self, section: str, key: str, default: bool | None = None) -> bool | None:
        return default

    def as_dict(self) -> dict[str, dict[str, str]]:
        return self._values

    @property
    def loaded_from(self) -> Path | None:
        return self._loaded_from


# ------------------------------
# get_version()
# ------------------------------
@pytest.mark.parametrize(
    "raw,expected",
    [("v1.0.5\n", "1.0.5"), ("V1.2.3", "1.2.3"), ("1.2.3-alpha.1", "1.2.3"), ("v1.2.3+build.7", "1.2.3")],
)
def test_get_version_reads_version_file(tmp_path: Path, raw: str, expected: str):
    _write(tmp_path / "version", raw)
    cfg = AppConfig(ini=FakeIni(version="9.9.9"), project_root=tmp_path)
    assert cfg.get_version() == expected


def test_get_version_falls_back_to_ini_then_zero(tmp_path: Path):
    assert AppConfig(ini=FakeIni(version="v2.3.4"), project_root=tmp_path).get_version() == "2.3.4"
    assert AppConfig(ini=FakeIni(version="dev"), project_root=tmp_path).get_version() == "dev"
    assert AppConfig(ini=FakeIni(version="  "), project_root=tmp_path).get_version() == "0.0.0"

    _write(tmp_path / "version", "not-a-version")
    assert AppConfig(ini=FakeIni(version="2.0.1"), project_root=tmp_path).get_version() == "2.0.1"


# ------------------------------
# export defaults
# ------------------------------
def test_export_defaults_when_unset(tmp_path: Path):
    cfg = AppConfig(ini=FakeIni(), project_root=tmp_path)
    assert cfg.export_page_size() == "a4"
    assert cfg.export_margin() == "normal"
    assert cfg.export_filename() == "document.pdf"
    assert cfg.log_level() == "INFO"


def test_export_values_are_normalized(tmp_path: Path):
    ini = FakeIni(
        {
            "export": {"page_size": " Letter ", "margin": "WIDE", "filename": " out.pdf "},
            "logging": {"level": "debug"},
        }
    )
    cfg = AppConfig(ini=ini, project_root=tmp_path)
    assert cfg.export_page_size() == "letter"
    assert cfg.export_margin() == "wide"
    assert cfg.export_filename() == "out.pdf"
    assert cfg.log_level() == "DEBUG"


# ------------------------------
# Delegation / build_app_config()
# ------------------------------
def test_delegates_to_ini(tmp_path: Path):
    ini_path = tmp_path / "settings.ini"
    cfg = AppConfig(ini=FakeIni({"a": {"b": "c"}}, loaded_from=ini_path), project_root=tmp_path)
    assert cfg.loaded_from == ini_path
    assert cfg.get("a", "b") == "c"
    assert cfg.as_dict() == {"a": {"b": "c"}}


def test_build_app_config_reads_explicit_ini_and_version_file(tmp_path: Path):
    root = tmp_path / "repo"
    _write(root / "version", "v4.5.6")
    explicit_ini = tmp_path / "explicit.ini"
    _write(explicit_ini, "[export]\npage_size = a5\nmargin = none\n")

    cfg = build_app_config(explicit_ini=explicit_ini, project_root=root)
    assert cfg.project_root == root
    assert cfg.loaded_from == explicit_ini
    assert cfg.get_version() == "4.5.6"
    assert cfg.export_page_size() == "a5"
    assert cfg.export_margin() == "none"
