from __future__ import annotations

import pytest
from PyQt6.QtWidgets import QTextBrowser

from mdpdf.di.container import Container
from mdpdf.services.config.app_config import AppConfig
from mdpdf.services.export_service import ExportService
from mdpdf.services.exporters.html_exporter import HtmlExporter
from mdpdf.services.exporters.pdf_exporter import PdfExporter
from mdpdf.services.ui.main_window import MainWindow


class FakeConfig:
    def export_page_size(self) -> str:
        return "a5"

    def export_margin(self) -> str:
        return "narrow"

    def export_filename(self) -> str:
        return "from-config.pdf"

    def log_level(self) -> str:
        return "INFO"


@pytest.fixture(autouse=True)
def text_browser_preview(monkeypatch):
    monkeypatch.setattr(MainWindow, "_create_preview_widget", lambda self: QTextBrowser(self))


@pytest.fixture()
def container(qapp, qsettings, fake_messages, fake_dialogs) -> Container:
    return Container(
        qsettings=qsettings,
        messages=fake_messages,
        dialogs=fake_dialogs,
        app_config=FakeConfig(),
    )


def test_container_wires_builtin_exporters(container: Container):
    names = container.exporter_registry.names()
    assert names == ["html", "pdf"]
    assert isinstance(container.exporter_registry.get("html"), HtmlExporter)
    assert isinstance(container.exporter_registry.get("pdf"), PdfExporter)


def test_container_export_service_uses_config_filename(container: Container):
    assert isinstance(container.export_service, ExportService)
    assert container.export_service.filename == "from-config.pdf"


def test_each_container_has_its_own_registry(qapp, qsettings):
    a = Container(qsettings=qsettings, app_config=FakeConfig())
    b = Container(qsettings=qsettings, app_config=FakeConfig())
    assert a.exporter_registry is not b.exporter_registry


def test_build_main_window_uses_config_defaults(container: Container):
    w = container.build_main_window(app_title="T")
    assert isinstance(w, MainWindow)
    assert w.page_size_key() == "a5"
    assert w.margin_key() == "narrow"
    assert w.messages is container.messages
    assert [a.text() for a in w.export_actions] == ["Export HTML…", "Export PDF…"]


def test_saved_settings_win_over_config(container: Container):
    container.settings_service.set_page_size("legal")
    w = container.build_main_window()
    assert w.page_size_key() == "legal"
    assert w.margin_key() == "narrow"


def test_default_builds_app_config(qapp, qsettings, tmp_path, monkeypatch):
    monkeypatch.setattr(
        "mdpdf.services.config.ini_config_service.user_config_dir", None, raising=False
    )
    monkeypatch.setenv("HOME", str(tmp_path))
    c = Container.default(qsettings)
    assert isinstance(c.app_config, AppConfig)
    assert c.export_service.filename == "document.pdf"
