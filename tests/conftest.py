from __future__ import annotations

import os
from pathlib import Path

# Qt widgets in tests never need a display.
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest  # noqa: E402
from PyQt6.QtCore import QSettings  # noqa: E402
from PyQt6.QtWidgets import QApplication  # noqa: E402

from mdpdf.domain.models import PdfArtifact  # noqa: E402
from mdpdf.services.document_renderer import DocumentRenderer  # noqa: E402
from mdpdf.services.export_service import ExportService, build_export_service  # noqa: E402
from mdpdf.services.file_service import FileService  # noqa: E402
from mdpdf.services.markdown_parser import MarkdownParser  # noqa: E402
from mdpdf.services.markdown_renderer import MarkdownRenderer  # noqa: E402
from mdpdf.services.settings_service import SettingsService  # noqa: E402


# --- Fallback QApplication fixture (works with or without pytest-qt) ---
@pytest.fixture(scope="session")
def qapp():
    """Provide a QApplication for tests that need Qt.
    Creates one if not present; reuses existing otherwise.
    """
    app = QApplication.instance()
    created = False
    if app is None:
        app = QApplication([])
        created = True
    try:
        yield app
    finally:
        # Don't forcibly quit a shared app; only close if we created it here.
        if created:
            app.quit()


# --- Other common fixtures ---


@pytest.fixture()
def tmp_settings_path(tmp_path: Path) -> Path:
    return tmp_path / "settings.ini"


@pytest.fixture()
def qsettings(tmp_settings_path: Path) -> QSettings:
    # Use an INI file so we don't touch system registry / platform stores
    s = QSettings(str(tmp_settings_path), QSettings.Format.IniFormat)
    s.clear()
    return s


@pytest.fixture()
def settings_service(qsettings: QSettings) -> SettingsService:
    return SettingsService(qsettings)


@pytest.fixture()
def file_service() -> FileService:
    return FileService()


@pytest.fixture()
def renderer() -> MarkdownRenderer:
    return MarkdownRenderer()


@pytest.fixture()
def parser() -> MarkdownParser:
    return MarkdownParser()


@pytest.fixture()
def document_renderer() -> DocumentRenderer:
    return DocumentRenderer()


@pytest.fixture()
def export_service() -> ExportService:
    # uncompressed streams keep assertions on the raw bytes simple
    return build_export_service(compress=False)


# --- Shared fakes for the UI ports ---


class FakeMessages:
    """Records every notice instead of opening a QMessageBox."""

    def __init__(self, answer: bool = True) -> None:
        self.answer = answer
        self.calls: list[tuple[str, str, str]] = []

    def info(self, parent, title: str, text: str) -> None:
        self.calls.append(("info", title, text))

    def warning(self, parent, title: str, text: str) -> None:
        self.calls.append(("warning", title, text))

    def error(self, parent, title: str, text: str) -> None:
        self.calls.append(("error", title, text))

    def ask(self, parent, title: str, text: str, kind=None) -> bool:
        self.calls.append(("ask", title, text))
        return self.answer

    def kinds(self) -> list[str]:
        return [c[0] for c in self.calls]


class FakeDialogs:
    """Returns preset paths instead of opening file dialogs."""

    def __init__(self, save_path: Path | None = None, open_path: Path | None = None) -> None:
        self.save_path = save_path
        self.open_path = open_path
        self.save_calls: list[tuple[str, str, str]] = []

    def get_open_file(self, parent, caption: str, start_dir: str = "", filter_str: str = "") -> Path | None:
        return self.open_path

    def get_save_file(
        self, parent, caption: str, start_path: str = "", filter_str: str = ""
    ) -> Path | None:
        self.save_calls.append((caption, start_path, filter_str))
        return self.save_path


@pytest.fixture()
def fake_messages() -> FakeMessages:
    return FakeMessages()


@pytest.fixture()
def fake_dialogs(tmp_path: Path) -> FakeDialogs:
    return FakeDialogs(save_path=tmp_path / "out.pdf")


@pytest.fixture()
def artifact() -> PdfArtifact:
    return PdfArtifact(data=b"%PDF-1.4 fake", page_count=1, filename="doc.pdf")
