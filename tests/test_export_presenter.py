from __future__ import annotations

from pathlib import Path

import pytest

from mdpdf.domain.errors import ExportError, ExportPreconditionError
from mdpdf.domain.interfaces import IExporter
from mdpdf.domain.models import ExportRequest, PdfArtifact
from mdpdf.services.ui.presenters.export_presenter import ExportPresenter, IExportView


class FakeView:
    def __init__(self, text: str = "# Hi") -> None:
        self.text = text
        self.enabled_log: list[bool] = []
        self.status: list[str] = []
        self.previewed: list[PdfArtifact] = []
        self.on_preview = None

    def get_editor_text(self) -> str:
        return self.text

    def page_size_key(self) -> str:
        return "letter"

    def margin_key(self) -> str:
        return "wide"

    def suggested_filename(self, ext: str) -> str:
        return f"notes.{ext}"

    def set_export_enabled(self, enabled: bool) -> None:
        self.enabled_log.append(enabled)

    def show_status(self, text: str, msec: int = 3000) -> None:
        self.status.append(text)

    def show_pdf_preview(self, artifact: PdfArtifact) -> None:
        self.previewed.append(artifact)
        if self.on_preview:
            self.on_preview(artifact)


class FakeService:
    def __init__(self, error: Exception | None = None) -> None:
        self.error = error
        self.calls: list[dict] = []

    def export(self, text, **kw) -> PdfArtifact:
        self.calls.append({"text": text, **kw})
        if self.error is not None:
            raise self.error
        return PdfArtifact(data=b"%PDF-1.4 fake", filename=kw.get("filename") or "document.pdf")


class RecordingExporter(IExporter):
    name = "rec"
    label = "Export REC…"
    file_ext = "rec"

    def __init__(self, error: Exception | None = None) -> None:
        self.error = error
        self.requests: list[tuple[ExportRequest, Path]] = []

    def export(self, request: ExportRequest, out_path: Path) -> None:
        self.requests.append((request, out_path))
        if self.error is not None:
            raise self.error


@pytest.fixture()
def view() -> FakeView:
    return FakeView()


def make(view, service, files, messages, dialogs) -> ExportPresenter:
    return ExportPresenter(view, service, files, messages, dialogs, parent=None)


def test_fake_view_satisfies_protocol(view):
    assert isinstance(view, IExportView)


def test_build_pdf_uses_view_options(view, file_service, fake_messages, fake_dialogs):
    service = FakeService()
    p = make(view, service, file_service, fake_messages, fake_dialogs)

    artifact = p.build_pdf()

    assert artifact is p.artifact
    assert service.calls == [
        {"text": "# Hi", "page_size": "letter", "margin": "wide", "filename": "notes.pdf"}
    ]
    assert view.enabled_log == [False, True]
    assert p.in_flight is False
    assert fake_messages.calls == []


def test_build_pdf_precondition_shows_warning(view, file_service, fake_messages, fake_dialogs):
    p = make(view, FakeService(ExportPreconditionError("no text")), file_service, fake_messages, fake_dialogs)

    assert p.build_pdf() is None
    assert fake_messages.calls == [("warning", "Export PDF", "no text")]
    assert view.enabled_log == [False, True]
    assert p.in_flight is False


def test_build_pdf_failure_shows_generic_error(view, file_service, fake_messages, fake_dialogs):
    p = make(view, FakeService(ExportError("boom")), file_service, fake_messages, fake_dialogs)

    assert p.build_pdf() is None
    assert fake_messages.calls == [("error", "Export Error", "Failed to export PDF.")]
    assert p.in_flight is False
    assert p.artifact is None


def test_second_trigger_while_in_flight_is_ignored(view, file_service, fake_messages, fake_dialogs):
    service = FakeService()
    p = make(view, service, file_service, fake_messages, fake_dialogs)
    p.in_flight = True

    assert p.build_pdf() is None
    assert p.export_with(RecordingExporter()) is None
    assert service.calls == []
    assert fake_dialogs.save_calls == []


def test_new_export_releases_previous_artifact(view, file_service, fake_messages, fake_dialogs):
    p = make(view, FakeService(), file_service, fake_messages, fake_dialogs)
    first = p.build_pdf()
    second = p.build_pdf()

    assert first.released is True
    assert second.released is False


def test_preview_releases_artifact_after_dialog(view, file_service, fake_messages, fake_dialogs):
    p = make(view, FakeService(), file_service, fake_messages, fake_dialogs)
    p.preview_pdf()

    (shown,) = view.previewed
    assert shown.released is True
    assert p.artifact is None


def test_preview_not_shown_when_export_fails(view, file_service, fake_messages, fake_dialogs):
    p = make(view, FakeService(ExportError("x")), file_service, fake_messages, fake_dialogs)
    p.preview_pdf()
    assert view.previewed == []


def test_save_from_preview_writes_bytes(view, file_service, fake_messages, fake_dialogs):
    p = make(view, FakeService(), file_service, fake_messages, fake_dialogs)
    saved: list[Path | None] = []
    view.on_preview = lambda _a: saved.append(p.save_artifact())

    p.preview_pdf()

    assert saved == [fake_dialogs.save_path]
    assert fake_dialogs.save_path.read_bytes() == b"%PDF-1.4 fake"
    assert fake_dialogs.save_calls == [("Save PDF", "notes.pdf", "PDF (*.pdf)")]
    assert view.status[-1].startswith("Saved PDF:")


def test_save_without_artifact_warns(view, file_service, fake_messages, fake_dialogs):
    p = make(view, FakeService(), file_service, fake_messages, fake_dialogs)
    assert p.save_artifact() is None
    assert fake_messages.kinds() == ["warning"]
    assert fake_dialogs.save_calls == []


def test_save_cancelled(view, file_service, fake_messages, fake_dialogs):
    fake_dialogs.save_path = None
    p = make(view, FakeService(), file_service, fake_messages, fake_dialogs)
    p.build_pdf()
    assert p.save_artifact() is None
    assert fake_messages.calls == []


def test_save_write_error_is_reported(view, fake_messages, fake_dialogs):
    class BadFiles:
        def write_bytes_atomic(self, path, data):
            raise OSError("read-only")

    p = make(view, FakeService(), BadFiles(), fake_messages, fake_dialogs)
    p.build_pdf()
    assert p.save_artifact() is None
    assert fake_messages.calls[-1][:2] == ("error", "Save Error")


def test_export_with_builds_request(view, file_service, fake_messages, fake_dialogs, tmp_path):
    fake_dialogs.save_path = tmp_path / "out.rec"
    exporter = RecordingExporter()
    p = make(view, FakeService(), file_service, fake_messages, fake_dialogs)

    assert p.export_with(exporter) == tmp_path / "out.rec"
    ((request, out),) = exporter.requests
    assert request == ExportRequest(text="# Hi", page_size="letter", margin="wide")
    assert out == tmp_path / "out.rec"
    assert fake_dialogs.save_calls == [("Export REC…", "notes.rec", "REC (*.rec)")]
    assert view.status == [f"Exported REC: {out}"]
    assert view.enabled_log == [False, True]


def test_export_with_cancelled_dialog(view, file_service, fake_messages, fake_dialogs):
    fake_dialogs.save_path = None
    exporter = RecordingExporter()
    p = make(view, FakeService(), file_service, fake_messages, fake_dialogs)
    assert p.export_with(exporter) is None
    assert exporter.requests == []
    assert view.enabled_log == []


@pytest.mark.parametrize(
    "error, kind",
    [(ExportPreconditionError("folder gone"), "warning"), (OSError("disk full"), "error")],
)
def test_export_with_errors_become_notices(view, file_service, fake_messages, fake_dialogs, error, kind):
    p = make(view, FakeService(), file_service, fake_messages, fake_dialogs)
    assert p.export_with(RecordingExporter(error)) is None
    assert fake_messages.kinds() == [kind]
    assert p.in_flight is False
    assert view.status == []
