from __future__ import annotations

import pytest

from mdpdf.domain.errors import ExportError, ExportPreconditionError
from mdpdf.domain.models import ExportRequest
from mdpdf.services.exporters.pdf_exporter import PdfExporter


class SpyService:
    """Wraps a real export service and remembers the artifacts it handed out."""

    def __init__(self, inner) -> None:
        self.inner = inner
        self.artifacts = []
        self.calls = []

    def export(self, text, **kw):
        self.calls.append(kw)
        a = self.inner.export(text, **kw)
        self.artifacts.append(a)
        return a


class FailingFiles:
    def write_bytes_atomic(self, path, data):
        raise OSError("disk full")


@pytest.mark.usefixtures("qapp")
def test_pdf_exporter_writes_file(tmp_path, export_service, file_service):
    spy = SpyService(export_service)
    exp = PdfExporter(spy, file_service)
    out = tmp_path / "notes.pdf"

    exp.export(ExportRequest("# Test", page_size="letter", margin="narrow"), out)

    assert out.read_bytes().startswith(b"%PDF-")
    assert spy.calls == [{"page_size": "letter", "margin": "narrow", "filename": "notes.pdf"}]
    # the in-memory copy is dropped once written
    assert spy.artifacts[0].released is True


def test_pdf_exporter_missing_folder_is_precondition(tmp_path, export_service, file_service):
    exp = PdfExporter(export_service, file_service)
    with pytest.raises(ExportPreconditionError):
        exp.export(ExportRequest("x"), tmp_path / "missing" / "out.pdf")


def test_pdf_exporter_releases_artifact_when_write_fails(tmp_path, export_service):
    spy = SpyService(export_service)
    exp = PdfExporter(spy, FailingFiles())
    with pytest.raises(OSError):
        exp.export(ExportRequest("x"), tmp_path / "out.pdf")
    assert spy.artifacts[0].released is True


def test_pdf_exporter_propagates_export_errors(tmp_path, file_service):
    class Broken:
        def export(self, text, **kw):
            raise ExportError("nope")

    exp = PdfExporter(Broken(), file_service)
    with pytest.raises(ExportError):
        exp.export(ExportRequest("x"), tmp_path / "out.pdf")
    assert not (tmp_path / "out.pdf").exists()


def test_pdf_exporter_metadata():
    assert PdfExporter.name == "pdf"
    assert PdfExporter.file_ext == "pdf"
