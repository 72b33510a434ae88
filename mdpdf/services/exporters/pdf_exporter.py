from __future__ import annotations

from pathlib import Path

from mdpdf.domain.errors import ExportPreconditionError
from mdpdf.domain.interfaces import IExporter, IFileService
from mdpdf.domain.models import ExportRequest
from mdpdf.services.export_service import ExportService


class PdfExporter(IExporter):
    """Runs the PDF pipeline and writes the artifact atomically to out_path."""

    name = "pdf"
    label = "Export PDF…"
    file_ext = "pdf"

    def __init__(self, export_service: ExportService, files: IFileService) -> None:
        self._service = export_service
        self._files = files

    def export(self, request: ExportRequest, out_path: Path) -> None:
        if not out_path.parent.is_dir():
            raise ExportPreconditionError(f"Output folder does not exist: {out_path.parent}")

        artifact = self._service.export(
            request.text,
            page_size=request.page_size,
            margin=request.margin,
            filename=out_path.name,
        )
        try:
            self._files.write_bytes_atomic(out_path, artifact.data)
        finally:
            artifact.release()
