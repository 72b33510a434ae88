from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

from mdpdf.domain.errors import ExportError, ExportPreconditionError
from mdpdf.domain.interfaces import IExporter, IFileService
from mdpdf.domain.models import ExportRequest, PdfArtifact
from mdpdf.services.export_service import ExportService
from mdpdf.services.ui.ports.dialogs import IFileDialogService
from mdpdf.services.ui.ports.messages import IMessageService

logger = logging.getLogger(__name__)


@runtime_checkable
class IExportView(Protocol):
    """What the presenter needs from the window (implemented by the Qt MainWindow)."""

    def get_editor_text(self) -> str: ...
    def page_size_key(self) -> str: ...
    def margin_key(self) -> str: ...
    def suggested_filename(self, ext: str) -> str: ...
    def set_export_enabled(self, enabled: bool) -> None: ...
    def show_status(self, text: str, msec: int = 3000) -> None: ...
    def show_pdf_preview(self, artifact: PdfArtifact) -> None: ...


class ExportPresenter:
    """
    Coordinates export triggers from the window.

    One export at a time: the export actions are disabled while a run is in flight
    and a second trigger is ignored. The presenter owns the last PDF artifact and
    releases it when the preview closes or the next export starts.
    """

    def __init__(
        self,
        view: IExportView,
        export_service: ExportService,
        files: IFileService,
        messages: IMessageService,
        dialogs: IFileDialogService,
        *,
        parent: Any | None = None,
    ) -> None:
        self.view = view
        self.export_service = export_service
        self.files = files
        self.messages = messages
        self.dialogs = dialogs
        self.parent = parent
        self.in_flight = False
        self.artifact: PdfArtifact | None = None

    # -------------------- PDF preview --------------------

    def build_pdf(self) -> PdfArtifact | None:
        """Run the pipeline for the current editor text; errors become notices."""
        if self.in_flight:
            return None
        self.release_artifact()
        self._begin()
        try:
            self.artifact = self.export_service.export(
                self.view.get_editor_text(),
                page_size=self.view.page_size_key(),
                margin=self.view.margin_key(),
                filename=self.view.suggested_filename("pdf"),
            )
            return self.artifact
        except ExportPreconditionError as e:
            self.messages.warning(self.parent, "Export PDF", str(e))
        except ExportError:
            self.messages.error(self.parent, "Export Error", "Failed to export PDF.")
        finally:
            self._end()
        return None

    def preview_pdf(self) -> None:
        artifact = self.build_pdf()
        if artifact is None:
            return
        try:
            self.view.show_pdf_preview(artifact)
        finally:
            self.release_artifact()

    def save_artifact(self) -> Path | None:
        """Ask for a destination and write the current artifact there."""
        artifact = self.artifact
        if artifact is None or artifact.released:
            self.messages.warning(self.parent, "Save PDF", "There is no generated PDF to save.")
            return None
        out = self.dialogs.get_save_file(self.parent, "Save PDF", artifact.filename, "PDF (*.pdf)")
        if not out:
            return None
        try:
            self.files.write_bytes_atomic(out, artifact.data)
        except OSError as e:
            logger.error("Could not write %s: %s", out, e)
            self.messages.error(self.parent, "Save Error", f"Failed to save PDF:\n{e}")
            return None
        self.view.show_status(f"Saved PDF: {out}", 3000)
        return out

    def release_artifact(self) -> None:
        if self.artifact is not None:
            self.artifact.release()
            self.artifact = None

    # -------------------- registry exporters --------------------

    def export_with(self, exporter: IExporter) -> Path | None:
        if self.in_flight:
            return None
        default = self.view.suggested_filename(exporter.file_ext)
        filt = f"{exporter.name.upper()} (*.{exporter.file_ext})"
        out = self.dialogs.get_save_file(self.parent, exporter.label, default, filt)
        if not out:
            return None

        request = ExportRequest(
            text=self.view.get_editor_text(),
            page_size=self.view.page_size_key(),
            margin=self.view.margin_key(),
        )
        self._begin()
        try:
            exporter.export(request, out)
        except ExportPreconditionError as e:
            self.messages.warning(self.parent, "Export", str(e))
            return None
        except Exception as e:
            logger.exception("Export to %s failed", out)
            self.messages.error(
                self.parent, "Export Error", f"Failed to export {exporter.name.upper()}:\n{e}"
            )
            return None
        finally:
            self._end()

        self.view.show_status(f"Exported {exporter.name.upper()}: {out}", 3000)
        return out

    # -------------------- helpers --------------------

    def _begin(self) -> None:
        self.in_flight = True
        self.view.set_export_enabled(False)

    def _end(self) -> None:
        self.in_flight = False
        self.view.set_export_enabled(True)
