from __future__ import annotations

import logging
from typing import Any, Callable

from PyQt6.QtCore import QBuffer, QByteArray, QIODevice
from PyQt6.QtWidgets import QDialog, QDialogButtonBox, QLabel, QVBoxLayout, QWidget

from mdpdf.domain.models import PdfArtifact

logger = logging.getLogger(__name__)


class PdfPreviewDialog(QDialog):
    """
    Modal preview of a generated PDF with Save/Close buttons.

    The PDF bytes are served to the viewer from an in-memory QBuffer; both are
    closed when the dialog finishes, whichever button dismissed it.
    """

    def __init__(
        self,
        artifact: PdfArtifact,
        parent: QWidget | None = None,
        *,
        on_save: Callable[[], Any] | None = None,
    ) -> None:
        super().__init__(parent)
        self.setWindowTitle(f"Preview — {artifact.filename}")
        self.setModal(True)
        self.resize(820, 900)
        self._on_save = on_save

        self._buffer = QBuffer(self)
        self._buffer.setData(QByteArray(artifact.data))
        self._buffer.open(QIODevice.OpenModeFlag.ReadOnly)
        self._pdf_doc = None

        self.viewer = self._create_viewer()
        self.summary = QLabel(f"{artifact.page_count} page(s), {len(artifact)} bytes", self)

        self.buttons = QDialogButtonBox(
            QDialogButtonBox.StandardButton.Save | QDialogButtonBox.StandardButton.Close, self
        )
        self.buttons.accepted.connect(self._save)
        self.buttons.rejected.connect(self.reject)
        self.buttons.button(QDialogButtonBox.StandardButton.Save).setEnabled(on_save is not None)

        layout = QVBoxLayout(self)
        layout.addWidget(self.viewer, 1)
        layout.addWidget(self.summary)
        layout.addWidget(self.buttons)

        self.finished.connect(self._release)

    @property
    def released(self) -> bool:
        return not self._buffer.isOpen()

    def _save(self) -> None:
        if self._on_save is not None:
            self._on_save()

    def _release(self, _result: int = 0) -> None:
        if self._pdf_doc is not None:
            self._pdf_doc.close()
        self._buffer.close()
        self._buffer.setData(QByteArray())

    def _create_viewer(self) -> QWidget:
        """
        Prefer the QtPdf viewer; builds without the QtPdf module get a text notice.
        """
        try:
            from PyQt6.QtPdf import QPdfDocument  # type: ignore
            from PyQt6.QtPdfWidgets import QPdfView  # type: ignore
        except Exception as e:
            logger.info("QtPdf viewer unavailable: %s", e)
            label = QLabel(
                "This Qt build has no PDF viewer. Use Save to open the file in another application.",
                self,
            )
            label.setWordWrap(True)
            return label

        self._pdf_doc = QPdfDocument(self)
        self._pdf_doc.load(self._buffer)
        view = QPdfView(self)
        view.setPageMode(QPdfView.PageMode.MultiPage)
        view.setDocument(self._pdf_doc)
        return view
