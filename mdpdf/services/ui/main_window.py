from __future__ import annotations

import logging
from pathlib import Path

from PyQt6.QtCore import QByteArray, Qt
from PyQt6.QtGui import QAction, QKeySequence
from PyQt6.QtWidgets import (
    QApplication,
    QComboBox,
    QLabel,
    QMainWindow,
    QMenu,
    QSplitter,
    QStatusBar,
    QTextBrowser,
    QTextEdit,
    QToolBar,
)

from mdpdf.domain.interfaces import (
    IExporterRegistry,
    IFileService,
    IMarkdownRenderer,
    ISettingsService,
)
from mdpdf.domain.models import Document, PdfArtifact
from mdpdf.services.export_service import ExportService
from mdpdf.services.exporters.base import ExporterRegistryInst
from mdpdf.services.pdf.page_setup import MARGIN_PRESETS, PAGE_SIZES, resolve_margin, resolve_page
from mdpdf.services.ui.adapters import QtFileDialogService, QtMessageService
from mdpdf.services.ui.pdf_preview_dialog import PdfPreviewDialog
from mdpdf.services.ui.ports.dialogs import IFileDialogService
from mdpdf.services.ui.ports.messages import IMessageService
from mdpdf.services.ui.presenters.export_presenter import ExportPresenter
from mdpdf.utils.constants import MAX_RECENTS, SAMPLE_MARKDOWN

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    """Thin PyQt window: editor, live preview and page options; exports go through the presenter."""

    def __init__(
        self,
        renderer: IMarkdownRenderer,
        file_service: IFileService,
        settings: ISettingsService,
        export_service: ExportService,
        *,
        exporter_registry: IExporterRegistry | None = None,
        messages: IMessageService | None = None,
        dialogs: IFileDialogService | None = None,
        start_path: Path | None = None,
        app_title: str = "PyMarkdownPdf",
        page_size: str | None = None,
        margin: str | None = None,
    ) -> None:
        super().__init__()
        self.app_title = app_title
        self.setWindowTitle(app_title)
        self.resize(1100, 700)

        self.renderer = renderer
        self.file_service = file_service
        self.settings = settings
        self.messages = messages or QtMessageService()
        self.dialogs = dialogs or QtFileDialogService()
        self._exporters = exporter_registry or ExporterRegistryInst()

        self.presenter = ExportPresenter(
            view=self,
            export_service=export_service,
            files=file_service,
            messages=self.messages,
            dialogs=self.dialogs,
            parent=self,
        )

        self.doc = Document(path=None, text=SAMPLE_MARKDOWN, modified=False)
        self.recents: list[str] = self.settings.get_recent()

        # Widgets
        self.editor = QTextEdit(self)
        self.editor.setAcceptRichText(False)
        self.editor.setTabStopDistance(4 * self.editor.fontMetrics().horizontalAdvance(" "))
        self.editor.setPlainText(self.doc.text)

        self.preview = self._create_preview_widget()

        # Draggable divider between editor and preview
        self.splitter = QSplitter(self)
        self.splitter.setOrientation(Qt.Orientation.Horizontal)
        self.splitter.addWidget(self.editor)
        self.splitter.addWidget(self.preview)
        self.splitter.setStretchFactor(0, 1)
        self.splitter.setStretchFactor(1, 1)
        self.setCentralWidget(self.splitter)

        self.page_combo = QComboBox(self)
        for spec in PAGE_SIZES.values():
            self.page_combo.addItem(spec.label, spec.key)
        self.margin_combo = QComboBox(self)
        for spec in MARGIN_PRESETS.values():
            self.margin_combo.addItem(f"{spec.label} ({spec.mm:g} mm)", spec.key)
        self._select_combo(self.page_combo, resolve_page(page_size or settings.get_page_size()).key)
        self._select_combo(self.margin_combo, resolve_margin(margin or settings.get_margin()).key)
        self.page_combo.currentIndexChanged.connect(self._on_page_options_changed)
        self.margin_combo.currentIndexChanged.connect(self._on_page_options_changed)

        # Signals
        self.editor.textChanged.connect(self._on_text_changed)

        # UI
        self._build_actions()
        self._build_toolbar()
        self._build_menu()
        self.setStatusBar(QStatusBar(self))

        # Restore UI state
        geo = self.settings.get_geometry()
        if isinstance(geo, (bytes, bytearray)):
            self.restoreGeometry(QByteArray(geo))
        split = self.settings.get_splitter()
        if isinstance(split, (bytes, bytearray)):
            self.splitter.restoreState(QByteArray(split))

        # Load starting content
        if start_path:
            self._open_path(start_path)
        else:
            self._render_preview()
        self._update_title()

        # DnD
        self.setAcceptDrops(True)

    # ---------- IExportView ----------
    def get_editor_text(self) -> str:
        return self.editor.toPlainText()

    def page_size_key(self) -> str:
        return str(self.page_combo.currentData())

    def margin_key(self) -> str:
        return str(self.margin_combo.currentData())

    def suggested_filename(self, ext: str) -> str:
        if self.doc.path:
            return self.doc.path.with_suffix(f".{ext}").name
        return f"document.{ext}"

    def set_export_enabled(self, enabled: bool) -> None:
        self.act_preview_pdf.setEnabled(enabled)
        for a in self.export_actions:
            a.setEnabled(enabled)
        if not enabled:
            self.statusBar().showMessage("Exporting…")
        # keep the window responsive while the export runs
        QApplication.processEvents()

    def show_status(self, text: str, msec: int = 3000) -> None:
        self.statusBar().showMessage(text, msec)

    def show_pdf_preview(self, artifact: PdfArtifact) -> None:
        dlg = PdfPreviewDialog(artifact, self, on_save=self.presenter.save_artifact)
        dlg.exec()

    # ---------- UI creation ----------
    def _build_actions(self):
        self.exit_action = QAction("&Exit", self)
        self.exit_action.setShortcut("Ctrl+Q")
        self.exit_action.setStatusTip("Exit application")
        self.exit_action.triggered.connect(QApplication.instance().quit)

        # File actions
        self.act_new = QAction(
            "New", self, shortcut=QKeySequence.StandardKey.New, triggered=self._new_file
        )
        self.act_open = QAction(
            "Open…",
            self,
            shortcut=QKeySequence.StandardKey.Open,
            triggered=self._open_dialog,
        )
        self.act_save = QAction(
            "Save", self, shortcut=QKeySequence.StandardKey.Save, triggered=self._save
        )
        self.act_save_as = QAction(
            "Save As…",
            self,
            shortcut=QKeySequence.StandardKey.SaveAs,
            triggered=self._save_as,
        )
        self.act_preview_pdf = QAction(
            "Preview PDF…",
            self,
            shortcut=QKeySequence.StandardKey.Print,
            triggered=lambda: self.presenter.preview_pdf(),
        )
        self.act_toggle_wrap = QAction(
            "Toggle Wrap",
            self,
            checkable=True,
            checked=True,
            triggered=self._toggle_wrap,
        )
        self.act_toggle_preview = QAction(
            "Toggle Preview",
            self,
            checkable=True,
            checked=True,
            triggered=self._toggle_preview,
        )

        # Export actions from registry
        self.export_actions: list[QAction] = []
        for exporter in self._exporters.all():
            act = QAction(
                exporter.label,
                self,
                triggered=lambda chk=False, e=exporter: self.presenter.export_with(e),
            )
            self.export_actions.append(act)

        self.recent_menu = QMenu("Open Recent", self)

    def _build_toolbar(self):
        tb = QToolBar("Main", self)
        tb.setMovable(False)
        for a in (self.act_new, self.act_open, self.act_save, self.act_save_as):
            tb.addAction(a)
        tb.addSeparator()

        tb.addWidget(QLabel(" Page size: ", self))
        tb.addWidget(self.page_combo)
        tb.addWidget(QLabel(" Margin: ", self))
        tb.addWidget(self.margin_combo)
        tb.addSeparator()

        tb.addAction(self.act_preview_pdf)
        for a in self.export_actions:
            tb.addAction(a)
        tb.addSeparator()

        tb.addAction(self.act_toggle_wrap)
        tb.addAction(self.act_toggle_preview)
        self.addToolBar(tb)

    def _build_menu(self):
        m = self.menuBar()
        filem = m.addMenu("&File")
        filem.addAction(self.act_new)
        filem.addAction(self.act_open)
        filem.addMenu(self.recent_menu)
        filem.addSeparator()
        filem.addAction(self.act_save)
        filem.addAction(self.act_save_as)
        filem.addSeparator()

        filem.addAction(self.act_preview_pdf)
        for a in self.export_actions:
            filem.addAction(a)
        filem.addSeparator()

        filem.addAction(self.exit_action)
        self._refresh_recent_menu()

        viewm = m.addMenu("&View")
        viewm.addAction(self.act_toggle_wrap)
        viewm.addAction(self.act_toggle_preview)

    def _refresh_recent_menu(self):
        self.recent_menu.clear()
        if not self.recents:
            na = QAction("(empty)", self)
            na.setEnabled(False)
            self.recent_menu.addAction(na)
            return
        for p in self.recents[:MAX_RECENTS]:
            self.recent_menu.addAction(
                QAction(p, self, triggered=lambda chk=False, x=p: self._open_path(Path(x)))
            )

    # ---------- Actions ----------
    def _new_file(self):
        if not self._confirm_discard():
            return
        self.editor.blockSignals(True)
        self.editor.setPlainText("")
        self.editor.blockSignals(False)
        self.doc = Document(path=None, text="", modified=False)
        self._update_title()
        self._render_preview()

    def _open_dialog(self):
        path = self.dialogs.get_open_file(
            self,
            "Open Markdown",
            "",
            "Markdown (*.md *.markdown *.mdown);;Text (*.txt);;All files (*)",
        )
        if path:
            self._open_path(path)

    def _open_path(self, path: Path):
        if not self._confirm_discard():
            return
        try:
            text = self.file_service.read_text(path)
        except (OSError, UnicodeDecodeError) as e:
            self.messages.error(self, "Open Error", f"Failed to open file:\n{e}")
            return
        self.editor.blockSignals(True)
        self.editor.setPlainText(text)
        self.editor.blockSignals(False)
        self.doc = Document(path=path, text=text, modified=False)
        self._update_title()
        self._render_preview()
        self._add_recent(path)

    def _save(self):
        if self.doc.path is None:
            self._save_as()
            return
        self._write_to(self.doc.path)

    def _save_as(self):
        start = str(self.doc.path) if self.doc.path else ""
        path = self.dialogs.get_save_file(self, "Save As", start, "Markdown (*.md);;All files (*)")
        if not path:
            return
        if self._write_to(path):
            self.doc.path = path
            self._update_title()
            self._add_recent(path)

    def _write_to(self, path: Path) -> bool:
        try:
            self.file_service.write_text_atomic(path, self.editor.toPlainText())
        except OSError as e:
            self.messages.error(self, "Save Error", f"Failed to save file:\n{e}")
            return False
        self.doc.modified = False
        self._update_title()
        self.statusBar().showMessage(f"Saved: {path}", 3000)
        return True

    def _toggle_wrap(self, on: bool):
        mode = QTextEdit.LineWrapMode.WidgetWidth if on else QTextEdit.LineWrapMode.NoWrap
        self.editor.setLineWrapMode(mode)

    def _toggle_preview(self, on: bool):
        self.preview.setVisible(on)

    # ---------- Helpers ----------
    def _render_preview(self):
        html = self.renderer.to_html(self.editor.toPlainText())
        self.preview.setHtml(html)

    def _on_text_changed(self):
        self.doc.text = self.editor.toPlainText()
        self.doc.modified = True
        self._update_title()
        self._render_preview()

    def _on_page_options_changed(self, _index: int = 0):
        self.settings.set_page_size(self.page_size_key())
        self.settings.set_margin(self.margin_key())

    def _update_title(self):
        name = self.doc.path.name if self.doc.path else "Untitled"
        star = " •" if self.doc.modified else ""
        self.setWindowTitle(f"{name}{star} — {self.app_title}")

    def _confirm_discard(self) -> bool:
        if not self.doc.modified:
            return True
        return self.messages.ask(self, "Discard changes?", "You have unsaved changes. Discard them?")

    def _add_recent(self, path: Path):
        s = str(path)
        if s in self.recents:
            self.recents.remove(s)
        self.recents.insert(0, s)
        self.recents = self.recents[:MAX_RECENTS]
        self.settings.set_recent(self.recents)
        self._refresh_recent_menu()

    @staticmethod
    def _select_combo(combo: QComboBox, key: str) -> None:
        index = combo.findData(key)
        if index >= 0:
            combo.setCurrentIndex(index)

    # ---------- DnD ----------
    def dragEnterEvent(self, e):
        if e.mimeData().hasUrls():
            e.acceptProposedAction()

    def dropEvent(self, e):
        urls = e.mimeData().urls()
        if not urls:
            return
        local = urls[0].toLocalFile()
        if local:
            self._open_path(Path(local))

    # ---------- Close ----------
    def closeEvent(self, event):
        self.presenter.release_artifact()
        self.settings.set_geometry(bytes(self.saveGeometry()))
        self.settings.set_splitter(bytes(self.splitter.saveState()))
        super().closeEvent(event)

    # ---------- Internal: preview creation ----------
    def _create_preview_widget(self):
        """
        Prefer QWebEngineView (better CSS), fall back to QTextBrowser.
        The import is guarded so the app runs even if Qt WebEngine isn't installed.
        """
        try:
            from PyQt6.QtWebEngineWidgets import QWebEngineView  # type: ignore

            logger.debug("Using QWebEngineView for the preview")
            return QWebEngineView(self)
        except Exception as e:
            logger.debug("QWebEngineView unavailable (%s); using QTextBrowser", e)
            w = QTextBrowser(self)
            w.setOpenExternalLinks(True)
            return w
