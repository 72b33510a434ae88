from __future__ import annotations

import logging
from pathlib import Path

from PyQt6.QtCore import QSettings

from mdpdf.domain.interfaces import IAppConfig, IFileService, IMarkdownRenderer, ISettingsService
from mdpdf.services.config import build_app_config
from mdpdf.services.export_service import ExportService, build_export_service
from mdpdf.services.exporters.base import ExporterRegistryInst
from mdpdf.services.exporters.html_exporter import HtmlExporter
from mdpdf.services.exporters.pdf_exporter import PdfExporter
from mdpdf.services.file_service import FileService
from mdpdf.services.markdown_renderer import MarkdownRenderer
from mdpdf.services.settings_service import SettingsService
from mdpdf.services.ui.adapters import QtFileDialogService, QtMessageService
from mdpdf.services.ui.main_window import MainWindow
from mdpdf.services.ui.ports.dialogs import IFileDialogService
from mdpdf.services.ui.ports.messages import IMessageService
from mdpdf.utils.constants import APP_NAME, APP_ORG

logger = logging.getLogger(__name__)


class Container:
    """
    Lightweight DI container:
      - Wires default services if not provided
      - Owns the exporter registry and registers the built-in exporters (html, pdf)
      - Builds the main window with everything it needs
    """

    def __init__(
        self,
        renderer: IMarkdownRenderer | None = None,
        files: IFileService | None = None,
        settings: ISettingsService | None = None,
        qsettings: QSettings | None = None,
        dialogs: IFileDialogService | None = None,
        messages: IMessageService | None = None,
        export_service: ExportService | None = None,
        app_config: IAppConfig | None = None,
    ) -> None:
        self.app_config: IAppConfig = app_config or build_app_config()

        # Core services (defaults if not supplied)
        self.renderer: IMarkdownRenderer = renderer or MarkdownRenderer()
        self.file_service: IFileService = files or FileService()
        self.settings_service: ISettingsService = settings or SettingsService(
            qsettings or QSettings()
        )
        self.export_service: ExportService = export_service or build_export_service(
            filename=self.app_config.export_filename()
        )

        # Qt-backed UI ports
        self.dialogs: IFileDialogService = dialogs or QtFileDialogService()
        self.messages: IMessageService = messages or QtMessageService()

        self.exporter_registry = ExporterRegistryInst()
        self._ensure_builtin_exporters()

    @staticmethod
    def default(
        qsettings: QSettings | None = None,
        *,
        organization: str = APP_ORG,
        application: str = APP_NAME,
        app_config: IAppConfig | None = None,
    ) -> Container:
        if qsettings is None:
            qsettings = QSettings(organization, application)
        return Container(qsettings=qsettings, app_config=app_config)

    # ---------- Internals ----------

    def _ensure_builtin_exporters(self) -> None:
        if "html" not in self.exporter_registry:
            self.exporter_registry.register(HtmlExporter(self.renderer))
        if "pdf" not in self.exporter_registry:
            self.exporter_registry.register(PdfExporter(self.export_service, self.file_service))
        logger.debug("Exporters registered: %s", ", ".join(self.exporter_registry.names()))

    # ---------- UI factories ----------

    def build_main_window(
        self,
        *,
        start_path: Path | None = None,
        app_title: str = APP_NAME,
    ) -> MainWindow:
        """
        Create the Qt MainWindow. Page options come from QSettings first,
        then from the [export] section of the config file.
        """
        settings = self.settings_service
        return MainWindow(
            renderer=self.renderer,
            file_service=self.file_service,
            settings=settings,
            export_service=self.export_service,
            exporter_registry=self.exporter_registry,
            messages=self.messages,
            dialogs=self.dialogs,
            start_path=start_path,
            app_title=app_title,
            page_size=settings.get_page_size() or self.app_config.export_page_size(),
            margin=settings.get_margin() or self.app_config.export_margin(),
        )


def build_main_window(
    qsettings: QSettings | None = None,
    *,
    start_path: Path | None = None,
    app_title: str = APP_NAME,
) -> MainWindow:
    """One-call convenience for a ready-to-use window."""
    container = Container.default(qsettings=qsettings)
    return container.build_main_window(start_path=start_path, app_title=app_title)
