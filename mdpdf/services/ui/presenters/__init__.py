from __future__ import annotations

from .export_presenter import ExportPresenter, IExportView

__all__ = ["ExportPresenter", "IExportView"]
