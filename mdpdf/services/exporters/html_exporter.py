from __future__ import annotations

from pathlib import Path

from mdpdf.domain.interfaces import IExporter, IMarkdownRenderer
from mdpdf.domain.models import ExportRequest


class HtmlExporter(IExporter):
    name = "html"
    label = "Export HTML…"
    file_ext = "html"

    def __init__(self, renderer: IMarkdownRenderer) -> None:
        self._renderer = renderer

    def export(self, request: ExportRequest, out_path: Path) -> None:
        out_path.write_text(self._renderer.to_html(request.text), encoding="utf-8")
