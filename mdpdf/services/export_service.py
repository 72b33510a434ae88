# mdpdf/services/export_service.py
from __future__ import annotations

import logging

from mdpdf.domain.errors import ExportError, ExportPreconditionError
from mdpdf.domain.interfaces import IDocumentRenderer, IDocumentSerializer, IMarkdownParser
from mdpdf.domain.models import PdfArtifact
from mdpdf.domain.rendered import RenderedDocument
from mdpdf.services.document_renderer import DocumentRenderer
from mdpdf.services.markdown_parser import MarkdownParser
from mdpdf.services.pdf.serializer import ReportLabSerializer
from mdpdf.utils.constants import DEFAULT_FILENAME

logger = logging.getLogger(__name__)


class ExportService:
    """
    Markdown text -> document tree -> rendered blocks -> PDF artifact.

    Every call builds its own tree and document, so nothing is shared between
    exports. A call yields one complete artifact or raises ExportError.
    """

    def __init__(
        self,
        parser: IMarkdownParser,
        renderer: IDocumentRenderer,
        serializer: IDocumentSerializer,
        *,
        filename: str = DEFAULT_FILENAME,
    ) -> None:
        self.parser = parser
        self.renderer = renderer
        self.serializer = serializer
        self.filename = filename

    def build_document(
        self, markdown_text: str, *, page_size: str | None = None, margin: str | None = None
    ) -> RenderedDocument:
        tree = self.parser.parse(markdown_text)
        return self.renderer.render(tree, page_size=page_size, margin=margin)

    def export(
        self,
        markdown_text: str | None,
        *,
        page_size: str | None = None,
        margin: str | None = None,
        filename: str | None = None,
    ) -> PdfArtifact:
        if markdown_text is None:
            raise ExportPreconditionError("There is no Markdown text to export.")

        logger.info(
            "Exporting PDF (page=%s, margin=%s, %d chars)", page_size, margin, len(markdown_text)
        )
        try:
            document = self.build_document(markdown_text, page_size=page_size, margin=margin)
            artifact = self.serializer.serialize(document, filename=filename or self.filename)
        except ExportError:
            raise
        except Exception as e:
            logger.exception("PDF export failed")
            raise ExportError(f"Failed to export PDF: {e}") from e

        logger.info("Exported %s: %d page(s), %d bytes", artifact.filename, artifact.page_count, len(artifact))
        return artifact


def build_export_service(*, filename: str = DEFAULT_FILENAME, compress: bool = True) -> ExportService:
    """Default pipeline: markdown-it parser, tree renderer, reportlab serializer."""
    return ExportService(
        MarkdownParser(),
        DocumentRenderer(),
        ReportLabSerializer(compress=compress),
        filename=filename,
    )
