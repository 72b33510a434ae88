# mdpdf/services/pdf/serializer.py
from __future__ import annotations

import io
import logging
from xml.sax.saxutils import escape

from reportlab.lib.colors import HexColor
from reportlab.lib.styles import ParagraphStyle
from reportlab.pdfbase.pdfmetrics import stringWidth
from reportlab.platypus import (
    Flowable,
    HRFlowable,
    Paragraph,
    SimpleDocTemplate,
    Spacer,
    Table,
    TableStyle,
    XPreformatted,
)

from mdpdf.domain.interfaces import IDocumentSerializer
from mdpdf.domain.models import PdfArtifact
from mdpdf.domain.rendered import (
    Block,
    BlockquoteBlock,
    CodeBlock,
    HeadingBlock,
    ListBlock,
    ParagraphBlock,
    RenderedDocument,
    RuleBlock,
    Spans,
    TableBlock,
)
from mdpdf.services.pdf.styles import (
    BORDER,
    INLINE_CODE_SIZE,
    LINK,
    LIST_INDENT,
    MONO,
    STYLE_SHEET,
    paragraph_styles,
)
from mdpdf.utils.constants import APP_NAME, DEFAULT_FILENAME

logger = logging.getLogger(__name__)

# base-14 fonts only cover the WinAnsi code page
_PDF_ENCODING = "cp1252"
# SimpleDocTemplate's frame pads its content on each side
_FRAME_PADDING = 6


def pdf_safe(text: str) -> str:
    return text.encode(_PDF_ENCODING, "replace").decode(_PDF_ENCODING)


def spans_to_markup(spans: Spans) -> str:
    """Render spans as reportlab paragraph markup."""
    parts: list[str] = []
    for span in spans:
        text = escape(pdf_safe(span.text)).replace("\n", "<br/>")
        if not text:
            continue
        if span.code:
            text = f'<font face="{MONO}" size="{INLINE_CODE_SIZE}">{text}</font>'
        if span.bold:
            text = f"<b>{text}</b>"
        if span.italic:
            text = f"<i>{text}</i>"
        if span.strike:
            text = f"<strike>{text}</strike>"
        if span.link:
            href = escape(pdf_safe(span.link), {'"': "&quot;"})
            text = f'<link href="{href}" color="{LINK}">{text}</link>'
        elif span.link is not None:
            text = f'<font color="{LINK}">{text}</font>'
        parts.append(text)
    return "".join(parts)


class ReportLabSerializer(IDocumentSerializer):
    """
    Serializes a RenderedDocument to PDF with reportlab's platypus layout engine.

    Every block flows onto later pages: quotes and list items are paragraphs,
    and a table cell taller than a page continues in extra rows. Output is built
    with `invariant=1`, so identical documents give byte-identical files.
    """

    def __init__(self, *, compress: bool = True) -> None:
        self._compress = compress

    def serialize(self, document: RenderedDocument, *, filename: str = DEFAULT_FILENAME) -> PdfArtifact:
        buf = io.BytesIO()
        margin = document.margin.points
        template = SimpleDocTemplate(
            buf,
            pagesize=document.page.points,
            leftMargin=margin,
            rightMargin=margin,
            topMargin=margin,
            bottomMargin=margin,
            title=pdf_safe(document.title),
            creator=APP_NAME,
            invariant=1,
            pageCompression=1 if self._compress else 0,
        )
        width = template.width - 2 * _FRAME_PADDING
        height = template.height - 2 * _FRAME_PADDING

        story = _StoryBuilder(width, height).build(document.blocks)
        if not story:
            # an empty document still gets one blank page
            story = [Spacer(1, 1)]
        template.build(story)

        data = buf.getvalue()
        logger.debug(
            "Serialized %d block(s) to %d page(s) on %s", len(document.blocks), template.page, document.page.label
        )
        return PdfArtifact(data=data, page_count=template.page, filename=filename)


class _QuoteParagraph(Paragraph):
    """Paragraph with a left accent rule; every page fragment draws its own rule."""

    rule_width = 2.5
    rule_color = BORDER

    def draw(self) -> None:
        canv = self.canv
        canv.saveState()
        canv.setStrokeColor(HexColor(self.rule_color))
        canv.setLineWidth(self.rule_width)
        x = self.rule_width / 2
        canv.line(x, 0, x, self.height)
        canv.restoreState()
        super().draw()


class _StoryBuilder:
    def __init__(self, width: float, height: float) -> None:
        self.width = width
        self.height = height
        self.styles = paragraph_styles()
        self._derived: dict[tuple, ParagraphStyle] = {}

    def build(self, blocks: tuple[Block, ...]) -> list[Flowable]:
        story: list[Flowable] = []
        for block in blocks:
            story.extend(self._block(block))
        return story

    def _block(self, block: Block) -> list[Flowable]:
        if isinstance(block, HeadingBlock):
            return self._heading(block)
        if isinstance(block, ParagraphBlock):
            return [Paragraph(spans_to_markup(block.spans), self.styles[block.style])]
        if isinstance(block, BlockquoteBlock):
            return [self._blockquote(block)]
        if isinstance(block, ListBlock):
            return self._list(block)
        if isinstance(block, CodeBlock):
            text = escape(pdf_safe(block.text))
            return [XPreformatted(text, self.styles[block.style])]
        if isinstance(block, TableBlock):
            return self._table(block)
        if isinstance(block, RuleBlock):
            spec = STYLE_SHEET[block.style]
            return [
                HRFlowable(
                    width="100%",
                    thickness=spec.rule_below,
                    color=HexColor(spec.rule_color),
                    spaceBefore=spec.space_before,
                    spaceAfter=spec.space_after,
                )
            ]
        return []

    def _heading(self, block: HeadingBlock) -> list[Flowable]:
        spec = STYLE_SHEET[block.style]
        out: list[Flowable] = [Paragraph(spans_to_markup(block.spans), self.styles[block.style])]
        if spec.rule_below:
            out.append(
                HRFlowable(
                    width="100%",
                    thickness=spec.rule_below,
                    color=HexColor(spec.rule_color),
                    spaceBefore=0,
                    spaceAfter=spec.space_after,
                )
            )
        return out

    def _derive(self, base: str, **overrides) -> ParagraphStyle:
        key = (base, *sorted(overrides.items()))
        style = self._derived.get(key)
        if style is None:
            style = ParagraphStyle(f"{base}-{len(self._derived)}", parent=self.styles[base], **overrides)
            self._derived[key] = style
        return style

    def _blockquote(self, block: BlockquoteBlock) -> Flowable:
        spec = STYLE_SHEET[block.style]
        style = self._derive(block.style, leftIndent=spec.padding)
        return _QuoteParagraph(spans_to_markup(block.spans), style)

    def _list(self, block: ListBlock) -> list[Flowable]:
        """One bulleted paragraph per item; nested lists follow their item."""
        label_style = self.styles["listLabel"]
        out: list[Flowable] = []
        # deep nesting stops indenting at half the text width
        offset = min(block.indent * LIST_INDENT, self.width / 2)
        for item in block.items:
            label = pdf_safe(item.label)
            label_width = max(
                18 if block.ordered else 15,
                stringWidth(label, label_style.fontName, label_style.fontSize) + 4,
            )
            style = self._derive(
                item.style,
                leftIndent=offset + label_width,
                bulletIndent=offset,
                bulletFontName=label_style.fontName,
                bulletFontSize=label_style.fontSize,
                bulletColor=label_style.textColor,
            )
            # a non-breaking space keeps the label of an empty item
            markup = spans_to_markup(item.spans) or "&#160;"
            out.append(Paragraph(markup, style, bulletText=label))
            for nested in item.children:
                out.extend(self._list(nested))
        if out and block.indent == 0:
            out.append(Spacer(1, STYLE_SHEET[block.style].space_after))
        return out

    def _cell_chunks(self, cell: Paragraph, width: float, limit: float) -> list[Paragraph]:
        """Split a cell taller than `limit` into pieces that each fit."""
        chunks: list[Paragraph] = []
        while True:
            _, h = cell.wrap(width, self.height)
            if h <= limit:
                chunks.append(cell)
                return chunks
            parts = cell.split(width, limit)
            if len(parts) < 2:
                chunks.append(cell)
                return chunks
            chunks.append(parts[0])
            cell = parts[1]

    def _table(self, block: TableBlock) -> list[Flowable]:
        columns = max((len(row.cells) for row in block.rows), default=0)
        if columns == 0:
            return []
        spec = STYLE_SHEET[block.style]
        header = STYLE_SHEET["tableHeaderCell"]
        col_width = self.width / columns
        # header and one body row must share a page
        limit = self.height / 3 - 2 * spec.padding

        data = []
        header_rows = 0
        for index, row in enumerate(block.rows):
            style = self.styles[row.style]
            cells = [Paragraph(spans_to_markup(spans), style) for spans in row.cells]
            cells.extend(Paragraph("", style) for _ in range(columns - len(cells)))
            # a row too tall for a page continues in the rows below it
            pieces = [self._cell_chunks(c, col_width - 2 * spec.padding, limit) for c in cells]
            depth = max(len(p) for p in pieces)
            for k in range(depth):
                data.append([p[k] if k < len(p) else Paragraph("", style) for p in pieces])
            if index == 0 and row.header:
                header_rows = depth

        commands = [
            ("GRID", (0, 0), (-1, -1), 1, HexColor(BORDER)),
            ("VALIGN", (0, 0), (-1, -1), "TOP"),
            ("LEFTPADDING", (0, 0), (-1, -1), spec.padding),
            ("RIGHTPADDING", (0, 0), (-1, -1), spec.padding),
            ("TOPPADDING", (0, 0), (-1, -1), spec.padding),
            ("BOTTOMPADDING", (0, 0), (-1, -1), spec.padding),
        ]
        if header_rows:
            commands.append(("BACKGROUND", (0, 0), (-1, header_rows - 1), HexColor(header.background)))

        table = Table(data, colWidths=[col_width] * columns, repeatRows=1 if header_rows else 0)
        table.setStyle(TableStyle(commands))
        table.spaceBefore = spec.space_before
        table.spaceAfter = spec.space_after
        return [table]
