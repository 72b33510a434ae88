# mdpdf/services/document_renderer.py
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, replace
from typing import Any

from mdpdf.domain import tree as t
from mdpdf.domain.interfaces import IDocumentRenderer
from mdpdf.domain.rendered import (
    Block,
    BlockquoteBlock,
    CodeBlock,
    HeadingBlock,
    ListBlock,
    ListItemBlock,
    ParagraphBlock,
    RenderedDocument,
    RuleBlock,
    Span,
    Spans,
    TableBlock,
    TableRowBlock,
)
from mdpdf.domain.tree import node_attr, node_children
from mdpdf.services.pdf.page_setup import resolve_margin, resolve_page
from mdpdf.services.pdf.styles import BULLET, heading_style

_NEWLINE = Span("\n")


@dataclass(frozen=True)
class _Marks:
    """Formatting inherited from inline ancestors."""

    bold: bool = False
    italic: bool = False
    strike: bool = False
    link: str | None = None

    def span(self, text: str, *, code: bool = False) -> Span:
        return Span(
            text,
            bold=self.bold,
            italic=self.italic,
            strike=self.strike,
            code=code,
            link=self.link,
        )


class DocumentRenderer(IDocumentRenderer):
    """
    Walks a document tree and maps every top-level node onto one styled block.

    Pure: the same tree, page size and margin always give an equal RenderedDocument.
    Missing fields degrade to empty content instead of raising.
    """

    def render(
        self,
        tree: t.Node | Mapping[str, Any],
        *,
        page_size: str | None = None,
        margin: str | None = None,
    ) -> RenderedDocument:
        blocks: list[Block] = []
        for node in node_children(tree):
            block = self.render_block(node)
            if block is not None:
                blocks.append(block)
        return RenderedDocument(
            blocks=tuple(blocks),
            page=resolve_page(page_size),
            margin=resolve_margin(margin),
        )

    # -------------------- blocks --------------------

    def render_block(self, node: Any) -> Block | None:
        kind = node_attr(node, "type", "")

        if kind == t.HEADING:
            style, level = heading_style(node_attr(node, "depth"))
            return HeadingBlock(spans=self.render_inline(node_children(node)), style=style, level=level)

        if kind == t.PARAGRAPH:
            return ParagraphBlock(spans=self.render_inline(node_children(node)))

        if kind == t.BLOCKQUOTE:
            return BlockquoteBlock(spans=self._paragraph_spans(node))

        if kind == t.LIST:
            return self._render_list(node, indent=0)

        if kind == t.CODE:
            return CodeBlock(text=str(node_attr(node, "value", "")), lang=node_attr(node, "lang"))

        if kind == t.TABLE:
            return self._render_table(node)

        if kind == t.THEMATIC_BREAK:
            return RuleBlock()

        return None

    def _render_list(self, node: Any, *, indent: int) -> ListBlock:
        ordered = bool(node_attr(node, "ordered", False))
        start = node_attr(node, "start", 1)
        if not isinstance(start, int) or isinstance(start, bool):
            start = 1

        counter = start
        items: list[ListItemBlock] = []
        for item in node_children(node):
            if ordered:
                label = f"{counter}."
                counter += 1
            else:
                label = BULLET

            checked = node_attr(item, "checked")
            spans = self._paragraph_spans(item)
            if checked is not None:
                spans = (Span("[x] " if checked else "[ ] "),) + spans

            nested = tuple(
                self._render_list(child, indent=indent + 1)
                for child in node_children(item)
                if node_attr(child, "type") == t.LIST
            )
            items.append(ListItemBlock(label=label, spans=spans, children=nested, checked=checked))

        return ListBlock(items=tuple(items), ordered=ordered, start=start, indent=indent)

    def _render_table(self, node: Any) -> TableBlock:
        rows: list[TableRowBlock] = []
        for index, row in enumerate(node_children(node)):
            cells = tuple(self.render_inline(node_children(cell)) for cell in node_children(row))
            rows.append(TableRowBlock(cells=cells, header=index == 0))
        return TableBlock(rows=tuple(rows))

    def _paragraph_spans(self, node: Any) -> Spans:
        """Inline content of the direct paragraph children, one line per paragraph."""
        out: list[Span] = []
        for child in node_children(node):
            if node_attr(child, "type") != t.PARAGRAPH:
                continue
            if out:
                out.append(_NEWLINE)
            out.extend(self.render_inline(node_children(child)))
        return tuple(out)

    # -------------------- inline --------------------

    def render_inline(self, nodes: list[Any], marks: _Marks = _Marks()) -> Spans:
        out: list[Span] = []
        for node in nodes:
            out.extend(self._inline(node, marks))
        return tuple(out)

    def _inline(self, node: Any, marks: _Marks) -> Spans:
        kind = node_attr(node, "type", "")
        children = node_children(node)

        if kind == t.TEXT:
            return (marks.span(str(node_attr(node, "value", ""))),)
        if kind == t.STRONG:
            return self.render_inline(children, replace(marks, bold=True))
        if kind == t.EMPHASIS:
            return self.render_inline(children, replace(marks, italic=True))
        if kind == t.DELETE:
            return self.render_inline(children, replace(marks, strike=True))
        if kind == t.LINK:
            return self.render_inline(children, replace(marks, link=str(node_attr(node, "url", ""))))
        if kind == t.INLINE_CODE:
            return (marks.span(str(node_attr(node, "value", "")), code=True),)
        if kind == t.BREAK:
            return (marks.span("\n"),)

        value = node_attr(node, "value")
        if value:
            return (marks.span(str(value)),)
        if children:
            return self.render_inline(children, marks)
        return ()
