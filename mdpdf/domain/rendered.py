from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Union

from mdpdf.domain.models import MarginSpec, PageSpec


@dataclass(frozen=True)
class Span:
    """A run of inline text with the formatting inherited from its ancestors."""

    text: str
    bold: bool = False
    italic: bool = False
    strike: bool = False
    code: bool = False
    link: str | None = None


Spans = tuple[Span, ...]


def plain_text(spans: Spans) -> str:
    return "".join(s.text for s in spans)


@dataclass(frozen=True)
class HeadingBlock:
    kind: ClassVar[str] = "heading"

    spans: Spans
    style: str
    level: int | None = None  # None when the source depth was out of range


@dataclass(frozen=True)
class ParagraphBlock:
    kind: ClassVar[str] = "paragraph"

    spans: Spans
    style: str = "paragraph"


@dataclass(frozen=True)
class BlockquoteBlock:
    kind: ClassVar[str] = "blockquote"

    spans: Spans
    style: str = "blockquote"


@dataclass(frozen=True)
class ListBlock:
    kind: ClassVar[str] = "list"

    items: tuple[ListItemBlock, ...]
    ordered: bool = False
    start: int = 1
    indent: int = 0
    style: str = "list"


@dataclass(frozen=True)
class ListItemBlock:
    label: str
    spans: Spans
    children: tuple[ListBlock, ...] = ()
    checked: bool | None = None
    style: str = "listContent"


@dataclass(frozen=True)
class CodeBlock:
    kind: ClassVar[str] = "code"

    text: str
    lang: str | None = None
    style: str = "codeBlock"


@dataclass(frozen=True)
class TableRowBlock:
    cells: tuple[Spans, ...]
    header: bool = False

    @property
    def style(self) -> str:
        return "tableHeaderCell" if self.header else "tableCell"


@dataclass(frozen=True)
class TableBlock:
    kind: ClassVar[str] = "table"

    rows: tuple[TableRowBlock, ...]
    style: str = "table"


@dataclass(frozen=True)
class RuleBlock:
    kind: ClassVar[str] = "rule"

    style: str = "hr"


Block = Union[
    HeadingBlock,
    ParagraphBlock,
    BlockquoteBlock,
    ListBlock,
    CodeBlock,
    TableBlock,
    RuleBlock,
]


@dataclass(frozen=True)
class RenderedDocument:
    """Ordered visual blocks plus the page geometry they are laid out on."""

    blocks: tuple[Block, ...]
    page: PageSpec
    margin: MarginSpec

    @property
    def title(self) -> str:
        for block in self.blocks:
            if isinstance(block, HeadingBlock):
                text = plain_text(block.spans).strip()
                if text:
                    return text
        return "document"
