from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

# Node kinds produced by the parser. The renderer accepts anything else too.
ROOT = "root"
TEXT = "text"
STRONG = "strong"
EMPHASIS = "emphasis"
DELETE = "delete"
LINK = "link"
INLINE_CODE = "inlineCode"
BREAK = "break"
HTML = "html"
IMAGE = "image"
HEADING = "heading"
PARAGRAPH = "paragraph"
BLOCKQUOTE = "blockquote"
LIST = "list"
LIST_ITEM = "listItem"
CODE = "code"
TABLE = "table"
TABLE_ROW = "tableRow"
TABLE_CELL = "tableCell"
THEMATIC_BREAK = "thematicBreak"


@dataclass
class Node:
    """One node of the parsed Markdown document tree."""

    type: str
    children: list[Node] = field(default_factory=list)
    value: str | None = None
    depth: int | None = None
    ordered: bool | None = None
    start: int | None = None
    lang: str | None = None
    url: str | None = None
    checked: bool | None = None


def node_attr(node: Node | Mapping[str, Any], name: str, default: Any = None) -> Any:
    """Read an attribute from a Node or from a plain mapping with the same keys."""
    if isinstance(node, Mapping):
        value = node.get(name, default)
    else:
        value = getattr(node, name, default)
    return default if value is None else value


def node_children(node: Node | Mapping[str, Any]) -> list[Any]:
    children = node_attr(node, "children", None)
    return list(children) if children else []
