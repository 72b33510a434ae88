# mdpdf/services/markdown_parser.py
from __future__ import annotations

from markdown_it import MarkdownIt
from markdown_it.tree import SyntaxTreeNode
from mdit_py_plugins.tasklists import tasklists_plugin

from mdpdf.domain import tree as t
from mdpdf.domain.interfaces import IMarkdownParser
from mdpdf.domain.tree import Node

# markdown-it node types that map one-to-one onto a tree node kind
_CONTAINERS = {
    "strong": t.STRONG,
    "em": t.EMPHASIS,
    "s": t.DELETE,
    "paragraph": t.PARAGRAPH,
    "blockquote": t.BLOCKQUOTE,
    "list_item": t.LIST_ITEM,
    "tr": t.TABLE_ROW,
    "th": t.TABLE_CELL,
    "td": t.TABLE_CELL,
}

# wrappers whose children are spliced into the parent
_TRANSPARENT = {"inline", "thead", "tbody"}


class MarkdownParser(IMarkdownParser):
    """
    CommonMark + GFM tables, strikethrough and task lists via markdown-it-py.

    The markdown-it syntax tree is folded into `Node`s: inline wrappers and table
    sections disappear, fences become `code` leaves, list numbering and task
    state become attributes.
    """

    def __init__(self) -> None:
        self._md = (
            MarkdownIt("commonmark", {"html": True})
            .enable(["table", "strikethrough"])
            .use(tasklists_plugin)
        )

    def parse(self, markdown_text: str) -> Node:
        tokens = self._md.parse(markdown_text or "")
        root = Node(type=t.ROOT)
        root.children = self._convert_children(SyntaxTreeNode(tokens))
        return root

    # -------------------- helpers --------------------

    def _convert_children(self, node: SyntaxTreeNode) -> list[Node]:
        out: list[Node] = []
        for child in node.children:
            if child.type in _TRANSPARENT:
                out.extend(self._convert_children(child))
                continue
            converted = self._convert(child)
            if converted is not None:
                out.append(converted)
        return out

    def _convert(self, node: SyntaxTreeNode) -> Node | None:
        kind = node.type

        if kind in _CONTAINERS:
            converted = Node(type=_CONTAINERS[kind], children=self._convert_children(node))
            if kind == "list_item" and "task-list-item" in str(node.attrs.get("class", "")):
                converted.checked = _take_checkbox(converted)
            return converted

        if kind == "text":
            return Node(type=t.TEXT, value=node.content)
        if kind == "softbreak":
            return Node(type=t.TEXT, value="\n")
        if kind == "hardbreak":
            return Node(type=t.BREAK)
        if kind == "code_inline":
            return Node(type=t.INLINE_CODE, value=node.content)
        if kind in ("html_inline", "html_block"):
            return Node(type=t.HTML, value=node.content)
        if kind == "link":
            return Node(
                type=t.LINK,
                url=str(node.attrs.get("href", "")),
                children=self._convert_children(node),
            )
        if kind == "image":
            return Node(type=t.IMAGE, url=str(node.attrs.get("src", "")))
        if kind == "heading":
            return Node(
                type=t.HEADING,
                depth=int(node.tag[1:]),
                children=self._convert_children(node),
            )
        if kind in ("bullet_list", "ordered_list"):
            ordered = kind == "ordered_list"
            return Node(
                type=t.LIST,
                ordered=ordered,
                start=int(node.attrs.get("start", 1)) if ordered else None,
                children=self._convert_children(node),
            )
        if kind in ("fence", "code_block"):
            info = (node.info or "").strip()
            return Node(
                type=t.CODE,
                value=_strip_final_newline(node.content),
                lang=info.split()[0] if info else None,
            )
        if kind == "table":
            return Node(type=t.TABLE, children=self._convert_children(node))
        if kind == "hr":
            return Node(type=t.THEMATIC_BREAK)

        # Anything a plugin adds later keeps its content, and children if it has any.
        return Node(
            type=kind,
            value=node.content or None,
            children=self._convert_children(node),
        )


def _strip_final_newline(text: str) -> str:
    return text[:-1] if text.endswith("\n") else text


def _take_checkbox(item: Node) -> bool | None:
    """Remove the checkbox HTML the task-list plugin injected and return its state."""
    if not item.children or item.children[0].type != t.PARAGRAPH:
        return None
    para = item.children[0]
    for i, child in enumerate(para.children):
        if child.type == t.HTML and "task-list-item-checkbox" in (child.value or ""):
            del para.children[i]
            if i < len(para.children) and para.children[i].type == t.TEXT:
                para.children[i].value = (para.children[i].value or "").lstrip()
            return 'checked="checked"' in (child.value or "")
    return None
