"""
Fixed PDF style sheet.

GitHub's Markdown CSS scaled to a 10pt body (factor 0.625 from the 16px web base),
expressed with the base-14 PDF fonts so no font files have to be embedded.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType

from reportlab.lib.colors import HexColor
from reportlab.lib.styles import ParagraphStyle

FG = "#1f2328"
MUTED = "#59636e"
BORDER = "#d1d9e0"
CODE_BG = "#f6f8fa"
LINK = "#0969da"

SANS = "Helvetica"
SANS_BOLD = "Helvetica-Bold"
MONO = "Courier"


@dataclass(frozen=True)
class StyleSpec:
    font: str = SANS
    size: float = 10
    line_height: float = 1.5  # multiple of size
    color: str = FG
    space_before: float = 0
    space_after: float = 0
    background: str | None = None
    padding: float = 0
    rule_below: float = 0  # thickness of an underline rule, 0 for none
    rule_color: str = BORDER


def _heading(size: float, *, top: float = 15, rule: float = 0, color: str = FG) -> StyleSpec:
    return StyleSpec(
        font=SANS_BOLD,
        size=size,
        line_height=1.25,
        color=color,
        space_before=top,
        space_after=10,
        padding=3 if rule else 0,
        rule_below=rule,
    )


STYLE_SHEET: MappingProxyType[str, StyleSpec] = MappingProxyType(
    {
        "h1": _heading(20, top=0, rule=1),
        "h2": _heading(15, rule=1),
        "h3": _heading(12.5),
        "h4": _heading(10),
        "h5": _heading(8.75),
        "h6": _heading(8.5, color=MUTED),
        "paragraph": StyleSpec(space_after=10),
        "blockquote": StyleSpec(color=MUTED, space_before=10, space_after=10, padding=10),
        "list": StyleSpec(space_after=10),
        "listLabel": StyleSpec(),
        "listContent": StyleSpec(space_after=2.5),
        "codeBlock": StyleSpec(
            font=MONO,
            size=8.5,
            line_height=1.45,
            space_before=10,
            space_after=10,
            background=CODE_BG,
            padding=10,
        ),
        "table": StyleSpec(space_before=10, space_after=10, padding=6),
        "tableHeaderCell": StyleSpec(font=SANS_BOLD, background=CODE_BG, padding=6),
        "tableCell": StyleSpec(padding=6),
        "hr": StyleSpec(space_before=15, space_after=15, rule_below=2.5),
    }
)

HEADING_STYLES = ("h1", "h2", "h3", "h4", "h5", "h6")
DEFAULT_HEADING_STYLE = "h3"

INLINE_CODE_SIZE = 8.5
LIST_INDENT = 16
BULLET = "•"


def heading_style(depth: object) -> tuple[str, int | None]:
    """Style name for a heading depth; anything outside 1..6 gets the default style."""
    if isinstance(depth, int) and not isinstance(depth, bool) and 1 <= depth <= 6:
        return HEADING_STYLES[depth - 1], depth
    return DEFAULT_HEADING_STYLE, None


def paragraph_styles() -> dict[str, ParagraphStyle]:
    """Build reportlab ParagraphStyles for every entry of the style sheet."""
    styles: dict[str, ParagraphStyle] = {}
    for name, spec in STYLE_SHEET.items():
        styles[name] = ParagraphStyle(
            name,
            fontName=spec.font,
            fontSize=spec.size,
            leading=round(spec.size * spec.line_height, 2),
            textColor=HexColor(spec.color),
            spaceBefore=spec.space_before,
            spaceAfter=spec.space_after,
        )
        if spec.rule_below and name in HEADING_STYLES:
            # the underline rule carries the heading's bottom spacing
            styles[name].spaceAfter = spec.padding

    code = STYLE_SHEET["codeBlock"]
    styles["codeBlock"].backColor = HexColor(code.background)
    styles["codeBlock"].borderPadding = code.padding
    styles["codeBlock"].leftIndent = code.padding
    styles["codeBlock"].rightIndent = code.padding
    styles["codeBlock"].spaceBefore = code.space_before + code.padding
    styles["codeBlock"].spaceAfter = code.space_after + code.padding
    return styles
