# mdpdf/services/markdown_renderer.py
from __future__ import annotations

import markdown

from mdpdf.domain.interfaces import IMarkdownRenderer
from mdpdf.utils.constants import CSS_PREVIEW, HTML_TEMPLATE


class MarkdownRenderer(IMarkdownRenderer):
    """
    Converts Markdown to HTML for the live preview pane.

    GitHub-flavoured extras come from pymdown-extensions: ~~strikethrough~~ via
    pymdownx.tilde and `- [x]` task lists via pymdownx.tasklist. Fenced code is
    highlighted here only; the exported PDF keeps code blocks plain.
    """

    def __init__(self, *, highlight: bool = True) -> None:
        self.highlight = highlight

    def to_html(self, markdown_text: str) -> str:
        exts = [
            "extra",
            "sane_lists",
            "toc",
            "pymdownx.tilde",
            "pymdownx.tasklist",
        ]
        ext_cfg: dict[str, dict] = {
            "pymdownx.tilde": {"subscript": False},
            "pymdownx.tasklist": {"custom_checkbox": False},
        }
        if self.highlight:
            exts.append("codehilite")
            ext_cfg["codehilite"] = {"guess_lang": False, "noclasses": True}

        body = markdown.markdown(
            markdown_text,
            extensions=exts,
            extension_configs=ext_cfg,
            output_format="html5",
        )
        return HTML_TEMPLATE.format(css=CSS_PREVIEW, body=body)
