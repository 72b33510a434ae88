"""PDF layout: page/margin tables, style sheet and the reportlab serializer."""

from .page_setup import MARGIN_PRESETS, PAGE_SIZES, resolve_margin, resolve_page
from .serializer import ReportLabSerializer

__all__ = [
    "MARGIN_PRESETS",
    "PAGE_SIZES",
    "ReportLabSerializer",
    "resolve_margin",
    "resolve_page",
]
