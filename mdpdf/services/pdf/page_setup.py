from __future__ import annotations

import logging
from types import MappingProxyType

from mdpdf.domain.models import MarginSpec, PageSpec
from mdpdf.utils.constants import DEFAULT_MARGIN, DEFAULT_PAGE_SIZE

logger = logging.getLogger(__name__)

# (key, label, width mm, height mm, width pt, height pt); pt = mm * 72 / 25.4
_PAGES = (
    ("a3", "A3", 297.0, 420.0, 841.89, 1190.55),
    ("a4", "A4", 210.0, 297.0, 595.28, 841.89),
    ("a5", "A5", 148.0, 210.0, 419.53, 595.28),
    ("b5", "B5", 176.0, 250.0, 498.9, 708.66),
    ("letter", "Letter", 215.9, 279.4, 612.0, 792.0),
    ("legal", "Legal", 215.9, 355.6, 612.0, 1008.0),
    ("tabloid", "Tabloid", 279.4, 431.8, 792.0, 1224.0),
    ("executive", "Executive", 184.15, 266.7, 522.0, 756.0),
)

_MARGINS = (
    ("none", "None", 0.0),
    ("narrow", "Narrow", 6.35),
    ("normal", "Normal", 14.11),
    ("wide", "Wide", 25.4),
)

PAGE_SIZES: MappingProxyType[str, PageSpec] = MappingProxyType(
    {row[0]: PageSpec(*row) for row in _PAGES}
)
MARGIN_PRESETS: MappingProxyType[str, MarginSpec] = MappingProxyType(
    {row[0]: MarginSpec(*row) for row in _MARGINS}
)


def _normalize(key: str | None) -> str:
    return (key or "").strip().lower()


def resolve_page(key: str | None) -> PageSpec:
    """Look up a page size by key or label; unknown keys fall back to A4."""
    spec = PAGE_SIZES.get(_normalize(key))
    if spec is None:
        logger.debug("Unknown page size %r, using %s", key, DEFAULT_PAGE_SIZE)
        return PAGE_SIZES[DEFAULT_PAGE_SIZE]
    return spec


def resolve_margin(key: str | None) -> MarginSpec:
    """Look up a margin preset by key or label; unknown keys fall back to 'normal'."""
    spec = MARGIN_PRESETS.get(_normalize(key))
    if spec is None:
        logger.debug("Unknown margin preset %r, using %s", key, DEFAULT_MARGIN)
        return MARGIN_PRESETS[DEFAULT_MARGIN]
    return spec
