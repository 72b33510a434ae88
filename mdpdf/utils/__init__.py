"""App constants and utilities."""

from .constants import (
    APP_NAME,
    APP_ORG,
    CSS_PREVIEW,
    DEFAULT_FILENAME,
    DEFAULT_MARGIN,
    DEFAULT_PAGE_SIZE,
    HTML_TEMPLATE,
    MAX_RECENTS,
    SAMPLE_MARKDOWN,
    SETTINGS_GEOMETRY,
    SETTINGS_MARGIN,
    SETTINGS_PAGE_SIZE,
    SETTINGS_RECENTS,
    SETTINGS_SPLITTER,
)
from .log import configure_logging

__all__ = [
    "APP_ORG",
    "APP_NAME",
    "CSS_PREVIEW",
    "DEFAULT_FILENAME",
    "DEFAULT_MARGIN",
    "DEFAULT_PAGE_SIZE",
    "HTML_TEMPLATE",
    "SAMPLE_MARKDOWN",
    "SETTINGS_GEOMETRY",
    "SETTINGS_SPLITTER",
    "SETTINGS_RECENTS",
    "SETTINGS_PAGE_SIZE",
    "SETTINGS_MARGIN",
    "MAX_RECENTS",
    "configure_logging",
]
