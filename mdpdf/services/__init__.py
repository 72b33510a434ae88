"""Concrete service implementations and export strategies."""

from .document_renderer import DocumentRenderer
from .export_service import ExportService, build_export_service
from .file_service import FileService
from .markdown_parser import MarkdownParser
from .markdown_renderer import MarkdownRenderer
from .settings_service import SettingsService

__all__ = [
    "DocumentRenderer",
    "ExportService",
    "FileService",
    "MarkdownParser",
    "MarkdownRenderer",
    "SettingsService",
    "build_export_service",
]
