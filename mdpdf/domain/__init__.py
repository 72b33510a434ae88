"""Domain layer: interfaces, errors and simple models (dataclasses)."""

from .errors import ExportError, ExportPreconditionError
from .interfaces import (
    IDocumentRenderer,
    IDocumentSerializer,
    IExporter,
    IFileService,
    IMarkdownParser,
    IMarkdownRenderer,
    ISettingsService,
)
from .models import Document, ExportRequest, MarginSpec, PageSpec, PdfArtifact
from .tree import Node

__all__ = [
    "IMarkdownRenderer",
    "IMarkdownParser",
    "IDocumentRenderer",
    "IDocumentSerializer",
    "IFileService",
    "ISettingsService",
    "IExporter",
    "ExportError",
    "ExportPreconditionError",
    "Document",
    "ExportRequest",
    "MarginSpec",
    "PageSpec",
    "PdfArtifact",
    "Node",
]
