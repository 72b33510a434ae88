from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from pathlib import Path
from typing import Iterable, Protocol

from mdpdf.domain.models import ExportRequest, PdfArtifact
from mdpdf.domain.rendered import RenderedDocument
from mdpdf.domain.tree import Node


class IMarkdownRenderer(Protocol):
    """Convert Markdown text to full HTML string (including CSS) for the live preview."""

    def to_html(self, markdown_text: str) -> str: ...


class IMarkdownParser(Protocol):
    """Turn raw Markdown text into a document tree."""

    def parse(self, markdown_text: str) -> Node: ...


class IDocumentRenderer(Protocol):
    """Map a document tree onto styled blocks for a page size and margin preset."""

    def render(
        self, tree: Node | Mapping, *, page_size: str | None = None, margin: str | None = None
    ) -> RenderedDocument: ...


class IDocumentSerializer(Protocol):
    """Lay out a rendered document on pages and return the PDF bytes."""

    def serialize(self, document: RenderedDocument, *, filename: str = ...) -> PdfArtifact: ...


class IFileService(Protocol):
    """Read/write files. Writes should be atomic when possible."""

    def read_text(self, path: Path) -> str: ...
    def write_text_atomic(self, path: Path, text: str) -> None: ...
    def write_bytes_atomic(self, path: Path, data: bytes) -> None: ...


class ISettingsService(Protocol):
    """Persist and retrieve lightweight UI state."""

    def get_geometry(self) -> bytes | None: ...
    def set_geometry(self, blob: bytes) -> None: ...
    def get_splitter(self) -> bytes | None: ...
    def set_splitter(self, blob: bytes) -> None: ...
    def get_recent(self) -> list[str]: ...
    def set_recent(self, recent: Iterable[str]) -> None: ...
    def get_page_size(self) -> str | None: ...
    def set_page_size(self, key: str) -> None: ...
    def get_margin(self) -> str | None: ...
    def set_margin(self, key: str) -> None: ...


class IExporter(ABC):
    """Export strategy interface. Implementations write the document to a given format/path."""

    name: str  # e.g. "html", "pdf"
    label: str  # e.g. "Export HTML…"
    file_ext: str

    @abstractmethod
    def export(self, request: ExportRequest, out_path: Path) -> None:
        """Perform export of request.text with the request's page options."""
        raise NotImplementedError


class IExporterRegistry(Protocol):
    def register(self, e: IExporter) -> None: ...
    def get(self, name: str) -> IExporter: ...
    def all(self) -> list[IExporter]: ...


class IConfigService(Protocol):
    def get(self, section: str, key: str, default: str | None = None) -> str | None: ...
    def get_int(self, section: str, key: str, default: int | None = None) -> int | None: ...
    def get_bool(self, section: str, key: str, default: bool | None = None) -> bool | None: ...
    def as_dict(self) -> Mapping[str, Mapping[str, str]]: ...
    def app_version(self) -> str: ...


class IAppConfig(IConfigService, Protocol):
    def get_version(self) -> str: ...
    def export_page_size(self) -> str: ...
    def export_margin(self) -> str: ...
    def export_filename(self) -> str: ...
    def log_level(self) -> str: ...
