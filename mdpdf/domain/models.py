from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

MM_PER_INCH = 25.4
POINTS_PER_INCH = 72.0


def mm_to_pt(mm: float) -> float:
    """Convert millimetres (display unit) to PDF points (renderer unit)."""
    return round(mm * POINTS_PER_INCH / MM_PER_INCH, 2)


@dataclass
class Document:
    path: Path | None
    text: str
    modified: bool = False


@dataclass(frozen=True)
class PageSpec:
    """Named physical page size, in millimetres and in points."""

    key: str
    label: str
    width_mm: float
    height_mm: float
    width_pt: float
    height_pt: float

    @property
    def points(self) -> tuple[float, float]:
        return (self.width_pt, self.height_pt)


@dataclass(frozen=True)
class MarginSpec:
    """Named uniform page-edge offset, in millimetres."""

    key: str
    label: str
    mm: float

    @property
    def points(self) -> float:
        return mm_to_pt(self.mm)


@dataclass(frozen=True)
class ExportRequest:
    """What the UI hands to an exporter: raw text plus page options."""

    text: str
    page_size: str | None = None
    margin: str | None = None


@dataclass(eq=False)
class PdfArtifact:
    """
    Binary PDF produced by one export call.

    The owner calls release() once the artifact has been written or previewed so
    repeated exports in one session don't keep every payload alive.
    """

    data: bytes
    page_count: int = 1
    filename: str = "document.pdf"
    released: bool = field(default=False, init=False)

    def release(self) -> None:
        self.data = b""
        self.released = True

    def __len__(self) -> int:
        return len(self.data)
