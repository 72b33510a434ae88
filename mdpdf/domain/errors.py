from __future__ import annotations


class ExportError(RuntimeError):
    """Parsing, rendering or serializing a document failed; no artifact was produced."""


class ExportPreconditionError(ExportError):
    """Export could not start: missing input or an unmet environment requirement."""
