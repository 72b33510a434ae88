"""Exporter strategies and registry."""

from .base import ExporterRegistryInst
from .html_exporter import HtmlExporter
from .pdf_exporter import PdfExporter

__all__ = ["ExporterRegistryInst", "HtmlExporter", "PdfExporter"]
