"""Exporter strategies and registry."""

from .base import ExporterRegistry, run_export, sanitize_basename
from .docx_exporter import DocxExporter
from .html_exporter import HtmlExporter
from .markdown_exporter import MarkdownExporter
from .pdf_exporter import PdfExporter
from .text_exporter import TextExporter


def default_exporters() -> list:
    """Built-in exporters in menu order."""
    return [HtmlExporter(), TextExporter(), MarkdownExporter(), PdfExporter(), DocxExporter()]


__all__ = [
    "DocxExporter",
    "ExporterRegistry",
    "HtmlExporter",
    "MarkdownExporter",
    "PdfExporter",
    "TextExporter",
    "default_exporters",
    "run_export",
    "sanitize_basename",
]
