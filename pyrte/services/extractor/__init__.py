"""PDF/DOCX extraction: parsers, in-process extractor, HTTP client and service."""

from .client import HttpDocumentExtractor
from .local import LocalDocumentExtractor

__all__ = ["HttpDocumentExtractor", "LocalDocumentExtractor"]
