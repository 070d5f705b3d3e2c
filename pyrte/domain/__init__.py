"""Domain layer: interfaces, error taxonomy and simple models (dataclasses)."""

from .errors import PyRteError
from .interfaces import (
    IDocumentExtractor,
    IDocumentRepository,
    IExporter,
    IFileService,
    IRichTextEditor,
    ISettingsService,
)
from .models import DocumentRecord, ExportArtifact, ExportSource, ImportFailure, ImportSuccess

__all__ = [
    "IRichTextEditor",
    "IFileService",
    "ISettingsService",
    "IDocumentExtractor",
    "IDocumentRepository",
    "IExporter",
    "DocumentRecord",
    "ExportArtifact",
    "ExportSource",
    "ImportSuccess",
    "ImportFailure",
    "PyRteError",
]
