from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Protocol

from pyrte.domain.models import (
    DocumentRecord,
    ExportArtifact,
    ExportSource,
    ImportResult,
)


class IRichTextEditor(Protocol):
    """Capabilities the app needs from a rich-text engine."""

    def to_html(self) -> str: ...
    def to_plain_text(self) -> str: ...
    def set_html(self, html: str) -> None: ...
    def apply(self, command: str, value: object | None = None) -> None: ...
    def on_change(self, callback: Callable[[], None]) -> None: ...


class IFileService(Protocol):
    """Read/write files. Writes should be atomic when possible."""

    def read_bytes(self, path: Path) -> bytes: ...
    def write_bytes_atomic(self, path: Path, data: bytes) -> None: ...


class ISettingsService(Protocol):
    """Persist and retrieve lightweight UI state."""

    def get_geometry(self) -> bytes | None: ...
    def set_geometry(self, blob: bytes) -> None: ...
    def get_splitter(self) -> bytes | None: ...
    def set_splitter(self, blob: bytes) -> None: ...
    def get_last_document(self) -> str | None: ...
    def set_last_document(self, doc_id: str | None) -> None: ...
    def get_last_email(self) -> str: ...
    def set_last_email(self, email: str) -> None: ...


class IDocumentExtractor(Protocol):
    """Turns PDF/DOCX bytes into HTML + plain text."""

    def extract(self, data: bytes, filename: str) -> ImportResult: ...


class IDocumentRepository(Protocol):
    """Document rows, always scoped to the owning user."""

    def list_documents(self, user_id: str) -> list[DocumentRecord]: ...
    def get_document(self, user_id: str, doc_id: str) -> DocumentRecord | None: ...
    def create_document(
        self, user_id: str, title: str = "Untitled Document", content: str = ""
    ) -> DocumentRecord: ...
    def update_document(
        self, user_id: str, doc_id: str, *, title: str, content: str, font_family: str
    ) -> DocumentRecord: ...
    def delete_document(self, user_id: str, doc_id: str) -> None: ...


class IConfigService(Protocol):
    def get(self, section: str, key: str, default: str | None = None) -> str | None: ...
    def get_int(self, section: str, key: str, default: int | None = None) -> int | None: ...
    def as_dict(self) -> Mapping[str, Mapping[str, str]]: ...
    def app_version(self) -> str: ...


class IAppConfig(IConfigService, Protocol):
    def get_version(self) -> str: ...


class IExporter(ABC):
    """Export strategy interface. Implementations render a snapshot into an artifact."""

    name: str  # e.g. "html", "pdf"
    label: str  # e.g. "Export as HTML"
    file_ext: str
    media_type: str

    @abstractmethod
    def export(self, source: ExportSource, basename: str) -> ExportArtifact:
        """Render 'source' to bytes named '<basename>.<file_ext>'."""
        raise NotImplementedError

    def artifact(self, data: bytes, basename: str) -> ExportArtifact:
        return ExportArtifact(
            data=data, filename=f"{basename}.{self.file_ext}", media_type=self.media_type
        )


class IExporterRegistry(Protocol):
    def register(self, e: IExporter) -> None: ...
    def get(self, name: str) -> IExporter: ...
    def all(self) -> list[IExporter]: ...
