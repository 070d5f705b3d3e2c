from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from enum import Enum
from typing import Union


@dataclass
class DocumentRecord:
    id: str
    user_id: str
    title: str
    content: str
    font_family: str = "Inter"
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True)
class User:
    id: str
    email: str


class FileKind(Enum):
    TEXT = "text"
    BINARY_DOCUMENT = "binary-document"
    LEGACY_DOCUMENT = "legacy-document"
    UNSUPPORTED = "unsupported"


@dataclass(frozen=True)
class FileSniff:
    kind: FileKind
    ext: str
    mime: str


@dataclass(frozen=True)
class ImportSuccess:
    html: str
    text: str

    ok = True


@dataclass(frozen=True)
class ImportFailure:
    reason: str

    ok = False


ImportResult = Union[ImportSuccess, ImportFailure]


@dataclass(frozen=True)
class ExportSource:
    """Snapshot of the editor content handed to exporters."""

    html: str
    text: str


@dataclass(frozen=True)
class ExportArtifact:
    data: bytes
    filename: str
    media_type: str


class SaveStatus(Enum):
    SAVED = "saved"
    SAVING = "saving"
    UNSAVED = "unsaved"


@dataclass(frozen=True)
class StyleSelection:
    """Active value per style axis; None means inherit."""

    font_family: str | None = None
    text_color: str | None = None
    highlight_color: str | None = None

    def with_value(self, axis: str, value: str | None) -> StyleSelection:
        if axis not in ("font_family", "text_color", "highlight_color"):
            raise ValueError(f"Unknown style axis: {axis}")
        return replace(self, **{axis: value or None})
