from __future__ import annotations

from pathlib import PurePath

from pyrte.domain.models import FileKind, FileSniff

TEXT_EXTENSIONS = frozenset({"txt", "md", "html", "htm", "rtf"})
BINARY_EXTENSIONS = frozenset({"pdf", "docx"})
LEGACY_EXTENSIONS = frozenset({"doc"})


def file_extension(filename: str) -> str:
    """Lower-cased text after the last dot; '' for dot-files and names without one."""
    return PurePath(filename).suffix.lstrip(".").lower()


def sniff(filename: str, mime: str | None = None) -> FileSniff:
    """
    Decide how an uploaded file is handled.

    The extension wins over the MIME hint: a PDF labelled text/plain is still
    routed to the extractor, and a .doc is rejected whatever it claims to be.
    """
    ext = file_extension(filename)
    mime_l = (mime or "").strip().lower()

    if ext in BINARY_EXTENSIONS:
        kind = FileKind.BINARY_DOCUMENT
    elif ext in LEGACY_EXTENSIONS:
        kind = FileKind.LEGACY_DOCUMENT
    elif (
        ext in TEXT_EXTENSIONS
        or mime_l.startswith("text/")
        or mime_l == "application/rtf"
        or ext == ""
    ):
        kind = FileKind.TEXT
    else:
        kind = FileKind.UNSUPPORTED
    return FileSniff(kind=kind, ext=ext, mime=mime_l)


def unsupported_message(s: FileSniff) -> str:
    selected = s.ext or "(no extension)"
    if s.mime:
        selected += f" ({s.mime})"
    return f"Please upload a supported file (txt, md, html, pdf, docx). Selected: {selected}"
