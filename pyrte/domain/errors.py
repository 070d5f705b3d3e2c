from __future__ import annotations


class PyRteError(Exception):
    """Base for every error the editor surfaces to the user."""

    title = "Error"


class UnsupportedFileTypeError(PyRteError):
    title = "Invalid file type"


class LegacyDocumentError(UnsupportedFileTypeError):
    title = "Unsupported document"


class UnreadableFileError(PyRteError):
    title = "Error reading file"


class ExtractionFailedError(PyRteError):
    title = "Import failed"


class ExportFailedError(PyRteError):
    title = "Export failed"


class SaveFailedError(PyRteError):
    title = "Save failed"


class DeleteFailedError(PyRteError):
    title = "Delete failed"


class FetchFailedError(PyRteError):
    title = "Load failed"


class AuthError(PyRteError):
    title = "Sign in failed"
