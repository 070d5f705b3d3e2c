from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path
from typing import Any

from pyrte.domain.errors import (
    ExtractionFailedError,
    LegacyDocumentError,
    PyRteError,
    UnreadableFileError,
    UnsupportedFileTypeError,
)
from pyrte.domain.interfaces import IDocumentExtractor, IFileService, IRichTextEditor
from pyrte.domain.models import FileKind, ImportFailure, ImportResult, ImportSuccess
from pyrte.services.importer import decode_text, import_text
from pyrte.services.sniffer import sniff, unsupported_message
from pyrte.services.ui.ports.messages import IMessageService
from pyrte.utils.constants import LEGACY_DOC_MESSAGE, UNREADABLE_MESSAGE

logger = logging.getLogger(__name__)


class ImportCoordinator:
    """
    Routes an uploaded file to the text importer or the binary extractor and
    applies the result to the editor.

    The editor is only touched on success. Every finished import produces
    exactly one notice through the message service.
    """

    def __init__(
        self,
        editor: IRichTextEditor,
        extractor: IDocumentExtractor,
        files: IFileService,
        messages: IMessageService,
        *,
        parent: Any | None = None,
        on_busy: Callable[[bool], None] | None = None,
    ) -> None:
        self.editor = editor
        self.extractor = extractor
        self.files = files
        self.messages = messages
        self.parent = parent
        self._on_busy = on_busy
        self._importing = False

    @property
    def importing(self) -> bool:
        return self._importing

    def import_file(self, path: Path, mime: str | None = None) -> ImportResult | None:
        if self._importing:
            logger.debug("Import of %s ignored: another import is running", path)
            return None
        try:
            data = self.files.read_bytes(path)
        except OSError as e:
            logger.warning("Cannot read %s: %s", path, e)
            failure = ImportFailure(reason=UNREADABLE_MESSAGE)
            return self._finish(path.name, failure, UnreadableFileError.title)
        return self.import_bytes(data, path.name, mime)

    def import_bytes(
        self, data: bytes, filename: str, mime: str | None = None
    ) -> ImportResult | None:
        if self._importing:
            logger.debug("Import of %s ignored: another import is running", filename)
            return None

        self._set_busy(True)
        try:
            result, title = self._route(data, filename, mime)
        finally:
            self._set_busy(False)
        return self._finish(filename, result, title)

    # ---------- internals ----------

    def _route(self, data: bytes, filename: str, mime: str | None) -> tuple[ImportResult, str]:
        s = sniff(filename, mime)
        if s.kind is FileKind.LEGACY_DOCUMENT:
            return ImportFailure(reason=LEGACY_DOC_MESSAGE), LegacyDocumentError.title
        if s.kind is FileKind.UNSUPPORTED:
            return ImportFailure(reason=unsupported_message(s)), UnsupportedFileTypeError.title

        if s.kind is FileKind.BINARY_DOCUMENT:
            try:
                return self.extractor.extract(data, filename), ExtractionFailedError.title
            except PyRteError as e:
                return ImportFailure(reason=str(e)), e.title

        try:
            text = decode_text(data)
            return import_text(text, ext=s.ext, mime=s.mime), ExtractionFailedError.title
        except UnreadableFileError as e:
            return ImportFailure(reason=str(e)), e.title

    def _finish(self, filename: str, result: ImportResult, title: str) -> ImportResult:
        if isinstance(result, ImportSuccess):
            try:
                self.editor.set_html(result.html)
            except Exception as e:
                logger.exception("Editor rejected imported content from %s", filename)
                result = ImportFailure(reason=f"Could not load the document: {e}")
            else:
                logger.info("Imported %s (%d chars)", filename, len(result.text))
                self.messages.info(self.parent, "File imported", f"Successfully imported {filename}")
                return result

        logger.warning("Import of %s failed: %s", filename, result.reason)
        self.messages.error(self.parent, title, result.reason)
        return result

    def _set_busy(self, busy: bool) -> None:
        self._importing = busy
        if self._on_busy is not None:
            self._on_busy(busy)
