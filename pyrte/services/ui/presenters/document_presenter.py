from __future__ import annotations

import logging
from typing import Protocol, runtime_checkable

from pyrte.domain.errors import DeleteFailedError, PyRteError, SaveFailedError
from pyrte.domain.interfaces import (
    IDocumentExtractor,
    IDocumentRepository,
    IExporterRegistry,
    IFileService,
)
from pyrte.domain.models import DocumentRecord, ExportSource, SaveStatus, User
from pyrte.services.autosave import AutosaveController
from pyrte.services.exporters.base import run_export
from pyrte.services.import_service import ImportCoordinator
from pyrte.services.ui.adapters.qt_rich_text_editor import QtRichTextEditor
from pyrte.services.ui.ports.dialogs import IFileDialogService
from pyrte.services.ui.ports.messages import IMessageService, Question
from pyrte.utils.constants import DEFAULT_FONT, IMPORT_FILTER

logger = logging.getLogger(__name__)


@runtime_checkable
class IDocumentView(Protocol):
    """Passive surface of the editor page (implemented by the Qt MainWindow)."""

    def document_title(self) -> str: ...
    def set_document_title(self, title: str) -> None: ...
    def set_font_family(self, family: str) -> None: ...
    def set_save_status(self, status: SaveStatus) -> None: ...
    def set_import_enabled(self, enabled: bool) -> None: ...
    def set_editor_enabled(self, enabled: bool) -> None: ...
    def show_status(self, text: str, msec: int = 3000) -> None: ...


class DocumentPresenter:
    """
    Coordinates the open document: loading, autosave, import and export.
    The editor is the only owner of the document content.
    """

    def __init__(
        self,
        view: IDocumentView,
        editor: QtRichTextEditor,
        repository: IDocumentRepository,
        user: User,
        extractor: IDocumentExtractor,
        exporters: IExporterRegistry,
        files: IFileService,
        messages: IMessageService,
        dialogs: IFileDialogService,
        *,
        autosave_delay_ms: int = 1000,
        default_font: str = DEFAULT_FONT,
    ) -> None:
        self.view = view
        self.editor = editor
        self.repository = repository
        self.user = user
        self.exporters = exporters
        self.files = files
        self.messages = messages
        self.dialogs = dialogs
        self.default_font = default_font
        self.font_family = default_font

        self.autosave = AutosaveController(repository, user.id, delay_ms=autosave_delay_ms)
        self.autosave.status_changed.connect(self.view.set_save_status)
        self.autosave.save_failed.connect(self._on_save_failed)

        self.importer = ImportCoordinator(
            editor,
            extractor,
            files,
            messages,
            parent=view,
            on_busy=lambda busy: self.view.set_import_enabled(not busy),
        )
        self.editor.on_change(self.on_content_changed)

    @property
    def current(self) -> DocumentRecord | None:
        return self.autosave.record

    # ---------- document lifecycle ----------

    def open(self, record: DocumentRecord) -> None:
        if not self.close():
            logger.warning("Opening %s after a failed save of the previous document", record.id)
        self.font_family = record.font_family or self.default_font
        self.editor.load_html(record.content)
        self.editor.set_document_font(self.font_family)
        self.view.set_document_title(record.title)
        self.view.set_font_family(self.font_family)
        self.view.set_editor_enabled(True)
        self.autosave.load(record)
        self.view.set_save_status(SaveStatus.SAVED)
        logger.info("Opened document %s", record.id)

    def close(self) -> bool:
        """Flush pending edits and detach the document. False when the last save failed."""
        if self.autosave.record is None:
            return True
        ok = self.autosave.flush()
        self.autosave.unload()
        self.editor.load_html("")
        self.view.set_editor_enabled(False)
        return ok

    def delete_current(self) -> bool:
        rec = self.current
        if rec is None:
            return False
        if not self.messages.ask(
            self.view,
            "Delete document?",
            f'Are you sure you want to delete "{self.view.document_title()}"? '
            "This action cannot be undone.",
            Question.DESTRUCTIVE,
        ):
            return False
        try:
            self.repository.delete_document(self.user.id, rec.id)
        except DeleteFailedError as e:
            self.messages.error(self.view, e.title, str(e))
            return False
        self.autosave.unload()
        self.editor.load_html("")
        self.view.set_editor_enabled(False)
        self.messages.info(self.view, "Document deleted", f'"{rec.title}" was deleted')
        return True

    # ---------- edits ----------

    def on_content_changed(self) -> None:
        self._schedule()

    def on_title_changed(self, _title: str) -> None:
        self._schedule()

    def on_font_changed(self, family: str) -> None:
        self.font_family = family or self.default_font
        self.editor.set_document_font(self.font_family)
        self._schedule()

    def _schedule(self) -> None:
        if self.current is None:
            return
        self.autosave.schedule(self.view.document_title(), self.editor.to_html(), self.font_family)

    def _on_save_failed(self, message: str) -> None:
        self.messages.error(self.view, SaveFailedError.title, message)

    # ---------- import / export ----------

    def import_via_dialog(self) -> None:
        if self.current is None or self.importer.importing:
            return
        path = self.dialogs.get_open_file(self.view, "Import document", None, IMPORT_FILTER)
        if path is None:
            return
        self.importer.import_file(path)

    def snapshot(self) -> ExportSource:
        return ExportSource(html=self.editor.to_html(), text=self.editor.to_plain_text())

    def export(self, name: str) -> bool:
        try:
            exporter = self.exporters.get(name)
        except KeyError:
            self.messages.error(self.view, "Export failed", f"No exporter named {name!r}")
            return False

        try:
            artifact = run_export(exporter, self.snapshot(), self.view.document_title())
        except PyRteError as e:
            self.messages.error(self.view, e.title, str(e))
            return False

        out = self.dialogs.get_save_file(
            self.view,
            exporter.label,
            artifact.filename,
            f"{exporter.name.upper()} (*.{exporter.file_ext})",
        )
        if out is None:
            return False
        try:
            self.files.write_bytes_atomic(out, artifact.data)
        except OSError as e:
            logger.error("Writing %s failed: %s", out, e)
            self.messages.error(self.view, "Export failed", f"Could not write {out.name}: {e}")
            return False

        self.messages.info(
            self.view, "Export successful", f"Document exported as {artifact.filename}"
        )
        return True
