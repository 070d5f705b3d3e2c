from __future__ import annotations

import logging
import time
from dataclasses import dataclass

from PyQt6.QtCore import QObject, QTimer, pyqtSignal

from pyrte.domain.errors import PyRteError
from pyrte.domain.interfaces import IDocumentRepository
from pyrte.domain.models import DocumentRecord, SaveStatus
from pyrte.utils.constants import AUTOSAVE_DELAY_MS

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PendingSave:
    title: str
    content: str
    font_family: str
    deadline: float  # time.monotonic() seconds


class AutosaveController(QObject):
    """
    Debounced save of the open document.

    Every edit replaces the pending snapshot and restarts a single-shot timer,
    so a burst of edits produces one write once the editor has been idle for
    the delay. A write happens only when the snapshot differs from what was
    last persisted. Failed writes are reported once and not retried.
    """

    status_changed = pyqtSignal(object)  # SaveStatus
    saved = pyqtSignal(object)  # DocumentRecord
    save_failed = pyqtSignal(str)

    def __init__(
        self,
        repository: IDocumentRepository,
        user_id: str,
        *,
        delay_ms: int = AUTOSAVE_DELAY_MS,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self.repository = repository
        self.user_id = user_id
        self.delay_ms = delay_ms
        self._record: DocumentRecord | None = None
        self._pending: PendingSave | None = None
        self._status = SaveStatus.SAVED

        self._timer = QTimer(self)
        self._timer.setSingleShot(True)
        self._timer.timeout.connect(self._on_timeout)

    @property
    def status(self) -> SaveStatus:
        return self._status

    @property
    def pending(self) -> PendingSave | None:
        return self._pending

    @property
    def record(self) -> DocumentRecord | None:
        return self._record

    def is_active(self) -> bool:
        return self._timer.isActive()

    def load(self, record: DocumentRecord) -> None:
        """Start tracking a freshly opened document; nothing is pending."""
        self._timer.stop()
        self._pending = None
        self._record = record
        self._set_status(SaveStatus.SAVED)

    def unload(self) -> None:
        self._timer.stop()
        self._pending = None
        self._record = None

    def schedule(self, title: str, content: str, font_family: str) -> None:
        if self._record is None:
            return
        self._pending = PendingSave(
            title=title,
            content=content,
            font_family=font_family,
            deadline=time.monotonic() + self.delay_ms / 1000.0,
        )
        self._set_status(SaveStatus.UNSAVED)
        self._timer.start(self.delay_ms)

    def flush(self) -> bool:
        """Write the pending snapshot now. False when the write failed."""
        self._timer.stop()
        return self._save_pending()

    # ---------- internals ----------

    def _on_timeout(self) -> None:
        self._save_pending()

    def _differs(self, p: PendingSave) -> bool:
        r = self._record
        if r is None:
            return False
        return (p.title, p.content, p.font_family) != (r.title, r.content, r.font_family)

    def _save_pending(self) -> bool:
        pending, self._pending = self._pending, None
        if pending is None or self._record is None:
            return True
        if not self._differs(pending):
            self._set_status(SaveStatus.SAVED)
            return True

        self._set_status(SaveStatus.SAVING)
        try:
            rec = self.repository.update_document(
                self.user_id,
                self._record.id,
                title=pending.title,
                content=pending.content,
                font_family=pending.font_family,
            )
        except PyRteError as e:
            logger.warning("Autosave of %s failed: %s", self._record.id, e)
            self._set_status(SaveStatus.UNSAVED)
            self.save_failed.emit(str(e))
            return False

        self._record = rec
        logger.debug("Autosaved %s", rec.id)
        self._set_status(SaveStatus.SAVED)
        self.saved.emit(rec)
        return True

    def _set_status(self, status: SaveStatus) -> None:
        if status is self._status:
            return
        self._status = status
        self.status_changed.emit(status)
