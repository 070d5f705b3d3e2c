from __future__ import annotations

import html
import logging
import re
from datetime import datetime, timezone

from pyrte.domain.interfaces import IDocumentRepository
from pyrte.domain.models import DocumentRecord, User
from pyrte.utils.constants import DEFAULT_TITLE

logger = logging.getLogger(__name__)

PREVIEW_CHARS = 100
EMPTY_PREVIEW = "No content yet..."

_TAG = re.compile(r"<[^>]+>")
_SPACE = re.compile(r"\s+")


def format_relative(ts: datetime, now: datetime | None = None) -> str:
    """'Just now', 'N hours ago', 'N days ago', then the calendar date."""
    now = now or datetime.now(timezone.utc)
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)

    hours = int((now - ts).total_seconds() // 3600)
    days = hours // 24
    if hours < 1:
        return "Just now"
    if hours < 24:
        return f"{hours} hour{'s' if hours > 1 else ''} ago"
    if days < 7:
        return f"{days} day{'s' if days > 1 else ''} ago"
    return ts.date().isoformat()


def preview_text(content: str, limit: int = PREVIEW_CHARS) -> str:
    text = _SPACE.sub(" ", html.unescape(_TAG.sub(" ", content or ""))).strip()
    return text[:limit] if text else EMPTY_PREVIEW


class DashboardService:
    """
    The signed-in user's document list: newest first, filterable by title.

    Repository errors propagate unchanged (FetchFailedError, SaveFailedError,
    DeleteFailedError) for the view to report.
    """

    def __init__(self, repository: IDocumentRepository, user: User) -> None:
        self.repository = repository
        self.user = user
        self._documents: list[DocumentRecord] = []

    @property
    def documents(self) -> list[DocumentRecord]:
        return list(self._documents)

    def refresh(self) -> list[DocumentRecord]:
        self._documents = self.repository.list_documents(self.user.id)
        logger.debug("Loaded %d documents for %s", len(self._documents), self.user.email)
        return self.documents

    def filter(self, query: str) -> list[DocumentRecord]:
        q = (query or "").lower()
        return [d for d in self._documents if q in d.title.lower()]

    def create(self) -> DocumentRecord:
        rec = self.repository.create_document(self.user.id, title=DEFAULT_TITLE, content="")
        self._documents.insert(0, rec)
        return rec

    def delete(self, doc_id: str) -> None:
        self.repository.delete_document(self.user.id, doc_id)
        self._documents = [d for d in self._documents if d.id != doc_id]

    def replace(self, record: DocumentRecord) -> None:
        """Swap in a freshly saved record and move it to the top."""
        rest = [d for d in self._documents if d.id != record.id]
        self._documents = [record, *rest]
