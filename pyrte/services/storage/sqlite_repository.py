from __future__ import annotations

import logging
import sqlite3
import uuid
from collections.abc import Callable
from datetime import datetime, timezone

from pyrte.domain.errors import DeleteFailedError, FetchFailedError, SaveFailedError
from pyrte.domain.interfaces import IDocumentRepository
from pyrte.domain.models import DocumentRecord
from pyrte.utils.constants import DEFAULT_FONT, DEFAULT_TITLE

logger = logging.getLogger(__name__)

_COLUMNS = "id, user_id, title, content, font_family, created_at, updated_at"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _record(row: sqlite3.Row) -> DocumentRecord:
    return DocumentRecord(
        id=row["id"],
        user_id=row["user_id"],
        title=row["title"],
        content=row["content"],
        font_family=row["font_family"],
        created_at=datetime.fromisoformat(row["created_at"]),
        updated_at=datetime.fromisoformat(row["updated_at"]),
    )


class SqliteDocumentRepository(IDocumentRepository):
    """
    Document rows in SQLite. Every statement is filtered by the owning user,
    so a caller can never read or change another user's documents.
    """

    def __init__(
        self,
        conn: sqlite3.Connection,
        *,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._conn = conn
        self._clock = clock

    def list_documents(self, user_id: str) -> list[DocumentRecord]:
        try:
            rows = self._conn.execute(
                f"SELECT {_COLUMNS} FROM documents WHERE user_id=? "
                "ORDER BY updated_at DESC, created_at DESC",
                (user_id,),
            ).fetchall()
        except sqlite3.Error as e:
            logger.error("Listing documents failed: %s", e)
            raise FetchFailedError("Failed to load documents") from e
        return [_record(r) for r in rows]

    def get_document(self, user_id: str, doc_id: str) -> DocumentRecord | None:
        try:
            row = self._conn.execute(
                f"SELECT {_COLUMNS} FROM documents WHERE id=? AND user_id=?",
                (doc_id, user_id),
            ).fetchone()
        except sqlite3.Error as e:
            logger.error("Loading document %s failed: %s", doc_id, e)
            raise FetchFailedError("Failed to load document") from e
        return _record(row) if row else None

    def create_document(
        self, user_id: str, title: str = DEFAULT_TITLE, content: str = ""
    ) -> DocumentRecord:
        now = self._clock()
        rec = DocumentRecord(
            id=str(uuid.uuid4()),
            user_id=user_id,
            title=title,
            content=content,
            font_family=DEFAULT_FONT,
            created_at=now,
            updated_at=now,
        )
        try:
            with self._conn:
                self._conn.execute(
                    f"INSERT INTO documents({_COLUMNS}) VALUES(?,?,?,?,?,?,?)",
                    (
                        rec.id,
                        rec.user_id,
                        rec.title,
                        rec.content,
                        rec.font_family,
                        now.isoformat(),
                        now.isoformat(),
                    ),
                )
        except sqlite3.Error as e:
            logger.error("Creating document failed: %s", e)
            raise SaveFailedError("Failed to create document") from e
        logger.info("Created document %s", rec.id)
        return rec

    def update_document(
        self, user_id: str, doc_id: str, *, title: str, content: str, font_family: str
    ) -> DocumentRecord:
        now = self._clock()
        try:
            with self._conn:
                cur = self._conn.execute(
                    "UPDATE documents SET title=?, content=?, font_family=?, updated_at=? "
                    "WHERE id=? AND user_id=?",
                    (title, content, font_family, now.isoformat(), doc_id, user_id),
                )
        except sqlite3.Error as e:
            logger.error("Saving document %s failed: %s", doc_id, e)
            raise SaveFailedError("Failed to save document") from e
        if cur.rowcount == 0:
            raise SaveFailedError("Document not found")
        rec = self.get_document(user_id, doc_id)
        if rec is None:
            raise SaveFailedError("Document not found")
        return rec

    def delete_document(self, user_id: str, doc_id: str) -> None:
        try:
            with self._conn:
                cur = self._conn.execute(
                    "DELETE FROM documents WHERE id=? AND user_id=?", (doc_id, user_id)
                )
        except sqlite3.Error as e:
            logger.error("Deleting document %s failed: %s", doc_id, e)
            raise DeleteFailedError("Failed to delete document") from e
        if cur.rowcount == 0:
            raise DeleteFailedError("Document not found")
        logger.info("Deleted document %s", doc_id)
