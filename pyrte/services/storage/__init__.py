from __future__ import annotations

from .auth import AuthService
from .database import open_database
from .sqlite_repository import SqliteDocumentRepository

__all__ = ["AuthService", "SqliteDocumentRepository", "open_database"]
