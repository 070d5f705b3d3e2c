from __future__ import annotations

import os
from pathlib import Path

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PyQt6.QtCore import QSettings  # noqa: E402
from PyQt6.QtWidgets import QApplication  # noqa: E402

from pyrte.services.file_service import FileService  # noqa: E402
from pyrte.services.settings_service import SettingsService  # noqa: E402
from pyrte.services.storage import (  # noqa: E402
    AuthService,
    SqliteDocumentRepository,
    open_database,
)
from pyrte.services.ui.ports.messages import Question  # noqa: E402


# --- Fallback QApplication fixture (works with or without pytest-qt) ---
@pytest.fixture(scope="session")
def qapp():
    """Provide a QApplication for tests that need Qt.
    Creates one if not present; reuses existing otherwise.
    """
    app = QApplication.instance()
    created = False
    if app is None:
        app = QApplication([])
        created = True
    try:
        yield app
    finally:
        if created:
            app.quit()


# --- Fakes ---


class RecordingMessages:
    """IMessageService that records notices instead of opening dialogs."""

    def __init__(self, answer: bool = True) -> None:
        self.answer = answer
        self.infos: list[tuple[str, str]] = []
        self.warnings: list[tuple[str, str]] = []
        self.errors: list[tuple[str, str]] = []
        self.questions: list[tuple[str, str, Question]] = []

    @property
    def notices(self) -> list[tuple[str, str]]:
        return [*self.infos, *self.warnings, *self.errors]

    def info(self, parent, title: str, text: str) -> None:
        self.infos.append((title, text))

    def warning(self, parent, title: str, text: str) -> None:
        self.warnings.append((title, text))

    def error(self, parent, title: str, text: str) -> None:
        self.errors.append((title, text))

    def ask(self, parent, title: str, text: str, kind: Question = Question.YES_NO) -> bool:
        self.questions.append((title, text, kind))
        return self.answer


class StubDialogs:
    """IFileDialogService returning preset paths."""

    def __init__(self, open_path: Path | None = None, save_path: Path | None = None) -> None:
        self.open_path = open_path
        self.save_path = save_path
        self.save_requests: list[tuple[str, str | None, str]] = []

    def get_open_file(self, parent, caption, start_dir, filter_str):
        return self.open_path

    def get_save_file(self, parent, caption, start_path, filter_str):
        self.save_requests.append((caption, start_path, filter_str))
        return self.save_path


# --- Other common fixtures ---


@pytest.fixture()
def tmp_settings_path(tmp_path: Path) -> Path:
    return tmp_path / "settings.ini"


@pytest.fixture()
def qsettings(tmp_settings_path: Path) -> QSettings:
    # Use an INI file so we don't touch system registry / platform stores
    s = QSettings(str(tmp_settings_path), QSettings.Format.IniFormat)
    s.clear()
    return s


@pytest.fixture()
def settings_service(qsettings: QSettings) -> SettingsService:
    return SettingsService(qsettings)


@pytest.fixture()
def file_service() -> FileService:
    return FileService()


@pytest.fixture()
def messages() -> RecordingMessages:
    return RecordingMessages()


@pytest.fixture()
def db():
    conn = open_database(":memory:")
    try:
        yield conn
    finally:
        conn.close()


@pytest.fixture()
def auth(db) -> AuthService:
    # Few rounds keep the suite fast; the format is the same.
    return AuthService(db, rounds=1000)


@pytest.fixture()
def user(auth: AuthService):
    return auth.sign_up("ada@example.com", "correct horse")


@pytest.fixture()
def repository(db) -> SqliteDocumentRepository:
    return SqliteDocumentRepository(db)


@pytest.fixture()
def dialogs() -> StubDialogs:
    return StubDialogs()
