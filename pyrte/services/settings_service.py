from __future__ import annotations

from PyQt6.QtCore import QByteArray, QSettings

from pyrte.domain.interfaces import ISettingsService
from pyrte.utils.constants import (
    SETTINGS_GEOMETRY,
    SETTINGS_LAST_DOCUMENT,
    SETTINGS_LAST_EMAIL,
    SETTINGS_SPLITTER,
)


class SettingsService(ISettingsService):
    """Persist small UI bits: geometry, splitter position, last document and account."""

    def __init__(self, qsettings: QSettings) -> None:
        self._s = qsettings

    def get_geometry(self) -> bytes | None:
        v = self._s.value(SETTINGS_GEOMETRY)
        return bytes(v) if isinstance(v, QByteArray) else None

    def set_geometry(self, blob: bytes) -> None:
        self._s.setValue(SETTINGS_GEOMETRY, QByteArray(blob))

    def get_splitter(self) -> bytes | None:
        v = self._s.value(SETTINGS_SPLITTER)
        return bytes(v) if isinstance(v, QByteArray) else None

    def set_splitter(self, blob: bytes) -> None:
        self._s.setValue(SETTINGS_SPLITTER, QByteArray(blob))

    def get_last_document(self) -> str | None:
        v = self._s.value(SETTINGS_LAST_DOCUMENT, "")
        return str(v) if v else None

    def set_last_document(self, doc_id: str | None) -> None:
        if doc_id:
            self._s.setValue(SETTINGS_LAST_DOCUMENT, doc_id)
        else:
            self._s.remove(SETTINGS_LAST_DOCUMENT)

    def get_last_email(self) -> str:
        v = self._s.value(SETTINGS_LAST_EMAIL, "")
        return str(v) if v else ""

    def set_last_email(self, email: str) -> None:
        self._s.setValue(SETTINGS_LAST_EMAIL, email)
