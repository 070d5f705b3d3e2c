from __future__ import annotations

from pathlib import Path

from PyQt6.QtCore import QIODevice, QSaveFile

from pyrte.domain.interfaces import IFileService


class FileService(IFileService):
    """Reads for imports, atomic writes for exported artifacts."""

    def read_bytes(self, path: Path) -> bytes:
        return path.read_bytes()

    def write_bytes_atomic(self, path: Path, data: bytes) -> None:
        sf = QSaveFile(str(path))
        if not sf.open(QIODevice.OpenModeFlag.WriteOnly):
            raise OSError(f"Cannot open for write: {path}")
        if sf.write(data) != len(data):
            sf.cancelWriting()
            sf.commit()
            raise OSError(f"Short write to: {path}")
        if not sf.commit():
            raise OSError(f"Commit failed for: {path}")
