import pytest

from pyrte.services.file_service import FileService

QSAVEFILE = "pyrte.services.file_service.QSaveFile"


def test_file_service_write_atomic_success(tmp_path):
    fs = FileService()
    p = tmp_path / "report.pdf"
    fs.write_bytes_atomic(p, b"%PDF-1.4\x00\xff")
    assert p.read_bytes() == b"%PDF-1.4\x00\xff"
    assert fs.read_bytes(p) == b"%PDF-1.4\x00\xff"


def test_file_service_overwrites_existing(tmp_path):
    fs = FileService()
    p = tmp_path / "a.txt"
    p.write_text("old", encoding="utf-8")
    fs.write_bytes_atomic(p, "café".encode("utf-8"))
    assert p.read_text(encoding="utf-8") == "café"


def test_file_service_read_missing(tmp_path):
    fs = FileService()
    with pytest.raises(FileNotFoundError):
        fs.read_bytes(tmp_path / "missing.docx")


def test_file_service_write_atomic_open_fail(monkeypatch, tmp_path):
    class FakeQSaveFile:
        def __init__(self, *_):
            pass

        def open(self, *_):
            return False

    monkeypatch.setattr(QSAVEFILE, FakeQSaveFile, raising=True)
    with pytest.raises(OSError):
        FileService().write_bytes_atomic(tmp_path / "x.txt", b"data")


def test_file_service_write_atomic_short_write(monkeypatch, tmp_path):
    cancelled = []

    class FakeQSaveFile:
        def __init__(self, *_):
            pass

        def open(self, *_):
            return True

        def write(self, b):
            return len(b) - 1

        def cancelWriting(self):
            cancelled.append(True)

        def commit(self):
            return False

    monkeypatch.setattr(QSAVEFILE, FakeQSaveFile, raising=True)
    with pytest.raises(OSError):
        FileService().write_bytes_atomic(tmp_path / "x.bin", b"data")
    assert cancelled == [True]


def test_file_service_write_atomic_commit_fail(monkeypatch, tmp_path):
    class FakeQSaveFile:
        def __init__(self, *_):
            self._data = b""

        def open(self, *_):
            return True

        def write(self, b):
            self._data += b
            return len(b)

        def commit(self):
            return False

    monkeypatch.setattr(QSAVEFILE, FakeQSaveFile, raising=True)
    with pytest.raises(OSError):
        FileService().write_bytes_atomic(tmp_path / "x.txt", b"data")
