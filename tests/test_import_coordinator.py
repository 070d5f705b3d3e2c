from __future__ import annotations

from pathlib import Path

import pytest
from PyQt6.QtWidgets import QTextEdit

from pyrte.domain.errors import ExtractionFailedError
from pyrte.domain.models import ImportFailure, ImportSuccess
from pyrte.services.file_service import FileService
from pyrte.services.import_service import ImportCoordinator
from pyrte.services.ui.adapters import QtRichTextEditor
from pyrte.utils.constants import EMPTY_PARAGRAPH, LEGACY_DOC_MESSAGE, UNREADABLE_MESSAGE


class FakeEditor:
    def __init__(self, html: str = "<p>original</p>", fail: bool = False) -> None:
        self.html = html
        self.fail = fail
        self.set_calls = 0

    def to_html(self) -> str:
        return self.html

    def to_plain_text(self) -> str:
        return self.html

    def set_html(self, html: str) -> None:
        self.set_calls += 1
        if self.fail:
            raise RuntimeError("editor refused")
        self.html = html

    def apply(self, command, value=None) -> None:
        pass

    def on_change(self, callback) -> None:
        pass


class FakeExtractor:
    def __init__(self, result=None, exc: Exception | None = None) -> None:
        self.result = result or ImportSuccess(html="<p>from pdf</p>", text="from pdf")
        self.exc = exc
        self.calls: list[str] = []

    def extract(self, data: bytes, filename: str):
        self.calls.append(filename)
        if self.exc is not None:
            raise self.exc
        return self.result


@pytest.fixture()
def editor() -> FakeEditor:
    return FakeEditor()


@pytest.fixture()
def extractor() -> FakeExtractor:
    return FakeExtractor()


@pytest.fixture()
def coordinator(editor, extractor, messages) -> ImportCoordinator:
    return ImportCoordinator(editor, extractor, FileService(), messages)


def test_plain_text_becomes_paragraphs(coordinator, editor, messages):
    res = coordinator.import_bytes(b"a\n\nb", "notes.txt", "text/plain")
    assert isinstance(res, ImportSuccess)
    assert editor.html == "<p>a</p>" + EMPTY_PARAGRAPH + "<p>b</p>"
    assert messages.infos == [("File imported", "Successfully imported notes.txt")]
    assert messages.errors == []


def test_html_file_is_loaded_as_is(coordinator, editor):
    coordinator.import_bytes(b"<h1>Hi</h1>", "page.html")
    assert editor.html == "<h1>Hi</h1>"


def test_legacy_doc_never_reaches_extractor(coordinator, editor, extractor, messages):
    res = coordinator.import_bytes(b"\xd0\xcf\x11\xe0", "old.doc", "application/msword")
    assert isinstance(res, ImportFailure)
    assert res.reason == LEGACY_DOC_MESSAGE
    assert extractor.calls == []
    assert editor.set_calls == 0
    assert messages.errors == [("Unsupported document", LEGACY_DOC_MESSAGE)]


def test_unsupported_type_is_rejected(coordinator, editor, messages):
    res = coordinator.import_bytes(b"\x89PNG", "photo.png", "image/png")
    assert isinstance(res, ImportFailure)
    assert "Selected: png (image/png)" in res.reason
    assert editor.set_calls == 0
    assert len(messages.notices) == 1
    assert messages.errors[0][0] == "Invalid file type"


def test_binary_document_goes_through_extractor(coordinator, editor, extractor, messages):
    res = coordinator.import_bytes(b"%PDF-1.4", "paper.pdf", "application/pdf")
    assert isinstance(res, ImportSuccess)
    assert extractor.calls == ["paper.pdf"]
    assert editor.html == "<p>from pdf</p>"
    assert len(messages.notices) == 1


def test_extractor_error_leaves_editor_unchanged(editor, messages):
    extractor = FakeExtractor(exc=ExtractionFailedError("service down"))
    c = ImportCoordinator(editor, extractor, FileService(), messages)
    res = c.import_bytes(b"PK..", "letter.docx")
    assert isinstance(res, ImportFailure)
    assert editor.html == "<p>original</p>"
    assert editor.set_calls == 0
    assert messages.notices == [("Import failed", "service down")]


def test_extractor_failure_result_is_reported(editor, messages):
    extractor = FakeExtractor(result=ImportFailure(reason="Failed to parse document"))
    c = ImportCoordinator(editor, extractor, FileService(), messages)
    c.import_bytes(b"%PDF", "bad.pdf")
    assert editor.set_calls == 0
    assert messages.errors == [("Import failed", "Failed to parse document")]


def test_undecodable_text_is_unreadable(coordinator, editor, messages):
    res = coordinator.import_bytes(b"\xff\xfe\xfa\xfb", "broken.txt")
    assert isinstance(res, ImportFailure)
    assert res.reason == UNREADABLE_MESSAGE
    assert editor.set_calls == 0
    assert messages.errors == [("Error reading file", UNREADABLE_MESSAGE)]


def test_missing_file_is_unreadable(coordinator, editor, messages, tmp_path: Path):
    res = coordinator.import_file(tmp_path / "gone.txt")
    assert isinstance(res, ImportFailure)
    assert messages.errors == [("Error reading file", UNREADABLE_MESSAGE)]
    assert editor.set_calls == 0


def test_import_file_reads_from_disk(coordinator, editor, tmp_path: Path):
    p = tmp_path / "draft.md"
    p.write_text("# heading\nbody", encoding="utf-8")
    coordinator.import_file(p)
    assert editor.html == "<p># heading</p><p>body</p>"


def test_editor_rejection_becomes_single_error(extractor, messages):
    editor = FakeEditor(fail=True)
    c = ImportCoordinator(editor, extractor, FileService(), messages)
    res = c.import_bytes(b"hello", "a.txt")
    assert isinstance(res, ImportFailure)
    assert messages.infos == []
    assert len(messages.errors) == 1


def test_busy_flag_and_reentrant_trigger_is_ignored(editor, messages):
    busy: list[bool] = []
    c = None

    class ReentrantExtractor(FakeExtractor):
        def extract(self, data, filename):
            assert c is not None and c.importing
            # A second trigger while the first is in flight does nothing
            assert c.import_bytes(b"x", "other.txt") is None
            return super().extract(data, filename)

    extractor = ReentrantExtractor()
    c = ImportCoordinator(editor, extractor, FileService(), messages, on_busy=busy.append)
    c.import_bytes(b"%PDF", "a.pdf")

    assert busy == [True, False]
    assert not c.importing
    assert extractor.calls == ["a.pdf"]
    assert len(messages.notices) == 1


def test_blank_lines_survive_in_a_real_editor(qapp, extractor, messages):
    real = QtRichTextEditor(QTextEdit())
    c = ImportCoordinator(real, extractor, FileService(), messages)
    c.import_bytes(b"a\n\nb", "notes.txt", "text/plain")
    assert real.widget.document().blockCount() == 3
    assert real.to_plain_text() == "a\n\nb"

    real.load_html(real.to_html())
    assert real.widget.document().blockCount() == 3
    assert real.to_plain_text() == "a\n\nb"
