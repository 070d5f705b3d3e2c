from __future__ import annotations

import pytest
from PyQt6.QtGui import QTextCursor
from PyQt6.QtWidgets import QTextEdit

from pyrte.services.ui.adapters import QtRichTextEditor
from pyrte.utils.constants import EMPTY_PARAGRAPH


@pytest.fixture()
def editor(qapp) -> QtRichTextEditor:
    return QtRichTextEditor(QTextEdit())


def select_all(editor: QtRichTextEditor) -> None:
    cursor = editor.widget.textCursor()
    cursor.select(QTextCursor.SelectionType.Document)
    editor.widget.setTextCursor(cursor)


def move_to_end(editor: QtRichTextEditor) -> None:
    cursor = editor.widget.textCursor()
    cursor.movePosition(QTextCursor.MoveOperation.End)
    editor.widget.setTextCursor(cursor)


def test_set_html_notifies_but_load_html_does_not(editor):
    calls = []
    editor.on_change(lambda: calls.append(True))

    editor.load_html("<p>saved</p>")
    assert calls == []
    assert editor.to_html() == "<p>saved</p>"

    editor.set_html("<p>imported</p>")
    assert calls
    assert editor.to_plain_text() == "imported"


def test_typing_notifies(editor):
    calls = []
    editor.on_change(lambda: calls.append(True))
    editor.widget.insertPlainText("abc")
    assert calls


def test_unknown_command_raises(editor):
    with pytest.raises(ValueError):
        editor.apply("blink")


def test_bold_on_selection(editor):
    editor.load_html("<p>hello</p>")
    select_all(editor)
    editor.apply("bold")
    assert editor.to_html() == "<p><strong>hello</strong></p>"
    assert editor.is_active("bold")


def test_italic_and_strike_on_selection(editor):
    editor.load_html("<p>hello</p>")
    select_all(editor)
    editor.apply("italic")
    editor.apply("strike")
    assert editor.to_html() == "<p><em><s>hello</s></em></p>"


def test_heading_toggles_back_to_paragraph(editor):
    editor.load_html("<p>hello</p>")
    editor.apply("heading", 2)
    assert editor.heading_level() == 2
    assert editor.to_html() == "<h2>hello</h2>"

    editor.apply("heading", 2)
    assert editor.heading_level() == 0
    assert editor.to_html() == "<p>hello</p>"


def test_heading_level_is_validated(editor):
    with pytest.raises(ValueError):
        editor.apply("heading", 4)


def test_bullet_list_toggle(editor):
    editor.load_html("<p>hello</p>")
    editor.apply("bullet_list")
    assert editor.is_active("bullet_list")
    assert editor.to_html() == "<ul><li>hello</li></ul>"

    editor.apply("bullet_list")
    assert not editor.is_active("bullet_list")
    assert editor.to_html() == "<p>hello</p>"


def test_switch_list_style(editor):
    editor.load_html("<p>hello</p>")
    editor.apply("bullet_list")
    editor.apply("ordered_list")
    assert editor.is_active("ordered_list")
    assert editor.to_html() == "<ol><li>hello</li></ol>"


def test_blockquote_toggle(editor):
    editor.load_html("<p>wise words</p>")
    editor.apply("blockquote")
    assert editor.is_active("blockquote")
    assert editor.to_html() == "<blockquote><p>wise words</p></blockquote>"

    editor.apply("blockquote")
    assert editor.to_html() == "<p>wise words</p>"


def test_code_block(editor):
    editor.load_html("<p>x = 1</p>")
    editor.apply("code_block")
    assert editor.is_active("code_block")
    assert editor.to_html() == "<pre><code>x = 1</code></pre>"


def test_horizontal_rule(editor):
    editor.load_html("<p>above</p>")
    move_to_end(editor)
    editor.apply("horizontal_rule")
    assert editor.to_html() == "<p>above</p><hr>" + EMPTY_PARAGRAPH


def test_color_set_and_clear(editor):
    editor.load_html("<p>hello</p>")
    select_all(editor)
    editor.apply("color", "#ff0000")
    assert editor.to_html() == '<p><span style="color: #ff0000">hello</span></p>'
    assert editor.style.text_color == "#ff0000"

    editor.apply("color", "")
    assert editor.to_html() == "<p>hello</p>"
    assert editor.style.text_color is None


def test_highlight(editor):
    editor.load_html("<p>hello</p>")
    select_all(editor)
    editor.apply("highlight", "#fef08a")
    assert editor.to_html() == (
        '<p><mark data-color="#fef08a" style="background-color: #fef08a">hello</mark></p>'
    )
    assert editor.style.highlight_color == "#fef08a"


def test_marks_survive_save_and_reload(editor):
    editor.load_html("<p>hello</p>")
    select_all(editor)
    editor.apply("highlight", "#fef08a")
    editor.apply("color", "#ef4444")
    editor.apply("font_family", "Georgia")
    saved = editor.to_html()
    assert 'style="color: #ef4444"' in saved

    editor.load_html(saved)
    assert editor.to_html() == saved


def test_highlight_alone_reloads_without_text_color(editor):
    editor.load_html(
        '<p><mark data-color="#fef08a" style="background-color: #fef08a">hi</mark></p>'
    )
    move_to_end(editor)
    assert editor.current_marks().highlight == "#fef08a"
    assert editor.current_marks().color is None


def test_font_family_mark(editor):
    editor.load_html("<p>hello</p>")
    select_all(editor)
    editor.apply("font_family", "Georgia")
    assert editor.to_html() == '<p><span style="font-family: Georgia">hello</span></p>'
    assert editor.style.font_family == "Georgia"


def test_font_family_and_inline_code_clear_back_to_plain(editor):
    editor.load_html("<p>hello</p>")
    select_all(editor)
    editor.apply("font_family", "Georgia")
    editor.apply("font_family", "")
    assert editor.to_html() == "<p>hello</p>"
    assert editor.style.font_family is None

    select_all(editor)
    editor.apply("code")
    assert editor.to_html() == "<p><code>hello</code></p>"
    editor.apply("code")
    assert editor.to_html() == "<p>hello</p>"


def test_undo_redo(editor):
    editor.widget.insertPlainText("abc")
    editor.apply("undo")
    assert editor.to_plain_text() == ""
    editor.apply("redo")
    assert editor.to_plain_text() == "abc"


def test_document_font_is_not_an_edit(editor):
    calls = []
    editor.on_change(lambda: calls.append(True))
    editor.set_document_font("Lora")
    assert editor.document_font() == "Lora"
    assert calls == []
