from __future__ import annotations

from collections.abc import Callable

from PyQt6.QtGui import (
    QBrush,
    QColor,
    QFont,
    QTextBlock,
    QTextBlockFormat,
    QTextCharFormat,
    QTextCursor,
    QTextFormat,
    QTextLength,
    QTextListFormat,
)
from PyQt6.QtWidgets import QTextEdit

from pyrte.domain.models import StyleSelection
from pyrte.services.html_serializer import (
    BACKGROUND_PROPERTY,
    FONT_FAMILIES_PROPERTY,
    FOREGROUND_PROPERTY,
    HR_PROPERTY,
    QUOTE_LEVEL_PROPERTY,
    Marks,
    document_to_html,
    marks_of,
    quote_level,
)

FONT_SIZE_ADJUSTMENT_PROPERTY = QTextFormat.Property.FontSizeAdjustment.value

COMMANDS = (
    "bold",
    "italic",
    "strike",
    "code",
    "heading",
    "paragraph",
    "bullet_list",
    "ordered_list",
    "blockquote",
    "code_block",
    "horizontal_rule",
    "color",
    "highlight",
    "font_family",
    "undo",
    "redo",
)

_QUOTE_INDENT = 40.0
_MONOSPACE = "monospace"


class QtRichTextEditor:
    """
    Adapter over a QTextEdit that satisfies IRichTextEditor.

    Formatting is applied through named commands so that presenters and
    tests never need the QTextCursor API.
    """

    def __init__(self, edit: QTextEdit) -> None:
        self._e = edit
        self._e.setAcceptRichText(True)
        self._callbacks: list[Callable[[], None]] = []
        self._loading = False
        self.style = StyleSelection()
        self._e.textChanged.connect(self._emit_change)
        self._e.currentCharFormatChanged.connect(self._track_style)

    @property
    def widget(self) -> QTextEdit:
        return self._e

    # ---------- IRichTextEditor ----------

    def to_html(self) -> str:
        return document_to_html(self._e.document())

    def to_plain_text(self) -> str:
        return self._e.document().toPlainText()

    def set_html(self, html: str) -> None:
        """Replace the whole document; listeners are notified."""
        self._e.setHtml(html)

    def load_html(self, html: str) -> None:
        """Replace the whole document without notifying listeners (opening a saved record)."""
        self._loading = True
        try:
            self._e.setHtml(html)
        finally:
            self._loading = False

    def on_change(self, callback: Callable[[], None]) -> None:
        self._callbacks.append(callback)

    def apply(self, command: str, value: object | None = None) -> None:
        handler = getattr(self, f"_cmd_{command}", None)
        if command not in COMMANDS or handler is None:
            raise ValueError(f"Unknown editor command: {command}")
        handler(value)

    # ---------- extras used by the window ----------

    def set_document_font(self, family: str) -> None:
        """Document-wide font; not reported as an edit."""
        self._loading = True
        try:
            self._e.document().setDefaultFont(QFont(family))
        finally:
            self._loading = False

    def document_font(self) -> str:
        return self._e.document().defaultFont().family()

    def current_marks(self) -> Marks:
        return marks_of(self._e.currentCharFormat())

    def heading_level(self) -> int:
        return self._e.textCursor().blockFormat().headingLevel()

    def is_active(self, command: str) -> bool:
        """Toolbar state for toggle commands at the caret."""
        m = self.current_marks()
        cursor = self._e.textCursor()
        lst = cursor.currentList()
        if command in ("bold", "italic", "strike", "code"):
            return getattr(m, command)
        if command == "bullet_list":
            return lst is not None and lst.format().style() == QTextListFormat.Style.ListDisc
        if command == "ordered_list":
            return lst is not None and lst.format().style() == QTextListFormat.Style.ListDecimal
        if command == "blockquote":
            return quote_level(cursor.block()) > 0
        if command == "code_block":
            return cursor.blockFormat().nonBreakableLines()
        return False

    # ---------- inline marks ----------

    def _cmd_bold(self, _value: object | None) -> None:
        fmt = QTextCharFormat()
        bold = self.current_marks().bold
        fmt.setFontWeight(QFont.Weight.Normal if bold else QFont.Weight.Bold)
        self._e.mergeCurrentCharFormat(fmt)

    def _cmd_italic(self, _value: object | None) -> None:
        fmt = QTextCharFormat()
        fmt.setFontItalic(not self.current_marks().italic)
        self._e.mergeCurrentCharFormat(fmt)

    def _cmd_strike(self, _value: object | None) -> None:
        fmt = QTextCharFormat()
        fmt.setFontStrikeOut(not self.current_marks().strike)
        self._e.mergeCurrentCharFormat(fmt)

    def _cmd_code(self, _value: object | None) -> None:
        if self.current_marks().code:
            self._clear_char_properties(FONT_FAMILIES_PROPERTY)
            fmt = QTextCharFormat()
            fmt.setFontFixedPitch(False)
            self._e.mergeCurrentCharFormat(fmt)
            return
        fmt = QTextCharFormat()
        fmt.setFontFixedPitch(True)
        fmt.setFontFamilies([_MONOSPACE])
        self._e.mergeCurrentCharFormat(fmt)

    def _cmd_color(self, value: object | None) -> None:
        color = str(value) if value else ""
        if not color:
            self._clear_char_properties(FOREGROUND_PROPERTY)
        else:
            fmt = QTextCharFormat()
            fmt.setForeground(QBrush(QColor(color)))
            self._e.mergeCurrentCharFormat(fmt)
        self.style = self.style.with_value("text_color", color)

    def _cmd_highlight(self, value: object | None) -> None:
        color = str(value) if value else ""
        if not color:
            self._clear_char_properties(BACKGROUND_PROPERTY)
        else:
            fmt = QTextCharFormat()
            fmt.setBackground(QBrush(QColor(color)))
            self._e.mergeCurrentCharFormat(fmt)
        self.style = self.style.with_value("highlight_color", color)

    def _cmd_font_family(self, value: object | None) -> None:
        family = str(value) if value else ""
        if not family:
            self._clear_char_properties(FONT_FAMILIES_PROPERTY)
        else:
            fmt = QTextCharFormat()
            fmt.setFontFamilies([family])
            self._e.mergeCurrentCharFormat(fmt)
        self.style = self.style.with_value("font_family", family)

    # ---------- block formats ----------

    def _cmd_heading(self, value: object | None) -> None:
        level = int(value) if value is not None else 1
        if not 1 <= level <= 3:
            raise ValueError(f"Heading level must be 1..3, got {level}")
        if self.heading_level() == level:
            self._cmd_paragraph(None)
            return

        cursor = self._e.textCursor()
        cursor.beginEditBlock()
        for block in self._selected_blocks(cursor):
            c = self._select_block(block)
            bf = block.blockFormat()
            bf.setHeadingLevel(level)
            c.setBlockFormat(bf)
            cf = QTextCharFormat()
            cf.setFontWeight(QFont.Weight.Bold)
            cf.setProperty(FONT_SIZE_ADJUSTMENT_PROPERTY, 4 - level)
            c.mergeCharFormat(cf)
            c.mergeBlockCharFormat(cf)
        cursor.endEditBlock()

    def _cmd_paragraph(self, _value: object | None) -> None:
        cursor = self._e.textCursor()
        cursor.beginEditBlock()
        for block in self._selected_blocks(cursor):
            lst = block.textList()
            if lst is not None:
                lst.remove(block)
            c = self._select_block(block)
            bf = block.blockFormat()
            bf.setHeadingLevel(0)
            bf.setIndent(0)
            bf.setNonBreakableLines(False)
            bf.clearProperty(QUOTE_LEVEL_PROPERTY)
            bf.setLeftMargin(0)
            bf.setRightMargin(0)
            c.setBlockFormat(bf)
            cf = QTextCharFormat()
            cf.setFontWeight(QFont.Weight.Normal)
            cf.setProperty(FONT_SIZE_ADJUSTMENT_PROPERTY, 0)
            cf.setFontFixedPitch(False)
            c.mergeCharFormat(cf)
            c.mergeBlockCharFormat(cf)
        cursor.endEditBlock()

    def _cmd_bullet_list(self, _value: object | None) -> None:
        self._toggle_list(QTextListFormat.Style.ListDisc)

    def _cmd_ordered_list(self, _value: object | None) -> None:
        self._toggle_list(QTextListFormat.Style.ListDecimal)

    def _toggle_list(self, style: QTextListFormat.Style) -> None:
        cursor = self._e.textCursor()
        lst = cursor.currentList()
        cursor.beginEditBlock()
        if lst is None:
            cursor.createList(style)
        elif lst.format().style() == style:
            for block in self._selected_blocks(cursor):
                owner = block.textList()
                if owner is None:
                    continue
                owner.remove(block)
                bf = block.blockFormat()
                bf.setIndent(0)
                self._select_block(block).setBlockFormat(bf)
        else:
            fmt = lst.format()
            fmt.setStyle(style)
            lst.setFormat(fmt)
        cursor.endEditBlock()

    def _cmd_blockquote(self, _value: object | None) -> None:
        cursor = self._e.textCursor()
        quoted = quote_level(cursor.block()) > 0
        cursor.beginEditBlock()
        for block in self._selected_blocks(cursor):
            bf = block.blockFormat()
            if quoted:
                bf.clearProperty(QUOTE_LEVEL_PROPERTY)
                bf.setLeftMargin(0)
                bf.setRightMargin(0)
            else:
                bf.setProperty(QUOTE_LEVEL_PROPERTY, 1)
                bf.setLeftMargin(_QUOTE_INDENT)
                bf.setRightMargin(_QUOTE_INDENT)
            self._select_block(block).setBlockFormat(bf)
        cursor.endEditBlock()

    def _cmd_code_block(self, _value: object | None) -> None:
        cursor = self._e.textCursor()
        on = not cursor.blockFormat().nonBreakableLines()
        cursor.beginEditBlock()
        for block in self._selected_blocks(cursor):
            c = self._select_block(block)
            bf = block.blockFormat()
            bf.setNonBreakableLines(on)
            c.setBlockFormat(bf)
            cf = QTextCharFormat()
            cf.setFontFixedPitch(on)
            c.mergeCharFormat(cf)
            c.mergeBlockCharFormat(cf)
        cursor.endEditBlock()

    def _cmd_horizontal_rule(self, _value: object | None) -> None:
        cursor = self._e.textCursor()
        cursor.beginEditBlock()
        rule = QTextBlockFormat()
        rule.setProperty(HR_PROPERTY, QTextLength(QTextLength.Type.PercentageLength, 100))
        cursor.insertBlock(rule)
        cursor.insertBlock(QTextBlockFormat())
        cursor.endEditBlock()
        self._e.setTextCursor(cursor)

    def _cmd_undo(self, _value: object | None) -> None:
        self._e.undo()

    def _cmd_redo(self, _value: object | None) -> None:
        self._e.redo()

    # ---------- helpers ----------

    def _selected_blocks(self, cursor: QTextCursor) -> list[QTextBlock]:
        doc = self._e.document()
        first = doc.findBlock(cursor.selectionStart())
        last = doc.findBlock(cursor.selectionEnd())
        blocks = []
        block = first
        while block.isValid():
            blocks.append(block)
            if block == last:
                break
            block = block.next()
        return blocks

    def _select_block(self, block: QTextBlock) -> QTextCursor:
        c = QTextCursor(block)
        c.movePosition(QTextCursor.MoveOperation.EndOfBlock, QTextCursor.MoveMode.KeepAnchor)
        return c

    def _clear_char_properties(self, *props: int) -> None:
        """Remove character properties from the selection, or from the typing format."""
        cursor = self._e.textCursor()
        if not cursor.hasSelection():
            fmt = self._e.currentCharFormat()
            for p in props:
                fmt.clearProperty(p)
            self._e.setCurrentCharFormat(fmt)
            return

        start, end = cursor.selectionStart(), cursor.selectionEnd()
        c = QTextCursor(self._e.document())
        c.beginEditBlock()
        for pos in range(start, end):
            c.setPosition(pos)
            c.setPosition(pos + 1, QTextCursor.MoveMode.KeepAnchor)
            fmt = c.charFormat()
            for p in props:
                fmt.clearProperty(p)
            c.setCharFormat(fmt)
        c.endEditBlock()

    def _emit_change(self) -> None:
        if self._loading:
            return
        for cb in list(self._callbacks):
            cb()

    def _track_style(self, fmt: QTextCharFormat) -> None:
        m = marks_of(fmt)
        self.style = StyleSelection(
            font_family=m.font_family, text_color=m.color, highlight_color=m.highlight
        )
