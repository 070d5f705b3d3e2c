"""
Serialize a QTextDocument into semantic HTML.

Qt's own toHtml() emits a full page of inline styles. The editor stores and
exports the document as plain semantic markup instead: headings, paragraphs,
lists, blockquotes, code blocks and rules, with inline marks for bold,
italic, strike, inline code, text colour, highlight and font family.
"""

from __future__ import annotations

import html
from dataclasses import dataclass

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QTextBlock, QTextCharFormat, QTextDocument, QTextFormat, QTextListFormat

from pyrte.utils.constants import EMPTY_PARAGRAPH

HR_PROPERTY = QTextFormat.Property.BlockTrailingHorizontalRulerWidth.value
QUOTE_LEVEL_PROPERTY = QTextFormat.Property.BlockQuoteLevel.value
FONT_FAMILIES_PROPERTY = QTextFormat.Property.FontFamilies.value
FOREGROUND_PROPERTY = QTextFormat.Property.ForegroundBrush.value
BACKGROUND_PROPERTY = QTextFormat.Property.BackgroundBrush.value

# Qt's <blockquote> importer indents by 40px on both sides
_QUOTE_MARGIN = 40.0

_ORDERED_STYLES = {
    QTextListFormat.Style.ListDecimal,
    QTextListFormat.Style.ListLowerAlpha,
    QTextListFormat.Style.ListUpperAlpha,
    QTextListFormat.Style.ListLowerRoman,
    QTextListFormat.Style.ListUpperRoman,
}


@dataclass(frozen=True)
class Marks:
    bold: bool = False
    italic: bool = False
    strike: bool = False
    code: bool = False
    color: str | None = None
    highlight: str | None = None
    font_family: str | None = None


@dataclass
class _Block:
    kind: str  # "p", "h", "li", "quote", "code", "hr"
    inner: str
    level: int = 0
    list_id: int = -1
    ordered: bool = False


def _weight(fmt: QTextCharFormat) -> int:
    w = fmt.fontWeight()
    return int(getattr(w, "value", w))


def _brush_color(fmt: QTextCharFormat, prop: int) -> str | None:
    if not fmt.hasProperty(prop):
        return None
    brush = fmt.brushProperty(prop)
    if brush.style() == Qt.BrushStyle.NoBrush:
        return None
    return brush.color().name()


def _font_family(fmt: QTextCharFormat) -> str | None:
    if fmt.hasProperty(FONT_FAMILIES_PROPERTY):
        families = fmt.fontFamilies()
        if isinstance(families, (list, tuple)) and families:
            return str(families[0])
        if isinstance(families, str) and families:
            return families
    return None


def marks_of(fmt: QTextCharFormat) -> Marks:
    code = fmt.fontFixedPitch()
    return Marks(
        bold=_weight(fmt) >= 600,
        italic=fmt.fontItalic(),
        strike=fmt.fontStrikeOut(),
        code=code,
        color=_brush_color(fmt, FOREGROUND_PROPERTY),
        highlight=_brush_color(fmt, BACKGROUND_PROPERTY),
        font_family=None if code else _font_family(fmt),
    )


def quote_level(block: QTextBlock) -> int:
    bf = block.blockFormat()
    level = bf.intProperty(QUOTE_LEVEL_PROPERTY)
    if level > 0:
        return level
    if (
        block.textList() is None
        and bf.leftMargin() >= _QUOTE_MARGIN
        and bf.rightMargin() >= _QUOTE_MARGIN
    ):
        return 1
    return 0


def _escape_inline(text: str) -> str:
    out = html.escape(text.replace("\ufffc", ""), quote=False)
    out = out.replace("  ", " &nbsp;")
    return out.replace("\u2028", "<br>")


def _escape_code(text: str) -> str:
    return html.escape(text.replace("\ufffc", ""), quote=False).replace("\u2028", "\n")


def _wrap(text: str, m: Marks, *, in_heading: bool) -> str:
    out = text
    if m.code:
        out = f"<code>{out}</code>"
    if m.strike:
        out = f"<s>{out}</s>"
    if m.italic:
        out = f"<em>{out}</em>"
    if m.bold and not in_heading:
        out = f"<strong>{out}</strong>"
    if m.highlight:
        hl = html.escape(m.highlight)
        out = f'<mark data-color="{hl}" style="background-color: {hl}">{out}</mark>'
    if m.color:
        out = f'<span style="color: {html.escape(m.color)}">{out}</span>'
    if m.font_family:
        out = f'<span style="font-family: {html.escape(m.font_family)}">{out}</span>'
    return out


def _runs(block: QTextBlock) -> list[tuple[str, QTextCharFormat]]:
    # Format ranges are in UTF-16 code units, Python strings are not.
    units = block.text().encode("utf-16-le")
    runs = []
    for r in block.textFormats():
        chunk = units[2 * r.start : 2 * (r.start + r.length)].decode("utf-16-le")
        if chunk:
            runs.append((chunk, r.format))
    return runs


def block_inline_html(block: QTextBlock, *, in_heading: bool = False) -> str:
    """Inline markup of one block; consecutive runs with identical marks are merged."""
    parts: list[str] = []
    current: Marks | None = None
    buf: list[str] = []
    for chunk, fmt in _runs(block):
        m = marks_of(fmt)
        if m != current and buf:
            parts.append(_wrap("".join(buf), current, in_heading=in_heading))
            buf = []
        current = m
        buf.append(_escape_inline(chunk))
    if buf and current is not None:
        parts.append(_wrap("".join(buf), current, in_heading=in_heading))
    return "".join(parts)


def _classify(block: QTextBlock) -> _Block:
    bf = block.blockFormat()
    if bf.hasProperty(HR_PROPERTY):
        return _Block("hr", "")
    if bf.nonBreakableLines():
        return _Block("code", _escape_code(block.text()))

    lst = block.textList()
    if lst is not None:
        ordered = lst.format().style() in _ORDERED_STYLES
        return _Block("li", block_inline_html(block), list_id=lst.objectIndex(), ordered=ordered)

    level = bf.headingLevel()
    if level > 0:
        return _Block("h", block_inline_html(block, in_heading=True), level=min(level, 6))
    if quote_level(block) > 0:
        return _Block("quote", block_inline_html(block))
    return _Block("p", block_inline_html(block))


def _blocks(doc: QTextDocument) -> list[_Block]:
    out = []
    block = doc.begin()
    while block.isValid():
        out.append(_classify(block))
        block = block.next()
    return out


def _paragraph(inner: str) -> str:
    return f"<p>{inner}</p>" if inner else EMPTY_PARAGRAPH


def document_to_html(doc: QTextDocument) -> str:
    blocks = _blocks(doc)
    out: list[str] = []
    i = 0
    while i < len(blocks):
        b = blocks[i]
        if b.kind == "li":
            tag = "ol" if b.ordered else "ul"
            items = []
            while i < len(blocks) and blocks[i].kind == "li" and blocks[i].list_id == b.list_id:
                items.append(f"<li>{blocks[i].inner}</li>")
                i += 1
            out.append(f"<{tag}>{''.join(items)}</{tag}>")
            continue
        if b.kind == "quote":
            paras = []
            while i < len(blocks) and blocks[i].kind == "quote":
                paras.append(_paragraph(blocks[i].inner))
                i += 1
            out.append(f"<blockquote>{''.join(paras)}</blockquote>")
            continue
        if b.kind == "code":
            lines = []
            while i < len(blocks) and blocks[i].kind == "code":
                lines.append(blocks[i].inner)
                i += 1
            code = "\n".join(lines)
            out.append(f"<pre><code>{code}</code></pre>")
            continue

        if b.kind == "hr":
            out.append("<hr>")
        elif b.kind == "h":
            out.append(f"<h{b.level}>{b.inner}</h{b.level}>")
        else:
            out.append(_paragraph(b.inner))
        i += 1
    return "".join(out)
