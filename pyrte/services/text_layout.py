"""
Page layout for the PDF exporter, kept free of Qt so it can be tested with
any width function.

Lines are placed top to bottom in boxes of a fixed line height. The y
coordinate of a placed line is its text baseline: the top of its box plus the
font ascent, measured from the top edge of the page.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass

from pyrte.utils.constants import PDF_LINE_HEIGHT, PDF_MARGIN, PDF_PAGE_HEIGHT, PDF_PAGE_WIDTH

Measure = Callable[[str], float]


@dataclass(frozen=True)
class PageGeometry:
    width: float = PDF_PAGE_WIDTH
    height: float = PDF_PAGE_HEIGHT
    margin: float = PDF_MARGIN
    line_height: float = PDF_LINE_HEIGHT

    @property
    def max_width(self) -> float:
        return self.width - 2 * self.margin


@dataclass(frozen=True)
class PlacedLine:
    page: int
    x: float
    y: float
    text: str


def _break_word(word: str, max_width: float, measure: Measure) -> list[str]:
    pieces: list[str] = []
    current = ""
    for ch in word:
        if current and measure(current + ch) > max_width:
            pieces.append(current)
            current = ch
        else:
            current += ch
    if current:
        pieces.append(current)
    return pieces


def _wrap_paragraph(paragraph: str, max_width: float, measure: Measure) -> list[str]:
    words = paragraph.split()
    if not words:
        return [""]

    lines: list[str] = []
    current = ""
    for word in words:
        candidate = f"{current} {word}" if current else word
        if measure(candidate) <= max_width:
            current = candidate
            continue
        if current:
            lines.append(current)
            current = ""
        if measure(word) <= max_width:
            current = word
            continue
        *full, rest = _break_word(word, max_width, measure)
        lines.extend(full)
        current = rest
    lines.append(current)
    return lines


def wrap_lines(text: str, max_width: float, measure: Measure) -> list[str]:
    """
    Split text into lines no wider than max_width.

    Hard line breaks are kept, an empty source line stays an empty output
    line, and a word wider than max_width is broken by characters.
    """
    out: list[str] = []
    for paragraph in text.replace("\r\n", "\n").split("\n"):
        out.extend(_wrap_paragraph(paragraph, max_width, measure))
    return out


def paginate(
    lines: Iterable[str], geometry: PageGeometry | None = None, *, ascent: float = 0.0
) -> list[PlacedLine]:
    """
    Place lines onto pages. A new page starts whenever the next line box would
    cross the bottom margin. With ascent 0 the returned y is the top of the box.
    """
    g = geometry or PageGeometry()
    placed: list[PlacedLine] = []
    page = 0
    top = g.margin
    for line in lines:
        if top + g.line_height > g.height - g.margin:
            page += 1
            top = g.margin
        placed.append(PlacedLine(page=page, x=g.margin, y=top + ascent, text=line))
        top += g.line_height
    return placed


def page_count(placed: list[PlacedLine]) -> int:
    return placed[-1].page + 1 if placed else 1
