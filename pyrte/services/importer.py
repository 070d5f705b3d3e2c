from __future__ import annotations

import html
import re

from pyrte.domain.errors import UnreadableFileError
from pyrte.domain.models import ImportSuccess
from pyrte.utils.constants import EMPTY_PARAGRAPH, UNREADABLE_MESSAGE

_HTML_OPEN_RE = re.compile(r"<\s*html[\s>]", re.IGNORECASE)


def decode_text(data: bytes) -> str:
    try:
        return data.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise UnreadableFileError(UNREADABLE_MESSAGE) from e


def is_html(ext: str, mime: str, content: str) -> bool:
    return (
        ext in ("html", "htm")
        or "text/html" in (mime or "").lower()
        or _HTML_OPEN_RE.search(content) is not None
    )


def paragraphs_from_text(text: str) -> list[str]:
    """One entry per input line; whitespace-only lines become empty paragraphs."""
    out: list[str] = []
    for line in text.split("\n"):
        line = line.removesuffix("\r")
        out.append(line if line.strip() else "")
    return out


def plain_text_to_html(text: str) -> str:
    return "".join(
        f"<p>{html.escape(p, quote=False)}</p>" if p else EMPTY_PARAGRAPH
        for p in paragraphs_from_text(text)
    )


def import_text(content: str, *, ext: str = "", mime: str = "") -> ImportSuccess:
    """
    Text/HTML import. HTML is trusted and loaded verbatim; anything else is
    turned into one paragraph per line with no further inference.
    """
    if is_html(ext, mime, content):
        return ImportSuccess(html=content, text=content)
    return ImportSuccess(html=plain_text_to_html(content), text=content)
