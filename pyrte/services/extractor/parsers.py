"""PDF/DOCX parsing into normalized HTML + plain text."""

from __future__ import annotations

import html
import io
import logging
import re
from dataclasses import dataclass

import mammoth
import pymupdf

from pyrte.domain.errors import LegacyDocumentError, UnsupportedFileTypeError
from pyrte.services.sniffer import file_extension
from pyrte.utils.constants import LEGACY_DOC_MESSAGE

logger = logging.getLogger(__name__)

_PARAGRAPH_SPLIT_RE = re.compile(r"\n\n+")
_TAG_RE = re.compile(r"<[^>]+>")
_WS_RE = re.compile(r"\s+")


@dataclass(frozen=True)
class ParsedDocument:
    html: str
    text: str


def text_to_paragraph_html(text: str) -> str:
    paragraphs = [p for p in _PARAGRAPH_SPLIT_RE.split(text) if p.strip()]
    return "".join(
        "<p>" + html.escape(p, quote=False).replace("\n", "<br/>") + "</p>" for p in paragraphs
    )


def parse_pdf(data: bytes) -> ParsedDocument:
    doc = pymupdf.open(stream=data, filetype="pdf")
    try:
        pages: list[str] = []
        for page in doc:
            pieces = [p for p in page.get_text("text").split("\n") if p.strip()]
            pages.append(" ".join(pieces))
    finally:
        doc.close()

    text = "\n\n".join(pages).strip()
    return ParsedDocument(html=text_to_paragraph_html(text), text=text)


def parse_docx(data: bytes) -> ParsedDocument:
    result = mammoth.convert_to_html(io.BytesIO(data))
    for msg in result.messages:
        logger.debug("mammoth: %s", msg)
    markup = result.value or ""
    text = _WS_RE.sub(" ", _TAG_RE.sub(" ", markup)).strip()
    return ParsedDocument(html=markup, text=text)


def parse_document(data: bytes, filename: str) -> ParsedDocument:
    """
    Dispatch on the file extension.

    Raises LegacyDocumentError for .doc and UnsupportedFileTypeError for
    anything that is neither PDF nor DOCX. Parser errors propagate as-is.
    """
    ext = file_extension(filename)
    if ext == "pdf":
        parsed = parse_pdf(data)
    elif ext == "docx":
        parsed = parse_docx(data)
    elif ext == "doc":
        raise LegacyDocumentError(LEGACY_DOC_MESSAGE)
    else:
        raise UnsupportedFileTypeError("Unsupported file type")

    logger.info("Parsed %s: %d chars", filename.lower(), len(parsed.text))
    return parsed
