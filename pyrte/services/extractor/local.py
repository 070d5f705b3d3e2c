from __future__ import annotations

import logging

from pyrte.domain.errors import PyRteError
from pyrte.domain.interfaces import IDocumentExtractor
from pyrte.domain.models import ImportFailure, ImportResult, ImportSuccess
from pyrte.services.extractor.parsers import parse_document

logger = logging.getLogger(__name__)


class LocalDocumentExtractor(IDocumentExtractor):
    """Runs the PDF/DOCX parsers in-process instead of calling the HTTP service."""

    def extract(self, data: bytes, filename: str) -> ImportResult:
        try:
            parsed = parse_document(data, filename)
        except PyRteError as e:
            return ImportFailure(reason=str(e))
        except Exception as e:
            logger.exception("Error parsing document %s", filename)
            return ImportFailure(reason=str(e) or "Failed to parse document")
        return ImportSuccess(html=parsed.html, text=parsed.text)
