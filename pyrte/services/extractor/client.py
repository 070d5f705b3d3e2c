from __future__ import annotations

import logging
import mimetypes

import httpx

from pyrte.domain.errors import ExtractionFailedError
from pyrte.domain.interfaces import IDocumentExtractor
from pyrte.domain.models import ImportFailure, ImportResult, ImportSuccess

logger = logging.getLogger(__name__)

_DEFAULT_URL = "http://127.0.0.1:8000/parse-document"


class HttpDocumentExtractor(IDocumentExtractor):
    """Uploads the file to the parse-document service as multipart form data."""

    def __init__(
        self,
        url: str = _DEFAULT_URL,
        *,
        timeout: float = 30.0,
        api_key: str | None = None,
        client: httpx.Client | None = None,
    ) -> None:
        self._url = url
        self._timeout = timeout
        self._headers = {"Authorization": f"Bearer {api_key}"} if api_key else {}
        self._client = client

    def extract(self, data: bytes, filename: str) -> ImportResult:
        mime = mimetypes.guess_type(filename)[0] or "application/octet-stream"
        files = {"file": (filename, data, mime)}
        try:
            if self._client is not None:
                resp = self._client.post(
                    self._url, files=files, headers=self._headers, timeout=self._timeout
                )
            else:
                with httpx.Client(timeout=self._timeout) as client:
                    resp = client.post(self._url, files=files, headers=self._headers)
        except httpx.HTTPError as e:
            logger.warning("Extractor call failed for %s: %s", filename, e)
            raise ExtractionFailedError(f"Could not reach the document service: {e}") from e

        try:
            body = resp.json()
        except ValueError as e:
            raise ExtractionFailedError(
                f"Document service returned HTTP {resp.status_code}"
            ) from e
        if not isinstance(body, dict):
            raise ExtractionFailedError("Document service returned an invalid response")

        if not body.get("success"):
            return ImportFailure(reason=body.get("error") or "Failed to parse document")
        return ImportSuccess(html=body.get("html") or "", text=body.get("text") or "")
