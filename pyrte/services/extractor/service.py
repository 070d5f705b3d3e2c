"""HTTP front for the document parsers (POST /parse-document)."""

from __future__ import annotations

import logging

from fastapi import FastAPI, File, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from pyrte.domain.errors import UnsupportedFileTypeError
from pyrte.services.extractor.parsers import parse_document

logger = logging.getLogger(__name__)


def _error(status: int, message: str) -> JSONResponse:
    return JSONResponse({"success": False, "error": message}, status_code=status)


def create_app() -> FastAPI:
    app = FastAPI(title="pyrte parse-document", version="1.0")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["POST", "OPTIONS"],
        allow_headers=["authorization", "x-client-info", "apikey", "content-type"],
    )

    @app.post("/parse-document")
    async def parse(file: UploadFile | None = File(None)) -> JSONResponse:
        if file is None or not file.filename:
            return _error(400, "No file provided")

        try:
            data = await file.read()
            parsed = parse_document(data, file.filename)
        except UnsupportedFileTypeError as e:
            return _error(400, str(e))
        except Exception as e:
            logger.exception("Error parsing document")
            return _error(500, str(e) or "Failed to parse document")

        return JSONResponse(
            {
                "success": True,
                "text": parsed.text,
                "html": parsed.html,
                "fileName": file.filename,
            }
        )

    return app


def main() -> int:
    import uvicorn

    logging.basicConfig(level=logging.INFO)
    uvicorn.run(create_app(), host="127.0.0.1", port=8000)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
