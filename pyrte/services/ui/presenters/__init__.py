from __future__ import annotations

from .document_presenter import DocumentPresenter, IDocumentView

__all__ = ["DocumentPresenter", "IDocumentView"]
