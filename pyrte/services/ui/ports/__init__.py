from __future__ import annotations

from .dialogs import IFileDialogService
from .messages import IMessageService, Question

__all__ = [
    "IFileDialogService",
    "IMessageService",
    "Question",
]
