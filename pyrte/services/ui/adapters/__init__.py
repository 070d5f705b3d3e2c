from __future__ import annotations

from .qt_dialogs import QtFileDialogService
from .qt_messages import QtMessageService
from .qt_rich_text_editor import QtRichTextEditor

__all__ = [
    "QtFileDialogService",
    "QtMessageService",
    "QtRichTextEditor",
]
