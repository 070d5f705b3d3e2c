from __future__ import annotations

from typing import Any

from PyQt6.QtWidgets import QMessageBox, QStatusBar

from pyrte.services.ui.ports.messages import IMessageService, Question


class QtMessageService(IMessageService):
    """
    Qt-backed notices. Errors are modal; informational notices go to the
    status bar when one is attached, the way a toast would.
    """

    def __init__(self, status_bar: QStatusBar | None = None, timeout_ms: int = 4000) -> None:
        self._status_bar = status_bar
        self._timeout_ms = timeout_ms

    def attach_status_bar(self, status_bar: QStatusBar) -> None:
        self._status_bar = status_bar

    def info(self, parent: Any | None, title: str, text: str) -> None:
        if self._status_bar is not None:
            self._status_bar.showMessage(f"{title}: {text}", self._timeout_ms)
            return
        QMessageBox.information(parent, title, text)

    def warning(self, parent: Any | None, title: str, text: str) -> None:
        QMessageBox.warning(parent, title, text)

    def error(self, parent: Any | None, title: str, text: str) -> None:
        QMessageBox.critical(parent, title, text)

    def ask(
        self,
        parent: Any | None,
        title: str,
        text: str,
        kind: Question = Question.YES_NO,
    ) -> bool:
        if kind is Question.DESTRUCTIVE:
            resp = QMessageBox.warning(
                parent,
                title,
                text,
                QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.Cancel,
                QMessageBox.StandardButton.Cancel,
            )
            return resp == QMessageBox.StandardButton.Yes
        resp = QMessageBox.question(
            parent,
            title,
            text,
            QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No,
        )
        return resp == QMessageBox.StandardButton.Yes
