from __future__ import annotations

from enum import Enum, auto
from typing import Any, Protocol, runtime_checkable


class Question(Enum):
    """Kind of confirmation to ask for (maps onto QMessageBox buttons)."""

    YES_NO = auto()
    DESTRUCTIVE = auto()  # e.g. "Delete document?", default button is Cancel


@runtime_checkable
class IMessageService(Protocol):
    """
    UI port for user-visible notices. Services report import/export/save
    outcomes here instead of talking to widgets.
    """

    def info(self, parent: Any | None, title: str, text: str) -> None: ...
    def warning(self, parent: Any | None, title: str, text: str) -> None: ...
    def error(self, parent: Any | None, title: str, text: str) -> None: ...

    def ask(
        self,
        parent: Any | None,
        title: str,
        text: str,
        kind: Question = Question.YES_NO,
    ) -> bool:
        """True for the affirmative answer (Yes / Delete), False otherwise."""
        ...
