from __future__ import annotations

import logging

from PyQt6.QtWidgets import (
    QDialog,
    QGridLayout,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPushButton,
    QVBoxLayout,
)

from pyrte.domain.errors import AuthError
from pyrte.domain.models import User
from pyrte.services.storage.auth import AuthService

logger = logging.getLogger(__name__)


class LoginDialog(QDialog):
    """Sign in or create a local account before the dashboard opens."""

    def __init__(self, auth: AuthService, *, email: str = "", parent=None):
        super().__init__(parent)
        self.setWindowTitle("Sign in")
        self.setModal(True)
        self._auth = auth
        self.user: User | None = None

        # Widgets
        self.email_edit = QLineEdit(email)
        self.email_edit.setPlaceholderText("you@example.com")
        self.password_edit = QLineEdit()
        self.password_edit.setEchoMode(QLineEdit.EchoMode.Password)
        self.error_label = QLabel("")
        self.error_label.setStyleSheet("color: #ef4444")
        self.error_label.setWordWrap(True)

        self.sign_in_btn = QPushButton("Sign In")
        self.sign_in_btn.setDefault(True)
        self.sign_up_btn = QPushButton("Create Account")
        self.cancel_btn = QPushButton("Cancel")

        # Layout
        form = QGridLayout()
        form.addWidget(QLabel("Email:"), 0, 0)
        form.addWidget(self.email_edit, 0, 1)
        form.addWidget(QLabel("Password:"), 1, 0)
        form.addWidget(self.password_edit, 1, 1)

        buttons = QHBoxLayout()
        buttons.addWidget(self.sign_in_btn)
        buttons.addWidget(self.sign_up_btn)
        buttons.addStretch(1)
        buttons.addWidget(self.cancel_btn)

        root = QVBoxLayout(self)
        root.addLayout(form)
        root.addWidget(self.error_label)
        root.addLayout(buttons)

        # Signals
        self.sign_in_btn.clicked.connect(self.sign_in)
        self.sign_up_btn.clicked.connect(self.sign_up)
        self.cancel_btn.clicked.connect(self.reject)

        if email:
            self.password_edit.setFocus()

    def sign_in(self) -> None:
        self._attempt(self._auth.sign_in)

    def sign_up(self) -> None:
        self._attempt(self._auth.sign_up)

    def _attempt(self, action) -> None:
        try:
            self.user = action(self.email_edit.text(), self.password_edit.text())
        except AuthError as e:
            logger.info("Authentication failed for %r: %s", self.email_edit.text(), e)
            self.error_label.setText(str(e))
            self.password_edit.selectAll()
            return
        self.error_label.setText("")
        self.accept()
