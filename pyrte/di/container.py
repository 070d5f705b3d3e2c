from __future__ import annotations

import sqlite3

from PyQt6.QtCore import QSettings

from pyrte.domain.interfaces import (
    IDocumentExtractor,
    IDocumentRepository,
    IExporterRegistry,
    IFileService,
    ISettingsService,
)
from pyrte.domain.models import User
from pyrte.services.config.app_config import AppConfig, build_app_config
from pyrte.services.dashboard import DashboardService
from pyrte.services.exporters import ExporterRegistry, default_exporters
from pyrte.services.extractor import HttpDocumentExtractor, LocalDocumentExtractor
from pyrte.services.file_service import FileService
from pyrte.services.settings_service import SettingsService
from pyrte.services.storage import AuthService, SqliteDocumentRepository, open_database
from pyrte.services.ui.adapters import QtFileDialogService, QtMessageService
from pyrte.services.ui.login_dialog import LoginDialog
from pyrte.services.ui.main_window import MainWindow
from pyrte.services.ui.ports import IFileDialogService, IMessageService
from pyrte.services.ui.presenters import DocumentPresenter
from pyrte.utils.constants import APP_NAME, APP_ORG


class Container:
    """
    Lightweight DI container:
      - Wires default services if not provided
      - Registers the built-in exporters in its own registry instance
      - Builds the login dialog, the main window and its presenter
    """

    def __init__(
        self,
        config: AppConfig | None = None,
        *,
        files: IFileService | None = None,
        settings: ISettingsService | None = None,
        qsettings: QSettings | None = None,
        dialogs: IFileDialogService | None = None,
        messages: IMessageService | None = None,
        extractor: IDocumentExtractor | None = None,
        connection: sqlite3.Connection | None = None,
        repository: IDocumentRepository | None = None,
        exporters: IExporterRegistry | None = None,
    ) -> None:
        self.config = config or build_app_config()

        # Core services (defaults if not supplied)
        self.file_service: IFileService = files or FileService()
        self.settings_service: ISettingsService = settings or SettingsService(
            qsettings or QSettings()
        )
        self.dialogs: IFileDialogService = dialogs or QtFileDialogService()
        self.messages: IMessageService = messages or QtMessageService()
        self.extractor: IDocumentExtractor = extractor or self._build_extractor()

        self.connection = connection or open_database(self.config.database_path())
        self.repository: IDocumentRepository = repository or SqliteDocumentRepository(
            self.connection
        )
        self.auth = AuthService(self.connection)

        self.exporters: IExporterRegistry = exporters or ExporterRegistry()
        self._ensure_builtin_exporters()

    @staticmethod
    def default(
        qsettings: QSettings | None = None,
        *,
        organization: str = APP_ORG,
        application: str = APP_NAME,
        config: AppConfig | None = None,
    ) -> Container:
        if qsettings is None:
            qsettings = QSettings(organization, application)
        return Container(config=config, qsettings=qsettings)

    # ---------- Internals ----------

    def _build_extractor(self) -> IDocumentExtractor:
        if self.config.extractor_mode() == "remote":
            return HttpDocumentExtractor(
                self.config.extractor_url(),
                timeout=self.config.extractor_timeout(),
                api_key=self.config.extractor_api_key(),
            )
        return LocalDocumentExtractor()

    def _ensure_builtin_exporters(self) -> None:
        for exporter in default_exporters():
            try:
                self.exporters.get(exporter.name)
            except KeyError:
                self.exporters.register(exporter)

    # ---------- UI factories ----------

    def build_login_dialog(self, parent=None) -> LoginDialog:
        return LoginDialog(self.auth, email=self.settings_service.get_last_email(), parent=parent)

    def build_document_presenter(self, window: MainWindow, user: User) -> DocumentPresenter:
        return DocumentPresenter(
            view=window,
            editor=window.editor,
            repository=self.repository,
            user=user,
            extractor=self.extractor,
            exporters=self.exporters,
            files=self.file_service,
            messages=self.messages,
            dialogs=self.dialogs,
            autosave_delay_ms=self.config.autosave_delay_ms(),
            default_font=self.config.default_font(),
        )

    def build_main_window(self, user: User, *, app_title: str = APP_NAME) -> MainWindow:
        """Create the window for a signed-in user with its presenter attached."""
        window = MainWindow(
            dashboard=DashboardService(self.repository, user),
            settings=self.settings_service,
            messages=self.messages,
            exporters=self.exporters,
            app_title=f"{app_title} - {user.email}",
        )
        window.attach_presenter(self.build_document_presenter(window, user))
        return window
