from __future__ import annotations

import logging
from collections.abc import Sequence

from PyQt6.QtWidgets import QApplication, QDialog

from pyrte.di.container import Container
from pyrte.services.config.app_config import AppConfig, build_app_config
from pyrte.utils.constants import APP_NAME, APP_ORG

logger = logging.getLogger(__name__)


def configure_logging(config: AppConfig) -> None:
    level = getattr(logging, config.log_level(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def run_app(argv: Sequence[str]) -> int:
    """
    Bootstraps Qt, composes the application via the DI container, asks the
    user to sign in and launches the main window.
    """
    config = build_app_config()
    configure_logging(config)
    logger.info("Starting %s %s", APP_NAME, config.get_version())
    if config.loaded_from:
        logger.info("Config: %s", config.loaded_from)

    QApplication.setOrganizationName(APP_ORG)
    QApplication.setApplicationName(APP_NAME)
    QApplication.setApplicationVersion(config.get_version())
    app = QApplication(list(argv))

    container = Container.default(config=config)

    login = container.build_login_dialog()
    if login.exec() != QDialog.DialogCode.Accepted or login.user is None:
        logger.info("Sign in cancelled")
        return 0
    user = login.user
    container.settings_service.set_last_email(user.email)

    win = container.build_main_window(user)
    win.show()
    win.start()

    code = app.exec()
    container.connection.close()
    return code
