from __future__ import annotations

import logging
from pathlib import Path

import pytest
from PyQt6.QtWidgets import QDialog

import pyrte.app as app_mod
from pyrte.domain.models import User

# ----------------------------
# Fakes (Qt)
# ----------------------------


class FakeQApplication:
    org_name: str | None = None
    app_name: str | None = None
    version: str | None = None

    def __init__(self, argv: list[str]) -> None:
        self.argv = list(argv)
        self.exec_called = 0

    @classmethod
    def setOrganizationName(cls, name: str) -> None:
        cls.org_name = name

    @classmethod
    def setApplicationName(cls, name: str) -> None:
        cls.app_name = name

    @classmethod
    def setApplicationVersion(cls, version: str) -> None:
        cls.version = version

    def exec(self) -> int:
        self.exec_called += 1
        return 0


# ----------------------------
# Fakes (UI + container)
# ----------------------------


class FakeLogin:
    def __init__(self, user: User | None) -> None:
        self.user = user

    def exec(self):
        if self.user is None:
            return QDialog.DialogCode.Rejected
        return QDialog.DialogCode.Accepted


class FakeWindow:
    def __init__(self) -> None:
        self.shown = False
        self.started = False

    def show(self) -> None:
        self.shown = True

    def start(self) -> None:
        self.started = True


class FakeSettings:
    def __init__(self) -> None:
        self.email = ""

    def set_last_email(self, email: str) -> None:
        self.email = email


class FakeConnection:
    closed = False

    def close(self) -> None:
        self.closed = True


class FakeContainer:
    def __init__(self, user: User | None) -> None:
        self.user = user
        self.window = FakeWindow()
        self.settings_service = FakeSettings()
        self.connection = FakeConnection()
        self.built_for: User | None = None

    def build_login_dialog(self):
        return FakeLogin(self.user)

    def build_main_window(self, user: User):
        self.built_for = user
        return self.window


class FakeConfig:
    loaded_from = None

    def __init__(self, level: str = "INFO") -> None:
        self.level = level

    def log_level(self) -> str:
        return self.level

    def get_version(self) -> str:
        return "1.0.0"


@pytest.fixture()
def patched(monkeypatch):
    monkeypatch.setattr(app_mod, "QApplication", FakeQApplication)
    monkeypatch.setattr(app_mod, "build_app_config", lambda: FakeConfig())
    monkeypatch.setattr(app_mod, "configure_logging", lambda config: None)

    def install(container: FakeContainer) -> FakeContainer:
        monkeypatch.setattr(
            app_mod.Container, "default", staticmethod(lambda config=None: container)
        )
        return container

    return install


# ----------------------------
# Tests
# ----------------------------


def test_run_app_signs_in_and_shows_window(patched) -> None:
    user = User(id="u1", email="ada@example.com")
    container = patched(FakeContainer(user))

    rc = app_mod.run_app(["pyrichtexteditor"])

    assert rc == 0
    assert container.built_for == user
    assert container.window.shown is True
    assert container.window.started is True
    assert container.settings_service.email == "ada@example.com"
    assert container.connection.closed is True

    assert FakeQApplication.org_name == app_mod.APP_ORG
    assert FakeQApplication.app_name == app_mod.APP_NAME
    assert FakeQApplication.version == "1.0.0"


def test_run_app_stops_when_sign_in_is_cancelled(patched) -> None:
    container = patched(FakeContainer(None))

    rc = app_mod.run_app(["pyrichtexteditor"])

    assert rc == 0
    assert container.built_for is None
    assert container.window.shown is False


def test_configure_logging_uses_configured_level(monkeypatch) -> None:
    seen = {}
    monkeypatch.setattr(logging, "basicConfig", lambda **kw: seen.update(kw))

    app_mod.configure_logging(FakeConfig("DEBUG"))
    assert seen["level"] == logging.DEBUG

    app_mod.configure_logging(FakeConfig("CHATTY"))
    assert seen["level"] == logging.INFO


def test_main_delegates_to_run_app(monkeypatch) -> None:
    import pyrte.main as main_mod

    monkeypatch.setattr(main_mod, "run_app", lambda argv: 7)
    assert main_mod.main() == 7


def test_project_root_holds_default_config() -> None:
    root = Path(app_mod.__file__).resolve().parents[1]
    assert (root / "config" / "config.ini").is_file()
    assert (root / "version").is_file()
