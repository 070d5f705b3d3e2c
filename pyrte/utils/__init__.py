"""App constants and utilities."""

from .constants import (
    APP_NAME,
    APP_ORG,
    AUTOSAVE_DELAY_MS,
    DEFAULT_FONT,
    DEFAULT_TITLE,
    SETTINGS_GEOMETRY,
    SETTINGS_LAST_DOCUMENT,
    SETTINGS_LAST_EMAIL,
    SETTINGS_SPLITTER,
)

__all__ = [
    "APP_ORG",
    "APP_NAME",
    "AUTOSAVE_DELAY_MS",
    "DEFAULT_FONT",
    "DEFAULT_TITLE",
    "SETTINGS_GEOMETRY",
    "SETTINGS_SPLITTER",
    "SETTINGS_LAST_DOCUMENT",
    "SETTINGS_LAST_EMAIL",
]
