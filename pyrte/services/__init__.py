"""Concrete service implementations: import, export, storage and autosave."""

from .file_service import FileService
from .settings_service import SettingsService

__all__ = ["FileService", "SettingsService"]
