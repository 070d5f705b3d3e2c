from __future__ import annotations

import logging
import re
import sys
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_data_dir

from pyrte.domain.interfaces import IAppConfig
from pyrte.services.config.ini_config_service import IniConfigService
from pyrte.utils.constants import APP_NAME, AUTOSAVE_DELAY_MS, DEFAULT_FONT

_VERSION_RE = re.compile(r"^v?(\d+\.\d+\.\d+)(?:[-+].*)?$", re.IGNORECASE)

EXTRACTOR_MODES = ("local", "remote")
DEFAULT_EXTRACTOR_URL = "http://127.0.0.1:8000/parse-document"
DEFAULT_EXTRACTOR_TIMEOUT = 30.0


def _project_root_fallback() -> Path:
    """
    Best-effort project root resolution that also works in PyInstaller:
      - PyInstaller onefile/onedir uses sys._MEIPASS as bundle root
      - dev mode walks up from this file (pyrte/services/config/app_config.py)
    """
    meipass = getattr(sys, "_MEIPASS", None)
    if meipass:
        return Path(meipass)
    return Path(__file__).resolve().parents[3]


def _read_version_file(version_path: Path) -> str | None:
    try:
        raw = version_path.read_text(encoding="utf-8").strip()
    except OSError:
        return None
    m = _VERSION_RE.match(raw)
    return m.group(1) if m else None


@dataclass(frozen=True)
class AppConfig(IAppConfig):
    """
    Wraps IniConfigService with get_version() from <root>/version and typed
    accessors for the settings the application reads.

    Precedence for version:
      1) <project_root>/version file (semantic e.g. v1.0.5)
      2) [app] version in the INI
      3) "0.0.0"
    """

    ini: IniConfigService
    project_root: Path

    def get_version(self) -> str:
        v = _read_version_file(self.project_root / "version")
        if v:
            return v
        v2 = (self.ini.app_version() or "").strip()
        if v2:
            m = _VERSION_RE.match(v2)
            return m.group(1) if m else v2
        return "0.0.0"

    # ---- typed settings ----

    def autosave_delay_ms(self) -> int:
        v = self.ini.get_int("autosave", "delay_ms", AUTOSAVE_DELAY_MS)
        return v if v is not None and v > 0 else AUTOSAVE_DELAY_MS

    def extractor_mode(self) -> str:
        mode = (self.ini.get("extractor", "mode", "local") or "local").strip().lower()
        if mode not in EXTRACTOR_MODES:
            logging.getLogger(__name__).warning("Unknown extractor mode %r, using local", mode)
            return "local"
        return mode

    def extractor_url(self) -> str:
        return self.ini.get("extractor", "url", DEFAULT_EXTRACTOR_URL) or DEFAULT_EXTRACTOR_URL

    def extractor_timeout(self) -> float:
        v = self.ini.get_float("extractor", "timeout", DEFAULT_EXTRACTOR_TIMEOUT)
        return v if v is not None and v > 0 else DEFAULT_EXTRACTOR_TIMEOUT

    def extractor_api_key(self) -> str | None:
        return self.ini.get("extractor", "api_key", None) or None

    def database_path(self) -> Path:
        raw = self.ini.get("storage", "database", "") or ""
        if raw.strip():
            return Path(raw.strip()).expanduser()
        return Path(user_data_dir(APP_NAME)) / "documents.sqlite3"

    def default_font(self) -> str:
        return self.ini.get("editor", "default_font", DEFAULT_FONT) or DEFAULT_FONT

    def log_level(self) -> str:
        return (self.ini.get("logging", "level", "INFO") or "INFO").strip().upper()

    # ---- delegate IniConfigService methods (full surface) ----

    def get(self, section: str, key: str, default: str | None = None) -> str | None:
        return self.ini.get(section, key, default)

    def get_int(self, section: str, key: str, default: int | None = None) -> int | None:
        return self.ini.get_int(section, key, default)

    def as_dict(self) -> Mapping[str, Mapping[str, str]]:
        return self.ini.as_dict()

    def app_version(self) -> str:
        return self.ini.app_version()

    @property
    def loaded_from(self) -> Path | None:
        return self.ini.loaded_from


def build_app_config(
    *,
    explicit_ini: Path | None = None,
    project_root: Path | None = None,
    use_user_dir: bool = True,
) -> AppConfig:
    root = project_root or _project_root_fallback()
    ini = IniConfigService(explicit_path=explicit_ini, project_root=root, use_user_dir=use_user_dir)
    return AppConfig(ini=ini, project_root=root)
