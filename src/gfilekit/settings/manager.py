# gfilekit/settings/manager.py
"""
Persisted user settings.

settings.json holds {"metadata": {...}, "settings": {...}}. The metadata
carries an MD5 of the settings so hand edits that broke the file can be
reported. A bare settings object from older releases is still accepted
and rewritten in the wrapped form on the next save.
"""

import hashlib
import json
import time
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from ..utils import logger as log
from ..utils.exceptions import ConfigValidationError
from .config import AppConstants, DefaultSettings, get_config_paths

BOOLEAN_KEYS = ("file_size_binary", "use_partial_copy", "log_to_file")


@dataclass
class SettingsMetadata:
    version: str
    created_at: float
    modified_at: float
    checksum: Optional[str] = None


def settings_checksum(settings: Dict[str, Any]) -> str:
    canonical = json.dumps(settings, sort_keys=True, separators=(",", ":"))
    return hashlib.md5(canonical.encode("utf-8")).hexdigest()


def check_value(key: str, value: Any) -> Optional[str]:
    """Returns why @value is not acceptable for @key, or None."""
    if key not in DefaultSettings.get_defaults():
        return "Unknown setting"
    if key in BOOLEAN_KEYS and not isinstance(value, bool):
        return "Value must be boolean"
    if key == "checksum_type" and not (
        isinstance(value, str) and value.lower() in DefaultSettings.CHECKSUM_TYPES
    ):
        return f"Expected one of {', '.join(DefaultSettings.CHECKSUM_TYPES)}"
    if key == "console_log_level" and not (
        isinstance(value, str) and value.upper() in DefaultSettings.LOG_LEVELS
    ):
        return f"Expected one of {', '.join(DefaultSettings.LOG_LEVELS)}"
    return None


class SettingsManager:
    """Loads, validates and saves settings.json."""

    def __init__(self, settings_file: Optional[Path] = None):
        self.logger = log.get_logger("gfilekit.settings")
        self.settings_file = settings_file or get_config_paths().SETTINGS_FILE
        self.metadata: Optional[SettingsMetadata] = None
        self.is_dirty = False
        self._settings = self._load()
        self._apply_log_settings()

    def _read_file(self) -> Dict[str, Any]:
        with open(self.settings_file, "r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError("expected a JSON object")

        if "settings" not in data or "metadata" not in data:
            self.is_dirty = True
            return data

        settings = data["settings"]
        if not isinstance(settings, dict):
            raise ValueError("'settings' is not an object")
        if isinstance(data["metadata"], dict):
            self.metadata = SettingsMetadata(**data["metadata"])
            if self.metadata.checksum and self.metadata.checksum != settings_checksum(settings):
                self.logger.warning("Settings checksum mismatch, file was edited by hand or is damaged")
        return settings

    def _load(self) -> Dict[str, Any]:
        defaults = DefaultSettings.get_defaults()
        if not self.settings_file.exists():
            self.logger.info("Settings file not found, using defaults")
            return defaults

        try:
            stored = self._read_file()
        except json.JSONDecodeError as e:
            self.logger.error(f"Settings file is corrupted: {e}")
            return defaults
        except (TypeError, ValueError) as e:
            self.logger.error(f"Settings file has invalid structure: {e}")
            return defaults
        except OSError as e:
            log.log_error_with_context(e, "settings loading", "gfilekit.settings")
            return defaults

        settings = dict(defaults)
        for key, default in defaults.items():
            if key not in stored:
                self.is_dirty = True
                continue
            problem = check_value(key, stored[key])
            if problem:
                self.logger.warning(f"Resetting invalid setting '{key}' to default: {problem}")
                self.is_dirty = True
                continue
            settings[key] = stored[key]
        return settings

    def _apply_log_settings(self):
        log.set_log_to_file_enabled(self._settings["log_to_file"])
        log.set_console_log_level(self._settings["console_log_level"])

    def get(self, key: str, default: Any = None) -> Any:
        return self._settings.get(key, default)

    def set(self, key: str, value: Any, save_immediately: bool = True) -> None:
        problem = check_value(key, value)
        if problem:
            raise ConfigValidationError(key, value, problem)

        self._settings[key] = value
        self.is_dirty = True
        if key in ("log_to_file", "console_log_level"):
            self._apply_log_settings()
        if save_immediately:
            self.save_settings()

    def save_settings(self, force: bool = False) -> None:
        if not (self.is_dirty or force):
            return

        now = time.time()
        if self.metadata is None:
            self.metadata = SettingsMetadata(AppConstants.APP_VERSION, now, now)
        self.metadata.modified_at = now
        self.metadata.checksum = settings_checksum(self._settings)

        self.settings_file.parent.mkdir(parents=True, exist_ok=True)
        temp_file = self.settings_file.with_suffix(".tmp")
        with open(temp_file, "w", encoding="utf-8") as f:
            json.dump(
                {"metadata": asdict(self.metadata), "settings": self._settings},
                f,
                indent=2,
                ensure_ascii=False,
            )
        temp_file.replace(self.settings_file)
        self.is_dirty = False


_settings_manager: Optional[SettingsManager] = None


def get_settings_manager() -> SettingsManager:
    """Get the shared settings manager, loading it on first use."""
    global _settings_manager
    if _settings_manager is None:
        _settings_manager = SettingsManager()
    return _settings_manager
