# gfilekit/settings/config.py

import os
from pathlib import Path
from typing import Any, Dict, Optional


class AppConstants:
    """Library metadata and identification constants."""

    APP_TITLE = "gfilekit"
    APP_VERSION = "0.4.2"


class FileConstants:
    """Fixed names and limits used by the file helpers."""

    PARTIAL_SUFFIX = ".partial~"
    PARTIAL_NAME_MAX = 100
    UNNAMED = "UNNAMED"
    FILESYSTEM_INFO_NAMESPACE = "filesystem::*"
    BOOKMARKS_SUBDIR = "gtk-3.0"
    BOOKMARKS_FILE = "bookmarks"
    DESKTOP_FILE_SUFFIX = ".desktop"


class ConfigPaths:
    """XDG-aware configuration paths."""

    def __init__(self, config_dir: Optional[Path] = None):
        self.CONFIG_DIR = config_dir or self._get_config_dir()
        self.SETTINGS_FILE = self.CONFIG_DIR / "settings.json"

    def _get_config_dir(self) -> Path:
        if xdg_config := os.environ.get("XDG_CONFIG_HOME"):
            return Path(xdg_config) / "gfilekit"
        return Path.home() / ".config" / "gfilekit"


class DefaultSettings:
    """Default user settings."""

    CHECKSUM_TYPES = ("md5", "sha1", "sha256", "sha512")
    LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

    @staticmethod
    def get_defaults() -> Dict[str, Any]:
        return {
            "file_size_binary": False,
            "use_partial_copy": True,
            "checksum_type": "md5",
            "log_to_file": False,
            "console_log_level": "WARNING",
        }


_config_paths: Optional[ConfigPaths] = None


def get_config_paths() -> ConfigPaths:
    """Get global configuration paths instance."""
    global _config_paths
    if _config_paths is None:
        _config_paths = ConfigPaths()
    return _config_paths
