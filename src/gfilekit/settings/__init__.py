# gfilekit/settings/__init__.py
"""Configuration paths and persisted user settings."""

from .config import AppConstants, ConfigPaths, get_config_paths
from .manager import SettingsManager, get_settings_manager

__all__ = [
    "AppConstants",
    "ConfigPaths",
    "get_config_paths",
    "SettingsManager",
    "get_settings_manager",
]
