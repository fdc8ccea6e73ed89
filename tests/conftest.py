"""Pytest configuration and fixtures."""

import gi
import pytest

gi.require_version("Gio", "2.0")

from gi.repository import Gio  # noqa: E402


@pytest.fixture
def gfile():
    """Build a Gio.File from a pathlib.Path or a string."""

    def _make(location):
        return Gio.File.new_for_path(str(location))

    return _make


@pytest.fixture
def sample_file(tmp_path):
    """A small regular file with known contents."""
    path = tmp_path / "report.txt"
    path.write_text("quarterly numbers\n" * 100)
    return path


@pytest.fixture
def settings_manager(tmp_path, monkeypatch):
    """A settings manager backed by a throwaway settings.json."""
    from gfilekit.settings import manager as manager_module

    manager = manager_module.SettingsManager(settings_file=tmp_path / "config" / "settings.json")
    monkeypatch.setattr(manager_module, "_settings_manager", manager)
    return manager
