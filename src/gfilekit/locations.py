# gfilekit/locations.py
"""
Constructors for well-known locations and predicates on Gio.File handles.
"""

import os
from typing import Optional

import gi

gi.require_version("Gio", "2.0")
from gi.repository import Gio, GLib

from .settings.config import FileConstants
from .utils.logger import get_logger

logger = get_logger("gfilekit.locations")

ROOT_URI = "file:///"
RECENT_URI = "recent:///"
TRASH_URI = "trash:///"
COMPUTER_URI = "computer://"
NETWORK_URI = "network://"


def new_for_home() -> Gio.File:
    return Gio.File.new_for_path(GLib.get_home_dir())


def new_for_root() -> Gio.File:
    return Gio.File.new_for_uri(ROOT_URI)


def new_for_recent() -> Gio.File:
    return Gio.File.new_for_uri(RECENT_URI)


def new_for_trash() -> Gio.File:
    return Gio.File.new_for_uri(TRASH_URI)


def new_for_computer() -> Gio.File:
    return Gio.File.new_for_uri(COMPUTER_URI)


def new_for_network() -> Gio.File:
    return Gio.File.new_for_uri(NETWORK_URI)


def new_for_desktop() -> Gio.File:
    """Return the XDG desktop directory, or home when none is configured."""
    desktop = GLib.get_user_special_dir(GLib.UserDirectory.DIRECTORY_DESKTOP)
    if not desktop:
        return new_for_home()
    return Gio.File.new_for_path(desktop)


def new_for_bookmarks() -> Gio.File:
    """Return the GTK bookmarks file shared with other file managers."""
    filename = os.path.join(
        GLib.get_user_config_dir(),
        FileConstants.BOOKMARKS_SUBDIR,
        FileConstants.BOOKMARKS_FILE,
    )
    return Gio.File.new_for_path(filename)


def new_for_symlink_target(file: Gio.File) -> Optional[Gio.File]:
    """
    Returns the target of the symlink @file.

    A relative target is resolved against the directory containing the
    symlink. Returns None when the target cannot be determined.
    """
    try:
        info = file.query_info(
            Gio.FILE_ATTRIBUTE_STANDARD_SYMLINK_TARGET,
            Gio.FileQueryInfoFlags.NONE,
            None,
        )
    except GLib.Error as e:
        logger.warning(
            f"Symlink target loading failed for {get_location(file)}: {e.message}"
        )
        return None

    target_path = info.get_attribute_byte_string(
        Gio.FILE_ATTRIBUTE_STANDARD_SYMLINK_TARGET
    )
    parent = file.get_parent()
    if target_path is None or parent is None:
        return None
    return parent.resolve_relative_path(target_path)


def is_root(file: Gio.File) -> bool:
    return file.get_parent() is None


def is_trashed(file: Gio.File) -> bool:
    return file.has_uri_scheme("trash")


def is_in_recent(file: Gio.File) -> bool:
    return file.has_uri_scheme("recent")


def is_home(file: Gio.File) -> bool:
    return new_for_home().equal(file)


def is_trash(file: Gio.File) -> bool:
    return file.get_uri() == "trash:///"


def is_recent(file: Gio.File) -> bool:
    return file.get_uri() == "recent:///"


def is_computer(file: Gio.File) -> bool:
    return file.get_uri() == "computer:///"


def is_network(file: Gio.File) -> bool:
    return file.get_uri() == "network:///"


def is_descendant(descendant: Gio.File, ancestor: Gio.File) -> bool:
    """
    Check if @descendant lies below @ancestor. A file counts as its own
    descendant.
    """
    parent = descendant
    while parent is not None:
        if parent.equal(ancestor):
            return True
        parent = parent.get_parent()
    return False


def is_in_xdg_data_dir(file: Gio.File) -> bool:
    """True if @file is located below one of the directories in XDG_DATA_DIRS."""
    if not file.is_native():
        return False
    path = file.get_path()
    if path is None:
        return False
    return any(path.startswith(data_dir) for data_dir in GLib.get_system_data_dirs())


def is_desktop_file(file: Gio.File) -> bool:
    """Only regular files with a .desktop extension qualify."""
    basename = file.get_basename()
    if not basename or not basename.endswith(FileConstants.DESKTOP_FILE_SUFFIX):
        return False
    try:
        info = file.query_info(
            Gio.FILE_ATTRIBUTE_STANDARD_TYPE,
            Gio.FileQueryInfoFlags.NOFOLLOW_SYMLINKS,
            None,
        )
    except GLib.Error:
        return False
    return info.get_file_type() == Gio.FileType.REGULAR


def get_location(file: Gio.File) -> str:
    """The local path of @file if it has one, its URI otherwise."""
    location = file.get_path()
    if location is None:
        location = file.get_uri()
    return location


def get_resolved_path(file: Gio.File) -> Optional[str]:
    """
    Canonical absolute path of @file with all symlinks resolved.

    Every component of the path has to exist. Returns None for files
    without a local path or when resolution fails.
    """
    path = file.get_path()
    if path is None:
        return None
    try:
        return os.path.realpath(path, strict=True)
    except OSError as e:
        logger.warning(f"Failed to resolve path: '{path}' Error: {e.strerror}")
        return None


def get_link_path_for_symlink(file_to_link: Gio.File, symlink: Gio.File) -> Optional[str]:
    """
    Build the target path a symlink at @symlink needs to point to @file_to_link.

    Remote locations are linked through their path relative to the root of
    their own mount.
    """
    if file_to_link.is_native() or symlink.is_native():
        return file_to_link.get_path()

    root = file_to_link
    while (parent := root.get_parent()) is not None:
        root = parent

    relative_path = root.get_relative_path(file_to_link)
    return "/" + (relative_path or "")
