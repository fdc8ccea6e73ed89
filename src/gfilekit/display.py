# gfilekit/display.py
"""
Human readable names and descriptions for Gio.File handles.
"""

import os
from typing import Optional, Tuple
from urllib.parse import quote

import gi

gi.require_version("Gio", "2.0")
from gi.repository import Gio, GLib

from .locations import is_trash
from .settings.config import FileConstants
from .utils.logger import get_logger
from .utils.translation_utils import N_, _

logger = get_logger("gfilekit.display")

# GLib's G_URI_RESERVED_CHARS_ALLOWED_IN_PATH
_RESERVED_CHARS_ALLOWED_IN_PATH = "!$&'()*+,;=:@/"

# Ordered: implementation specific names must be matched before the
# generic icon-naming-spec families.
# See https://freedesktop.org/wiki/Specifications/icon-naming-spec/
DEVICE_ICON_NAMES = (
    ("multimedia-player-apple-ipod-touch", N_("iPod touch")),
    ("computer-apple-ipad", N_("iPad")),
    ("phone-apple-iphone", N_("iPhone")),
    ("drive-harddisk-solidstate", N_("Solid State Drive")),
    ("drive-harddisk-system", N_("System Drive")),
    ("drive-harddisk-usb", N_("USB Drive")),
    ("drive-removable-media-usb", N_("USB Drive")),
    ("camera*", N_("Camera")),
    ("drive-harddisk*", N_("Harddisk")),
    ("drive-optical*", N_("Optical Drive")),
    ("drive-removable-media*", N_("Removable Drive")),
    ("media-flash*", N_("Flash Drive")),
    ("media-floppy*", N_("Floppy")),
    ("media-optical*", N_("Optical Media")),
    ("media-tape*", N_("Tape")),
    ("multimedia-player*", N_("Multimedia Player")),
    ("pda*", N_("PDA")),
    ("phone*", N_("Phone")),
)


def _escape_invalid_utf8(base_name: str) -> str:
    raw = os.fsencode(base_name)
    return quote(raw, safe=_RESERVED_CHARS_ALLOWED_IN_PATH)


def _is_valid_utf8(base_name: str) -> bool:
    try:
        base_name.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True


def get_display_name(file: Gio.File) -> str:
    """
    Returns the last path segment of @file for display.

    The file system root and the trash get fixed labels, and names that
    are not valid UTF-8 are percent-escaped.
    """
    base_name = file.get_basename()
    if base_name is None:
        return "?"
    if base_name == "/":
        return _("File System")
    if is_trash(file):
        return _("Trash")
    if _is_valid_utf8(base_name):
        return base_name
    return _escape_invalid_utf8(base_name)


def split_remote_parse_name(scheme: str, parse_name: str) -> Optional[Tuple[str, str]]:
    """
    Split the parse name of a remote mount point into (path, hostname).

    Login names and passwords in front of the host ("user:pass@host.tld")
    are skipped as long as they appear before the first dot of the host.
    Returns None when @parse_name does not start with @scheme.
    """
    if not scheme or not parse_name.startswith(scheme):
        return None

    p = len(scheme)
    while p < len(parse_name) and parse_name[p] in ":/":
        p += 1
    rest = parse_name[p:]

    path_start = rest.find("/")
    first_dot = rest.find(".")
    start = 0

    if first_dot != -1:
        for skip_char in ":@":
            skip = rest.find(skip_char, start)
            if (
                skip != -1
                and (path_start == -1 or skip < path_start)
                and skip < first_dot
            ):
                start = skip + 1

    if path_start != -1:
        return rest[path_start:], rest[start:path_start]
    return "/", rest[start:]


def get_display_name_remote(mount_point: Gio.File) -> str:
    """
    Returns "<path> on <hostname>" for remote mount points.

    Local mounts and anything that cannot be parsed fall back to
    get_display_name(), so the result is never None.
    """
    if not mount_point.is_native():
        scheme = mount_point.get_uri_scheme()
        parse_name = mount_point.get_parse_name()
        parts = split_remote_parse_name(scheme, parse_name)
        if parts is not None:
            path, hostname = parts
            # Show spaces and other escaped characters as they are
            unescaped = GLib.uri_unescape_string(path, None) or path
            # TRANSLATORS: this will result in "<path> on <hostname>"
            return _("%s on %s") % (unescaped, hostname)

    return get_display_name(mount_point)


def guess_device_type_from_icon_name(icon_name: str) -> Optional[str]:
    for pattern, device_type in DEVICE_ICON_NAMES:
        if GLib.pattern_match_simple(pattern, icon_name):
            return _(device_type)
    return None


def guess_device_type(file: Gio.File) -> Optional[str]:
    """
    Returns a localized device type such as "USB Drive" based on the
    themed icon GIO reports for @file, or None.
    """
    try:
        info = file.query_info(
            Gio.FILE_ATTRIBUTE_STANDARD_ICON, Gio.FileQueryInfoFlags.NONE, None
        )
    except GLib.Error:
        return None

    icon = info.get_icon()
    if not isinstance(icon, Gio.ThemedIcon):
        return None
    names = icon.get_names()
    if not names:
        return None
    return guess_device_type_from_icon_name(names[0])


def get_free_space(file: Gio.File) -> Optional[Tuple[int, int]]:
    """
    Determines the free and total space of the volume on which @file
    resides.

    Returns:
        A (free, total) tuple in bytes, or None if either value is unknown.
    """
    try:
        filesystem_info = file.query_filesystem_info(
            FileConstants.FILESYSTEM_INFO_NAMESPACE, None
        )
    except GLib.Error as e:
        logger.debug(f"Filesystem info unavailable for {file.get_uri()}: {e.message}")
        return None

    if not (
        filesystem_info.has_attribute(Gio.FILE_ATTRIBUTE_FILESYSTEM_FREE)
        and filesystem_info.has_attribute(Gio.FILE_ATTRIBUTE_FILESYSTEM_SIZE)
    ):
        return None

    return (
        filesystem_info.get_attribute_uint64(Gio.FILE_ATTRIBUTE_FILESYSTEM_FREE),
        filesystem_info.get_attribute_uint64(Gio.FILE_ATTRIBUTE_FILESYSTEM_SIZE),
    )


def format_size(size: int, file_size_binary: bool = False) -> str:
    flags = (
        GLib.FormatSizeFlags.IEC_UNITS
        if file_size_binary
        else GLib.FormatSizeFlags.DEFAULT
    )
    return GLib.format_size_full(size, flags)


def get_free_space_string(file: Gio.File, file_size_binary: bool = False) -> Optional[str]:
    free_space = get_free_space(file)
    if free_space is None:
        return None

    fs_free, fs_total = free_space
    if fs_total <= 0:
        return None

    fs_used = fs_total - fs_free
    return _("%s used (%.0f%%)  |  %s free (%.0f%%)") % (
        format_size(fs_used, file_size_binary),
        fs_used * 100.0 / fs_total,
        format_size(fs_free, file_size_binary),
        fs_free * 100.0 / fs_total,
    )
