# gfilekit/vfs.py
"""
Capabilities of the GIO virtual file system and of the devices files live on.
"""

import gi

gi.require_version("Gio", "2.0")
from gi.repository import Gio, GLib

from .locations import new_for_root
from .utils.exceptions import ValidationError
from .utils.logger import get_logger

logger = get_logger("gfilekit.vfs")


def is_uri_scheme_supported(scheme: str) -> bool:
    if not scheme:
        raise ValidationError("URI scheme must not be empty", field="scheme", value=scheme)
    supported_schemes = Gio.Vfs.get_default().get_supported_uri_schemes() or []
    return scheme in supported_schemes


def metadata_is_supported() -> bool:
    """True if GVFS metadata can be written on the root file system."""
    try:
        namespaces = new_for_root().query_writable_namespaces(None)
    except GLib.Error as e:
        logger.debug(f"Could not query writable namespaces: {e.message}")
        return False
    return namespaces.lookup("metadata") is not None


def is_on_local_device(file: Gio.File) -> bool:
    """
    Tries to find out whether @file is on a local device.

    Only "file" URIs qualify. Files on partitions GVFS does not manage are
    local; files on mounts GVFS manages are local only if the mount cannot
    be unmounted. USB disks, fuse mounts, Samba shares and PTP devices can
    always be unmounted and count as remote.

    @file may not exist yet (e.g. a copy target), in which case the
    closest existing parent directory is checked.
    """
    if not file.has_uri_scheme("file"):
        return False

    target = file
    while target is not None and not target.query_exists(None):
        target = target.get_parent()
    if target is None:
        return False

    try:
        mount = target.find_enclosing_mount(None)
    except GLib.Error:
        # No enclosing mount for files on local partitions
        return True
    return not mount.can_unmount()
