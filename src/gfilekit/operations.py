# gfilekit/operations.py
"""
Composite file operations built on top of Gio.File.

GIO failures are raised as GLib.Error and passed on to the caller
unchanged.
"""

import stat
from typing import Any, Callable, Optional

import gi

gi.require_version("Gio", "2.0")
from gi.repository import Gio, GLib

from .locations import get_location
from .settings.config import FileConstants
from .utils.exceptions import InvalidLocationError, ValidationError
from .utils.logger import get_logger, log_file_operation

logger = get_logger("gfilekit.operations")

CHECKSUM_READ_SIZE = 64 * 1024

_CHECKSUM_TYPES = {
    "md5": GLib.ChecksumType.MD5,
    "sha1": GLib.ChecksumType.SHA1,
    "sha256": GLib.ChecksumType.SHA256,
    "sha512": GLib.ChecksumType.SHA512,
}

ProgressCallback = Callable[..., None]


def partial_name_for(base_name: Optional[str]) -> str:
    """Name of the temporary sibling used while copying to @base_name."""
    base_name = base_name or FileConstants.UNNAMED
    return f"{base_name[:FileConstants.PARTIAL_NAME_MAX]}{FileConstants.PARTIAL_SUFFIX}"


def _exists_error(destination: Gio.File) -> GLib.Error:
    # Same wording g_file_copy() uses
    return GLib.Error.new_literal(
        Gio.io_error_quark(),
        f'Error opening file "{get_location(destination)}": File exists',
        Gio.IOErrorEnum.EXISTS,
    )


def _gio_copy(
    source: Gio.File,
    destination: Gio.File,
    flags: Gio.FileCopyFlags,
    cancellable: Optional[Gio.Cancellable],
    progress_callback: Optional[ProgressCallback],
    progress_data: tuple,
) -> bool:
    if progress_callback is None:
        return source.copy(destination, flags, cancellable, None)
    return source.copy(destination, flags, cancellable, progress_callback, *progress_data)


def _is_regular_file(
    source: Gio.File,
    flags: Gio.FileCopyFlags,
    cancellable: Optional[Gio.Cancellable],
) -> bool:
    query_flags = (
        Gio.FileQueryInfoFlags.NOFOLLOW_SYMLINKS
        if flags & Gio.FileCopyFlags.NOFOLLOW_SYMLINKS
        else Gio.FileQueryInfoFlags.NONE
    )
    try:
        info = source.query_info(
            Gio.FILE_ATTRIBUTE_STANDARD_TYPE, query_flags, cancellable
        )
    except GLib.Error:
        return False
    return info.get_file_type() == Gio.FileType.REGULAR


def copy(
    source: Gio.File,
    destination: Gio.File,
    flags: Gio.FileCopyFlags = Gio.FileCopyFlags.NONE,
    use_partial: bool = False,
    cancellable: Optional[Gio.Cancellable] = None,
    progress_callback: Optional[ProgressCallback] = None,
    *progress_data: Any,
) -> bool:
    """
    Copies @source to @destination.

    With @use_partial, regular files are first copied to a
    "<name>.partial~" sibling which is renamed to the final name once the
    copy is complete, so the destination never shows up half-written.
    Directories and anything else are copied directly with Gio.File.copy().

    Args:
        source: File to copy.
        destination: Target file. Must have a parent.
        flags: Gio.FileCopyFlags passed on to GIO.
        use_partial: Copy through a temporary .partial~ file.
        cancellable: Optional Gio.Cancellable.
        progress_callback: Called as (current_bytes, total_bytes, *progress_data).

    Returns:
        True on success. Failures raise GLib.Error.
    """
    if not destination.has_parent(None):
        raise InvalidLocationError(
            destination.get_uri(), "Destination has no parent directory"
        )

    if not (use_partial and _is_regular_file(source, flags, cancellable)):
        success = _gio_copy(
            source, destination, flags, cancellable, progress_callback, progress_data
        )
        log_file_operation("Copied", get_location(source), get_location(destination))
        return success

    if destination.query_exists(None):
        if not flags & Gio.FileCopyFlags.OVERWRITE:
            raise _exists_error(destination)
        destination.delete(None)

    base_name = destination.get_basename() or FileConstants.UNNAMED
    partial = destination.get_parent().get_child(partial_name_for(base_name))

    if partial.query_exists(None):
        partial.delete(None)

    try:
        _gio_copy(source, partial, flags, cancellable, progress_callback, progress_data)
        partial.set_display_name(base_name, None)
    except GLib.Error:
        # The copy may have been cancelled, so neither the cancellable nor
        # a failing delete of a missing file matter here.
        try:
            partial.delete(None)
        except GLib.Error as e:
            logger.debug(f"Could not remove partial file {partial.get_uri()}: {e.message}")
        raise

    log_file_operation("Copied", get_location(source), get_location(destination))
    return True


def create_checksum(
    file: Gio.File,
    cancellable: Optional[Gio.Cancellable] = None,
    checksum_type: str = "md5",
) -> str:
    """Hex digest of the contents of @file."""
    try:
        checksum = GLib.Checksum.new(_CHECKSUM_TYPES[checksum_type.lower()])
    except KeyError:
        raise ValidationError(
            "Unsupported checksum type", field="checksum_type", value=checksum_type
        ) from None

    stream = file.read(cancellable)
    try:
        while True:
            chunk = stream.read_bytes(CHECKSUM_READ_SIZE, cancellable)
            data = chunk.get_data()
            if not data:
                break
            checksum.update(data)
    finally:
        stream.close(None)

    return checksum.get_string()


def compare_checksum(
    file_a: Gio.File,
    file_b: Gio.File,
    cancellable: Optional[Gio.Cancellable] = None,
    checksum_type: str = "md5",
) -> bool:
    """True if @file_a and @file_b have the same checksum."""
    return create_checksum(file_a, cancellable, checksum_type) == create_checksum(
        file_b, cancellable, checksum_type
    )


def query_key_file(
    file: Gio.File, cancellable: Optional[Gio.Cancellable] = None
) -> GLib.KeyFile:
    """
    Loads @file into a GLib.KeyFile, keeping comments and translations.

    An empty file gives an empty key file.
    """
    _ok, contents, _etag = file.load_contents(cancellable)

    key_file = GLib.KeyFile.new()
    if contents:
        # Comment lines are not required to be UTF-8, so GLib gets the raw bytes
        key_file.load_from_bytes(
            GLib.Bytes.new(contents),
            GLib.KeyFileFlags.KEEP_COMMENTS | GLib.KeyFileFlags.KEEP_TRANSLATIONS,
        )
    return key_file


def write_key_file(
    file: Gio.File,
    key_file: GLib.KeyFile,
    cancellable: Optional[Gio.Cancellable] = None,
) -> bool:
    """Replaces the contents of @file with the serialized @key_file."""
    data, _length = key_file.to_data()
    if data is None:
        return True
    file.replace_contents(
        data.encode("utf-8"), None, False, Gio.FileCreateFlags.NONE, cancellable
    )
    return True


def set_executable_flags(file: Gio.File) -> bool:
    """
    Adds the execute bit for user, group and others to @file.

    Returns:
        True on success, False if the file system does not report a
        unix mode. GIO failures raise GLib.Error.
    """
    info = file.query_info(
        Gio.FILE_ATTRIBUTE_UNIX_MODE, Gio.FileQueryInfoFlags.NOFOLLOW_SYMLINKS, None
    )
    if not info.has_attribute(Gio.FILE_ATTRIBUTE_UNIX_MODE):
        logger.warning(f"No {Gio.FILE_ATTRIBUTE_UNIX_MODE} attribute found")
        return False

    old_mode = info.get_attribute_uint32(Gio.FILE_ATTRIBUTE_UNIX_MODE)
    new_mode = old_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH
    if old_mode != new_mode:
        file.set_attribute_uint32(
            Gio.FILE_ATTRIBUTE_UNIX_MODE,
            new_mode,
            Gio.FileQueryInfoFlags.NOFOLLOW_SYMLINKS,
            None,
        )
        log_file_operation("Made executable", get_location(file), oct(new_mode))
    return True
