# gfilekit/appinfo.py
"""
Launching applications for files and keeping the "last used application"
per content type up to date.
"""

import os
from contextlib import contextmanager
from typing import Callable, Iterator, List, Optional

import gi

gi.require_version("Gio", "2.0")
from gi.repository import Gio, GLib

from .utils.exceptions import ValidationError
from .utils.logger import get_logger

logger = get_logger("gfilekit.appinfo")

FileChangedHook = Callable[[Gio.File], None]


@contextmanager
def working_directory(directory: Optional[Gio.File]) -> Iterator[None]:
    """Temporarily switch the process working directory to @directory."""
    new_path = directory.get_path() if directory is not None else None
    if new_path is None:
        yield
        return

    old_path = os.getcwd()
    os.chdir(new_path)
    try:
        yield
    finally:
        os.chdir(old_path)


def _query_content_type(file: Gio.File) -> Optional[str]:
    try:
        info = file.query_info(
            Gio.FILE_ATTRIBUTE_STANDARD_CONTENT_TYPE, Gio.FileQueryInfoFlags.NONE, None
        )
    except GLib.Error as e:
        logger.debug(f"No content type for {file.get_uri()}: {e.message}")
        return None
    return info.get_content_type()


def _should_update_last_used(info: Gio.AppInfo, content_type: str) -> bool:
    default_app_info = Gio.AppInfo.get_default_for_type(content_type, False)
    if default_app_info is not None and info.equal(default_app_info):
        return False

    recommended_app_infos = Gio.AppInfo.get_recommended_for_type(content_type)
    if recommended_app_infos and info.equal(recommended_app_infos[0]):
        return False
    return True


def launch(
    info: Gio.AppInfo,
    working_dir: Optional[Gio.File],
    files: List[Gio.File],
    context: Optional[Gio.AppLaunchContext] = None,
    skip_app_info_update: bool = False,
    file_changed: Optional[FileChangedHook] = None,
) -> bool:
    """
    Launches @files with @info, optionally from @working_dir.

    After a successful launch @info is remembered as the last used
    application for the content type of each file, unless it already is
    the default or most recent one. @file_changed is called for every file
    whose record was updated so the host can refresh it.

    Returns:
        True on success. Launch failures raise GLib.Error.
    """
    if not files:
        raise ValidationError("At least one file is required", field="files")

    with working_directory(working_dir):
        result = info.launch(files, context)

    if not result or skip_app_info_update:
        return result

    for file in files:
        content_type = _query_content_type(file)
        if content_type is None:
            continue
        if not _should_update_last_used(info, content_type):
            continue

        try:
            updated = info.set_as_last_used_for_type(content_type)
        except GLib.Error as e:
            logger.warning(
                f"Could not remember {info.get_id()} for {content_type}: {e.message}"
            )
            continue

        if updated and file_changed is not None:
            file_changed(file)

    return result


def should_show(info: Gio.AppInfo) -> bool:
    """
    NoDisplay=true applications stay visible here, that key only hides
    mime helpers from the application menu. Hidden=true is never returned
    by GIO.
    """
    desktop_app_info = getattr(Gio, "DesktopAppInfo", None)
    if desktop_app_info is not None and isinstance(info, desktop_app_info):
        return info.get_show_in(None)
    return True
