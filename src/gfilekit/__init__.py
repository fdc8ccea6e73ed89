import argparse
import sys

_logger_module = None
_translation_module = None


def _get_logger_funcs():
    """Lazy load logger functions."""
    global _logger_module
    if _logger_module is None:
        from .utils import logger as _logger_module
    return _logger_module


def _get_translation():
    """Lazy load translation function."""
    global _translation_module
    if _translation_module is None:
        from .utils import translation_utils as _translation_module
    return _translation_module._


def _cmd_info(args, settings) -> int:
    from gi.repository import Gio

    from . import display, locations, vfs

    file = Gio.File.new_for_commandline_arg(args.location)
    rows = [
        ("Display name", display.get_display_name(file)),
        ("Remote name", display.get_display_name_remote(file)),
        ("Location", locations.get_location(file)),
        ("Resolved path", locations.get_resolved_path(file)),
        ("Device type", display.guess_device_type(file)),
        ("Root", locations.is_root(file)),
        ("Home", locations.is_home(file)),
        ("Trashed", locations.is_trashed(file)),
        ("Desktop file", locations.is_desktop_file(file)),
        ("In XDG data dir", locations.is_in_xdg_data_dir(file)),
        ("Local device", vfs.is_on_local_device(file)),
    ]
    for label, value in rows:
        print(f"{label + ':':<17}{'' if value is None else value}")
    return 0


def _cmd_df(args, settings) -> int:
    from gi.repository import Gio

    from .display import get_free_space_string

    _ = _get_translation()
    file = Gio.File.new_for_commandline_arg(args.location)
    binary = args.binary or settings.get("file_size_binary", False)
    free_space = get_free_space_string(file, binary)
    if free_space is None:
        print(_("Free space is unknown for {}").format(args.location), file=sys.stderr)
        return 1
    print(free_space)
    return 0


def _cmd_copy(args, settings) -> int:
    from gi.repository import Gio

    from .operations import copy

    flags = Gio.FileCopyFlags.NONE
    if args.overwrite:
        flags |= Gio.FileCopyFlags.OVERWRITE
    use_partial = settings.get("use_partial_copy", True) and not args.no_partial
    copy(
        Gio.File.new_for_commandline_arg(args.source),
        Gio.File.new_for_commandline_arg(args.destination),
        flags,
        use_partial,
    )
    return 0


def _cmd_uris(args, settings) -> int:
    from . import filelist, locations

    files = filelist.list_new_from_string(sys.stdin.read())
    targets = filelist.list_get_parents(files) if args.parents else files
    for file in targets:
        print(locations.get_location(file))
    return 0


def _cmd_checksum(args, settings) -> int:
    from gi.repository import Gio

    from .operations import compare_checksum

    equal = compare_checksum(
        Gio.File.new_for_commandline_arg(args.first),
        Gio.File.new_for_commandline_arg(args.second),
        None,
        settings.get("checksum_type", "md5"),
    )
    return 0 if equal else 1


def build_parser() -> argparse.ArgumentParser:
    _ = _get_translation()

    parser = argparse.ArgumentParser(
        prog="gfilekit",
        description=_("Inspect and copy files through GIO"),
    )

    class LazyVersionAction(argparse.Action):
        def __call__(self, parser, _namespace, values, _option_string=None):
            from .settings.config import AppConstants

            print(f"{AppConstants.APP_TITLE} {AppConstants.APP_VERSION}")
            parser.exit()

    parser.add_argument(
        "--version", "-v", nargs=0, action=LazyVersionAction, help=_("Show version and exit")
    )
    parser.add_argument("--debug", "-d", action="store_true", help=_("Enable debug mode"))
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help=_("Set logging level"),
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    info = subparsers.add_parser("info", help=_("Describe a location"))
    info.add_argument("location")
    info.set_defaults(handler=_cmd_info)

    df = subparsers.add_parser("df", help=_("Show used and free space"))
    df.add_argument("location")
    df.add_argument("--binary", action="store_true", help=_("Use IEC units (KiB, MiB)"))
    df.set_defaults(handler=_cmd_df)

    copy = subparsers.add_parser("copy", help=_("Copy a file or directory"))
    copy.add_argument("source")
    copy.add_argument("destination")
    copy.add_argument("--overwrite", action="store_true", help=_("Replace an existing destination"))
    copy.add_argument(
        "--no-partial", action="store_true", help=_("Copy directly, without a .partial~ file")
    )
    copy.set_defaults(handler=_cmd_copy)

    uris = subparsers.add_parser("uris", help=_("Read a text/uri-list from stdin"))
    uris.add_argument("--parents", action="store_true", help=_("Print parent folders instead"))
    uris.set_defaults(handler=_cmd_uris)

    checksum = subparsers.add_parser("checksum", help=_("Exit 0 if two files have equal contents"))
    checksum.add_argument("first")
    checksum.add_argument("second")
    checksum.set_defaults(handler=_cmd_checksum)

    return parser


def main(argv=None) -> int:
    """Main entry point for the gfilekit command."""
    logger_mod = _get_logger_funcs()
    _ = _get_translation()

    args = build_parser().parse_args(argv)

    from .settings.manager import get_settings_manager

    settings = get_settings_manager()

    # Command line flags win over the saved settings
    if args.debug:
        logger_mod.enable_debug_mode()
    elif args.log_level:
        logger_mod.set_console_log_level(args.log_level)

    logger = logger_mod.get_logger("gfilekit.main")

    try:
        import setproctitle

        setproctitle.setproctitle("gfilekit")
    except ImportError as e:
        logger.debug(f"Failed to set process title: {e}")

    import gi

    gi.require_version("Gio", "2.0")
    from gi.repository import GLib

    from .utils.exceptions import GFileKitError, handle_exception

    try:
        return args.handler(args, settings)
    except GLib.Error as e:
        logger.debug(f"{args.command} failed", exc_info=True)
        print(_("Error: {}").format(e.message), file=sys.stderr)
        return 2
    except GFileKitError as e:
        handle_exception(e, args.command, "gfilekit.main")
        print(_("Error: {}").format(e.user_message), file=sys.stderr)
        return 2
    except KeyboardInterrupt:
        logger.info("Interrupted by user.")
        return 130


if __name__ == "__main__":
    sys.exit(main())
