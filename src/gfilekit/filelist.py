# gfilekit/filelist.py
"""
Conversions between text/uri-list data and lists of Gio.File handles.
"""

from typing import Iterable, List

import gi

gi.require_version("Gio", "2.0")
from gi.repository import Gio, GLib


def list_new_from_string(string: str) -> List[Gio.File]:
    """
    Splits a URI list conforming to the text/uri-list mime type defined
    in RFC 2483 into one Gio.File per URI, discarding comments and
    whitespace.
    """
    uris = GLib.uri_list_extract_uris(string) or []
    return [Gio.File.new_for_uri(uri) for uri in uris]


def list_to_stringv(files: Iterable[Gio.File]) -> List[str]:
    """
    Serializes @files to URIs, e.g. for Gtk selection data.

    Native paths are preferred for interoperability.
    """
    uris = []
    for file in files:
        path = file.get_path()
        if path is None:
            uris.append(file.get_uri())
        else:
            uris.append(GLib.filename_to_uri(path, None))
    return uris


def list_to_string(files: Iterable[Gio.File]) -> str:
    """Serializes @files as a text/uri-list document."""
    return "".join(f"{uri}\r\n" for uri in list_to_stringv(files))


def list_get_parents(files: Iterable[Gio.File]) -> List[Gio.File]:
    """
    Collects the parent folders of @files.

    Each parent appears once, in the order it was first seen. Entries that
    are not files or have no parent are skipped.
    """
    parents: List[Gio.File] = []
    for file in files:
        if not isinstance(file, Gio.File):
            continue
        parent = file.get_parent()
        if parent is None:
            continue
        if not any(known.equal(parent) for known in parents):
            parents.append(parent)
    return parents
