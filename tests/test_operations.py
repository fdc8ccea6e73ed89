"""Tests for copy, checksum, key file and permission helpers."""

import hashlib
import os
import stat
from unittest.mock import MagicMock

import pytest
from gi.repository import Gio, GLib

from gfilekit import operations
from gfilekit.utils.exceptions import InvalidLocationError, ValidationError


class TestPartialNameFor:
    """Tests for partial_name_for."""

    def test_appends_suffix(self):
        assert operations.partial_name_for("movie.mkv") == "movie.mkv.partial~"

    def test_truncates_long_names(self):
        name = operations.partial_name_for("x" * 150)

        assert name == "x" * 100 + ".partial~"

    def test_unnamed(self):
        assert operations.partial_name_for(None) == "UNNAMED.partial~"


class TestCopy:
    """Tests for copy."""

    def test_direct_copy(self, tmp_path, sample_file, gfile):
        dest = tmp_path / "copy.txt"

        assert operations.copy(gfile(sample_file), gfile(dest))
        assert dest.read_text() == sample_file.read_text()

    def test_partial_copy_leaves_no_partial(self, tmp_path, sample_file, gfile):
        dest = tmp_path / "out" / "copy.txt"
        dest.parent.mkdir()

        assert operations.copy(gfile(sample_file), gfile(dest), use_partial=True)
        assert dest.read_text() == sample_file.read_text()
        assert sorted(p.name for p in dest.parent.iterdir()) == ["copy.txt"]

    def test_partial_copy_refuses_existing_destination(self, tmp_path, sample_file, gfile):
        dest = tmp_path / "copy.txt"
        dest.write_text("keep me")

        with pytest.raises(GLib.Error) as excinfo:
            operations.copy(gfile(sample_file), gfile(dest), use_partial=True)

        assert excinfo.value.matches(Gio.io_error_quark(), Gio.IOErrorEnum.EXISTS)
        assert dest.read_text() == "keep me"

    def test_partial_copy_overwrites(self, tmp_path, sample_file, gfile):
        dest = tmp_path / "copy.txt"
        dest.write_text("old")

        operations.copy(
            gfile(sample_file), gfile(dest), Gio.FileCopyFlags.OVERWRITE, use_partial=True
        )

        assert dest.read_text() == sample_file.read_text()

    def test_stale_partial_is_replaced(self, tmp_path, sample_file, gfile):
        dest = tmp_path / "copy.txt"
        (tmp_path / "copy.txt.partial~").write_text("leftover")

        operations.copy(gfile(sample_file), gfile(dest), use_partial=True)

        assert dest.read_text() == sample_file.read_text()
        assert not (tmp_path / "copy.txt.partial~").exists()

    def test_failed_rename_removes_partial(self, tmp_path, sample_file, gfile, monkeypatch):
        def failing_rename(self, display_name, cancellable):
            raise GLib.Error.new_literal(
                Gio.io_error_quark(), "rename failed", Gio.IOErrorEnum.FAILED
            )

        monkeypatch.setattr(Gio.File, "set_display_name", failing_rename)
        dest = tmp_path / "copy.txt"

        with pytest.raises(GLib.Error):
            operations.copy(gfile(sample_file), gfile(dest), use_partial=True)

        assert not (tmp_path / "copy.txt.partial~").exists()
        assert not dest.exists()

    def test_directory_skips_partial(self, tmp_path, gfile):
        source = tmp_path / "folder"
        source.mkdir()
        dest = tmp_path / "target"

        with pytest.raises(GLib.Error):
            operations.copy(gfile(source), gfile(dest), use_partial=True)

        assert not (tmp_path / "target.partial~").exists()

    def test_symlink_without_following_skips_partial(self, tmp_path, sample_file, gfile, monkeypatch):
        def failing_rename(self, display_name, cancellable):
            raise GLib.Error.new_literal(
                Gio.io_error_quark(), "rename failed", Gio.IOErrorEnum.FAILED
            )

        monkeypatch.setattr(Gio.File, "set_display_name", failing_rename)
        link = tmp_path / "latest"
        link.symlink_to(sample_file)
        dest = tmp_path / "backup"

        assert operations.copy(
            gfile(link), gfile(dest), Gio.FileCopyFlags.NOFOLLOW_SYMLINKS, use_partial=True
        )

        assert dest.is_symlink()
        assert os.readlink(dest) == str(sample_file)
        assert not (tmp_path / "backup.partial~").exists()

    def test_progress_callback_and_data_are_forwarded(self, tmp_path, gfile):
        source = MagicMock()
        source.copy.return_value = True
        dest = gfile(tmp_path / "copy.txt")

        def on_progress(current, total, tag):
            pass

        assert operations.copy(
            source, dest, Gio.FileCopyFlags.NONE, False, None, on_progress, "report"
        )

        source.copy.assert_called_once_with(
            dest, Gio.FileCopyFlags.NONE, None, on_progress, "report"
        )

    def test_exists_error_names_remote_destination(self):
        dest = MagicMock()
        dest.get_path.return_value = None
        dest.get_uri.return_value = "sftp://files.example.com/srv/copy.txt"

        error = operations._exists_error(dest)

        assert error.matches(Gio.io_error_quark(), Gio.IOErrorEnum.EXISTS)
        assert error.message == 'Error opening file "sftp://files.example.com/srv/copy.txt": File exists'

    def test_missing_source_raises(self, tmp_path, gfile):
        with pytest.raises(GLib.Error):
            operations.copy(gfile(tmp_path / "missing"), gfile(tmp_path / "copy"), use_partial=True)

    def test_destination_without_parent(self, sample_file, gfile):
        with pytest.raises(InvalidLocationError):
            operations.copy(gfile(sample_file), gfile("/"))


class TestChecksum:
    """Tests for create_checksum and compare_checksum."""

    def test_md5_matches_hashlib(self, sample_file, gfile):
        expected = hashlib.md5(sample_file.read_bytes()).hexdigest()

        assert operations.create_checksum(gfile(sample_file)) == expected

    def test_sha256(self, sample_file, gfile):
        expected = hashlib.sha256(sample_file.read_bytes()).hexdigest()

        assert operations.create_checksum(gfile(sample_file), None, "sha256") == expected

    def test_large_file_spans_reads(self, tmp_path, gfile):
        big = tmp_path / "big.bin"
        big.write_bytes(bytes(range(256)) * 1024)

        expected = hashlib.md5(big.read_bytes()).hexdigest()

        assert operations.create_checksum(gfile(big)) == expected

    def test_unknown_type(self, sample_file, gfile):
        with pytest.raises(ValidationError):
            operations.create_checksum(gfile(sample_file), None, "crc32")

    def test_equal_contents(self, tmp_path, sample_file, gfile):
        twin = tmp_path / "twin.txt"
        twin.write_bytes(sample_file.read_bytes())

        assert operations.compare_checksum(gfile(sample_file), gfile(twin))

    def test_different_contents(self, tmp_path, sample_file, gfile):
        other = tmp_path / "other.txt"
        other.write_text("something else")

        assert not operations.compare_checksum(gfile(sample_file), gfile(other))

    def test_missing_file_raises(self, tmp_path, sample_file, gfile):
        with pytest.raises(GLib.Error):
            operations.compare_checksum(gfile(sample_file), gfile(tmp_path / "missing"))


class TestKeyFile:
    """Tests for query_key_file and write_key_file."""

    def test_reads_groups_and_keeps_comments(self, tmp_path, gfile):
        path = tmp_path / "app.desktop"
        path.write_text("# launcher\n[Desktop Entry]\nName=Editor\nName[de]=Bearbeiter\n")

        key_file = operations.query_key_file(gfile(path))

        assert key_file.get_string("Desktop Entry", "Name") == "Editor"
        assert key_file.get_locale_string("Desktop Entry", "Name", "de") == "Bearbeiter"
        data, _length = key_file.to_data()
        assert "# launcher" in data

    def test_latin1_comment_is_loaded(self, tmp_path, gfile):
        path = tmp_path / "legacy.desktop"
        path.write_bytes(b"# Kommentar f\xfcr Men\xfc\n[Desktop Entry]\nName=Viewer\n")

        key_file = operations.query_key_file(gfile(path))

        assert key_file.get_string("Desktop Entry", "Name") == "Viewer"

    def test_empty_file(self, tmp_path, gfile):
        path = tmp_path / "empty.desktop"
        path.write_text("")

        key_file = operations.query_key_file(gfile(path))

        assert not key_file.has_group("Desktop Entry")

    def test_invalid_contents_raise(self, tmp_path, gfile):
        path = tmp_path / "broken.desktop"
        path.write_text("this is not a key file\n")

        with pytest.raises(GLib.Error):
            operations.query_key_file(gfile(path))

    def test_missing_file_raises(self, tmp_path, gfile):
        with pytest.raises(GLib.Error):
            operations.query_key_file(gfile(tmp_path / "missing.desktop"))

    def test_write_replaces_contents(self, tmp_path, gfile):
        path = tmp_path / "app.desktop"
        path.write_text("[Desktop Entry]\nName=Old\n")
        key_file = GLib.KeyFile.new()
        key_file.set_string("Desktop Entry", "Name", "New")

        assert operations.write_key_file(gfile(path), key_file)
        assert "Name=New" in path.read_text()
        assert "Name=Old" not in path.read_text()


class TestSetExecutableFlags:
    """Tests for set_executable_flags."""

    def test_adds_execute_bits(self, sample_file, gfile):
        sample_file.chmod(0o644)

        assert operations.set_executable_flags(gfile(sample_file))
        assert stat.S_IMODE(sample_file.stat().st_mode) == 0o755

    def test_already_executable(self, sample_file, gfile):
        sample_file.chmod(0o750 | 0o005)

        assert operations.set_executable_flags(gfile(sample_file))
        assert stat.S_IMODE(sample_file.stat().st_mode) == 0o755

    def test_missing_file_raises(self, tmp_path, gfile):
        with pytest.raises(GLib.Error):
            operations.set_executable_flags(gfile(tmp_path / "missing.sh"))
