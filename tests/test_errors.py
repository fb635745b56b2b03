"""Tests for the error taxonomy."""

import errno
import os

import pytest

from diffcopy import (
    DestinationWriteError,
    DiffCopyError,
    EnumerationError,
    SourceAccessError,
    diff_copy_dir,
    diff_copy_file,
)

from conftest import requires_non_root


class TestWrap:
    def test_keeps_errno_and_filename(self):
        exc = FileNotFoundError(errno.ENOENT, "No such file or directory", "/x/y")
        err = SourceAccessError.wrap(exc)
        assert isinstance(err, DiffCopyError)
        assert isinstance(err, OSError)
        assert err.errno == errno.ENOENT
        assert err.filename == "/x/y"
        assert "source access failed" in str(err)

    def test_filename_override(self, tmp_path):
        exc = PermissionError(errno.EACCES, "Permission denied")
        err = DestinationWriteError.wrap(exc, tmp_path / "out")
        assert err.errno == errno.EACCES
        assert err.filename == os.fspath(tmp_path / "out")

    def test_without_errno(self):
        err = EnumerationError.wrap(OSError("weird"))
        assert err.errno is None
        assert "weird" in str(err)

    def test_categories_distinct(self):
        assert not issubclass(SourceAccessError, DestinationWriteError)
        assert not issubclass(EnumerationError, SourceAccessError)


class TestPermissions:
    @requires_non_root
    def test_unreadable_source(self, tmp_path):
        src = tmp_path / "secret.txt"
        src.write_text("s")
        src.chmod(0)
        try:
            with pytest.raises(SourceAccessError) as excinfo:
                diff_copy_file(src, tmp_path / "out.txt")
            assert excinfo.value.errno == errno.EACCES
            assert isinstance(excinfo.value.__cause__, PermissionError)
        finally:
            src.chmod(0o644)
        assert not (tmp_path / "out.txt").exists()

    @requires_non_root
    def test_unreadable_dest_is_rewritten(self, tmp_path):
        src = tmp_path / "src.txt"
        src.write_text("hello")
        dst = tmp_path / "dst.txt"
        dst.write_text("hello")
        dst.chmod(0o200)  # write-only: probe fails, copy succeeds
        try:
            diff_copy_file(src, dst)
        finally:
            dst.chmod(0o644)
        assert dst.read_text() == "hello"

    @requires_non_root
    def test_unlistable_subdirectory(self, tmp_path):
        src = tmp_path / "src"
        locked = src / "locked"
        locked.mkdir(parents=True)
        (locked / "f.txt").write_text("f")
        locked.chmod(0)
        try:
            with pytest.raises(EnumerationError) as excinfo:
                diff_copy_dir(src, tmp_path / "dest")
            assert excinfo.value.errno == errno.EACCES
        finally:
            locked.chmod(0o755)

    @requires_non_root
    def test_readonly_dest_dir(self, tmp_path):
        src = tmp_path / "src"
        src.mkdir()
        (src / "a.txt").write_text("a")
        dest = tmp_path / "dest"
        dest.mkdir()
        dest.chmod(0o555)
        try:
            with pytest.raises(DestinationWriteError) as excinfo:
                diff_copy_dir(src, dest)
            assert excinfo.value.errno == errno.EACCES
        finally:
            dest.chmod(0o755)
