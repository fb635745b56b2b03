"""Shared fixtures for diffcopy tests."""

import os

import pytest


OLD_MTIME_NS = 1_000_000_000 * 1_000_000_000  # 2001-09-09


def age(path):
    """Push *path*'s timestamps into the past so any rewrite is detectable."""
    os.utime(path, ns=(OLD_MTIME_NS, OLD_MTIME_NS))
    return os.stat(path).st_mtime_ns


def mtime_ns(path):
    return os.stat(path).st_mtime_ns


@pytest.fixture
def write_file(tmp_path):
    """Factory: write_file("rel/path", content) -> Path, creating parents."""
    def _write(rel, content):
        p = tmp_path / rel
        p.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, str):
            content = content.encode()
        p.write_bytes(content)
        return p
    return _write


@pytest.fixture
def src_dir(tmp_path):
    d = tmp_path / "src"
    d.mkdir()
    return d


@pytest.fixture
def dest_dir(tmp_path):
    d = tmp_path / "dest"
    d.mkdir()
    return d


requires_non_root = pytest.mark.skipif(
    not hasattr(os, "geteuid") or os.geteuid() == 0,
    reason="permission bits are not enforced for root (or not POSIX)",
)
