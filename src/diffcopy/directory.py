"""Recursive directory diff-copy.

Merge a source tree into a destination tree: files missing from the
destination are copied, files whose digest differs are overwritten,
matching files are left alone.  This is a one-directional merge, so
entries that exist only in the destination are never removed.

Traversal is depth-first over entries sorted by name.  The first error
aborts the walk; changes already applied stay applied.
"""

from __future__ import annotations

import errno
import logging
import os
from pathlib import Path

from ._exclude import ExcludeFilter
from ._hashing import HasherFactory, HasherSpec, resolve_hasher
from ._types import ChangeActionKind, ChangeReport
from .exceptions import DestinationWriteError, EnumerationError
from .files import copy_file, plan_file

logger = logging.getLogger(__name__)


def _list_entries(source_dir: Path) -> list[os.DirEntry]:
    """Immediate entries of *source_dir*, sorted by name."""
    try:
        with os.scandir(source_dir) as it:
            entries = list(it)
    except OSError as exc:
        raise EnumerationError.wrap(exc, source_dir) from exc
    entries.sort(key=lambda e: e.name)
    return entries


def _ensure_dir(path: Path) -> None:
    """Create *path* and missing ancestors unless it is already a directory."""
    if path.is_dir():
        return
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise DestinationWriteError.wrap(exc, path) from exc
    logger.debug("created directory %s", path)


def _check_dir(path: Path) -> None:
    """Raise what :func:`_ensure_dir` would raise for *path*, creating nothing."""
    for p in (path, *path.parents):
        if not p.exists():
            continue
        if p.is_dir():
            return
        code = errno.EEXIST if p == path else errno.ENOTDIR
        raise DestinationWriteError(code, os.strerror(code), os.fspath(path))


def _check_not_nested(source_dir: Path, dest_dir: Path) -> None:
    """Refuse a destination that is the source or lies inside it."""
    src = source_dir.resolve()
    dst = dest_dir.resolve()
    if dst == src or src in dst.parents:
        raise DestinationWriteError(
            errno.EINVAL, f"destination is inside source directory {src}",
            os.fspath(dest_dir),
        )


def _is_dir(entry: os.DirEntry) -> bool:
    try:
        return entry.is_dir()
    except OSError as exc:
        raise EnumerationError.wrap(exc, entry.path) from exc


def _walk(
    source_dir: Path,
    dest_dir: Path,
    rel_dir: str,
    factory: HasherFactory,
    exclude: ExcludeFilter | None,
    report: ChangeReport,
    *,
    apply: bool,
) -> None:
    """Process one directory level and recurse into subdirectories.

    With ``apply=False`` the report is filled in but nothing is created
    or written.
    """
    if apply:
        _ensure_dir(dest_dir)
    else:
        _check_dir(dest_dir)
    entries = _list_entries(source_dir)
    if exclude is not None:
        exclude.enter_directory(source_dir, rel_dir)

    for entry in entries:
        rel = f"{rel_dir}/{entry.name}" if rel_dir else entry.name
        is_dir = _is_dir(entry)
        if exclude is not None and exclude.is_excluded(rel, is_dir=is_dir):
            logger.debug("excluded %s", rel)
            continue

        src_path = source_dir / entry.name
        dst_path = dest_dir / entry.name
        if is_dir:
            _walk(src_path, dst_path, rel, factory, exclude, report, apply=apply)
            continue

        if dst_path.exists():
            action = plan_file(src_path, dst_path, factory)
        else:
            # Nothing to compare against
            action = ChangeActionKind.ADD
        if action is not None and apply:
            copy_file(src_path, dst_path)
        logger.debug("%s %s", action or "unchanged", rel)
        report.record(rel, action)


def _run(source_dir, dest_dir, hasher: HasherSpec, exclude: ExcludeFilter | None,
         *, apply: bool) -> ChangeReport:
    source_dir, dest_dir = Path(source_dir), Path(dest_dir)
    _check_not_nested(source_dir, dest_dir)
    if exclude is not None:
        exclude.reset()
    report = ChangeReport()
    _walk(source_dir, dest_dir, "", resolve_hasher(hasher), exclude,
          report, apply=apply)
    return report


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def diff_copy_dir(
    source_dir: str | os.PathLike,
    dest_dir: str | os.PathLike,
    *,
    hasher: HasherSpec = None,
    exclude: ExcludeFilter | None = None,
) -> ChangeReport:
    """Merge *source_dir* into *dest_dir*, writing only files whose content differs.

    *dest_dir* and any missing subdirectories are created.  Files present
    only in *dest_dir* are left untouched.

    Args:
        source_dir: Existing directory to read from.
        dest_dir: Directory to update; need not exist.
        hasher: Hash algorithm name or factory (default ``xxh3_64``).
        exclude: Optional :class:`ExcludeFilter` for source entries.

    Returns:
        A :class:`ChangeReport` of added, updated and unchanged paths.

    Raises:
        EnumerationError: a source directory could not be listed.
        SourceAccessError: a source file could not be read.
        DestinationWriteError: creating a directory or writing a file failed,
            or *dest_dir* is *source_dir* or lies inside it.
    """
    return _run(source_dir, dest_dir, hasher, exclude, apply=True)


def diff_copy_dir_dry_run(
    source_dir: str | os.PathLike,
    dest_dir: str | os.PathLike,
    *,
    hasher: HasherSpec = None,
    exclude: ExcludeFilter | None = None,
) -> ChangeReport:
    """Compute what :func:`diff_copy_dir` would do without writing.

    Raises the same errors the real call would, including a destination
    directory blocked by an existing file.
    """
    return _run(source_dir, dest_dir, hasher, exclude, apply=False)
