"""Exceptions for diffcopy.

Every error raised by a diff-copy operation is a :class:`DiffCopyError`,
which is an :class:`OSError`.  The ``errno``, ``strerror`` and
``filename`` of the underlying OS error are carried over so callers can
still tell "not found" from "permission denied"; raise sites chain the
original exception as ``__cause__``.
"""

from __future__ import annotations

import os


class DiffCopyError(OSError):
    """Base class for diff-copy failures."""

    category = "error"

    @classmethod
    def wrap(cls, exc: OSError, filename: str | os.PathLike | None = None) -> DiffCopyError:
        """Build an instance of *cls* carrying the details of *exc*."""
        name = filename if filename is not None else exc.filename
        if exc.errno is None:
            return cls(str(exc))
        return cls(exc.errno, exc.strerror or os.strerror(exc.errno), os.fspath(name) if name is not None else None)

    def __str__(self) -> str:
        return f"{self.category}: {super().__str__()}"


class SourceAccessError(DiffCopyError):
    """The source could not be opened or read (not found, permission, I/O)."""

    category = "source access failed"


class DestinationWriteError(DiffCopyError):
    """Creating, truncating or writing the destination failed."""

    category = "destination write failed"


class EnumerationError(DiffCopyError):
    """A source directory could not be listed."""

    category = "cannot list source directory"
