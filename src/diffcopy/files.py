"""File and bytes diff-copy.

Both operations hash the source, probe the destination, and write the
destination only when the digests differ or the destination could not
be read.  When the digests match the destination is never opened for
writing, so its timestamps stay as they were.
"""

from __future__ import annotations

import io
import logging
import os
from dataclasses import dataclass
from typing import BinaryIO

from ._hashing import HasherFactory, HasherSpec, copy_stream, hash_bytes, hash_stream, resolve_hasher
from ._types import ChangeActionKind
from .exceptions import DestinationWriteError, SourceAccessError

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Destination probe
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Probe:
    """Outcome of reading a destination for comparison.

    Either the destination was read and ``digest`` holds its value, or it
    is absent/unreadable and ``digest`` is ``None``.  ``error`` keeps the
    OS error for the unreadable case; a missing file leaves it ``None``.
    """
    digest: int | None
    error: OSError | None = None

    @property
    def present(self) -> bool:
        return self.digest is not None

    def matches(self, digest: int) -> bool:
        """True only if the destination was read and has *digest*."""
        return self.digest is not None and self.digest == digest


def probe_digest(path: str | os.PathLike, factory: HasherFactory) -> Probe:
    """Digest *path* with a fresh hasher, never raising for I/O failures."""
    try:
        with open(path, "rb") as f:
            return Probe(hash_stream(f, factory))
    except FileNotFoundError:
        return Probe(None)
    except OSError as exc:
        logger.debug("destination %s unreadable, treating as absent: %s", path, exc)
        return Probe(None, exc)


# ---------------------------------------------------------------------------
# Error-classifying stream ends
# ---------------------------------------------------------------------------

class _SourceReader:
    """Binary reader whose OS errors surface as :class:`SourceAccessError`."""

    def __init__(self, path: str | os.PathLike):
        self.path = path
        try:
            self._f: BinaryIO = open(path, "rb")
        except OSError as exc:
            raise SourceAccessError.wrap(exc, path) from exc

    def read(self, size: int = -1) -> bytes:
        try:
            return self._f.read(size)
        except OSError as exc:
            raise SourceAccessError.wrap(exc, self.path) from exc

    def close(self) -> None:
        self._f.close()

    def __enter__(self) -> _SourceReader:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


class _DestinationSink:
    """Truncating binary writer whose OS errors surface as :class:`DestinationWriteError`."""

    def __init__(self, path: str | os.PathLike):
        self.path = path
        try:
            self._f: BinaryIO = open(path, "wb")
        except OSError as exc:
            raise DestinationWriteError.wrap(exc, path) from exc

    def write(self, data: bytes) -> int:
        try:
            return self._f.write(data)
        except OSError as exc:
            raise DestinationWriteError.wrap(exc, self.path) from exc

    def close(self) -> None:
        try:
            self._f.close()
        except OSError as exc:
            raise DestinationWriteError.wrap(exc, self.path) from exc

    def __enter__(self) -> _DestinationSink:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


def copy_file(source: str | os.PathLike, destination: str | os.PathLike) -> None:
    """Copy the bytes of *source* onto *destination* unconditionally.

    Only content is copied; permissions and timestamps are not.
    """
    with _SourceReader(source) as reader, _DestinationSink(destination) as sink:
        copy_stream(reader, sink)


def write_bytes(data: bytes, destination: str | os.PathLike) -> None:
    """Write *data* to *destination* unconditionally (create or truncate)."""
    with _DestinationSink(destination) as sink:
        copy_stream(io.BytesIO(data), sink)


# ---------------------------------------------------------------------------
# Planning
# ---------------------------------------------------------------------------

def _decide(source_digest: int, probe: Probe) -> ChangeActionKind | None:
    if probe.matches(source_digest):
        return None
    return ChangeActionKind.UPDATE if probe.present else ChangeActionKind.ADD


def plan_file(
    source: str | os.PathLike, destination: str | os.PathLike, factory: HasherFactory,
) -> ChangeActionKind | None:
    """Decide what :func:`diff_copy_file` would do, without writing."""
    with _SourceReader(source) as reader:
        source_digest = hash_stream(reader, factory)
    return _decide(source_digest, probe_digest(destination, factory))


def plan_bytes(
    data: bytes, destination: str | os.PathLike, factory: HasherFactory,
) -> ChangeActionKind | None:
    """Decide what :func:`diff_copy_bytes` would do, without writing."""
    return _decide(hash_bytes(data, factory), probe_digest(destination, factory))


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def diff_copy_file(
    source: str | os.PathLike,
    destination: str | os.PathLike,
    *,
    hasher: HasherSpec = None,
) -> ChangeActionKind | None:
    """Copy *source* over *destination* unless their contents already match.

    Returns ``ChangeActionKind.ADD`` when the destination was missing (or
    unreadable) and was written, ``ChangeActionKind.UPDATE`` when it held
    different content, and ``None`` when nothing was written.

    Raises:
        SourceAccessError: *source* cannot be opened or read.
        DestinationWriteError: writing *destination* failed.
    """
    action = plan_file(source, destination, resolve_hasher(hasher))
    if action is None:
        logger.debug("unchanged %s", destination)
        return None
    copy_file(source, destination)
    logger.debug("%s %s -> %s", action, source, destination)
    return action


def diff_copy_bytes(
    source: bytes,
    destination: str | os.PathLike,
    *,
    hasher: HasherSpec = None,
) -> ChangeActionKind | None:
    """Write the in-memory *source* to *destination* unless it already holds it.

    Same return values as :func:`diff_copy_file`.  Hashing *source* never
    fails; only :class:`DestinationWriteError` can be raised.
    """
    action = plan_bytes(source, destination, resolve_hasher(hasher))
    if action is None:
        logger.debug("unchanged %s", destination)
        return None
    write_bytes(source, destination)
    logger.debug("%s %s (%d bytes)", action, destination, len(source))
    return action
