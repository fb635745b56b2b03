"""Content hashing: pluggable accumulators, hash sinks, streaming helpers.

A hash strategy is any zero-argument callable returning a fresh
:class:`Hasher`.  Digests are unsigned integers; two streams with the
same bytes always produce the same digest under the same strategy.
Collisions between different contents are possible and accepted: the
digest is an equality oracle for change detection, not an integrity
proof.
"""

from __future__ import annotations

import hashlib
import os
import zlib
from typing import BinaryIO, Callable, Protocol, Union

import xxhash


HASH_CHUNK_SIZE = 65536


class Hasher(Protocol):
    """Incremental accumulator: any number of ``update`` calls, then ``intdigest``."""

    def update(self, data: bytes) -> None: ...

    def intdigest(self) -> int: ...


HasherFactory = Callable[[], Hasher]
HasherSpec = Union[str, HasherFactory, None]


class ByteSink(Protocol):
    """Anything bytes can be written to (an open file, a :class:`HashWriter`)."""

    def write(self, data: bytes) -> int | None: ...


# ---------------------------------------------------------------------------
# Adapters
# ---------------------------------------------------------------------------

class _HashlibHasher:
    """Expose a :mod:`hashlib` object through the :class:`Hasher` protocol."""

    def __init__(self, h):
        self._h = h

    def update(self, data: bytes) -> None:
        self._h.update(data)

    def intdigest(self) -> int:
        return int.from_bytes(self._h.digest(), "big")


class _Crc32Hasher:
    """Running CRC-32 (32-bit digest)."""

    def __init__(self):
        self._crc = 0

    def update(self, data: bytes) -> None:
        self._crc = zlib.crc32(data, self._crc)

    def intdigest(self) -> int:
        return self._crc & 0xFFFFFFFF


class HashWriter:
    """Byte sink that feeds everything written to it into a hasher."""

    def __init__(self, hasher: Hasher):
        self.hasher = hasher

    def write(self, data: bytes) -> int:
        self.hasher.update(data)
        return len(data)

    def flush(self) -> None:
        pass

    def intdigest(self) -> int:
        return self.hasher.intdigest()


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------

DEFAULT_HASH = "xxh3_64"

HASH_ALGORITHMS: dict[str, HasherFactory] = {
    "xxh3_64": xxhash.xxh3_64,
    "xxh64": xxhash.xxh64,
    "xxh3_128": xxhash.xxh3_128,
    "crc32": _Crc32Hasher,
    "blake2b": lambda: _HashlibHasher(hashlib.blake2b()),
    "sha1": lambda: _HashlibHasher(hashlib.sha1()),
    "sha256": lambda: _HashlibHasher(hashlib.sha256()),
}


def resolve_hasher(spec: HasherSpec = None) -> HasherFactory:
    """Turn a hasher name, factory, or ``None`` (default) into a factory."""
    if spec is None:
        return HASH_ALGORITHMS[DEFAULT_HASH]
    if isinstance(spec, str):
        try:
            return HASH_ALGORITHMS[spec]
        except KeyError:
            known = ", ".join(sorted(HASH_ALGORITHMS))
            raise ValueError(f"Unknown hash algorithm: {spec} (choose from {known})") from None
    if callable(spec):
        return spec
    raise TypeError(f"hasher must be a name or a factory, not {type(spec).__name__}")


# ---------------------------------------------------------------------------
# Streaming
# ---------------------------------------------------------------------------

def copy_stream(reader: BinaryIO, sink: ByteSink, chunk_size: int = HASH_CHUNK_SIZE) -> int:
    """Copy *reader* into *sink* chunk by chunk. Returns the byte count."""
    total = 0
    while True:
        chunk = reader.read(chunk_size)
        if not chunk:
            break
        sink.write(chunk)
        total += len(chunk)
    return total


def hash_stream(reader: BinaryIO, factory: HasherFactory) -> int:
    """Digest everything readable from *reader* with a fresh hasher."""
    sink = HashWriter(factory())
    copy_stream(reader, sink)
    return sink.intdigest()


def hash_file(path: str | os.PathLike, factory: HasherFactory) -> int:
    """Digest the file at *path*.  ``OSError`` from open/read propagates."""
    with open(path, "rb") as f:
        return hash_stream(f, factory)


def hash_bytes(data: bytes, factory: HasherFactory) -> int:
    """Digest an in-memory buffer."""
    h = factory()
    h.update(data)
    return h.intdigest()
