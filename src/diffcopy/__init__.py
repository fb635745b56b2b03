from .files import diff_copy_file, diff_copy_bytes, probe_digest, Probe
from .directory import diff_copy_dir, diff_copy_dir_dry_run
from ._exclude import ExcludeFilter
from ._hashing import (
    DEFAULT_HASH, HASH_ALGORITHMS, HashWriter, Hasher,
    hash_bytes, hash_file, hash_stream, resolve_hasher,
)
from ._types import ChangeAction, ChangeActionKind, ChangeReport, format_summary
from .exceptions import DiffCopyError, SourceAccessError, DestinationWriteError, EnumerationError

__all__ = [
    "diff_copy_file", "diff_copy_bytes", "diff_copy_dir", "diff_copy_dir_dry_run",
    "probe_digest", "Probe", "ExcludeFilter",
    "DEFAULT_HASH", "HASH_ALGORITHMS", "HashWriter", "Hasher",
    "hash_bytes", "hash_file", "hash_stream", "resolve_hasher",
    "ChangeAction", "ChangeActionKind", "ChangeReport", "format_summary",
    "DiffCopyError", "SourceAccessError", "DestinationWriteError", "EnumerationError",
]
