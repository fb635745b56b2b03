"""Exclude filters for directory diff-copy.

Patterns use gitignore syntax and are matched by
``dulwich.ignore.IgnoreFilter``.  Relative paths are always
forward-slash separated and relative to the source root.
"""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

from dulwich.ignore import IgnoreFilter


class ExcludeFilter:
    """Skip source entries by pattern, pattern file, or in-tree .gitignore files."""

    def __init__(
        self,
        *,
        patterns: Sequence[str] | None = None,
        exclude_from: str | Path | None = None,
        gitignore: bool = False,
    ) -> None:
        lines: list[bytes] = [p.encode("utf-8") for p in patterns or ()]
        if exclude_from is not None:
            for raw in Path(exclude_from).read_bytes().splitlines():
                line = raw.strip()
                if line and not line.startswith(b"#"):
                    lines.append(line)
        self._base: IgnoreFilter | None = IgnoreFilter(lines) if lines else None
        self._gitignore = gitignore
        # rel_dir -> filter loaded from that directory's .gitignore (or None)
        self._dir_filters: dict[str, IgnoreFilter | None] = {}

    def reset(self) -> None:
        """Forget .gitignore files loaded for a previous source tree."""
        self._dir_filters.clear()

    @property
    def active(self) -> bool:
        """True if any filtering is configured."""
        return self._base is not None or self._gitignore

    def enter_directory(self, abs_dir: Path, rel_dir: str) -> None:
        """Load ``abs_dir/.gitignore`` (once) when gitignore mode is on."""
        if not self._gitignore or rel_dir in self._dir_filters:
            return
        gi = Path(abs_dir) / ".gitignore"
        self._dir_filters[rel_dir] = IgnoreFilter.from_path(str(gi)) if gi.is_file() else None

    def is_excluded(self, rel_path: str, *, is_dir: bool = False) -> bool:
        """Check *rel_path* against the patterns and every loaded .gitignore above it.

        ``enter_directory`` must already have been called for each ancestor
        directory for in-tree .gitignore files to take effect.
        """
        check = rel_path + "/" if is_dir else rel_path
        if self._base is not None and self._base.is_ignored(check) is True:
            return True
        if not self._gitignore:
            return False

        name = rel_path.rsplit("/", 1)[-1]
        if not is_dir and name == ".gitignore":
            return True

        # Deepest .gitignore wins; an explicit negation stops the search.
        parts = rel_path.split("/")
        for depth in range(len(parts) - 1, -1, -1):
            filt = self._dir_filters.get("/".join(parts[:depth]))
            if filt is None:
                continue
            sub = "/".join(parts[depth:])
            result = filt.is_ignored(sub + "/" if is_dir else sub)
            if result is not None:
                return result
        return False
