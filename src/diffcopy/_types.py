"""Data structures describing what a diff-copy did (or would do)."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class ChangeActionKind(str, Enum):
    """Kind of change applied to a destination file: ``ADD`` or ``UPDATE``."""
    ADD = "add"
    UPDATE = "update"

    def __str__(self) -> str:          # noqa: D105
        return self.value

    @property
    def symbol(self) -> str:
        """One-character marker used in listings (``+`` or ``~``)."""
        return "+" if self is ChangeActionKind.ADD else "~"


@dataclass
class ChangeAction:
    """A single add/update action in a :class:`ChangeReport`.

    Attributes:
        path: Path relative to the destination root (forward slashes).
        action: :class:`ChangeActionKind` value.
    """
    path: str
    action: ChangeActionKind


@dataclass
class ChangeReport:
    """Result of a directory diff-copy.

    Attributes:
        add: Files that did not exist in the destination and were created.
        update: Files whose digest differed and were overwritten.
        unchanged: Files whose digest matched; not written.
    """
    add: list[str] = field(default_factory=list)
    update: list[str] = field(default_factory=list)
    unchanged: list[str] = field(default_factory=list)

    @property
    def in_sync(self) -> bool:
        """``True`` if nothing was (or would be) written."""
        return not self.add and not self.update

    @property
    def total(self) -> int:
        """Number of add + update actions."""
        return len(self.add) + len(self.update)

    def record(self, path: str, action: ChangeActionKind | None) -> None:
        """File *path* under the list matching *action* (``None`` = unchanged)."""
        if action is ChangeActionKind.ADD:
            self.add.append(path)
        elif action is ChangeActionKind.UPDATE:
            self.update.append(path)
        else:
            self.unchanged.append(path)

    def actions(self) -> list[ChangeAction]:
        """Return all actions as a flat list sorted by path."""
        result: list[ChangeAction] = []
        for p in self.add:
            result.append(ChangeAction(path=p, action=ChangeActionKind.ADD))
        for p in self.update:
            result.append(ChangeAction(path=p, action=ChangeActionKind.UPDATE))
        result.sort(key=lambda a: a.path)
        return result


def format_summary(report: ChangeReport) -> str:
    """Short human summary, e.g. ``+2 ~1 (5 unchanged)``."""
    if report.total == 0:
        return f"No changes ({len(report.unchanged)} unchanged)"

    # Single change - name the file
    if report.total == 1:
        action = report.actions()[0]
        return f"{action.action.symbol} {action.path}"

    parts = []
    if report.add:
        parts.append(f"+{len(report.add)}")
    if report.update:
        parts.append(f"~{len(report.update)}")
    summary = " ".join(parts)
    if report.unchanged:
        summary += f" ({len(report.unchanged)} unchanged)"
    return summary
