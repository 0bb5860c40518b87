"""Data models for the diffman diff package.

Contains:
- DiffFormat: Supported diff text formats
- Change: Kind of a single line change
- LineChange: One body line of a hunk
- DiffHunk: One contiguous edit region
- Diff: Patch for a single file
- DiffComposition: All diffs parsed from one diff text
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


DIFF_SIGN_LINE_ADDED = "+"
DIFF_SIGN_LINE_DELETED = "-"
DIFF_SIGN_LINE_DEFAULT = " "
DIFF_SIGN_HEADER_ORIGIN = "---"
DIFF_SIGN_HEADER_NEW = "+++"
DIFF_SIGN_HUNK = "@@"


class DiffFormat(str, Enum):
    """Diff text formats understood by the parser."""

    GIT_UDIFF = "git-udiff"


class Change(str, Enum):
    """Kind of a line inside a hunk body."""

    DEFAULT = "default"  # Context line, present in both texts
    ADDED = "added"
    DELETED = "deleted"

    @property
    def sign(self) -> str:
        """One-character marker used in the diff body."""
        return _SIGNS[self]

    @classmethod
    def from_sign(cls, sign: str) -> Optional["Change"]:
        """Look up a change kind from its body marker, None if unknown."""
        for kind in cls:
            if kind.sign == sign:
                return kind
        return None


_SIGNS = {
    Change.DEFAULT: DIFF_SIGN_LINE_DEFAULT,
    Change.ADDED: DIFF_SIGN_LINE_ADDED,
    Change.DELETED: DIFF_SIGN_LINE_DELETED,
}


@dataclass(frozen=True)
class LineChange:
    """A single body line of a hunk with its sign removed."""

    kind: Change
    content: str


@dataclass(frozen=True)
class DiffHunk:
    """One contiguous edit region of a diff."""

    old_line: int  # 1-based start in the original text
    old_len: int
    new_line: int  # 1-based start in the new text
    new_len: int
    changes: tuple[LineChange, ...] = ()

    @property
    def header(self) -> str:
        """Range part of the @@ header, e.g. '-16,7 +16,9'."""
        return f"-{self.old_line},{self.old_len} +{self.new_line},{self.new_len}"

    def count(self, kind: Change) -> int:
        """Number of body lines of the given kind."""
        return sum(1 for change in self.changes if change.kind is kind)


@dataclass(frozen=True)
class Diff:
    """Patch for a single file."""

    path: str  # Relative path as written after a/ and b/
    command: Optional[str] = None  # Raw 'diff --git ...' line
    index: Optional[str] = None  # Text after 'index '
    hunks: tuple[DiffHunk, ...] = ()


@dataclass(frozen=True)
class DiffComposition:
    """All per-file diffs parsed from one diff text, in appearance order."""

    format: DiffFormat
    diffs: tuple[Diff, ...] = ()

    @property
    def paths(self) -> list[str]:
        return [diff.path for diff in self.diffs]
