"""Diff parser for the diffman diff package.

Contains:
- parse_git_udiff: Parse git unified diff text into a DiffComposition
- DiffBuilder / HunkBuilder: Accumulators for the diff and hunk being read
- _DiffAssembler: Single-pass assembler driving the line classifier
"""

import logging
import re
from dataclasses import dataclass, field
from pathlib import PurePosixPath
from typing import Optional

from diffman.diff.classifier import LineKind, LineTag, ParserState, classify
from diffman.diff.exceptions import (
    DuplicateIndexError,
    ExpectationFailedError,
    InvalidLineStartError,
)
from diffman.diff.lines import split_lines
from diffman.diff.models import (
    Change,
    Diff,
    DiffComposition,
    DiffFormat,
    DiffHunk,
    LineChange,
)


logger = logging.getLogger(__name__)

_COMMAND_PREFIX = "diff --git "
_INDEX_PREFIX = "index "
_ORIGIN_PREFIX = "--- "
_NEW_PREFIX = "+++ "
_HUNK_PREFIX = "@@ "
_HUNK_SUFFIX = " @@"
_ORIGIN_PATH_PREFIX = "a/"
_NEW_PATH_PREFIX = "b/"

_NUMBER_RE = re.compile(r"[0-9]+")


@dataclass
class HunkBuilder:
    """Hunk being read: header numbers plus the changes seen so far."""

    old_line: int
    old_len: int
    new_line: int
    new_len: int
    changes: list[LineChange] = field(default_factory=list)

    def add_change(self, kind: Change, content: str) -> None:
        self.changes.append(LineChange(kind=kind, content=content))

    def build(self) -> DiffHunk:
        return DiffHunk(
            old_line=self.old_line,
            old_len=self.old_len,
            new_line=self.new_line,
            new_len=self.new_len,
            changes=tuple(self.changes),
        )


@dataclass
class DiffBuilder:
    """Diff being read: path, raw header text and finished hunks."""

    path: str
    command: Optional[str] = None
    index: Optional[str] = None
    hunks: list[DiffHunk] = field(default_factory=list)

    def add_hunk(self, hunk: DiffHunk) -> None:
        self.hunks.append(hunk)

    def build(self) -> Diff:
        return Diff(
            path=self.path,
            command=self.command,
            index=self.index,
            hunks=tuple(self.hunks),
        )


class _DiffAssembler:
    """Builds a DiffComposition from classified lines.

    Holds at most one open diff and one open hunk. Flushing moves the open
    item into its owner and closes the slot.
    """

    def __init__(self) -> None:
        self.state = ParserState.INIT
        self.diffs: list[Diff] = []
        self.diff: Optional[DiffBuilder] = None
        self.hunk: Optional[HunkBuilder] = None
        self.line = ""
        self.line_number = 0

    def _fail(self, reason: str) -> ExpectationFailedError:
        return ExpectationFailedError(reason, self.line, self.line_number)

    def _flush_hunk(self) -> None:
        if self.hunk is None:
            return
        if self.diff is None:
            raise self._fail("there is no current diff to add the hunk to")
        self.diff.add_hunk(self.hunk.build())
        self.hunk = None

    def _flush_diff(self) -> None:
        if self.diff is None:
            return
        diff = self.diff.build()
        logger.debug("Parsed diff for %s with %d hunk(s)", diff.path, len(diff.hunks))
        self.diffs.append(diff)
        self.diff = None

    def _require_diff(self) -> DiffBuilder:
        if self.diff is None:
            raise self._fail("there is no current diff")
        return self.diff

    def feed(self, line: str, line_number: int) -> None:
        """Classify one line and update the model."""
        self.line = line
        self.line_number = line_number

        self.state, kind = classify(self.state, line)
        if kind.tag is LineTag.UNKNOWN:
            raise InvalidLineStartError(
                "line starting with invalid token", line, line_number
            )

        content = self._content(kind)
        if kind.tag is LineTag.COMMAND:
            self._on_command(content)
        elif kind.tag is LineTag.INDEX:
            self._on_index(content)
        elif kind.tag is LineTag.ORIGIN_HEADER:
            self._check_header_path(content, _ORIGIN_PATH_PREFIX, "origin")
        elif kind.tag is LineTag.NEW_HEADER:
            self._check_header_path(content, _NEW_PATH_PREFIX, "new")
        elif kind.tag is LineTag.HUNK:
            self._on_hunk(content)
        elif kind.tag is LineTag.LINE_CHANGE:
            self._on_line_change(kind.change, content)

    def finish(self) -> DiffComposition:
        """Close open items and return the composition."""
        self.line = ""
        self.line_number = 0
        self._flush_hunk()
        if self.diff is None and not self.diffs:
            raise self._fail("no diff found in input")
        self._flush_diff()
        return DiffComposition(format=DiffFormat.GIT_UDIFF, diffs=tuple(self.diffs))

    def _content(self, kind: LineKind) -> str:
        """Strip the recognized prefix of a line."""
        line = self.line
        if kind.tag is LineTag.COMMAND:
            return line
        if kind.tag is LineTag.INDEX:
            return self._strip(line, _INDEX_PREFIX)
        if kind.tag is LineTag.ORIGIN_HEADER:
            return self._strip(line, _ORIGIN_PREFIX)
        if kind.tag is LineTag.NEW_HEADER:
            return self._strip(line, _NEW_PREFIX)
        if kind.tag is LineTag.HUNK:
            end = line.find(_HUNK_SUFFIX)
            if end == -1:
                raise self._fail(f"cannot find hunk end with `{_HUNK_SUFFIX}`")
            return self._strip(line[:end], _HUNK_PREFIX)
        # Line change: drop the one-character sign
        return line[1:]

    def _strip(self, text: str, prefix: str) -> str:
        if not text.startswith(prefix):
            raise self._fail(f"expect line start with `{prefix}`")
        return text[len(prefix):]

    def _on_command(self, content: str) -> None:
        self._flush_hunk()
        self._flush_diff()

        if not content.startswith(_COMMAND_PREFIX):
            raise self._fail(f"expect line start with `{_COMMAND_PREFIX}`")
        path_a, sep, path_b = content[len(_COMMAND_PREFIX):].partition(" ")
        if not sep:
            raise self._fail("cannot split command arguments")
        if not path_a.startswith(_ORIGIN_PATH_PREFIX):
            raise self._fail(f"expect path a to start with `{_ORIGIN_PATH_PREFIX}`")
        if not path_b.startswith(_NEW_PATH_PREFIX):
            raise self._fail(f"expect path b to start with `{_NEW_PATH_PREFIX}`")
        path_a = path_a[len(_ORIGIN_PATH_PREFIX):]
        path_b = path_b[len(_NEW_PATH_PREFIX):]
        if path_a != path_b:
            raise self._fail(f"file path a and b are different [a: {path_a}] [b: {path_b}]")
        if not path_a:
            raise self._fail("empty file path")
        relative = PurePosixPath(path_a)
        if relative.is_absolute() or ".." in relative.parts:
            raise self._fail(f"file path must be relative and stay under the root [path: {path_a}]")

        self.diff = DiffBuilder(path=path_a, command=content)

    def _on_index(self, content: str) -> None:
        diff = self._require_diff()
        if diff.index is not None:
            raise DuplicateIndexError(
                f"diff for {diff.path} already has index {diff.index!r}",
                self.line,
                self.line_number,
            )
        diff.index = content

    def _check_header_path(self, content: str, prefix: str, side: str) -> None:
        diff = self._require_diff()
        if not content.startswith(prefix):
            raise self._fail(f"{side} file path does not start with `{prefix}`")
        header_path = content[len(prefix):]
        if header_path != diff.path:
            raise self._fail(
                f"diff path and {side} path are different "
                f"[diff: {diff.path}] [{side}: {header_path}]"
            )

    def _on_hunk(self, content: str) -> None:
        self._require_diff()
        self._flush_hunk()

        old, sep, new = content.partition(" ")
        if not sep:
            raise self._fail("there is no space in hunk range")
        old_line, old_len = self._parse_range(old, "-", "old")
        new_line, new_len = self._parse_range(new, "+", "new")

        self.hunk = HunkBuilder(
            old_line=old_line,
            old_len=old_len,
            new_line=new_line,
            new_len=new_len,
        )

    def _parse_range(self, text: str, sign: str, side: str) -> tuple[int, int]:
        start, sep, length = text.partition(",")
        if not sep:
            raise self._fail(f"cannot split hunk {side} range with `,`")
        if not start.startswith(sign):
            raise self._fail(f"cannot strip `{sign}` of {side}_line")
        return (
            self._parse_number(start[len(sign):], f"{side}_line"),
            self._parse_number(length, f"{side}_len"),
        )

    def _parse_number(self, text: str, name: str) -> int:
        if not _NUMBER_RE.fullmatch(text):
            raise self._fail(f"cannot parse {name} {text!r} as a non-negative integer")
        return int(text)

    def _on_line_change(self, kind: Optional[Change], content: str) -> None:
        if self.hunk is None:
            raise self._fail("there is no current hunk")
        self.hunk.add_change(kind, content)


def parse_git_udiff(text: str) -> DiffComposition:
    """Parse git unified diff text.

    Args:
        text: Full diff text, e.g. the output of 'git diff'

    Returns:
        DiffComposition with one Diff per file block, in appearance order

    Raises:
        InvalidLineStartError: If a line is not allowed at its position
        ExpectationFailedError: If a prefix, delimiter, number or path check fails,
            or the input holds no diff at all
        DuplicateIndexError: If a diff has more than one index line
    """
    assembler = _DiffAssembler()
    for number, line in enumerate(split_lines(text), start=1):
        assembler.feed(line, number)
    composition = assembler.finish()
    logger.info("Parsed %d diff(s)", len(composition.diffs))
    return composition
