"""Patch engine for the diffman diff package.

Pure text transformation, no I/O:
- apply_diff: Transform original text into new text
- revert_diff: Reconstruct original text from new text

Apply trusts the context lines of a hunk and copies whatever is found at
their position. Revert verifies every context line against the text it is
given, so undoing the wrong patch is reported instead of silently written.
"""

import logging

from diffman.diff.exceptions import ContentMismatchError, OutOfRangeError
from diffman.diff.lines import join_lines, split_lines
from diffman.diff.models import Change, Diff


logger = logging.getLogger(__name__)


class _LineCursor:
    """Read position over the lines of the source text."""

    def __init__(self, lines: list[str], path: str):
        self.lines = lines
        self.path = path
        self.position = 0

    def current(self) -> str:
        if self.position >= len(self.lines):
            raise OutOfRangeError(self.position, len(self.lines), self.path)
        return self.lines[self.position]

    def take(self) -> str:
        line = self.current()
        self.position += 1
        return line

    def skip(self) -> None:
        self.take()

    def copy_until(self, stop: int, output: list[str]) -> None:
        """Copy lines to output until the cursor reaches the 0-based stop."""
        while self.position < stop:
            output.append(self.take())

    def copy_rest(self, output: list[str]) -> None:
        output.extend(self.lines[self.position:])
        self.position = len(self.lines)


def apply_diff(diff: Diff, original: str) -> str:
    """Apply a diff to the original text of its file.

    Args:
        diff: Parsed diff for one file
        original: Current content of the file

    Returns:
        New content, every line terminated by a newline

    Raises:
        OutOfRangeError: If a hunk needs a line past the end of the text
    """
    cursor = _LineCursor(split_lines(original), diff.path)
    output: list[str] = []

    for hunk in diff.hunks:
        cursor.copy_until(hunk.old_line - 1, output)
        for change in hunk.changes:
            if change.kind is Change.DEFAULT:
                output.append(cursor.take())
            elif change.kind is Change.DELETED:
                cursor.skip()
            else:
                output.append(change.content)
        logger.debug("Applied hunk %s to %s", hunk.header, diff.path)

    cursor.copy_rest(output)
    return join_lines(output)


def revert_diff(diff: Diff, applied: str) -> str:
    """Revert a diff from the patched text of its file.

    Args:
        diff: Parsed diff for one file
        applied: Content of the file with the diff applied

    Returns:
        Original content, every line terminated by a newline

    Raises:
        OutOfRangeError: If a hunk needs a line past the end of the text
        ContentMismatchError: If a context line differs from the hunk
    """
    cursor = _LineCursor(split_lines(applied), diff.path)
    output: list[str] = []

    for hunk in diff.hunks:
        cursor.copy_until(hunk.new_line - 1, output)
        for change in hunk.changes:
            if change.kind is Change.DEFAULT:
                actual = cursor.current()
                if actual != change.content:
                    raise ContentMismatchError(
                        expected=change.content,
                        actual=actual,
                        line_number=cursor.position + 1,
                        path=diff.path,
                    )
                output.append(cursor.take())
            elif change.kind is Change.DELETED:
                output.append(change.content)
            else:
                cursor.skip()
        logger.debug("Reverted hunk %s from %s", hunk.header, diff.path)

    cursor.copy_rest(output)
    return join_lines(output)
