"""Diff-related exception classes.

Contains all exception classes for parsing and patching:
- DiffmanError: Base exception for diffman errors
- ParseError: Base exception for malformed diff text
- InvalidLineStartError: Line prefix not allowed at the current position
- ExpectationFailedError: Required prefix, delimiter, number or path check failed
- DuplicateIndexError: Index line given twice for one diff
- PatchError: Base exception for apply/revert failures
- OutOfRangeError: Hunk references a line past the end of the text
- ContentMismatchError: Context line differs from the text being reverted
- PatchIOError: Reading or writing a target file failed
"""

from typing import Optional


class DiffmanError(Exception):
    """Base exception for all diffman errors."""

    pass


class ParseError(DiffmanError):
    """Raised when diff text cannot be parsed.

    Attributes:
        reason: Human readable description of the failed check.
        line: The offending raw line ('' for end-of-input failures).
        line_number: 1-based line number in the diff text (0 at end of input).
    """

    def __init__(self, reason: str, line: str = "", line_number: int = 0):
        self.reason = reason
        self.line = line
        self.line_number = line_number
        if line_number:
            message = f"line {line_number}: {reason}: {line!r}"
        else:
            message = reason
        super().__init__(message)


class InvalidLineStartError(ParseError):
    """Raised when a line starts with a token not allowed at its position."""

    pass


class ExpectationFailedError(ParseError):
    """Raised when a required prefix, delimiter, number or path check fails."""

    pass


class DuplicateIndexError(ParseError):
    """Raised when one diff carries more than one index line."""

    pass


class PatchError(DiffmanError):
    """Raised when a diff cannot be applied to or reverted from a text."""

    def __init__(self, message: str, path: Optional[str] = None):
        self.path = path
        if path:
            message = f"{path}: {message}"
        super().__init__(message)


class OutOfRangeError(PatchError):
    """Raised when a hunk needs a line beyond the end of the text."""

    def __init__(self, index: int, available: int, path: Optional[str] = None):
        self.index = index
        self.available = available
        super().__init__(
            f"line {index + 1} out of range, text has {available} line(s)", path
        )


class ContentMismatchError(PatchError):
    """Raised when revert finds a context line that differs from the hunk."""

    def __init__(
        self,
        expected: str,
        actual: str,
        line_number: int,
        path: Optional[str] = None,
    ):
        self.expected = expected
        self.actual = actual
        self.line_number = line_number
        super().__init__(
            f"content mismatch at line {line_number}: "
            f"expected {expected!r}, found {actual!r}",
            path,
        )


class PatchIOError(PatchError):
    """Raised when the file I/O collaborator fails."""

    pass
