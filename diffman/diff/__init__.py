"""Diff parsing and patching for diffman.

This package provides modular diff handling with:
- models: DiffComposition, Diff, DiffHunk, LineChange, Change, DiffFormat
- classifier: classify, ParserState, LineKind, LineTag
- parser: parse_git_udiff
- engine: apply_diff, revert_diff
- composition: apply_composition, revert_composition, FileIO, LocalFileIO
- exceptions: DiffmanError, ParseError, PatchError and their subclasses
"""

# Models
from diffman.diff.models import (
    Change,
    Diff,
    DiffComposition,
    DiffFormat,
    DiffHunk,
    LineChange,
)

# Classifier
from diffman.diff.classifier import (
    LineKind,
    LineTag,
    ParserState,
    classify,
)

# Parser
from diffman.diff.parser import (
    parse_git_udiff,
)

# Engine
from diffman.diff.engine import (
    apply_diff,
    revert_diff,
)

# Composition
from diffman.diff.composition import (
    FileIO,
    LocalFileIO,
    apply_composition,
    revert_composition,
)

# Exceptions
from diffman.diff.exceptions import (
    ContentMismatchError,
    DiffmanError,
    DuplicateIndexError,
    ExpectationFailedError,
    InvalidLineStartError,
    OutOfRangeError,
    ParseError,
    PatchError,
    PatchIOError,
)


__all__ = [
    # Models
    "Change",
    "Diff",
    "DiffComposition",
    "DiffFormat",
    "DiffHunk",
    "LineChange",
    # Classifier
    "LineKind",
    "LineTag",
    "ParserState",
    "classify",
    # Parser
    "parse_git_udiff",
    # Engine
    "apply_diff",
    "revert_diff",
    # Composition
    "FileIO",
    "LocalFileIO",
    "apply_composition",
    "revert_composition",
    # Exceptions
    "DiffmanError",
    "ParseError",
    "InvalidLineStartError",
    "ExpectationFailedError",
    "DuplicateIndexError",
    "PatchError",
    "OutOfRangeError",
    "ContentMismatchError",
    "PatchIOError",
]
