"""Line classifier for git unified diffs.

A pure state machine: given the parser state and one raw line it returns the
next state and the kind of the line. It never raises; an UNKNOWN kind means
the line is not allowed at this position and the caller must stop parsing.

Expected shape of one file block:

    diff --git a/tests/vm.rs b/tests/vm.rs     command
    index 90d5af1..30044cb 100644               index (optional)
    --- a/tests/vm.rs                           origin header
    +++ b/tests/vm.rs                           new header
    @@ -16,7 +16,9 @@ fn run_vm_test(...)     hunk
     context / +added / -deleted                line changes
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from diffman.diff.models import (
    DIFF_SIGN_HEADER_NEW,
    DIFF_SIGN_HEADER_ORIGIN,
    DIFF_SIGN_HUNK,
    Change,
)


DIFF_KEYWORD_COMMAND = "diff"
DIFF_KEYWORD_INDEX = "index"


class ParserState(str, Enum):
    """Position of the parser inside a file block."""

    INIT = "init"
    COMMAND = "command"
    INDEX = "index"
    ORIGIN_HEADER = "origin_header"
    NEW_HEADER = "new_header"
    HUNK = "hunk"
    LINE_CHANGE = "line_change"


class LineTag(str, Enum):
    """Kind of a raw diff line."""

    COMMAND = "command"
    INDEX = "index"
    ORIGIN_HEADER = "origin_header"
    NEW_HEADER = "new_header"
    HUNK = "hunk"
    LINE_CHANGE = "line_change"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class LineKind:
    """Classification result; change is set only for LINE_CHANGE."""

    tag: LineTag
    change: Optional[Change] = None


UNKNOWN = LineKind(LineTag.UNKNOWN)

_NEXT_STATE = {
    LineTag.COMMAND: ParserState.COMMAND,
    LineTag.INDEX: ParserState.INDEX,
    LineTag.ORIGIN_HEADER: ParserState.ORIGIN_HEADER,
    LineTag.NEW_HEADER: ParserState.NEW_HEADER,
    LineTag.HUNK: ParserState.HUNK,
    LineTag.LINE_CHANGE: ParserState.LINE_CHANGE,
}

# Keywords accepted per state, checked in order before any sign character.
_KEYWORDS: dict[ParserState, tuple[tuple[str, LineTag], ...]] = {
    ParserState.INIT: ((DIFF_KEYWORD_COMMAND, LineTag.COMMAND),),
    ParserState.COMMAND: (
        (DIFF_KEYWORD_INDEX, LineTag.INDEX),
        (DIFF_SIGN_HEADER_ORIGIN, LineTag.ORIGIN_HEADER),
    ),
    ParserState.INDEX: ((DIFF_SIGN_HEADER_ORIGIN, LineTag.ORIGIN_HEADER),),
    ParserState.ORIGIN_HEADER: ((DIFF_SIGN_HEADER_NEW, LineTag.NEW_HEADER),),
    ParserState.NEW_HEADER: ((DIFF_SIGN_HUNK, LineTag.HUNK),),
    ParserState.HUNK: (),
    ParserState.LINE_CHANGE: (
        (DIFF_KEYWORD_COMMAND, LineTag.COMMAND),
        (DIFF_KEYWORD_INDEX, LineTag.INDEX),
        (DIFF_SIGN_HEADER_ORIGIN, LineTag.ORIGIN_HEADER),
        (DIFF_SIGN_HUNK, LineTag.HUNK),
    ),
}

# States whose lines may be hunk body lines.
_BODY_STATES = frozenset({ParserState.HUNK, ParserState.LINE_CHANGE})


def classify_line(state: ParserState, line: str) -> LineKind:
    """Return the kind of a line read in the given state."""
    for prefix, tag in _KEYWORDS[state]:
        if line.startswith(prefix):
            return LineKind(tag)

    if state in _BODY_STATES:
        change = Change.from_sign(line[:1]) if line else None
        if change is not None:
            return LineKind(LineTag.LINE_CHANGE, change)

    return UNKNOWN


def classify(state: ParserState, line: str) -> tuple[ParserState, LineKind]:
    """Advance the state machine by one line.

    Args:
        state: Current parser state
        line: Raw diff line without its newline

    Returns:
        Tuple of (next state, line kind). The state is unchanged when the
        kind is UNKNOWN.
    """
    kind = classify_line(state, line)
    if kind.tag is LineTag.UNKNOWN:
        return state, kind
    return _NEXT_STATE[kind.tag], kind
