"""Entry points for parsing diff text and running it against a directory."""

from pathlib import Path
from typing import Callable, Optional

from diffman.diff.composition import FileIO, apply_composition, revert_composition
from diffman.diff.exceptions import DiffmanError
from diffman.diff.models import DiffComposition, DiffFormat
from diffman.diff.parser import parse_git_udiff


class UnsupportedFormatError(DiffmanError):
    """Raised when no parser is registered for a diff format."""

    pass


PARSERS: dict[DiffFormat, Callable[[str], DiffComposition]] = {
    DiffFormat.GIT_UDIFF: parse_git_udiff,
}


def parse(text: str, format: DiffFormat = DiffFormat.GIT_UDIFF) -> DiffComposition:
    """Parse diff text with the parser registered for the format."""
    parser = PARSERS.get(format)
    if parser is None:
        raise UnsupportedFormatError(f"Unsupported diff format: {format}")
    return parser(text)


def apply(
    composition: DiffComposition, root: Path, io: Optional[FileIO] = None
) -> list[Path]:
    """Apply a parsed composition to the files under root."""
    return apply_composition(composition, root, io)


def revert(
    composition: DiffComposition, root: Path, io: Optional[FileIO] = None
) -> list[Path]:
    """Revert a parsed composition from the files under root."""
    return revert_composition(composition, root, io)
