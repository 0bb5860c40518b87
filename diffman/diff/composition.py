"""Composition orchestration for the diffman diff package.

Contains:
- FileIO: Read/write collaborator used for target files
- LocalFileIO: FileIO on the local filesystem
- apply_composition: Apply every diff of a composition under a root directory
- revert_composition: Revert every diff of a composition under a root directory

Files are processed one at a time in composition order and the run stops at
the first error. There is no rollback: files processed before the failure
keep their new content and later files are left untouched.
"""

import logging
from pathlib import Path
from typing import Callable, Optional, Protocol

from diffman.diff.engine import apply_diff, revert_diff
from diffman.diff.exceptions import PatchIOError
from diffman.diff.models import Diff, DiffComposition


logger = logging.getLogger(__name__)


class FileIO(Protocol):
    """Reads and writes whole target files."""

    def read_text(self, path: Path) -> str:
        ...

    def write_text(self, path: Path, text: str) -> None:
        ...


class LocalFileIO:
    """FileIO backed by the local filesystem."""

    def __init__(self, encoding: str = "utf-8"):
        self.encoding = encoding

    def read_text(self, path: Path) -> str:
        try:
            # newline="" keeps '\r' so line splitting sees the raw text
            with open(path, "r", encoding=self.encoding, newline="") as f:
                return f.read()
        except (OSError, UnicodeError, LookupError) as e:
            raise PatchIOError(f"Failed to read {path}: {e}") from e

    def write_text(self, path: Path, text: str) -> None:
        try:
            with open(path, "w", encoding=self.encoding, newline="") as f:
                f.write(text)
        except (OSError, UnicodeError, LookupError) as e:
            raise PatchIOError(f"Failed to write {path}: {e}") from e


def _run(
    composition: DiffComposition,
    root: Path,
    io: Optional[FileIO],
    transform: Callable[[Diff, str], str],
    action: str,
) -> list[Path]:
    io = io if io is not None else LocalFileIO()
    root = Path(root)
    written: list[Path] = []

    for diff in composition.diffs:
        target = root / diff.path
        logger.debug("Processing %s (%d hunk(s))", target, len(diff.hunks))
        text = io.read_text(target)
        io.write_text(target, transform(diff, text))
        logger.info("%s %s", action, target)
        written.append(target)

    return written


def apply_composition(
    composition: DiffComposition, root: Path, io: Optional[FileIO] = None
) -> list[Path]:
    """Apply each diff of the composition to its file under root.

    Args:
        composition: Parsed diffs
        root: Directory the diff paths are relative to
        io: File collaborator, LocalFileIO when not given

    Returns:
        Paths written, in processing order

    Raises:
        PatchError: On the first failing file; earlier files stay applied
    """
    return _run(composition, root, io, apply_diff, "Applied")


def revert_composition(
    composition: DiffComposition, root: Path, io: Optional[FileIO] = None
) -> list[Path]:
    """Revert each diff of the composition from its file under root.

    Same ordering and failure behavior as apply_composition.
    """
    return _run(composition, root, io, revert_diff, "Reverted")
