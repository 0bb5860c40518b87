"""Tests for diffman.diff.composition and diffman.manager modules."""

from pathlib import Path

import pytest

from diffman import manager
from diffman.diff import (
    ContentMismatchError,
    DiffFormat,
    LocalFileIO,
    OutOfRangeError,
    PatchIOError,
    apply_composition,
    parse_git_udiff,
    revert_composition,
)


@pytest.fixture
def two_file_tree(temp_dir):
    """Directory holding the original files of two_file_diff."""
    (temp_dir / "first.txt").write_text("one\n")
    (temp_dir / "sub").mkdir()
    (temp_dir / "sub" / "second.txt").write_text("alpha\ngamma\n")
    return temp_dir


class InMemoryIO:
    """FileIO keeping files in a dict."""

    def __init__(self, files):
        self.files = dict(files)
        self.writes = []

    def read_text(self, path):
        return self.files[path]

    def write_text(self, path, text):
        self.writes.append(path)
        self.files[path] = text


class TestApplyComposition:
    """Tests for apply_composition."""

    def test_applies_all_files(self, two_file_diff, two_file_tree):
        """Test that every file is rewritten in diff order."""
        composition = parse_git_udiff(two_file_diff)

        written = apply_composition(composition, two_file_tree)

        assert written == [
            two_file_tree / "first.txt",
            two_file_tree / "sub" / "second.txt",
        ]
        assert (two_file_tree / "first.txt").read_text() == "ONE\n"
        assert (two_file_tree / "sub" / "second.txt").read_text() == "alpha\nbeta\ngamma\n"

    def test_revert_restores_files(self, two_file_diff, two_file_tree):
        """Test that revert after apply restores the original tree."""
        composition = parse_git_udiff(two_file_diff)

        apply_composition(composition, two_file_tree)
        revert_composition(composition, two_file_tree)

        assert (two_file_tree / "first.txt").read_text() == "one\n"
        assert (two_file_tree / "sub" / "second.txt").read_text() == "alpha\ngamma\n"

    def test_uses_given_io(self, two_file_diff):
        """Test that the file collaborator receives resolved paths."""
        root = Path("/project")
        io = InMemoryIO({
            root / "first.txt": "one\n",
            root / "sub" / "second.txt": "alpha\ngamma\n",
        })

        apply_composition(parse_git_udiff(two_file_diff), root, io)

        assert io.writes == [root / "first.txt", root / "sub" / "second.txt"]
        assert io.files[root / "first.txt"] == "ONE\n"

    def test_missing_file(self, two_file_diff, temp_dir):
        """Test that a missing target file is reported as an I/O error."""
        with pytest.raises(PatchIOError, match="first.txt"):
            apply_composition(parse_git_udiff(two_file_diff), temp_dir)

    def test_stops_at_first_failure_without_rollback(self, two_file_diff, two_file_tree):
        """Test that files before the failure keep their new content."""
        (two_file_tree / "sub" / "second.txt").write_text("")
        composition = parse_git_udiff(two_file_diff)

        with pytest.raises(OutOfRangeError):
            apply_composition(composition, two_file_tree)

        assert (two_file_tree / "first.txt").read_text() == "ONE\n"
        assert (two_file_tree / "sub" / "second.txt").read_text() == ""

    def test_revert_detects_edited_context(self, two_file_diff, two_file_tree):
        """Test reverting a file whose context changed after apply."""
        composition = parse_git_udiff(two_file_diff)
        (two_file_tree / "first.txt").write_text("ONE\n")
        (two_file_tree / "sub" / "second.txt").write_text("alpha\nbeta\nGAMMA\n")

        with pytest.raises(ContentMismatchError) as exc_info:
            revert_composition(composition, two_file_tree)

        assert exc_info.value.path == "sub/second.txt"
        assert exc_info.value.expected == "gamma"
        assert exc_info.value.actual == "GAMMA"
        assert exc_info.value.line_number == 3
        assert (two_file_tree / "first.txt").read_text() == "one\n"


class TestLocalFileIO:
    """Tests for LocalFileIO."""

    def test_round_trips_text(self, temp_dir):
        """Test reading back a written file."""
        io = LocalFileIO()
        path = temp_dir / "file.txt"

        io.write_text(path, "héllo\n")

        assert io.read_text(path) == "héllo\n"

    def test_keeps_carriage_returns(self, temp_dir):
        """Test that reading doesn't translate line endings."""
        path = temp_dir / "file.txt"
        path.write_bytes(b"a\r\nb\r\n")

        assert LocalFileIO().read_text(path) == "a\r\nb\r\n"

    def test_decode_error(self, temp_dir):
        """Test that undecodable content is an I/O error."""
        path = temp_dir / "file.bin"
        path.write_bytes(b"\xff\xfe\x00")

        with pytest.raises(PatchIOError):
            LocalFileIO(encoding="utf-8").read_text(path)

    def test_unknown_encoding(self, temp_dir):
        """Test that an unknown codec is reported as an I/O error."""
        path = temp_dir / "file.txt"
        path.write_text("x\n")

        with pytest.raises(PatchIOError, match="no-such-codec"):
            LocalFileIO(encoding="no-such-codec").read_text(path)

    def test_write_to_missing_directory(self, temp_dir):
        """Test that write failures are wrapped."""
        with pytest.raises(PatchIOError):
            LocalFileIO().write_text(temp_dir / "missing" / "file.txt", "x\n")


class TestManager:
    """Tests for the manager entry points."""

    def test_parse_dispatches_on_format(self, simple_diff):
        """Test parsing with the default format."""
        composition = manager.parse(simple_diff, DiffFormat.GIT_UDIFF)

        assert composition.paths == ["letters.txt"]

    def test_unsupported_format(self, simple_diff, mocker):
        """Test a format without a registered parser."""
        mocker.patch.dict(manager.PARSERS, clear=True)

        with pytest.raises(manager.UnsupportedFormatError):
            manager.parse(simple_diff)

    def test_apply_and_revert(self, simple_diff, temp_dir):
        """Test the concrete a/b/c scenario through the manager."""
        (temp_dir / "letters.txt").write_text("a\nb\nc\n")
        composition = manager.parse(simple_diff)

        manager.apply(composition, temp_dir)
        assert (temp_dir / "letters.txt").read_text() == "a\nx\nc\n"

        manager.revert(composition, temp_dir)
        assert (temp_dir / "letters.txt").read_text() == "a\nb\nc\n"
