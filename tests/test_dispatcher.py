"""Tests for textutil.runner.dispatcher module."""

import io
from pathlib import Path

import pytest

from textutil.core import LineTooLongError
from textutil.runner.config import Mode, RunConfig, TextutilConfig
from textutil.runner.dispatcher import (
    STDIN_NAME,
    InputFileError,
    OperationDispatcher,
    OutputFileError,
    open_output,
)


def dispatch(run: RunConfig, stdin: bytes = b"", config: TextutilConfig | None = None) -> bytes:
    """Run the dispatcher and return its output."""
    out = io.BytesIO()
    OperationDispatcher(run, config or TextutilConfig(), out, io.BytesIO(stdin)).run()
    return out.getvalue()


@pytest.fixture
def two_files(tmp_path: Path) -> list[Path]:
    """Create two small input files."""
    first = tmp_path / "first.txt"
    first.write_bytes(b"pear\napple\napple\n")
    second = tmp_path / "second.txt"
    second.write_bytes(b"fig\napple\n")
    return [first, second]


class TestDispatchStdin:
    """Tests for operations on standard input."""

    def test_count_names_stdin(self) -> None:
        """Test that standard input is reported as stdin."""
        output = dispatch(RunConfig(mode=Mode.COUNT), b"a b\n")
        assert output == b"      1       2       4 %s\n" % STDIN_NAME.encode()

    def test_find_names_stdin(self) -> None:
        """Test that find labels matches from standard input."""
        output = dispatch(RunConfig(mode=Mode.FIND, pattern=b"an"), b"banana\nkiwi\n")
        assert output == b"stdin:1: banana\n"

    def test_replace(self) -> None:
        """Test replace dispatch."""
        output = dispatch(RunConfig(mode=Mode.REPLACE, old=b"X", new=b"-"), b"aXbXc\n")
        assert output == b"a-b-c\n"

    def test_lines(self) -> None:
        """Test line range dispatch."""
        output = dispatch(RunConfig(mode=Mode.LINES, start=2, end=3), b"l1\nl2\nl3\nl4\n")
        assert output == b"2: l2\n3: l3\n"

    def test_wordfreq(self) -> None:
        """Test word frequency dispatch."""
        output = dispatch(RunConfig(mode=Mode.WORDFREQ), b"the cat sat\n")
        assert sorted(output.splitlines()) == [b"   1 cat", b"   1 sat", b"   1 the"]

    @pytest.mark.parametrize(
        "mode,expected",
        [
            (Mode.SORT, b"Ab\naB\naB\naB\n"),
            (Mode.UNIQUE, b"aB\nAb\naB\n"),
            (Mode.LOWER, b"ab\nab\nab\nab\n"),
            (Mode.UPPER, b"AB\nAB\nAB\nAB\n"),
        ],
    )
    def test_line_modes(self, mode: Mode, expected: bytes) -> None:
        """Test sort, unique and case conversion dispatch."""
        assert dispatch(RunConfig(mode=mode), b"aB\naB\nAb\naB\n") == expected

    def test_missing_argument(self) -> None:
        """Test that a mode without its argument is refused."""
        with pytest.raises(ValueError, match="pattern"):
            dispatch(RunConfig(mode=Mode.FIND), b"x\n")

    def test_config_limits_apply(self) -> None:
        """Test that the configured line limit reaches the operation."""
        config = TextutilConfig(max_line_length=4)
        with pytest.raises(LineTooLongError):
            dispatch(RunConfig(mode=Mode.SORT), b"toolong\n", config)

    def test_line_limit_applies_to_wordfreq(self) -> None:
        """Test that word frequency counting honours the line limit."""
        config = TextutilConfig(max_line_length=8)
        with pytest.raises(LineTooLongError):
            dispatch(RunConfig(mode=Mode.WORDFREQ), b"one two three\n", config)


class TestDispatchFiles:
    """Tests for operations over input files."""

    def test_files_processed_in_order(self, two_files: list[Path]) -> None:
        """Test that each file is handled separately, in order."""
        output = dispatch(RunConfig(mode=Mode.SORT, files=two_files))
        assert output == b"apple\napple\npear\napple\nfig\n"

    def test_find_uses_file_names(self, two_files: list[Path]) -> None:
        """Test that find reports each file's own name and line numbers."""
        output = dispatch(RunConfig(mode=Mode.FIND, pattern=b"apple", files=two_files))
        first, second = (str(path).encode() for path in two_files)
        assert output == (
            first + b":2: apple\n" + first + b":3: apple\n" + second + b":2: apple\n"
        )

    def test_wordfreq_restarts_per_file(self, two_files: list[Path]) -> None:
        """Test that word counts do not accumulate across files."""
        output = dispatch(RunConfig(mode=Mode.WORDFREQ, files=two_files))
        lines = output.splitlines()
        assert b"   2 apple" in lines
        assert b"   1 apple" in lines
        assert len(lines) == 4

    def test_stdin_ignored_when_files_given(self, two_files: list[Path]) -> None:
        """Test that standard input is not read when files are named."""
        output = dispatch(RunConfig(mode=Mode.UNIQUE, files=two_files[1:]), b"stdin data\n")
        assert output == b"fig\napple\n"

    def test_missing_file_aborts_remaining(self, two_files: list[Path], tmp_path: Path) -> None:
        """Test that an unopenable file stops processing of later files."""
        files = [two_files[0], tmp_path / "missing.txt", two_files[1]]
        out = io.BytesIO()
        dispatcher = OperationDispatcher(RunConfig(mode=Mode.UPPER, files=files), TextutilConfig(), out)

        with pytest.raises(InputFileError, match="missing.txt"):
            dispatcher.run()

        assert out.getvalue() == b"PEAR\nAPPLE\nAPPLE\n"

    def test_run_returns_input_count(self, two_files: list[Path]) -> None:
        """Test the number of processed inputs."""
        dispatcher = OperationDispatcher(
            RunConfig(mode=Mode.COUNT, files=two_files), TextutilConfig(), io.BytesIO()
        )
        assert dispatcher.run() == 2


class TestOpenOutput:
    """Tests for open_output."""

    def test_truncates_existing_file(self, tmp_path: Path) -> None:
        """Test that the output file is overwritten."""
        path = tmp_path / "out.txt"
        path.write_bytes(b"old contents")
        with open_output(path) as out:
            out.write(b"new")
        assert path.read_bytes() == b"new"

    def test_unwritable_location(self, tmp_path: Path) -> None:
        """Test that an output path in a missing directory raises OutputFileError."""
        with pytest.raises(OutputFileError, match="cannot open output file"):
            open_output(tmp_path / "no" / "such" / "dir" / "out.txt")
