"""Operation dispatch for a textutil run."""

from pathlib import Path
from typing import Any, BinaryIO

from textutil.core import (
    TextutilError,
    count,
    find,
    lowercase,
    printlines,
    replace,
    sort,
    unique,
    uppercase,
    wordfreq,
)

from .config import Mode, RunConfig, TextutilConfig

# Name used for standard input in count and find output
STDIN_NAME = "stdin"


class InputFileError(TextutilError):
    """An input file could not be opened."""


class OutputFileError(TextutilError):
    """The output file could not be opened for writing."""


class OperationDispatcher:
    """Runs the selected operation over each input in turn.

    Inputs are processed strictly in command-line order, each with fresh
    operation state. The first input that cannot be opened aborts the run;
    output already written for earlier inputs is kept.
    """

    def __init__(
        self,
        run: RunConfig,
        config: TextutilConfig,
        out: BinaryIO,
        stdin: BinaryIO | None = None,
    ) -> None:
        """Initialize dispatcher.

        Args:
            run: The parsed invocation.
            config: Limits shared by all operations.
            out: Binary stream receiving all output.
            stdin: Binary stream read when no files are given.
        """
        self.run_config = run
        self.config = config
        self.out = out
        self.stdin = stdin

    def run(self) -> int:
        """Process every input.

        Returns:
            Number of inputs processed.

        Raises:
            InputFileError: If an input file cannot be opened.
        """
        if not self.run_config.files:
            if self.stdin is None:
                raise ValueError("No input files and no standard input stream")
            self.run_stream(self.stdin, STDIN_NAME)
            return 1

        for path in self.run_config.files:
            with _open_input(path) as stream:
                self.run_stream(stream, str(path))
        return len(self.run_config.files)

    def run_stream(self, stream: BinaryIO, name: str) -> None:
        """Run the selected operation on one input stream."""
        run = self.run_config
        max_line = self.config.max_line_length

        if run.mode is Mode.COUNT:
            count(stream, name, self.out)
        elif run.mode is Mode.FIND:
            find(stream, name, _required(run.pattern, "pattern"), self.out, max_line)
        elif run.mode is Mode.REPLACE:
            replace(
                stream,
                _required(run.old, "old"),
                _required(run.new, "new"),
                self.out,
                max_line,
            )
        elif run.mode is Mode.LINES:
            printlines(
                stream,
                _required(run.start, "start"),
                _required(run.end, "end"),
                self.out,
                max_line,
            )
        elif run.mode is Mode.WORDFREQ:
            # One table per input; nothing accumulates across files
            wordfreq(
                stream,
                self.out,
                self.config.hash_size,
                self.config.max_word_length,
                max_line,
            )
        elif run.mode is Mode.LOWER:
            lowercase(stream, self.out)
        elif run.mode is Mode.UPPER:
            uppercase(stream, self.out)
        elif run.mode is Mode.UNIQUE:
            unique(stream, self.out, max_line)
        elif run.mode is Mode.SORT:
            sort(stream, self.out, max_line)
        else:
            raise ValueError(f"Unknown mode: {run.mode}")


def _required(value: Any, name: str) -> Any:
    if value is None:
        raise ValueError(f"Missing argument '{name}'")
    return value


def _open_input(path: Path) -> BinaryIO:
    try:
        return open(path, "rb")
    except OSError as e:
        raise InputFileError(f"can't open {path}: {e.strerror}") from e


def open_output(path: Path) -> BinaryIO:
    """Open the output file for binary writing, truncating it.

    Raises:
        OutputFileError: If the file cannot be opened.
    """
    try:
        return open(path, "wb")
    except OSError as e:
        raise OutputFileError(f"cannot open output file {path}: {e.strerror}") from e
