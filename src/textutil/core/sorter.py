"""In-memory line sorting."""

from typing import BinaryIO

from .reader import DEFAULT_MAX_LINE, read_lines


def collect(stream: BinaryIO, max_length: int = DEFAULT_MAX_LINE) -> list[bytes]:
    """Read every line of stream into a list, in input order.

    Raises:
        LineTooLongError: If a line is longer than max_length.
    """
    return list(read_lines(stream, max_length))


def sort_lines(lines: list[bytes]) -> list[bytes]:
    """Return a new list of lines in byte-wise lexicographic order.

    Duplicate lines are kept. A final line without a terminator sorts by
    its bytes like any other line.
    """
    return sorted(lines)


def emit(lines: list[bytes], out: BinaryIO) -> None:
    """Write lines to out verbatim."""
    for line in lines:
        out.write(line)
