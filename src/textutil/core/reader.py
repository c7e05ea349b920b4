"""Line and word readers over binary streams.

Every operation reads its input through one of the two readers here:

- ``read_lines`` yields lines (terminator included) bounded by a maximum length
- ``scan_words`` yields whitespace-delimited tokens for word-frequency counting

Both raise an ``InputLimitError`` subclass instead of truncating input that
exceeds the configured bound.
"""

import re
from collections.abc import Iterator
from typing import BinaryIO

DEFAULT_MAX_LINE = 4096
DEFAULT_MAX_WORD = 100

# A letter followed by letters/digits, or any other single non-space byte
_TOKEN_RE = re.compile(rb"[A-Za-z][A-Za-z0-9]*|\S")


class TextutilError(Exception):
    """Base class for all errors reported by textutil."""


class InputLimitError(TextutilError):
    """Input exceeds a configured length bound."""


class LineTooLongError(InputLimitError):
    """A line is longer than the maximum supported line length."""

    def __init__(self, lineno: int, limit: int) -> None:
        super().__init__(f"line {lineno} exceeds maximum line length of {limit} bytes")
        self.lineno = lineno
        self.limit = limit


class WordTooLongError(InputLimitError):
    """A word is longer than the maximum supported word length."""

    def __init__(self, word: bytes, limit: int) -> None:
        preview = word[:20].decode("ascii", errors="replace")
        super().__init__(f"word '{preview}...' exceeds maximum word length of {limit} bytes")
        self.word = word
        self.limit = limit


def read_lines(stream: BinaryIO, max_length: int = DEFAULT_MAX_LINE) -> Iterator[bytes]:
    """Yield lines from a binary stream, terminators included.

    The final line is yielded without a terminator if the input does not
    end with a newline.

    Args:
        stream: Binary input stream.
        max_length: Maximum line length in bytes, terminator included.

    Yields:
        Each line as bytes.

    Raises:
        LineTooLongError: If a line is longer than max_length.
    """
    lineno = 0
    while True:
        line = stream.readline(max_length + 1)
        if not line:
            return
        lineno += 1
        if len(line) > max_length:
            raise LineTooLongError(lineno, max_length)
        yield line


def scan_words(
    stream: BinaryIO,
    max_length: int = DEFAULT_MAX_WORD,
    max_line: int = DEFAULT_MAX_LINE,
) -> Iterator[bytes]:
    """Yield tokens from a binary stream.

    A token is either a word (an ASCII letter followed by letters and
    digits) or a single byte that does not start a word. Whitespace
    separates tokens and is never yielded. Callers that only want words
    filter on the first byte.

    Input is read line by line through ``read_lines``, so the line bound
    applies here too.

    Raises:
        WordTooLongError: If a word is longer than max_length.
        LineTooLongError: If a line is longer than max_line.
    """
    # Whitespace includes the newline, so no token spans two lines
    for line in read_lines(stream, max_line):
        for match in _TOKEN_RE.finditer(line):
            token = match.group()
            if len(token) > max_length:
                raise WordTooLongError(token, max_length)
            yield token


def is_word(token: bytes) -> bool:
    """Check whether a scanned token is a word rather than a stray byte."""
    return token[:1].isalpha()
