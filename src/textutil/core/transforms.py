"""Text operations over binary streams.

Each operation reads one input stream and writes its result to an output
stream. Output formats:

- count:      "%7d %7d %7d %s" (lines, words, chars, name)
- find:       "name:lineno: line"
- printlines: "lineno: line"
- wordfreq:   "%4d %s" (count, word)

The remaining operations write transformed input without decoration.
"""

import os
import re
from dataclasses import dataclass
from typing import BinaryIO

from .freqtable import DEFAULT_HASH_SIZE, FrequencyTable
from .reader import DEFAULT_MAX_LINE, DEFAULT_MAX_WORD, is_word, read_lines, scan_words
from .sorter import collect, emit, sort_lines

# Read size for operations that do not need line boundaries
CHUNK_SIZE = 64 * 1024

# count treats only these as word separators
_COUNT_WORD_RE = re.compile(rb"[^ \t\n]+")
_COUNT_SEPARATORS = b" \t\n"


@dataclass
class Counts:
    """Line, word and character totals for one input."""

    lines: int = 0
    words: int = 0
    chars: int = 0


def _name_bytes(name: str | bytes) -> bytes:
    if isinstance(name, bytes):
        return name
    return os.fsencode(name)


def count(stream: BinaryIO, name: str | bytes, out: BinaryIO) -> Counts:
    """Count newlines, words and bytes in stream and write a summary line.

    Words are maximal runs of bytes other than space, tab and newline.

    Args:
        stream: Binary input stream.
        name: Input name printed after the totals.
        out: Binary output stream.

    Returns:
        The totals that were written.
    """
    counts = Counts()
    in_word = False
    while True:
        chunk = stream.read(CHUNK_SIZE)
        if not chunk:
            break
        counts.chars += len(chunk)
        counts.lines += chunk.count(b"\n")
        counts.words += len(_COUNT_WORD_RE.findall(chunk))
        # A word split across two chunks was counted twice
        if in_word and chunk[0] not in _COUNT_SEPARATORS:
            counts.words -= 1
        in_word = chunk[-1] not in _COUNT_SEPARATORS

    out.write(b"%7d %7d %7d %s\n" % (counts.lines, counts.words, counts.chars, _name_bytes(name)))
    return counts


def find(
    stream: BinaryIO,
    name: str | bytes,
    pattern: bytes,
    out: BinaryIO,
    max_length: int = DEFAULT_MAX_LINE,
) -> int:
    """Write every line containing pattern, prefixed with name and line number.

    Matching is plain substring containment.

    Returns:
        Number of matching lines.
    """
    prefix = _name_bytes(name)
    matches = 0
    for lineno, line in enumerate(read_lines(stream, max_length), start=1):
        if pattern in line:
            out.write(b"%s:%d: %s" % (prefix, lineno, line))
            matches += 1
    return matches


def replace(
    stream: BinaryIO,
    old: bytes,
    new: bytes,
    out: BinaryIO,
    max_length: int = DEFAULT_MAX_LINE,
) -> int:
    """Replace every non-overlapping occurrence of old with new, line by line.

    Occurrences are found left to right; replaced text is not rescanned.

    Returns:
        Total number of replacements made.

    Raises:
        ValueError: If old is empty.
    """
    if not old:
        raise ValueError("Replacement pattern must not be empty")

    replaced = 0
    for line in read_lines(stream, max_length):
        occurrences = line.count(old)
        if occurrences:
            line = line.replace(old, new)
            replaced += occurrences
        out.write(line)
    return replaced


def printlines(
    stream: BinaryIO,
    start: int,
    end: int,
    out: BinaryIO,
    max_length: int = DEFAULT_MAX_LINE,
) -> int:
    """Write lines start through end (1-based, inclusive) with their numbers.

    Reading stops at the first line past end.

    Returns:
        Number of lines written.
    """
    written = 0
    for lineno, line in enumerate(read_lines(stream, max_length), start=1):
        if lineno > end:
            break
        if lineno >= start:
            out.write(b"%d: %s" % (lineno, line))
            written += 1
    return written


def _map_chunks(stream: BinaryIO, out: BinaryIO, upper: bool) -> None:
    while True:
        chunk = stream.read(CHUNK_SIZE)
        if not chunk:
            return
        # bytes.upper/lower only touch ASCII letters
        out.write(chunk.upper() if upper else chunk.lower())


def lowercase(stream: BinaryIO, out: BinaryIO) -> None:
    """Copy stream to out with ASCII letters lowercased."""
    _map_chunks(stream, out, upper=False)


def uppercase(stream: BinaryIO, out: BinaryIO) -> None:
    """Copy stream to out with ASCII letters uppercased."""
    _map_chunks(stream, out, upper=True)


def unique(stream: BinaryIO, out: BinaryIO, max_length: int = DEFAULT_MAX_LINE) -> int:
    """Copy stream to out, dropping lines equal to the line just before them.

    Only adjacent duplicates are removed.

    Returns:
        Number of lines written.
    """
    previous: bytes | None = None
    written = 0
    for line in read_lines(stream, max_length):
        if line != previous:
            out.write(line)
            written += 1
            previous = line
    return written


def wordfreq(
    stream: BinaryIO,
    out: BinaryIO,
    hash_size: int = DEFAULT_HASH_SIZE,
    max_word: int = DEFAULT_MAX_WORD,
    max_length: int = DEFAULT_MAX_LINE,
) -> int:
    """Count word occurrences in stream and write one "count word" line per word.

    Tokens that do not start with a letter are skipped. Output order is the
    frequency table's bucket order.

    Returns:
        Number of distinct words written.
    """
    table = FrequencyTable(hash_size)
    for token in scan_words(stream, max_word, max_length):
        if is_word(token):
            table.add(token)

    distinct = 0
    for word, occurrences in table.drain():
        out.write(b"%4d %s\n" % (occurrences, word))
        distinct += 1
    return distinct


def sort(stream: BinaryIO, out: BinaryIO, max_length: int = DEFAULT_MAX_LINE) -> int:
    """Write the lines of stream in sorted order.

    Returns:
        Number of lines written.
    """
    lines = sort_lines(collect(stream, max_length))
    emit(lines, out)
    return len(lines)
