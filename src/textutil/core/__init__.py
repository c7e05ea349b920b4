"""Text processing operations."""

from .freqtable import DEFAULT_HASH_SIZE, FrequencyTable, WordEntry, hash_word
from .reader import (
    DEFAULT_MAX_LINE,
    DEFAULT_MAX_WORD,
    InputLimitError,
    LineTooLongError,
    TextutilError,
    WordTooLongError,
    is_word,
    read_lines,
    scan_words,
)
from .sorter import collect, emit, sort_lines
from .transforms import (
    Counts,
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

__all__ = [
    "DEFAULT_HASH_SIZE",
    "DEFAULT_MAX_LINE",
    "DEFAULT_MAX_WORD",
    "FrequencyTable",
    "WordEntry",
    "hash_word",
    "TextutilError",
    "InputLimitError",
    "LineTooLongError",
    "WordTooLongError",
    "is_word",
    "read_lines",
    "scan_words",
    "collect",
    "emit",
    "sort_lines",
    "Counts",
    "count",
    "find",
    "replace",
    "printlines",
    "lowercase",
    "uppercase",
    "unique",
    "wordfreq",
    "sort",
]
