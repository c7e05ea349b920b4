"""Configuration for textutil runs."""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

import yaml

from textutil.core import DEFAULT_HASH_SIZE, DEFAULT_MAX_LINE, DEFAULT_MAX_WORD, TextutilError


class ConfigError(TextutilError):
    """Invalid configuration file or value."""


class Mode(Enum):
    """Operations selectable from the command line."""

    COUNT = "count"
    FIND = "find"
    REPLACE = "replace"
    LINES = "lines"
    WORDFREQ = "wordfreq"
    SORT = "sort"
    UNIQUE = "unique"
    LOWER = "lower"
    UPPER = "upper"


@dataclass
class TextutilConfig:
    """Limits and table sizes shared by all operations."""

    max_line_length: int = DEFAULT_MAX_LINE  # bytes, terminator included
    max_word_length: int = DEFAULT_MAX_WORD
    hash_size: int = DEFAULT_HASH_SIZE  # buckets in the word frequency table

    def __post_init__(self) -> None:
        """Reject non-positive or non-integer limits."""
        for name in ("max_line_length", "max_word_length", "hash_size"):
            value = getattr(self, name)
            # bool is an int subclass but never a sensible limit
            if not isinstance(value, int) or isinstance(value, bool) or value < 1:
                raise ConfigError(f"'{name}' must be a positive integer, got {value!r}")

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TextutilConfig":
        """Create TextutilConfig from YAML dict."""
        known = {"max_line_length", "max_word_length", "hash_size"}
        unknown = sorted(str(key) for key in set(data) - known)
        if unknown:
            raise ConfigError(f"Unknown config key(s): {', '.join(unknown)}")
        return cls(**data)

    @classmethod
    def from_yaml(cls, path: Path) -> "TextutilConfig":
        """Load configuration from a YAML file.

        An empty file yields the defaults.
        """
        try:
            with open(path) as f:
                data = yaml.safe_load(f) or {}
        except OSError as e:
            raise ConfigError(f"can't open config file {path}: {e.strerror}") from e
        except yaml.YAMLError as e:
            raise ConfigError(f"invalid config file {path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigError(f"invalid config file {path}: expected a mapping")
        return cls.from_dict(data)


@dataclass
class RunConfig:
    """One invocation: the selected operation, its arguments and its inputs.

    Attributes:
        mode: The selected operation.
        files: Input files in command-line order. Empty means standard input.
        output: Output file, or None for standard output.
        pattern: Search pattern for find.
        old: Text to replace.
        new: Replacement text.
        start: First line to print (1-based).
        end: Last line to print (inclusive).
    """

    mode: Mode
    files: list[Path] = field(default_factory=list)
    output: Path | None = None
    pattern: bytes | None = None
    old: bytes | None = None
    new: bytes | None = None
    start: int | None = None
    end: int | None = None
