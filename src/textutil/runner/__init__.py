"""Command-line runner for text operations."""

from importlib.metadata import version

from .cli import main
from .config import ConfigError, Mode, RunConfig, TextutilConfig
from .dispatcher import (
    STDIN_NAME,
    InputFileError,
    OperationDispatcher,
    OutputFileError,
    open_output,
)

__version__ = version("textutil")

__all__ = [
    "__version__",
    "main",
    "ConfigError",
    "Mode",
    "RunConfig",
    "TextutilConfig",
    "STDIN_NAME",
    "InputFileError",
    "OutputFileError",
    "OperationDispatcher",
    "open_output",
]
