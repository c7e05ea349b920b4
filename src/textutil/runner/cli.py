#!/usr/bin/env python3
"""textutil command line."""

import argparse
import os
import sys
from collections.abc import Sequence
from contextlib import nullcontext
from importlib.metadata import version
from pathlib import Path

from textutil.core import TextutilError

from .config import Mode, RunConfig, TextutilConfig
from .dispatcher import OperationDispatcher, open_output

PROG = "textutil"

# Mode flags whose operands are taken verbatim, even when they start with '-'
OPERAND_COUNTS = {"-f": 1, "-r": 2, "-l": 2}

# Options taking one value that the operand scan must step over
_VALUE_OPTIONS = {"-o", "--config"}


class _ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that reports usage errors with exit status 1.

    Operands of the ``-f``, ``-r`` and ``-l`` flags are pulled out of argv
    before parsing, so a pattern such as ``-v`` is not mistaken for an option.
    """

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.operands: dict[str, list[str]] = {}

    def error(self, message: str) -> None:  # type: ignore[override]
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: {message}\n")

    def parse_args(self, args: Sequence[str] | None = None, namespace=None):  # type: ignore[override]
        if args is None:
            args = sys.argv[1:]
        return super().parse_args(self.split_operands(list(args)), namespace)

    def split_operands(self, argv: list[str]) -> list[str]:
        """Remove the operands of operand-taking mode flags from argv.

        The operands are stored in ``self.operands`` keyed by flag; the flags
        themselves stay in argv so argparse still sees which mode was chosen.
        """
        self.operands = {}
        rest: list[str] = []
        i = 0
        while i < len(argv):
            arg = argv[i]
            if arg == "--":
                rest.extend(argv[i:])
                break
            if arg in _VALUE_OPTIONS:
                rest.extend(argv[i : i + 2])
                i += 2
                continue
            if arg in OPERAND_COUNTS:
                needed = OPERAND_COUNTS[arg]
                values = argv[i + 1 : i + 1 + needed]
                if len(values) < needed:
                    self.error(f"option requires {needed} argument(s) -- {arg[1:]}")
                self.operands[arg] = values
                rest.append(arg)
                i += 1 + needed
                continue
            rest.append(arg)
            i += 1
        return rest


class _OperandAction(argparse.Action):
    """Mode flag whose operands were taken from argv before parsing."""

    def __init__(self, option_strings, dest, **kwargs) -> None:
        super().__init__(option_strings, dest, nargs=0, **kwargs)

    def __call__(self, parser, namespace, values, option_string=None) -> None:
        setattr(namespace, self.dest, parser.operands[option_string])


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = _ArgumentParser(
        prog=PROG,
        description="Count, search, replace, convert, deduplicate and sort text",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s -c notes.txt                 # Count lines, words, chars
  %(prog)s -f TODO *.py                 # Print lines containing TODO
  %(prog)s -f -v notes.txt              # Patterns may start with '-'
  %(prog)s -r colour color essay.txt    # Replace substrings
  %(prog)s -l 10 20 log.txt             # Print lines 10 through 20
  %(prog)s -w book.txt                  # Word frequency table
  %(prog)s -s names.txt -o sorted.txt   # Sort lines into a file
  cat words | %(prog)s -u               # Drop adjacent duplicate lines
        """,
    )

    # Exactly one operation per run
    modes = parser.add_mutually_exclusive_group(required=True)
    modes.add_argument("-c", dest="count", action="store_true", help="count lines, words, chars")
    modes.add_argument("-f", dest="pattern", action=_OperandAction, help="find PATTERN in files (one operand)")
    modes.add_argument("-r", dest="replace", action=_OperandAction, help="replace OLD with NEW (two operands)")
    modes.add_argument("-l", dest="lines", action=_OperandAction, help="print lines START through END (two operands)")
    modes.add_argument("-w", dest="wordfreq", action="store_true", help="count word frequencies")
    modes.add_argument("-s", dest="sort", action="store_true", help="sort lines")
    modes.add_argument("-u", dest="unique", action="store_true", help="print unique lines only")
    modes.add_argument("-L", dest="lower", action="store_true", help="convert to lowercase")
    modes.add_argument("-U", dest="upper", action="store_true", help="convert to uppercase")

    parser.add_argument("-o", dest="output", type=Path, metavar="FILE", help="write output to FILE")
    parser.add_argument(
        "--config",
        type=Path,
        metavar="FILE",
        help="YAML file with line/word length limits and hash table size",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {version('textutil')}")
    parser.add_argument("files", nargs="*", type=Path, help="input files (default: stdin)")
    return parser


def parse_run_config(parser: argparse.ArgumentParser, args: argparse.Namespace) -> RunConfig:
    """Turn parsed arguments into a RunConfig, rejecting unusable values."""
    run = RunConfig(mode=Mode.COUNT, files=list(args.files), output=args.output)

    if args.count:
        run.mode = Mode.COUNT
    elif args.pattern is not None:
        run.mode = Mode.FIND
        run.pattern = os.fsencode(args.pattern[0])
    elif args.replace is not None:
        run.mode = Mode.REPLACE
        run.old, run.new = (os.fsencode(arg) for arg in args.replace)
        if not run.old:
            parser.error("replacement pattern must not be empty")
    elif args.lines is not None:
        run.mode = Mode.LINES
        try:
            run.start, run.end = (int(arg) for arg in args.lines)
        except ValueError:
            parser.error(f"invalid line numbers: {' '.join(args.lines)}")
    elif args.wordfreq:
        run.mode = Mode.WORDFREQ
    elif args.sort:
        run.mode = Mode.SORT
    elif args.unique:
        run.mode = Mode.UNIQUE
    elif args.lower:
        run.mode = Mode.LOWER
    elif args.upper:
        run.mode = Mode.UPPER

    return run


def main() -> int:
    """Run textutil."""
    parser = build_parser()
    args = parser.parse_args()
    run = parse_run_config(parser, args)

    try:
        config = TextutilConfig.from_yaml(args.config) if args.config else TextutilConfig()

        if run.output is None:
            output_cm = nullcontext(sys.stdout.buffer)
        else:
            output_cm = open_output(run.output)

        with output_cm as out:
            try:
                stdin = None if run.files else sys.stdin.buffer
                OperationDispatcher(run, config, out, stdin).run()
            finally:
                out.flush()
    except TextutilError as e:
        print(f"{PROG}: {e}", file=sys.stderr)
        return 1
    except MemoryError:
        print(f"{PROG}: out of memory", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"{PROG}: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
