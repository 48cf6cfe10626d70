"""Command line entry point: ``bftape FILE [--cells N] [--extensible]``."""

from __future__ import annotations

import argparse
import logging
import sys

from typing import List, Optional

from .cells import cell_kind_for
from .errors import BFTapeError
from .program import load_file
from .vm import DEFAULT_TAPE_LENGTH, VirtualMachine

PROG = "bftape"


def init_logging(debug: bool = False) -> None:
    """Configure the root logger to write to stderr, at DEBUG level when ``debug`` is set."""
    root = logging.getLogger()
    for h in list(root.handlers):
        root.removeHandler(h)
    lvl = logging.DEBUG if debug else logging.WARNING
    root.setLevel(lvl)

    if debug:
        fmt = "%(levelname)s %(name)s:%(lineno)d %(message)s"
    else:
        fmt = "%(levelname)-5s %(message)s"
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(lvl)
    handler.setFormatter(logging.Formatter(fmt))
    root.addHandler(handler)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog=PROG, description="Run a Brainfuck program on a byte tape.")
    parser.add_argument("filename", help="Brainfuck source file")
    parser.add_argument(
        "-c", "--cells", type=int, default=DEFAULT_TAPE_LENGTH,
        help=f"Number of tape cells (default {DEFAULT_TAPE_LENGTH}; 0 also means the default)",
    )
    parser.add_argument(
        "-e", "--extensible", action="store_true",
        help="Grow the tape on demand instead of failing at its end",
    )
    parser.add_argument("--cell-bits", type=int, choices=(8, 16, 32), default=8, help="Cell width in bits (default 8)")
    parser.add_argument("--debug", action="store_true", help="Log loader and VM activity to stderr")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.cells < 0:
        parser.error("--cells must not be negative")

    init_logging(args.debug)

    stdout = sys.stdout.buffer
    try:
        program = load_file(args.filename)
        vm = VirtualMachine(program, args.cells, args.extensible, cell_kind_for(args.cell_bits))
        vm.run(sys.stdin.buffer, stdout)
    except BFTapeError as e:
        stdout.flush()
        print(f"{PROG}: {e}", file=sys.stderr)
        return 1
    stdout.flush()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
