#!/usr/bin/env python3
"""Command-line interface for the streaming 8086 disassembler."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import BinaryIO, Optional, Sequence, TextIO

from x86disasm import DecodeError, Disassembler, InstructionTextRenderer
from x86disasm.constants import DEFAULT_CHUNK_SIZE


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "input",
        nargs="?",
        default="-",
        help="Binary file with 8086 machine code; '-' or omitted reads stdin",
    )
    parser.add_argument(
        "--out",
        type=Path,
        default=None,
        help="Write the listing to this path instead of stdout",
    )
    parser.add_argument(
        "--offsets",
        action="store_true",
        help="Prefix every line with the instruction offset",
    )
    parser.add_argument(
        "--labels",
        action="store_true",
        help="Append a footer mapping generated labels to their target positions",
    )
    parser.add_argument(
        "--max-instructions",
        type=int,
        default=None,
        help="Stop after this many instructions",
    )
    parser.add_argument(
        "--chunk-size",
        type=int,
        default=DEFAULT_CHUNK_SIZE,
        help="Number of bytes requested from the input per read",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Log progress to stderr (repeat for debug output)",
    )
    return parser.parse_args(argv)


def configure_logging(verbosity: int) -> None:
    if verbosity <= 0:
        level = logging.WARNING
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.DEBUG
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def validate_args(args: argparse.Namespace) -> None:
    if args.chunk_size <= 0:
        raise SystemExit("--chunk-size must be positive")
    if args.max_instructions is not None and args.max_instructions < 0:
        raise SystemExit("--max-instructions must not be negative")
    if args.input != "-" and not Path(args.input).exists():
        raise SystemExit(f"missing input file: {args.input}")


def open_input(name: str) -> BinaryIO:
    if name == "-":
        return sys.stdin.buffer
    return Path(name).open("rb")


def run(args: argparse.Namespace, source: BinaryIO, output: TextIO) -> int:
    renderer = InstructionTextRenderer(show_offsets=args.offsets)
    disassembler = Disassembler(renderer, chunk_size=args.chunk_size)
    try:
        for line in disassembler.iter_listing(
            source,
            max_instructions=args.max_instructions,
            show_labels=args.labels,
        ):
            output.write(line + "\n")
            output.flush()
    except DecodeError as exc:
        output.flush()
        print(renderer.render_error(exc), file=sys.stderr)
        return 1
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    configure_logging(args.verbose)
    validate_args(args)

    source = open_input(args.input)
    try:
        if args.out is None:
            return run(args, source, sys.stdout)
        with args.out.open("w", encoding="utf-8") as output:
            status = run(args, source, output)
        print(f"listing written to {args.out}")
        return status
    finally:
        if source is not sys.stdin.buffer:
            source.close()


if __name__ == "__main__":
    raise SystemExit(main())
