#!/usr/bin/env python3
"""Disassemble a flat 8086 binary into a NASM-style listing."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
import sys
from typing import List, Optional, Sequence

from .config import DecoderConfig, load_decoder_config
from .debug import format_bit_dump
from .decoding import DecodeError, Instruction, iter_instructions
from .tokens import render_listing

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[Sequence[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("input", type=Path, help="Binary file to decode")
    parser.add_argument(
        "-o", "--output", type=Path, help="Write the listing here (default: stdout)"
    )
    parser.add_argument(
        "--bits-dump", type=Path, help="Write a per-byte bit pattern dump to PATH"
    )
    parser.add_argument(
        "--header",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Emit the 'bits 16' header (default from I8086_LISTING_HEADER)",
    )
    parser.add_argument(
        "--start", type=lambda s: int(s, 0), default=0, help="Offset to start at"
    )
    parser.add_argument(
        "--max-size",
        type=int,
        default=None,
        help="Reject inputs larger than this many bytes (0: no limit)",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Log each decoded instruction"
    )
    return parser.parse_args(argv)


def read_input(path: Path, max_size: int) -> bytes:
    data = path.read_bytes()
    if max_size and len(data) > max_size:
        raise ValueError(f"{path}: {len(data)} bytes exceeds limit of {max_size}")
    return data


def _configure_logging(config: DecoderConfig, verbose: bool) -> None:
    level = logging.getLevelName(config.log_level)
    if verbose:
        level = logging.DEBUG
    elif not isinstance(level, int):
        level = logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def _write(text: str, output: Optional[Path]) -> None:
    if output is None:
        sys.stdout.write(text)
    else:
        output.write_text(text)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    try:
        config = load_decoder_config()
    except ValueError as exc:
        logger.error("Invalid configuration: %s", exc)
        return 2
    _configure_logging(config, args.verbose)

    header = config.listing_header if args.header is None else args.header
    max_size = config.max_input_size if args.max_size is None else args.max_size

    try:
        data = read_input(args.input, max_size)
    except (OSError, ValueError) as exc:
        logger.error("%s", exc)
        return 1
    logger.info("Read %d bytes from %s", len(data), args.input)
    if not 0 <= args.start <= len(data):
        logger.error("Start offset %d outside input of %d bytes", args.start, len(data))
        return 1

    if args.bits_dump is not None:
        try:
            args.bits_dump.write_text(format_bit_dump(data))
        except OSError as exc:
            logger.error("%s", exc)
            return 1

    decoded: List[Instruction] = []
    status = 0
    try:
        for instr in iter_instructions(data, start=args.start):
            decoded.append(instr)
    except DecodeError as exc:
        logger.error("Decoding stopped: %s", exc)
        status = 1

    try:
        _write(render_listing(decoded, header=header), args.output)
    except OSError as exc:
        logger.error("%s", exc)
        return 1
    return status


if __name__ == "__main__":
    sys.exit(main())
