#!/usr/bin/env python
"""
Print a uniform random sample of lines read from stdin or files.

Usage:
    cat files* | reservoir-sample NUMBER_OF_LINES
    reservoir-sample 100 access.log other.log --seed 7
    cat legacy.txt | reservoir-sample 10 --encoding latin-1
"""

from __future__ import annotations

import argparse
import codecs
import io
import logging
import sys
from collections.abc import Iterator
from pathlib import Path

from reservoir_sample.state import CapacityError
from reservoir_sample.stream import ReservoirStream, StreamConfig

logger = logging.getLogger(__name__)

USAGE = """USAGE:
$ cat files* | reservoir-sample NUMBER-OF-LINES
"""


def _parse_capacity(text: str) -> int:
    try:
        return int(text)
    except ValueError:
        raise CapacityError(f"capacity must be a positive integer, got {text!r}") from None


def iter_input_lines(files: list[str], encoding: str, errors: str) -> Iterator[str]:
    """Yield decoded lines from *files* in order; ``-`` reads stdin.

    Stdin is re-wrapped so *encoding* and *errors* apply to it as well. A
    stdin without a byte buffer (already text) is read as is.
    """
    for name in files:
        if name != "-":
            with open(name, encoding=encoding, errors=errors) as fh:
                yield from fh
            continue
        buffer = getattr(sys.stdin, "buffer", None)
        if buffer is None:
            yield from sys.stdin
            continue
        wrapper = io.TextIOWrapper(buffer, encoding=encoding, errors=errors)
        try:
            yield from wrapper
        finally:
            # Leave the process's stdin open.
            wrapper.detach()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="reservoir-sample",
        description="Uniformly sample a fixed number of lines from a stream.",
    )
    parser.add_argument("num_lines", type=str, help="Number of lines to keep")
    parser.add_argument(
        "files", nargs="*", help="Input files, read in order (default: stdin, or '-')"
    )
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--batch-size", type=int, default=1024)
    parser.add_argument("--encoding", type=str, default="utf-8")
    parser.add_argument(
        "--errors",
        type=str,
        default="replace",
        help="Codec error handler for undecodable bytes (default: replace)",
    )
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        config = StreamConfig(
            capacity=_parse_capacity(args.num_lines),
            batch_size=args.batch_size,
            seed=args.seed,
        )
    except ValueError as exc:
        logger.error("%s", exc)
        sys.stderr.write(USAGE)
        return 1

    try:
        codecs.lookup(args.encoding)
        codecs.lookup_error(args.errors)
    except LookupError as exc:
        parser.error(str(exc))

    files = args.files or ["-"]
    missing = [f for f in files if f != "-" and not Path(f).is_file()]
    if missing:
        parser.error(f"no such file: {', '.join(missing)}")

    logger.info("Sampling %d lines from %s", config.capacity, ", ".join(files))
    stream = ReservoirStream(config)
    stream.consume(iter_input_lines(files, args.encoding, args.errors))

    if stream.sample:
        sys.stdout.write("\n".join(stream.sample) + "\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
