"""Small helpers shared by the stream driver and the CLI.

These depend only on the Python standard library.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from itertools import islice
from typing import Any, List

# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def iter_batches(iterable: Iterable[Any], batch_size: int) -> Iterator[List[Any]]:
    """Yield consecutive lists of at most *batch_size* items from *iterable*.

    Args:
        iterable: Any iterable, consumed lazily.
        batch_size: Maximum batch length. Must be positive.

    Raises:
        ValueError: If *batch_size* is not positive.

    Examples:
        >>> list(iter_batches(range(5), 2))
        [[0, 1], [2, 3], [4]]
    """
    if batch_size <= 0:
        raise ValueError(f"batch_size must be positive, got {batch_size}")
    it = iter(iterable)
    while True:
        batch = list(islice(it, batch_size))
        if not batch:
            return
        yield batch


def strip_line_ending(line: str) -> str:
    """Drop one trailing ``\\n`` (or ``\\r\\n``) from *line*.

    Examples:
        >>> strip_line_ending("abc\\r\\n")
        'abc'
        >>> strip_line_ending("abc")
        'abc'
    """
    if line.endswith("\r\n"):
        return line[:-2]
    if line.endswith("\n"):
        return line[:-1]
    return line
