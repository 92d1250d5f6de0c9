"""Stream driver: ReservoirStream plus functional wrappers.

The primary API is :class:`ReservoirStream`: initialize it once with a
:class:`StreamConfig`, then call :meth:`ReservoirStream.feed` with each new
batch of lines (or :meth:`ReservoirStream.consume` with a whole iterable).
The sample can be read at any point.

``sample_stream(...)`` and ``reservoir_sample(...)`` are thin wrappers for
one-shot and incremental use.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from numbers import Integral
from typing import Any

import numpy as np

from reservoir_sample.sampler.algorithm_r import AlgorithmRSampler
from reservoir_sample.sampler.base import StreamSampler
from reservoir_sample.state import SamplerState, validate_capacity
from reservoir_sample.utils import iter_batches, strip_line_ending

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Config
# ---------------------------------------------------------------------------


@dataclass
class StreamConfig:
    """Runtime configuration for one sampling run.

    Attributes:
        capacity: Number of lines to keep (``k``).
        batch_size: Number of lines folded per ``update`` call by
            :meth:`ReservoirStream.consume`.
        seed: Random seed; ``None`` draws fresh OS entropy.
        strip_newlines: Strip one trailing line ending from each string item
            before it is sampled.
    """

    capacity: int
    batch_size: int = 1024
    seed: int | None = None
    strip_newlines: bool = True

    def __post_init__(self) -> None:
        self.capacity = validate_capacity(self.capacity)
        if isinstance(self.batch_size, bool) or not isinstance(self.batch_size, Integral):
            raise ValueError(f"batch_size must be a positive integer, got {self.batch_size!r}")
        self.batch_size = int(self.batch_size)
        if self.batch_size <= 0:
            raise ValueError(f"batch_size must be a positive integer, got {self.batch_size}")


# ---------------------------------------------------------------------------
# ReservoirStream
# ---------------------------------------------------------------------------


class ReservoirStream:
    """Feeds batches of lines through a sampler and tracks the latest state.

    Attributes:
        config: Run configuration.
        sampler: Sampler used for every batch.
        state: Latest :class:`SamplerState`.
        n_batches: Number of non-empty batches folded so far.
    """

    def __init__(self, config: StreamConfig, sampler: StreamSampler | None = None) -> None:
        self.config = config
        self.sampler = sampler if sampler is not None else AlgorithmRSampler(seed=config.seed)
        self.state: SamplerState = self.sampler.init_state(config.capacity)
        self.n_batches: int = 0

    def feed(self, items: Iterable[Any]) -> SamplerState:
        """Fold one batch into the reservoir and return the new state."""
        batch = list(items)
        if self.config.strip_newlines:
            batch = [strip_line_ending(x) if isinstance(x, str) else x for x in batch]
        self.state = self.sampler.update(self.state, batch)
        if batch:
            self.n_batches += 1
            logger.debug(
                "Batch %d: %d items, %d seen so far", self.n_batches, len(batch), self.seen_count
            )
        return self.state

    def consume(self, items: Iterable[Any]) -> SamplerState:
        """Feed every item of *items* in batches of ``config.batch_size``."""
        for batch in iter_batches(items, self.config.batch_size):
            self.feed(batch)
        logger.info(
            "Sampled %d of %d items (capacity %d)",
            len(self.state.sample),
            self.seen_count,
            self.config.capacity,
        )
        return self.state

    # ------------------------------------------------------------------
    # Convenience properties
    # ------------------------------------------------------------------

    @property
    def sample(self) -> list[Any]:
        """Current reservoir contents, in slot order."""
        return list(self.state.sample)

    @property
    def seen_count(self) -> int:
        """Number of items fed so far."""
        return self.state.seen_count


# ---------------------------------------------------------------------------
# Functional API
# ---------------------------------------------------------------------------


def sample_stream(
    lines: Iterable[Any],
    config: StreamConfig,
    sampler: StreamSampler | None = None,
) -> SamplerState:
    """Sample ``config.capacity`` items from *lines* in a single pass.

    Args:
        lines: Any iterable of items, consumed lazily.
        config: Run configuration.
        sampler: Optional sampler; defaults to :class:`AlgorithmRSampler`
            seeded with ``config.seed``.

    Returns:
        The final :class:`SamplerState`.
    """
    return ReservoirStream(config, sampler=sampler).consume(lines)


def reservoir_sample(
    reservoir: list[Any],
    lines_read: int,
    max_size: int,
    lines: Iterable[Any],
    rng: np.random.Generator | None = None,
) -> tuple[list[Any], int]:
    """Fold *lines* into an existing reservoir, the incremental way.

    Usage::

        reservoir, lines_read = [], 0
        reservoir, lines_read = reservoir_sample(reservoir, lines_read, 3, [1, 2, 3, 4, 5])
        reservoir, lines_read = reservoir_sample(reservoir, lines_read, 3, [10, 20, 30, 40, 50])

    Args:
        reservoir: Current reservoir. Not modified.
        lines_read: Number of lines read to obtain *reservoir*.
        max_size: Maximum size of the reservoir.
        lines: New lines to evaluate.
        rng: Random generator; a fresh unseeded one is used when omitted.

    Returns:
        The new reservoir and the new ``lines_read``.

    Raises:
        CapacityError: If *max_size* is not a positive integer.
        ValueError: If *lines_read* is not a non-negative integer or
            disagrees with *reservoir*.
    """
    max_size = validate_capacity(max_size)
    if isinstance(lines_read, bool) or not isinstance(lines_read, Integral):
        raise ValueError(f"lines_read must be a non-negative integer, got {lines_read!r}")
    lines_read = int(lines_read)
    if lines_read < 0 or len(reservoir) != min(lines_read, max_size):
        raise ValueError(
            f"reservoir of length {len(reservoir)} is inconsistent with "
            f"lines_read={lines_read} and max_size={max_size}"
        )
    state = SamplerState(capacity=max_size, sample=tuple(reservoir), seen_count=lines_read)
    state = AlgorithmRSampler(rng=rng).update(state, lines)
    return list(state.sample), state.seen_count
