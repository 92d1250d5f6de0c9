"""Algorithm R reservoir sampler."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

import numpy as np

from reservoir_sample.sampler.base import StreamSampler
from reservoir_sample.state import SamplerState


class AlgorithmRSampler(StreamSampler):
    """Uniform reservoir sampler (Vitter's Algorithm R), applied per batch.

    The first ``capacity`` items fill the reservoir in input order. Item number
    ``n`` after that is kept with probability ``capacity / n`` and, when kept,
    overwrites a uniformly chosen slot. Splitting the input into batches does
    not change the distribution of the result.
    """

    def __init__(self, seed: int | None = None, rng: np.random.Generator | None = None) -> None:
        """Initialize the sampler.

        Args:
            seed: Random seed for reproducibility. Ignored when ``rng`` is given.
            rng: Random generator to draw from. Anything exposing
                ``random(size)`` and ``integers(low, high, size)`` works.
        """
        self._rng = rng if rng is not None else np.random.default_rng(seed)

    def update(self, state: SamplerState, items: Iterable[Any]) -> SamplerState:
        """Fold *items* into *state* and return the new state.

        *state* is left untouched. An empty batch returns *state* itself.
        """
        items = list(items)
        if not items:
            return state

        capacity = state.capacity
        sample = list(state.sample)

        n_fill = min(max(capacity - state.seen_count, 0), len(items))
        sample.extend(items[:n_fill])

        overflow = items[n_fill:]
        if overflow:
            # Running count of each overflow item, counting the item itself.
            counts = np.arange(
                state.seen_count + n_fill + 1, state.seen_count + len(items) + 1, dtype=np.float64
            )
            draws = np.asarray(self._rng.random(size=len(overflow)))
            accepted = np.flatnonzero(draws <= capacity / counts)
            slots = np.asarray(self._rng.integers(0, capacity, size=len(accepted)))
            # In input order, so a later item wins a slot drawn twice.
            for pos, slot in zip(accepted.tolist(), slots.tolist()):
                sample[slot] = overflow[pos]

        return SamplerState(
            capacity=capacity,
            sample=tuple(sample),
            seen_count=state.seen_count + len(items),
        )
