"""Tests for the Algorithm R sampler: invariants, determinism and distribution."""

from __future__ import annotations

from collections import Counter

import numpy as np
import pytest

from reservoir_sample.sampler.algorithm_r import AlgorithmRSampler
from reservoir_sample.sampler.base import StreamSampler
from reservoir_sample.state import CapacityError, SamplerState


class _FixedRng:
    """Random source that always returns the same draw."""

    def __init__(self, r: float = 0.0, idx: int = 0) -> None:
        self.r = r
        self.idx = idx

    def random(self, size=None) -> np.ndarray:
        return np.full(size, self.r, dtype=np.float64)

    def integers(self, low, high=None, size=None) -> np.ndarray:
        return np.full(size, self.idx, dtype=np.int64)


def _fold(sampler: StreamSampler, capacity: int, batches) -> SamplerState:
    state = sampler.init_state(capacity)
    for batch in batches:
        state = sampler.update(state, batch)
    return state


def _random_partition(items: list, rng: np.random.Generator) -> list[list]:
    batches, start = [], 0
    while start < len(items):
        size = int(rng.integers(1, 5))
        batches.append(items[start : start + size])
        start += size
    return batches


def test_sampler_implements_interface() -> None:
    assert isinstance(AlgorithmRSampler(seed=0), StreamSampler)


def test_init_state_validates_capacity() -> None:
    with pytest.raises(CapacityError):
        AlgorithmRSampler(seed=0).init_state(0)


@pytest.mark.parametrize("capacity", [1, 3, 7])
@pytest.mark.parametrize("n_items", [0, 1, 5, 20])
def test_size_invariant_under_any_batching(capacity: int, n_items: int) -> None:
    """Sample length is min(n, k) however the input is split."""
    rng = np.random.default_rng(capacity * 100 + n_items)
    items = list(range(n_items))
    sampler = AlgorithmRSampler(seed=1)
    for batches in ([items], [[x] for x in items], _random_partition(items, rng)):
        state = _fold(sampler, capacity, batches)
        assert state.seen_count == n_items
        assert len(state.sample) == min(n_items, capacity)
        assert state.capacity == capacity
        assert set(state.sample) <= set(items)


def test_prefix_fill_keeps_input_order() -> None:
    """With n <= k the sample is exactly the input, in order."""
    sampler = AlgorithmRSampler(seed=3)
    state = _fold(sampler, 5, [["a", "b"], [], ["c"], ["d", "e"]])
    assert state.sample == ("a", "b", "c", "d", "e")
    assert state.is_full


def test_empty_batch_leaves_state_unchanged() -> None:
    sampler = AlgorithmRSampler(seed=0)
    state = _fold(sampler, 2, [["x", "y", "z"]])
    same = sampler.update(state, [])
    assert same == state
    assert same.sample == state.sample
    assert same.seen_count == state.seen_count


def test_update_does_not_mutate_previous_state() -> None:
    """Overwrites land in the new state only."""
    sampler = AlgorithmRSampler(rng=_FixedRng(r=0.0, idx=1))
    before = _fold(sampler, 2, [["a", "b"]])
    after = sampler.update(before, ["c"])
    assert before.sample == ("a", "b")
    assert before.seen_count == 2
    assert after.sample == ("a", "c")


def test_update_accepts_any_iterable() -> None:
    sampler = AlgorithmRSampler(seed=0)
    state = sampler.update(sampler.init_state(3), (x for x in "ab"))
    assert state.sample == ("a", "b")


def test_forced_overwrite_path_is_deterministic() -> None:
    """r == 0 always accepts; idx == 0 always targets the first slot."""
    sampler = AlgorithmRSampler(rng=_FixedRng(r=0.0, idx=0))
    state = sampler.update(sampler.init_state(3), [1, 2, 3, 4, 5])
    assert state.seen_count == 5
    assert state.sample == (5, 2, 3)

    state = sampler.update(state, [10, 20, 30, 40, 50])
    assert state.seen_count == 10
    assert state.sample == (50, 2, 3)


def test_acceptance_uses_count_including_current_item() -> None:
    """The second item for k=1 is kept with probability 1/2, not 1/1."""
    rejecting = AlgorithmRSampler(rng=_FixedRng(r=0.75, idx=0))
    state = rejecting.update(rejecting.init_state(1), ["first", "second"])
    assert state.sample == ("first",)
    assert state.seen_count == 2

    accepting = AlgorithmRSampler(rng=_FixedRng(r=0.5, idx=0))
    state = accepting.update(accepting.init_state(1), ["first", "second"])
    assert state.sample == ("second",)


def test_seeded_samplers_are_reproducible() -> None:
    items = [f"line {i}" for i in range(500)]
    batches = [items[:123], items[123:400], items[400:]]
    first = _fold(AlgorithmRSampler(seed=42), 10, batches)
    second = _fold(AlgorithmRSampler(seed=42), 10, batches)
    assert first == second


def test_injected_generator_is_used() -> None:
    items = list(range(1000))
    a = _fold(AlgorithmRSampler(rng=np.random.default_rng(9)), 4, [items])
    b = _fold(AlgorithmRSampler(rng=np.random.default_rng(9)), 4, [items])
    assert a.sample == b.sample


def test_batch_invariance_k1_n2() -> None:
    """One batch of 2 and two batches of 1 keep each item about half the time."""
    sampler = AlgorithmRSampler(seed=2024)
    n_trials = 4000
    for batches in ([["a", "b"]], [["a"], ["b"]]):
        counts = Counter(_fold(sampler, 1, batches).sample[0] for _ in range(n_trials))
        assert set(counts) == {"a", "b"}
        assert counts["a"] / n_trials == pytest.approx(0.5, abs=0.05)


def test_two_batch_scenario_is_uniform() -> None:
    """k=3 over [1..5] then [10..50]: every item is kept with probability 3/10."""
    sampler = AlgorithmRSampler(seed=7)
    batch1 = [1, 2, 3, 4, 5]
    batch2 = [10, 20, 30, 40, 50]
    n_trials = 6000
    counts: Counter = Counter()
    for _ in range(n_trials):
        state = _fold(sampler, 3, [batch1, batch2])
        assert state.seen_count == 10
        assert len(state.sample) == 3
        assert len(set(state.sample)) == 3
        counts.update(state.sample)
    for item in batch1 + batch2:
        assert counts[item] / n_trials == pytest.approx(0.3, abs=0.04)


def test_uniformity_for_large_stream() -> None:
    """k=10, n=100000: kept items spread evenly across the stream.

    Per-item inclusion at k/n = 0.0001 would need millions of trials to
    resolve, so kept positions are pooled into ten equal bins of the stream,
    each expected to hold a tenth of all kept items.
    """
    capacity, n_items, n_trials, n_bins = 10, 100_000, 200, 10
    sampler = AlgorithmRSampler(seed=11)
    items = list(range(n_items))
    batches = [items[i : i + 4096] for i in range(0, n_items, 4096)]

    bins = np.zeros(n_bins, dtype=np.int64)
    for _ in range(n_trials):
        state = _fold(sampler, capacity, batches)
        assert len(set(state.sample)) == capacity
        bins += np.bincount(np.asarray(state.sample) * n_bins // n_items, minlength=n_bins)

    expected = capacity * n_trials / n_bins
    assert bins.sum() == capacity * n_trials
    assert np.all(np.abs(bins - expected) < 0.35 * expected)
