"""Accumulator state for streaming reservoir sampling."""

from __future__ import annotations

from dataclasses import dataclass
from numbers import Integral
from typing import Any


class CapacityError(ValueError):
    """Raised when a reservoir capacity is not a positive integer."""


def validate_capacity(capacity: Any) -> int:
    """Return *capacity* as a plain ``int`` or raise :class:`CapacityError`.

    ``bool`` is rejected even though it subclasses ``int``; integral numpy
    scalars are accepted.
    """
    if isinstance(capacity, bool) or not isinstance(capacity, Integral):
        raise CapacityError(f"capacity must be a positive integer, got {capacity!r}")
    capacity = int(capacity)
    if capacity <= 0:
        raise CapacityError(f"capacity must be a positive integer, got {capacity}")
    return capacity


@dataclass(frozen=True)
class SamplerState:
    """Everything needed to resume sampling with more input.

    Attributes:
        capacity: Maximum sample size ``k``. Fixed for the life of the state.
        sample: Current reservoir, in slot order. Holds
            ``min(seen_count, capacity)`` items.
        seen_count: Total number of items ever offered to the sampler.
    """

    capacity: int
    sample: tuple[Any, ...] = ()
    seen_count: int = 0

    @classmethod
    def empty(cls, capacity: Any) -> SamplerState:
        """Create the initial state for a reservoir of size *capacity*."""
        return cls(capacity=validate_capacity(capacity))

    @property
    def is_full(self) -> bool:
        """``True`` once ``capacity`` items have been seen."""
        return self.seen_count >= self.capacity

    def __len__(self) -> int:
        return len(self.sample)
