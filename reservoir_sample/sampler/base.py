"""Streaming sampler interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any

from reservoir_sample.state import SamplerState


class StreamSampler(ABC):
    """Base interface for samplers that fold batches into an accumulator."""

    def init_state(self, capacity: int) -> SamplerState:
        """Return an empty state for a reservoir of size *capacity*."""
        return SamplerState.empty(capacity)

    @abstractmethod
    def update(self, state: SamplerState, items: Sequence[Any]) -> SamplerState:
        """Fold *items* into *state* and return the new state."""
