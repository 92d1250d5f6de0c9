"""reservoir_sample — streaming reservoir sampling over lines of text.

Public API
----------
The entire usable surface is importable directly from ``reservoir_sample``::

    from reservoir_sample import AlgorithmRSampler, SamplerState
    from reservoir_sample import ReservoirStream, StreamConfig, sample_stream
"""

from __future__ import annotations

# Core sampler
from reservoir_sample.sampler import AlgorithmRSampler, StreamSampler

# Accumulator state
from reservoir_sample.state import CapacityError, SamplerState, validate_capacity

# Stream driver, primary and functional APIs
from reservoir_sample.stream import ReservoirStream, StreamConfig, reservoir_sample, sample_stream

# Helpers
from reservoir_sample.utils import iter_batches, strip_line_ending

__version__ = "0.1.0"

__all__ = [
    # Primary abstractions
    "SamplerState",
    "StreamSampler",
    "AlgorithmRSampler",
    "ReservoirStream",
    "StreamConfig",
    "CapacityError",
    # Functional API
    "sample_stream",
    "reservoir_sample",
    "validate_capacity",
    # Helpers
    "iter_batches",
    "strip_line_ending",
    "__version__",
]
