"""Streaming samplers."""

from reservoir_sample.sampler.algorithm_r import AlgorithmRSampler
from reservoir_sample.sampler.base import StreamSampler

__all__ = [
    "StreamSampler",
    "AlgorithmRSampler",
]
