"""Rate limiting adapters.

This package provides a small abstraction layer so the client can start with
an in-process sliding-window gate and later move to a shared store without
changing the submission pipeline.
"""

from registry_client.adapters.rate_limit.base import AbstractRateGate, RateLimitResult
from registry_client.adapters.rate_limit.sliding_window import SlidingWindowRateGate

__all__ = [
    "AbstractRateGate",
    "RateLimitResult",
    "SlidingWindowRateGate",
]
