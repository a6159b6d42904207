"""Rate gate interfaces.

The submission pipeline depends on this abstraction (not the concrete
implementation) so tests can substitute a gate that never blocks, and a
shared store could be plugged in later.
"""

from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class RateLimitResult:
    """Result of a non-blocking admission attempt.

    Attributes:
        allowed: Whether a slot was reserved.
        limit: Max admissions per window.
        remaining: Free slots left after this attempt.
        reset_at: Clock reading at which the earliest slot expires.
        retry_after_seconds: Suggested wait in seconds when blocked.
    """

    allowed: bool
    limit: int
    remaining: int
    reset_at: float | None
    retry_after_seconds: float | None


class AbstractRateGate(ABC):
    """Interface for admission controllers."""

    @abstractmethod
    def acquire(self, cancel: threading.Event | None = None) -> None:
        """Block until a slot is reserved for the calling thread.

        Args:
            cancel: Optional event; setting it aborts the wait.

        Raises:
            GateCancelledError: If ``cancel`` is set before admission.
        """
        raise NotImplementedError

    @abstractmethod
    def try_acquire(self) -> RateLimitResult:
        """Reserve a slot only if one is free right now."""
        raise NotImplementedError
