"""In-memory sliding-window rate gate.

Notes:
- Per-process only: every process holding its own gate gets its own budget.
- Thread-safe: one condition variable guards the slot sequence and the
  waiter queue; waits release it.
- Fair: callers are admitted in the order they started waiting.
"""

from __future__ import annotations

import logging
import threading
import time
from collections import deque
from typing import Callable

from registry_client.adapters.rate_limit.base import AbstractRateGate, RateLimitResult
from registry_client.core.errors import ConfigError, GateCancelledError

logger = logging.getLogger(__name__)

# Upper bound on how long a waiter sleeps before re-checking its cancel event.
_CANCEL_POLL_SECONDS = 0.05


class SlidingWindowRateGate(AbstractRateGate):
    """Admit at most ``limit`` callers in any rolling window of ``window_seconds``.

    Each admission records the moment its window elapses ("slot"). Once the
    sequence holds ``limit`` live slots the next caller waits until the
    earliest one expires. Only the head of the waiter queue is ever admitted,
    so a caller that started waiting first is never overtaken.

    The lock is held only for bookkeeping. Both the head waiting for a slot
    and the callers queued behind it sleep on the condition variable, which
    releases the lock for the duration of the sleep.
    """

    def __init__(
        self,
        *,
        limit: int,
        window_seconds: float,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize the gate.

        Args:
            limit: Maximum number of admissions per window.
            window_seconds: Length of the rolling window in seconds.
            clock: Monotonic time source returning seconds.

        Raises:
            ConfigError: If limit or window_seconds are invalid.
        """
        if limit < 1:
            raise ConfigError(
                code="rate_limit_invalid_limit",
                message="limit must be >= 1",
                details={"limit": limit},
            )
        # Written as a negated comparison so NaN is rejected too.
        if not window_seconds > 0:
            raise ConfigError(
                code="rate_limit_invalid_window",
                message="window_seconds must be > 0",
                details={"window_seconds": window_seconds},
            )

        self._limit = limit
        self._window_seconds = float(window_seconds)
        self._clock = clock
        self._cond = threading.Condition(threading.Lock())
        self._slots: deque[float] = deque()
        self._waiters: deque[object] = deque()

    def __repr__(self) -> str:  # pragma: no cover - representation only
        return (
            f"SlidingWindowRateGate(limit={self._limit}, "
            f"window_seconds={self._window_seconds})"
        )

    @property
    def limit(self) -> int:
        return self._limit

    @property
    def window_seconds(self) -> float:
        return self._window_seconds

    @property
    def pending(self) -> int:
        """Number of callers currently inside ``acquire()``."""
        with self._cond:
            return len(self._waiters)

    def snapshot(self) -> tuple[float, ...]:
        """Return a copy of the slot sequence (expiry times, oldest first)."""
        with self._cond:
            return tuple(self._slots)

    def _evict_expired(self, now: float) -> None:
        while self._slots and self._slots[0] <= now:
            self._slots.popleft()

    def _seconds_until_free(self, now: float) -> float:
        """Evict expired slots and return how long until one is free (0 if now)."""
        self._evict_expired(now)
        if len(self._slots) < self._limit:
            return 0.0
        return self._slots[0] - now

    def acquire(self, cancel: threading.Event | None = None) -> None:
        """Block until a slot is reserved for the calling thread.

        Args:
            cancel: Optional event; once set, a caller that has not been
                admitted yet leaves the queue without reserving a slot.

        Raises:
            GateCancelledError: If ``cancel`` is set before admission.
        """
        ticket = object()
        started = self._clock()
        logged_wait = False

        with self._cond:
            self._waiters.append(ticket)
            try:
                while True:
                    if cancel is not None and cancel.is_set():
                        logger.info(
                            "rate_gate.cancelled",
                            extra={"limit": self._limit, "pending": len(self._waiters) - 1},
                        )
                        raise GateCancelledError(
                            code="rate_gate_cancelled",
                            message="Cancelled while waiting for a rate limit slot",
                        )

                    timeout: float | None = None
                    if self._waiters[0] is ticket:
                        now = self._clock()
                        delay = self._seconds_until_free(now)
                        if delay <= 0:
                            self._slots.append(now + self._window_seconds)
                            logger.debug(
                                "rate_gate.admitted",
                                extra={
                                    "limit": self._limit,
                                    "in_window": len(self._slots),
                                    "waited_s": round(now - started, 6),
                                },
                            )
                            return
                        timeout = delay
                        if not logged_wait:
                            logged_wait = True
                            logger.info(
                                "rate_gate.wait",
                                extra={
                                    "limit": self._limit,
                                    "window_s": self._window_seconds,
                                    "wait_s": round(delay, 6),
                                    "pending": len(self._waiters) - 1,
                                },
                            )

                    if cancel is not None:
                        timeout = _CANCEL_POLL_SECONDS if timeout is None else min(timeout, _CANCEL_POLL_SECONDS)
                    self._cond.wait(timeout)
            finally:
                self._waiters.remove(ticket)
                self._cond.notify_all()

    def try_acquire(self) -> RateLimitResult:
        """Reserve a slot only if one is free and nobody is queued for it.

        Returns:
            RateLimitResult describing whether a slot was reserved.
        """
        with self._cond:
            now = self._clock()
            delay = self._seconds_until_free(now)

            if delay <= 0 and not self._waiters:
                self._slots.append(now + self._window_seconds)
                return RateLimitResult(
                    allowed=True,
                    limit=self._limit,
                    remaining=self._limit - len(self._slots),
                    reset_at=self._slots[0],
                    retry_after_seconds=None,
                )

            return RateLimitResult(
                allowed=False,
                limit=self._limit,
                remaining=max(0, self._limit - len(self._slots)),
                reset_at=self._slots[0] if self._slots else None,
                retry_after_seconds=max(0.0, delay),
            )
