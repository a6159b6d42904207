"""Process-wide rate gate wiring.

This module turns the rate-limit settings into a shared gate instance.

Design goals:
- One gate per process: every pipeline built from settings shares it, so the
  cap holds across all callers.
- Swap-friendly: the pipeline only sees ``AbstractRateGate``.
- Rebuilt on configuration change (primarily in tests).
"""

from __future__ import annotations

import logging
import threading

from registry_client.adapters.rate_limit.base import AbstractRateGate
from registry_client.adapters.rate_limit.sliding_window import SlidingWindowRateGate
from registry_client.core.config import TimeUnit, settings
from registry_client.core.errors import ConfigError

logger = logging.getLogger(__name__)


_gate: AbstractRateGate | None = None
_gate_config: tuple[TimeUnit, int, int] | None = None
_gate_lock = threading.Lock()


def window_duration(time_unit: TimeUnit | str, time_amount: int = 1) -> float:
    """Convert a window unit and multiplier into seconds.

    Args:
        time_unit: Unit of the window (member or name, e.g. "MINUTES").
        time_amount: Number of units in one window.

    Returns:
        Window length in seconds.

    Raises:
        ConfigError: If the unit is unknown or the amount is not positive.
    """

    try:
        unit = TimeUnit(time_unit.upper())
    except (ValueError, AttributeError) as exc:
        raise ConfigError(
            code="rate_limit_unknown_unit",
            message=f"Unknown time unit: '{time_unit}'",
        ) from exc

    if time_amount < 1:
        raise ConfigError(
            code="rate_limit_invalid_amount",
            message="time_amount must be >= 1",
            details={"context": {"time_amount": time_amount}},
        )

    return unit.seconds * time_amount


def get_rate_gate() -> AbstractRateGate:
    """Return the process-wide rate gate.

    The instance is cached in-module to preserve slot state across calls.
    If configuration changes, the gate is rebuilt with an empty window.

    Returns:
        AbstractRateGate: Configured gate instance.
    """

    global _gate, _gate_config

    cfg = settings.rate_limit
    config = (cfg.time_unit, cfg.time_amount, cfg.requests)

    with _gate_lock:
        if _gate is None or _gate_config != config:
            _gate = SlidingWindowRateGate(
                limit=cfg.requests,
                window_seconds=window_duration(cfg.time_unit, cfg.time_amount),
            )
            _gate_config = config
            logger.info(
                "rate_gate.configured",
                extra={
                    "limit": cfg.requests,
                    "time_unit": cfg.time_unit.value,
                    "time_amount": cfg.time_amount,
                },
            )

        return _gate
