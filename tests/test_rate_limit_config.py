"""Tests for window configuration and the process-wide rate gate."""

import pytest

from registry_client.adapters.rate_limit.sliding_window import SlidingWindowRateGate
from registry_client.core import rate_limit
from registry_client.core.config import RateLimitSettings, TimeUnit, settings
from registry_client.core.errors import ConfigError
from registry_client.core.rate_limit import get_rate_gate, window_duration


@pytest.fixture(autouse=True)
def _reset_gate(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(rate_limit, "_gate", None)
    monkeypatch.setattr(rate_limit, "_gate_config", None)


class TestWindowDuration:
    @pytest.mark.parametrize(
        ("unit", "amount", "seconds"),
        [
            (TimeUnit.SECONDS, 1, 1.0),
            (TimeUnit.SECONDS, 30, 30.0),
            (TimeUnit.MINUTES, 1, 60.0),
            (TimeUnit.MINUTES, 5, 300.0),
            (TimeUnit.HOURS, 2, 7200.0),
            (TimeUnit.DAYS, 1, 86400.0),
            (TimeUnit.MILLISECONDS, 250, 0.25),
            ("minutes", 2, 120.0),
        ],
    )
    def test_unit_times_amount(self, unit, amount: int, seconds: float) -> None:
        assert window_duration(unit, amount) == pytest.approx(seconds)

    def test_amount_defaults_to_one(self) -> None:
        assert window_duration(TimeUnit.HOURS) == 3600.0

    def test_unknown_unit(self) -> None:
        with pytest.raises(ConfigError) as exc:
            window_duration("FORTNIGHTS")
        assert exc.value.code == "rate_limit_unknown_unit"

    def test_non_string_unit_is_config_error(self) -> None:
        with pytest.raises(ConfigError) as exc:
            window_duration(5)  # type: ignore[arg-type]
        assert exc.value.code == "rate_limit_unknown_unit"

    def test_unit_values_are_names_and_seconds_are_lengths(self) -> None:
        assert TimeUnit.MINUTES.value == "MINUTES"
        assert TimeUnit.MINUTES.seconds == 60.0
        assert TimeUnit.MILLISECONDS.seconds == pytest.approx(0.001)

    def test_non_positive_amount(self) -> None:
        with pytest.raises(ConfigError) as exc:
            window_duration(TimeUnit.SECONDS, 0)
        assert exc.value.code == "rate_limit_invalid_amount"


class TestGetRateGate:
    def test_builds_gate_from_settings(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(
            settings,
            "rate_limit",
            RateLimitSettings(time_unit=TimeUnit.MINUTES, time_amount=2, requests=7),
        )

        gate = get_rate_gate()

        assert isinstance(gate, SlidingWindowRateGate)
        assert gate.limit == 7
        assert gate.window_seconds == 120.0

    def test_gate_is_shared_while_settings_are_unchanged(self) -> None:
        assert get_rate_gate() is get_rate_gate()

    def test_gate_is_rebuilt_when_settings_change(self, monkeypatch: pytest.MonkeyPatch) -> None:
        first = get_rate_gate()
        monkeypatch.setattr(settings, "rate_limit", RateLimitSettings(requests=99))

        second = get_rate_gate()

        assert second is not first
        assert second.limit == 99

    def test_settings_reject_invalid_limit(self) -> None:
        with pytest.raises(ValueError):
            RateLimitSettings(requests=0)

    def test_settings_read_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("RATE_LIMIT_TIME_UNIT", "MINUTES")
        monkeypatch.setenv("RATE_LIMIT_REQUESTS", "3")

        cfg = RateLimitSettings()

        assert cfg.time_unit is TimeUnit.MINUTES
        assert cfg.requests == 3
        assert cfg.time_amount == 1
