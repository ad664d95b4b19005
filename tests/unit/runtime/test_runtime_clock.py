# tests/unit/runtime/test_runtime_clock.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

"""Unit tests for the monotonic clock service."""

from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock

import pytest

from corekit.runtime.clock import (
    ClockService,
    ManualWallClock,
    SystemWallClock,
    WallClock,
    datetime_to_ticks,
    default_clock,
    next_ticks,
    next_timestamp,
    ticks_to_datetime,
)


def test_wall_clocks_satisfy_protocol():
    assert isinstance(SystemWallClock(), WallClock)
    assert isinstance(ManualWallClock(), WallClock)


def test_manual_wall_clock_moves_only_when_told():
    wall = ManualWallClock(ticks=10)
    assert wall.ticks() == 10
    wall.advance(5)
    assert wall.ticks() == 15
    wall.set(3)
    assert wall.ticks() == 3


def test_next_ticks_follows_advancing_wall_clock(clock, manual_wall_clock):
    manual_wall_clock.advance(1_000)
    assert clock.next_ticks() == manual_wall_clock.ticks()
    manual_wall_clock.advance(1_000)
    assert clock.next_ticks() == manual_wall_clock.ticks()


def test_coarse_clock_still_yields_distinct_increasing_values(clock, manual_wall_clock):
    """100 calls within one wall-clock reading give 100 distinct, increasing ticks."""
    values = [clock.next_ticks() for _ in range(100)]
    assert len(set(values)) == 100
    assert values == sorted(values)
    assert all(b == a + 1 for a, b in zip(values, values[1:]))


def test_wall_clock_stepping_backwards_does_not_reverse(clock, manual_wall_clock):
    manual_wall_clock.advance(10_000)
    before = clock.next_ticks()
    manual_wall_clock.advance(-5_000)
    after = clock.next_ticks()
    assert after == before + 1


def test_resumes_wall_time_once_it_catches_up(clock, manual_wall_clock):
    manual_wall_clock.advance(-1_000)
    stalled = [clock.next_ticks() for _ in range(3)]
    manual_wall_clock.advance(1_000_000)
    assert clock.next_ticks() == manual_wall_clock.ticks()
    assert stalled == sorted(stalled)


def test_first_tick_is_after_construction_reading(manual_wall_clock):
    service = ClockService(wall_clock=manual_wall_clock)
    assert service.next_ticks() == manual_wall_clock.ticks() + 1


def test_retries_when_swap_is_lost(manual_wall_clock):
    """A lost compare-and-swap re-reads the shared value and tries again."""
    service = ClockService(wall_clock=manual_wall_clock)
    start = service._last.load()
    real_cas = service._last.compare_and_swap
    calls = []

    def flaky_cas(expected, new):
        calls.append((expected, new))
        if len(calls) == 1:
            # another caller publishes first
            real_cas(expected, expected + 10)
            return False
        return real_cas(expected, new)

    service._last.compare_and_swap = flaky_cas
    result = service.next_ticks()

    assert len(calls) == 2
    assert calls[1][0] == start + 10
    assert result == start + 11


def test_system_clock_is_monotonic(system_clock):
    prev = system_clock.next_ticks()
    for _ in range(1_000):
        current = system_clock.next_ticks()
        assert current > prev
        prev = current


def test_next_timestamp_is_utc(system_clock):
    stamp = system_clock.next_timestamp()
    assert stamp.tzinfo is timezone.utc
    assert abs(datetime.now(timezone.utc) - stamp) < timedelta(minutes=1)


def test_next_timestamp_matches_ticks():
    expected = datetime(2023, 10, 1, 12, 30, 45, 123456, tzinfo=timezone.utc)
    wall = ManualWallClock(ticks=0)
    service = ClockService(wall_clock=wall)
    wall.set(datetime_to_ticks(expected))
    assert service.next_timestamp() == expected


def test_exact_aliases(clock):
    first = clock.exact_ticks()
    assert clock.exact_ticks() > first
    assert clock.exact_now().tzinfo is timezone.utc


def test_ticks_round_trip_at_microsecond_precision():
    ticks = 1_696_163_445_123_456_789
    stamp = ticks_to_datetime(ticks)
    assert datetime_to_ticks(stamp) == ticks - 789


def test_datetime_to_ticks_epoch():
    assert datetime_to_ticks(datetime(1970, 1, 1, tzinfo=timezone.utc)) == 0
    assert ticks_to_datetime(0) == datetime(1970, 1, 1, tzinfo=timezone.utc)


def test_datetime_to_ticks_honours_offset():
    plus_two = timezone(timedelta(hours=2))
    local = datetime(2024, 1, 1, 2, 0, tzinfo=plus_two)
    utc = datetime(2024, 1, 1, 0, 0, tzinfo=timezone.utc)
    assert datetime_to_ticks(local) == datetime_to_ticks(utc)


def test_datetime_to_ticks_rejects_naive():
    with pytest.raises(ValueError, match="timezone-aware"):
        datetime_to_ticks(datetime(2024, 1, 1))


def test_ticks_beyond_int64_are_not_wrapped():
    wall = ManualWallClock(ticks=2**63 - 1)
    service = ClockService(wall_clock=wall)
    assert service.next_ticks() == 2**63


def test_default_clock_is_shared():
    assert default_clock() is default_clock()


def test_module_level_helpers_use_default_clock():
    first = next_ticks()
    assert next_ticks() > first
    assert next_timestamp().tzinfo is timezone.utc


def test_wall_clock_is_injected():
    wall = MagicMock()
    wall.ticks.return_value = 7
    service = ClockService(wall_clock=wall)
    assert service.wall_clock is wall
    assert service.next_ticks() == 8
