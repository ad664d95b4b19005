# corekit/runtime/clock.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

"""
Process-wide monotonic timestamps.

Ticks are nanoseconds since the Unix epoch. The wall clock may be coarser than
the call rate, or be stepped backwards by NTP; ClockService still hands out
strictly increasing, unique tick values to every caller in the process.
"""

from __future__ import annotations

import logging
import threading
import time
from datetime import datetime, timedelta, timezone
from typing import Optional, Protocol, runtime_checkable

from corekit.runtime.concurrency import AtomicInteger, with_lock

logger = logging.getLogger(__name__)

TICKS_PER_MICROSECOND = 1_000
TICKS_PER_SECOND = 1_000_000_000

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


@runtime_checkable
class WallClock(Protocol):
    """Source of raw wall-clock readings, in ticks."""

    def ticks(self) -> int: ...


class SystemWallClock:
    """Production wall clock backed by time.time_ns()."""

    def ticks(self) -> int:
        return time.time_ns()


class ManualWallClock:
    """
    Wall clock that only moves when told to. Lets tests simulate a coarse clock
    (many calls within one reading) or a clock stepped backwards.
    """

    def __init__(self, ticks: int = 0) -> None:
        self._ticks = ticks

    def ticks(self) -> int:
        return self._ticks

    def set(self, ticks: int) -> None:
        self._ticks = ticks

    def advance(self, ticks: int) -> None:
        self._ticks += ticks


class ClockService:
    """
    Issues strictly increasing tick values to any number of concurrent callers.

    The only shared state is the last issued value, held in an AtomicInteger
    and advanced with a read-compute-compare-and-swap loop. A caller that loses
    the swap simply re-reads and tries again; nobody blocks while another
    caller computes its candidate.
    """

    def __init__(self, wall_clock: Optional[WallClock] = None) -> None:
        """
        :param wall_clock: Source of raw readings. Defaults to SystemWallClock.
        """
        self._wall_clock = wall_clock or SystemWallClock()
        self._last = AtomicInteger(self._wall_clock.ticks())

    @property
    def wall_clock(self) -> WallClock:
        return self._wall_clock

    def next_ticks(self) -> int:
        """
        Return a tick value greater than every value previously returned by
        this service, and no earlier than the current wall-clock reading.
        """
        while True:
            prev = self._last.load()
            wall = self._wall_clock.ticks()
            candidate = max(wall, prev + 1)
            if self._last.compare_and_swap(prev, candidate):
                return candidate

    def next_timestamp(self) -> datetime:
        """
        Return next_ticks() as a timezone-aware UTC datetime.

        datetime only resolves microseconds, so sub-microsecond ticks are
        truncated; two timestamps may compare equal even though their ticks
        never do.
        """
        return ticks_to_datetime(self.next_ticks())

    # Aliases kept for framework code written against the older names.
    exact_ticks = next_ticks
    exact_now = next_timestamp


def ticks_to_datetime(ticks: int) -> datetime:
    """Convert a tick value to a UTC datetime."""
    return _EPOCH + timedelta(microseconds=ticks // TICKS_PER_MICROSECOND)


def datetime_to_ticks(value: datetime) -> int:
    """
    Convert an aware datetime to ticks since the epoch.

    :raises ValueError: If the datetime is naive.
    """
    if value.tzinfo is None or value.utcoffset() is None:
        raise ValueError("Datetime must be timezone-aware before conversion to ticks")
    delta = value - _EPOCH
    seconds = delta.days * 86_400 + delta.seconds
    return seconds * TICKS_PER_SECOND + delta.microseconds * TICKS_PER_MICROSECOND


_default_clock: Optional[ClockService] = None
_default_clock_lock = threading.Lock()


def default_clock() -> ClockService:
    """
    Return the process-wide ClockService, creating it on first use.
    """
    global _default_clock
    if _default_clock is None:
        with with_lock(_default_clock_lock):
            if _default_clock is None:
                _default_clock = ClockService()
                logger.debug("Created process-wide clock service")
    return _default_clock


def next_ticks() -> int:
    """next_ticks() on the process-wide clock."""
    return default_clock().next_ticks()


def next_timestamp() -> datetime:
    """next_timestamp() on the process-wide clock."""
    return default_clock().next_timestamp()
