"""
Runtime package for concurrency primitives and the monotonic clock.

Architecture:
- AtomicInteger provides the compare-and-swap cell
- ClockService builds strictly increasing ticks on top of it
- Wall clocks are pluggable through the WallClock protocol

Cross-cutting:
- Thread safety without blocking on other callers' computation
- Lazy process-wide default instance
"""

from .clock import (
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
from .concurrency import AtomicInteger, get_lock, with_lock

__all__ = [
    "AtomicInteger",
    "ClockService",
    "ManualWallClock",
    "SystemWallClock",
    "WallClock",
    "datetime_to_ticks",
    "default_clock",
    "get_lock",
    "next_ticks",
    "next_timestamp",
    "ticks_to_datetime",
    "with_lock",
]
