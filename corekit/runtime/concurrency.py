# corekit/runtime/concurrency.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

import threading


class _HeldLock:
    """
    Block-scoped ownership of a lock: acquired on entry, released on exit
    whether or not the block raised.
    """

    def __init__(self, lock: threading.Lock) -> None:
        self._lock = lock

    def __enter__(self) -> None:
        self._lock.acquire()

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self._lock.release()


def get_lock() -> threading.Lock:
    """
    Create the lock guarding one shared cell or table. Critical sections in
    corekit never re-enter, so a plain non-reentrant lock is enough.
    """
    return threading.Lock()


def with_lock(lock: threading.Lock) -> _HeldLock:
    """Hold 'lock' for the duration of a with-block."""
    return _HeldLock(lock)


class AtomicInteger:
    """
    A shared integer cell supporting compare-and-swap.

    CPython has no hardware CAS, so the swap itself is a critical section of a
    comparison and an assignment. Callers build lock-free style retry loops on
    top of load() and compare_and_swap(): nobody holds the lock while computing
    the next value, only while publishing it.
    """

    def __init__(self, value: int = 0) -> None:
        self._value = value
        self._lock = get_lock()

    def load(self) -> int:
        """
        Read the current value. A single attribute read is atomic under the GIL.
        """
        return self._value

    def compare_and_swap(self, expected: int, new: int) -> bool:
        """
        Replace the value with 'new' only if it still equals 'expected'.

        :return: True if the swap happened, False if another writer got there first.
        """
        with with_lock(self._lock):
            if self._value != expected:
                return False
            self._value = new
            return True

    def __repr__(self) -> str:
        return f"AtomicInteger({self._value})"
