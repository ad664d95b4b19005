# tests/unit/runtime/test_runtime_concurrency.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

import threading
from unittest.mock import MagicMock

import pytest

from corekit.runtime.concurrency import AtomicInteger, get_lock, with_lock


def test_get_lock_returns_unheld_lock():
    lock = get_lock()
    assert not lock.locked()
    assert get_lock() is not lock


def test_with_lock_holds_for_block_only():
    lock = MagicMock()
    with with_lock(lock):
        lock.acquire.assert_called_once()
        lock.release.assert_not_called()
    lock.release.assert_called_once()


def test_with_lock_releases_when_block_raises():
    """The error propagates and a real lock is free again afterwards."""
    lock = get_lock()
    with pytest.raises(ValueError, match="cas failed"):
        with with_lock(lock):
            assert lock.locked()
            raise ValueError("cas failed")
    assert not lock.locked()


def test_atomic_integer_load():
    assert AtomicInteger().load() == 0
    assert AtomicInteger(42).load() == 42


def test_compare_and_swap_succeeds_on_expected_value():
    cell = AtomicInteger(5)
    assert cell.compare_and_swap(5, 6) is True
    assert cell.load() == 6


def test_compare_and_swap_fails_on_stale_value():
    cell = AtomicInteger(5)
    assert cell.compare_and_swap(4, 100) is False
    assert cell.load() == 5


def test_concurrent_increments_via_cas_loop():
    """Every CAS-loop increment from every thread lands exactly once."""
    cell = AtomicInteger(0)
    per_thread = 500
    thread_count = 8

    def increment():
        for _ in range(per_thread):
            while True:
                current = cell.load()
                if cell.compare_and_swap(current, current + 1):
                    break

    threads = [threading.Thread(target=increment) for _ in range(thread_count)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert cell.load() == per_thread * thread_count


def test_repr():
    assert repr(AtomicInteger(3)) == "AtomicInteger(3)"
