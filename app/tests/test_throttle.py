# Copyright (c) 2025 Joël Krügel
# License: GPL-3.0
# See LICENSE file in the project root for details.

import pytest

from app.core.errors import TooManyAttempts
from app.core.throttle import LoginThrottle


@pytest.fixture
def clock():
    return [0.0]


@pytest.fixture
def throttle(clock):
    return LoginThrottle(max_attempts=3, lock_seconds=30, window_seconds=60, clock=lambda: clock[0])


def test_locks_after_max_attempts(throttle):
    assert throttle.record_failure("bob") is False
    assert throttle.record_failure("bob") is False
    assert throttle.record_failure("bob") is True
    with pytest.raises(TooManyAttempts) as excinfo:
        throttle.check("bob")
    assert excinfo.value.status_code == 429
    assert excinfo.value.retry_after == 30


def test_identity_is_case_insensitive(throttle):
    for _ in range(3):
        throttle.record_failure("Bob")
    with pytest.raises(TooManyAttempts):
        throttle.check(" bob ")


def test_remaining_time_counts_down(throttle, clock):
    for _ in range(3):
        throttle.record_failure("bob")
    clock[0] = 20.5
    with pytest.raises(TooManyAttempts) as excinfo:
        throttle.check("bob")
    assert excinfo.value.retry_after == 10


def test_unlocks_after_cooldown(throttle, clock):
    for _ in range(3):
        throttle.record_failure("bob")
    clock[0] = 31
    throttle.check("bob")
    # Counter starts over after the lock / Zähler beginnt nach der Sperre neu
    assert throttle.record_failure("bob") is False


def test_success_clears_failures(throttle):
    throttle.record_failure("bob")
    throttle.record_failure("bob")
    throttle.record_success("bob")
    assert throttle.record_failure("bob") is False
    throttle.check("bob")


def test_failures_spread_over_window_do_not_lock(throttle, clock):
    throttle.record_failure("bob")
    throttle.record_failure("bob")
    clock[0] = 61
    # The earlier failures have aged out / Die früheren Fehlversuche sind verfallen
    assert throttle.record_failure("bob") is False
    assert throttle.record_failure("bob") is False
    throttle.check("bob")
    assert throttle.record_failure("bob") is True


def test_aged_entries_are_purged(throttle, clock):
    for name in ("ann", "ben", "cid"):
        throttle.record_failure(name)
    clock[0] = 100
    throttle.record_failure("dora")
    assert set(throttle._failures) == {"dora"}
