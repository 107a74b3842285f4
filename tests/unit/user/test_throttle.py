"""Tests for the failed-login throttle."""

from pocketnote.core.modules.user.throttle import LoginThrottle


class FakeClock:
    def __init__(self) -> None:
        self.value = 1000.0

    def __call__(self) -> float:
        return self.value


def test_limits_after_max_failures():
    throttle = LoginThrottle(max_attempts=3, window_seconds=60, clock=FakeClock())

    for _ in range(2):
        throttle.record_failure("alice")
    assert not throttle.is_limited("alice")

    throttle.record_failure("alice")
    assert throttle.is_limited("alice")


def test_usernames_are_independent():
    throttle = LoginThrottle(max_attempts=1, window_seconds=60, clock=FakeClock())

    throttle.record_failure("alice")

    assert throttle.is_limited("alice")
    assert not throttle.is_limited("bob")


def test_failures_expire_after_window():
    clock = FakeClock()
    throttle = LoginThrottle(max_attempts=2, window_seconds=60, clock=clock)
    throttle.record_failure("alice")
    throttle.record_failure("alice")

    clock.value += 61

    assert not throttle.is_limited("alice")


def test_reset_clears_failures():
    throttle = LoginThrottle(max_attempts=1, window_seconds=60, clock=FakeClock())
    throttle.record_failure("alice")

    throttle.reset("alice")

    assert not throttle.is_limited("alice")
