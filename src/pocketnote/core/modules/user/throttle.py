import time
from collections import deque
from collections.abc import Callable


class LoginThrottle:
    """Counts failed logins per username inside a sliding time window."""

    def __init__(self, max_attempts: int, window_seconds: float, clock: Callable[[], float] = time.monotonic) -> None:
        self._max_attempts = max_attempts
        self._window_seconds = window_seconds
        self._clock = clock
        self._failures: dict[str, deque[float]] = {}

    def is_limited(self, username: str) -> bool:
        failures = self._failures.get(username)
        if failures is None:
            return False
        self._expire(failures)
        if not failures:
            del self._failures[username]
            return False
        return len(failures) >= self._max_attempts

    def record_failure(self, username: str) -> None:
        failures = self._failures.setdefault(username, deque())
        self._expire(failures)
        failures.append(self._clock())

    def reset(self, username: str) -> None:
        self._failures.pop(username, None)

    def _expire(self, failures: deque[float]) -> None:
        cutoff = self._clock() - self._window_seconds
        while failures and failures[0] <= cutoff:
            failures.popleft()
