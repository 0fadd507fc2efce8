# Copyright (c) 2025 Joël Krügel
# License: GPL-3.0
# See LICENSE file in the project root for details.

import threading
import time
import math

from .settings import settings
from .errors import TooManyAttempts


class LoginThrottle:
    """Counts consecutive failed logins per identity and locks it for a cooldown.

    Failures only add up inside ``window_seconds`` from the first one; an
    older count starts over. State lives in process memory, which is enough
    for the single-instance deployment this service targets.
    """

    def __init__(self, max_attempts: int = None, lock_seconds: int = None, window_seconds: int = None,
                 clock=time.monotonic):
        self.max_attempts = max_attempts or settings.LOGIN_MAX_ATTEMPTS
        self.lock_seconds = lock_seconds or settings.LOGIN_LOCK_SECONDS
        self.window_seconds = window_seconds or settings.LOGIN_ATTEMPT_WINDOW_SECONDS
        self.clock = clock
        self._failures = {}  # key -> (count, first failure time)
        self._locked_until = {}
        self._last_purge = None
        self._lock = threading.Lock()

    @staticmethod
    def _key(identity: str) -> str:
        return (identity or "").strip().lower()

    def _purge(self, now: float) -> None:
        # Drop aged counters and expired locks, at most once per window / Veraltete Einträge entfernen
        if self._last_purge is not None and now - self._last_purge < self.window_seconds:
            return
        self._last_purge = now
        for key, until in list(self._locked_until.items()):
            if until <= now:
                del self._locked_until[key]
                self._failures.pop(key, None)
        for key, (_, first) in list(self._failures.items()):
            if key not in self._locked_until and now - first >= self.window_seconds:
                del self._failures[key]

    def check(self, identity: str) -> None:
        # Raise TooManyAttempts while the identity is locked / TooManyAttempts solange gesperrt
        key = self._key(identity)
        with self._lock:
            until = self._locked_until.get(key)
            if until is None:
                return
            remaining = until - self.clock()
            if remaining <= 0:
                del self._locked_until[key]
                self._failures.pop(key, None)
                return
        raise TooManyAttempts(max(1, math.ceil(remaining)))

    def record_failure(self, identity: str) -> bool:
        """Register a failed attempt; return True if it locked the identity."""
        key = self._key(identity)
        with self._lock:
            now = self.clock()
            self._purge(now)
            count, first = self._failures.get(key, (0, now))
            if now - first >= self.window_seconds:
                count, first = 0, now
            count += 1
            self._failures[key] = (count, first)
            if count >= self.max_attempts:
                self._locked_until[key] = now + self.lock_seconds
                return True
            return False

    def record_success(self, identity: str) -> None:
        key = self._key(identity)
        with self._lock:
            self._failures.pop(key, None)
            self._locked_until.pop(key, None)

    def reset(self) -> None:
        with self._lock:
            self._failures.clear()
            self._locked_until.clear()
            self._last_purge = None


login_throttle = LoginThrottle()
