"""
Sliding window rate limiter.

Keeps, per user, the timestamps of admitted requests inside the trailing
window. Each user's window is guarded by its own lock so the
prune / count / append sequence is atomic; different users never contend.

Dependencies: threading, dsa_assistant.configs
System role: Admission control in front of the Q&A pipeline
"""

import logging
import math
import threading
import time
from collections import deque
from collections.abc import Callable
from dataclasses import dataclass, field

from dsa_assistant.configs.rate_limit import RateLimitSettings
from dsa_assistant.models.rate_limit import RateLimitInfo

logger = logging.getLogger(__name__)


@dataclass
class _RateWindow:
    """Admitted request instants for one user, oldest first."""

    timestamps: deque[float] = field(default_factory=deque)
    lock: threading.Lock = field(default_factory=threading.Lock)


class SlidingWindowRateLimiter:
    """
    Per-user sliding window admission control.

    Windows are created lazily on a user's first request and live for the
    lifetime of the limiter instance.
    """

    def __init__(
        self,
        settings: RateLimitSettings,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """
        Initialize limiter.

        Args:
            settings: Limit, window size and enabled flag
            clock: Monotonic seconds source (injectable for tests)
        """
        self._enabled = settings.enabled
        self._limit = settings.requests_per_minute
        self._window_seconds = settings.window_size_seconds
        self._clock = clock
        self._windows: dict[str, _RateWindow] = {}
        self._windows_lock = threading.Lock()

    @property
    def limit(self) -> int:
        return self._limit

    @property
    def enabled(self) -> bool:
        return self._enabled

    def check_and_record(self, user_id: str) -> RateLimitInfo:
        """
        Decide whether a request from user_id is admitted, recording it if so.

        Args:
            user_id: Requesting user

        Returns:
            RateLimitInfo: Decision with remaining quota and seconds until reset
        """
        if not self._enabled:
            logger.debug(f"{__name__}:check_and_record - Rate limiting is disabled")
            return self._unlimited()

        window = self._get_window(user_id)
        with window.lock:
            now = self._clock()
            self._prune(window, now)
            request_count = len(window.timestamps)
            reset_seconds = self._reset_seconds(window, now)

            if request_count >= self._limit:
                logger.warning(
                    f"{__name__}:check_and_record - Rate limit exceeded for user {user_id}: "
                    f"{request_count} requests in window"
                )
                return RateLimitInfo(
                    allowed=False,
                    remaining_requests=0,
                    reset_time_seconds=reset_seconds,
                    limit=self._limit,
                )

            window.timestamps.append(now)
            if request_count == 0:
                reset_seconds = self._reset_seconds(window, now)

        logger.debug(
            f"{__name__}:check_and_record - user {user_id}: "
            f"{request_count + 1}/{self._limit} requests used"
        )
        return RateLimitInfo(
            allowed=True,
            remaining_requests=self._limit - request_count - 1,
            reset_time_seconds=reset_seconds,
            limit=self._limit,
        )

    def get_status(self, user_id: str) -> RateLimitInfo:
        """
        Report the user's current quota without recording a request.

        Args:
            user_id: User to inspect

        Returns:
            RateLimitInfo: allowed is True when another request would be admitted
        """
        if not self._enabled:
            return self._unlimited()

        with self._windows_lock:
            window = self._windows.get(user_id)
        if window is None:
            return RateLimitInfo(
                allowed=True,
                remaining_requests=self._limit,
                reset_time_seconds=0,
                limit=self._limit,
            )

        with window.lock:
            now = self._clock()
            self._prune(window, now)
            request_count = len(window.timestamps)
            reset_seconds = self._reset_seconds(window, now)

        return RateLimitInfo(
            allowed=request_count < self._limit,
            remaining_requests=max(0, self._limit - request_count),
            reset_time_seconds=reset_seconds,
            limit=self._limit,
        )

    def reset(self, user_id: str) -> None:
        """Forget all recorded requests for one user."""
        with self._windows_lock:
            self._windows.pop(user_id, None)
        logger.info(f"{__name__}:reset - Reset rate limit for user {user_id}")

    def clear_all(self) -> None:
        """Forget all recorded requests for every user."""
        with self._windows_lock:
            self._windows.clear()
        logger.info(f"{__name__}:clear_all - Cleared all rate limit data")

    def _get_window(self, user_id: str) -> _RateWindow:
        with self._windows_lock:
            window = self._windows.get(user_id)
            if window is None:
                window = _RateWindow()
                self._windows[user_id] = window
            return window

    def _prune(self, window: _RateWindow, now: float) -> None:
        # An entry exactly window_seconds old has left the window.
        window_start = now - self._window_seconds
        while window.timestamps and window.timestamps[0] <= window_start:
            window.timestamps.popleft()

    def _reset_seconds(self, window: _RateWindow, now: float) -> int:
        if not window.timestamps:
            return 0
        remaining = window.timestamps[0] + self._window_seconds - now
        return max(0, math.ceil(remaining))

    def _unlimited(self) -> RateLimitInfo:
        return RateLimitInfo(
            allowed=True,
            remaining_requests=self._limit,
            reset_time_seconds=0,
            limit=self._limit,
        )
