"""
Test suite for SlidingWindowRateLimiter.

Uses a controllable clock so window expiry is deterministic.

System role: Verification of per-user admission control
"""

import threading
from concurrent.futures import ThreadPoolExecutor

import pytest

from dsa_assistant.configs.rate_limit import RateLimitSettings
from dsa_assistant.core.rate_limiter import SlidingWindowRateLimiter


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


def make_limiter(clock, limit: int = 3, window: int = 60, enabled: bool = True):
    settings = RateLimitSettings(
        enabled=enabled,
        requests_per_minute=limit,
        window_size_seconds=window,
    )
    return SlidingWindowRateLimiter(settings, clock=clock)


class TestCheckAndRecord:
    """Test suite for check_and_record()."""

    def test_first_request_is_allowed(self, clock: FakeClock) -> None:
        # Arrange
        limiter = make_limiter(clock, limit=3, window=60)

        # Act
        info = limiter.check_and_record("alice")

        # Assert
        assert info.allowed is True
        assert info.remaining_requests == 2
        assert info.limit == 3
        assert info.reset_time_seconds == 60

    def test_request_over_limit_is_denied(self, clock: FakeClock) -> None:
        """Test the (L+1)th request inside the window is rejected."""
        # Arrange
        limiter = make_limiter(clock, limit=3, window=60)
        for _ in range(3):
            assert limiter.check_and_record("alice").allowed

        # Act
        clock.advance(10)
        info = limiter.check_and_record("alice")

        # Assert
        assert info.allowed is False
        assert info.remaining_requests == 0
        assert info.reset_time_seconds == 50

    def test_denied_request_is_not_recorded(self, clock: FakeClock) -> None:
        """Test rejections do not extend the window."""
        # Arrange
        limiter = make_limiter(clock, limit=1, window=60)
        limiter.check_and_record("alice")
        clock.advance(30)
        assert not limiter.check_and_record("alice").allowed

        # Act
        clock.advance(30)
        info = limiter.check_and_record("alice")

        # Assert
        assert info.allowed is True

    def test_window_expiry_restores_quota(self, clock: FakeClock) -> None:
        """Test waiting the full window admits the next request with L-1 remaining."""
        # Arrange
        limiter = make_limiter(clock, limit=3, window=60)
        for _ in range(3):
            limiter.check_and_record("alice")
        assert not limiter.check_and_record("alice").allowed

        # Act
        clock.advance(60)
        info = limiter.check_and_record("alice")

        # Assert
        assert info.allowed is True
        assert info.remaining_requests == 2

    def test_window_slides_per_request(self, clock: FakeClock) -> None:
        """Test only requests older than the window are forgotten."""
        # Arrange
        limiter = make_limiter(clock, limit=2, window=60)
        limiter.check_and_record("alice")
        clock.advance(40)
        limiter.check_and_record("alice")

        # Act
        clock.advance(25)
        info = limiter.check_and_record("alice")

        # Assert: first request expired, second still counts
        assert info.allowed is True
        assert info.remaining_requests == 0
        assert info.reset_time_seconds == 35

    def test_users_are_independent(self, clock: FakeClock) -> None:
        # Arrange
        limiter = make_limiter(clock, limit=1)
        limiter.check_and_record("alice")

        # Act
        info = limiter.check_and_record("bob")

        # Assert
        assert info.allowed is True
        assert not limiter.check_and_record("alice").allowed

    def test_disabled_limiter_always_allows(self, clock: FakeClock) -> None:
        # Arrange
        limiter = make_limiter(clock, limit=1, enabled=False)

        # Act
        results = [limiter.check_and_record("alice") for _ in range(5)]

        # Assert
        assert all(info.allowed for info in results)
        assert all(info.remaining_requests == 1 for info in results)
        assert all(info.reset_time_seconds == 0 for info in results)

    def test_concurrent_requests_never_exceed_limit(self) -> None:
        """Test racing threads for one user admit exactly `limit` requests."""
        # Arrange
        limit = 25
        limiter = SlidingWindowRateLimiter(
            RateLimitSettings(requests_per_minute=limit, window_size_seconds=60),
        )
        barrier = threading.Barrier(50)

        def hit():
            barrier.wait()
            return limiter.check_and_record("alice").allowed

        # Act
        with ThreadPoolExecutor(max_workers=50) as pool:
            results = list(pool.map(lambda _: hit(), range(50)))

        # Assert
        assert sum(results) == limit


class TestStatusAndReset:
    """Test suite for get_status(), reset() and clear_all()."""

    def test_status_for_unknown_user(self, clock: FakeClock) -> None:
        limiter = make_limiter(clock, limit=3)

        info = limiter.get_status("nobody")

        assert info.allowed is True
        assert info.remaining_requests == 3
        assert info.reset_time_seconds == 0

    def test_status_does_not_consume_quota(self, clock: FakeClock) -> None:
        # Arrange
        limiter = make_limiter(clock, limit=2)
        limiter.check_and_record("alice")

        # Act
        first = limiter.get_status("alice")
        second = limiter.get_status("alice")

        # Assert
        assert first.remaining_requests == second.remaining_requests == 1

    def test_status_reports_exhausted_window(self, clock: FakeClock) -> None:
        limiter = make_limiter(clock, limit=1)
        limiter.check_and_record("alice")

        info = limiter.get_status("alice")

        assert info.allowed is False
        assert info.remaining_requests == 0

    def test_reset_clears_one_user(self, clock: FakeClock) -> None:
        # Arrange
        limiter = make_limiter(clock, limit=1)
        limiter.check_and_record("alice")
        limiter.check_and_record("bob")

        # Act
        limiter.reset("alice")

        # Assert
        assert limiter.check_and_record("alice").allowed
        assert not limiter.check_and_record("bob").allowed

    def test_clear_all_clears_every_user(self, clock: FakeClock) -> None:
        # Arrange
        limiter = make_limiter(clock, limit=1)
        limiter.check_and_record("alice")
        limiter.check_and_record("bob")

        # Act
        limiter.clear_all()

        # Assert
        assert limiter.check_and_record("alice").allowed
        assert limiter.check_and_record("bob").allowed
