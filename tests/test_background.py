"""
Tests for the verification sweeper and the resend rate limiter.
"""

from core.rate_limit import FixedWindowRateLimiter
from services.scheduler import SWEEP_JOB_ID, VerificationSweeper


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


class TestVerificationSweeper:
    def test_start_registers_interval_job(self):
        sweeper = VerificationSweeper(interval_seconds=3600, job=lambda: None)
        sweeper.start()
        try:
            assert sweeper.running
            job = sweeper._scheduler.get_job(SWEEP_JOB_ID)
            assert job is not None
            assert job.trigger.interval.total_seconds() == 3600
        finally:
            sweeper.stop()

        assert not sweeper.running

    def test_start_is_idempotent_and_stop_is_safe(self):
        sweeper = VerificationSweeper(interval_seconds=60, job=lambda: None)
        sweeper.stop()
        sweeper.start()
        scheduler = sweeper._scheduler
        sweeper.start()
        assert sweeper._scheduler is scheduler
        sweeper.stop()
        sweeper.stop()
        assert not sweeper.running


class TestFixedWindowRateLimiter:
    def test_allows_up_to_limit_per_window(self):
        clock = FakeClock()
        limiter = FixedWindowRateLimiter(limit=5, window_seconds=900, clock=clock)

        assert all(limiter.hit("1.2.3.4") for _ in range(5))
        assert limiter.hit("1.2.3.4") is False
        assert limiter.hit("5.6.7.8") is True

    def test_window_resets_after_expiry(self):
        clock = FakeClock()
        limiter = FixedWindowRateLimiter(limit=2, window_seconds=900, clock=clock)
        limiter.hit("k")
        limiter.hit("k")
        assert limiter.hit("k") is False

        clock.now += 899
        assert limiter.hit("k") is False
        clock.now += 1
        assert limiter.hit("k") is True

    def test_reset_clears_counters(self):
        limiter = FixedWindowRateLimiter(limit=1, window_seconds=900, clock=FakeClock())
        limiter.hit("k")
        limiter.reset()
        assert limiter.hit("k") is True
