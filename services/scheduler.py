import logging

from apscheduler.schedulers.background import BackgroundScheduler

from core.config import settings
from services.otp_service import cleanup_expired_verifications

logger = logging.getLogger(__name__)

SWEEP_JOB_ID = "cleanup_expired_verifications"


class VerificationSweeper:
    """Owns the background scheduler that periodically removes expired codes."""

    def __init__(self, interval_seconds: int | None = None, job=cleanup_expired_verifications):
        self.interval_seconds = interval_seconds or settings.VERIFICATION_SWEEP_INTERVAL_SECONDS
        self.job = job
        self._scheduler: BackgroundScheduler | None = None

    @property
    def running(self) -> bool:
        return self._scheduler is not None and self._scheduler.running

    def start(self) -> None:
        if self.running:
            return
        sched = BackgroundScheduler(timezone="UTC")
        sched.add_job(
            self.job,
            "interval",
            seconds=self.interval_seconds,
            id=SWEEP_JOB_ID,
            replace_existing=True,
        )
        sched.start()
        self._scheduler = sched
        logger.info("Verification sweeper started (every %ss)", self.interval_seconds)

    def stop(self) -> None:
        if not self._scheduler:
            return
        if self._scheduler.running:
            self._scheduler.shutdown(wait=False)
        self._scheduler = None
        logger.info("Verification sweeper stopped")
