"""Single-slot delayed callbacks used to debounce history capture.

A timer holds at most one pending callback.  Scheduling again replaces the
pending one (last write wins); ``cancel()`` drops it.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import Callable, Protocol

from apscheduler.jobstores.base import JobLookupError
from apscheduler.schedulers.background import BackgroundScheduler

logger = logging.getLogger(__name__)

Callback = Callable[[], None]


class Timer(Protocol):
    def schedule(self, delay: float, callback: Callback) -> None: ...

    def cancel(self) -> None: ...

    @property
    def pending(self) -> bool: ...


class ManualTimer:
    """Deterministic timer driven by ``advance()``; no threads involved."""

    def __init__(self) -> None:
        self._now = 0.0
        self._due: float | None = None
        self._callback: Callback | None = None

    @property
    def now(self) -> float:
        return self._now

    @property
    def pending(self) -> bool:
        return self._callback is not None

    def schedule(self, delay: float, callback: Callback) -> None:
        self._due = self._now + delay
        self._callback = callback

    def cancel(self) -> None:
        self._due = None
        self._callback = None

    def advance(self, seconds: float) -> None:
        """Move the clock forward, firing the pending callback if it comes due."""
        self._now += seconds
        if self._callback is not None and self._due is not None and self._now >= self._due:
            self.fire()

    def fire(self) -> None:
        """Run the pending callback now, regardless of its due time."""
        callback = self._callback
        self.cancel()
        if callback is not None:
            callback()


class SchedulerTimer:
    """APScheduler-backed timer: one ``date`` job under a fixed id.

    A capture may still be running when the next one comes due, so two
    instances may overlap; late runs are never dropped.

    Usage:
        timer = SchedulerTimer()
        timer.schedule(1.0, capture)
        ...
        timer.shutdown()
    """

    JOB_ID = "history_capture"

    def __init__(self, scheduler: BackgroundScheduler | None = None) -> None:
        self._scheduler = scheduler or BackgroundScheduler()
        if not self._scheduler.running:
            self._scheduler.start()

    @property
    def pending(self) -> bool:
        return self._scheduler.get_job(self.JOB_ID) is not None

    def schedule(self, delay: float, callback: Callback) -> None:
        self._scheduler.add_job(
            callback,
            "date",
            run_date=datetime.now() + timedelta(seconds=delay),
            id=self.JOB_ID,
            replace_existing=True,
            max_instances=2,
            coalesce=True,
            misfire_grace_time=None,
        )

    def cancel(self) -> None:
        try:
            self._scheduler.remove_job(self.JOB_ID)
        except JobLookupError:
            logger.debug("No capture job to cancel")

    def shutdown(self) -> None:
        self._scheduler.shutdown(wait=False)
        logger.debug("Capture scheduler stopped")
