import threading
import time
from enum import Enum
from typing import Callable, Optional, Tuple

from ..config import POLL_INTERVAL_MS
from ..utils.logger import logger
from .models import UsageInterval

ActiveValue = Tuple[Optional[str], Optional[str]]


class TrackerState(Enum):
    IDLE = "idle"
    TRACKING = "tracking"


class ActivityTracker:
    """
    Polls the active (url, domain) and turns tab switches into usage intervals.

    Each tick either opens the first interval, leaves the open one alone, or
    closes it and hands it to on_interval before opening the next. Ticks with
    no active url and no active domain change nothing; an open interval stays
    as it is until activity resumes.
    """

    def __init__(
        self,
        get_active: Callable[[], ActiveValue],
        on_interval: Callable[[UsageInterval], object],
        poll_interval_ms: int = POLL_INTERVAL_MS,
        clock: Callable[[], float] = time.time,
    ):
        if poll_interval_ms <= 0:
            raise ValueError("poll_interval_ms must be positive")
        self.get_active = get_active
        self.on_interval = on_interval
        self.poll_interval_ms = poll_interval_ms
        self.clock = clock
        self._current: Optional[UsageInterval] = None
        self._thread = None
        self._stop_event = threading.Event()

    @property
    def current_interval(self) -> Optional[UsageInterval]:
        return self._current

    @property
    def state(self) -> TrackerState:
        return TrackerState.IDLE if self._current is None else TrackerState.TRACKING

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def tick(self) -> Optional[UsageInterval]:
        """
        Run one polling step.

        Returns:
            The interval closed on this tick, or None.
        """
        url, domain = self.get_active()
        if not url and not domain:
            return None

        now = self.clock()
        if self._current is None:
            self._current = UsageInterval(url=url, domain=domain, start_time=now)
            logger.debug("Started tracking %s", domain)
            return None

        if url == self._current.url:
            return None

        closed = self._current.closed_at(now)
        self._current = UsageInterval(url=url, domain=domain, start_time=now)
        self.on_interval(closed)
        return closed

    def start(self):
        if self.running:
            logger.warning("Activity tracker is already running")
            return
        self._stop_event.clear()
        self._thread = threading.Thread(target=self._loop, name="activity-tracker", daemon=True)
        self._thread.start()
        logger.info("Activity tracker started (interval: %s ms)", self.poll_interval_ms)

    def stop(self, timeout: float = 5.0):
        """Stop polling. The interval still open is dropped, not reported."""
        self._stop_event.set()
        if self._thread and self._thread.is_alive():
            self._thread.join(timeout=timeout)
        self._thread = None
        logger.info("Activity tracker stopped")

    def _loop(self):
        period = self.poll_interval_ms / 1000.0
        while not self._stop_event.wait(timeout=period):
            try:
                self.tick()
            except Exception as exc:
                # A bad read or a broken callback must not kill the timer
                logger.error("Activity tracker tick failed: %s", exc, exc_info=True)
