"""
Usage report API for the ShiduWatcher backend
"""
import threading
from typing import Any, Dict, Optional

import requests

from ..config import DEFAULT_HEADERS, REPORT_TIMEOUT_SECONDS, USAGE_REPORT_PATH
from ..core.backend_state import ResolvedBackend
from ..core.models import UsageInterval
from ..utils.logger import logger
from ..utils.time_span import format_time_span


def to_iso_timestamp(interval: UsageInterval) -> str:
    """ISO-8601 UTC with millisecond precision, e.g. 2024-05-01T09:30:00.250Z"""
    return interval.start_datetime.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class UsageReporter:
    """
    Sends closed usage intervals to the backend.

    Reporting is fire-and-forget: each report runs in its own daemon thread
    and any failure is logged there, never raised to the caller.
    """

    def __init__(self, backend: ResolvedBackend, session=None, timeout: float = REPORT_TIMEOUT_SECONDS):
        """
        Args:
            backend: Shared backend handle; its port is read when a report is sent
            session: Optional requests.Session (module-level requests is used if None)
            timeout: Per-request timeout in seconds
        """
        self.backend = backend
        self.session = session
        self.timeout = timeout

    @property
    def report_url(self) -> str:
        return self.backend.url_for(USAGE_REPORT_PATH)

    def build_payload(self, interval: UsageInterval) -> Dict[str, Any]:
        return {
            "url": interval.url,
            "domain": interval.domain,
            "startTime": to_iso_timestamp(interval),
            # TimeSpan (HH:mm:ss format)
            "duration": format_time_span(interval.duration_ms),
        }

    def report(self, interval: UsageInterval) -> Optional[threading.Thread]:
        """
        Submit interval in the background and return immediately.

        Returns:
            The worker thread, so callers that care (tests, shutdown) can join it.
        """
        logger.info("Reporting %s for %s ms", interval.domain, interval.duration_ms)
        try:
            payload = self.build_payload(interval)
        except ValueError as exc:
            logger.error("Failed to report usage: %s", exc)
            return None

        thread = threading.Thread(
            target=self._send_detached,
            args=(payload,),
            name="usage-report",
            daemon=True,
        )
        thread.start()
        return thread

    def send(self, interval: UsageInterval) -> bool:
        """Synchronous variant of report(). Returns True if the backend accepted it."""
        return self._send_detached(self.build_payload(interval))

    def _send_detached(self, payload: Dict[str, Any]) -> bool:
        http = self.session or requests
        url = self.report_url
        try:
            resp = http.post(url, json=payload, headers=DEFAULT_HEADERS, timeout=self.timeout)
            resp.raise_for_status()
        except requests.RequestException as exc:
            logger.error("Failed to report usage to %s: %s", url, exc)
            return False
        except Exception as exc:
            logger.error("Failed to report usage to %s: %s", url, exc, exc_info=True)
            return False
        logger.debug("Usage report accepted (%s) for %s", resp.status_code, payload.get("domain"))
        return True
