from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime, timezone


@dataclass(frozen=True, slots=True)
class PortRange:
    """Inclusive range of TCP ports scanned during discovery."""

    start_port: int
    end_port: int

    def __post_init__(self):
        if not (0 < self.start_port <= self.end_port <= 65535):
            raise ValueError(f"Invalid port range [{self.start_port}, {self.end_port}]")

    def __iter__(self):
        return iter(range(self.start_port, self.end_port + 1))

    def __len__(self):
        return self.end_port - self.start_port + 1


@dataclass(frozen=True, slots=True)
class ServiceIdentity:
    """The name/status pair a backend must answer with on /control/status."""

    name: str
    status: str

    def matches(self, data) -> bool:
        if not isinstance(data, dict):
            return False
        return data.get("name") == self.name and data.get("status") == self.status


@dataclass(frozen=True, slots=True)
class UsageInterval:
    """
    One contiguous period during which a single (url, domain) pair was active.

    Attributes:
        url: Active URL.
        domain: Domain derived from the URL.
        start_time: POSIX timestamp (seconds) the interval was opened.
        duration_ms: 0 while open; set once when the interval is closed.
    """

    url: str | None
    domain: str | None
    start_time: float
    duration_ms: int = 0

    def closed_at(self, now: float) -> "UsageInterval":
        duration_ms = max(0, int(round((now - self.start_time) * 1000)))
        return replace(self, duration_ms=duration_ms)

    @property
    def start_datetime(self) -> datetime:
        return datetime.fromtimestamp(self.start_time, tz=timezone.utc)
