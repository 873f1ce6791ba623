from __future__ import annotations

import threading
from typing import Optional, Tuple
from urllib.parse import urlparse

from .logger import logger


def domain_from_url(url: str) -> Optional[str]:
    """Last two labels of the hostname, e.g. https://mail.google.com/x -> google.com."""
    try:
        hostname = urlparse(url).hostname
    except ValueError:
        return None
    if not hostname:
        return None
    return ".".join(hostname.split(".")[-2:])


class ActiveTabStore:
    """
    Holds the URL and domain of the browser tab that currently has focus.

    The browser integration calls set_active_tab() whenever the active tab
    changes; the tracker polls get_active() on every tick.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._url: Optional[str] = None
        self._domain: Optional[str] = None

    def set_active_tab(self, url: Optional[str]) -> None:
        if not url:
            return
        domain = domain_from_url(url)
        with self._lock:
            self._url = url
            self._domain = domain
        logger.debug("Tab updated %s (%s)", url, domain)

    def clear(self) -> None:
        with self._lock:
            self._url = None
            self._domain = None

    def get_active(self) -> Tuple[Optional[str], Optional[str]]:
        with self._lock:
            return self._url, self._domain

    @property
    def active_url(self) -> Optional[str]:
        return self.get_active()[0]

    @property
    def active_domain(self) -> Optional[str]:
        return self.get_active()[1]
