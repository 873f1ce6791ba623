import threading

from ..config import BACKEND_HOST, DEFAULT_BACKEND_PORT


class ResolvedBackend:
    """
    Process-wide handle on the backend port.

    Starts at the default port and is overwritten by each successful
    discovery. Readers always get a plain int snapshot.
    """

    def __init__(self, port: int = DEFAULT_BACKEND_PORT, host: str = BACKEND_HOST):
        self._lock = threading.Lock()
        self._port = int(port)
        self.host = host

    @property
    def port(self) -> int:
        with self._lock:
            return self._port

    def set_port(self, port: int) -> None:
        with self._lock:
            self._port = int(port)

    @property
    def base_url(self) -> str:
        return f"http://{self.host}:{self.port}"

    def url_for(self, path: str) -> str:
        return self.base_url + path

    def __repr__(self):
        return f"ResolvedBackend(host={self.host!r}, port={self.port})"
