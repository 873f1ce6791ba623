import argparse
import threading
from typing import Optional

from .api.usage_api import UsageReporter
from .config import (
    APP_NAME,
    APP_VERSION,
    DEFAULT_BACKEND_PORT,
    DISCOVERY_END_PORT,
    DISCOVERY_START_PORT,
    LOG_LEVEL,
    LOG_LEVELS,
    POLL_INTERVAL_MS,
    PROBE_TIMEOUT_SECONDS,
)
from .core.activity_tracker import ActivityTracker
from .core.backend_state import ResolvedBackend
from .core.models import PortRange, ServiceIdentity
from .utils.active_tab import ActiveTabStore
from .utils.logger import logger, set_console_level
from .utils.service_discovery import DEFAULT_IDENTITY, DEFAULT_PORT_RANGE, find_service_port


class Agent:
    """Wires discovery, the active tab store, the tracker and the reporter together."""

    def __init__(
        self,
        port_range: PortRange = DEFAULT_PORT_RANGE,
        identity: ServiceIdentity = DEFAULT_IDENTITY,
        poll_interval_ms: int = POLL_INTERVAL_MS,
        probe_timeout: float = PROBE_TIMEOUT_SECONDS,
        default_port: int = DEFAULT_BACKEND_PORT,
        session=None,
        clock=None,
    ):
        self.port_range = port_range
        self.identity = identity
        self.probe_timeout = probe_timeout
        # None means module-level requests, so discovery and report threads share no Session
        self.session = session
        self.backend = ResolvedBackend(default_port)
        self.tabs = ActiveTabStore()
        self.reporter = UsageReporter(self.backend, session=self.session)
        tracker_kwargs = {"clock": clock} if clock is not None else {}
        self.tracker = ActivityTracker(
            get_active=self.tabs.get_active,
            on_interval=self.reporter.report,
            poll_interval_ms=poll_interval_ms,
            **tracker_kwargs,
        )
        self._discovery_thread = None

    def discover_backend(self) -> Optional[int]:
        port = find_service_port(
            self.port_range,
            identity=self.identity,
            timeout=self.probe_timeout,
            session=self.session,
        )
        if port:
            self.backend.set_port(port)
            logger.info("Found backend port %s", port)
        else:
            logger.info("No backend found, keeping port %s", self.backend.port)
        return port

    def discover_backend_async(self) -> threading.Thread:
        thread = threading.Thread(target=self._discover_safely, name="backend-discovery", daemon=True)
        self._discovery_thread = thread
        thread.start()
        return thread

    def _discover_safely(self):
        try:
            self.discover_backend()
        except Exception as exc:
            logger.error("Backend discovery crashed: %s", exc, exc_info=True)

    def start(self, discover: bool = True):
        logger.info("%s %s starting (backend port %s)", APP_NAME, APP_VERSION, self.backend.port)
        if discover:
            self.discover_backend_async()
        self.tracker.start()

    def stop(self):
        self.tracker.stop()
        if self._discovery_thread and self._discovery_thread.is_alive():
            self._discovery_thread.join(timeout=1.0)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="shidu-web-tracker",
        description="Track time spent per website and report it to the local ShiduWatcher service.",
    )
    parser.add_argument("--start-port", type=int, default=DISCOVERY_START_PORT,
                        help=f"first port to probe (default: {DISCOVERY_START_PORT})")
    parser.add_argument("--end-port", type=int, default=DISCOVERY_END_PORT,
                        help=f"last port to probe (default: {DISCOVERY_END_PORT})")
    parser.add_argument("--poll-interval", type=int, default=POLL_INTERVAL_MS, metavar="MS",
                        help=f"activity check period in ms (default: {POLL_INTERVAL_MS})")
    parser.add_argument("--log-level", default=LOG_LEVEL, type=str.upper, choices=LOG_LEVELS,
                        help=f"console log level (default: {LOG_LEVEL})")
    parser.add_argument("--url", help="initial active URL")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    set_console_level(args.log_level)

    try:
        port_range = PortRange(args.start_port, args.end_port)
    except ValueError as exc:
        logger.error("%s", exc)
        return 2

    agent = Agent(port_range=port_range, poll_interval_ms=args.poll_interval)
    if args.url:
        agent.tabs.set_active_tab(args.url)

    agent.start()
    stop_event = threading.Event()
    try:
        while not stop_event.wait(timeout=1.0):
            pass
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down")
    finally:
        agent.stop()
    return 0
