import os
import logging

APP_NAME = "ShiduWebTracker"
APP_VERSION = "1.0.0"

_log = logging.getLogger(APP_NAME)


def _env_int(name, default):
    value = os.getenv(name)
    if value is None or value == "":
        return default
    try:
        return int(value)
    except ValueError:
        _log.warning("Ignoring invalid %s=%r, using %s", name, value, default)
        return default


def _env_float(name, default):
    value = os.getenv(name)
    if value is None or value == "":
        return default
    try:
        return float(value)
    except ValueError:
        _log.warning("Ignoring invalid %s=%r, using %s", name, value, default)
        return default


# Backend (ShiduWatcher) location
BACKEND_HOST = os.getenv("SHIDU_BACKEND_HOST") or "localhost"
DEFAULT_BACKEND_PORT = _env_int("SHIDU_BACKEND_PORT", 1893)

# Endpoints
STATUS_PATH = "/control/status"
USAGE_REPORT_PATH = "/usagereport/webpage-usage-report"

# Discovery: ports are scanned in ascending order, inclusive on both ends
DISCOVERY_START_PORT = _env_int("SHIDU_START_PORT", 1893)
DISCOVERY_END_PORT = _env_int("SHIDU_END_PORT", 1949)

# Expected /control/status body of the backend
SERVICE_NAME = os.getenv("SHIDU_SERVICE_NAME") or "ShiduWatcher"
SERVICE_STATUS = os.getenv("SHIDU_SERVICE_STATUS") or "running"

# Timeouts
PROBE_TIMEOUT_SECONDS = _env_float("SHIDU_PROBE_TIMEOUT", 0.3)  # full scan stays under ~20s
REPORT_TIMEOUT_SECONDS = _env_float("SHIDU_REPORT_TIMEOUT", 5.0)

# Activity tracking
POLL_INTERVAL_MS = _env_int("SHIDU_POLL_INTERVAL_MS", 1000)  # check every second by default

# Logging
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
LOG_LEVEL = (os.getenv("SHIDU_LOG_LEVEL") or "INFO").upper()
if LOG_LEVEL not in LOG_LEVELS:
    _log.warning("Ignoring invalid SHIDU_LOG_LEVEL=%r, using INFO", LOG_LEVEL)
    LOG_LEVEL = "INFO"
LOG_DIR = os.getenv("SHIDU_LOG_DIR")  # None = per-user app data dir
LOG_FILE_NAME = "app.log"

DEFAULT_HEADERS = {
    "accept": "application/json, text/plain, */*",
    "user-agent": f"{APP_NAME}/{APP_VERSION}",
}
