from __future__ import annotations

from typing import Optional

import requests

from ..config import (
    BACKEND_HOST,
    DEFAULT_HEADERS,
    DISCOVERY_END_PORT,
    DISCOVERY_START_PORT,
    PROBE_TIMEOUT_SECONDS,
    SERVICE_NAME,
    SERVICE_STATUS,
    STATUS_PATH,
)
from ..core.models import PortRange, ServiceIdentity
from .logger import logger

DEFAULT_PORT_RANGE = PortRange(DISCOVERY_START_PORT, DISCOVERY_END_PORT)
DEFAULT_IDENTITY = ServiceIdentity(SERVICE_NAME, SERVICE_STATUS)


def status_url(port: int, host: str = BACKEND_HOST) -> str:
    return f"http://{host}:{port}{STATUS_PATH}"


def probe_port(
    port: int,
    identity: ServiceIdentity = DEFAULT_IDENTITY,
    timeout: float = PROBE_TIMEOUT_SECONDS,
    session=None,
) -> bool:
    """
    Health-check a single port.

    Returns True only when the port answers 2xx with a JSON object whose
    name and status equal the expected identity. Every failure is False.
    """
    http = session or requests
    url = status_url(port)
    try:
        resp = http.get(url, headers=DEFAULT_HEADERS, timeout=timeout)
    except requests.RequestException as exc:
        logger.debug("Probe %s failed: %s", url, exc)
        return False

    if not resp.ok:
        logger.debug("Probe %s returned HTTP %s", url, resp.status_code)
        return False

    try:
        data = resp.json()
    except (ValueError, RecursionError):
        logger.debug("Probe %s returned an unparseable body", url)
        return False

    if not identity.matches(data):
        logger.debug("Probe %s answered by another service: %r", url, data)
        return False
    return True


def find_service_port(
    port_range: PortRange = DEFAULT_PORT_RANGE,
    identity: ServiceIdentity = DEFAULT_IDENTITY,
    timeout: float = PROBE_TIMEOUT_SECONDS,
    session=None,
) -> Optional[int]:
    """
    Scan port_range in ascending order and return the first port whose
    /control/status matches identity, or None if the whole range is exhausted.
    """
    logger.debug(
        "Scanning ports %s-%s for %s (timeout %.2fs per port)",
        port_range.start_port, port_range.end_port, identity.name, timeout,
    )
    for port in port_range:
        if probe_port(port, identity=identity, timeout=timeout, session=session):
            return port
    return None
