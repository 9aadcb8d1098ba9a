"""HTTP probe primitive for dox.

Probes are plain blocking GETs with a timeout that never read the body.
They never raise: any network-level failure is reported as a 502 so
callers always compare a numeric status code.
"""

import logging
import time

import requests

from ..constants import (
    HOST_POLL_INTERVAL,
    NETWORK_FAILURE_STATUS,
    ONLINE_CHECK_TIMEOUT,
    PROBE_TIMEOUT,
)

logger = logging.getLogger(__name__)


def _request(url: str, timeout: float) -> int | None:
    """GET a URL without reading its body; None if nothing answered."""
    try:
        response = requests.get(url, timeout=timeout, allow_redirects=True, stream=True)
    except requests.exceptions.RequestException as exc:
        logger.debug(f"Request to {url} failed: {exc}")
        return None
    response.close()
    return response.status_code


def probe(url: str, timeout: float) -> int:
    """Issue a GET against a URL and return its status code.

    Only the status line and headers are read; the body is discarded.

    Args:
        url: Absolute URL to request
        timeout: Seconds to wait for connect and read

    Returns:
        HTTP status code, or 502 if no response was received
    """
    status_code = _request(url, timeout)
    return NETWORK_FAILURE_STATUS if status_code is None else status_code


def is_success(status_code: int) -> bool:
    """Return True for 2xx status codes."""
    return 200 <= status_code <= 299


def is_online(url: str, timeout: float = ONLINE_CHECK_TIMEOUT) -> bool:
    """Check whether an outside host answers at all, whatever the status."""
    return _request(url, timeout) is not None


def wait_until_ready(url: str, timeout: float, interval: float = HOST_POLL_INTERVAL) -> bool:
    """Poll a URL until it answers with 2xx or the deadline passes.

    Args:
        url: URL to poll
        timeout: Total seconds to keep polling
        interval: Seconds between attempts

    Returns:
        True if the URL became ready before the deadline
    """
    deadline = time.monotonic() + timeout
    while True:
        if is_success(probe(url, PROBE_TIMEOUT)):
            return True
        if time.monotonic() >= deadline:
            return False
        time.sleep(interval)
