from __future__ import annotations

import errno
import logging
import socket
import time

from .banner import read_banner
from .models import PortResult, ProbeOutcome


logger = logging.getLogger(__name__)

_UNREACHABLE_ERRNOS = {errno.EHOSTUNREACH, errno.ENETUNREACH}


def classify_error(exc: Exception) -> ProbeOutcome:
    """Maps a failed connect to the outcome recorded for the port."""
    if isinstance(exc, UnicodeError):
        # host name the idna codec cannot encode
        return ProbeOutcome.ERROR
    if isinstance(exc, socket.timeout):
        return ProbeOutcome.TIMEOUT
    if isinstance(exc, ConnectionRefusedError):
        return ProbeOutcome.REFUSED
    if exc.errno in _UNREACHABLE_ERRNOS:
        return ProbeOutcome.UNREACHABLE
    return ProbeOutcome.ERROR


def probe_port(host: str, port: int, timeout: float) -> PortResult:
    """
    Connects to host:port and, if the connection is accepted, reads a banner.

    Both the connect and the banner read share one budget of `timeout`
    seconds measured from the start of the attempt. Every outcome is returned
    as a PortResult; nothing is raised.
    """
    start = time.monotonic()
    deadline = start + timeout
    try:
        sock = socket.create_connection((host, port), timeout=timeout)
    except (OSError, UnicodeError) as e:
        outcome = classify_error(e)
        logger.debug("Port %d: %s (%s)", port, outcome.value, e)
        return PortResult(
            port=port,
            outcome=outcome,
            elapsed_s=round(time.monotonic() - start, 4),
        )

    with sock:
        logger.info("Found open port: %d", port)
        banner = read_banner(sock, deadline)

    return PortResult(
        port=port,
        outcome=ProbeOutcome.OPEN,
        banner=banner,
        elapsed_s=round(time.monotonic() - start, 4),
    )
