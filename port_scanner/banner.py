from __future__ import annotations

import socket
import time


BANNER_CAP = 1024


def _clean_text(data: bytes) -> str:
    return data.decode(errors="ignore").strip()


def _try_recv(sock: socket.socket, n: int, timeout: float) -> bytes:
    sock.settimeout(timeout)
    try:
        return sock.recv(n)
    except OSError:
        # read timeout or reset: keep whatever arrived before it
        return b""


def read_banner(sock: socket.socket, deadline: float, cap: int = BANNER_CAP) -> str:
    """
    Reads whatever the peer sends until it closes, `cap` bytes have arrived,
    or the monotonic `deadline` passes. Returns the bytes as trimmed text.
    """
    buf = bytearray()
    while len(buf) < cap:
        remaining = deadline - time.monotonic()
        if remaining <= 0:
            break
        chunk = _try_recv(sock, cap - len(buf), remaining)
        if not chunk:
            break
        buf.extend(chunk)
    return _clean_text(bytes(buf[:cap]))
