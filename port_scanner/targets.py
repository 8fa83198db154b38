from __future__ import annotations

import ipaddress
import socket


def resolve_host(host: str) -> str:
    """
    Supports:
      - Single IP: "172.20.0.10" or "::1"
      - Hostname: "webapp" (resolves to one address)
    Networks are rejected; the scanner works on one host at a time.
    """
    host = host.strip()
    if not host:
        raise ValueError("Host cannot be blank")

    try:
        ip = ipaddress.ip_address(host)
        return str(ip)
    except ValueError:
        pass

    if "/" in host:
        raise ValueError(f"Only a single host can be scanned, got '{host}'")

    try:
        infos = socket.getaddrinfo(host, None, type=socket.SOCK_STREAM)
    except (socket.gaierror, UnicodeError) as e:
        raise ValueError(f"Could not resolve host '{host}': {e}") from e
    if not infos:
        raise ValueError(f"Could not resolve host '{host}'")

    # prefer IPv4 when the name has both families
    for family, _, _, _, sockaddr in infos:
        if family == socket.AF_INET:
            return sockaddr[0]
    return infos[0][4][0]
