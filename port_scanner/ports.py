from __future__ import annotations

import random
from typing import List, Optional


MIN_PORT = 1
MAX_PORT = 65535


def validate_range(start: Optional[int], stop: Optional[int]) -> None:
    """
    Raises ValueError unless 1 <= start <= stop <= 65535.
    A missing or zero bound is reported separately from an out-of-range one.
    """
    if not start or not stop:
        raise ValueError("Starting port and end port cannot be blank")
    if start < MIN_PORT or stop > MAX_PORT or start > MAX_PORT or stop < MIN_PORT:
        raise ValueError(f"Invalid port range: {start}-{stop}")
    if start > stop:
        raise ValueError(f"Invalid port range: {start}-{stop} (start is after stop)")


def port_range(
    start: int,
    stop: int,
    randomize: bool = False,
    rng: Optional[random.Random] = None,
) -> List[int]:
    """
    Returns every port from start to stop inclusive, in order, or shuffled
    when randomize is set. Bounds are assumed already validated.
    """
    ports = list(range(start, stop + 1))
    if randomize:
        (rng or random).shuffle(ports)
    return ports
