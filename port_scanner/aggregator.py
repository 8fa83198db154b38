from __future__ import annotations

import threading
from typing import List, Set

from .models import PortResult


class ScanIncompleteError(RuntimeError):
    pass


class DuplicateResultError(ValueError):
    pass


class ResultAggregator:
    """Thread-safe collection of one PortResult per scanned port."""

    def __init__(self, expected: int):
        self.expected = expected
        self._lock = threading.Lock()
        self._results: List[PortResult] = []
        self._seen: Set[int] = set()
        self._open = 0

    def add(self, result: PortResult) -> int:
        """Records a result and returns how many have been collected so far."""
        with self._lock:
            if result.port in self._seen:
                raise DuplicateResultError(f"Port {result.port} reported twice")
            self._seen.add(result.port)
            self._results.append(result)
            if result.is_open:
                self._open += 1
            return len(self._results)

    def __len__(self) -> int:
        with self._lock:
            return len(self._results)

    @property
    def open_count(self) -> int:
        with self._lock:
            return self._open

    def results(self) -> List[PortResult]:
        with self._lock:
            collected = list(self._results)
        if len(collected) != self.expected:
            raise ScanIncompleteError(
                f"Collected {len(collected)} results, expected {self.expected}"
            )
        return sorted(collected, key=lambda r: r.port)
