from __future__ import annotations

import threading


class AdmissionGate:
    """
    Caps how many probes may hold a network slot at once.

    acquire() blocks until a slot is free; release() frees one slot and wakes
    at most one waiter. Releasing more often than acquiring raises ValueError.
    in_flight and peak are kept for progress reporting and tests.
    """

    def __init__(self, workers: int):
        if workers < 1:
            raise ValueError("workers must be >= 1")
        self.workers = workers
        self._slots = threading.BoundedSemaphore(workers)
        self._lock = threading.Lock()
        self._in_flight = 0
        self._peak = 0

    @property
    def in_flight(self) -> int:
        with self._lock:
            return self._in_flight

    @property
    def peak(self) -> int:
        with self._lock:
            return self._peak

    def acquire(self) -> None:
        self._slots.acquire()
        with self._lock:
            self._in_flight += 1
            if self._in_flight > self._peak:
                self._peak = self._in_flight

    def release(self) -> None:
        with self._lock:
            if self._in_flight == 0:
                raise ValueError("AdmissionGate released more times than acquired")
            self._in_flight -= 1
        self._slots.release()

    def __enter__(self) -> "AdmissionGate":
        self.acquire()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.release()
