from __future__ import annotations

import logging
import random
import time
from concurrent.futures import Future, ThreadPoolExecutor, wait
from typing import Callable, List, Optional

from .aggregator import ResultAggregator
from .gate import AdmissionGate
from .models import PortResult, ScanConfig
from .ports import port_range
from .probe import probe_port


logger = logging.getLogger(__name__)

Probe = Callable[[str, int, float], PortResult]


def scan(
    config: ScanConfig,
    probe: Probe = probe_port,
    gate: Optional[AdmissionGate] = None,
    progress_every: int = 0,
    rng: Optional[random.Random] = None,
) -> List[PortResult]:
    """
    Probes every port in config's range with at most config.workers probes
    in flight, and returns one result per port sorted by port number.

    Each unit of work hands its own result to the aggregator and then frees
    its gate slot, so the join below only returns once every result is in.
    """
    gate = gate or AdmissionGate(config.workers)
    ports = port_range(config.start, config.stop, config.randomize, rng)
    aggregator = ResultAggregator(expected=len(ports))
    start_all = time.perf_counter()

    def run_one(port: int) -> None:
        try:
            result = probe(config.host, port, config.timeout)
            scanned = aggregator.add(result)
        finally:
            gate.release()

        if progress_every > 0 and (scanned % progress_every == 0 or scanned == len(ports)):
            elapsed = time.perf_counter() - start_all
            rate = scanned / elapsed if elapsed > 0 else 0.0
            logger.info(
                "Scanned %d/%d | open=%d | %.0f scans/s",
                scanned, len(ports), aggregator.open_count, rate,
            )

    logger.debug(
        "Scanning %s ports %d-%d with %d workers (timeout %.2fs, random=%s)",
        config.host, config.start, config.stop, config.workers, config.timeout, config.randomize,
    )

    futures: List[Future] = []
    with ThreadPoolExecutor(max_workers=config.workers) as pool:
        for port in ports:
            gate.acquire()
            try:
                futures.append(pool.submit(run_one, port))
            except BaseException:
                gate.release()
                raise
        wait(futures)

    # surface anything a probe callable raised, after every slot is back
    for fut in futures:
        fut.result()

    results = aggregator.results()
    logger.debug(
        "Scan of %s finished in %.2fs, peak concurrency %d",
        config.host, time.perf_counter() - start_all, gate.peak,
    )
    return results
