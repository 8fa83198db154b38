from __future__ import annotations

import argparse
import logging
import random
import re

from .limits import WorkerLimitError, check_worker_limit
from .models import ScanConfig
from .output import print_results, write_report
from .ports import validate_range
from .scanner import scan
from .targets import resolve_host


logger = logging.getLogger(__name__)

_DURATION = re.compile(r"^\s*(\d+(?:\.\d+)?)\s*(ms|s|m)?\s*$")
_UNIT_SECONDS = {"ms": 0.001, "s": 1.0, "m": 60.0, None: 1.0}


def parse_duration(value: str) -> float:
    """
    Parses a timeout such as "10", "2.5", "500ms", "10s" or "1m" into seconds.
    """
    m = _DURATION.match(value)
    if not m:
        raise argparse.ArgumentTypeError(f"invalid duration: {value!r}")
    seconds = float(m.group(1)) * _UNIT_SECONDS[m.group(2)]
    if seconds <= 0:
        raise argparse.ArgumentTypeError("timeout must be greater than zero")
    return seconds


def setup_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler()],
    )


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Concurrent TCP port scanner with banner grabbing")
    p.add_argument("--host", default="", help="Host to scan (IP or hostname)")
    p.add_argument("--start", type=int, default=0, help="Starting port")
    p.add_argument("--stop", type=int, default=0, help="Final port to scan")
    p.add_argument("--workers", type=int, default=10, help="Number of concurrent workers (default: 10)")
    p.add_argument(
        "--timeout",
        type=parse_duration,
        default=10.0,
        help="Timeout per connection, e.g. 10s, 500ms or plain seconds (default: 10s)",
    )
    p.add_argument("--random", action="store_true", help="Randomize port order")
    p.add_argument("--open-only", action="store_true", help="Only report open ports")
    p.add_argument("--output-file", default="results.txt", help="File to dump results (default: results.txt)")
    p.add_argument("--progress-every", type=int, default=0, help="Log progress every N ports (default: off)")
    p.add_argument("--seed", type=int, help="Seed for --random, to reproduce a port order")
    p.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return p


def config_from_args(args: argparse.Namespace) -> ScanConfig:
    """Validates parsed arguments; any problem aborts before scanning starts."""
    if not args.host or not args.start or not args.stop:
        raise SystemExit("Host, starting port, and end port cannot be blank.")
    try:
        validate_range(args.start, args.stop)
    except ValueError as e:
        raise SystemExit(str(e))
    if args.workers < 1:
        raise SystemExit("--workers must be >= 1")

    try:
        host = resolve_host(args.host)
    except ValueError as e:
        raise SystemExit(str(e))

    return ScanConfig(
        host=host,
        start=args.start,
        stop=args.stop,
        workers=args.workers,
        timeout=args.timeout,
        randomize=args.random,
        open_only=args.open_only,
        output_file=args.output_file,
    )


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.verbose)

    config = config_from_args(args)

    try:
        advice = check_worker_limit(config.workers)
    except WorkerLimitError as e:
        raise SystemExit(str(e))
    if advice:
        logger.warning(advice)

    print(f"[*] Host: {config.host} | Ports: {config.start}-{config.stop} | Total scans: {config.port_count}")
    rng = random.Random(args.seed) if args.seed is not None else None
    results = scan(config, progress_every=args.progress_every, rng=rng)

    print_results(results, open_only=config.open_only)

    try:
        path = write_report(results, config.output_file, open_only=config.open_only)
    except OSError as e:
        logger.error("Could not write results to %s: %s", config.output_file, e)
        return 1
    print(f"Saved results to {path}")

    return 0
