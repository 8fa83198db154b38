from __future__ import annotations

from typing import Iterable, List

from .models import PortResult


def format_line(r: PortResult) -> str:
    port = str(r.port)
    # short port numbers get a second tab so the Status column lines up
    sep = "\t\t" if len(port) < 3 else "\t"
    return f"Port:{port}{sep}Status:{r.status}\tBanner:{r.report_banner}\n"


def filter_results(results: Iterable[PortResult], open_only: bool) -> List[PortResult]:
    return sorted(
        (r for r in results if r.is_open or not open_only),
        key=lambda x: x.port,
    )


def print_results(results: List[PortResult], open_only: bool) -> None:
    open_count = sum(1 for r in results if r.is_open)
    print(f"Found {open_count} open ports")

    for r in filter_results(results, open_only):
        print(format_line(r), end="")


def write_report(results: List[PortResult], path: str, open_only: bool = False) -> str:
    """Writes the text report; an OSError from creating the file propagates."""
    with open(path, "w", encoding="utf-8") as f:
        for r in filter_results(results, open_only):
            f.write(format_line(r))
    return path
