from __future__ import annotations

import sys
from typing import Callable, Optional

try:
    import resource
except ImportError:  # Windows has no RLIMIT_NOFILE
    resource = None


FATAL_RATIO = 0.9
POSIX_ADVICE_THRESHOLD = 4096
WINDOWS_ADVICE_THRESHOLD = 2048


class WorkerLimitError(ValueError):
    pass


def query_fd_limit() -> Optional[int]:
    """Soft limit on open file descriptors, or None when there is no usable ceiling."""
    if resource is None:
        return None

    try:
        soft_limit, _ = resource.getrlimit(resource.RLIMIT_NOFILE)
    except (OSError, ValueError):
        return None

    if soft_limit == resource.RLIM_INFINITY or soft_limit <= 0:
        return None
    return int(soft_limit)


def check_worker_limit(
    workers: int,
    fd_limit: Callable[[], Optional[int]] = query_fd_limit,
    platform: str = sys.platform,
) -> Optional[str]:
    """
    Compares the worker count with the open-files ceiling.

    Raises WorkerLimitError when workers would use 90% or more of the
    ceiling. Otherwise returns a suggestion to print, or None.
    """
    if platform.startswith("win"):
        if workers > WINDOWS_ADVICE_THRESHOLD:
            return (
                f"Try lowering your worker count below {WINDOWS_ADVICE_THRESHOLD} "
                "if you experience inconsistent results or unexpected behavior."
            )
        return "If you notice inconsistent results, try lowering your worker count."

    ceiling = fd_limit()
    if ceiling is None:
        return None

    if workers / ceiling >= FATAL_RATIO:
        raise WorkerLimitError(
            f"Number of requested workers ({workers}) is at least 90% of the system's "
            f"maximum open files / connections ({ceiling}). Please lower the worker count "
            "or raise the limit with 'ulimit -n'."
        )
    if workers > POSIX_ADVICE_THRESHOLD:
        return (
            f"Try lowering your worker count below {POSIX_ADVICE_THRESHOLD} "
            "if you experience inconsistent results or unexpected behavior."
        )
    return None
