from dataclasses import dataclass
from enum import Enum


TIMED_OUT_BANNER = "Timed Out"


class ProbeOutcome(Enum):
    OPEN = "open"
    TIMEOUT = "timeout"
    REFUSED = "refused"
    UNREACHABLE = "unreachable"
    ERROR = "error"


@dataclass(frozen=True)
class PortResult:
    port: int
    outcome: ProbeOutcome
    banner: str = ""
    elapsed_s: float = 0.0

    @property
    def is_open(self) -> bool:
        return self.outcome is ProbeOutcome.OPEN

    @property
    def status(self) -> str:
        return "open" if self.is_open else "closed"

    @property
    def report_banner(self) -> str:
        # text reports still carry the timeout marker in the banner column
        if self.outcome is ProbeOutcome.TIMEOUT:
            return TIMED_OUT_BANNER
        return self.banner


@dataclass(frozen=True)
class ScanConfig:
    host: str
    start: int
    stop: int
    workers: int = 10
    timeout: float = 10.0
    randomize: bool = False
    open_only: bool = False
    output_file: str = "results.txt"

    @property
    def port_count(self) -> int:
        return self.stop - self.start + 1
