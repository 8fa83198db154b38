"""
Single-host TCP port scanner with bounded concurrency and banner grabbing.
"""

from .models import PortResult, ProbeOutcome, ScanConfig
from .scanner import scan

__all__ = ["PortResult", "ProbeOutcome", "ScanConfig", "scan"]
