"""
Shared compute infrastructure for PyCholesky.

This module provides hardware detection, timing utilities, and tolerance
tiers shared by all kernels.

IMPORTANT: This is NOT where kernels live. Those go in
cholesky/backends/. This module contains shared NUMERIC infrastructure.

Submodules:
    device: Hardware detection and device selection
    timing: Execution timing utilities
    tolerances: Precision expectations per compute path
"""

from pycholesky.core.compute.device import (
    DeviceInfo,
    detect_gpu,
    get_cpu_info,
    select_device,
)
from pycholesky.core.compute.timing import Timer, timed

__all__ = [
    # Device detection
    "DeviceInfo",
    "detect_gpu",
    "get_cpu_info",
    "select_device",
    # Timing
    "Timer",
    "timed",
]
