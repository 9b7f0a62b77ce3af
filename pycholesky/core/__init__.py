"""
Core infrastructure for PyCholesky.

This module provides shared abstractions, utilities, and compute
infrastructure used by the factorization domain.

Key components:
    protocols: Kernel protocol
    result: Generic Result[P] envelope
    exceptions: Exception hierarchy
    validation: Input validators
    compute: Hardware detection, timing, tolerance tiers
"""

from pycholesky.core.protocols import Kernel
from pycholesky.core.result import Result
from pycholesky.core.exceptions import (
    PyCholeskyError,
    ValidationError,
    DimensionError,
    NumericalError,
    NotPositiveDefiniteError,
    KernelContractError,
)

__all__ = [
    # Protocols
    "Kernel",
    # Result
    "Result",
    # Exceptions
    "PyCholeskyError",
    "ValidationError",
    "DimensionError",
    "NumericalError",
    "NotPositiveDefiniteError",
    "KernelContractError",
]
