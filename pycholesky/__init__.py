"""
PyCholesky: symmetric positive-semidefinite factorization for Python.

Factorize a covariance-like matrix once, then solve, evaluate Mahalanobis
forms, determinants and inverses from the cached factor, on the CPU
(LAPACK) or on a GPU (PyTorch).

Submodules:
    cholesky: Decomposition engine and kernels
    core: Exceptions, validation, result envelope, compute infrastructure
"""

__version__ = "0.1.0"

from pycholesky.cholesky import Cholesky, CholeskyDesign, cholesky
from pycholesky.core.exceptions import (
    PyCholeskyError,
    ValidationError,
    DimensionError,
    NumericalError,
    NotPositiveDefiniteError,
    KernelContractError,
)

__all__ = [
    "__version__",
    "cholesky",
    "Cholesky",
    "CholeskyDesign",
    "PyCholeskyError",
    "ValidationError",
    "DimensionError",
    "NumericalError",
    "NotPositiveDefiniteError",
    "KernelContractError",
]
