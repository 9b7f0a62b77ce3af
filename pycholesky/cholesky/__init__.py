"""
Symmetric positive-semidefinite factorization.

Public API:
    cholesky(A)          - Factorize and return a Cholesky engine
    Cholesky             - Engine: rank, get_L, backsub, mahalanobis,
                           inverse_quadratic, determinant, log_determinant,
                           get_inverse, recompute
    CholeskyDesign       - Validated symmetric input
"""

from pycholesky.cholesky.design import CholeskyDesign
from pycholesky.cholesky.solution import Cholesky, CholeskyParams
from pycholesky.cholesky.solvers import cholesky
from pycholesky.cholesky._status import (
    Fatal,
    KernelStatus,
    RankDeficientAt,
    Success,
)
from pycholesky.cholesky.backends import LapackKernel, get_kernel

__all__ = [
    "cholesky",
    "Cholesky",
    "CholeskyParams",
    "CholeskyDesign",
    "KernelStatus",
    "Success",
    "RankDeficientAt",
    "Fatal",
    "LapackKernel",
    "get_kernel",
]
