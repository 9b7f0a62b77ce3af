"""
Solver dispatch for symmetric factorization.

This module provides the cholesky() function (public API). Input validation
happens here, at the boundary; the engine and kernels trust what they get.
"""

from __future__ import annotations

from numpy.typing import ArrayLike

from pycholesky.core.protocols import Kernel
from pycholesky.cholesky.backends import BackendChoice
from pycholesky.cholesky.design import CholeskyDesign
from pycholesky.cholesky.solution import Cholesky


def cholesky(
    A: ArrayLike | CholeskyDesign,
    *,
    backend: BackendChoice | Kernel = 'cpu',
) -> Cholesky:
    """
    Factorize a symmetric positive-semidefinite matrix.

    Computes A = L L^T from the lower triangle of A. The returned engine
    caches the factorization and reuses it for every solve, quadratic
    form, determinant and inverse.

    Args:
        A: Symmetric matrix (n x n). Only the lower triangle is read.
        backend: Kernel to use:
            - 'cpu' / 'cpu_lapack': LAPACK via SciPy (reference, default)
            - 'gpu' / 'gpu_torch': PyTorch on CUDA/MPS (FP32)
            - 'auto': GPU if available, else CPU
            - a Kernel instance, e.g. TorchKernel(use_fp64=True)

    Returns:
        Factorized Cholesky engine

    Raises:
        ValidationError: If A is non-numeric, complex or non-finite
        DimensionError: If A is not a square matrix

    Example:
        >>> import numpy as np
        >>> from pycholesky import cholesky
        >>>
        >>> chol = cholesky(np.diag([4.0, 9.0]))
        >>> chol.get_L()
        array([[2., 0.],
               [0., 3.]])
        >>> chol.determinant()
        36.0
    """
    # === Input Validation ===
    design = A if isinstance(A, CholeskyDesign) else CholeskyDesign.from_array(A)

    # === Factorize ===
    return Cholesky(design, backend=backend)
