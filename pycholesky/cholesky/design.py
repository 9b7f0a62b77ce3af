"""
CholeskyDesign: validated input for a symmetric factorization.

Wraps a square matrix whose lower triangle holds the symmetric matrix to
factorize. The upper triangle is carried along but never read by the
kernels. The design owns a private copy, so a caller mutating their array
after construction cannot change what was factorized.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any
import numpy as np
from numpy.typing import ArrayLike, NDArray

from pycholesky.core.validation import (
    check_array,
    check_finite,
    check_min_size,
    check_square,
)


@dataclass(frozen=True)
class CholeskyDesign:
    """
    Design for a symmetric positive-semidefinite factorization.

    Immutable after construction.

    Construction:
        CholeskyDesign.from_array(A)
    """
    _matrix: NDArray[np.floating[Any]]
    _n: int
    _name: str

    @classmethod
    def from_array(cls, A: ArrayLike, *, name: str = 'A') -> CholeskyDesign:
        """
        Build CholeskyDesign from array-like data.

        Parameters
        ----------
        A : array-like, shape (n, n)
            Symmetric matrix. Only the lower triangle (with the diagonal)
            is used. Can be a numpy array, a pandas DataFrame, a torch
            tensor, or nested lists.
        name : str
            Name used in error messages.

        Raises
        ------
        ValidationError
            Non-numeric, complex, or non-finite lower triangle.
        DimensionError
            Not a square 2D matrix.
        """
        if hasattr(A, 'values') and not isinstance(A, np.ndarray):
            A = A.values
        matrix = check_array(A, name)
        return cls._build(matrix, name=name)

    @classmethod
    def _build(cls, matrix: NDArray, name: str = 'A') -> CholeskyDesign:
        """Internal builder with validation."""
        check_square(matrix, name)
        check_min_size(matrix, 1, name)
        # The upper triangle is ignored, so garbage there is allowed
        check_finite(np.tril(matrix), f"{name} (lower triangle)")

        owned = np.array(matrix, dtype=matrix.dtype, copy=True)
        owned.setflags(write=False)
        return cls(_matrix=owned, _n=owned.shape[0], _name=name)

    @property
    def matrix(self) -> NDArray[np.floating[Any]]:
        """Read-only copy of the input matrix (n x n)."""
        return self._matrix

    @property
    def n(self) -> int:
        """Matrix size."""
        return self._n

    @property
    def dtype(self) -> np.dtype:
        """Floating dtype shared by the factor and every derived result."""
        return self._matrix.dtype

    @property
    def name(self) -> str:
        return self._name

    @property
    def asymmetry(self) -> float:
        """
        Largest absolute difference between the two triangles.

        Informational only: the factorization reads the lower triangle, so
        an asymmetric input is factorized as its lower-triangle
        symmetrization.
        """
        m = self._matrix
        upper = np.triu(m, 1)
        if not np.all(np.isfinite(upper)):
            return float('inf')
        return float(np.max(np.abs(np.tril(m, -1) - upper.T), initial=0.0))

    def __repr__(self) -> str:
        return f"CholeskyDesign(n={self._n}, dtype={self.dtype})"
