"""
Cholesky solution types.

Contains the factorization payload and the user-facing decomposition
engine that reuses one cached factorization for solves, quadratic forms,
determinants and the inverse.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any
import numpy as np
from numpy.typing import ArrayLike, NDArray

from pycholesky.core.compute.timing import Timer
from pycholesky.core.exceptions import (
    DimensionError,
    NotPositiveDefiniteError,
    ValidationError,
)
from pycholesky.core.protocols import Kernel
from pycholesky.core.result import Result
from pycholesky.core.validation import (
    check_1d,
    check_2d,
    check_array,
    check_finite,
    check_size,
)
from pycholesky.cholesky._status import (
    KernelStatus,
    RankDeficientAt,
    raise_if_fatal,
    require_success,
)
from pycholesky.cholesky.backends import BackendChoice, get_kernel
from pycholesky.cholesky.design import CholeskyDesign


@dataclass(frozen=True)
class CholeskyParams:
    """
    Payload of one factorization.

    Attributes:
        L: Canonical lower-triangular factor, zeros strictly above the
           diagonal. Read-only.
        factor: Working buffer exactly as the kernel produced it. The solve
           and inversion primitives need this layout, not ``L``.
        rank: Size of the largest leading block proven positive definite
        status: Decoded factorization status
    """
    L: NDArray[np.floating[Any]]
    factor: Any
    rank: int
    status: KernelStatus


class Cholesky:
    """
    Cholesky decomposition of a symmetric positive-semidefinite matrix.

    Factorizes A = L L^T once and answers A^-1 b, v^T A^-1 v, det(A) and
    A^-1 from the cached factor. Only the lower triangle of A is read.

    Rank deficiency is not an error. When the kernel finds that the leading
    k x k minor is not positive definite, ``rank()`` returns k - 1 and every
    derived quantity still executes, but ``backsub``, ``mahalanobis``,
    ``inverse_quadratic``, ``determinant``, ``log_determinant`` and
    ``get_inverse`` are numerically meaningless. Check ``rank()`` (or call
    ``require_full_rank()``) before trusting them.

    Only ``recompute`` mutates the engine. Concurrent reads are safe;
    recomputing while another thread reads needs external locking.

    Examples:
        >>> chol = Cholesky(A)
        >>> x = chol.backsub(b)          # A^-1 b
        >>> d2 = chol.mahalanobis(v)     # v^T A^-1 v
        >>> Ainv = chol.get_inverse()

        >>> chol = Cholesky(size=3)      # fixed size, factorize later
        >>> chol.recompute(A)
    """

    def __init__(
        self,
        A: ArrayLike | CholeskyDesign | None = None,
        *,
        size: int | None = None,
        backend: BackendChoice | Kernel = 'cpu',
    ):
        """
        Args:
            A: Symmetric matrix (n x n) or a CholeskyDesign. If omitted,
               ``size`` is required and the engine waits for ``recompute``.
            size: Fixed matrix size. If given with ``A``, A must match it.
            backend: Kernel choice ('cpu', 'gpu', 'auto', ...) or a Kernel.

        Raises:
            DimensionError: If A is not square or does not match ``size``
            ValidationError: If neither A nor size is given, or A is invalid
        """
        if A is None and size is None:
            raise ValidationError("Cholesky: either A or size is required")
        if size is not None and (isinstance(size, bool) or int(size) != size or size < 1):
            raise ValidationError(f"size: expected a positive integer, got {size!r}")

        design = None
        if A is not None:
            design = _ensure_design(A)
            if size is not None:
                check_size(design.n, int(size), 'A')
            size = design.n

        self._size = int(size)
        self._kernel = get_kernel(backend)
        self._result: Result[CholeskyParams] | None = None

        if design is not None:
            self._result = self._factorize(design)

    # === Decomposition engine ===

    def recompute(self, A: ArrayLike | CholeskyDesign) -> Cholesky:
        """
        Factorize a new matrix of the same size, replacing all cached state.

        The shape is checked before anything is touched; on DimensionError
        the previous factorization is still intact.

        Returns:
            self, for chaining

        Raises:
            DimensionError: If A is not square or its size differs
        """
        design = _ensure_design(A)
        check_size(design.n, self._size, 'A')
        self._result = self._factorize(design)
        return self

    def _factorize(self, design: CholeskyDesign) -> Result[CholeskyParams]:
        kernel = self._kernel
        n = design.n

        timer = Timer(sync_cuda=getattr(kernel, 'sync_cuda', False))
        timer.start()

        with timer.section('copy'):
            buffer = kernel.prepare(design.matrix)

        with timer.section('factorize'):
            buffer, status = kernel.factorize(buffer)

        raise_if_fatal(status)

        with timer.section('canonicalize'):
            # The kernel leaves the strict upper triangle undefined
            L = np.tril(kernel.lower(buffer))
            L.setflags(write=False)

        timer.stop()

        warnings_list = []
        if isinstance(status, RankDeficientAt):
            rank = status.rank
            warnings_list.append(
                f"{design.name} is not positive definite: {status} "
                f"(rank={rank}, n={n}). Derived quantities are not meaningful."
            )
        else:
            rank = n

        info: dict[str, Any] = {
            'method': 'potrf',
            'status': str(status),
            'rank': rank,
            'n': n,
            'dtype': str(L.dtype),
            'asymmetry': design.asymmetry,
        }

        return Result(
            params=CholeskyParams(L=L, factor=buffer, rank=rank, status=status),
            info=info,
            timing=timer.result(),
            backend_name=kernel.name,
            warnings=tuple(warnings_list),
        )

    def _params(self, operation: str) -> CholeskyParams:
        if self._result is None:
            raise RuntimeError(
                f"Cholesky.{operation}() called before recompute(): "
                f"no matrix has been factorized yet"
            )
        return self._result.params

    def rank(self) -> int:
        """Numerical rank found by the factorization (cached)."""
        return self._params('rank').rank

    def get_L(self) -> NDArray[np.floating[Any]]:
        """
        Copy of the lower-triangular factor L with A = L L^T.

        The strict upper triangle is exactly zero and the diagonal is
        positive for positive-definite input.
        """
        return self._params('get_L').L.copy()

    def require_full_rank(self) -> Cholesky:
        """
        Raise unless the factorized matrix is positive definite.

        Raises:
            NotPositiveDefiniteError: If rank() < size
        """
        params = self._params('require_full_rank')
        if params.rank < self._size:
            raise NotPositiveDefiniteError(
                f"Matrix is not positive definite: {params.status} "
                f"(rank={params.rank}, expected={self._size})",
                matrix_name='A',
                rank=params.rank,
                expected_rank=self._size,
            )
        return self

    # === Solve & quadratic forms ===

    def _solve(self, rhs: NDArray[np.floating[Any]]) -> NDArray[np.floating[Any]]:
        """Solve A X = rhs for an (n, k) rhs using the cached working buffer."""
        params = self._params('backsub')
        if rhs.shape[1] == 0:
            return np.empty(rhs.shape, dtype=params.L.dtype)
        x, status = self._kernel.solve(params.factor, rhs.astype(params.L.dtype, copy=False))
        require_success(status, 'potrs')
        return np.asarray(x, dtype=params.L.dtype)

    def backsub(self, b: ArrayLike) -> NDArray[np.floating[Any]]:
        """
        Solve A x = b.

        Args:
            b: Right-hand side, shape (n,) or (n, k) for k right-hand sides

        Returns:
            New array with the same shape as b

        Raises:
            DimensionError: If b has the wrong number of rows or is not 1D/2D
        """
        self._params('backsub')
        arr = check_array(b, 'b')
        if arr.ndim not in (1, 2):
            raise DimensionError(
                f"b: expected 1D or 2D array, got {arr.ndim}D with shape {arr.shape}"
            )
        check_size(arr.shape[0], self._size, 'b')
        check_finite(arr, 'b')

        if arr.ndim == 1:
            return self._solve(arr[:, np.newaxis])[:, 0]
        return self._solve(arr)

    def mahalanobis(self, v: ArrayLike) -> float:
        """
        Quadratic form v^T A^-1 v, without forming A^-1.

        With A a covariance matrix this is the squared Mahalanobis distance
        of v from the mean.
        """
        self._params('mahalanobis')
        arr = check_array(v, 'v')
        check_1d(arr, 'v')
        check_size(arr.shape[0], self._size, 'v')
        check_finite(arr, 'v')

        x = self._solve(arr[:, np.newaxis])[:, 0]
        return float(arr @ x)

    def inverse_quadratic(self, M: ArrayLike) -> NDArray[np.floating[Any]]:
        """
        M A^-1 M^T for M of shape (k, n), via one multi-RHS solve.

        Returns:
            Symmetric (k, k) matrix
        """
        self._params('inverse_quadratic')
        arr = check_array(M, 'M')
        check_2d(arr, 'M')
        check_size(arr.shape[1], self._size, 'M columns')
        check_finite(arr, 'M')

        X = self._solve(np.ascontiguousarray(arr.T))
        out = arr @ X
        return (out + out.T) / 2

    # === Derived quantities ===

    def determinant(self) -> float:
        """det(A) = (prod diag L)^2. Degenerate (not an error) when rank < n."""
        d = np.prod(np.diag(self._params('determinant').L))
        return float(d * d)

    def log_determinant(self) -> float:
        """
        log det(A) = 2 sum(log diag L).

        Avoids the overflow and underflow of ``determinant()`` for large n.
        Returns -inf if a diagonal entry is zero.
        """
        diag = np.diag(self._params('log_determinant').L)
        with np.errstate(divide='ignore', invalid='ignore'):
            return float(2.0 * np.sum(np.log(diag)))

    def get_inverse(self) -> NDArray[np.floating[Any]]:
        """
        A^-1 as a full symmetric matrix.

        The inversion primitive only fills the lower triangle; it is mirrored
        into the upper triangle so both halves are bit-identical.
        """
        params = self._params('get_inverse')
        inv, status = self._kernel.invert(params.factor)
        require_success(status, 'potri')

        lower = np.tril(np.asarray(inv, dtype=params.L.dtype))
        return lower + np.tril(lower, -1).T

    # === Accessors ===

    @property
    def size(self) -> int:
        """Matrix size n."""
        return self._size

    @property
    def dtype(self) -> np.dtype:
        """Floating dtype of the factor and every derived result."""
        return self._params('dtype').L.dtype

    @property
    def is_full_rank(self) -> bool:
        return self.rank() == self._size

    @property
    def status(self) -> KernelStatus:
        """Decoded status of the last factorization."""
        return self._params('status').status

    @property
    def result(self) -> Result[CholeskyParams]:
        """The underlying Result envelope of the last factorization."""
        self._params('result')
        return self._result

    @property
    def backend_name(self) -> str:
        return self._kernel.name

    @property
    def info(self) -> dict[str, Any]:
        return self.result.info

    @property
    def timing(self) -> dict[str, float] | None:
        return self.result.timing

    @property
    def warnings(self) -> tuple[str, ...]:
        return self.result.warnings

    def __repr__(self) -> str:
        if self._result is None:
            return f"Cholesky(size={self._size}, backend={self.backend_name!r}, factorized=False)"
        return (
            f"Cholesky(size={self._size}, rank={self.rank()}, "
            f"backend={self.backend_name!r})"
        )


def _ensure_design(A: ArrayLike | CholeskyDesign) -> CholeskyDesign:
    """Convert raw array to CholeskyDesign if needed."""
    if isinstance(A, CholeskyDesign):
        return A
    return CholeskyDesign.from_array(A)


__all__ = [
    "Cholesky",
    "CholeskyParams",
]
