"""
Core protocols for PyCholesky.

These define structural interfaces that kernel implementations must satisfy.
We use Protocol (structural typing) rather than ABC (nominal typing) so a
kernel can wrap any array library without inheriting from ours.

Design Principles:
    - Minimal contracts: prescribe only the three primitives plus layout
    - Raw status codes never cross this boundary; kernels return a
      decoded KernelStatus
    - Kernels are stateless: the working buffer is owned by the caller and
      only lent to the kernel for the duration of one call
"""

from typing import Protocol, Any, TYPE_CHECKING, runtime_checkable

import numpy as np
from numpy.typing import NDArray

if TYPE_CHECKING:
    from pycholesky.cholesky._status import KernelStatus


@runtime_checkable
class Kernel(Protocol):
    """
    Protocol for factorization kernels.

    A kernel binds the three symmetric positive-definite primitives
    (factorize, solve, invert) of one array library. It always works on the
    lower triangle.
    """

    @property
    def name(self) -> str:
        """
        Kernel identifier.

        Convention: '{device}_{library}'
        Examples: 'cpu_lapack', 'gpu_torch_fp32'
        """
        ...

    def prepare(self, a: NDArray[np.floating[Any]]) -> Any:
        """
        Copy a square matrix into a fresh buffer in the kernel's layout.

        Raises:
            KernelContractError: If the buffer cannot satisfy the layout
        """
        ...

    def factorize(self, buffer: Any) -> tuple[Any, 'KernelStatus']:
        """Factorize the lower triangle of ``buffer`` (A = L L^T)."""
        ...

    def lower(self, buffer: Any) -> NDArray[np.floating[Any]]:
        """Host copy of a factorized buffer, upper triangle unspecified."""
        ...

    def solve(
        self, buffer: Any, rhs: NDArray[np.floating[Any]]
    ) -> tuple[NDArray[np.floating[Any]], 'KernelStatus']:
        """Solve A X = rhs for an (n, k) right-hand side."""
        ...

    def invert(self, buffer: Any) -> tuple[NDArray[np.floating[Any]], 'KernelStatus']:
        """Inverse of A; only the lower triangle of the output is valid."""
        ...
