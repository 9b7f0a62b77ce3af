"""
CPU reference kernel for symmetric factorization.

Binds LAPACK ``?potrf`` / ``?potrs`` / ``?potri`` through
``scipy.linalg.lapack``. This is the reference implementation the other
kernels are validated against.

The routines are called with ``lower=1`` on Fortran-ordered buffers.
``potrf`` is called with ``clean=0`` so its output matches the raw
primitive: the upper triangle of the working buffer keeps whatever the
input held there, and canonicalization is left to the engine.
"""

from typing import Any
import numpy as np
from numpy.typing import NDArray
from scipy.linalg import lapack

from pycholesky.core.exceptions import KernelContractError
from pycholesky.cholesky._status import KernelStatus, decode_info

_SUPPORTED_DTYPES = (np.float32, np.float64)


def _check_layout(buffer: Any, routine: str) -> None:
    """
    Guard the LAPACK boundary.

    A C-ordered buffer handed to a Fortran routine would be read
    transposed, which for ``lower=1`` silently factorizes the upper
    triangle instead.
    """
    if not isinstance(buffer, np.ndarray):
        raise KernelContractError(
            f"{routine}: expected numpy buffer, got {type(buffer).__name__}",
            routine=routine,
        )
    if buffer.ndim != 2 or buffer.shape[0] != buffer.shape[1]:
        raise KernelContractError(
            f"{routine}: expected square buffer, got shape {buffer.shape}",
            routine=routine,
        )
    if not buffer.flags.f_contiguous:
        raise KernelContractError(
            f"{routine}: buffer is not Fortran-contiguous",
            routine=routine,
        )
    if buffer.dtype not in _SUPPORTED_DTYPES:
        raise KernelContractError(
            f"{routine}: unsupported dtype {buffer.dtype}",
            routine=routine,
        )


class LapackKernel:
    """
    CPU kernel using LAPACK via SciPy.

    Implements the Kernel protocol. Stateless: the same instance can serve
    any number of engines.
    """

    @property
    def name(self) -> str:
        return 'cpu_lapack'

    def prepare(self, a: NDArray[np.floating[Any]]) -> NDArray[np.floating[Any]]:
        buffer = np.array(a, dtype=a.dtype, order='F', copy=True)
        _check_layout(buffer, 'potrf')
        return buffer

    def factorize(
        self, buffer: NDArray[np.floating[Any]]
    ) -> tuple[NDArray[np.floating[Any]], KernelStatus]:
        _check_layout(buffer, 'potrf')
        potrf, = lapack.get_lapack_funcs(('potrf',), (buffer,))
        c, info = potrf(buffer, lower=1, clean=0, overwrite_a=1)
        return c, decode_info(info, 'potrf')

    def lower(self, buffer: NDArray[np.floating[Any]]) -> NDArray[np.floating[Any]]:
        return np.array(buffer, copy=True)

    def solve(
        self,
        buffer: NDArray[np.floating[Any]],
        rhs: NDArray[np.floating[Any]],
    ) -> tuple[NDArray[np.floating[Any]], KernelStatus]:
        _check_layout(buffer, 'potrs')
        if rhs.ndim != 2 or rhs.shape[0] != buffer.shape[0]:
            raise KernelContractError(
                f"potrs: right-hand side shape {rhs.shape} does not match "
                f"factor of size {buffer.shape[0]}",
                routine='potrs',
            )
        b = np.array(rhs, dtype=buffer.dtype, order='F', copy=True)
        potrs, = lapack.get_lapack_funcs(('potrs',), (buffer,))
        x, info = potrs(buffer, b, lower=1, overwrite_b=1)
        return x, decode_info(info, 'potrs')

    def invert(
        self, buffer: NDArray[np.floating[Any]]
    ) -> tuple[NDArray[np.floating[Any]], KernelStatus]:
        _check_layout(buffer, 'potri')
        # potri overwrites its input; the cached factor must survive
        work = np.array(buffer, order='F', copy=True)
        potri, = lapack.get_lapack_funcs(('potri',), (work,))
        inv, info = potri(work, lower=1, overwrite_c=1)
        return inv, decode_info(info, 'potri')
