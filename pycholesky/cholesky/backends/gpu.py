"""
Torch kernel for symmetric factorization.

Performance path for large matrices, validated against the LAPACK
reference. Supports CUDA (Linux/Windows), MPS (macOS Apple Silicon), and
torch on the host CPU (used to validate the kernel without a GPU).

Primitive mapping:
    factorize -> torch.linalg.cholesky_ex   (info has potrf semantics)
    solve     -> torch.cholesky_solve
    invert    -> torch.cholesky_inverse     (lower triangle read back)
"""

from typing import Any
import warnings
import numpy as np
from numpy.typing import NDArray

from pycholesky.core.exceptions import KernelContractError
from pycholesky.cholesky._status import KernelStatus, Success, decode_info


class TorchKernel:
    """
    Torch kernel for the Kernel protocol.

    FP32 by default on GPUs for performance on consumer cards; FP64 on
    request. The working buffer is a device tensor and never leaves the
    kernel except through ``lower()``.
    """

    def __init__(self, use_fp64: bool = False, device: str = 'cuda'):
        """
        Initialize torch kernel.

        Args:
            use_fp64: If True, compute in FP64 (slow on consumer GPUs).
                     If False, compute in FP32.
            device: Torch device ('cuda', 'cuda:0', 'mps', 'cpu')
        """
        import torch

        if device.startswith('cuda'):
            if not torch.cuda.is_available():
                raise RuntimeError(
                    "CUDA not available. Install PyTorch with CUDA support, "
                    "or use backend='cpu'."
                )
            self.device = torch.device(device)
            self.use_fp64 = use_fp64

        elif device == 'mps':
            if not (hasattr(torch.backends, 'mps') and torch.backends.mps.is_available()):
                raise RuntimeError(
                    "MPS not available. Requires macOS with Apple Silicon "
                    "and PyTorch with MPS support."
                )
            if use_fp64:
                raise RuntimeError(
                    "MPS does not support float64. Use use_fp64=False "
                    "or use backend='cpu' for double precision."
                )
            self.device = torch.device('mps')
            self.use_fp64 = False

        elif device == 'cpu':
            self.device = torch.device('cpu')
            self.use_fp64 = use_fp64

        else:
            raise ValueError(
                f"Unknown torch device: {device!r}. Use 'cuda', 'mps' or 'cpu'."
            )

        self.dtype = torch.float64 if self.use_fp64 else torch.float32

    @property
    def name(self) -> str:
        precision = "fp64" if self.use_fp64 else "fp32"
        prefix = 'cpu' if self.device.type == 'cpu' else 'gpu'
        return f'{prefix}_torch_{precision}'

    @property
    def sync_cuda(self) -> bool:
        return self.device.type == 'cuda'

    def _check_layout(self, buffer: Any, routine: str) -> None:
        import torch

        if not isinstance(buffer, torch.Tensor):
            raise KernelContractError(
                f"{routine}: expected torch tensor, got {type(buffer).__name__}",
                routine=routine,
            )
        if buffer.ndim != 2 or buffer.shape[0] != buffer.shape[1]:
            raise KernelContractError(
                f"{routine}: expected square buffer, got shape {tuple(buffer.shape)}",
                routine=routine,
            )
        if buffer.dtype != self.dtype or buffer.device.type != self.device.type:
            raise KernelContractError(
                f"{routine}: buffer is {buffer.dtype} on {buffer.device}, "
                f"kernel expects {self.dtype} on {self.device}",
                routine=routine,
            )

    def prepare(self, a: NDArray[np.floating[Any]]) -> Any:
        import torch

        if a.dtype == np.float64 and not self.use_fp64:
            warnings.warn(
                f"{self.name}: float64 input is factorized in float32; "
                f"pass use_fp64=True or use backend='cpu' for double precision",
                stacklevel=3,
            )
        # Mirror the lower triangle: the upper triangle is not part of
        # the input contract and must not reach the kernel
        sym = np.tril(a) + np.tril(a, -1).T
        buffer = torch.from_numpy(np.ascontiguousarray(sym)).to(
            device=self.device, dtype=self.dtype
        )
        self._check_layout(buffer, 'potrf')
        return buffer

    def factorize(self, buffer: Any) -> tuple[Any, KernelStatus]:
        import torch

        self._check_layout(buffer, 'potrf')
        L, info = torch.linalg.cholesky_ex(buffer, upper=False)
        return L, decode_info(int(info.item()), 'potrf')

    def lower(self, buffer: Any) -> NDArray[np.floating[Any]]:
        return buffer.detach().cpu().numpy().copy()

    def solve(
        self, buffer: Any, rhs: NDArray[np.floating[Any]]
    ) -> tuple[NDArray[np.floating[Any]], KernelStatus]:
        import torch

        self._check_layout(buffer, 'potrs')
        if rhs.ndim != 2 or rhs.shape[0] != buffer.shape[0]:
            raise KernelContractError(
                f"potrs: right-hand side shape {rhs.shape} does not match "
                f"factor of size {buffer.shape[0]}",
                routine='potrs',
            )
        B = torch.from_numpy(np.ascontiguousarray(rhs)).to(
            device=self.device, dtype=self.dtype
        )
        X = torch.cholesky_solve(B, buffer, upper=False)
        return X.cpu().numpy(), Success()

    def invert(self, buffer: Any) -> tuple[NDArray[np.floating[Any]], KernelStatus]:
        import torch

        self._check_layout(buffer, 'potri')
        inv = torch.cholesky_inverse(buffer, upper=False)
        return np.tril(inv.cpu().numpy()), Success()
