"""
Factorization kernels.

Available kernels:
    LapackKernel: CPU reference implementation (LAPACK via SciPy)
    TorchKernel: torch implementation for CUDA / MPS (imported lazily)
"""

from __future__ import annotations

from typing import Literal
import warnings

from pycholesky.core.compute.device import select_device
from pycholesky.core.exceptions import ValidationError
from pycholesky.core.protocols import Kernel
from pycholesky.cholesky.backends.cpu import LapackKernel

BackendChoice = Literal['auto', 'cpu', 'gpu', 'cpu_lapack', 'gpu_torch']


def get_kernel(choice: BackendChoice | Kernel = 'cpu') -> Kernel:
    """
    Select and instantiate the appropriate kernel.

    Args:
        choice: Backend preference, or an already constructed kernel
            - 'cpu' / 'cpu_lapack': LAPACK reference kernel
            - 'gpu' / 'gpu_torch': torch kernel on the best GPU (raises if none)
            - 'auto': torch kernel if a GPU is available, else LAPACK

    Returns:
        Kernel instance ready to factorize

    Raises:
        ValidationError: If unknown backend specified
        RuntimeError: If GPU requested but unavailable
    """
    if not isinstance(choice, str):
        if isinstance(choice, Kernel):
            return choice
        raise ValidationError(
            f"backend: expected a backend name or a Kernel, got {type(choice).__name__}"
        )

    if choice in ('cpu', 'cpu_lapack'):
        return LapackKernel()

    if choice == 'auto':
        device = select_device('auto')
        if device.is_gpu:
            try:
                from pycholesky.cholesky.backends.gpu import TorchKernel
            except ImportError:
                warnings.warn(
                    f"GPU {device} detected but the torch kernel could not be "
                    f"imported, falling back to CPU",
                    stacklevel=2,
                )
                return LapackKernel()
            return TorchKernel(device=device.torch_device)
        return LapackKernel()

    if choice in ('gpu', 'gpu_torch'):
        device = select_device('gpu')
        from pycholesky.cholesky.backends.gpu import TorchKernel
        return TorchKernel(device=device.torch_device)

    raise ValidationError(f"Unknown backend: {choice!r}")


__all__ = [
    "BackendChoice",
    "LapackKernel",
    "get_kernel",
]
