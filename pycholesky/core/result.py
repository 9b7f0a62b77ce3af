"""
Generic result container for all PyCholesky computations.

The Result class provides a standardized envelope for everything a kernel
produces. This enables shared tooling for timing, reproducibility and
diagnostics while letting each computation define its own payload.

Design decisions:
    - Generic over parameter payload P for type safety
    - info dict for flexible metadata (status, rank, dtype)
    - timing is optional (don't burden unit tests)
    - provenance for reproducibility (versions)
    - Immutable (frozen=True) for reproducibility
"""

from dataclasses import dataclass, field
from typing import TypeVar, Generic, Any

P = TypeVar('P')  # Parameter payload type


def _default_provenance() -> dict[str, Any]:
    """Generate minimal provenance metadata."""
    import pycholesky
    provenance = {
        'pycholesky_version': pycholesky.__version__,
    }
    try:
        import numpy as np
        provenance['numpy_version'] = np.__version__
    except ImportError:
        pass
    try:
        import scipy
        provenance['scipy_version'] = scipy.__version__
    except ImportError:
        pass
    return provenance


@dataclass(frozen=True)
class Result(Generic[P]):
    """
    Immutable result envelope for a factorization.

    Type Parameters:
        P: The payload type

    Attributes:
        params: Computed payload (factor, working buffer, rank, ...)
        info: Structured metadata (method, status, rank)
        timing: Execution timing breakdown, or None if not measured
        backend_name: Identifier of the kernel that produced this result
        warnings: Non-fatal issues encountered during computation
        provenance: Reproducibility metadata (versions)

    Examples:
        >>> Result(
        ...     params=CholeskyParams(L=L, factor=buf, rank=3, status=Success()),
        ...     info={'method': 'potrf', 'rank': 3},
        ...     timing={'total_seconds': 0.001},
        ...     backend_name='cpu_lapack'
        ... )
    """
    params: P
    info: dict[str, Any]
    timing: dict[str, float] | None
    backend_name: str
    warnings: tuple[str, ...] = field(default_factory=tuple)
    provenance: dict[str, Any] = field(default_factory=_default_provenance)

    def has_warning(self, substring: str) -> bool:
        """Check if any warning contains the given substring."""
        return any(substring in w for w in self.warnings)
