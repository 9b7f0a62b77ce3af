"""
Tolerance tiers for numerical validation.

Defines precision expectations for the factorization kernels:
- CPU FP64 (LAPACK reference): reconstruction to ~1e-10 relative
- CPU FP32: LAPACK single-precision routines
- GPU FP64: same as CPU FP64
- GPU FP32: relaxed for single-precision arithmetic

Used by the test suite to compare kernels against the LAPACK reference.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ToleranceTier:
    """Tolerance specification for numerical comparison."""
    rtol: float
    atol: float
    name: str
    description: str


CPU_FP64 = ToleranceTier(
    rtol=1e-10,
    atol=1e-12,
    name='cpu_fp64',
    description='LAPACK double precision reference',
)

CPU_FP32 = ToleranceTier(
    rtol=1e-4,
    atol=1e-5,
    name='cpu_fp32',
    description='LAPACK single precision',
)

GPU_FP64 = ToleranceTier(
    rtol=1e-10,
    atol=1e-12,
    name='gpu_fp64',
    description='torch double precision, matches LAPACK reference',
)

GPU_FP32 = ToleranceTier(
    rtol=1e-4,
    atol=1e-5,
    name='gpu_fp32',
    description='torch single precision',
)


def select_tolerance(backend_name: str, dtype_name: str = 'float64') -> ToleranceTier:
    """Select the tolerance tier for a kernel name and working dtype."""
    single = dtype_name == 'float32'
    if backend_name.startswith('gpu'):
        return GPU_FP32 if single or 'fp32' in backend_name else GPU_FP64
    return CPU_FP32 if single else CPU_FP64
