"""
Tests for the cholesky() entry point and backend dispatch.
"""

import numpy as np
import pytest

from pycholesky import Cholesky, CholeskyDesign, cholesky
from pycholesky.core.exceptions import DimensionError, ValidationError
from pycholesky.core.compute.device import detect_gpu
from pycholesky.cholesky.backends import get_kernel
from pycholesky.cholesky.backends.cpu import LapackKernel

HAS_GPU = detect_gpu() is not None


class TestCholeskyFunction:

    def test_returns_engine(self, spd_matrix):
        chol = cholesky(spd_matrix)
        assert isinstance(chol, Cholesky)
        assert chol.size == 5

    def test_default_backend_is_lapack(self, spd_matrix):
        assert cholesky(spd_matrix).backend_name == 'cpu_lapack'

    def test_accepts_design(self):
        design = CholeskyDesign.from_array(np.diag([4.0, 9.0]))
        assert cholesky(design).determinant() == pytest.approx(36.0)

    def test_accepts_nested_lists(self):
        chol = cholesky([[4, 2], [2, 3]])
        assert chol.dtype == np.float64
        np.testing.assert_allclose(chol.get_L() @ chol.get_L().T, [[4, 2], [2, 3]])

    def test_accepts_values_attribute(self):
        class Frame:
            values = np.eye(3)

        assert cholesky(Frame()).rank() == 3

    def test_same_as_engine(self, spd_matrix):
        np.testing.assert_array_equal(
            cholesky(spd_matrix).get_L(), Cholesky(spd_matrix).get_L()
        )

    def test_rejects_complex(self):
        with pytest.raises(ValidationError, match="complex"):
            cholesky(np.eye(2, dtype=complex))

    def test_rejects_nan_lower_triangle(self):
        A = np.eye(3)
        A[2, 0] = np.nan
        with pytest.raises(ValidationError, match="non-finite"):
            cholesky(A)

    def test_rejects_empty(self):
        with pytest.raises(ValidationError):
            cholesky(np.empty((0, 0)))

    def test_rejects_vector(self):
        with pytest.raises(DimensionError):
            cholesky(np.ones(3))


class TestBackendDispatch:

    @pytest.mark.parametrize("choice", ['cpu', 'cpu_lapack'])
    def test_cpu_names(self, choice):
        assert isinstance(get_kernel(choice), LapackKernel)

    def test_kernel_instance_passes_through(self):
        kernel = LapackKernel()
        assert get_kernel(kernel) is kernel

    def test_shared_kernel_instance(self):
        kernel = LapackKernel()
        a = cholesky(np.diag([4.0, 9.0]), backend=kernel)
        b = cholesky(np.diag([1.0, 16.0]), backend=kernel)
        assert a.determinant() == pytest.approx(36.0)
        assert b.determinant() == pytest.approx(16.0)

    def test_unknown_backend(self):
        with pytest.raises(ValidationError, match="Unknown backend"):
            cholesky(np.eye(2), backend='tpu')

    def test_non_kernel_object(self):
        with pytest.raises(ValidationError, match="Kernel"):
            get_kernel(42)

    @pytest.mark.skipif(HAS_GPU, reason="GPU available")
    def test_auto_without_gpu_is_cpu(self):
        assert cholesky(np.eye(2), backend='auto').backend_name == 'cpu_lapack'

    @pytest.mark.skipif(HAS_GPU, reason="GPU available")
    def test_gpu_without_gpu_raises(self):
        with pytest.raises(RuntimeError, match="no GPU available"):
            cholesky(np.eye(2), backend='gpu')
