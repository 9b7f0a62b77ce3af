"""
Tests for the LAPACK kernel binding.

Checks the primitive contract directly: layout guard, status decoding,
and that solve/invert leave the factorized buffer untouched.
"""

import numpy as np
import pytest

from pycholesky.core.exceptions import KernelContractError
from pycholesky.core.protocols import Kernel
from pycholesky.cholesky._status import RankDeficientAt, Success
from pycholesky.cholesky.backends.cpu import LapackKernel


@pytest.fixture
def kernel():
    return LapackKernel()


class TestProtocol:

    def test_is_kernel(self, kernel):
        assert isinstance(kernel, Kernel)

    def test_name(self, kernel):
        assert kernel.name == 'cpu_lapack'


class TestPrepare:

    def test_fortran_ordered_copy(self, kernel, spd_matrix):
        buffer = kernel.prepare(spd_matrix)
        assert buffer.flags.f_contiguous
        assert buffer is not spd_matrix
        np.testing.assert_array_equal(buffer, spd_matrix)

    def test_keeps_dtype(self, kernel):
        buffer = kernel.prepare(np.eye(3, dtype=np.float32))
        assert buffer.dtype == np.float32


class TestLayoutGuard:

    def test_c_ordered_buffer_rejected(self, kernel, spd_matrix):
        with pytest.raises(KernelContractError, match="Fortran"):
            kernel.factorize(np.ascontiguousarray(spd_matrix))

    def test_non_square_buffer_rejected(self, kernel):
        with pytest.raises(KernelContractError, match="square"):
            kernel.factorize(np.asfortranarray(np.ones((2, 3))))

    def test_integer_buffer_rejected(self, kernel):
        with pytest.raises(KernelContractError, match="dtype"):
            kernel.factorize(np.asfortranarray(np.eye(2, dtype=np.int64)))

    def test_non_array_rejected(self, kernel):
        with pytest.raises(KernelContractError, match="numpy"):
            kernel.factorize([[1.0]])

    def test_rhs_shape_mismatch_rejected(self, kernel, spd_matrix):
        buffer, _ = kernel.factorize(kernel.prepare(spd_matrix))
        with pytest.raises(KernelContractError, match="right-hand side"):
            kernel.solve(buffer, np.ones((4, 1)))


class TestFactorize:

    def test_success(self, kernel):
        buffer, status = kernel.factorize(kernel.prepare(np.diag([4.0, 9.0])))
        assert status == Success()
        np.testing.assert_allclose(np.diag(buffer), [2.0, 3.0])

    def test_rank_deficient_reports_leading_minor(self, kernel, rank_deficient_matrix):
        _, status = kernel.factorize(kernel.prepare(rank_deficient_matrix))
        assert status == RankDeficientAt(3)

    def test_indefinite_reports_leading_minor(self, kernel):
        A = np.array([[1.0, 2.0], [2.0, 1.0]])
        _, status = kernel.factorize(kernel.prepare(A))
        assert status == RankDeficientAt(2)

    def test_float32_routine(self, kernel):
        buffer, status = kernel.factorize(kernel.prepare(np.diag([4.0, 9.0]).astype(np.float32)))
        assert status == Success()
        assert buffer.dtype == np.float32


class TestSolveInvert:

    def test_solve(self, kernel, spd_matrix, rng):
        buffer, _ = kernel.factorize(kernel.prepare(spd_matrix))
        B = rng.standard_normal((5, 3))
        X, status = kernel.solve(buffer, B)
        assert status == Success()
        np.testing.assert_allclose(spd_matrix @ X, B, rtol=1e-10, atol=1e-12)

    def test_solve_does_not_touch_inputs(self, kernel, spd_matrix, rng):
        buffer, _ = kernel.factorize(kernel.prepare(spd_matrix))
        before = buffer.copy()
        B = rng.standard_normal((5, 2))
        B_before = B.copy()
        kernel.solve(buffer, B)
        np.testing.assert_array_equal(buffer, before)
        np.testing.assert_array_equal(B, B_before)

    def test_invert_lower_triangle(self, kernel, spd_matrix):
        buffer, _ = kernel.factorize(kernel.prepare(spd_matrix))
        inv, status = kernel.invert(buffer)
        assert status == Success()
        np.testing.assert_allclose(
            np.tril(inv), np.tril(np.linalg.inv(spd_matrix)), rtol=1e-10, atol=1e-12
        )

    def test_invert_does_not_touch_buffer(self, kernel, spd_matrix):
        buffer, _ = kernel.factorize(kernel.prepare(spd_matrix))
        before = buffer.copy()
        kernel.invert(buffer)
        np.testing.assert_array_equal(buffer, before)
