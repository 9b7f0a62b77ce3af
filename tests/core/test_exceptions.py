"""
Tests for PyCholesky exception hierarchy.

Validates:
    - Inheritance chain (all exceptions catchable via PyCholeskyError)
    - Diagnostic attributes on NotPositiveDefiniteError and
      KernelContractError
    - Default attribute values (None for optional attributes)
"""

import pytest

from pycholesky.core.exceptions import (
    DimensionError,
    KernelContractError,
    NotPositiveDefiniteError,
    NumericalError,
    PyCholeskyError,
    ValidationError,
)


# ═══════════════════════════════════════════════════════════════════════
# Inheritance hierarchy
# ═══════════════════════════════════════════════════════════════════════


class TestInheritance:
    """Every exception is catchable via PyCholeskyError."""

    def test_validation_error_is_pycholesky_error(self):
        with pytest.raises(PyCholeskyError):
            raise ValidationError("bad input")

    def test_dimension_error_is_validation_error(self):
        with pytest.raises(ValidationError):
            raise DimensionError("wrong shape")

    def test_not_positive_definite_is_numerical_error(self):
        with pytest.raises(NumericalError):
            raise NotPositiveDefiniteError("not PD")

    def test_kernel_contract_error_is_pycholesky_error(self):
        with pytest.raises(PyCholeskyError):
            raise KernelContractError("potrf misuse")

    def test_kernel_contract_error_is_not_validation_error(self):
        """A kernel misuse is never reported as a user input problem."""
        err = KernelContractError("potrf misuse")
        assert not isinstance(err, ValidationError)
        assert not isinstance(err, NumericalError)

    def test_dimension_error_is_not_numerical_error(self):
        assert not isinstance(DimensionError("x"), NumericalError)


# ═══════════════════════════════════════════════════════════════════════
# NotPositiveDefiniteError
# ═══════════════════════════════════════════════════════════════════════


class TestNotPositiveDefiniteError:
    """NotPositiveDefiniteError carries rank diagnostics."""

    def test_all_attributes(self):
        err = NotPositiveDefiniteError(
            "Cholesky failed",
            matrix_name="covariance",
            rank=2,
            expected_rank=3,
        )
        assert str(err) == "Cholesky failed"
        assert err.matrix_name == "covariance"
        assert err.rank == 2
        assert err.expected_rank == 3

    def test_defaults_are_none(self):
        err = NotPositiveDefiniteError("not PD")
        assert err.matrix_name is None
        assert err.rank is None
        assert err.expected_rank is None


# ═══════════════════════════════════════════════════════════════════════
# KernelContractError
# ═══════════════════════════════════════════════════════════════════════


class TestKernelContractError:
    """KernelContractError carries the routine and raw status."""

    def test_all_attributes(self):
        err = KernelContractError("illegal argument", routine="potrs", code=-4)
        assert str(err) == "illegal argument"
        assert err.routine == "potrs"
        assert err.code == -4

    def test_defaults_are_none(self):
        err = KernelContractError("layout")
        assert err.routine is None
        assert err.code is None
