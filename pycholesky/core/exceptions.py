"""
Exception hierarchy for PyCholesky.

All exceptions inherit from PyCholeskyError to allow catching any
library-specific error. Domain-specific exceptions should inherit from
the appropriate base class here.

Design principles:
    - Exceptions carry diagnostic information as attributes
    - Error messages are actionable with actual vs expected values
    - Never catch and re-raise with less information
    - Rank deficiency is an outcome, not an error: it is only raised
      when the caller asks for it explicitly
"""


class PyCholeskyError(Exception):
    """Base exception for all PyCholesky errors."""
    pass


class ValidationError(PyCholeskyError):
    """
    Input validation failed.

    Raised when user-provided inputs fail validation checks.
    """
    pass


class DimensionError(ValidationError):
    """
    Array dimensions are incorrect or inconsistent.

    Raised when a matrix is not square, when a right-hand side does not
    match the size of the factorization, or when a recomputation is
    attempted with a matrix of a different size. Always raised before
    any numeric work is done.
    """
    pass


class NumericalError(PyCholeskyError):
    """
    Numerical computation failed.

    Base class for errors arising from numerical issues during computation.
    """
    pass


class NotPositiveDefiniteError(NumericalError):
    """
    Matrix is not positive definite.

    Raised only on request (see ``Cholesky.require_full_rank``). The
    factorization itself records rank deficiency instead of raising.

    Attributes:
        matrix_name: Name/description of the problematic matrix
        rank: Numerical rank reported by the factorization
        expected_rank: Size of the matrix
    """

    def __init__(
        self,
        message: str,
        matrix_name: str | None = None,
        rank: int | None = None,
        expected_rank: int | None = None
    ):
        super().__init__(message)
        self.matrix_name = matrix_name
        self.rank = rank
        self.expected_rank = expected_rank


class KernelContractError(PyCholeskyError):
    """
    A factorization kernel reported that it was called incorrectly.

    Raised for a negative LAPACK ``info`` (illegal argument), for a
    non-zero status from a solve or inversion after a factorization, and
    for a working buffer in the wrong layout. This signals a defect in the
    calling code, never a property of user data, and is not meant to be
    caught.

    Attributes:
        routine: Kernel routine that failed (e.g. 'potrf', 'potrs')
        code: Raw status code returned by the routine, if any
    """

    def __init__(
        self,
        message: str,
        routine: str | None = None,
        code: int | None = None
    ):
        super().__init__(message)
        self.routine = routine
        self.code = code
