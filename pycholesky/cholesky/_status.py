"""
Decoded kernel status.

LAPACK overloads a single integer ``info``: zero is success, a positive
value is a mathematical outcome (leading minor k not positive definite,
or a singular factor), a negative value means argument -info was illegal.
The integer is decoded exactly once, at the kernel boundary, into one of
three variants. Nothing past the kernel ever sees a raw status code.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Union

from pycholesky.core.exceptions import KernelContractError

Routine = Literal['potrf', 'potrs', 'potri']


@dataclass(frozen=True)
class Success:
    """The routine completed."""

    def __str__(self) -> str:
        return "success"


@dataclass(frozen=True)
class RankDeficientAt:
    """
    The leading ``minor`` x ``minor`` block is not positive definite.

    ``minor`` is 1-indexed, as reported by ``potrf``. The largest
    positive-definite leading block therefore has size ``minor - 1``.
    """
    minor: int

    @property
    def rank(self) -> int:
        return self.minor - 1

    def __str__(self) -> str:
        return f"leading minor {self.minor} not positive definite"


@dataclass(frozen=True)
class Fatal:
    """The routine was called incorrectly or failed where it cannot."""
    routine: str
    code: int
    reason: str

    def __str__(self) -> str:
        return f"{self.routine} failed (info={self.code}): {self.reason}"


KernelStatus = Union[Success, RankDeficientAt, Fatal]


def decode_info(info: int, routine: Routine) -> KernelStatus:
    """
    Decode a LAPACK-style ``info`` value for one of the three routines.

    Args:
        info: Raw status returned by the routine
        routine: Which routine produced it

    Returns:
        Success, RankDeficientAt (potrf only) or Fatal
    """
    info = int(info)
    if info == 0:
        return Success()
    if info < 0:
        return Fatal(routine, info, f"argument {-info} had an illegal value")
    if routine == 'potrf':
        return RankDeficientAt(info)
    if routine == 'potri':
        return Fatal(routine, info, f"factor is singular at diagonal entry {info}")
    return Fatal(routine, info, "unexpected positive status")


def raise_if_fatal(status: KernelStatus) -> None:
    """Escalate a Fatal status to KernelContractError."""
    if isinstance(status, Fatal):
        raise KernelContractError(
            f"Kernel contract violated: {status}",
            routine=status.routine,
            code=status.code,
        )


def require_success(status: KernelStatus, routine: Routine) -> None:
    """
    Escalate anything but Success to KernelContractError.

    Used after solve and invert, where the factorization has already been
    validated and any other outcome means the kernel was misused.
    """
    raise_if_fatal(status)
    if not isinstance(status, Success):
        raise KernelContractError(
            f"Kernel contract violated: {routine} returned {status}",
            routine=routine,
        )
