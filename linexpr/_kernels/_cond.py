# _cond.py

r"""Condition number :math:`\kappa(A) = \|A\| \|A^{-1}\|`.

Failures are never raised: a singular matrix, a non-finite entry or any
numerical error of the underlying routines gives ``inf``.
"""

import numpy as np
import plum  # type: ignore  # noqa: PGH003

from linexpr._base import MatrixExpression
from linexpr._errors import BadArgumentError, LinexprError
from linexpr._kernels._lapack import as_fortran
from linexpr._kernels._lu import lu_inverse
from linexpr._kernels._svd import gesdd
from linexpr._tags import (
    Norm1Tag,
    Norm2Tag,
    NormFrobeniusTag,
    NormInfTag,
    NormTag,
    norm_1,
    norm_2,
    norm_frobenius,
    norm_inf,
)

_NUMPY_ORD = {Norm1Tag: 1, NormInfTag: np.inf, NormFrobeniusTag: "fro"}


def _finite_or_inf(value: object) -> float:
    value = float(value)
    return value if np.isfinite(value) else float("inf")


@plum.dispatch
def cond(a: MatrixExpression) -> float:
    """Condition number of ``a`` in the 2-norm.

    Args:
        a: Matrix. Only the 2-norm accepts a rectangular matrix.
        norm: One of :data:`norm_2` (default), :data:`norm_1`,
            :data:`norm_inf`, :data:`norm_frobenius`.

    Raises:
        BadArgumentError
            If ``a`` is rectangular and the norm is not the 2-norm.
    """
    return cond(a, norm_2)


@cond.dispatch
def _(a: MatrixExpression, norm: Norm2Tag) -> float:  # noqa: ARG001
    if min(a.shape) == 0:
        return 1.0
    try:
        _, s, _ = gesdd(as_fortran(a), compute_uv=False, full=False)
    except (ArithmeticError, LinexprError):
        return float("inf")
    if s[-1] == 0:
        return float("inf")
    return _finite_or_inf(s[0] / s[-1])


@cond.dispatch
def _(a: MatrixExpression, norm: NormTag) -> float:
    m, n = a.shape
    if m != n:
        msg = f"The {norm!r} condition number needs a square matrix, got shape {a.shape}."
        raise BadArgumentError(msg)
    if n == 0:
        return 1.0
    data = as_fortran(a)
    try:
        info, inverse = lu_inverse(data)
    except (ArithmeticError, LinexprError):
        return float("inf")
    if info != 0:
        return float("inf")
    ord_ = _NUMPY_ORD[type(norm)]
    return _finite_or_inf(np.linalg.norm(data, ord_) * np.linalg.norm(inverse, ord_))


def cond_1(a: MatrixExpression) -> float:
    return cond(a, norm_1)


def cond_2(a: MatrixExpression) -> float:
    return cond(a, norm_2)


def cond_inf(a: MatrixExpression) -> float:
    return cond(a, norm_inf)


def cond_frobenius(a: MatrixExpression) -> float:
    return cond(a, norm_frobenius)
