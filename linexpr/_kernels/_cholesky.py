# _cholesky.py

r"""Cholesky decomposition :math:`A = LL^H` of a Hermitian positive definite matrix.

Only the lower triangle of :math:`A` is read. The status is ``0`` on success
and ``1 + k`` when the leading minor of order ``k + 1`` is not positive
definite, i.e. :math:`A_{kk} - \sum_{j<k} |L_{kj}|^2 \leq 0`.
"""

import jax.numpy as jnp

from linexpr._base import MatrixExpression, VectorExpression
from linexpr._container import Matrix, Vector
from linexpr._errors import BadSizeError, UnsupportedError
from linexpr._kernels._lapack import (
    as_fortran,
    as_rhs,
    invoke,
    lapack_dtype,
    orientation_of_operand,
    routine,
    to_matrix,
    to_result,
)


def _check_square(a: MatrixExpression) -> None:
    if a.size1 != a.size2:
        msg = f"Cholesky decomposition needs a square matrix, got shape {a.shape}."
        raise BadSizeError(msg)


def cholesky_decompose(a: MatrixExpression) -> tuple[int, Matrix]:
    """Lower triangular Cholesky factor of ``a``.

    Returns:
        ``(status, L)``. ``L`` is only meaningful when the status is ``0``.

    Raises:
        BadSizeError
            If ``a`` is not square.
    """
    _check_square(a)
    data = as_fortran(a)
    if data.shape[0] == 0:
        return 0, to_matrix(data, orientation_of_operand(a))
    c, info = invoke(routine("potrf", data), data, lower=1, clean=1)
    return info, to_matrix(c, orientation_of_operand(a))


def cholesky_decompose_inplace(a: Matrix) -> int:
    """Overwrite the lower triangle of ``a`` with its Cholesky factor.

    The strict upper triangle is kept. Returns the status.
    """
    if not isinstance(a, Matrix):
        msg = f"Only matrix containers can be decomposed in place, got {type(a).__name__}."
        raise UnsupportedError(msg)
    info, factor = cholesky_decompose(a)
    dense = a.todense()
    a.assign(Matrix(jnp.tril(factor.todense()) + jnp.triu(dense, 1)))
    return info


def cholesky_solve(
    factor: MatrixExpression, b: VectorExpression | MatrixExpression
) -> Vector | Matrix:
    r"""Solve :math:`Ax = b` given the factor :math:`L` of :math:`A = LL^H`.

    Raises:
        BadSizeError
            If ``factor`` is not square or ``b`` does not fit it.
    """
    _check_square(factor)
    if b.shape[0] != factor.size1:
        msg = f"Right-hand side with {b.shape[0]} rows does not fit a {factor.shape} factor."
        raise BadSizeError(msg)
    dtype = lapack_dtype(factor.dtype, b.dtype)
    c = as_fortran(factor, dtype)
    rhs, vector = as_rhs(b, dtype)
    if c.shape[0] == 0:
        return to_result(rhs, vector, orientation_of_operand(b))
    x, _ = invoke(routine("potrs", c, rhs), c, rhs, lower=1)
    return to_result(x, vector, orientation_of_operand(b))
