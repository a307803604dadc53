# _lsq.py

r"""Linear least squares :math:`\min_x \|Ax - b\|_2`.

- :func:`llsq_qr`: QR based (``gels``), needs :math:`A` of full rank
- :func:`llsq_svd`: SVD based (``gelsd``), singular values below a relative
  threshold are treated as zero, so rank deficient systems get the minimum
  norm solution
- :func:`llsq`: generic entry point, uses the SVD

The right-hand side may be a vector or a matrix of several right-hand sides.
The solution has as many rows as :math:`A` has columns.
"""

import numpy as np

from linexpr._base import MatrixExpression, VectorExpression
from linexpr._container import Matrix, Vector
from linexpr._errors import BadSizeError, ConvergenceError, SingularMatrixError
from linexpr._kernels._lapack import (
    as_fortran,
    as_rhs,
    check_info,
    invoke,
    lapack_dtype,
    optimal_lwork,
    orientation_of_operand,
    routine,
    to_result,
)

Operand = VectorExpression | MatrixExpression


def _prepare(a: MatrixExpression, b: Operand) -> tuple[np.ndarray, np.ndarray, bool]:
    m, n = a.shape
    if b.shape[0] != m:
        msg = f"Right-hand side with {b.shape[0]} rows does not fit a {a.shape} matrix."
        raise BadSizeError(msg)
    dtype = lapack_dtype(a.dtype, b.dtype)
    a_data = as_fortran(a, dtype)
    rhs, vector = as_rhs(b, dtype)
    # the routines return the solution in the leading n rows of b
    padded = np.zeros((max(m, n), rhs.shape[1]), dtype=dtype, order="F")
    padded[:m] = rhs
    return a_data, padded, vector


def llsq_qr(a: MatrixExpression, b: Operand) -> Vector | Matrix:
    """Least-squares solution via the QR decomposition of ``a``.

    Raises:
        BadSizeError
            If ``b`` has not as many rows as ``a``.
        SingularMatrixError
            If ``a`` does not have full rank.
    """
    m, n = a.shape
    a_data, rhs, vector = _prepare(a, b)
    nrhs = rhs.shape[1]
    work, info = routine("gels_lwork", a_data)(m, n, nrhs)
    check_info("gels_lwork", info)
    _, x, info = invoke(routine("gels", a_data, rhs), a_data, rhs, lwork=optimal_lwork(work))
    if info > 0:
        msg = f"Matrix does not have full rank, diagonal element {info - 1} of R is zero."
        raise SingularMatrixError(msg, info)
    return to_result(x[:n], vector, orientation_of_operand(b))


def llsq_svd(a: MatrixExpression, b: Operand, cond: float | None = None) -> Vector | Matrix:
    r"""Least-squares solution via the SVD of ``a``.

    Args:
        a: :math:`m \times n` matrix.
        b: Right-hand side(s) with :math:`m` rows.
        cond: Singular values :math:`\sigma_i \leq \mathrm{cond} \cdot \sigma_1`
            are treated as zero. Defaults to :math:`\epsilon \max(m, n)`.

    Raises:
        BadSizeError
            If ``b`` has not as many rows as ``a``.
        ConvergenceError
            If the SVD does not converge.
    """
    m, n = a.shape
    a_data, rhs, vector = _prepare(a, b)
    if cond is None:
        cond = np.finfo(a_data.dtype).eps * max(m, n)
    nrhs = rhs.shape[1]
    func = routine("gelsd", a_data, rhs)
    lwork_func = routine("gelsd_lwork", a_data, rhs)
    if np.iscomplexobj(a_data):
        work, rwork, iwork, info = lwork_func(m, n, nrhs, cond)
        check_info("gelsd_lwork", info)
        x, _, _, info = func(
            a_data, rhs, optimal_lwork(work), int(rwork), int(iwork), cond, False, False
        )
    else:
        work, iwork, info = lwork_func(m, n, nrhs, cond)
        check_info("gelsd_lwork", info)
        x, _, _, info = func(a_data, rhs, optimal_lwork(work), int(iwork), cond, False, False)
    if check_info("gelsd", info) > 0:
        raise ConvergenceError("gelsd", info)
    return to_result(x[:n], vector, orientation_of_operand(b))


def llsq(a: MatrixExpression, b: Operand) -> Vector | Matrix:
    """Least-squares solution, see :func:`llsq_svd`."""
    return llsq_svd(a, b)


def _assign(b: Vector | Matrix, x: Vector | Matrix) -> None:
    if isinstance(b, Matrix):
        b.resize(*x.shape, preserve=False)
    else:
        b.resize(x.size, preserve=False)
    b.assign(x)


def llsq_qr_inplace(a: MatrixExpression, b: Vector | Matrix) -> None:
    """Overwrite ``b`` with the solution of :func:`llsq_qr`, resizing it."""
    _assign(b, llsq_qr(a, b))


def llsq_svd_inplace(a: MatrixExpression, b: Vector | Matrix, cond: float | None = None) -> None:
    """Overwrite ``b`` with the solution of :func:`llsq_svd`, resizing it."""
    _assign(b, llsq_svd(a, b, cond))


def llsq_inplace(a: MatrixExpression, b: Vector | Matrix) -> None:
    _assign(b, llsq(a, b))
