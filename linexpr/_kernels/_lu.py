# _lu.py

r"""LU decomposition with partial pivoting, :math:`PA = LU` (``getrf``/``getrs``).

The status returned by the decomposition and the solvers is ``0`` on success
and ``1 + i`` when :math:`U_{ii}` is exactly zero. Pivot vectors are
zero-based: row :math:`i` was interchanged with row ``ipiv[i]``.
"""

import jax.numpy as jnp
import numpy as np

from linexpr._base import MatrixExpression, VectorExpression
from linexpr._container import Matrix, Vector
from linexpr._errors import (
    BadSizeError,
    ExternalLogicError,
    SingularMatrixError,
    UnsupportedError,
)
from linexpr._kernels._lapack import (
    as_fortran,
    as_rhs,
    invoke,
    lapack_dtype,
    orientation_of_operand,
    routine,
    to_matrix,
    to_result,
    to_vector,
)


def _getrf(a: np.ndarray) -> tuple[np.ndarray, np.ndarray, int]:
    lu, piv, info = invoke(routine("getrf", a), a)
    return lu, piv, info


def _getrs(lu: np.ndarray, piv: np.ndarray, b: np.ndarray, trans: int = 0) -> np.ndarray:
    x, _ = invoke(routine("getrs", lu, b), lu, piv, b, trans=trans)
    return x


def pivots_to_permutation(piv: np.ndarray, m: int) -> np.ndarray:
    """Row order ``perm`` of :math:`PA`, i.e. :math:`(PA)_i = A_{perm_i}`."""
    perm = np.arange(m)
    for i, p in enumerate(np.asarray(piv, dtype=int)):
        perm[[i, p]] = perm[[p, i]]
    return perm


def _unpack(lu: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
    m, n = lu.shape
    k = min(m, n)
    lower = np.tril(lu[:, :k], -1) + np.eye(m, k, dtype=lu.dtype)
    upper = np.triu(lu[:k, :])
    return lower, upper


def lu_inverse(a: np.ndarray) -> tuple[int, np.ndarray]:
    """Inverse of the square Fortran array ``a`` by solving :math:`AX = I`.

    Returns:
        ``(status, X)``; ``X`` is unspecified when the status is non-zero.
    """
    lu, piv, info = _getrf(a)
    identity = np.eye(a.shape[0], dtype=a.dtype, order="F")
    if info != 0:
        return info, identity
    return info, _getrs(lu, piv, identity)


def _check_rhs(a: MatrixExpression, b: VectorExpression | MatrixExpression) -> None:
    if a.size1 != a.size2:
        msg = f"A linear system needs a square matrix, got shape {a.shape}."
        raise BadSizeError(msg)
    if b.shape[0] != a.size1:
        msg = f"Right-hand side with {b.shape[0]} rows does not fit a {a.shape} matrix."
        raise BadSizeError(msg)


def lu_decompose(
    a: MatrixExpression, *, full: bool = False
) -> tuple[int, Matrix, Vector] | tuple[int, Matrix, Matrix, Matrix]:
    r"""LU decomposition of an :math:`m \times n` matrix.

    Args:
        a: Matrix to decompose.
        full: Return the factors instead of the packed form.

    Returns:
        ``(status, LU, ipiv)`` with the packed factors (the strict lower part
        of ``LU`` holds :math:`L` without its unit diagonal), or with
        ``full=True`` ``(status, P, L, U)`` where :math:`P` is the permutation
        matrix with :math:`PA = LU`.
    """
    orientation = orientation_of_operand(a)
    lu, piv, info = _getrf(as_fortran(a))
    if not full:
        return info, to_matrix(lu, orientation), Vector(jnp.asarray(piv, dtype=jnp.int64))
    m = lu.shape[0]
    perm = pivots_to_permutation(piv, m)
    p = np.eye(m, dtype=lu.dtype)[perm]
    lower, upper = _unpack(lu)
    return (
        info,
        to_matrix(p, orientation),
        to_matrix(lower, orientation),
        to_matrix(upper, orientation),
    )


def lu_decompose_inplace(a: Matrix, ipiv: Vector | None = None) -> int:
    """Overwrite ``a`` with its packed LU factors.

    Args:
        a: Matrix container.
        ipiv: Optional container receiving the pivot indices.

    Returns:
        The status of the decomposition.
    """
    if not isinstance(a, Matrix):
        msg = f"Only matrix containers can be decomposed in place, got {type(a).__name__}."
        raise UnsupportedError(msg)
    info, lu, piv = lu_decompose(a)
    a.assign(lu)
    if ipiv is not None:
        ipiv.resize(piv.size, preserve=False)
        ipiv.assign(piv)
    return info


def lu_apply(
    lu: MatrixExpression,
    ipiv: VectorExpression,
    b: VectorExpression | MatrixExpression,
) -> Vector | Matrix:
    """Solve :math:`Ax = b` given the packed factors of :func:`lu_decompose`."""
    _check_rhs(lu, b)
    lu_data = as_fortran(lu, lapack_dtype(lu.dtype, b.dtype))
    rhs, vector = as_rhs(b, lu_data.dtype)
    piv = np.asarray(ipiv.todense(), dtype=np.int32)
    x = _getrs(lu_data, piv, rhs)
    return to_result(x, vector, orientation_of_operand(b))


def lu_solve(
    a: MatrixExpression, b: VectorExpression | MatrixExpression
) -> tuple[int, Vector | Matrix]:
    r"""Solve :math:`Ax = b` (or :math:`AX = B`) for a square :math:`A`.

    Returns:
        ``(status, x)``. When the status is non-zero the system is singular and
        ``x`` is a copy of ``b``.

    Raises:
        BadSizeError
            If ``b`` has not as many rows as ``a``.
    """
    _check_rhs(a, b)
    dtype = lapack_dtype(a.dtype, b.dtype)
    lu, piv, info = _getrf(as_fortran(a, dtype))
    rhs, vector = as_rhs(b, dtype)
    if info == 0:
        rhs = _getrs(lu, piv, rhs)
    return info, to_result(rhs, vector, orientation_of_operand(b))


def lu_solve_inplace(a: MatrixExpression, b: Vector | Matrix) -> int:
    """Solve :math:`Ax = b`, overwriting ``b`` with the solution.

    ``b`` is left untouched when the system is singular.
    """
    info, x = lu_solve(a, b)
    if info == 0:
        b.assign(x)
    return info


def mldivide(
    a: MatrixExpression, b: VectorExpression | MatrixExpression
) -> Vector | Matrix:
    r"""Left division :math:`A \backslash b`, the solution of :math:`Ax = b`.

    Raises:
        SingularMatrixError
            If :math:`A` is exactly singular.
    """
    info, x = lu_solve(a, b)
    if info != 0:
        msg = f"Matrix is singular, U({info - 1}, {info - 1}) is zero."
        raise SingularMatrixError(msg, info)
    return x


def mldivide_inplace(a: MatrixExpression, b: Vector | Matrix) -> None:
    b.assign(mldivide(a, b))


class LUDecomposition:
    r"""LU decomposition :math:`PA = LU` of a matrix.

    Args:
        a: Matrix to decompose, optional. Use :meth:`decompose` otherwise.
    """

    def __init__(self, a: MatrixExpression | None = None) -> None:
        self._lu = None
        self._piv = None
        self._status = 0
        self._orientation = None
        if a is not None:
            self.decompose(a)

    def decompose(self, a: MatrixExpression) -> int:
        """Decompose ``a`` and return the status."""
        self._orientation = orientation_of_operand(a)
        self._lu, self._piv, self._status = _getrf(as_fortran(a))
        return self._status

    def _require(self) -> None:
        if self._lu is None:
            msg = "No matrix has been decomposed yet."
            raise ExternalLogicError(msg)

    @property
    def status(self) -> int:
        return self._status

    @property
    def singular(self) -> bool:
        return self._status != 0

    @property
    def LU(self) -> Matrix:  # noqa: N802
        self._require()
        return to_matrix(self._lu, self._orientation)

    @property
    def ipiv(self) -> Vector:
        self._require()
        return Vector(jnp.asarray(self._piv, dtype=jnp.int64))

    @property
    def P(self) -> Matrix:  # noqa: N802
        self._require()
        m = self._lu.shape[0]
        perm = pivots_to_permutation(self._piv, m)
        return to_matrix(np.eye(m, dtype=self._lu.dtype)[perm], self._orientation)

    @property
    def permutation(self) -> Vector:
        """Row order of :math:`PA`."""
        self._require()
        return to_vector(pivots_to_permutation(self._piv, self._lu.shape[0]))

    @property
    def L(self) -> Matrix:  # noqa: N802
        self._require()
        return to_matrix(_unpack(self._lu)[0], self._orientation)

    @property
    def U(self) -> Matrix:  # noqa: N802
        self._require()
        return to_matrix(_unpack(self._lu)[1], self._orientation)

    def solve(self, b: VectorExpression | MatrixExpression) -> Vector | Matrix:
        """Solve :math:`Ax = b` with the stored factors.

        Raises:
            SingularMatrixError
                If the decomposed matrix is singular.
        """
        self._require()
        if self.singular:
            msg = f"Matrix is singular, status {self._status}."
            raise SingularMatrixError(msg, self._status)
        if b.shape[0] != self._lu.shape[0]:
            msg = f"Right-hand side with {b.shape[0]} rows does not fit the factors."
            raise BadSizeError(msg)
        dtype = lapack_dtype(self._lu.dtype, b.dtype)
        rhs, vector = as_rhs(b, dtype)
        x = _getrs(np.asfortranarray(self._lu, dtype=dtype), self._piv, rhs)
        return to_result(x, vector, orientation_of_operand(b))
