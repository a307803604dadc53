# _ql.py

r"""QL decomposition :math:`A = QL`.

With the exchange matrices :math:`J_m`, :math:`J_n` (ones on the
anti-diagonal), the QR decomposition :math:`J_m A J_n = \tilde Q \tilde R`
gives

.. math::
    A = (J_m \tilde Q J) (J \tilde R J_n) = Q L,

so :math:`Q` and :math:`L` are the QR factors of the flipped matrix, flipped
along both axes. :math:`L` is lower trapezoidal: for :math:`m \geq n` its last
:math:`n` rows hold the triangle, as with LAPACK's ``geqlf``.
"""

import numpy as np

from linexpr._base import MatrixExpression, VectorExpression
from linexpr._container import Matrix, Vector
from linexpr._errors import BadSizeError, ExternalLogicError
from linexpr._kernels._lapack import as_fortran, orientation_of_operand, to_matrix, to_vector
from linexpr._kernels._qr import geqrf, householder_prod, householder_q, householder_r

Operand = VectorExpression | MatrixExpression


def _flip(a: np.ndarray) -> np.ndarray:
    return np.asfortranarray(a[::-1, ::-1])


class QLDecomposition:
    r"""QL decomposition :math:`A = QL` of a matrix.

    Args:
        a: Matrix to decompose, optional. Use :meth:`decompose` otherwise.
    """

    def __init__(self, a: MatrixExpression | None = None) -> None:
        self._qr = None
        self._tau = None
        self._orientation = None
        if a is not None:
            self.decompose(a)

    def decompose(self, a: MatrixExpression) -> None:
        self._orientation = orientation_of_operand(a)
        self._qr, self._tau = geqrf(_flip(as_fortran(a)))

    def _require(self) -> None:
        if self._qr is None:
            msg = "No matrix has been decomposed yet."
            raise ExternalLogicError(msg)

    @property
    def shape(self) -> tuple[int, int]:
        self._require()
        return self._qr.shape

    def Q(self, full: bool = True) -> Matrix:  # noqa: N802, FBT001, FBT002
        self._require()
        q = householder_q(self._qr, self._tau, full=full)
        return to_matrix(_flip(q), self._orientation)

    def L(self, full: bool = True) -> Matrix:  # noqa: N802, FBT001, FBT002
        self._require()
        return to_matrix(_flip(householder_r(self._qr, full=full)), self._orientation)

    def _prod(self, c: Operand, *, side: str, adjoint: bool) -> Vector | Matrix:
        self._require()
        m = self._qr.shape[0]
        data = as_fortran(c)
        vector = data.ndim == 1
        if vector:
            data = data[:, None] if side == "L" else data[None, :]
        axis = 0 if side == "L" else 1
        if data.shape[axis] != m:
            msg = f"Operand of shape {c.shape} does not fit Q of order {m}."
            raise BadSizeError(msg)
        # Q = J Q~ J: reverse the rows (or columns) C meets Q~ with
        data = np.asfortranarray(np.flip(data, axis=axis))
        result = householder_prod(self._qr, self._tau, data, side=side, adjoint=adjoint)
        result = np.flip(result, axis=axis)
        if vector:
            return to_vector(result)
        return to_matrix(result, orientation_of_operand(c))

    def lprod(self, c: Operand) -> Vector | Matrix:
        """:math:`QC`."""
        return self._prod(c, side="L", adjoint=False)

    def tlprod(self, c: Operand) -> Vector | Matrix:
        """:math:`Q^H C`."""
        return self._prod(c, side="L", adjoint=True)

    def rprod(self, c: Operand) -> Vector | Matrix:
        """:math:`CQ`."""
        return self._prod(c, side="R", adjoint=False)

    def trprod(self, c: Operand) -> Vector | Matrix:
        """:math:`CQ^H`."""
        return self._prod(c, side="R", adjoint=True)

    def lprod_inplace(self, c: Vector | Matrix) -> None:
        c.assign(self.lprod(c))

    def tlprod_inplace(self, c: Vector | Matrix) -> None:
        c.assign(self.tlprod(c))

    def rprod_inplace(self, c: Vector | Matrix) -> None:
        c.assign(self.rprod(c))

    def trprod_inplace(self, c: Vector | Matrix) -> None:
        c.assign(self.trprod(c))


def ql_decompose(a: MatrixExpression, full: bool = True) -> tuple[Matrix, Matrix]:  # noqa: FBT001, FBT002
    """Return the factors ``(Q, L)`` of :math:`A = QL`."""
    ql = QLDecomposition(a)
    return ql.Q(full), ql.L(full)
