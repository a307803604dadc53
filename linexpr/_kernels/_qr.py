# _qr.py

r"""QR decomposition :math:`A = QR` (``geqrf``, ``orgqr``/``ungqr``, ``ormqr``/``unmqr``).

The decomposition keeps the Householder-packed form returned by ``geqrf``.
:math:`Q` is only formed on request; products with :math:`Q` or
:math:`Q^H` apply the reflectors directly.

For an :math:`m \times n` matrix with :math:`k = \min(m, n)`:

=========  =====================  =====================
mode       Q                      R
=========  =====================  =====================
full       :math:`m \times m`     :math:`m \times n`
economy    :math:`m \times k`     :math:`k \times n`
=========  =====================  =====================
"""

import numpy as np

from linexpr._base import MatrixExpression, VectorExpression
from linexpr._container import Matrix, Vector
from linexpr._errors import BadSizeError, ExternalLogicError
from linexpr._kernels._lapack import (
    as_fortran,
    invoke,
    lapack_dtype,
    orientation_of_operand,
    routine,
    to_matrix,
    to_vector,
)

Operand = VectorExpression | MatrixExpression


def geqrf(a: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
    """Packed QR factors and reflector scalars of the Fortran array ``a``."""
    qr, tau, _ = invoke(routine("geqrf", a), a, query=True)
    return qr, tau


def householder_q(qr: np.ndarray, tau: np.ndarray, *, full: bool = True) -> np.ndarray:
    """Form :math:`Q` from the output of :func:`geqrf`."""
    m, n = qr.shape
    k = min(m, n)
    if full:
        reflectors = np.zeros((m, m), dtype=qr.dtype, order="F")
        reflectors[:, :k] = qr[:, :k]
    else:
        reflectors = np.asfortranarray(qr[:, :k])
    if k == 0:
        return np.eye(*reflectors.shape, dtype=qr.dtype)
    name = "ungqr" if np.iscomplexobj(qr) else "orgqr"
    q, _ = invoke(routine(name, reflectors), reflectors, tau, query=True)
    return q


def householder_r(qr: np.ndarray, *, full: bool = True) -> np.ndarray:
    """Upper trapezoidal factor from the output of :func:`geqrf`."""
    m, n = qr.shape
    rows = m if full else min(m, n)
    return np.triu(qr[:rows, :])


def householder_prod(
    qr: np.ndarray, tau: np.ndarray, c: np.ndarray, *, side: str, adjoint: bool
) -> np.ndarray:
    r"""Apply :math:`Q` (or :math:`Q^H`) from the ``side`` ``'L'`` or ``'R'`` to ``c``."""
    k = min(qr.shape)
    if k == 0:
        return np.array(c, order="F")
    dtype = lapack_dtype(qr.dtype, c.dtype)
    reflectors = np.asfortranarray(qr[:, :k], dtype=dtype)
    c = np.asfortranarray(c, dtype=dtype)
    complex_valued = np.iscomplexobj(reflectors)
    name = "unmqr" if complex_valued else "ormqr"
    trans = ("C" if complex_valued else "T") if adjoint else "N"
    tau = np.asarray(tau, dtype=dtype)
    cq, _ = invoke(routine(name, reflectors, c), side, trans, reflectors, tau, c, query=True)
    return cq


class QRDecomposition:
    r"""QR decomposition :math:`A = QR` of a matrix.

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
        self._qr, self._tau = geqrf(as_fortran(a))

    def _require(self) -> None:
        if self._qr is None:
            msg = "No matrix has been decomposed yet."
            raise ExternalLogicError(msg)

    @property
    def shape(self) -> tuple[int, int]:
        self._require()
        return self._qr.shape

    @property
    def packed(self) -> Matrix:
        """Householder-packed factors as returned by ``geqrf``."""
        self._require()
        return to_matrix(self._qr, self._orientation)

    @property
    def tau(self) -> Vector:
        self._require()
        return to_vector(self._tau)

    def Q(self, full: bool = True) -> Matrix:  # noqa: N802, FBT001, FBT002
        self._require()
        return to_matrix(householder_q(self._qr, self._tau, full=full), self._orientation)

    def R(self, full: bool = True) -> Matrix:  # noqa: N802, FBT001, FBT002
        self._require()
        return to_matrix(householder_r(self._qr, full=full), self._orientation)

    # Products with Q

    def _prod(self, c: Operand, *, side: str, adjoint: bool) -> Vector | Matrix:
        self._require()
        m = self._qr.shape[0]
        data = as_fortran(c)
        vector = data.ndim == 1
        if vector:
            data = data[:, None] if side == "L" else data[None, :]
        rows_or_cols = data.shape[0] if side == "L" else data.shape[1]
        if rows_or_cols != m:
            msg = f"Operand of shape {c.shape} does not fit Q of order {m}."
            raise BadSizeError(msg)
        result = householder_prod(self._qr, self._tau, data, side=side, adjoint=adjoint)
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


def qr_decompose(a: MatrixExpression, full: bool = True) -> tuple[Matrix, Matrix]:  # noqa: FBT001, FBT002
    """Return the factors ``(Q, R)`` of :math:`A = QR`."""
    qr = QRDecomposition(a)
    return qr.Q(full), qr.R(full)
