# _svd.py

r"""Singular value decomposition :math:`A = U \Sigma V^H` (``gesdd``/``gesvd``).

Singular values are real and in descending order. For an :math:`m \times n`
matrix with :math:`k = \min(m, n)` the full mode returns :math:`U \in
\mathbb{K}^{m \times m}`, :math:`V^H \in \mathbb{K}^{n \times n}`, the economy
mode :math:`U \in \mathbb{K}^{m \times k}`, :math:`V^H \in \mathbb{K}^{k
\times n}`.
"""

import jax.numpy as jnp
import numpy as np

from linexpr._base import MatrixExpression
from linexpr._container import Matrix, Vector
from linexpr._errors import BadArgumentError, ConvergenceError, ExternalLogicError
from linexpr._kernels._lapack import (
    as_fortran,
    check_info,
    optimal_lwork,
    orientation_of_operand,
    routine,
    to_matrix,
    to_vector,
)

_DRIVERS = ("gesdd", "gesvd")


def gesdd(
    a: np.ndarray,
    *,
    compute_uv: bool = True,
    full: bool = True,
    driver: str = "gesdd",
) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Run the SVD driver on the Fortran array ``a``.

    Returns:
        ``(u, s, vh)``; ``u`` and ``vh`` are empty when not computed.
    """
    if driver not in _DRIVERS:
        msg = f"Unknown SVD driver {driver!r}, expected one of {_DRIVERS}."
        raise BadArgumentError(msg)
    m, n = a.shape
    k = min(m, n)
    real_dtype = np.finfo(a.dtype).dtype
    if k == 0:
        s = np.zeros((0,), dtype=real_dtype)
        u = np.eye(m, m if full else 0, dtype=a.dtype)
        vh = np.eye(n if full else 0, n, dtype=a.dtype)
        return u, s, vh
    func = routine(driver, a)
    lwork_func = routine(f"{driver}_lwork", a)
    work, info = lwork_func(m, n, compute_uv=int(compute_uv), full_matrices=int(full))
    check_info(f"{driver}_lwork", info)
    u, s, vh, info = func(
        a,
        compute_uv=int(compute_uv),
        full_matrices=int(full),
        lwork=optimal_lwork(work),
    )
    if check_info(driver, info) > 0:
        raise ConvergenceError(driver, info)
    return u, s, vh


def svd_decompose(
    a: MatrixExpression,
    full: bool = True,  # noqa: FBT001, FBT002
    compute_uv: bool = True,  # noqa: FBT001, FBT002
) -> tuple[Matrix, Vector, Matrix] | Vector:
    """SVD of ``a``.

    Returns:
        ``(U, s, VH)``, or only the singular values ``s`` if not
        ``compute_uv``.
    """
    orientation = orientation_of_operand(a)
    u, s, vh = gesdd(as_fortran(a), compute_uv=compute_uv, full=full)
    if not compute_uv:
        return to_vector(s)
    return to_matrix(u, orientation), to_vector(s), to_matrix(vh, orientation)


def svd_values(a: MatrixExpression) -> Vector:
    """Singular values of ``a`` in descending order."""
    return svd_decompose(a, full=False, compute_uv=False)


class SVDDecomposition:
    r"""Singular value decomposition :math:`A = U \Sigma V^H` of a matrix.

    Args:
        a: Matrix to decompose, optional. Use :meth:`decompose` otherwise.
        full: Full (default) or economy sized factors.
        compute_uv: Compute the singular vectors.
    """

    def __init__(
        self,
        a: MatrixExpression | None = None,
        full: bool = True,  # noqa: FBT001, FBT002
        compute_uv: bool = True,  # noqa: FBT001, FBT002
    ) -> None:
        self.full = full
        self.compute_uv = compute_uv
        self._shape = None
        self._u = self._s = self._vh = None
        self._orientation = None
        if a is not None:
            self.decompose(a)

    def decompose(self, a: MatrixExpression) -> None:
        self._orientation = orientation_of_operand(a)
        self._shape = a.shape
        self._u, self._s, self._vh = gesdd(
            as_fortran(a), compute_uv=self.compute_uv, full=self.full
        )

    def _require(self, *, vectors: bool = False) -> None:
        if self._s is None:
            msg = "No matrix has been decomposed yet."
            raise ExternalLogicError(msg)
        if vectors and not self.compute_uv:
            msg = "Singular vectors were not computed."
            raise ExternalLogicError(msg)

    @property
    def s(self) -> Vector:
        self._require()
        return to_vector(self._s)

    @property
    def S(self) -> Matrix:  # noqa: N802
        r""":math:`\Sigma`, shaped to fit between :attr:`U` and :attr:`VH`."""
        self._require()
        m, n = self._shape
        k = self._s.shape[0]
        rows, cols = (m, n) if self.full else (k, k)
        sigma = jnp.zeros((rows, cols), dtype=self._s.dtype)
        index = jnp.arange(k)
        return Matrix(sigma.at[index, index].set(self._s), orientation=self._orientation)

    @property
    def U(self) -> Matrix:  # noqa: N802
        self._require(vectors=True)
        return to_matrix(self._u, self._orientation)

    @property
    def VH(self) -> Matrix:  # noqa: N802
        self._require(vectors=True)
        return to_matrix(self._vh, self._orientation)

    @property
    def V(self) -> Matrix:  # noqa: N802
        self._require(vectors=True)
        return to_matrix(np.conj(self._vh).T, self._orientation)
