# _qz.py

r"""Generalized Schur (QZ) decomposition :math:`A = Q S Z^H`, :math:`B = Q T Z^H`.

:math:`Q` and :math:`Z` are unitary, :math:`T` is upper triangular and
:math:`S` is upper triangular (complex input) or quasi upper triangular with
:math:`1 \times 1` and :math:`2 \times 2` diagonal blocks (real input). The
generalized eigenvalues are :math:`\alpha_j / \beta_j`.

The decomposition is computed by ``gges``. A *selection* moves a group of
eigenvalues to the leading block of :math:`(S, T)` with ``tgsen``:

=========  ==============================================
``"all"``  keep the order of the kernel
``"lhp"``  :math:`\operatorname{Re} \lambda < 0`
``"rhp"``  :math:`\operatorname{Re} \lambda > 0`
``"udi"``  :math:`|\lambda| < 1`, inside the unit disk
``"udo"``  :math:`|\lambda| \geq 1`, outside the unit disk
=========  ==============================================

A boolean vector of length :math:`n` selects eigenvalues by position. For real
input a complex conjugate pair is moved as a whole if either of its members is
selected.
"""

from collections.abc import Callable

import numpy as np

from linexpr._base import MatrixExpression, VectorExpression
from linexpr._container import Matrix, Vector
from linexpr._errors import (
    BadArgumentError,
    BadSizeError,
    ConvergenceError,
    ExternalLogicError,
    UnsupportedError,
)
from linexpr._kernels._eigen import ggev, pencil_operands, pencil_ratio
from linexpr._kernels._lapack import (
    as_fortran,
    invoke,
    lapack_dtype,
    orientation_of_operand,
    require_square,
    routine,
    routine_name,
    to_matrix,
    to_vector,
)
from linexpr._tags import OrientationTag
from linexpr._typing import ArrayLike

Selection = str | VectorExpression | ArrayLike


def _eps(beta: np.ndarray) -> float:
    return float(np.finfo(beta.dtype).eps)


def _left_half_plane(alpha: np.ndarray, beta: np.ndarray) -> np.ndarray:
    if np.iscomplexobj(beta):
        out = np.zeros(alpha.shape, dtype=bool)
        nonzero = beta != 0
        out[nonzero] = np.real(alpha[nonzero] / beta[nonzero]) < 0
        return out
    ar = alpha.real
    opposite = ((ar > 0) & (beta < 0)) | ((ar < 0) & (beta > 0))
    return opposite & (np.abs(beta) > np.abs(ar) * _eps(beta))


def _right_half_plane(alpha: np.ndarray, beta: np.ndarray) -> np.ndarray:
    if np.iscomplexobj(beta):
        out = np.zeros(alpha.shape, dtype=bool)
        nonzero = beta != 0
        out[nonzero] = np.real(alpha[nonzero] / beta[nonzero]) > 0
        return out
    ar = alpha.real
    same = ((ar > 0) & (beta > 0)) | ((ar < 0) & (beta < 0))
    return same & (np.abs(beta) > np.abs(ar) * _eps(beta))


def _inside_unit_disk(alpha: np.ndarray, beta: np.ndarray) -> np.ndarray:
    return np.abs(alpha) < np.abs(beta)


def _outside_unit_disk(alpha: np.ndarray, beta: np.ndarray) -> np.ndarray:
    return np.abs(alpha) >= np.abs(beta)


_SELECTORS: dict[str, Callable[[np.ndarray, np.ndarray], np.ndarray]] = {
    "lhp": _left_half_plane,
    "rhp": _right_half_plane,
    "udi": _inside_unit_disk,
    "udo": _outside_unit_disk,
}


def select(selection: Selection, alpha: np.ndarray, beta: np.ndarray) -> np.ndarray | None:
    """Boolean mask of the eigenvalues to move to the front.

    Returns:
        ``None`` for ``"all"``.

    Raises:
        BadArgumentError
            For an unknown selection name.
        BadSizeError
            For a mask whose length differs from the number of eigenvalues.
    """
    if isinstance(selection, str):
        if selection == "all":
            return None
        if selection not in _SELECTORS:
            msg = (
                f"Unknown eigenvalue selection {selection!r}, expected 'all' or "
                f"one of {sorted(_SELECTORS)}."
            )
            raise BadArgumentError(msg)
        return _SELECTORS[selection](alpha, beta)
    if isinstance(selection, VectorExpression):
        selection = selection.todense()
    mask = np.asarray(selection, dtype=bool).ravel()
    if mask.shape != alpha.shape:
        msg = f"Selection of length {mask.size} for {alpha.size} eigenvalues."
        raise BadSizeError(msg)
    return mask


def _no_sort(x: object) -> None:  # noqa: ARG001
    return None


def gges(a: np.ndarray, b: np.ndarray) -> tuple[np.ndarray, ...]:
    """Run ``gges`` on the square Fortran arrays ``a`` and ``b``.

    Returns:
        ``(s, t, q, z, alpha, beta)`` with complex ``alpha``.

    Raises:
        ConvergenceError
            If the QZ iteration failed.
    """
    n = a.shape[0]
    if n == 0:
        empty = np.zeros((0, 0), dtype=a.dtype)
        alpha = np.zeros(0, dtype=np.result_type(a.dtype, np.complex64))
        beta = np.zeros(0, dtype=a.dtype)
        return empty, empty.copy(), empty.copy(), empty.copy(), alpha, beta
    func = routine("gges", a, b)
    *outputs, info = invoke(func, _no_sort, a, b, jobvsl=1, jobvsr=1, sort_t=0, query=True)
    if info > 0:
        raise ConvergenceError(routine_name(func), info)
    if np.iscomplexobj(a):
        s, t, _, alpha, beta, q, z = outputs
    else:
        s, t, _, alphar, alphai, beta, q, z = outputs
        alpha = alphar + 1j * alphai
    return s, t, q, z, alpha, beta


def tgsen(
    mask: np.ndarray, s: np.ndarray, t: np.ndarray, q: np.ndarray, z: np.ndarray
) -> tuple[np.ndarray, ...]:
    """Move the eigenvalues flagged in ``mask`` to the leading block with ``tgsen``.

    Returns:
        ``(s, t, q, z, alpha, beta)`` of the reordered decomposition.

    Raises:
        ConvergenceError
            If the pencil is too ill conditioned to be reordered.
    """
    func = routine("tgsen", s, t)
    n = s.shape[0]
    lwork = 4 * n + 16 if not np.iscomplexobj(s) else 1
    *outputs, info = invoke(
        func, mask.astype(np.int32), s, t, q, z, ijob=0, lwork=lwork, liwork=1
    )
    if info > 0:
        raise ConvergenceError(routine_name(func), info)
    if np.iscomplexobj(s):
        s, t, alpha, beta, q, z, *_ = outputs
    else:
        s, t, alphar, alphai, beta, q, z, *_ = outputs
        alpha = alphar + 1j * alphai
    return s, t, q, z, alpha, beta


class QZDecomposition:
    r"""Generalized Schur decomposition of the pencil :math:`(A, B)`.

    Args:
        a: Matrix :math:`A`, optional. Use :meth:`decompose` otherwise.
        b: Matrix :math:`B` of the same shape.
        selection: Eigenvalues moved to the leading block, see the module
            documentation.
    """

    def __init__(
        self,
        a: MatrixExpression | None = None,
        b: MatrixExpression | None = None,
        selection: Selection = "all",
    ) -> None:
        self._factors = None
        self._orientation: OrientationTag | None = None
        if a is not None:
            if b is None:
                msg = "The QZ decomposition needs both matrices of the pencil."
                raise BadArgumentError(msg)
            self.decompose(a, b, selection)

    def decompose(
        self, a: MatrixExpression, b: MatrixExpression, selection: Selection = "all"
    ) -> None:
        self._orientation = orientation_of_operand(a)
        self._factors = gges(*pencil_operands(a, b, "The QZ decomposition"))
        self.reorder(selection)

    def reorder(self, selection: Selection) -> None:
        """Move the selected eigenvalues to the leading block of :math:`(S, T)`."""
        self._require()
        s, t, q, z, alpha, beta = self._factors
        mask = select(selection, alpha, beta)
        if mask is not None and s.shape[0] > 0:
            self._factors = tgsen(mask, s, t, q, z)

    def _require(self) -> None:
        if self._factors is None:
            msg = "No pencil has been decomposed yet."
            raise ExternalLogicError(msg)

    def _factor(self, index: int) -> Matrix:
        self._require()
        return to_matrix(self._factors[index], self._orientation)

    @property
    def S(self) -> Matrix:  # noqa: N802
        return self._factor(0)

    @property
    def T(self) -> Matrix:  # noqa: N802
        return self._factor(1)

    @property
    def Q(self) -> Matrix:  # noqa: N802
        return self._factor(2)

    @property
    def Z(self) -> Matrix:  # noqa: N802
        return self._factor(3)

    @property
    def alpha(self) -> Vector:
        self._require()
        return to_vector(self._factors[4])

    @property
    def beta(self) -> Vector:
        self._require()
        return to_vector(self._factors[5])

    def eigenvalues(self) -> Vector:
        r""":math:`\alpha / \beta`, ``inf`` for :math:`\beta = 0`."""
        self._require()
        _, _, _, _, alpha, beta = self._factors
        return to_vector(pencil_ratio(alpha, beta))

    def factors(self) -> tuple[Matrix, Matrix, Matrix, Matrix]:
        """``(S, T, Q, Z)``."""
        return self.S, self.T, self.Q, self.Z


def qz(
    a: MatrixExpression, b: MatrixExpression, selection: Selection = "all"
) -> QZDecomposition:
    """QZ decomposition of the pencil ``(a, b)``."""
    return QZDecomposition(a, b, selection)


def qz_decompose(
    a: MatrixExpression, b: MatrixExpression, selection: Selection = "all"
) -> tuple[Matrix, Matrix, Matrix, Matrix]:
    """QZ factors ``(S, T, Q, Z)`` of the pencil ``(a, b)``."""
    return qz(a, b, selection).factors()


def _require_containers(*matrices: object) -> None:
    for m in matrices:
        if not isinstance(m, Matrix):
            msg = f"QZ factors are written into matrix containers, got {type(m).__name__}."
            raise UnsupportedError(msg)


def _store(targets: tuple[Matrix, ...], factors: tuple[Matrix, ...]) -> None:
    for target, factor in zip(targets, factors, strict=True):
        target.resize(*factor.shape, preserve=False)
        target.assign(factor)


def qz_decompose_inplace(
    a: Matrix, b: Matrix, q: Matrix, z: Matrix, selection: Selection = "all"
) -> None:
    """Overwrite ``a`` with :math:`S` and ``b`` with :math:`T`; write :math:`Q`, :math:`Z`."""
    _require_containers(a, b, q, z)
    _store((a, b, q, z), qz_decompose(a, b, selection))


def qz_reorder(
    s: MatrixExpression,
    t: MatrixExpression,
    q: MatrixExpression,
    z: MatrixExpression,
    selection: Selection,
) -> tuple[Matrix, Matrix, Matrix, Matrix]:
    """Reorder the QZ factors ``(s, t, q, z)`` of a pencil.

    The factors must come from a QZ decomposition; the reordered ones still
    reproduce the same pencil.
    """
    dtype = lapack_dtype(s.dtype, t.dtype, q.dtype, z.dtype)
    factors = [as_fortran(m, dtype) for m in (s, t, q, z)]
    n = require_square(factors[0], "QZ reordering")
    if any(f.shape != (n, n) for f in factors):
        msg = "QZ factors must be square matrices of equal order."
        raise BadSizeError(msg)
    orientation = orientation_of_operand(s)
    if n == 0:
        return tuple(to_matrix(f, orientation) for f in factors)
    s_f, t_f, q_f, z_f = factors
    mask = select(selection, *_schur_spectrum(s_f, t_f))
    if mask is not None:
        s_f, t_f, q_f, z_f, _, _ = tgsen(mask, s_f, t_f, q_f, z_f)
    return tuple(to_matrix(f, orientation) for f in (s_f, t_f, q_f, z_f))


def _schur_spectrum(s: np.ndarray, t: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
    r""":math:`(\alpha, \beta)` read off a pencil in generalized Schur form.

    A :math:`2 \times 2` diagonal block of a real :math:`S` holds a complex
    conjugate pair, which is recovered from the block pencil.
    """
    n = s.shape[0]
    alpha = np.diag(s).astype(np.result_type(s.dtype, np.complex64))
    beta = np.diag(t).copy()
    j = 0
    while j < n:
        if not np.iscomplexobj(s) and j + 1 < n and s[j + 1, j] != 0:
            block = slice(j, j + 2)
            alpha[block], beta[block], _, _ = ggev(
                np.asfortranarray(s[block, block]),
                np.asfortranarray(t[block, block]),
                left=False,
                right=False,
            )
            j += 2
        else:
            j += 1
    return alpha, beta


def qz_reorder_inplace(
    s: Matrix, t: Matrix, q: Matrix, z: Matrix, selection: Selection
) -> None:
    """Reorder the QZ factors in place."""
    _require_containers(s, t, q, z)
    _store((s, t, q, z), qz_reorder(s, t, q, z, selection))
