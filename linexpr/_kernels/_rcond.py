# _rcond.py

r"""Reciprocal condition number :math:`1 / (\|A\| \|A^{-1}\|)`.

For the 1- and infinity-norm the value is the LAPACK estimate computed from a
factorization of :math:`A`, without forming :math:`A^{-1}`:

======================  ==========================================
matrix                  routines
======================  ==========================================
general                 ``getrf`` + ``gecon``
banded                  ``gbtrf`` + ``gbcon`` on LAPACK band storage
triangular              ``trcon`` on the triangle itself
symmetric               ``sytrf`` + ``sycon``
Hermitian (complex)     ``hetrf`` + ``hecon``
======================  ==========================================

The 2-norm value is :math:`\sigma_{\min} / \sigma_{\max}`, the Frobenius-norm
value uses the explicit inverse. Rectangular matrices are reduced to the
triangular factor of a QR decomposition first.

A value close to ``1`` means well conditioned, ``0`` means numerically
singular.
"""

import numpy as np
import plum  # type: ignore  # noqa: PGH003

from linexpr._base import MatrixExpression
from linexpr._container import (
    BandedMatrix,
    HermitianMatrix,
    SymmetricMatrix,
    TriangularMatrix,
)
from linexpr._kernels._lapack import as_fortran, invoke, routine
from linexpr._kernels._lu import lu_inverse
from linexpr._kernels._qr import geqrf, householder_r
from linexpr._kernels._svd import gesdd
from linexpr._tags import (
    Norm1Tag,
    Norm2Tag,
    NormFrobeniusTag,
    NormInfTag,
    NormTag,
    norm_1,
)

# --------------------------------------------------------------------------- #
# Estimates on square arrays
# --------------------------------------------------------------------------- #


def _lange(norm: NormTag, a: np.ndarray) -> float:
    return float(routine("lange", a)(norm.lapack_code, a))


def _gecon(factor: np.ndarray, anorm: float, norm: NormTag) -> float:
    rcond, _ = invoke(routine("gecon", factor), factor, anorm, norm=norm.lapack_code)
    return float(rcond)


def general_estimate(a: np.ndarray, norm: NormTag) -> float:
    """Estimate for a general square Fortran array."""
    anorm = _lange(norm, a)
    lu, _, info = invoke(routine("getrf", a), a)
    if info > 0:
        return 0.0
    return _gecon(lu, anorm, norm)


def triangular_estimate(
    a: np.ndarray, norm: NormTag, *, lower: bool, unit: bool = False
) -> float:
    """Estimate for a triangular Fortran array.

    A unit triangle ignores its stored diagonal. A zero on the diagonal gives
    ``0.0``.
    """
    rcond, _ = invoke(
        routine("trcon", a),
        a,
        norm=norm.lapack_code,
        uplo="L" if lower else "U",
        diag="U" if unit else "N",
    )
    return float(rcond)


def band_storage(a: np.ndarray, kl: int, ku: int) -> np.ndarray:
    r"""Square ``a`` in the band layout of ``gbtrf``.

    Element :math:`a_{ij}` is stored at ``ab[kl + ku + i - j, j]``; the
    leading ``kl`` rows are workspace for the fill-in of the pivoting.
    """
    n = a.shape[1]
    ab = np.zeros((2 * kl + ku + 1, n), dtype=a.dtype, order="F")
    for d in range(-ku, kl + 1):
        diagonal = np.diagonal(a, -d)
        start = max(0, -d)
        ab[kl + ku + d, start : start + diagonal.size] = diagonal
    return ab


def banded_estimate(a: np.ndarray, norm: NormTag, *, kl: int, ku: int) -> float:
    """Estimate for a square Fortran array with ``kl``/``ku`` off-diagonals."""
    n = a.shape[0]
    kl, ku = min(kl, max(n - 1, 0)), min(ku, max(n - 1, 0))
    anorm = _lange(norm, a)
    lu, ipiv, info = invoke(routine("gbtrf", a), band_storage(a, kl, ku), kl, ku)
    if info > 0:
        return 0.0
    rcond, _ = invoke(
        routine("gbcon", a), kl, ku, lu, ipiv, anorm, norm=norm.lapack_code
    )
    return float(rcond)


def symmetric_estimate(a: np.ndarray, *, lower: bool, hermitian: bool) -> float:
    """Estimate for a symmetric (or Hermitian) Fortran array.

    Both norms coincide for these matrices.
    """
    anorm = _lange(norm_1, a)
    prefix = "he" if hermitian and np.iscomplexobj(a) else "sy"
    factor, ipiv, info = invoke(routine(f"{prefix}trf", a), a, lower=int(lower))
    if info > 0:
        return 0.0
    rcond, _ = invoke(routine(f"{prefix}con", factor), factor, ipiv, anorm, lower=int(lower))
    return float(rcond)


# --------------------------------------------------------------------------- #
# Structure dispatch
# --------------------------------------------------------------------------- #


@plum.dispatch
def condition_estimate(a: MatrixExpression, norm: NormTag) -> float:
    return general_estimate(as_fortran(a), norm)


@condition_estimate.dispatch
def _(a: TriangularMatrix, norm: NormTag) -> float:
    return triangular_estimate(as_fortran(a), norm, lower=a.lower, unit=a.unit)


@condition_estimate.dispatch
def _(a: BandedMatrix, norm: NormTag) -> float:
    return banded_estimate(as_fortran(a), norm, kl=a.lower, ku=a.upper)


@condition_estimate.dispatch
def _(a: SymmetricMatrix, norm: NormTag) -> float:  # noqa: ARG001
    return symmetric_estimate(as_fortran(a), lower=a.lower, hermitian=False)


@condition_estimate.dispatch
def _(a: HermitianMatrix, norm: NormTag) -> float:  # noqa: ARG001
    return symmetric_estimate(as_fortran(a), lower=a.lower, hermitian=True)


def _reduce(a: MatrixExpression) -> MatrixExpression:
    """Square triangular factor of a QR decomposition of ``a`` (or ``a^T``)."""
    m, n = a.shape
    data = as_fortran(a)
    if m < n:
        data = np.asfortranarray(data.T)
    qr, _ = geqrf(data)
    return TriangularMatrix(householder_r(qr, full=False))


# --------------------------------------------------------------------------- #
# Public entry point
# --------------------------------------------------------------------------- #


@plum.dispatch
def rcond(a: MatrixExpression) -> float:
    r"""Reciprocal condition number of ``a`` in the 1-norm.

    Args:
        a: Matrix, square or rectangular. Triangular, symmetric and Hermitian
            containers use their structure.
        norm: One of :data:`norm_1` (default), :data:`norm_inf`,
            :data:`norm_2`, :data:`norm_frobenius`.

    Returns:
        The reciprocal condition number in :math:`[0, 1]`, ``0.0`` when a
        factorization meets an exactly zero pivot. An empty matrix has
        reciprocal condition number ``1.0``.
    """
    return rcond(a, norm_1)


@rcond.dispatch
def _(a: MatrixExpression, norm: Norm1Tag | NormInfTag) -> float:
    m, n = a.shape
    if m * n == 0:
        return 1.0
    if m != n:
        a = _reduce(a)
    return float(condition_estimate(a, norm))


@rcond.dispatch
def _(a: MatrixExpression, norm: Norm2Tag) -> float:  # noqa: ARG001
    if min(a.shape) == 0:
        return 1.0
    _, s, _ = gesdd(as_fortran(a), compute_uv=False, full=False)
    if s[0] == 0:
        return 0.0
    return float(s[-1] / s[0])


@rcond.dispatch
def _(a: MatrixExpression, norm: NormFrobeniusTag) -> float:  # noqa: ARG001
    m, n = a.shape
    if m * n == 0:
        return 1.0
    if m != n:
        a = _reduce(a)
    data = as_fortran(a)
    info, inverse = lu_inverse(data)
    if info != 0:
        return 0.0
    return float(1 / (np.linalg.norm(data, "fro") * np.linalg.norm(inverse, "fro")))
