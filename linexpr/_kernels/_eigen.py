# _eigen.py

r"""Eigenvalues and eigenvectors of matrices and matrix pencils.

Standard problem :math:`A v = \lambda v` and generalized problem
:math:`A v = \lambda B v`:

- general matrices use ``geev``, pencils ``ggev``; eigenvalues are complex and
  come in the order of the kernel,
- symmetric (real) and Hermitian containers use ``syevd``/``heevd``, pencils of
  them with a positive definite :math:`B` use ``sygvd``/``hegvd``; eigenvalues
  are real and ascending.

Left eigenvectors satisfy :math:`u^H A = \lambda u^H` (:math:`u^H A = \lambda
u^H B` for a pencil). Real kernels store a complex conjugate pair of
eigenvectors in two real columns; these are unpacked into complex columns. A
pencil eigenvalue :math:`\alpha / \beta` with :math:`\beta = 0` is infinite.
"""

import jax.numpy as jnp
import numpy as np
import plum  # type: ignore  # noqa: PGH003

from linexpr._base import MatrixExpression
from linexpr._container import HermitianMatrix, Matrix, SymmetricMatrix, Vector
from linexpr._errors import (
    BadSizeError,
    ConvergenceError,
    SingularMatrixError,
    UnsupportedError,
)
from linexpr._kernels._lapack import (
    as_fortran,
    check_info,
    invoke,
    lapack_dtype,
    optimal_lwork,
    orientation_of_operand,
    require_square,
    routine,
    routine_name,
    to_matrix,
    to_vector,
)


def pair_vectors(w: np.ndarray, v: np.ndarray) -> np.ndarray:
    r"""Complex eigenvectors from the real columns of a real kernel.

    For a pair :math:`\lambda_j = \bar\lambda_{j+1}` with
    :math:`\operatorname{Im} \lambda_j > 0` the columns hold the real and the
    imaginary part of :math:`v_j`, and :math:`v_{j+1} = \bar v_j`.
    """
    out = v.astype(np.result_type(v.dtype, np.complex64))
    first = np.flatnonzero(w.imag > 0)
    out[:, first] = v[:, first] + 1j * v[:, first + 1]
    out[:, first + 1] = np.conj(out[:, first])
    return out


def pencil_ratio(alpha: np.ndarray, beta: np.ndarray) -> np.ndarray:
    r""":math:`\alpha / \beta`, ``inf`` where only :math:`\beta` vanishes.

    Both vanishing (a singular pencil) gives ``nan``.
    """
    dtype = np.result_type(alpha.dtype, beta.dtype, np.complex64)
    out = np.full(alpha.shape, complex(np.inf, 0.0), dtype=dtype)
    finite = beta != 0
    out[finite] = alpha[finite] / beta[finite]
    out[~finite & (alpha == 0)] = complex(np.nan, 0.0)
    return out


def _complex_dtype(a: np.ndarray) -> np.dtype:
    return np.result_type(a.dtype, np.complex64)


def geev(
    a: np.ndarray, *, left: bool = False, right: bool = True
) -> tuple[np.ndarray, np.ndarray | None, np.ndarray | None]:
    """Run ``geev`` on the square Fortran array ``a``.

    Returns:
        ``(w, vl, vr)`` with complex ``w``; ``vl`` and ``vr`` are ``None``
        when not computed.

    Raises:
        ConvergenceError
            If the QR algorithm failed.
    """
    n = a.shape[0]
    dtype = _complex_dtype(a)
    if n == 0:
        empty = np.zeros((0, 0), dtype=dtype)
        return np.zeros(0, dtype=dtype), empty if left else None, empty if right else None
    func = routine("geev", a)
    work, info = routine("geev_lwork", a)(n, compute_vl=int(left), compute_vr=int(right))
    check_info("geev_lwork", info)
    *outputs, info = invoke(
        func, a, compute_vl=int(left), compute_vr=int(right), lwork=optimal_lwork(work)
    )
    if info > 0:
        raise ConvergenceError(routine_name(func), info)
    if np.iscomplexobj(a):
        w, vl, vr = outputs
    else:
        wr, wi, vl, vr = outputs
        w = wr + 1j * wi
        vl = pair_vectors(w, vl) if left else None
        vr = pair_vectors(w, vr) if right else None
    return (
        np.asarray(w, dtype=dtype),
        np.asarray(vl, dtype=dtype) if left else None,
        np.asarray(vr, dtype=dtype) if right else None,
    )


def syevd(
    a: np.ndarray, *, lower: bool = True, vectors: bool = True
) -> tuple[np.ndarray, np.ndarray | None]:
    """Run ``syevd`` (``heevd`` for complex ``a``) on a self-adjoint matrix.

    Returns:
        ``(w, v)`` with real ascending ``w``; ``v`` is ``None`` when not
        computed.
    """
    n = a.shape[0]
    if n == 0:
        real_dtype = np.finfo(a.dtype).dtype
        return np.zeros(0, dtype=real_dtype), np.zeros((0, 0), dtype=a.dtype) if vectors else None
    func = routine("heevd" if np.iscomplexobj(a) else "syevd", a)
    w, v, info = invoke(func, a, compute_v=int(vectors), lower=int(lower))
    if info > 0:
        raise ConvergenceError(routine_name(func), info)
    return w, v if vectors else None


def ggev(
    a: np.ndarray, b: np.ndarray, *, left: bool = False, right: bool = True
) -> tuple[np.ndarray, np.ndarray, np.ndarray | None, np.ndarray | None]:
    """Run ``ggev`` on the square Fortran arrays ``a`` and ``b``.

    Returns:
        ``(alpha, beta, vl, vr)`` with complex ``alpha``; the eigenvalues are
        ``alpha / beta``.
    """
    n = a.shape[0]
    dtype = _complex_dtype(a)
    if n == 0:
        empty = np.zeros((0, 0), dtype=dtype)
        return (
            np.zeros(0, dtype=dtype),
            np.zeros(0, dtype=a.dtype),
            empty if left else None,
            empty if right else None,
        )
    func = routine("ggev", a, b)
    *outputs, info = invoke(
        func, a, b, compute_vl=int(left), compute_vr=int(right), query=True
    )
    if info > 0:
        raise ConvergenceError(routine_name(func), info)
    if np.iscomplexobj(a):
        alpha, beta, vl, vr = outputs
    else:
        alphar, alphai, beta, vl, vr = outputs
        alpha = alphar + 1j * alphai
        vl = pair_vectors(alpha, vl) if left else None
        vr = pair_vectors(alpha, vr) if right else None
    return (
        np.asarray(alpha, dtype=dtype),
        beta,
        np.asarray(vl, dtype=dtype) if left else None,
        np.asarray(vr, dtype=dtype) if right else None,
    )


def sygvd(
    a: np.ndarray, b: np.ndarray, *, lower: bool = True, vectors: bool = True
) -> tuple[np.ndarray, np.ndarray | None]:
    """Run ``sygvd`` (``hegvd`` for complex input) on a symmetric-definite pencil.

    Raises:
        SingularMatrixError
            If ``b`` is not positive definite.
        ConvergenceError
            If the tridiagonal eigensolver failed.
    """
    n = a.shape[0]
    if n == 0:
        real_dtype = np.finfo(a.dtype).dtype
        return np.zeros(0, dtype=real_dtype), np.zeros((0, 0), dtype=a.dtype) if vectors else None
    func = routine("hegvd" if np.iscomplexobj(a) else "sygvd", a, b)
    w, v, info = invoke(
        func, a, b, itype=1, jobz="V" if vectors else "N", uplo="L" if lower else "U"
    )
    if info > n:
        msg = f"The leading minor of order {info - n} of B is not positive definite."
        raise SingularMatrixError(msg, info - n)
    if info > 0:
        raise ConvergenceError(routine_name(func), info)
    return w, v if vectors else None


def _self_adjoint(a: MatrixExpression) -> bool:
    """Symmetric with real values, or Hermitian."""
    if isinstance(a, HermitianMatrix):
        return True
    return isinstance(a, SymmetricMatrix) and not jnp.iscomplexobj(a.todense())


def pencil_operands(
    a: MatrixExpression, b: MatrixExpression, what: str = "An eigenvalue problem"
) -> tuple[np.ndarray, np.ndarray]:
    """Fortran copies of a square pencil in a common LAPACK type."""
    require_square(a, what)
    if a.shape != b.shape:
        msg = f"Pencil matrices must have equal shapes, got {a.shape} and {b.shape}."
        raise BadSizeError(msg)
    dtype = lapack_dtype(a.dtype, b.dtype)
    return as_fortran(a, dtype), as_fortran(b, dtype)


# --------------------------------------------------------------------------- #
# Structure dispatch
# --------------------------------------------------------------------------- #


@plum.dispatch
def spectrum(a: MatrixExpression, left: bool, right: bool) -> tuple:
    """``(w, vl, vr)`` of the standard problem as numpy arrays."""
    require_square(a, "An eigenvalue problem")
    return geev(as_fortran(a), left=left, right=right)


@spectrum.dispatch
def _(a: SymmetricMatrix, left: bool, right: bool) -> tuple:
    if not _self_adjoint(a):
        return geev(as_fortran(a), left=left, right=right)
    w, v = syevd(as_fortran(a), lower=a.lower, vectors=left or right)
    return w, v if left else None, v if right else None


@spectrum.dispatch
def _(a: MatrixExpression, b: MatrixExpression, left: bool, right: bool) -> tuple:
    alpha, beta, vl, vr = ggev(*pencil_operands(a, b), left=left, right=right)
    return pencil_ratio(alpha, beta), vl, vr


@spectrum.dispatch
def _(a: SymmetricMatrix, b: SymmetricMatrix, left: bool, right: bool) -> tuple:
    a_f, b_f = pencil_operands(a, b)
    if not (_self_adjoint(a) and _self_adjoint(b)):
        alpha, beta, vl, vr = ggev(a_f, b_f, left=left, right=right)
        return pencil_ratio(alpha, beta), vl, vr
    w, v = sygvd(a_f, b_f, lower=a.lower, vectors=left or right)
    return w, v if left else None, v if right else None


def _operands(a: MatrixExpression, b: MatrixExpression | None) -> tuple:
    return (a,) if b is None else (a, b)


# --------------------------------------------------------------------------- #
# Public interface
# --------------------------------------------------------------------------- #


def eigen(a: MatrixExpression, b: MatrixExpression | None = None) -> tuple[Vector, Matrix]:
    r"""Eigenvalues and right eigenvectors, :math:`A V = V \Lambda`.

    With ``b`` the generalized problem :math:`A V = B V \Lambda` is solved.

    Returns:
        ``(w, V)``; column ``j`` of ``V`` belongs to ``w[j]``.
    """
    w, _, vr = spectrum(*_operands(a, b), False, True)
    return to_vector(w), to_matrix(vr, orientation_of_operand(a))


def right_eigen(a: MatrixExpression, b: MatrixExpression | None = None) -> tuple[Vector, Matrix]:
    """Same as :func:`eigen`."""
    return eigen(a, b)


def left_eigen(a: MatrixExpression, b: MatrixExpression | None = None) -> tuple[Vector, Matrix]:
    r"""Eigenvalues and left eigenvectors, :math:`U^H A = \Lambda U^H`."""
    w, vl, _ = spectrum(*_operands(a, b), True, False)
    return to_vector(w), to_matrix(vl, orientation_of_operand(a))


def eigen_decompose(
    a: MatrixExpression, b: MatrixExpression | None = None
) -> tuple[Vector, Matrix, Matrix]:
    """Eigenvalues with both left and right eigenvectors.

    Returns:
        ``(w, U, V)``.
    """
    orientation = orientation_of_operand(a)
    w, vl, vr = spectrum(*_operands(a, b), True, True)
    return to_vector(w), to_matrix(vl, orientation), to_matrix(vr, orientation)


def eigen_values(a: MatrixExpression, b: MatrixExpression | None = None) -> Vector:
    """Eigenvalues of ``a`` (or of the pencil ``(a, b)``)."""
    w, _, _ = spectrum(*_operands(a, b), False, False)
    return to_vector(w)


def eigenvectors(a: MatrixExpression, b: MatrixExpression | None = None) -> Matrix:
    """Right eigenvectors of ``a`` (or of the pencil ``(a, b)``)."""
    return eigen(a, b)[1]


def eigen_inplace(
    a: MatrixExpression,
    w: Vector,
    v: Matrix | None = None,
    b: MatrixExpression | None = None,
) -> None:
    """Write the eigenvalues into ``w`` and the right eigenvectors into ``v``.

    Both containers are resized to fit; a real ``w`` is promoted to complex
    when the eigenvalues are.
    """
    if not isinstance(w, Vector) or not (v is None or isinstance(v, Matrix)):
        msg = "Eigenvalues and eigenvectors are written into Vector and Matrix containers."
        raise UnsupportedError(msg)
    values, _, vectors = spectrum(*_operands(a, b), False, v is not None)
    w.resize(values.shape[0], preserve=False)
    w.assign(values)
    if v is not None:
        v.resize(*vectors.shape, preserve=False)
        v.assign(vectors)
