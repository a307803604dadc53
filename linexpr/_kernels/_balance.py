# _balance.py

r"""Matrix balancing (``gebal``).

Balancing replaces :math:`A` by :math:`T^{-1} A T`, where :math:`T = P D` is
a permutation :math:`P` that isolates eigenvalues in the leading and trailing
corners followed by a diagonal scaling :math:`D` that equalizes row and
column norms of the remaining block. Eigenvalues are unchanged and usually
computed more accurately afterwards.

Besides the balanced matrix the caller can request

- the scaling vector (the diagonal of :math:`D`, ``1`` for isolated rows),
- the permutation vector (the identity permuted by the interchanges recorded
  by ``gebal``),
- the balancing matrix :math:`T`.

A pencil :math:`(A, B)` is balanced with the similarity :math:`T` computed
from the magnitude pattern :math:`|A| + |B|`, which keeps the generalized
eigenvalues.
"""

import numpy as np
import plum  # type: ignore  # noqa: PGH003

from linexpr._base import MatrixExpression
from linexpr._container import Matrix, Vector
from linexpr._errors import BadArgumentError, BadSizeError, UnsupportedError
from linexpr._kernels._lapack import (
    as_fortran,
    invoke,
    lapack_dtype,
    orientation_of_operand,
    routine,
    to_matrix,
    to_vector,
)


def _check_square(a: MatrixExpression) -> int:
    m, n = a.shape
    if m != n:
        msg = f"Balancing needs a square matrix, got shape {(m, n)}."
        raise BadSizeError(msg)
    return n


def gebal(a: np.ndarray, *, scale: bool, permute: bool) -> tuple:
    """Balance the Fortran array ``a``.

    Returns:
        ``(ba, scaling, permutation, transform)`` where ``transform`` is the
        pair ``(lo, hi, pivscale)`` consumed by :func:`balancing_matrix`.
    """
    n = a.shape[0]
    if n == 0:
        return a, np.ones((0,)), np.arange(0), (0, -1, np.ones((0,)))
    ba, lo, hi, pivscale, _ = invoke(
        routine("gebal", a), a, scale=int(scale), permute=int(permute)
    )
    lo, hi = int(lo), int(hi)
    scaling = np.ones(n, dtype=np.real(pivscale).dtype)
    scaling[lo : hi + 1] = pivscale[lo : hi + 1]
    # interchanges are recorded 1-based, for the trailing rows first
    targets = np.real(pivscale).astype(int) - 1
    permutation = np.arange(n)
    for i in [*range(n - 1, hi, -1), *range(lo)]:
        j = targets[i]
        permutation[[i, j]] = permutation[[j, i]]
    return ba, scaling, permutation, (lo, hi, np.real(pivscale))


def balancing_matrix(transform: tuple, dtype: object = np.float64) -> np.ndarray:
    r"""The matrix :math:`T` with :math:`T^{-1} A T` the balanced matrix.

    This is the back transformation of ``gebak`` applied to the identity:
    rows ``lo..hi`` are scaled first, then the recorded interchanges are
    undone.
    """
    lo, hi, pivscale = transform
    n = pivscale.shape[0]
    t = np.eye(n, dtype=dtype)
    if lo < hi:
        t[lo : hi + 1] *= pivscale[lo : hi + 1, None]
    targets = pivscale.astype(int) - 1
    for ii in range(n):
        if lo <= ii <= hi:
            continue
        i = lo - 1 - ii if ii < lo else ii
        k = targets[i]
        if k != i:
            t[[i, k]] = t[[k, i]]
    return t


def _inverse_transform(transform: tuple) -> tuple:
    lo, hi, pivscale = transform
    inverse = pivscale.copy()
    inverse[lo : hi + 1] = 1 / pivscale[lo : hi + 1]
    return lo, hi, inverse


def _outputs(
    balanced: tuple[Matrix, ...],
    scaling: np.ndarray,
    permutation: np.ndarray,
    transform: tuple,
    *,
    return_scaling: bool,
    return_permutation: bool,
    return_matrix: bool,
    orientation: object,
) -> Matrix | tuple:
    extras = []
    if return_scaling:
        extras.append(to_vector(scaling))
    if return_permutation:
        extras.append(Vector(permutation))
    if return_matrix:
        extras.append(to_matrix(balancing_matrix(transform), orientation))
    if not extras and len(balanced) == 1:
        return balanced[0]
    return (*balanced, *extras)


@plum.dispatch
def balance(
    a: MatrixExpression,
    scale: bool = True,  # noqa: FBT001, FBT002
    permute: bool = True,  # noqa: FBT001, FBT002
    *,
    return_scaling: bool = False,
    return_permutation: bool = False,
    return_matrix: bool = False,
) -> Matrix | tuple:
    r"""Balance a square matrix.

    Args:
        a: Square matrix.
        scale: Apply the diagonal scaling.
        permute: Apply the permutation.
        return_scaling: Also return the scaling vector.
        return_permutation: Also return the permutation vector.
        return_matrix: Also return the balancing matrix :math:`T`.

    Returns:
        The balanced matrix, or a tuple starting with it and followed by the
        requested extras in the order above.

    Raises:
        BadSizeError
            If ``a`` is not square.
    """
    _check_square(a)
    orientation = orientation_of_operand(a)
    ba, scaling, permutation, transform = gebal(
        as_fortran(a), scale=scale, permute=permute
    )
    return _outputs(
        (to_matrix(ba, orientation),),
        scaling,
        permutation,
        transform,
        return_scaling=return_scaling,
        return_permutation=return_permutation,
        return_matrix=return_matrix,
        orientation=orientation,
    )


@balance.dispatch
def _(
    a: MatrixExpression,
    b: MatrixExpression,
    scale: bool = True,  # noqa: FBT001, FBT002
    permute: bool = True,  # noqa: FBT001, FBT002
    *,
    return_scaling: bool = False,
    return_permutation: bool = False,
    return_matrix: bool = False,
) -> tuple:
    r"""Balance the pencil :math:`(A, B)`.

    Both matrices are transformed by one similarity :math:`T` computed from
    :math:`|A| + |B|`. This is not the two-sided balance :math:`D_l A D_r`,
    :math:`D_l B D_r` of ``ggbal``, so the outputs differ from it. The
    generalized eigenvalues are unchanged.

    Returns:
        ``(AA, BB)`` followed by the requested extras. The scaling and
        permutation are shared by both sides: :math:`AA = T^{-1} A T` and
        :math:`BB = T^{-1} B T`.

    Raises:
        BadSizeError
            If ``a`` or ``b`` is not square.
        BadArgumentError
            If ``a`` and ``b`` have different orders.
    """
    n = _check_square(a)
    if _check_square(b) != n:
        msg = f"Pencil matrices differ in order: {a.shape} and {b.shape}."
        raise BadArgumentError(msg)
    orientation = orientation_of_operand(a)
    dtype = lapack_dtype(a.dtype, b.dtype)
    a_data, b_data = as_fortran(a, dtype), as_fortran(b, dtype)
    pattern = np.asfortranarray(np.abs(a_data) + np.abs(b_data))
    _, scaling, permutation, transform = gebal(pattern, scale=scale, permute=permute)
    t = balancing_matrix(transform)
    # T = P D, so the transpose of P D^{-1} is its inverse
    t_inv = balancing_matrix(_inverse_transform(transform)).T
    return _outputs(
        (
            to_matrix(t_inv @ a_data @ t, orientation),
            to_matrix(t_inv @ b_data @ t, orientation),
        ),
        scaling,
        permutation,
        transform,
        return_scaling=return_scaling,
        return_permutation=return_permutation,
        return_matrix=return_matrix,
        orientation=orientation,
    )


def balance_inplace(
    a: Matrix,
    scale: bool = True,  # noqa: FBT001, FBT002
    permute: bool = True,  # noqa: FBT001, FBT002
    **kwargs: bool,
) -> tuple | None:
    """Balance the container ``a`` in place.

    Keyword arguments request extras as in :func:`balance`; they are returned
    as a tuple.
    """
    if not isinstance(a, Matrix):
        msg = f"Only matrix containers can be balanced in place, got {type(a).__name__}."
        raise UnsupportedError(msg)
    result = balance(a, scale, permute, **kwargs)
    if isinstance(result, Matrix):
        a.assign(result)
        return None
    a.assign(result[0])
    return result[1:]
