# _lapack.py

"""Calling convention shared by the LAPACK bindings.

LAPACK works on column-major (Fortran ordered) buffers. Every binding

1. materializes its operands with :func:`as_fortran`,
2. looks up the typed routine with :func:`routine` (``d``/``z``/... prefix
   chosen from the operands),
3. calls it through :func:`invoke`, which performs the workspace query and
   checks ``info``,
4. rebuilds containers with :func:`to_matrix` / :func:`to_vector`.
"""

from collections.abc import Callable

import jax
import jax.numpy as jnp
import numpy as np
from scipy.linalg import lapack

from linexpr._base import Expression, MatrixExpression
from linexpr._container import Matrix, Vector
from linexpr._errors import BadArgumentError, KernelError
from linexpr._tags import OrientationTag, row_major
from linexpr._typing import ArrayLike

jax.config.update("jax_enable_x64", True)

_LAPACK_TYPES = (np.float32, np.float64, np.complex64, np.complex128)


def lapack_dtype(*dtypes: object) -> np.dtype:
    """Smallest LAPACK type holding all of ``dtypes`` (integers become ``float64``)."""
    dtype = np.result_type(*(np.dtype(d) for d in dtypes))
    if dtype in _LAPACK_TYPES:
        return dtype
    if np.issubdtype(dtype, np.complexfloating):
        return np.dtype(np.complex128)
    return np.dtype(np.float64)


def as_fortran(x: Expression | ArrayLike, dtype: object = None) -> np.ndarray:
    """Fresh column-major copy of ``x`` in a LAPACK type."""
    data = np.asarray(x.todense() if isinstance(x, Expression) else x)
    if dtype is None:
        dtype = lapack_dtype(data.dtype)
    return np.array(data, dtype=dtype, order="F", copy=True)


def as_rhs(b: Expression | ArrayLike, dtype: object) -> tuple[np.ndarray, bool]:
    """Right-hand side as a column-major matrix and whether it was a vector."""
    data = as_fortran(b, dtype)
    if data.ndim == 1:
        return np.asfortranarray(data[:, None]), True
    return data, False


def routine(name: str, *arrays: np.ndarray) -> Callable:
    """Typed LAPACK routine ``name`` for the value type of ``arrays``."""
    (func,) = lapack.get_lapack_funcs((name,), arrays)
    return func


def optimal_lwork(work: np.ndarray) -> int:
    """Workspace size reported by a ``lwork=-1`` query."""
    return max(1, int(np.ravel(work)[0].real))


def check_info(name: str, info: int) -> int:
    """Return ``info`` as status code, raise on invalid arguments.

    Raises:
        KernelError
            If ``info < 0``.
    """
    info = int(info)
    if info < 0:
        raise KernelError(name, info)
    return info


def routine_name(func: Callable) -> str:
    """Plain name of a typed routine, ``dgecon`` rather than ``function dgecon``."""
    return str(getattr(func, "__name__", "lapack")).split()[-1]


def invoke(func: Callable, *args: object, query: bool = False, **kwargs: object) -> tuple:
    """Call a LAPACK routine.

    With ``query=True`` the routine is first called with ``lwork=-1``; the
    optimal workspace size it reports is used for the actual call and the
    ``work`` output is dropped from the result.

    Returns:
        The outputs of the routine, the last one being the non-negative
        ``info`` status.
    """
    name = routine_name(func)
    if query:
        result = func(*args, **kwargs, lwork=-1)
        check_info(name, result[-1])
        result = func(*args, **kwargs, lwork=optimal_lwork(result[-2]))
        *outputs, _work, info = result
        return (*outputs, check_info(name, info))
    *outputs, info = func(*args, **kwargs)
    return (*outputs, check_info(name, info))


def require_square(a: MatrixExpression | np.ndarray, what: str) -> int:
    """Order of a square matrix.

    Raises:
        BadArgumentError
            If ``a`` is not square.
    """
    m, n = a.shape
    if m != n:
        msg = f"{what} needs a square matrix, got shape {(m, n)}."
        raise BadArgumentError(msg)
    return n


def orientation_of_operand(x: object) -> OrientationTag:
    return getattr(x, "orientation", row_major)


def to_matrix(a: np.ndarray, orientation: OrientationTag = row_major) -> Matrix:
    return Matrix(jnp.asarray(a), orientation=orientation)


def to_vector(a: np.ndarray) -> Vector:
    return Vector(jnp.asarray(np.ravel(a)))


def to_result(x: np.ndarray, vector: bool, orientation: OrientationTag) -> Vector | Matrix:
    """Solution of a solve in the shape of its right-hand side."""
    return to_vector(x[:, 0]) if vector else to_matrix(x, orientation)
