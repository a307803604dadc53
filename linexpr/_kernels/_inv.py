# _inv.py

r"""Matrix inverse through the LU decomposition.

:math:`A^{-1}` solves :math:`AX = I` with the LU factors of :math:`A`. Inversion
never raises on numerical trouble: a singular matrix, a matrix with non-finite
entries or a failing routine gives a result filled with ``+inf`` and the flag
``False``, an ill-conditioned one gives a warning.
"""

import jax.numpy as jnp
import numpy as np

from linexpr import config
from linexpr._base import MatrixExpression
from linexpr._container import Matrix
from linexpr._errors import LinexprError, UnsupportedError
from linexpr._kernels._lapack import as_fortran, orientation_of_operand, require_square, to_matrix
from linexpr._kernels._lu import lu_inverse
from linexpr._kernels._rcond import general_estimate
from linexpr._tags import norm_1


def inv(a: MatrixExpression) -> tuple[bool, Matrix]:
    """Inverse of the square matrix ``a``.

    Returns:
        ``(ok, X)``: ``ok`` is ``False`` and ``X`` is filled with ``+inf`` when
        ``a`` is singular or the inversion fails.

    Raises:
        BadArgumentError
            If ``a`` is not square.
    """
    n = require_square(a, "Inversion")
    orientation = orientation_of_operand(a)
    data = as_fortran(a)
    if n == 0:
        return True, to_matrix(data, orientation)
    saturated = Matrix(jnp.full((n, n), jnp.inf, dtype=data.dtype), orientation=orientation)
    try:
        info, inverse = lu_inverse(data)
        if info != 0 or not np.all(np.isfinite(inverse)):
            return False, saturated
        rcond = general_estimate(as_fortran(a), norm_1)
    except (ArithmeticError, LinexprError) as err:
        config.warn(f"Inversion failed: {err}", force=True)
        return False, saturated
    if rcond < np.finfo(data.dtype).eps:
        config.warn(f"Matrix is close to singular, rcond = {rcond:.3e}.", force=True)
    return True, to_matrix(inverse, orientation)


def inv_inplace(a: Matrix) -> bool:
    """Overwrite ``a`` with its inverse and return the success flag."""
    if not isinstance(a, Matrix):
        msg = f"Only matrix containers can be inverted in place, got {type(a).__name__}."
        raise UnsupportedError(msg)
    ok, inverse = inv(a)
    a.assign(inverse)
    return ok
