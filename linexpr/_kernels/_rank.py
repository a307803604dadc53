# _rank.py

"""Numerical rank from the singular values."""

import numpy as np

from linexpr._base import MatrixExpression
from linexpr._kernels._lapack import as_fortran
from linexpr._kernels._svd import gesdd
from linexpr._numeric import eps


def rank(a: MatrixExpression, tol: float | None = None) -> int:
    r"""Number of singular values of ``a`` above ``tol``.

    Args:
        a: Matrix.
        tol: Threshold, defaults to :math:`\max(m, n) \cdot \mathrm{eps}(\sigma_1)`.
    """
    if min(a.shape) == 0:
        return 0
    _, s, _ = gesdd(as_fortran(a), compute_uv=False, full=False)
    if tol is None:
        tol = max(a.shape) * float(eps(float(s[0])))
    return int(np.count_nonzero(s > tol))
