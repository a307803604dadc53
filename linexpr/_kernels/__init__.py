"""Dense decompositions and solvers backed by the LAPACK routines of SciPy.

Every function materializes its operands into column-major buffers, calls the
typed LAPACK routine and rebuilds :class:`~linexpr.Vector` or
:class:`~linexpr.Matrix` containers with the orientation of the input.

Submodules
----------
_lapack
    Calling convention shared by all bindings
_lu, _qr, _ql, _svd, _cholesky
    Decompositions and the solvers built on them
_eigen, _qz
    Eigenvalue problems and the generalized Schur decomposition
_balance
    Balancing of matrices and pencils
_lsq
    Linear least squares
_rcond, _cond, _inv, _rank
    Conditioning, inverse and numerical rank

Exported Functions
------------------

Decompositions
~~~~~~~~~~~~~~
lu_decompose, qr_decompose, ql_decompose, svd_decompose, cholesky_decompose
LUDecomposition, QRDecomposition, QLDecomposition, SVDDecomposition

Eigenvalue Problems
~~~~~~~~~~~~~~~~~~~
eigen, eigen_values, eigenvectors, left_eigen, right_eigen, eigen_decompose,
eigen_inplace, qz, qz_decompose, qz_reorder, QZDecomposition

Linear Systems
~~~~~~~~~~~~~~
lu_solve, lu_apply, mldivide, cholesky_solve, llsq, llsq_qr, llsq_svd

Conditioning
~~~~~~~~~~~~
rcond, cond, cond_1, cond_2, cond_inf, cond_frobenius, inv, rank, balance
"""

from linexpr._kernels._balance import balance, balance_inplace
from linexpr._kernels._cholesky import (
    cholesky_decompose,
    cholesky_decompose_inplace,
    cholesky_solve,
)
from linexpr._kernels._cond import cond, cond_1, cond_2, cond_frobenius, cond_inf
from linexpr._kernels._eigen import (
    eigen,
    eigen_decompose,
    eigen_inplace,
    eigen_values,
    eigenvectors,
    left_eigen,
    right_eigen,
)
from linexpr._kernels._inv import inv, inv_inplace
from linexpr._kernels._lsq import (
    llsq,
    llsq_inplace,
    llsq_qr,
    llsq_qr_inplace,
    llsq_svd,
    llsq_svd_inplace,
)
from linexpr._kernels._lu import (
    LUDecomposition,
    lu_apply,
    lu_decompose,
    lu_decompose_inplace,
    lu_solve,
    lu_solve_inplace,
    mldivide,
    mldivide_inplace,
)
from linexpr._kernels._ql import QLDecomposition, ql_decompose
from linexpr._kernels._qr import QRDecomposition, qr_decompose
from linexpr._kernels._qz import (
    QZDecomposition,
    qz,
    qz_decompose,
    qz_decompose_inplace,
    qz_reorder,
    qz_reorder_inplace,
)
from linexpr._kernels._rank import rank
from linexpr._kernels._rcond import rcond
from linexpr._kernels._svd import SVDDecomposition, svd_decompose, svd_values

__all__ = [
    "LUDecomposition",
    "QLDecomposition",
    "QRDecomposition",
    "QZDecomposition",
    "SVDDecomposition",
    "balance",
    "balance_inplace",
    "cholesky_decompose",
    "cholesky_decompose_inplace",
    "cholesky_solve",
    "cond",
    "cond_1",
    "cond_2",
    "cond_frobenius",
    "cond_inf",
    "eigen",
    "eigen_decompose",
    "eigen_inplace",
    "eigen_values",
    "eigenvectors",
    "inv",
    "inv_inplace",
    "left_eigen",
    "llsq",
    "llsq_inplace",
    "llsq_qr",
    "llsq_qr_inplace",
    "llsq_svd",
    "llsq_svd_inplace",
    "lu_apply",
    "lu_decompose",
    "lu_decompose_inplace",
    "lu_solve",
    "lu_solve_inplace",
    "mldivide",
    "mldivide_inplace",
    "ql_decompose",
    "qr_decompose",
    "qz",
    "qz_decompose",
    "qz_decompose_inplace",
    "qz_reorder",
    "qz_reorder_inplace",
    "rank",
    "rcond",
    "right_eigen",
    "svd_decompose",
    "svd_values",
]
