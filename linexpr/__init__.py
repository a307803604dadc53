# __init__.py
r"""`linexpr`: Lazy vector and matrix expressions in JAX.

This package provides:

- Containers: :class:`Vector`, :class:`Matrix` and the structured
    :class:`TriangularMatrix`, :class:`SymmetricMatrix`, :class:`HermitianMatrix`,
    :class:`BandedMatrix`
- Lazy element-wise expressions: :class:`VectorUnary`, :class:`VectorBinary`,
    :class:`MatrixUnary`, :class:`MatrixBinary`, built by the arithmetic
    operators, :func:`apply` and the functions :func:`isfinite`, :func:`isinf`,
    :func:`element_pow`, ...
- Views and generators: :class:`MatrixDiagonal`,
    :class:`GeneralizedDiagonalMatrix`, :class:`SequenceVector`
- Reductions by dimension or dimension tag: :func:`max`, :func:`min`,
    :func:`sum`, :func:`cumsum`, :func:`any`, :func:`all`, :func:`for_each`
- Shape manipulation: :func:`reshape`, :func:`diag`, :func:`triu`,
    :func:`cat_rows`, :func:`cat_columns`, :func:`rep`, :func:`rot90`
- Dense linear algebra on LAPACK: LU, QR, QL, SVD, Cholesky, balancing, least
    squares, :func:`rcond`, :func:`cond`, :func:`inv`

Expressions are evaluated element by element on access, or all at once with
``todense()``.
"""

__version__ = "0.1.0"

from ._base import Expression, MatrixExpression, VectorExpression
from ._container import (
    BandedMatrix,
    HermitianMatrix,
    Matrix,
    SymmetricMatrix,
    TriangularMatrix,
    Vector,
)
from ._diagonal import GeneralizedDiagonalMatrix, MatrixDiagonal
from ._errors import (
    BadArgumentError,
    BadIndexError,
    BadSizeError,
    ConvergenceError,
    ExternalLogicError,
    KernelError,
    LinexprError,
    SingularMatrixError,
    UnsupportedError,
)
from ._expression import (
    MatrixBinary,
    MatrixUnary,
    VectorBinary,
    VectorUnary,
    alias,
    apply,
    identity,
)
from ._functional import (
    element_pow,
    hold,
    isfinite,
    isinf,
    log,
    log2,
    log10,
    pow2,
    round,  # noqa: A004
    sign,
    sqr,
    sqrt,
    tanh,
    transform,
)
from ._iterator import MatrixIterator1, MatrixIterator2, VectorIterator
from ._kernels import (
    LUDecomposition,
    QLDecomposition,
    QRDecomposition,
    QZDecomposition,
    SVDDecomposition,
    balance,
    balance_inplace,
    cholesky_decompose,
    cholesky_decompose_inplace,
    cholesky_solve,
    cond,
    cond_1,
    cond_2,
    cond_frobenius,
    cond_inf,
    eigen,
    eigen_decompose,
    eigen_inplace,
    eigen_values,
    eigenvectors,
    inv,
    inv_inplace,
    left_eigen,
    llsq,
    llsq_inplace,
    llsq_qr,
    llsq_qr_inplace,
    llsq_svd,
    llsq_svd_inplace,
    lu_apply,
    lu_decompose,
    lu_decompose_inplace,
    lu_solve,
    lu_solve_inplace,
    mldivide,
    mldivide_inplace,
    ql_decompose,
    qr_decompose,
    qz,
    qz_decompose,
    qz_decompose_inplace,
    qz_reorder,
    qz_reorder_inplace,
    rank,
    rcond,
    right_eigen,
    svd_decompose,
    svd_values,
)
from ._manipulation import (
    cat_columns,
    cat_rows,
    diag,
    eye,
    rep,
    reshape,
    reshape_inplace,
    rot90,
    rot90_inplace,
    tril,
    triu,
)
from ._numeric import eps, realmax, realmin
from ._reduction import (
    all,  # noqa: A004
    any,  # noqa: A004
    cumsum,
    cumsum_columns,
    cumsum_rows,
    dot,
    find,
    for_each,
    max,  # noqa: A004
    max_columns,
    max_rows,
    min,  # noqa: A004
    min_columns,
    min_rows,
    sum,  # noqa: A004
    sum_all,
    sum_columns,
    sum_rows,
    trace,
    which,
)
from ._sequence import SequenceVector, linspace, logspace, seq
from ._shape import empty, num_columns, num_elements, num_rows, size
from ._tags import (
    as_dimension,
    bidirectional_iterator,
    borrowed,
    column_major,
    dense,
    forward_iterator,
    iterator_category_of,
    leading,
    major,
    minor,
    norm_1,
    norm_2,
    norm_frobenius,
    norm_inf,
    orientation_of,
    owned,
    random_access_iterator,
    real_type,
    resolve_dimension,
    row_major,
    sparse,
    storage_of,
    unknown_orientation,
    unknown_storage,
    value_type,
    weaker_category,
)
from .config import is_debug, set_debug
from .utils import allclose, todense

# Explicitly declare public API
__all__ = [
    # Expressions and containers
    "BandedMatrix",
    "Expression",
    "GeneralizedDiagonalMatrix",
    "HermitianMatrix",
    "Matrix",
    "MatrixBinary",
    "MatrixDiagonal",
    "MatrixExpression",
    "MatrixIterator1",
    "MatrixIterator2",
    "MatrixUnary",
    "SequenceVector",
    "SymmetricMatrix",
    "TriangularMatrix",
    "Vector",
    "VectorBinary",
    "VectorExpression",
    "VectorIterator",
    "VectorUnary",
    "alias",
    "apply",
    "identity",
    # Errors
    "BadArgumentError",
    "BadIndexError",
    "BadSizeError",
    "ConvergenceError",
    "ExternalLogicError",
    "KernelError",
    "LinexprError",
    "SingularMatrixError",
    "UnsupportedError",
    # Tags and traits
    "as_dimension",
    "bidirectional_iterator",
    "borrowed",
    "column_major",
    "dense",
    "forward_iterator",
    "iterator_category_of",
    "leading",
    "major",
    "minor",
    "norm_1",
    "norm_2",
    "norm_frobenius",
    "norm_inf",
    "orientation_of",
    "owned",
    "random_access_iterator",
    "real_type",
    "resolve_dimension",
    "row_major",
    "sparse",
    "storage_of",
    "unknown_orientation",
    "unknown_storage",
    "value_type",
    "weaker_category",
    # Shape
    "empty",
    "num_columns",
    "num_elements",
    "num_rows",
    "size",
    # Element-wise functions
    "element_pow",
    "hold",
    "isfinite",
    "isinf",
    "log",
    "log10",
    "log2",
    "pow2",
    "round",
    "sign",
    "sqr",
    "sqrt",
    "tanh",
    "transform",
    # Reductions
    "all",
    "any",
    "cumsum",
    "cumsum_columns",
    "cumsum_rows",
    "dot",
    "find",
    "for_each",
    "max",
    "max_columns",
    "max_rows",
    "min",
    "min_columns",
    "min_rows",
    "sum",
    "sum_all",
    "sum_columns",
    "sum_rows",
    "trace",
    "which",
    # Shape manipulation
    "cat_columns",
    "cat_rows",
    "diag",
    "eye",
    "rep",
    "reshape",
    "reshape_inplace",
    "rot90",
    "rot90_inplace",
    "tril",
    "triu",
    # Sequences and constants
    "eps",
    "linspace",
    "logspace",
    "realmax",
    "realmin",
    "seq",
    # Linear algebra
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
    # Utilities and configuration
    "allclose",
    "is_debug",
    "set_debug",
    "todense",
]
