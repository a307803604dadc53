# _shape.py

r"""Shape queries.

- :func:`size`: ``size(v)``, ``size(v, 1)``, ``size(m, k)`` with ``k`` in
  {1, 2} and ``size(m, tag)`` with a dimension tag
- :func:`num_rows`, :func:`num_columns`
- :func:`num_elements`, :func:`empty`
"""

import plum  # type: ignore  # noqa: PGH003

from linexpr._base import MatrixExpression, VectorExpression
from linexpr._errors import UnsupportedError
from linexpr._tags import DimensionTag, as_dimension


@plum.dispatch
def size(v: VectorExpression) -> int:
    return v.size


@size.dispatch
def _(v: VectorExpression, dim: int) -> int:
    if dim != 1:
        msg = f"A vector only has dimension 1, got {dim}."
        raise UnsupportedError(msg)
    return v.size


@size.dispatch
def _(m: MatrixExpression, dim: int) -> int:
    return m.shape[as_dimension(dim) - 1]


@size.dispatch
def _(m: MatrixExpression, tag: DimensionTag) -> int:
    return m.shape[as_dimension(tag, m) - 1]


@size.dispatch
def _(m: MatrixExpression) -> int:  # noqa: ARG001
    msg = "The size of a matrix needs a dimension, use size(m, 1) or size(m, 2)."
    raise UnsupportedError(msg)


def num_rows(m: MatrixExpression) -> int:
    """Number of rows of a matrix expression."""
    return m.size1


def num_columns(m: MatrixExpression) -> int:
    """Number of columns of a matrix expression."""
    return m.size2


@plum.dispatch
def num_elements(v: VectorExpression) -> int:
    return v.size


@num_elements.dispatch
def _(m: MatrixExpression) -> int:
    return m.size1 * m.size2


def empty(x: VectorExpression | MatrixExpression) -> bool:
    """Whether the expression has no elements."""
    return num_elements(x) == 0
