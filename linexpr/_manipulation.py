# _manipulation.py

r"""Shape manipulators.

- :func:`reshape`, :func:`reshape_inplace`: reorder the elements into a new
  shape, reading and writing along a dimension
- :func:`diag`: diagonal matrix from a vector, or diagonal view of a matrix
- :func:`triu`, :func:`tril`: triangular parts
- :func:`cat_rows`, :func:`cat_columns`: horizontal and vertical
  concatenation with zero padding
- :func:`eye`, :func:`rep`, :func:`rot90`, :func:`rot90_inplace`

Results are fresh containers (except for the diagonal view) and keep the
orientation of their (first) input.
"""

import jax
import jax.numpy as jnp
import plum  # type: ignore  # noqa: PGH003

from linexpr._base import Expression, MatrixExpression, VectorExpression
from linexpr._container import Matrix, Vector
from linexpr._diagonal import GeneralizedDiagonalMatrix, MatrixDiagonal
from linexpr._errors import BadSizeError, UnsupportedError
from linexpr._tags import DimensionTag, OrientationTag, as_dimension, row_major
from linexpr._typing import DTypeLike

DimensionLike = int | DimensionTag

# Dimension 1 reads and writes column by column, dimension 2 row by row.
_ORDER = {1: "F", 2: "C"}


def _result_orientation(x: Expression) -> OrientationTag:
    if isinstance(x, MatrixExpression):
        return x.orientation
    return row_major


def _check_reshape(n: int, rows: int, cols: int) -> None:
    if rows < 0 or cols < 0 or rows * cols != n:
        msg = f"Cannot reshape {n} elements into a {rows}x{cols} matrix."
        raise BadSizeError(msg)


# --------------------------------------------------------------------------- #
# Reshape
# --------------------------------------------------------------------------- #


@plum.dispatch
def reshape(v: VectorExpression, rows: int, cols: int) -> Matrix:
    """Lay the elements of ``v`` out row by row in a ``rows`` by ``cols`` matrix."""
    _check_reshape(v.size, rows, cols)
    return Matrix(jnp.reshape(v.todense(), (rows, cols)))


@reshape.dispatch
def _(m: MatrixExpression, rows: int, cols: int) -> Matrix:
    return reshape(m, rows, cols, 1)


@reshape.dispatch
def _(m: MatrixExpression, rows: int, cols: int, dim: DimensionLike) -> Matrix:
    r"""Reshape ``m`` along a dimension.

    Dimension 1 reads ``m`` column by column and fills the result column by
    column; dimension 2 does the same row by row. A dimension tag is resolved
    against the orientation of ``m``.

    Raises:
        BadSizeError
            If ``rows * cols`` differs from the number of elements of ``m``.
    """
    _check_reshape(m.size, rows, cols)
    order = _ORDER[as_dimension(dim, m)]
    data = jnp.reshape(m.todense(), (rows, cols), order=order)
    return Matrix(data, orientation=m.orientation)


def reshape_inplace(m: Matrix, rows: int, cols: int, dim: DimensionLike = 1) -> None:
    """Reshape the container ``m`` in place, see :func:`reshape`.

    Raises:
        UnsupportedError
            If ``m`` is not a matrix container.
    """
    if not isinstance(m, Matrix):
        msg = f"Only matrix containers can be reshaped in place, got {type(m).__name__}."
        raise UnsupportedError(msg)
    result = reshape(m, rows, cols, dim)
    m.resize(rows, cols, preserve=False)
    m.assign(result)


# --------------------------------------------------------------------------- #
# Diagonals and triangles
# --------------------------------------------------------------------------- #


@plum.dispatch
def diag(v: VectorExpression) -> GeneralizedDiagonalMatrix:
    return diag(v, 0)


@diag.dispatch
def _(v: VectorExpression, k: int) -> GeneralizedDiagonalMatrix:
    """Square matrix of order ``size(v) + |k|`` with ``v`` on diagonal ``k``."""
    n = v.size + abs(k)
    return GeneralizedDiagonalMatrix(v, n, n, k)


@diag.dispatch
def _(v: VectorExpression, rows: int, cols: int) -> GeneralizedDiagonalMatrix:
    return GeneralizedDiagonalMatrix(v, rows, cols, 0)


@diag.dispatch
def _(v: VectorExpression, rows: int, cols: int, k: int) -> GeneralizedDiagonalMatrix:
    """``rows`` by ``cols`` matrix with ``v`` (truncated if needed) on diagonal ``k``."""
    return GeneralizedDiagonalMatrix(v, rows, cols, k)


@diag.dispatch
def _(m: MatrixExpression) -> MatrixDiagonal:
    return MatrixDiagonal(m, 0)


@diag.dispatch
def _(m: MatrixExpression, k: int) -> MatrixDiagonal:
    """View of the ``k``-th diagonal of ``m``, writable when ``m`` is."""
    return MatrixDiagonal(m, k)


def triu(m: MatrixExpression, k: int = 0) -> Matrix:
    r"""Elements on and above the ``k``-th diagonal (:math:`j - i \geq k`)."""
    return Matrix(jnp.triu(m.todense(), k), orientation=m.orientation)


def tril(m: MatrixExpression, k: int = 0) -> Matrix:
    r"""Elements on and below the ``k``-th diagonal (:math:`j - i \leq k`)."""
    return Matrix(jnp.tril(m.todense(), k), orientation=m.orientation)


# --------------------------------------------------------------------------- #
# Concatenation
# --------------------------------------------------------------------------- #


def _as_block(x: VectorExpression | MatrixExpression) -> jax.Array:
    data = x.todense()
    return data[:, None] if isinstance(x, VectorExpression) else data


def _pad(block: jax.Array, rows: int, cols: int, dtype: jnp.dtype) -> jax.Array:
    result = jnp.zeros((rows, cols), dtype=dtype)
    return result.at[: block.shape[0], : block.shape[1]].set(block)


def cat_rows(
    a: VectorExpression | MatrixExpression, b: VectorExpression | MatrixExpression
) -> Matrix:
    r"""Place ``b`` to the right of ``a``.

    The result has :math:`\max(m_a, m_b)` rows and :math:`n_a + n_b` columns,
    the shorter block is padded with zeros. Vectors are column vectors.
    """
    a_data, b_data = _as_block(a), _as_block(b)
    dtype = jnp.result_type(a_data.dtype, b_data.dtype)
    rows = max(a_data.shape[0], b_data.shape[0])
    data = jnp.concatenate(
        [
            _pad(a_data, rows, a_data.shape[1], dtype),
            _pad(b_data, rows, b_data.shape[1], dtype),
        ],
        axis=1,
    )
    return Matrix(data, orientation=_result_orientation(a))


def cat_columns(
    a: VectorExpression | MatrixExpression, b: VectorExpression | MatrixExpression
) -> Matrix:
    r"""Place ``b`` below ``a``.

    The result has :math:`m_a + m_b` rows and :math:`\max(n_a, n_b)` columns,
    the narrower block is padded with zeros. Vectors are column vectors.
    """
    a_data, b_data = _as_block(a), _as_block(b)
    dtype = jnp.result_type(a_data.dtype, b_data.dtype)
    cols = max(a_data.shape[1], b_data.shape[1])
    data = jnp.concatenate(
        [
            _pad(a_data, a_data.shape[0], cols, dtype),
            _pad(b_data, b_data.shape[0], cols, dtype),
        ],
        axis=0,
    )
    return Matrix(data, orientation=_result_orientation(a))


# --------------------------------------------------------------------------- #
# Generators and rotations
# --------------------------------------------------------------------------- #


def eye(n: int, m: int | None = None, dtype: DTypeLike = jnp.float64) -> Matrix:
    """``n`` by ``m`` identity matrix (square when ``m`` is omitted)."""
    return Matrix(jnp.eye(n, n if m is None else m, dtype=dtype))


def rep(x: VectorExpression | MatrixExpression, nr: int, nc: int | None = None) -> Matrix:
    """Tile ``x`` ``nr`` times vertically and ``nc`` times horizontally.

    A vector is tiled as a column vector. ``nc`` defaults to ``nr``.
    """
    if nc is None:
        nc = nr
    return Matrix(jnp.tile(_as_block(x), (nr, nc)), orientation=_result_orientation(x))


@plum.dispatch
def rot90(v: VectorExpression, k: int = 1) -> Vector:
    """Rotate a vector.

    Vectors carry no row/column distinction, so rotations by 0 and 1 quarter
    turns keep the vector and rotations by 2 and 3 reverse it.
    """
    data = v.todense()
    return Vector(data[::-1] if k % 4 in {2, 3} else data)


@rot90.dispatch
def _(m: MatrixExpression, k: int = 1) -> Matrix:
    """Rotate a matrix by ``k`` quarter turns counter-clockwise."""
    return Matrix(jnp.rot90(m.todense(), k), orientation=m.orientation)


def rot90_inplace(x: Vector | Matrix, k: int = 1) -> None:
    """Rotate the container ``x`` in place, see :func:`rot90`."""
    if not isinstance(x, Vector | Matrix):
        msg = f"Only containers can be rotated in place, got {type(x).__name__}."
        raise UnsupportedError(msg)
    result = rot90(x, k)
    if isinstance(x, Matrix):
        x.resize(*result.shape, preserve=False)
    x.assign(result)
