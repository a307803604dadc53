# _diagonal.py

r"""Diagonal views and diagonal matrices.

- :class:`MatrixDiagonal`: the :math:`k`-th diagonal of a matrix as a vector
  expression (read/write view)
- :class:`GeneralizedDiagonalMatrix`: a (rectangular) matrix whose only
  non-zeros lie on its :math:`k`-th diagonal

For both, :math:`k > 0` addresses a super-diagonal and :math:`k < 0` a
sub-diagonal. Element :math:`j` of the :math:`k`-th diagonal is
:math:`a_{j + \max(0, -k),\, j + \max(0, k)}`.
"""

import jax
import jax.numpy as jnp

from linexpr._base import MatrixExpression, VectorExpression
from linexpr._errors import BadIndexError, BadSizeError
from linexpr._tags import (
    ClosureTag,
    IteratorCategory,
    OrientationTag,
    StorageTag,
    closure_of,
    row_major,
    sparse,
)
from linexpr._typing import ArrayLike, DTypeLike, ScalarLike


def diagonal_offsets(k: int) -> tuple[int, int]:
    """Row and column of the first element of the ``k``-th diagonal."""
    return max(0, -k), max(0, k)


def diagonal_size(size1: int, size2: int, k: int) -> int:
    r"""Length of the ``k``-th diagonal of a ``size1`` by ``size2`` matrix."""
    n = min(size1, size2 - k) if k >= 0 else min(size1 + k, size2)
    return max(n, 0)


class MatrixDiagonal(VectorExpression):
    r"""The ``k``-th diagonal of a matrix expression as a vector expression.

    The view shares the matrix: reads always see the current elements, and
    writes go to the matrix unless the view is read-only or the matrix is
    not writable.

    Args:
        matrix: The viewed matrix expression.
        k: Diagonal offset.
        readonly: Forbid writes through the view.
    """

    def __init__(self, matrix: MatrixExpression, k: int = 0, *, readonly: bool = False) -> None:
        if not isinstance(matrix, MatrixExpression):
            msg = f"Expected a matrix expression, got {type(matrix).__name__}."
            raise TypeError(msg)
        self._matrix = matrix
        self._k = int(k)
        self._readonly = readonly

    @property
    def matrix(self) -> MatrixExpression:
        return self._matrix

    @property
    def offset(self) -> int:
        return self._k

    @property
    def size(self) -> int:
        return diagonal_size(self._matrix.size1, self._matrix.size2, self._k)

    @property
    def dtype(self) -> jnp.dtype:
        return self._matrix.dtype

    @property
    def storage(self) -> StorageTag:
        return self._matrix.storage

    @property
    def closure(self) -> ClosureTag:
        return closure_of(self._matrix)

    @property
    def iterator_category(self) -> IteratorCategory:
        return self._matrix.iterator_category

    @property
    def writable(self) -> bool:
        return not self._readonly and self._matrix.writable

    def _position(self, j: int) -> tuple[int, int]:
        r, c = diagonal_offsets(self._k)
        return j + r, j + c

    def _element(self, j: int) -> jax.Array:
        return self._matrix(*self._position(j))

    def _set_element(self, j: int, value: ScalarLike) -> None:
        self._matrix[self._position(j)] = value

    def todense(self) -> jax.Array:
        if self.size == 0:
            return jnp.zeros((0,), dtype=self.dtype)
        return jnp.diagonal(self._matrix.todense(), offset=self._k)


class GeneralizedDiagonalMatrix(MatrixExpression):
    r"""A ``size1`` by ``size2`` matrix with ``data`` on its ``k``-th diagonal.

    Only the diagonal is stored. ``data`` is truncated when longer than the
    diagonal and zero-padded when shorter.

    Args:
        data: Diagonal elements.
        size1: Number of rows; defaults to ``len(data) + |k|``.
        size2: Number of columns; defaults to ``size1``.
        k: Diagonal offset.
        orientation: Orientation tag.
        dtype: Value type.

    Raises:
        BadSizeError
            If the ``k``-th diagonal lies outside the matrix.
    """

    is_container = True

    def __init__(
        self,
        data: ArrayLike | VectorExpression,
        size1: int | None = None,
        size2: int | None = None,
        k: int = 0,
        orientation: OrientationTag = row_major,
        dtype: DTypeLike = None,
    ) -> None:
        if isinstance(data, VectorExpression):
            data = data.todense()
        data = jnp.asarray(data, dtype=dtype).reshape(-1)
        k = int(k)
        if size1 is None:
            size1 = data.shape[0] + abs(k)
        if size2 is None:
            size2 = size1
        r, c = diagonal_offsets(k)
        if size1 > 0 and size2 > 0 and (r >= size1 or c >= size2):
            msg = f"Diagonal {k} lies outside a {size1}x{size2} matrix."
            raise BadSizeError(msg)
        n = diagonal_size(size1, size2, k)
        stored = jnp.zeros((n,), dtype=data.dtype)
        m = min(n, data.shape[0])
        self._data = stored.at[:m].set(data[:m])
        self._size1 = size1
        self._size2 = size2
        self._k = k
        self._orientation = orientation

    @property
    def data(self) -> jax.Array:
        """The stored diagonal."""
        return self._data

    @property
    def offset(self) -> int:
        return self._k

    @property
    def size1(self) -> int:
        return self._size1

    @property
    def size2(self) -> int:
        return self._size2

    @property
    def dtype(self) -> jnp.dtype:
        return self._data.dtype

    @property
    def orientation(self) -> OrientationTag:
        return self._orientation

    @property
    def storage(self) -> StorageTag:
        return sparse

    @property
    def writable(self) -> bool:
        return True

    def _on_diagonal(self, i: int, j: int) -> bool:
        return j - i == self._k

    def _element(self, i: int, j: int) -> jax.Array:
        if not self._on_diagonal(i, j):
            return jnp.zeros((), dtype=self.dtype)
        return self._data[i - diagonal_offsets(self._k)[0]]

    def _set_element(self, i: int, j: int, value: ScalarLike) -> None:
        if not self._on_diagonal(i, j):
            msg = f"Element ({i}, {j}) lies outside diagonal {self._k}."
            raise BadIndexError(msg)
        self._data = self._data.at[i - diagonal_offsets(self._k)[0]].set(value)

    def todense(self) -> jax.Array:
        result = jnp.zeros(self.shape, dtype=self.dtype)
        if self._data.shape[0] == 0:
            return result
        r, c = diagonal_offsets(self._k)
        index = jnp.arange(self._data.shape[0])
        return result.at[index + r, index + c].set(self._data)
