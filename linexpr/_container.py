# _container.py

r"""Dense containers.

Containers own their elements and are the only writable expressions besides
identity aliases and diagonal views:

- :class:`Vector`: a dense vector :math:`v \in \mathbb{K}^n`
- :class:`Matrix`: a dense matrix :math:`A \in \mathbb{K}^{m \times n}` with a
  row-major or column-major orientation
- :class:`TriangularMatrix`: upper or lower (unit) triangular matrix
- :class:`SymmetricMatrix`: :math:`A = A^T`
- :class:`HermitianMatrix`: :math:`A = A^H`
- :class:`BandedMatrix`: matrix with ``lower`` sub- and ``upper`` super-diagonals

Elements live in a :class:`jax.Array`. Writes are functional updates which
rebind the buffer of the container, so expressions borrowing the container
always observe the latest values.
"""

import jax
import jax.numpy as jnp

from linexpr._base import Expression, MatrixExpression, VectorExpression
from linexpr._errors import BadIndexError, BadSizeError
from linexpr._tags import (
    DenseTag,
    OrientationTag,
    dense,
    row_major,
)
from linexpr._typing import ArrayLike, DTypeLike, ScalarLike

jax.config.update("jax_enable_x64", True)


def _materialize(data: ArrayLike | Expression, dtype: DTypeLike) -> jax.Array:
    if isinstance(data, Expression):
        data = data.todense()
    return jnp.asarray(data, dtype=dtype)


# --------------------------------------------------------------------------- #
# Vector
# --------------------------------------------------------------------------- #


@jax.tree_util.register_pytree_node_class
class Vector(VectorExpression):
    r"""A dense vector.

    Args:
        data: Elements of the vector, any 1-D array-like or vector expression.
        dtype: Optional value type the elements are converted to.
    """

    is_container = True

    def __init__(self, data: ArrayLike | VectorExpression, dtype: DTypeLike = None) -> None:
        data = _materialize(data, dtype)
        if data.ndim != 1:
            msg = f"A vector needs one-dimensional data, got shape {data.shape}."
            raise BadSizeError(msg)
        self._data = data

    @classmethod
    def zeros(cls, n: int, dtype: DTypeLike = jnp.float64) -> "Vector":
        return cls(jnp.zeros((n,), dtype=dtype))

    @classmethod
    def full(cls, n: int, value: ScalarLike, dtype: DTypeLike = None) -> "Vector":
        return cls(jnp.full((n,), value, dtype=dtype))

    @property
    def data(self) -> jax.Array:
        return self._data

    @property
    def size(self) -> int:
        return self._data.shape[0]

    @property
    def dtype(self) -> jnp.dtype:
        return self._data.dtype

    @property
    def storage(self) -> DenseTag:
        return dense

    @property
    def writable(self) -> bool:
        return True

    def _element(self, i: int) -> jax.Array:
        return self._data[i]

    def _set_element(self, i: int, value: ScalarLike) -> None:
        self._data = self._data.at[i].set(value)

    def todense(self) -> jax.Array:
        return self._data

    def resize(self, n: int, *, preserve: bool = True) -> None:
        """Change the size, keeping the leading elements if ``preserve``."""
        data = jnp.zeros((n,), dtype=self.dtype)
        if preserve:
            k = min(n, self.size)
            data = data.at[:k].set(self._data[:k])
        self._data = data

    def assign(self, other: VectorExpression | ArrayLike) -> "Vector":
        """Overwrite the elements with those of an expression of equal size."""
        data = _materialize(other, None)
        if data.shape != self.shape:
            msg = f"Cannot assign shape {data.shape} to a vector of shape {self.shape}."
            raise BadSizeError(msg)
        self._data = data.astype(jnp.result_type(self.dtype, data.dtype))
        return self

    def copy(self) -> "Vector":
        return Vector(self._data)

    def tree_flatten(self) -> tuple[tuple[any, ...], dict[str, any]]:
        children = (self._data,)
        aux_data = {}
        return children, aux_data

    @classmethod
    def tree_unflatten(
        cls,
        aux_data: dict[str, any],  # noqa: ARG003
        children: tuple[any, ...],
    ) -> "Vector":
        (data,) = children
        return cls(data)


# --------------------------------------------------------------------------- #
# Matrix
# --------------------------------------------------------------------------- #


@jax.tree_util.register_pytree_node_class
class Matrix(MatrixExpression):
    r"""A dense matrix.

    The orientation only affects operations that take a dimension tag
    (``major``, ``minor``, ``leading``) and the preferred traversal order; the
    elements are always addressed as ``A(i, j)``.

    Args:
        data: Elements of the matrix, any 2-D array-like or matrix expression.
        orientation: :data:`~linexpr.row_major` (default) or
            :data:`~linexpr.column_major`.
        dtype: Optional value type the elements are converted to.
    """

    is_container = True

    def __init__(
        self,
        data: ArrayLike | MatrixExpression,
        orientation: OrientationTag | None = None,
        dtype: DTypeLike = None,
    ) -> None:
        if orientation is None:
            orientation = getattr(data, "orientation", row_major)
        if not isinstance(orientation, OrientationTag):
            msg = f"Expected an orientation tag, got {orientation!r}."
            raise TypeError(msg)
        data = _materialize(data, dtype)
        if data.ndim != 2:  # noqa: PLR2004
            msg = f"A matrix needs two-dimensional data, got shape {data.shape}."
            raise BadSizeError(msg)
        self._data = self._normalize(data)
        self._orientation = orientation

    def _normalize(self, data: jax.Array) -> jax.Array:
        return data

    @classmethod
    def zeros(
        cls,
        m: int,
        n: int,
        dtype: DTypeLike = jnp.float64,
        orientation: OrientationTag = row_major,
    ) -> "Matrix":
        return cls(jnp.zeros((m, n), dtype=dtype), orientation=orientation)

    @property
    def data(self) -> jax.Array:
        return self._data

    @property
    def size1(self) -> int:
        return self._data.shape[0]

    @property
    def size2(self) -> int:
        return self._data.shape[1]

    @property
    def dtype(self) -> jnp.dtype:
        return self._data.dtype

    @property
    def orientation(self) -> OrientationTag:
        return self._orientation

    @property
    def storage(self) -> DenseTag:
        return dense

    @property
    def writable(self) -> bool:
        return True

    def _element(self, i: int, j: int) -> jax.Array:
        return self._data[i, j]

    def _set_element(self, i: int, j: int, value: ScalarLike) -> None:
        self._data = self._data.at[i, j].set(value)

    def todense(self) -> jax.Array:
        return self._data

    def resize(self, m: int, n: int, *, preserve: bool = True) -> None:
        """Change the shape, keeping the leading block if ``preserve``."""
        data = jnp.zeros((m, n), dtype=self.dtype)
        if preserve:
            k1, k2 = min(m, self.size1), min(n, self.size2)
            data = data.at[:k1, :k2].set(self._data[:k1, :k2])
        self._data = data

    def assign(self, other: MatrixExpression | ArrayLike) -> "Matrix":
        """Overwrite the elements with those of an expression of equal shape."""
        data = _materialize(other, None)
        if data.shape != self.shape:
            msg = f"Cannot assign shape {data.shape} to a matrix of shape {self.shape}."
            raise BadSizeError(msg)
        self._data = self._normalize(
            data.astype(jnp.result_type(self.dtype, data.dtype))
        )
        return self

    def copy(self) -> "Matrix":
        return Matrix(self._data, orientation=self._orientation)

    def tree_flatten(self) -> tuple[tuple[any, ...], dict[str, any]]:
        children = (self._data,)
        aux_data = {"orientation": self._orientation}
        return children, aux_data

    @classmethod
    def tree_unflatten(
        cls,
        aux_data: dict[str, any],
        children: tuple[any, ...],
    ) -> "Matrix":
        (data,) = children
        return Matrix(data, **aux_data)


# --------------------------------------------------------------------------- #
# Structured matrices
# --------------------------------------------------------------------------- #


class TriangularMatrix(Matrix):
    r"""An upper or lower triangular matrix.

    Elements outside the triangle are structural zeros and cannot be written.

    Args:
        data: Elements, the other triangle is discarded.
        lower: Whether the matrix is lower triangular.
        unit: Whether the diagonal is implicitly one.
        orientation: Orientation tag.
        dtype: Value type.
    """

    def __init__(
        self,
        data: ArrayLike | MatrixExpression,
        lower: bool = False,  # noqa: FBT001, FBT002
        unit: bool = False,  # noqa: FBT001, FBT002
        orientation: OrientationTag | None = None,
        dtype: DTypeLike = None,
    ) -> None:
        self.lower = lower
        self.unit = unit
        super().__init__(data, orientation=orientation, dtype=dtype)

    def _normalize(self, data: jax.Array) -> jax.Array:
        data = jnp.tril(data) if self.lower else jnp.triu(data)
        if self.unit:
            k = min(data.shape)
            data = data.at[jnp.arange(k), jnp.arange(k)].set(1)
        return data

    def _set_element(self, i: int, j: int, value: ScalarLike) -> None:
        outside = (j > i) if self.lower else (j < i)
        if outside or (self.unit and i == j):
            msg = f"Element ({i}, {j}) of a triangular matrix is not writable."
            raise BadIndexError(msg)
        super()._set_element(i, j, value)

    def copy(self) -> "TriangularMatrix":
        return TriangularMatrix(
            self._data, self.lower, self.unit, orientation=self._orientation
        )


class SymmetricMatrix(Matrix):
    r"""A symmetric matrix :math:`A = A^T` built from one of its triangles.

    Args:
        data: Square elements; only the ``lower`` (or upper) triangle is read.
        lower: Which triangle defines the matrix.
        orientation: Orientation tag.
        dtype: Value type.
    """

    def __init__(
        self,
        data: ArrayLike | MatrixExpression,
        lower: bool = True,  # noqa: FBT001, FBT002
        orientation: OrientationTag | None = None,
        dtype: DTypeLike = None,
    ) -> None:
        self.lower = lower
        super().__init__(data, orientation=orientation, dtype=dtype)

    def _mirror(self, data: jax.Array) -> jax.Array:
        return data.T

    def _normalize(self, data: jax.Array) -> jax.Array:
        if data.shape[0] != data.shape[1]:
            msg = f"{self.__class__.__name__} must be square, got shape {data.shape}."
            raise BadSizeError(msg)
        if self.lower:
            return jnp.tril(data) + self._mirror(jnp.tril(data, -1))
        return jnp.triu(data) + self._mirror(jnp.triu(data, 1))

    def _set_element(self, i: int, j: int, value: ScalarLike) -> None:
        self._data = self._data.at[i, j].set(value).at[j, i].set(value)

    def resize(self, m: int, n: int, *, preserve: bool = True) -> None:
        if m != n:
            msg = f"{self.__class__.__name__} must be square, got shape {(m, n)}."
            raise BadSizeError(msg)
        super().resize(m, n, preserve=preserve)

    def copy(self) -> "SymmetricMatrix":
        return type(self)(self._data, self.lower, orientation=self._orientation)


class HermitianMatrix(SymmetricMatrix):
    r"""A Hermitian matrix :math:`A = A^H` built from one of its triangles.

    The diagonal is forced to be real.
    """

    def _mirror(self, data: jax.Array) -> jax.Array:
        return jnp.conj(data.T)

    def _normalize(self, data: jax.Array) -> jax.Array:
        data = super()._normalize(data)
        n = data.shape[0]
        return data.at[jnp.arange(n), jnp.arange(n)].set(jnp.real(jnp.diag(data)))

    def _set_element(self, i: int, j: int, value: ScalarLike) -> None:
        if i == j:
            value = jnp.real(value)
        self._data = self._data.at[i, j].set(value).at[j, i].set(jnp.conj(value))


class BandedMatrix(Matrix):
    r"""A matrix with ``lower`` sub-diagonals and ``upper`` super-diagonals.

    Elements outside the band are structural zeros and cannot be written.

    Args:
        data: Elements, everything outside the band is discarded.
        lower: Number of sub-diagonals.
        upper: Number of super-diagonals.
        orientation: Orientation tag.
        dtype: Value type.
    """

    def __init__(
        self,
        data: ArrayLike | MatrixExpression,
        lower: int = 0,
        upper: int = 0,
        orientation: OrientationTag | None = None,
        dtype: DTypeLike = None,
    ) -> None:
        if lower < 0 or upper < 0:
            msg = f"Band widths must be non-negative, got ({lower}, {upper})."
            raise BadSizeError(msg)
        self.lower = lower
        self.upper = upper
        super().__init__(data, orientation=orientation, dtype=dtype)

    def _normalize(self, data: jax.Array) -> jax.Array:
        return jnp.triu(jnp.tril(data, self.upper), -self.lower)

    def _set_element(self, i: int, j: int, value: ScalarLike) -> None:
        if j - i > self.upper or i - j > self.lower:
            msg = f"Element ({i}, {j}) lies outside the band ({self.lower}, {self.upper})."
            raise BadIndexError(msg)
        super()._set_element(i, j, value)

    def copy(self) -> "BandedMatrix":
        return BandedMatrix(
            self._data, self.lower, self.upper, orientation=self._orientation
        )
