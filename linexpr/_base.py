# _base.py

import operator
from collections.abc import Iterator
from typing import Union

import jax
import jax.numpy as jnp
import numpy as np

from linexpr._errors import BadIndexError, BadSizeError, UnsupportedError
from linexpr._tags import (
    ClosureTag,
    IteratorCategory,
    OrientationTag,
    StorageTag,
    borrowed,
    random_access_iterator,
    unknown_orientation,
    unknown_storage,
)
from linexpr._typing import ScalarLike

BinaryOperandType = Union["VectorExpression", "MatrixExpression", ScalarLike]


def check_index(index: object, bound: int, *, axis: str = "index") -> int:
    """Validate an element index against ``bound`` and return it as ``int``.

    Raises:
        BadIndexError
            If ``index`` is not an integer or lies outside ``[0, bound)``.
    """
    try:
        index = operator.index(index)
    except TypeError as e:
        msg = f"The {axis} {index!r} is not an integer."
        raise BadIndexError(msg) from e
    if not 0 <= index < bound:
        msg = f"The {axis} {index} is out of range [0, {bound})."
        raise BadIndexError(msg)
    return index


class Expression:
    r"""Common base class of vector and matrix expressions.

    Expressions behave like read-only arrays whose elements are evaluated on
    demand. Containers (:class:`~linexpr.Vector`, :class:`~linexpr.Matrix`)
    are expressions which own their elements and can be written to.

    Design choices:

    * :meth:`todense` materializes the whole expression as a :class:`jax.Array`
      in one vectorized step, element access evaluates a single element.
    * Arithmetic (``+``, ``-``, ``*``, ``/``, ``**``, unary ``-``, ``abs``)
      builds a new lazy expression, nothing is evaluated.
    * Traits are read-only attributes: :attr:`orientation`, :attr:`storage`,
      :attr:`closure` and :attr:`iterator_category`.
    """

    is_container: bool = False

    @property
    def dtype(self) -> jnp.dtype:
        """Value type of the expression."""
        raise NotImplementedError

    @property
    def shape(self) -> tuple[int, ...]:
        raise NotImplementedError

    @property
    def ndim(self) -> int:
        return len(self.shape)

    @property
    def orientation(self) -> OrientationTag:
        return unknown_orientation

    @property
    def storage(self) -> StorageTag:
        return unknown_storage

    @property
    def closure(self) -> ClosureTag:
        """How the expression holds its source(s)."""
        return borrowed

    @property
    def iterator_category(self) -> IteratorCategory:
        return random_access_iterator

    @property
    def writable(self) -> bool:
        """Whether elements can be assigned through this expression."""
        return False

    def todense(self) -> jax.Array:
        raise NotImplementedError

    def __array__(self, dtype: object = None, copy: object = None) -> np.ndarray:  # noqa: ARG002
        return np.asarray(self.todense(), dtype=dtype)

    def __repr__(self) -> str:
        return (
            f"<{self.__class__.__name__} with shape={self.shape}, dtype={self.dtype}>"
        )

    def _read_only(self) -> None:
        msg = f"{self.__class__.__name__} is read-only, its elements cannot be set."
        raise UnsupportedError(msg)

    ########################################################################
    # Relational operators
    ########################################################################

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Expression):
            return NotImplemented
        if self.shape != other.shape:
            return False
        return bool(jnp.all(self.todense() == other.todense()))

    def __ne__(self, other: object) -> bool:
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    __hash__ = None

    ########################################################################
    # Arithmetic
    ########################################################################

    def _operand(self, other: object) -> object:
        from linexpr.utils import as_operand  # noqa: PLC0415

        return as_operand(other)

    def _binary(self, a: object, b: object, function: object) -> "Expression":
        from linexpr._expression import binary_expression  # noqa: PLC0415

        if a is NotImplemented or b is NotImplemented:
            return NotImplemented
        return binary_expression(a, b, function)

    def __neg__(self) -> "Expression":
        from linexpr._expression import unary_expression  # noqa: PLC0415

        return unary_expression(self, jnp.negative)

    def __pos__(self) -> "Expression":
        return self

    def __abs__(self) -> "Expression":
        from linexpr._expression import unary_expression  # noqa: PLC0415

        return unary_expression(self, jnp.abs)

    def conj(self) -> "Expression":
        from linexpr._expression import unary_expression  # noqa: PLC0415

        return unary_expression(self, jnp.conj)

    def __add__(self, other: BinaryOperandType) -> "Expression":
        return self._binary(self, self._operand(other), jnp.add)

    def __radd__(self, other: BinaryOperandType) -> "Expression":
        return self._binary(self._operand(other), self, jnp.add)

    def __sub__(self, other: BinaryOperandType) -> "Expression":
        return self._binary(self, self._operand(other), jnp.subtract)

    def __rsub__(self, other: BinaryOperandType) -> "Expression":
        return self._binary(self._operand(other), self, jnp.subtract)

    def __mul__(self, other: BinaryOperandType) -> "Expression":
        return self._binary(self, self._operand(other), jnp.multiply)

    def __rmul__(self, other: BinaryOperandType) -> "Expression":
        return self._binary(self._operand(other), self, jnp.multiply)

    def __truediv__(self, other: BinaryOperandType) -> "Expression":
        return self._binary(self, self._operand(other), jnp.true_divide)

    def __rtruediv__(self, other: BinaryOperandType) -> "Expression":
        return self._binary(self._operand(other), self, jnp.true_divide)

    def __pow__(self, other: BinaryOperandType) -> "Expression":
        return self._binary(self, self._operand(other), jnp.power)

    def __rpow__(self, other: BinaryOperandType) -> "Expression":
        return self._binary(self._operand(other), self, jnp.power)


class VectorExpression(Expression):
    """Base class of all vector expressions.

    A subclass implements :attr:`size`, :attr:`dtype` and :meth:`_element`.
    Writable subclasses also implement :meth:`_set_element`. :meth:`todense`
    should be overwritten when a vectorized evaluation is available.
    """

    @property
    def size(self) -> int:
        raise NotImplementedError

    @property
    def shape(self) -> tuple[int]:
        return (self.size,)

    def __len__(self) -> int:
        return self.size

    def _element(self, i: int) -> jax.Array:
        raise NotImplementedError

    def _set_element(self, i: int, value: ScalarLike) -> None:
        self._read_only()

    def __call__(self, i: int) -> jax.Array:
        return self._element(check_index(i, self.size))

    def __getitem__(self, i: int) -> jax.Array:
        return self(i)

    def __setitem__(self, i: int, value: ScalarLike) -> None:
        if not self.writable:
            self._read_only()
        self._set_element(check_index(i, self.size), value)

    def __iter__(self) -> Iterator[jax.Array]:
        yield from self.todense()

    def todense(self) -> jax.Array:
        return jnp.asarray(
            [self._element(i) for i in range(self.size)], dtype=self.dtype
        )

    # Iterators

    def begin(self) -> "VectorIterator":
        from linexpr._iterator import VectorIterator  # noqa: PLC0415

        return VectorIterator(self, 0)

    def end(self) -> "VectorIterator":
        from linexpr._iterator import VectorIterator  # noqa: PLC0415

        return VectorIterator(self, self.size)

    def rbegin(self) -> "VectorIterator":
        from linexpr._iterator import VectorIterator  # noqa: PLC0415

        return VectorIterator(self, self.size - 1, reverse=True)

    def rend(self) -> "VectorIterator":
        from linexpr._iterator import VectorIterator  # noqa: PLC0415

        return VectorIterator(self, -1, reverse=True)


class MatrixExpression(Expression):
    """Base class of all matrix expressions.

    A subclass implements :attr:`size1`, :attr:`size2`, :attr:`dtype` and
    :meth:`_element`. Writable subclasses also implement :meth:`_set_element`.
    """

    @property
    def size1(self) -> int:
        """Number of rows."""
        raise NotImplementedError

    @property
    def size2(self) -> int:
        """Number of columns."""
        raise NotImplementedError

    @property
    def shape(self) -> tuple[int, int]:
        return (self.size1, self.size2)

    @property
    def size(self) -> int:
        """Number of elements."""
        return self.size1 * self.size2

    def __len__(self) -> int:
        return self.size1

    def _element(self, i: int, j: int) -> jax.Array:
        raise NotImplementedError

    def _set_element(self, i: int, j: int, value: ScalarLike) -> None:
        self._read_only()

    def _check(self, i: int, j: int) -> tuple[int, int]:
        return (
            check_index(i, self.size1, axis="row index"),
            check_index(j, self.size2, axis="column index"),
        )

    def __call__(self, i: int, j: int) -> jax.Array:
        return self._element(*self._check(i, j))

    def __getitem__(self, index: tuple[int, int]) -> jax.Array:
        if not isinstance(index, tuple) or len(index) != 2:  # noqa: PLR2004
            msg = f"Matrix elements are addressed by a pair (i, j), got {index!r}."
            raise BadIndexError(msg)
        return self(*index)

    def __setitem__(self, index: tuple[int, int], value: ScalarLike) -> None:
        if not isinstance(index, tuple) or len(index) != 2:  # noqa: PLR2004
            msg = f"Matrix elements are addressed by a pair (i, j), got {index!r}."
            raise BadIndexError(msg)
        if not self.writable:
            self._read_only()
        self._set_element(*self._check(*index), value)

    def __iter__(self) -> Iterator[jax.Array]:
        """Iterate over the rows of the materialized matrix."""
        yield from self.todense()

    def todense(self) -> jax.Array:
        return jnp.asarray(
            [[self._element(i, j) for j in range(self.size2)] for i in range(self.size1)],
            dtype=self.dtype,
        ).reshape(self.shape)

    def __matmul__(self, other: object) -> "Expression":
        """Eager matrix product, returning a fresh container."""
        from linexpr._container import Matrix, Vector  # noqa: PLC0415

        if isinstance(other, VectorExpression):
            if other.size != self.size2:
                msg = f"Cannot multiply {self.shape} matrix with size-{other.size} vector."
                raise BadSizeError(msg)
            return Vector(self.todense() @ other.todense())
        if isinstance(other, MatrixExpression):
            if other.size1 != self.size2:
                msg = f"Cannot multiply {self.shape} matrix with {other.shape} matrix."
                raise BadSizeError(msg)
            return Matrix(self.todense() @ other.todense(), orientation=self.orientation)
        return NotImplemented

    # Iterators

    def begin1(self) -> "MatrixIterator1":
        from linexpr._iterator import MatrixIterator1  # noqa: PLC0415

        return MatrixIterator1(self, 0, 0)

    def end1(self) -> "MatrixIterator1":
        from linexpr._iterator import MatrixIterator1  # noqa: PLC0415

        return MatrixIterator1(self, self.size1, 0)

    def rbegin1(self) -> "MatrixIterator1":
        from linexpr._iterator import MatrixIterator1  # noqa: PLC0415

        return MatrixIterator1(self, self.size1 - 1, 0, reverse=True)

    def rend1(self) -> "MatrixIterator1":
        from linexpr._iterator import MatrixIterator1  # noqa: PLC0415

        return MatrixIterator1(self, -1, 0, reverse=True)

    def begin2(self) -> "MatrixIterator2":
        from linexpr._iterator import MatrixIterator2  # noqa: PLC0415

        return MatrixIterator2(self, 0, 0)

    def end2(self) -> "MatrixIterator2":
        from linexpr._iterator import MatrixIterator2  # noqa: PLC0415

        return MatrixIterator2(self, 0, self.size2)

    def rbegin2(self) -> "MatrixIterator2":
        from linexpr._iterator import MatrixIterator2  # noqa: PLC0415

        return MatrixIterator2(self, 0, self.size2 - 1, reverse=True)

    def rend2(self) -> "MatrixIterator2":
        from linexpr._iterator import MatrixIterator2  # noqa: PLC0415

        return MatrixIterator2(self, 0, -1, reverse=True)
