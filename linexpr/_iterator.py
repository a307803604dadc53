# _iterator.py

r"""Iterators over vector and matrix expressions.

Iterators are light-weight cursors: they store the iterated expression (their
closure) and a position, and evaluate the pointed-to element on access.

- :class:`VectorIterator`: walks the elements of a vector expression
- :class:`MatrixIterator1`: walks down the rows of a matrix expression
- :class:`MatrixIterator2`: walks along the columns of a matrix expression

The matrix iterators are duals of each other. :meth:`MatrixIterator1.begin`
returns a :class:`MatrixIterator2` pinned at the current row, which visits
the elements of that row; :meth:`MatrixIterator2.begin` returns a
:class:`MatrixIterator1` visiting the elements of the current column.

Reverse iterators (from ``rbegin``/``rend``) share the same classes with
``reverse=True``. Their :meth:`index` always reports the position of the
element they point to.
"""

import copy
from typing import Union

import jax

from linexpr import config
from linexpr._base import Expression
from linexpr._errors import BadIndexError, ExternalLogicError
from linexpr._tags import IteratorCategory
from linexpr._typing import ScalarLike


class _Cursor:
    """Position along one axis of an expression."""

    axis: int = 0

    def __init__(self, expr: Expression, position: list[int], *, reverse: bool) -> None:
        self._expr = expr
        self._position = position
        self._reverse = reverse
        self._check_position()

    @property
    def closure(self) -> Expression:
        """The iterated expression."""
        return self._expr

    @property
    def reverse(self) -> bool:
        return self._reverse

    @property
    def iterator_category(self) -> IteratorCategory:
        return self._expr.iterator_category

    @property
    def _step(self) -> int:
        return -1 if self._reverse else 1

    def _bound(self) -> int:
        return self._expr.shape[self.axis]

    def _check_position(self) -> None:
        if not config.is_debug():
            return
        low, high = (-1, self._bound() - 1) if self._reverse else (0, self._bound())
        position = self._position[self.axis]
        if not low <= position <= high:
            msg = (
                f"{self.__class__.__name__} moved to {position}, "
                f"outside [{low}, {high}]."
            )
            raise BadIndexError(msg)

    def _check_compatible(self, other: "_Cursor") -> None:
        if not isinstance(other, _Cursor) or type(other) is not type(self):
            msg = f"Cannot compare {type(self).__name__} with {type(other).__name__}."
            raise ExternalLogicError(msg)
        if other._expr is not self._expr:
            msg = "Cannot compare iterators of different expressions."
            raise ExternalLogicError(msg)
        if other._reverse != self._reverse:
            msg = "Cannot compare a forward iterator with a reverse iterator."
            raise ExternalLogicError(msg)

    # Movement

    def __iadd__(self, n: int) -> "_Cursor":
        self._position[self.axis] += n * self._step
        self._check_position()
        return self

    def __isub__(self, n: int) -> "_Cursor":
        return self.__iadd__(-n)

    def __add__(self, n: int) -> "_Cursor":
        result = copy.copy(self)
        result._position = list(self._position)
        result += n
        return result

    def __radd__(self, n: int) -> "_Cursor":
        return self.__add__(n)

    def __sub__(self, other: Union[int, "_Cursor"]) -> Union[int, "_Cursor"]:
        if isinstance(other, _Cursor):
            self._check_compatible(other)
            return (self._position[self.axis] - other._position[self.axis]) * self._step
        return self.__add__(-other)

    # Comparison

    def __eq__(self, other: object) -> bool:
        self._check_compatible(other)
        return self._position == other._position

    def __ne__(self, other: object) -> bool:
        return not self.__eq__(other)

    def __lt__(self, other: "_Cursor") -> bool:
        return self - other < 0

    def __le__(self, other: "_Cursor") -> bool:
        return self - other <= 0

    def __gt__(self, other: "_Cursor") -> bool:
        return self - other > 0

    def __ge__(self, other: "_Cursor") -> bool:
        return self - other >= 0

    __hash__ = None

    def __repr__(self) -> str:
        kind = "reverse " if self._reverse else ""
        return f"<{kind}{self.__class__.__name__} at {tuple(self._position)}>"


class VectorIterator(_Cursor):
    """Random access iterator over a vector expression.

    Args:
        expr: The iterated vector expression.
        index: Initial position.
        reverse: Whether ``+=`` moves towards the front.
    """

    def __init__(self, expr: Expression, index: int, *, reverse: bool = False) -> None:
        super().__init__(expr, [index], reverse=reverse)

    def index(self) -> int:
        return self._position[0]

    @property
    def value(self) -> jax.Array:
        return self._expr(self._position[0])

    @value.setter
    def value(self, value: ScalarLike) -> None:
        self._expr[self._position[0]] = value

    def __getitem__(self, n: int) -> jax.Array:
        return (self + n).value


class _MatrixCursor(_Cursor):
    def __init__(
        self, expr: Expression, i: int, j: int, *, reverse: bool = False
    ) -> None:
        super().__init__(expr, [i, j], reverse=reverse)

    def index1(self) -> int:
        """Row index of the pointed-to element."""
        return self._position[0]

    def index2(self) -> int:
        """Column index of the pointed-to element."""
        return self._position[1]

    @property
    def value(self) -> jax.Array:
        return self._expr(*self._position)

    @value.setter
    def value(self, value: ScalarLike) -> None:
        self._expr[tuple(self._position)] = value

    # Dual iterators

    def _dual(self, position: int, *, reverse: bool) -> "_MatrixCursor":
        raise NotImplementedError

    def begin(self) -> "_MatrixCursor":
        return self._dual(0, reverse=False)

    def end(self) -> "_MatrixCursor":
        return self._dual(self._expr.shape[1 - self.axis], reverse=False)

    def rbegin(self) -> "_MatrixCursor":
        return self._dual(self._expr.shape[1 - self.axis] - 1, reverse=True)

    def rend(self) -> "_MatrixCursor":
        return self._dual(-1, reverse=True)


class MatrixIterator1(_MatrixCursor):
    """Iterator moving along the rows of a matrix expression.

    ``begin()``/``end()`` return :class:`MatrixIterator2` over the current row.
    """

    axis = 0

    def _dual(self, position: int, *, reverse: bool) -> "MatrixIterator2":
        return MatrixIterator2(self._expr, self._position[0], position, reverse=reverse)


class MatrixIterator2(_MatrixCursor):
    """Iterator moving along the columns of a matrix expression.

    ``begin()``/``end()`` return :class:`MatrixIterator1` over the current column.
    """

    axis = 1

    def _dual(self, position: int, *, reverse: bool) -> MatrixIterator1:
        return MatrixIterator1(self._expr, position, self._position[1], reverse=reverse)
