# _expression.py

r"""Lazy element-wise expressions.

This module implements the expression engine:

- :class:`VectorUnary`: :math:`f(v)` for a vector expression :math:`v`
- :class:`VectorBinary`: :math:`f(a_1, a_2)` where at least one operand is a
  vector expression and the other one is a vector expression or a scalar
- :class:`MatrixUnary` and :class:`MatrixBinary`: the matrix analogs

Expressions never cache values. ``e(i)`` evaluates the function on the
source element(s), :meth:`todense` evaluates it on the materialized source(s).

The closure of an expression describes how it holds each source: containers
are :data:`~linexpr.borrowed` (the expression sees later writes to the
container), other expressions are :data:`~linexpr.owned`. An expression whose
function is :data:`identity` is a mutable alias of its source.
"""

from collections.abc import Callable

import jax
import jax.numpy as jnp
import plum  # type: ignore  # noqa: PGH003

from linexpr import config
from linexpr._base import Expression, MatrixExpression, VectorExpression
from linexpr._errors import BadSizeError, UnsupportedError
from linexpr._tags import (
    ClosureTag,
    IteratorCategory,
    OrientationTag,
    StorageTag,
    borrowed,
    closure_of,
    iterator_category_of,
    unknown_orientation,
    unknown_storage,
    weaker_category,
)
from linexpr._typing import ScalarFunction, ScalarLike


class Identity:
    """The identity functor, marks an expression as a mutable alias."""

    def __call__(self, x: jax.Array) -> jax.Array:
        return x

    def __repr__(self) -> str:
        return "identity"


identity = Identity()


def is_identity(function: object) -> bool:
    return isinstance(function, Identity)


def _zero_of(operand: object) -> jax.Array:
    if isinstance(operand, Expression):
        return jnp.zeros((), dtype=operand.dtype)
    return operand


def _result_dtype(function: ScalarFunction, *operands: object) -> jnp.dtype:
    """Value type of ``function`` evaluated on the given operands."""
    return jnp.asarray(function(*(_zero_of(a) for a in operands))).dtype


def _as_scalar(value: ScalarLike) -> jax.Array:
    value = jnp.asarray(value)
    if value.ndim != 0:
        msg = f"Expected a scalar operand, got shape {value.shape}."
        raise BadSizeError(msg)
    return value


def _storage(*sources: Expression) -> StorageTag:
    storages = {type(s.storage) for s in sources}
    return sources[0].storage if len(storages) == 1 else unknown_storage


class _ExpressionMixin:
    """Shared behavior of the unary and binary expression classes."""

    _operands: tuple[object, ...]
    _function: ScalarFunction
    _dtype: jnp.dtype

    @property
    def function(self) -> ScalarFunction:
        return self._function

    @property
    def operands(self) -> tuple[object, ...]:
        return self._operands

    @property
    def sources(self) -> tuple[Expression, ...]:
        """The operands which are expressions."""
        return tuple(a for a in self._operands if isinstance(a, Expression))

    @property
    def dtype(self) -> jnp.dtype:
        return self._dtype

    @property
    def closures(self) -> tuple[ClosureTag, ...]:
        """Closure of each source."""
        return tuple(closure_of(s) for s in self.sources)

    @property
    def closure(self) -> ClosureTag:
        if is_identity(self._function):
            return borrowed
        return self.closures[0]

    @property
    def storage(self) -> StorageTag:
        return _storage(*self.sources)

    @property
    def iterator_category(self) -> IteratorCategory:
        return weaker_category(*(iterator_category_of(s) for s in self.sources))

    @property
    def writable(self) -> bool:
        return is_identity(self._function) and self.sources[0].writable

    def _evaluate(self, *index: int) -> jax.Array:
        args = (a(*index) if isinstance(a, Expression) else a for a in self._operands)
        return jnp.asarray(self._function(*args), dtype=self._dtype)

    def todense(self) -> jax.Array:
        config.warn(f"Expression {self!r} is densed.", prefix="Debug")
        args = (a.todense() if isinstance(a, Expression) else a for a in self._operands)
        result = jnp.asarray(self._function(*args), dtype=self._dtype)
        return jnp.broadcast_to(result, self.shape)


# --------------------------------------------------------------------------- #
# Vector expressions
# --------------------------------------------------------------------------- #


class VectorUnary(_ExpressionMixin, VectorExpression):
    r"""Unary element-wise expression :math:`f(v)_i = f(v_i)`.

    Args:
        source: Vector expression.
        function: Element-wise function.
    """

    def __init__(self, source: VectorExpression, function: ScalarFunction) -> None:
        if not isinstance(source, VectorExpression):
            msg = f"Expected a vector expression, got {type(source).__name__}."
            raise TypeError(msg)
        self._operands = (source,)
        self._function = function
        self._dtype = _result_dtype(function, source)

    @property
    def source(self) -> VectorExpression:
        return self._operands[0]

    @property
    def size(self) -> int:
        return self.source.size

    def _element(self, i: int) -> jax.Array:
        return self._evaluate(i)

    def _set_element(self, i: int, value: ScalarLike) -> None:
        self.source[i] = value


class VectorBinary(_ExpressionMixin, VectorExpression):
    r"""Binary element-wise expression :math:`f(a_1, a_2)_i`.

    Either operand may be a scalar, in which case it is broadcast to every
    element (``(source, a2, f)`` or ``(a1, source, f)``).

    Args:
        a1: Left operand, vector expression or scalar.
        a2: Right operand, vector expression or scalar.
        function: Element-wise binary function.

    Raises:
        BadSizeError
            If both operands are vectors of different size.
    """

    def __init__(
        self,
        a1: VectorExpression | ScalarLike,
        a2: VectorExpression | ScalarLike,
        function: ScalarFunction,
    ) -> None:
        operands = tuple(
            a if isinstance(a, VectorExpression) else _as_scalar(a) for a in (a1, a2)
        )
        sources = [a for a in operands if isinstance(a, VectorExpression)]
        if not sources:
            msg = "A binary vector expression needs at least one vector operand."
            raise TypeError(msg)
        if len(sources) == 2 and sources[0].size != sources[1].size:  # noqa: PLR2004
            msg = f"Vector sizes differ: {sources[0].size} != {sources[1].size}."
            raise BadSizeError(msg)
        self._operands = operands
        self._function = function
        self._dtype = _result_dtype(function, *operands)

    @property
    def size(self) -> int:
        return self.sources[0].size

    def _element(self, i: int) -> jax.Array:
        return self._evaluate(i)


# --------------------------------------------------------------------------- #
# Matrix expressions
# --------------------------------------------------------------------------- #


class MatrixUnary(_ExpressionMixin, MatrixExpression):
    r"""Unary element-wise expression :math:`f(A)_{ij} = f(A_{ij})`.

    Args:
        source: Matrix expression.
        function: Element-wise function.
    """

    def __init__(self, source: MatrixExpression, function: ScalarFunction) -> None:
        if not isinstance(source, MatrixExpression):
            msg = f"Expected a matrix expression, got {type(source).__name__}."
            raise TypeError(msg)
        self._operands = (source,)
        self._function = function
        self._dtype = _result_dtype(function, source)

    @property
    def source(self) -> MatrixExpression:
        return self._operands[0]

    @property
    def size1(self) -> int:
        return self.source.size1

    @property
    def size2(self) -> int:
        return self.source.size2

    @property
    def orientation(self) -> OrientationTag:
        return self.source.orientation

    def _element(self, i: int, j: int) -> jax.Array:
        return self._evaluate(i, j)

    def _set_element(self, i: int, j: int, value: ScalarLike) -> None:
        self.source[i, j] = value


class MatrixBinary(_ExpressionMixin, MatrixExpression):
    r"""Binary element-wise expression :math:`f(A_1, A_2)_{ij}`.

    Args:
        a1: Left operand, matrix expression or scalar.
        a2: Right operand, matrix expression or scalar.
        function: Element-wise binary function.

    Raises:
        BadSizeError
            If both operands are matrices of different shape.
    """

    def __init__(
        self,
        a1: MatrixExpression | ScalarLike,
        a2: MatrixExpression | ScalarLike,
        function: ScalarFunction,
    ) -> None:
        operands = tuple(
            a if isinstance(a, MatrixExpression) else _as_scalar(a) for a in (a1, a2)
        )
        sources = [a for a in operands if isinstance(a, MatrixExpression)]
        if not sources:
            msg = "A binary matrix expression needs at least one matrix operand."
            raise TypeError(msg)
        if len(sources) == 2 and sources[0].shape != sources[1].shape:  # noqa: PLR2004
            msg = f"Matrix shapes differ: {sources[0].shape} != {sources[1].shape}."
            raise BadSizeError(msg)
        self._operands = operands
        self._function = function
        self._dtype = _result_dtype(function, *operands)

    @property
    def size1(self) -> int:
        return self.sources[0].size1

    @property
    def size2(self) -> int:
        return self.sources[0].size2

    @property
    def orientation(self) -> OrientationTag:
        orientations = {type(s.orientation) for s in self.sources}
        if len(orientations) == 1:
            return self.sources[0].orientation
        return unknown_orientation

    def _element(self, i: int, j: int) -> jax.Array:
        return self._evaluate(i, j)


# --------------------------------------------------------------------------- #
# Builders
# --------------------------------------------------------------------------- #


@plum.dispatch
def unary_expression(x: VectorExpression, function: Callable) -> VectorUnary:
    return VectorUnary(x, function)


@unary_expression.dispatch
def _(x: MatrixExpression, function: Callable) -> MatrixUnary:
    return MatrixUnary(x, function)


@plum.dispatch
def binary_expression(a: VectorExpression, b: object, function: Callable) -> VectorBinary:
    return VectorBinary(a, b, function)


@binary_expression.dispatch
def _(a: object, b: VectorExpression, function: Callable) -> VectorBinary:
    return VectorBinary(a, b, function)


@binary_expression.dispatch
def _(a: VectorExpression, b: VectorExpression, function: Callable) -> VectorBinary:
    return VectorBinary(a, b, function)


@binary_expression.dispatch
def _(a: MatrixExpression, b: object, function: Callable) -> MatrixBinary:
    return MatrixBinary(a, b, function)


@binary_expression.dispatch
def _(a: object, b: MatrixExpression, function: Callable) -> MatrixBinary:
    return MatrixBinary(a, b, function)


@binary_expression.dispatch
def _(a: MatrixExpression, b: MatrixExpression, function: Callable) -> MatrixBinary:
    return MatrixBinary(a, b, function)


@binary_expression.dispatch
def _(a: VectorExpression, b: MatrixExpression, function: Callable) -> MatrixBinary:  # noqa: ARG001
    msg = "Element-wise operations between a vector and a matrix are not supported."
    raise UnsupportedError(msg)


@binary_expression.dispatch
def _(a: MatrixExpression, b: VectorExpression, function: Callable) -> MatrixBinary:  # noqa: ARG001
    msg = "Element-wise operations between a matrix and a vector are not supported."
    raise UnsupportedError(msg)


def apply(x: Expression, *args: object) -> Expression:
    """Apply an element-wise function lazily.

    ``apply(x, f)`` builds the unary expression :math:`f(x)`,
    ``apply(x, y, f)`` the binary expression :math:`f(x, y)` where one of
    ``x`` and ``y`` may be a scalar.

    Args:
        x: Vector or matrix expression (or scalar in the binary form).
        *args: ``(f,)`` or ``(y, f)``.
    """
    if len(args) == 1:
        return unary_expression(x, args[0])
    if len(args) == 2:  # noqa: PLR2004
        return binary_expression(x, args[0], args[1])
    msg = f"apply() takes a function and at most one more operand, got {len(args)} arguments."
    raise TypeError(msg)


def alias(x: Expression) -> Expression:
    """Mutable alias of ``x``: writes to the alias go to ``x``."""
    return unary_expression(x, identity)
