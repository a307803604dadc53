# _reduction.py

r"""Reductions and scans.

Every reduction has one entry point dispatching on its arguments:

- ``op(v)`` / ``op(m)``: whole container
- ``op(x, k)`` with ``k`` in {1, 2}: along a dimension
- ``op(m, tag)`` with a dimension tag: the tag is resolved against the
  orientation of ``m`` (see :func:`~linexpr._tags.resolve_dimension`)

Reductions evaluate on the materialized operand and treat every logical
element, structural zeros included.

NaN fails all comparisons, so :func:`max` and :func:`min` never select it.
Complex values are ordered by modulus, ties broken by the argument.
"""

from collections.abc import Callable

import jax
import jax.numpy as jnp
import numpy as np
import plum  # type: ignore  # noqa: PGH003

from linexpr._base import MatrixExpression, VectorExpression
from linexpr._container import Matrix, Vector
from linexpr._errors import BadSizeError, UnsupportedError
from linexpr._tags import DimensionTag, as_dimension
from linexpr._typing import Predicate

DimensionLike = int | DimensionTag

# --------------------------------------------------------------------------- #
# Extrema kernels
# --------------------------------------------------------------------------- #


def _flatten_axis(x: jax.Array, axis: int | None) -> tuple[jax.Array, int]:
    if axis is None:
        return x.reshape(-1), 0
    return x, axis


def _as_orderable(x: jax.Array) -> jax.Array:
    return x.astype(jnp.int32) if x.dtype == jnp.bool_ else x


def _real_max(x: jax.Array, axis: int | None) -> jax.Array:
    x = _as_orderable(x)
    if jnp.issubdtype(x.dtype, jnp.integer):
        return jnp.max(x, axis=axis, initial=jnp.iinfo(x.dtype).min)
    return jnp.max(jnp.where(jnp.isnan(x), -jnp.inf, x), axis=axis, initial=-jnp.inf)


def _real_min(x: jax.Array, axis: int | None) -> jax.Array:
    x = _as_orderable(x)
    if jnp.issubdtype(x.dtype, jnp.integer):
        return jnp.min(x, axis=axis, initial=jnp.iinfo(x.dtype).max)
    return jnp.min(jnp.where(jnp.isnan(x), jnp.inf, x), axis=axis, initial=jnp.inf)


def _complex_max(x: jax.Array, axis: int | None) -> jax.Array:
    x, axis = _flatten_axis(x, axis)
    seed = jnp.zeros((), dtype=x.dtype)
    if x.shape[axis] == 0:
        return jnp.full(x.shape[:axis] + x.shape[axis + 1 :], seed)
    modulus = jnp.abs(x)
    valid = ~jnp.isnan(modulus)
    key = jnp.where(valid, modulus, -1.0)
    best = jnp.max(key, axis=axis, keepdims=True)
    phase = jnp.where(valid & (key == best), jnp.angle(x), -jnp.inf)
    chosen = jnp.take_along_axis(x, jnp.argmax(phase, axis=axis, keepdims=True), axis)
    return jnp.squeeze(jnp.where(best > 0, chosen, seed), axis=axis)


def _complex_min(x: jax.Array, axis: int | None) -> jax.Array:
    x, axis = _flatten_axis(x, axis)
    seed = jax.lax.complex(
        jnp.asarray(jnp.inf, dtype=jnp.real(x).dtype),
        jnp.asarray(jnp.nan, dtype=jnp.real(x).dtype),
    )
    if x.shape[axis] == 0:
        return jnp.full(x.shape[:axis] + x.shape[axis + 1 :], seed)
    modulus = jnp.abs(x)
    # an infinite modulus only ties with the seed, whose NaN argument never wins
    valid = jnp.isfinite(modulus)
    key = jnp.where(valid, modulus, jnp.inf)
    best = jnp.min(key, axis=axis, keepdims=True)
    phase = jnp.where(valid & (key == best), jnp.angle(x), jnp.inf)
    chosen = jnp.take_along_axis(x, jnp.argmin(phase, axis=axis, keepdims=True), axis)
    return jnp.squeeze(jnp.where(best < jnp.inf, chosen, seed), axis=axis)


def _max(x: jax.Array, axis: int | None) -> jax.Array:
    if jnp.iscomplexobj(x):
        return _complex_max(x, axis)
    return _real_max(x, axis)


def _min(x: jax.Array, axis: int | None) -> jax.Array:
    if jnp.iscomplexobj(x):
        return _complex_min(x, axis)
    return _real_min(x, axis)


def _vector_dimension(v: VectorExpression, dim: DimensionLike) -> None:
    if as_dimension(dim, v) != 1:
        msg = f"A vector only has dimension 1, got {dim!r}."
        raise UnsupportedError(msg)


# --------------------------------------------------------------------------- #
# max / min
# --------------------------------------------------------------------------- #


def max_rows(m: MatrixExpression) -> Vector:
    """Largest element of each row (length ``num_rows(m)``)."""
    return Vector(_max(m.todense(), 1))


def max_columns(m: MatrixExpression) -> Vector:
    """Largest element of each column (length ``num_columns(m)``)."""
    return Vector(_max(m.todense(), 0))


def min_rows(m: MatrixExpression) -> Vector:
    """Smallest element of each row (length ``num_rows(m)``)."""
    return Vector(_min(m.todense(), 1))


def min_columns(m: MatrixExpression) -> Vector:
    """Smallest element of each column (length ``num_columns(m)``)."""
    return Vector(_min(m.todense(), 0))


@plum.dispatch
def max(v: VectorExpression) -> jax.Array:  # noqa: A001
    return _max(v.todense(), None)


@max.dispatch
def _(v: VectorExpression, dim: DimensionLike) -> Vector:
    _vector_dimension(v, dim)
    return Vector(_max(v.todense(), None)[None])


@max.dispatch
def _(m: MatrixExpression) -> jax.Array:
    return _max(m.todense(), None)


@max.dispatch
def _(m: MatrixExpression, dim: DimensionLike) -> Vector:
    return max_rows(m) if as_dimension(dim, m) == 1 else max_columns(m)


@plum.dispatch
def min(v: VectorExpression) -> jax.Array:  # noqa: A001
    return _min(v.todense(), None)


@min.dispatch
def _(v: VectorExpression, dim: DimensionLike) -> Vector:
    _vector_dimension(v, dim)
    return Vector(_min(v.todense(), None)[None])


@min.dispatch
def _(m: MatrixExpression) -> jax.Array:
    return _min(m.todense(), None)


@min.dispatch
def _(m: MatrixExpression, dim: DimensionLike) -> Vector:
    return min_rows(m) if as_dimension(dim, m) == 1 else min_columns(m)


# --------------------------------------------------------------------------- #
# sum
# --------------------------------------------------------------------------- #


def sum_rows(m: MatrixExpression) -> Vector:
    r"""Sums over the rows: :math:`r_j = \sum_i m_{ij}` (length ``num_columns(m)``)."""
    return Vector(jnp.sum(m.todense(), axis=0))


def sum_columns(m: MatrixExpression) -> Vector:
    r"""Sums over the columns: :math:`r_i = \sum_j m_{ij}` (length ``num_rows(m)``)."""
    return Vector(jnp.sum(m.todense(), axis=1))


@plum.dispatch
def sum_all(v: VectorExpression) -> jax.Array:
    return jnp.sum(v.todense())


@sum_all.dispatch
def _(m: MatrixExpression) -> jax.Array:
    return jnp.sum(m.todense())


@plum.dispatch
def sum(v: VectorExpression) -> jax.Array:  # noqa: A001
    return jnp.sum(v.todense())


@sum.dispatch
def _(v: VectorExpression, dim: DimensionLike) -> Vector:
    _vector_dimension(v, dim)
    return Vector(jnp.sum(v.todense())[None])


@sum.dispatch
def _(m: MatrixExpression) -> Vector:
    return sum_rows(m)


@sum.dispatch
def _(m: MatrixExpression, dim: DimensionLike) -> Vector:
    return sum_rows(m) if as_dimension(dim, m) == 1 else sum_columns(m)


# --------------------------------------------------------------------------- #
# cumsum
# --------------------------------------------------------------------------- #


def cumsum_rows(m: MatrixExpression) -> Matrix:
    """Prefix sums down each column."""
    return Matrix(jnp.cumsum(m.todense(), axis=0), orientation=m.orientation)


def cumsum_columns(m: MatrixExpression) -> Matrix:
    """Prefix sums along each row."""
    return Matrix(jnp.cumsum(m.todense(), axis=1), orientation=m.orientation)


@plum.dispatch
def cumsum(v: VectorExpression) -> Vector:
    return Vector(jnp.cumsum(v.todense()))


@cumsum.dispatch
def _(v: VectorExpression, dim: DimensionLike) -> Vector:
    _vector_dimension(v, dim)
    return cumsum(v)


@cumsum.dispatch
def _(m: MatrixExpression) -> Matrix:
    return cumsum_rows(m)


@cumsum.dispatch
def _(m: MatrixExpression, dim: DimensionLike) -> Matrix:
    return cumsum_rows(m) if as_dimension(dim, m) == 1 else cumsum_columns(m)


# --------------------------------------------------------------------------- #
# any / all
# --------------------------------------------------------------------------- #


def _nonzero(x: jax.Array) -> jax.Array:
    return x != 0


def _holds(x: jax.Array, predicate: Predicate) -> jax.Array:
    return jnp.broadcast_to(jnp.asarray(predicate(x), dtype=bool), x.shape)


def _flags(m: MatrixExpression, dim: DimensionLike, p: Predicate, reduce_fn: Callable) -> Vector:
    axis = 1 if as_dimension(dim, m) == 1 else 0
    return Vector(reduce_fn(_holds(m.todense(), p), axis=axis))


@plum.dispatch
def any(x: VectorExpression | MatrixExpression) -> bool:  # noqa: A001
    return bool(jnp.any(_holds(x.todense(), _nonzero)))


@any.dispatch
def _(x: VectorExpression | MatrixExpression, p: Callable) -> bool:
    return bool(jnp.any(_holds(x.todense(), p)))


@any.dispatch
def _(m: MatrixExpression, dim: DimensionLike) -> Vector:
    return _flags(m, dim, _nonzero, jnp.any)


@any.dispatch
def _(m: MatrixExpression, p: Callable, dim: DimensionLike) -> Vector:
    return _flags(m, dim, p, jnp.any)


@plum.dispatch
def all(x: VectorExpression | MatrixExpression) -> bool:  # noqa: A001
    return bool(jnp.all(_holds(x.todense(), _nonzero)))


@all.dispatch
def _(x: VectorExpression | MatrixExpression, p: Callable) -> bool:
    return bool(jnp.all(_holds(x.todense(), p)))


@all.dispatch
def _(m: MatrixExpression, dim: DimensionLike) -> Vector:
    return _flags(m, dim, _nonzero, jnp.all)


@all.dispatch
def _(m: MatrixExpression, p: Callable, dim: DimensionLike) -> Vector:
    return _flags(m, dim, p, jnp.all)


# --------------------------------------------------------------------------- #
# for_each
# --------------------------------------------------------------------------- #


@plum.dispatch
def for_each(v: VectorExpression, f: Callable) -> None:
    for value in np.asarray(v.todense()):
        f(value)


@for_each.dispatch
def _(m: MatrixExpression, f: Callable) -> None:
    for_each(m, f, 1)


@for_each.dispatch
def _(m: MatrixExpression, f: Callable, dim: DimensionLike) -> None:
    values = np.asarray(m.todense())
    # dim 1 visits row by row, dim 2 column by column
    order = "C" if as_dimension(dim, m) == 1 else "F"
    for value in values.ravel(order=order):
        f(value)


# --------------------------------------------------------------------------- #
# Searching
# --------------------------------------------------------------------------- #


def which(v: VectorExpression, p: Predicate | None = None) -> Vector:
    """Positions of the elements satisfying ``p`` (default: non-zero)."""
    mask = np.asarray(_holds(v.todense(), p or _nonzero))
    return Vector(jnp.asarray(np.flatnonzero(mask), dtype=jnp.int64))


def find(v: VectorExpression, p: Predicate | None = None) -> Vector:
    """Elements satisfying ``p`` (default: non-zero), in order."""
    values = v.todense()
    mask = np.asarray(_holds(values, p or _nonzero))
    return Vector(values[np.flatnonzero(mask)])


# --------------------------------------------------------------------------- #
# Products
# --------------------------------------------------------------------------- #


def trace(m: MatrixExpression) -> jax.Array:
    r"""Sum of the main diagonal, :math:`\sum_{i < \min(m, n)} a_{ii}`."""
    return jnp.trace(m.todense())


@plum.dispatch
def dot(u: VectorExpression, v: VectorExpression) -> jax.Array:
    """Inner product :math:`\\sum_i u_i v_i` (no conjugation)."""
    if u.size != v.size:
        msg = f"Vector sizes differ: {u.size} != {v.size}."
        raise BadSizeError(msg)
    return jnp.sum(u.todense() * v.todense())


@dot.dispatch
def _(a: MatrixExpression, b: MatrixExpression) -> Vector:
    return dot(a, b, 1)


@dot.dispatch
def _(a: MatrixExpression, b: MatrixExpression, dim: DimensionLike) -> Vector:
    """Column-wise (``dim=1``) or row-wise (``dim=2``) inner products."""
    if a.shape != b.shape:
        msg = f"Matrix shapes differ: {a.shape} != {b.shape}."
        raise BadSizeError(msg)
    axis = 0 if as_dimension(dim, a) == 1 else 1
    return Vector(jnp.sum(a.todense() * b.todense(), axis=axis))

