# utils.py

"""Utility functions for argument types."""

import numbers

import jax
import jax.numpy as jnp
import numpy as np

from linexpr._base import Expression, MatrixExpression, VectorExpression
from linexpr._tags import OrientationTag
from linexpr._typing import ArrayLike, DTypeLike

__all__ = [
    "allclose",
    "as_expression",
    "as_matrix",
    "as_operand",
    "as_vector",
    "todense",
]

ExpressionLike = Expression | jax.Array | np.ndarray


def as_vector(x: ArrayLike | VectorExpression, dtype: DTypeLike = None) -> VectorExpression:
    """Convert an object into a vector expression.

    Vector expressions are returned unchanged, array-likes are wrapped into a
    :class:`~linexpr.Vector` container.

    Raises:
        TypeError
        If ``x`` is not one-dimensional.
    """
    if isinstance(x, VectorExpression):
        return x
    from linexpr._container import Vector  # noqa: PLC0415

    return Vector(x, dtype=dtype)


def as_matrix(
    x: ArrayLike | MatrixExpression,
    orientation: OrientationTag | None = None,
    dtype: DTypeLike = None,
) -> MatrixExpression:
    """Convert an object into a matrix expression.

    Matrix expressions are returned unchanged, array-likes are wrapped into a
    :class:`~linexpr.Matrix` container.
    """
    if isinstance(x, MatrixExpression):
        return x
    from linexpr._container import Matrix  # noqa: PLC0415

    return Matrix(x, orientation=orientation, dtype=dtype)


def as_expression(x: ExpressionLike) -> Expression:
    """Convert an object into a vector or matrix expression.

    Raises:
        TypeError
        If ``x`` is neither an expression nor a 1-D or 2-D array.
    """
    if isinstance(x, Expression):
        return x
    if isinstance(x, jax.Array | np.ndarray | list | tuple):
        arr = jnp.asarray(x)
        if arr.ndim == 1:
            return as_vector(arr)
        if arr.ndim == 2:  # noqa: PLR2004
            return as_matrix(arr)
    msg = f"The given object {x} is not a valid vector or matrix type."
    raise TypeError(msg)


def as_operand(x: object) -> object:
    """Convert the operand of an arithmetic dunder.

    Returns:
        An expression, a scalar array, or ``NotImplemented`` for other types.
    """
    if isinstance(x, Expression):
        return x
    if isinstance(x, numbers.Number | np.number | np.bool_):
        return jnp.asarray(x)
    if isinstance(x, jax.Array | np.ndarray):
        if x.ndim == 0:
            return jnp.asarray(x)
        return as_expression(x)
    return NotImplemented


def todense(x: ExpressionLike) -> jnp.ndarray:
    """Convert an expression to a dense array.

    Args:
        x: Expression to convert.

    Returns:
        Dense array.
    """
    return x.todense() if isinstance(x, Expression) else jnp.asarray(x)


def allclose(
    a: ExpressionLike,
    b: ExpressionLike,
    rtol: float = 1e-5,
    atol: float = 1e-8,
) -> bool:
    """Check if two expressions are close to each other.

    Args:
        a: First expression.
        b: Second expression.
        rtol: Relative tolerance.
        atol: Absolute tolerance.
    Returns:
        Whether the two expressions are close to each other.
    """
    a_dense = todense(a)
    b_dense = todense(b)
    if a_dense.shape != b_dense.shape:
        return False
    return bool(jnp.allclose(a_dense, b_dense, rtol=rtol, atol=atol))
