# _numeric.py

"""Floating-point constants: machine epsilon, smallest and largest reals."""

import jax
import jax.numpy as jnp
import numpy as np
import plum  # type: ignore  # noqa: PGH003

from linexpr._typing import ScalarLike


def _real_dtype(dtype: object) -> np.dtype:
    dtype = jnp.dtype(dtype)
    if jnp.issubdtype(dtype, jnp.complexfloating) or jnp.issubdtype(
        dtype, jnp.floating
    ):
        return np.dtype(jnp.finfo(dtype).dtype)
    return np.dtype(np.float64)


@plum.dispatch
def eps() -> float:
    return float(np.finfo(np.float64).eps)


@eps.dispatch
def _(dtype: type | np.dtype | str) -> float:
    return float(np.finfo(_real_dtype(dtype)).eps)


@eps.dispatch
def _(x: ScalarLike | jax.Array | np.ndarray) -> float:
    """Distance from ``|x|`` to the next larger floating-point number.

    Returns NaN for infinite or NaN inputs and the smallest subnormal for
    inputs below the smallest normal number.
    """
    dtype = _real_dtype(np.asarray(x).dtype)
    info = np.finfo(dtype)
    y = abs(complex(np.asarray(x))) if np.iscomplexobj(x) else abs(float(np.asarray(x)))
    if not np.isfinite(y):
        return float("nan")
    if y <= info.tiny:
        return float(info.smallest_subnormal)
    _, e = np.frexp(dtype.type(y))
    return float(np.ldexp(dtype.type(1), int(e) - (info.nmant + 1)))


def realmin(dtype: object = jnp.float64) -> float:
    """Smallest positive normalized floating-point number."""
    return float(np.finfo(_real_dtype(dtype)).tiny)


def realmax(dtype: object = jnp.float64) -> float:
    """Largest finite floating-point number."""
    return float(np.finfo(_real_dtype(dtype)).max)
