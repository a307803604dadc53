# _functional.py

r"""Element-wise functions.

Each function returns a lazy expression over its argument (a vector or matrix
expression, or a 1-D/2-D array which is wrapped into a container). Scalars are
evaluated immediately.

- Predicates (integer 0/1 results): :func:`isfinite`, :func:`isinf`
- Powers: :func:`element_pow`, :func:`pow2`, :func:`sqr`, :func:`sqrt`
- Logarithms: :func:`log`, :func:`log2`, :func:`log10`
- Others: :func:`sign`, :func:`round`, :func:`tanh`, :func:`hold`,
  :func:`transform`
"""

import jax
import jax.numpy as jnp

from linexpr._base import Expression
from linexpr._expression import binary_expression, unary_expression
from linexpr._typing import ScalarFunction, ScalarLike
from linexpr.utils import as_expression

ArgumentType = Expression | jax.Array | ScalarLike


def _unary(x: ArgumentType, function: ScalarFunction) -> Expression | jax.Array:
    if isinstance(x, Expression):
        return unary_expression(x, function)
    if jnp.ndim(x) == 0:
        return function(jnp.asarray(x))
    return unary_expression(as_expression(x), function)


def _binary(
    x: ArgumentType, y: ArgumentType, function: ScalarFunction
) -> Expression | jax.Array:
    operands = [
        a if isinstance(a, Expression) or jnp.ndim(a) == 0 else as_expression(a)
        for a in (x, y)
    ]
    if not any(isinstance(a, Expression) for a in operands):
        return function(jnp.asarray(operands[0]), jnp.asarray(operands[1]))
    return binary_expression(operands[0], operands[1], function)


# --------------------------------------------------------------------------- #
# Functors
# --------------------------------------------------------------------------- #


def _isfinite(x: jax.Array) -> jax.Array:
    # complex: finite iff both parts are finite
    return jnp.isfinite(x).astype(jnp.int32)


def _isinf(x: jax.Array) -> jax.Array:
    # complex: infinite iff one part is infinite
    return jnp.isinf(x).astype(jnp.int32)


def _sqr(x: jax.Array) -> jax.Array:
    return x * x


def _sign(x: jax.Array) -> jax.Array:
    if jnp.iscomplexobj(x):
        modulus = jnp.abs(x)
        return jnp.where(modulus == 0, 0, x / jnp.where(modulus == 0, 1, modulus))
    return jnp.sign(x)


def _round_half_away(x: jax.Array) -> jax.Array:
    return jnp.sign(x) * jnp.floor(jnp.abs(x) + 0.5)


def _round(x: jax.Array) -> jax.Array:
    if jnp.iscomplexobj(x):
        return jax.lax.complex(
            _round_half_away(jnp.real(x)), _round_half_away(jnp.imag(x))
        )
    if jnp.issubdtype(jnp.asarray(x).dtype, jnp.integer):
        return x
    return _round_half_away(x)


def _pow2(x: jax.Array) -> jax.Array:
    return jnp.power(2.0, x)


def _ldexp(f: jax.Array, e: jax.Array) -> jax.Array:
    return f * jnp.power(2.0, e)


def _nonzero(x: jax.Array) -> jax.Array:
    return x != 0


# --------------------------------------------------------------------------- #
# Public functions
# --------------------------------------------------------------------------- #


def isfinite(x: ArgumentType) -> Expression | jax.Array:
    """1 where the element is finite, 0 for :math:`\\pm\\infty` and NaN.

    A complex element is finite iff both its real and imaginary parts are.
    """
    return _unary(x, _isfinite)


def isinf(x: ArgumentType) -> Expression | jax.Array:
    """1 where the real or the imaginary part of the element is infinite."""
    return _unary(x, _isinf)


def element_pow(x: ArgumentType, p: ArgumentType) -> Expression | jax.Array:
    r"""Element-wise power :math:`x^p`.

    Either argument may be a scalar: ``element_pow(v, 2)`` squares every
    element, ``element_pow(10, v)`` raises 10 to every element. Complex powers
    use the principal branch.
    """
    return _binary(x, p, jnp.power)


def sqr(x: ArgumentType) -> Expression | jax.Array:
    return _unary(x, _sqr)


def sqrt(x: ArgumentType) -> Expression | jax.Array:
    return _unary(x, jnp.sqrt)


def pow2(x: ArgumentType, e: ArgumentType | None = None) -> Expression | jax.Array:
    r"""Element-wise :math:`2^x`, or :math:`f \cdot 2^e` when ``e`` is given."""
    if e is None:
        return _unary(x, _pow2)
    return _binary(x, e, _ldexp)


def log(x: ArgumentType) -> Expression | jax.Array:
    return _unary(x, jnp.log)


def log2(x: ArgumentType) -> Expression | jax.Array:
    return _unary(x, jnp.log2)


def log10(x: ArgumentType) -> Expression | jax.Array:
    return _unary(x, jnp.log10)


def sign(x: ArgumentType) -> Expression | jax.Array:
    r"""Element-wise sign; :math:`z/|z|` (or 0) for complex elements."""
    return _unary(x, _sign)


def round(x: ArgumentType) -> Expression | jax.Array:  # noqa: A001
    """Element-wise nearest integer, halfway cases rounded away from zero."""
    return _unary(x, _round)


def tanh(x: ArgumentType) -> Expression | jax.Array:
    return _unary(x, jnp.tanh)


def hold(x: ArgumentType) -> Expression | jax.Array:
    """Boolean mask of the non-zero elements."""
    return _unary(x, _nonzero)


def transform(x: ArgumentType, function: ScalarFunction) -> Expression | jax.Array:
    """Lazily apply ``function`` to every element of ``x``."""
    return _unary(x, function)
