# The following file follows the implementation of probnum.typing
from collections.abc import Callable, Iterable

import jax
import jax.numpy as jnp
import numpy as np

########################################################################################
# API Types
########################################################################################

# Array Utilities
ShapeType = tuple[int, ...]
"""Type defining a shape of an object."""

########################################################################################
# Argument Types
########################################################################################

DTypeLike = jax.numpy.dtype | type | str | None
"""Object that can be converted to an array dtype.

Arguments of type :attr:`DTypeLike` should always be converted
into :class:`jax.numpy.dtype`\\ s before further internal processing."""

# Scalars, Arrays and Matrices
ScalarLike = int | float | complex | np.number | jnp.number | bool
"""Object that can be converted to a scalar value."""

ArrayLike = jax.Array | np.ndarray | Iterable
"""Object that can be converted to an array.

Arguments of type :attr:`ArrayLike` should always be converted
into :class:`jax.Array`\\ s using the function :func:`jnp.asarray`
before further internal processing."""

# Element-wise functions
ScalarFunction = Callable[..., jax.Array]
"""Element-wise function.

Functions are applied element by element for lazy element access and to the
whole materialized operand by :meth:`todense`, so they must broadcast like a
:mod:`jax.numpy` ufunc."""

Predicate = Callable[[jax.Array], jax.Array]
"""Element-wise predicate returning booleans."""
