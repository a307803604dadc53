# _sequence.py

r"""Arithmetic sequences.

- :class:`SequenceVector`: the vector :math:`v_i = s + i \cdot d`,
  :math:`i = 0, \dots, n - 1`, computed on access (nothing is stored)
- :func:`seq`: build a :class:`SequenceVector`
- :func:`linspace`, :func:`logspace`: linearly / logarithmically spaced
  :class:`~linexpr.Vector`
"""

import jax
import jax.numpy as jnp

from linexpr._base import VectorExpression
from linexpr._container import Vector
from linexpr._errors import BadArgumentError
from linexpr._expression import binary_expression
from linexpr._tags import SparseTag, sparse
from linexpr._typing import ScalarLike


class SequenceVector(VectorExpression):
    r"""Read-only vector holding an arithmetic progression.

    Args:
        start: First element :math:`s`.
        stride: Difference :math:`d` between consecutive elements.
        size: Number of elements :math:`n`.
    """

    is_container = True

    def __init__(self, start: ScalarLike = 0, stride: ScalarLike = 1, size: int = 0) -> None:
        self.assign(start, stride, size)

    @classmethod
    def from_range(cls, r: range) -> "SequenceVector":
        """Sequence with the elements of a Python :class:`range`."""
        return cls(r.start, r.step, len(r))

    @classmethod
    def from_slice(cls, s: slice, n: int) -> "SequenceVector":
        """Sequence with the indices a :class:`slice` selects from ``n`` elements."""
        return cls.from_range(range(*s.indices(n)))

    @property
    def start(self) -> ScalarLike:
        return self._start

    @property
    def stride(self) -> ScalarLike:
        return self._stride

    @property
    def size(self) -> int:
        return self._size

    @property
    def dtype(self) -> jnp.dtype:
        return jnp.result_type(self._start, self._stride)

    @property
    def storage(self) -> SparseTag:
        return sparse

    def assign(self, start: ScalarLike, stride: ScalarLike, size: int) -> "SequenceVector":
        """Re-bind the progression."""
        size = int(size)
        if size < 0:
            msg = f"The size of a sequence must be non-negative, got {size}."
            raise BadArgumentError(msg)
        self._start = start
        self._stride = stride
        self._size = size
        return self

    def resize(self, n: int, *, preserve: bool = True) -> None:  # noqa: ARG002
        """Change the number of elements, the progression is kept."""
        self.assign(self._start, self._stride, n)

    def clear(self) -> None:
        self.assign(0, 0, 0)

    def _element(self, i: int) -> jax.Array:
        return jnp.asarray(self._start + self._stride * i, dtype=self.dtype)

    def todense(self) -> jax.Array:
        index = jnp.arange(self._size, dtype=self.dtype)
        return jnp.asarray(self._start, dtype=self.dtype) + self._stride * index

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(start={self._start}, "
            f"stride={self._stride}, size={self._size})"
        )


def seq(start: ScalarLike, *args: ScalarLike) -> SequenceVector:
    """Build an arithmetic sequence.

    ``seq(start, size)`` has unit stride, ``seq(start, stride, size)`` the given
    one.
    """
    if len(args) == 1:
        return SequenceVector(start, 1, args[0])
    if len(args) == 2:  # noqa: PLR2004
        return SequenceVector(start, args[0], args[1])
    msg = f"seq takes 2 or 3 arguments, got {len(args) + 1}."
    raise TypeError(msg)


def linspace(a: ScalarLike, b: ScalarLike, n: int = 100) -> Vector:
    r"""``n`` equally spaced values on :math:`[a, b]`.

    ``linspace(a, b, 1)`` is ``[b]``.
    """
    if n < 1:
        msg = f"The number of points must be positive, got {n}."
        raise BadArgumentError(msg)
    if n == 1:
        return Vector(jnp.asarray([b], dtype=jnp.result_type(a, b, float)))
    return Vector(jnp.linspace(a, b, n))


def logspace(
    a: ScalarLike, b: ScalarLike, n: int = 100, base: ScalarLike = 10
) -> Vector:
    r"""``n`` values logarithmically spaced on :math:`[\mathrm{base}^a, \mathrm{base}^b]`.

    Raises:
        BadArgumentError
            If ``n`` or ``base`` is not positive.
    """
    if n < 1:
        msg = f"The number of points must be positive, got {n}."
        raise BadArgumentError(msg)
    if base <= 0:
        msg = f"The base must be positive, got {base}."
        raise BadArgumentError(msg)
    return Vector(binary_expression(base, linspace(a, b, n), jnp.power))
