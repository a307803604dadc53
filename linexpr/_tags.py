# _tags.py

r"""Tags and traits.

Tags are stateless singletons. Operations dispatch on their types with
:mod:`plum`:

- orientation tags: :data:`row_major`, :data:`column_major`,
  :data:`unknown_orientation`
- dimension tags: :data:`major`, :data:`minor`, :data:`leading`
- storage tags: :data:`dense`, :data:`sparse`, :data:`unknown_storage`
- closure tags: :data:`borrowed`, :data:`owned`
- iterator categories: :data:`forward_iterator`,
  :data:`bidirectional_iterator`, :data:`random_access_iterator`
- norm tags: :data:`norm_1`, :data:`norm_inf`, :data:`norm_2`,
  :data:`norm_frobenius`

A dimension tag is turned into a dimension index (1 = rows, 2 = columns) by
:func:`resolve_dimension`:

=========  ===========  ==============
Tag        row_major    column_major
=========  ===========  ==============
major      1            2
minor      2            1
leading    2            1
=========  ===========  ==============

An unknown orientation resolves as row-major.
"""

import jax.numpy as jnp
import numpy as np
import plum  # type: ignore  # noqa: PGH003

from linexpr._errors import UnsupportedError


class Tag:
    """Base class of all tags."""

    name: str = "tag"

    def __repr__(self) -> str:
        return self.name

    def __eq__(self, other: object) -> bool:
        return type(self) is type(other)

    def __hash__(self) -> int:
        return hash(type(self))


# --------------------------------------------------------------------------- #
# Orientation
# --------------------------------------------------------------------------- #


class OrientationTag(Tag):
    name = "orientation"


class RowMajorTag(OrientationTag):
    name = "row_major"


class ColumnMajorTag(OrientationTag):
    name = "column_major"


class UnknownOrientationTag(OrientationTag):
    name = "unknown_orientation"


row_major = RowMajorTag()
column_major = ColumnMajorTag()
unknown_orientation = UnknownOrientationTag()

# --------------------------------------------------------------------------- #
# Dimension
# --------------------------------------------------------------------------- #


class DimensionTag(Tag):
    name = "dimension"


class MajorTag(DimensionTag):
    name = "major"


class MinorTag(DimensionTag):
    name = "minor"


class LeadingTag(DimensionTag):
    name = "leading"


major = MajorTag()
minor = MinorTag()
leading = LeadingTag()

# --------------------------------------------------------------------------- #
# Storage
# --------------------------------------------------------------------------- #


class StorageTag(Tag):
    name = "storage"


class DenseTag(StorageTag):
    name = "dense"


class SparseTag(StorageTag):
    name = "sparse"


class UnknownStorageTag(StorageTag):
    name = "unknown_storage"


dense = DenseTag()
sparse = SparseTag()
unknown_storage = UnknownStorageTag()

# --------------------------------------------------------------------------- #
# Closure
# --------------------------------------------------------------------------- #


class ClosureTag(Tag):
    name = "closure"


class BorrowedTag(ClosureTag):
    name = "borrowed"


class OwnedTag(ClosureTag):
    name = "owned"


borrowed = BorrowedTag()
owned = OwnedTag()

# --------------------------------------------------------------------------- #
# Iterator categories
# --------------------------------------------------------------------------- #


class IteratorCategory(Tag):
    name = "iterator"
    strength: int = 0


class ForwardIteratorTag(IteratorCategory):
    name = "forward_iterator"
    strength = 1


class BidirectionalIteratorTag(IteratorCategory):
    name = "bidirectional_iterator"
    strength = 2


class RandomAccessIteratorTag(IteratorCategory):
    name = "random_access_iterator"
    strength = 3


forward_iterator = ForwardIteratorTag()
bidirectional_iterator = BidirectionalIteratorTag()
random_access_iterator = RandomAccessIteratorTag()


def weaker_category(*categories: IteratorCategory) -> IteratorCategory:
    """Return the weakest of the given iterator categories."""
    if not categories:
        return random_access_iterator
    weakest = categories[0]
    for category in categories[1:]:
        if category.strength < weakest.strength:
            weakest = category
    return weakest


# --------------------------------------------------------------------------- #
# Norms
# --------------------------------------------------------------------------- #


class NormTag(Tag):
    name = "norm"
    lapack_code: str = ""


class Norm1Tag(NormTag):
    name = "norm_1"
    lapack_code = "O"


class NormInfTag(NormTag):
    name = "norm_inf"
    lapack_code = "I"


class Norm2Tag(NormTag):
    name = "norm_2"


class NormFrobeniusTag(NormTag):
    name = "norm_frobenius"
    lapack_code = "F"


norm_1 = Norm1Tag()
norm_inf = NormInfTag()
norm_2 = Norm2Tag()
norm_frobenius = NormFrobeniusTag()

# --------------------------------------------------------------------------- #
# Dimension resolution
# --------------------------------------------------------------------------- #


@plum.dispatch
def resolve_dimension(tag: MajorTag, orientation: RowMajorTag) -> int:  # noqa: ARG001
    return 1


@resolve_dimension.dispatch
def _(tag: MinorTag, orientation: RowMajorTag) -> int:  # noqa: ARG001
    return 2


@resolve_dimension.dispatch
def _(tag: LeadingTag, orientation: RowMajorTag) -> int:  # noqa: ARG001
    return 2


@resolve_dimension.dispatch
def _(tag: MajorTag, orientation: ColumnMajorTag) -> int:  # noqa: ARG001
    return 2


@resolve_dimension.dispatch
def _(tag: MinorTag, orientation: ColumnMajorTag) -> int:  # noqa: ARG001
    return 1


@resolve_dimension.dispatch
def _(tag: LeadingTag, orientation: ColumnMajorTag) -> int:  # noqa: ARG001
    return 1


@resolve_dimension.dispatch
def _(tag: DimensionTag, orientation: UnknownOrientationTag) -> int:  # noqa: ARG001
    return resolve_dimension(tag, row_major)


def as_dimension(dim: "int | DimensionTag", expr: object = None) -> int:
    """Convert a dimension index or a dimension tag into a dimension index.

    Args:
        dim: Either ``1``, ``2`` or a :class:`DimensionTag`.
        expr: Expression whose orientation resolves a dimension tag.

    Raises:
        UnsupportedError
            If ``dim`` is neither a valid index nor a dimension tag.
    """
    if isinstance(dim, DimensionTag):
        return resolve_dimension(dim, orientation_of(expr))
    if isinstance(dim, bool) or not isinstance(dim, int | np.integer):
        msg = f"Expected a dimension index or a dimension tag, got {dim!r}."
        raise UnsupportedError(msg)
    dim = int(dim)
    if dim not in {1, 2}:
        msg = f"Dimension must be 1 or 2, got {dim}."
        raise UnsupportedError(msg)
    return dim


# --------------------------------------------------------------------------- #
# Traits
# --------------------------------------------------------------------------- #


def orientation_of(expr: object) -> OrientationTag:
    return getattr(expr, "orientation", unknown_orientation)


def storage_of(expr: object) -> StorageTag:
    return getattr(expr, "storage", unknown_storage)


def closure_of(expr: object) -> ClosureTag:
    """Closure an expression takes of ``expr``: containers are borrowed."""
    return borrowed if getattr(expr, "is_container", False) else owned


def iterator_category_of(expr: object) -> IteratorCategory:
    return getattr(expr, "iterator_category", random_access_iterator)


def value_type(expr: object) -> jnp.dtype:
    return jnp.dtype(expr.dtype)


def real_type(expr: object) -> jnp.dtype:
    """Real counterpart of the value type (``float64`` for ``complex128``)."""
    dtype = value_type(expr)
    if jnp.issubdtype(dtype, jnp.complexfloating):
        return jnp.finfo(dtype).dtype
    return dtype


def is_complex(expr: object) -> bool:
    return bool(jnp.issubdtype(value_type(expr), jnp.complexfloating))
