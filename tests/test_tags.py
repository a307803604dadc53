# test_tags.py

"""Tests for tags, dimension resolution and traits."""

import jax.numpy as jnp
import pytest

import linexpr
from linexpr._errors import UnsupportedError
from linexpr._tags import closure_of, is_complex


@pytest.mark.parametrize(
    ("tag", "orientation", "expected"),
    [
        (linexpr.major, linexpr.row_major, 1),
        (linexpr.minor, linexpr.row_major, 2),
        (linexpr.leading, linexpr.row_major, 2),
        (linexpr.major, linexpr.column_major, 2),
        (linexpr.minor, linexpr.column_major, 1),
        (linexpr.leading, linexpr.column_major, 1),
        (linexpr.major, linexpr.unknown_orientation, 1),
        (linexpr.leading, linexpr.unknown_orientation, 2),
    ],
)
def test_resolve_dimension(tag, orientation, expected) -> None:
    assert linexpr.resolve_dimension(tag, orientation) == expected


def test_as_dimension_uses_orientation() -> None:
    m = linexpr.Matrix(jnp.zeros((2, 3)), orientation=linexpr.column_major)
    assert linexpr.as_dimension(linexpr.major, m) == 2
    assert linexpr.as_dimension(1, m) == 1
    assert linexpr.as_dimension(2) == 2


@pytest.mark.parametrize("dim", [0, 3, -1, 1.0, "1", True])
def test_as_dimension_rejects(dim) -> None:
    with pytest.raises(UnsupportedError):
        linexpr.as_dimension(dim)


def test_tags_are_singletons_by_type() -> None:
    assert linexpr.row_major == linexpr._tags.RowMajorTag()
    assert linexpr.row_major != linexpr.column_major
    assert hash(linexpr.norm_1) == hash(linexpr._tags.Norm1Tag())
    assert repr(linexpr.leading) == "leading"


def test_weaker_category() -> None:
    assert (
        linexpr.weaker_category(linexpr.random_access_iterator, linexpr.forward_iterator)
        == linexpr.forward_iterator
    )
    assert (
        linexpr.weaker_category(
            linexpr.bidirectional_iterator, linexpr.random_access_iterator
        )
        == linexpr.bidirectional_iterator
    )
    assert linexpr.weaker_category() == linexpr.random_access_iterator


def test_traits() -> None:
    m = linexpr.Matrix(jnp.ones((2, 2), dtype=jnp.complex128))
    assert linexpr.value_type(m) == jnp.complex128
    assert linexpr.real_type(m) == jnp.float64
    assert is_complex(m)
    assert linexpr.orientation_of(m) == linexpr.row_major
    assert linexpr.storage_of(m) == linexpr.dense
    assert linexpr.orientation_of(object()) == linexpr.unknown_orientation
    assert linexpr.storage_of(object()) == linexpr.unknown_storage
    assert linexpr.iterator_category_of(m) == linexpr.random_access_iterator
    assert linexpr.iterator_category_of(m + 1.0) == linexpr.random_access_iterator
    assert linexpr.iterator_category_of(object()) == linexpr.random_access_iterator


def test_closure_of() -> None:
    v = linexpr.Vector(jnp.arange(3.0))
    assert closure_of(v) == linexpr.borrowed
    assert closure_of(v + 1.0) == linexpr.owned
