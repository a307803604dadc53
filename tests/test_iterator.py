# test_iterator.py

"""Tests for vector and matrix iterators."""

import jax.numpy as jnp
import pytest

import linexpr
from linexpr._errors import BadIndexError, ExternalLogicError


@pytest.fixture
def debug_mode():
    previous = linexpr.is_debug()
    linexpr.set_debug(True)
    yield
    linexpr.set_debug(previous)


@pytest.fixture
def release_mode():
    previous = linexpr.is_debug()
    linexpr.set_debug(False)
    yield
    linexpr.set_debug(previous)


def test_vector_iteration_forward_and_reverse() -> None:
    v = linexpr.Vector(jnp.array([1.0, 2.0, 3.0]))
    values = []
    it = v.begin()
    while it != v.end():
        values.append(float(it.value))
        it += 1
    assert values == [1.0, 2.0, 3.0]

    reverse = []
    it = v.rbegin()
    while it != v.rend():
        reverse.append((it.index(), float(it.value)))
        it += 1
    assert reverse == [(2, 3.0), (1, 2.0), (0, 1.0)]


def test_iterator_arithmetic() -> None:
    e = linexpr.Vector(jnp.arange(5.0)) * 2.0
    it = e.begin()
    assert (it + 3).value == 6.0
    assert it[4] == 8.0
    assert e.end() - e.begin() == 5
    assert e.begin() < e.end()
    assert e.end() >= e.begin() + 5
    it2 = e.end()
    it2 -= 2
    assert it2.index() == 3


def test_write_through_iterator() -> None:
    v = linexpr.Vector(jnp.zeros(3))
    it = v.begin() + 1
    it.value = 4.0
    assert v(1) == 4.0


def test_dereference_out_of_range() -> None:
    v = linexpr.Vector(jnp.zeros(2))
    with pytest.raises(BadIndexError):
        _ = v.end().value


def test_debug_mode_checks_movement(debug_mode) -> None:  # noqa: ARG001
    v = linexpr.Vector(jnp.zeros(2))
    it = v.end()
    with pytest.raises(BadIndexError):
        it += 1
    with pytest.raises(BadIndexError):
        _ = v.begin() - 1


def test_movement_unchecked_without_debug(release_mode) -> None:  # noqa: ARG001
    v = linexpr.Vector(jnp.zeros(2))
    it = v.end() + 3
    assert it.index() == 5


def test_comparing_different_closures() -> None:
    v = linexpr.Vector(jnp.zeros(2))
    w = linexpr.Vector(jnp.zeros(2))
    with pytest.raises(ExternalLogicError):
        _ = v.begin() == w.begin()
    with pytest.raises(ExternalLogicError):
        _ = v.begin() == v.rbegin()


def test_matrix_row_major_traversal() -> None:
    data = jnp.arange(6.0).reshape(2, 3)
    m = linexpr.Matrix(data)
    values = []
    it1 = m.begin1()
    while it1 != m.end1():
        it2 = it1.begin()
        while it2 != it1.end():
            assert (it2.index1(), it2.index2()) == (it1.index1(), it2.index2())
            values.append(float(it2.value))
            it2 += 1
        it1 += 1
    assert values == [float(x) for x in data.ravel()]


def test_matrix_column_traversal_and_reverse() -> None:
    data = jnp.arange(6.0).reshape(2, 3)
    m = linexpr.Matrix(data) + 0.0
    values = []
    it2 = m.rbegin2()
    while it2 != m.rend2():
        it1 = it2.begin()
        while it1 != it2.end():
            values.append(float(it1.value))
            it1 += 1
        it2 += 1
    assert values == [2.0, 5.0, 1.0, 4.0, 0.0, 3.0]


def test_dual_reverse_iterator() -> None:
    m = linexpr.Matrix(jnp.arange(6.0).reshape(2, 3))
    it2 = m.begin1().rbegin()
    assert isinstance(it2, linexpr.MatrixIterator2)
    assert it2.index2() == 2
    assert it2.rend().index1() == -1


def test_iterator_category() -> None:
    v = linexpr.Vector(jnp.zeros(2))
    assert v.begin().iterator_category == linexpr.random_access_iterator
    assert v.begin().closure is v
