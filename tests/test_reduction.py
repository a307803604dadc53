# test_reduction.py

"""Tests for reductions, scans and searches."""

import jax.numpy as jnp
import pytest
import pytest_cases

import linexpr
from linexpr._errors import BadSizeError, UnsupportedError
from tests.test_linexpr_cases._matrix_cases import expression_cases


@pytest.fixture
def scenario() -> linexpr.Matrix:
    return linexpr.Matrix(jnp.array([[1.0, 2.0, 3.0], [4.0, 5.0, 6.0]]))


def test_sums(scenario: linexpr.Matrix) -> None:
    assert jnp.allclose(linexpr.sum_columns(scenario).todense(), jnp.array([6.0, 15.0]))
    assert jnp.allclose(
        linexpr.sum_rows(scenario).todense(), jnp.array([5.0, 7.0, 9.0])
    )
    assert linexpr.sum_all(scenario) == 21.0
    assert jnp.allclose(linexpr.sum(scenario).todense(), jnp.array([5.0, 7.0, 9.0]))
    assert jnp.allclose(linexpr.sum(scenario, 2).todense(), jnp.array([6.0, 15.0]))


def test_cumsum(scenario: linexpr.Matrix) -> None:
    assert jnp.allclose(
        linexpr.cumsum(scenario).todense(),
        jnp.array([[1.0, 2.0, 3.0], [5.0, 7.0, 9.0]]),
    )
    assert jnp.allclose(
        linexpr.cumsum(scenario, 2).todense(),
        jnp.array([[1.0, 3.0, 6.0], [4.0, 9.0, 15.0]]),
    )
    assert jnp.allclose(
        linexpr.cumsum_rows(scenario).todense(), linexpr.cumsum(scenario).todense()
    )
    assert jnp.allclose(
        linexpr.cumsum_columns(scenario).todense(), linexpr.cumsum(scenario, 2).todense()
    )
    v = linexpr.Vector(jnp.array([1.0, 2.0, 3.0]))
    assert jnp.allclose(linexpr.cumsum(v).todense(), jnp.array([1.0, 3.0, 6.0]))


def test_extrema(scenario: linexpr.Matrix) -> None:
    assert linexpr.max(scenario) == 6.0
    assert linexpr.min(scenario) == 1.0
    assert jnp.allclose(linexpr.max(scenario, 1).todense(), jnp.array([3.0, 6.0]))
    assert jnp.allclose(
        linexpr.max(scenario, 2).todense(), jnp.array([4.0, 5.0, 6.0])
    )
    assert jnp.allclose(linexpr.min_rows(scenario).todense(), jnp.array([1.0, 4.0]))
    assert jnp.allclose(
        linexpr.min_columns(scenario).todense(), jnp.array([1.0, 2.0, 3.0])
    )


@pytest_cases.parametrize_with_cases("m,matrix", cases=expression_cases)
def test_reductions_match_jnp(m: linexpr.MatrixExpression, matrix: jnp.ndarray) -> None:
    assert jnp.allclose(linexpr.max(m), jnp.max(matrix))
    assert jnp.allclose(linexpr.min(m, 2).todense(), jnp.min(matrix, axis=0))
    assert jnp.allclose(linexpr.sum(m).todense(), jnp.sum(matrix, axis=0))
    assert jnp.allclose(linexpr.cumsum(m).todense(), jnp.cumsum(matrix, axis=0))
    assert jnp.allclose(linexpr.trace(m), jnp.trace(matrix))


def test_dimension_tags_follow_orientation() -> None:
    data = jnp.array([[1.0, 2.0, 3.0], [4.0, 5.0, 6.0]])
    rows = linexpr.Matrix(data)
    columns = linexpr.Matrix(data, orientation=linexpr.column_major)
    assert jnp.allclose(
        linexpr.max(rows, linexpr.major).todense(), linexpr.max(rows, 1).todense()
    )
    assert jnp.allclose(
        linexpr.max(columns, linexpr.major).todense(),
        linexpr.max(columns, 2).todense(),
    )
    assert jnp.allclose(
        linexpr.sum(columns, linexpr.minor).todense(), linexpr.sum(columns, 1).todense()
    )


def test_vector_reductions() -> None:
    v = linexpr.Vector(jnp.array([2.0, -1.0, 5.0]))
    assert linexpr.max(v) == 5.0
    assert linexpr.min(v) == -1.0
    assert linexpr.sum(v) == 6.0
    assert jnp.allclose(linexpr.max(v, 1).todense(), jnp.array([5.0]))
    with pytest.raises(UnsupportedError):
        linexpr.sum(v, 2)


def test_nan_is_never_selected() -> None:
    v = linexpr.Vector(jnp.array([1.0, jnp.nan, 3.0]))
    assert linexpr.max(v) == 3.0
    assert linexpr.min(v) == 1.0


def test_empty_extrema() -> None:
    v = linexpr.Vector(jnp.zeros(0))
    assert linexpr.max(v) == -jnp.inf
    assert linexpr.min(v) == jnp.inf
    assert linexpr.max(linexpr.Vector(jnp.array([1, 5, 2]))) == 5


def test_complex_extrema() -> None:
    z = linexpr.Vector(jnp.array([1.0 + 0.0j, 0.0 + 1.0j, -1.0 + 0.0j]))
    assert linexpr.max(z) == -1.0 + 0.0j
    assert linexpr.min(z) == 1.0 + 0.0j
    w = linexpr.Vector(jnp.array([3.0 + 4.0j, 1.0 + 0.0j, complex(jnp.nan, 0.0)]))
    assert linexpr.max(w) == 3.0 + 4.0j
    assert linexpr.min(w) == 1.0 + 0.0j
    empty = linexpr.Vector(jnp.zeros(0, dtype=jnp.complex128))
    assert linexpr.max(empty) == 0.0
    assert jnp.isinf(jnp.real(linexpr.min(empty)))


def test_any_and_all() -> None:
    m = linexpr.Matrix(jnp.array([[0.0, 1.0], [0.0, 0.0]]))
    assert linexpr.any(m)
    assert not linexpr.all(m)
    assert jnp.array_equal(linexpr.any(m, 1).todense(), jnp.array([True, False]))
    assert jnp.array_equal(linexpr.any(m, 2).todense(), jnp.array([False, True]))

    full = linexpr.Matrix(jnp.array([[1.0, 1.0], [0.0, 1.0]]))
    assert jnp.array_equal(linexpr.all(full, 1).todense(), jnp.array([True, False]))
    assert jnp.array_equal(linexpr.all(full, 2).todense(), jnp.array([False, True]))

    def positive(x):
        return x > 0

    assert jnp.array_equal(
        linexpr.all(full, positive, 2).todense(), jnp.array([False, True])
    )

    v = linexpr.Vector(jnp.array([1.0, 2.0, 3.0]))
    assert linexpr.any(v, lambda x: x > 2)
    assert not linexpr.all(v, lambda x: x > 2)


def test_any_and_all_on_empty() -> None:
    v = linexpr.Vector(jnp.zeros(0))
    assert not linexpr.any(v)
    assert linexpr.all(v)


def test_for_each_order(scenario: linexpr.Matrix) -> None:
    visited = []
    linexpr.for_each(scenario, visited.append)
    assert [float(x) for x in visited] == [1.0, 2.0, 3.0, 4.0, 5.0, 6.0]
    visited.clear()
    linexpr.for_each(scenario, visited.append, 2)
    assert [float(x) for x in visited] == [1.0, 4.0, 2.0, 5.0, 3.0, 6.0]
    visited.clear()
    linexpr.for_each(linexpr.Vector(jnp.array([3.0, 1.0])), visited.append)
    assert [float(x) for x in visited] == [3.0, 1.0]


def test_which_and_find() -> None:
    v = linexpr.Vector(jnp.array([0.0, 3.0, 0.0, 4.0]))
    assert jnp.array_equal(linexpr.which(v).todense(), jnp.array([1, 3]))
    assert jnp.allclose(linexpr.find(v).todense(), jnp.array([3.0, 4.0]))
    assert jnp.array_equal(
        linexpr.which(v, lambda x: x > 3.5).todense(), jnp.array([3])
    )
    assert linexpr.find(v, lambda x: x > 10).size == 0


def test_trace_and_dot(scenario: linexpr.Matrix) -> None:
    assert linexpr.trace(scenario) == 6.0
    u = linexpr.Vector(jnp.array([1.0, 2.0, 3.0]))
    assert linexpr.dot(u, u) == 14.0
    with pytest.raises(BadSizeError):
        linexpr.dot(u, linexpr.Vector(jnp.ones(2)))
    assert jnp.allclose(
        linexpr.dot(scenario, scenario).todense(), jnp.array([17.0, 29.0, 45.0])
    )
    assert jnp.allclose(
        linexpr.dot(scenario, scenario, 2).todense(), jnp.array([14.0, 77.0])
    )
