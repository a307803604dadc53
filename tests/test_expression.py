# test_expression.py

"""Tests for the lazy element-wise expression engine."""

import jax.numpy as jnp
import numpy as np
import pytest
import pytest_cases
from hypothesis import given, settings
from hypothesis import strategies as st
from hypothesis.extra.numpy import arrays

import linexpr
from linexpr._errors import BadSizeError, UnsupportedError
from tests.test_linexpr_cases._matrix_cases import expression_cases, vector_cases

FLOATS = st.floats(min_value=-1e3, max_value=1e3, allow_nan=False, allow_infinity=False)


@pytest_cases.parametrize_with_cases("m,matrix", cases=expression_cases)
def test_elementwise_access_matches_todense(
    m: linexpr.MatrixExpression, matrix: jnp.ndarray
) -> None:
    assert jnp.allclose(m.todense(), matrix, atol=1e-5)
    for i in range(matrix.shape[0]):
        for j in range(matrix.shape[1]):
            assert jnp.allclose(m(i, j), matrix[i, j], atol=1e-5)


@pytest_cases.parametrize_with_cases("v,vector", cases=vector_cases)
def test_vector_access_matches_todense(
    v: linexpr.VectorExpression, vector: jnp.ndarray
) -> None:
    assert jnp.allclose(v.todense(), vector, atol=1e-5)
    assert [float(x) for x in v] == pytest.approx([float(x) for x in vector])
    for i in range(vector.shape[0]):
        assert jnp.allclose(v[i], vector[i], atol=1e-5)


@pytest_cases.parametrize_with_cases("m,matrix", cases=expression_cases)
def test_arithmetic_is_lazy(m: linexpr.MatrixExpression, matrix: jnp.ndarray) -> None:
    e = -(2.0 * m - 1.0) / 4.0
    assert isinstance(e, linexpr.MatrixUnary | linexpr.MatrixBinary)
    assert jnp.allclose(e.todense(), -(2.0 * matrix - 1.0) / 4.0, atol=1e-5)
    assert jnp.allclose(abs(m).todense(), jnp.abs(matrix), atol=1e-5)
    assert jnp.allclose((m**2).todense(), matrix**2, atol=1e-5)


def test_expressions_are_not_cached() -> None:
    v = linexpr.Vector(jnp.array([1.0, 2.0, 3.0]))
    w = linexpr.Vector(jnp.array([10.0, 20.0, 30.0]))
    e = v + w
    assert e(1) == 22.0
    w[1] = 0.0
    assert e(1) == 2.0
    assert jnp.allclose(e.todense(), jnp.array([11.0, 2.0, 33.0]))


def test_binary_left_and_right_scalars() -> None:
    v = linexpr.Vector(jnp.array([1.0, 2.0]))
    left = linexpr.VectorBinary(v, 3.0, jnp.subtract)
    right = linexpr.VectorBinary(3.0, v, jnp.subtract)
    assert jnp.allclose(left.todense(), jnp.array([-2.0, -1.0]))
    assert jnp.allclose(right.todense(), jnp.array([2.0, 1.0]))
    assert right(0) == 2.0


def test_size_mismatch() -> None:
    with pytest.raises(BadSizeError):
        linexpr.Vector(jnp.ones(2)) + linexpr.Vector(jnp.ones(3))
    with pytest.raises(BadSizeError):
        linexpr.Matrix(jnp.ones((2, 2))) * linexpr.Matrix(jnp.ones((2, 3)))
    with pytest.raises(UnsupportedError):
        linexpr.Vector(jnp.ones(2)) + linexpr.Matrix(jnp.ones((2, 2)))


def test_closure_classification() -> None:
    v = linexpr.Vector(jnp.arange(3.0))
    e = v + 1.0
    assert e.closure == linexpr.borrowed
    f = e * 2.0
    assert f.closure == linexpr.owned
    assert f.closures == (linexpr.owned,)


def test_orientation_and_storage_propagate() -> None:
    a = linexpr.Matrix(jnp.ones((2, 2)), orientation=linexpr.column_major)
    b = linexpr.Matrix(jnp.ones((2, 2)))
    assert (a + 1.0).orientation == linexpr.column_major
    assert (a + b).orientation == linexpr.unknown_orientation
    assert (a + b).storage == linexpr.dense
    d = linexpr.diag(linexpr.Vector(jnp.ones(2)))
    assert (a + d).storage == linexpr.unknown_storage


def test_alias_writes_through() -> None:
    v = linexpr.Vector(jnp.zeros(3))
    a = linexpr.alias(v)
    assert a.writable
    a[1] = 5.0
    assert v(1) == 5.0
    m = linexpr.Matrix(jnp.zeros((2, 2)))
    linexpr.alias(m)[0, 1] = 3.0
    assert m(0, 1) == 3.0


def test_non_identity_expression_is_not_writable() -> None:
    v = linexpr.Vector(jnp.zeros(3))
    e = linexpr.apply(v, jnp.negative)
    assert not e.writable
    with pytest.raises(UnsupportedError):
        e[0] = 1.0


def test_apply_forms() -> None:
    v = linexpr.Vector(jnp.array([1.0, 4.0]))
    assert jnp.allclose(linexpr.apply(v, jnp.sqrt).todense(), jnp.array([1.0, 2.0]))
    assert jnp.allclose(
        linexpr.apply(v, 2.0, jnp.multiply).todense(), jnp.array([2.0, 8.0])
    )
    assert jnp.allclose(
        linexpr.apply(2.0, v, jnp.subtract).todense(), jnp.array([1.0, -2.0])
    )
    with pytest.raises(TypeError):
        linexpr.apply(v, 1.0, 2.0, jnp.add)


def test_dtype_promotion() -> None:
    v = linexpr.Vector(jnp.arange(3))
    assert (v * 0.5).dtype == jnp.float64
    assert (v + 1j).dtype == jnp.complex128


@settings(deadline=None, max_examples=25)
@given(arrays(np.float64, (4,), elements=FLOATS), arrays(np.float64, (4,), elements=FLOATS))
def test_linear_combination_property(x, y) -> None:
    e = 2.0 * linexpr.Vector(x) - linexpr.Vector(y)
    assert jnp.allclose(e.todense(), 2.0 * x - y, atol=1e-5)
    assert jnp.allclose(e(3), 2.0 * x[3] - y[3], atol=1e-5)
