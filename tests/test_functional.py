# test_functional.py

"""Tests for the element-wise functions."""

import jax.numpy as jnp
import pytest
import pytest_cases

import linexpr
from tests.test_linexpr_cases._matrix_cases import expression_cases


@pytest_cases.parametrize_with_cases("m,matrix", cases=expression_cases)
def test_functions_match_jnp(m: linexpr.MatrixExpression, matrix: jnp.ndarray) -> None:
    assert jnp.allclose(linexpr.sqr(m).todense(), matrix**2, atol=1e-5)
    assert jnp.allclose(linexpr.tanh(m).todense(), jnp.tanh(matrix), atol=1e-5)
    assert jnp.allclose(
        linexpr.sqrt(abs(m)).todense(), jnp.sqrt(jnp.abs(matrix)), atol=1e-5
    )
    assert jnp.allclose(
        linexpr.transform(m, jnp.cos).todense(), jnp.cos(matrix), atol=1e-5
    )


def test_isfinite_and_isinf() -> None:
    v = linexpr.Vector(jnp.array([1.0, jnp.inf, -jnp.inf, jnp.nan]))
    finite = linexpr.isfinite(v)
    assert finite.dtype == jnp.int32
    assert jnp.array_equal(finite.todense(), jnp.array([1, 0, 0, 0]))
    assert jnp.array_equal(linexpr.isinf(v).todense(), jnp.array([0, 1, 1, 0]))


def test_isfinite_and_isinf_complex() -> None:
    z = linexpr.Vector(
        jnp.array([1.0 + 1.0j, complex(1.0, jnp.inf), complex(jnp.nan, 0.0)])
    )
    assert jnp.array_equal(linexpr.isfinite(z).todense(), jnp.array([1, 0, 0]))
    assert jnp.array_equal(linexpr.isinf(z).todense(), jnp.array([0, 1, 0]))


def test_element_pow_forms() -> None:
    v = linexpr.Vector(jnp.array([1.0, 2.0, 3.0]))
    w = linexpr.Vector(jnp.array([2.0, 2.0, 0.0]))
    assert jnp.allclose(linexpr.element_pow(v, 2).todense(), jnp.array([1.0, 4.0, 9.0]))
    assert jnp.allclose(
        linexpr.element_pow(10.0, v).todense(), jnp.array([10.0, 100.0, 1000.0])
    )
    assert jnp.allclose(linexpr.element_pow(v, w).todense(), jnp.array([1.0, 4.0, 1.0]))
    assert linexpr.element_pow(2.0, 3.0) == 8.0


def test_logarithms() -> None:
    v = linexpr.Vector(jnp.array([1.0, 8.0, 100.0]))
    assert jnp.allclose(linexpr.log(v).todense(), jnp.log(v.todense()))
    assert jnp.allclose(linexpr.log2(v).todense()[1], 3.0)
    assert jnp.allclose(linexpr.log10(v).todense()[2], 2.0)


def test_sign() -> None:
    v = linexpr.Vector(jnp.array([-2.0, 0.0, 3.0]))
    assert jnp.array_equal(linexpr.sign(v).todense(), jnp.array([-1.0, 0.0, 1.0]))
    z = linexpr.Vector(jnp.array([3.0 + 4.0j, 0.0j]))
    assert jnp.allclose(linexpr.sign(z).todense(), jnp.array([0.6 + 0.8j, 0.0]))


def test_round_half_away_from_zero() -> None:
    v = linexpr.Vector(jnp.array([0.5, 1.5, 2.5, -0.5, -2.5, 1.2]))
    assert jnp.array_equal(
        linexpr.round(v).todense(), jnp.array([1.0, 2.0, 3.0, -1.0, -3.0, 1.0])
    )
    z = linexpr.Vector(jnp.array([2.5 - 0.5j]))
    assert linexpr.round(z)(0) == 3.0 - 1.0j
    ints = linexpr.Vector(jnp.array([1, 2]))
    assert jnp.array_equal(linexpr.round(ints).todense(), jnp.array([1, 2]))


def test_pow2() -> None:
    v = linexpr.Vector(jnp.array([0.0, 1.0, 3.0]))
    assert jnp.allclose(linexpr.pow2(v).todense(), jnp.array([1.0, 2.0, 8.0]))
    e = linexpr.Vector(jnp.array([1.0, 2.0, -1.0]))
    assert jnp.allclose(
        linexpr.pow2(linexpr.Vector(jnp.array([1.5, 1.0, 4.0])), e).todense(),
        jnp.array([3.0, 4.0, 2.0]),
    )


def test_hold_and_scalars() -> None:
    m = linexpr.Matrix(jnp.array([[0.0, 1.0], [2.0, 0.0]]))
    assert jnp.array_equal(
        linexpr.hold(m).todense(), jnp.array([[False, True], [True, False]])
    )
    assert linexpr.sqrt(4.0) == 2.0
    assert linexpr.sqr(3) == 9


def test_functions_accept_arrays() -> None:
    result = linexpr.sqr(jnp.array([1.0, 2.0]))
    assert isinstance(result, linexpr.VectorExpression)
    assert jnp.allclose(result.todense(), jnp.array([1.0, 4.0]))
    result = linexpr.sqr(jnp.ones((2, 2)))
    assert isinstance(result, linexpr.MatrixExpression)


def test_functions_are_lazy() -> None:
    v = linexpr.Vector(jnp.array([1.0, 2.0]))
    e = linexpr.sqr(v)
    v[0] = 5.0
    assert e(0) == pytest.approx(25.0)
