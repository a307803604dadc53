# test_cholesky.py

"""Tests for the Cholesky decomposition."""

import jax.numpy as jnp
import pytest
import pytest_cases

import linexpr
from linexpr._errors import BadSizeError, UnsupportedError
from tests.test_linexpr_cases._matrix_cases import case_spd


@pytest_cases.parametrize_with_cases("m,matrix", cases=[case_spd])
def test_factor_reconstructs(m: linexpr.MatrixExpression, matrix: jnp.ndarray) -> None:
    status, factor = linexpr.cholesky_decompose(m)
    assert status == 0
    lower = factor.todense()
    assert jnp.allclose(jnp.triu(lower, 1), 0.0)
    assert jnp.all(jnp.diag(lower) > 0)
    assert jnp.allclose(lower @ lower.T, matrix, atol=1e-10)


@pytest_cases.parametrize_with_cases("m,matrix", cases=[case_spd])
def test_solve(m: linexpr.MatrixExpression, matrix: jnp.ndarray) -> None:
    _, factor = linexpr.cholesky_decompose(m)
    n = matrix.shape[0]
    x = jnp.arange(1.0, n + 1.0)
    solution = linexpr.cholesky_solve(factor, linexpr.Vector(matrix @ x))
    assert isinstance(solution, linexpr.Vector)
    assert jnp.allclose(solution.todense(), x, atol=1e-10)
    rhs = linexpr.Matrix(jnp.stack([matrix @ x, matrix @ (2.0 * x)], axis=1))
    assert jnp.allclose(
        linexpr.cholesky_solve(factor, rhs).todense(),
        jnp.stack([x, 2.0 * x], axis=1),
        atol=1e-10,
    )


def test_not_positive_definite() -> None:
    a = linexpr.Matrix(jnp.array([[4.0, 2.0, 0.0], [2.0, 1.0, 0.0], [0.0, 0.0, 1.0]]))
    status, _ = linexpr.cholesky_decompose(a)
    assert status == 2
    status, _ = linexpr.cholesky_decompose(linexpr.Matrix(-jnp.eye(2)))
    assert status == 1


def test_inplace_keeps_upper_triangle() -> None:
    data = jnp.array([[4.0, 7.0], [2.0, 5.0]])
    a = linexpr.Matrix(data)
    assert linexpr.cholesky_decompose_inplace(a) == 0
    result = a.todense()
    assert result[0, 1] == 7.0
    lower = jnp.tril(result)
    assert jnp.allclose(lower @ lower.T, jnp.array([[4.0, 2.0], [2.0, 5.0]]))
    with pytest.raises(UnsupportedError):
        linexpr.cholesky_decompose_inplace(a + 1.0)


def test_complex_hermitian() -> None:
    a = jnp.array([[4.0, 1.0 - 1.0j], [1.0 + 1.0j, 3.0]])
    status, factor = linexpr.cholesky_decompose(linexpr.Matrix(a))
    assert status == 0
    lower = factor.todense()
    assert jnp.allclose(lower @ jnp.conj(lower).T, a)


def test_size_checks() -> None:
    with pytest.raises(BadSizeError):
        linexpr.cholesky_decompose(linexpr.Matrix(jnp.ones((2, 3))))
    with pytest.raises(BadSizeError):
        linexpr.cholesky_solve(linexpr.Matrix(jnp.eye(2)), linexpr.Vector(jnp.ones(3)))
    status, empty = linexpr.cholesky_decompose(linexpr.Matrix(jnp.zeros((0, 0))))
    assert status == 0
    assert empty.shape == (0, 0)
