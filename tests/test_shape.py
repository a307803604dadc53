# test_shape.py

"""Tests for the shape queries."""

import jax.numpy as jnp
import pytest
import pytest_cases

import linexpr
from linexpr._errors import UnsupportedError
from tests.test_linexpr_cases._matrix_cases import expression_cases, vector_cases


@pytest_cases.parametrize_with_cases("m,matrix", cases=expression_cases)
def test_matrix_sizes(m: linexpr.MatrixExpression, matrix: jnp.ndarray) -> None:
    rows, cols = matrix.shape
    assert linexpr.size(m, 1) == linexpr.num_rows(m) == rows
    assert linexpr.size(m, 2) == linexpr.num_columns(m) == cols
    assert linexpr.num_elements(m) == rows * cols
    assert not linexpr.empty(m)


@pytest_cases.parametrize_with_cases("m,matrix", cases=expression_cases)
def test_size_by_tag(m: linexpr.MatrixExpression, matrix: jnp.ndarray) -> None:
    rows, cols = matrix.shape
    if m.orientation == linexpr.column_major:
        rows, cols = cols, rows
    assert linexpr.size(m, linexpr.major) == rows
    assert linexpr.size(m, linexpr.minor) == cols
    assert linexpr.size(m, linexpr.leading) == cols


@pytest_cases.parametrize_with_cases("v,vector", cases=vector_cases)
def test_vector_sizes(v: linexpr.VectorExpression, vector: jnp.ndarray) -> None:
    assert linexpr.size(v) == linexpr.size(v, 1) == vector.shape[0]
    assert linexpr.num_elements(v) == vector.shape[0]
    assert linexpr.empty(v) == (vector.shape[0] == 0)


def test_invalid_dimensions() -> None:
    m = linexpr.Matrix(jnp.zeros((2, 3)))
    v = linexpr.Vector(jnp.zeros(3))
    with pytest.raises(UnsupportedError):
        linexpr.size(m, 3)
    with pytest.raises(UnsupportedError):
        linexpr.size(m, 0)
    with pytest.raises(UnsupportedError):
        linexpr.size(v, 2)
    with pytest.raises(UnsupportedError):
        linexpr.size(m)


def test_empty_matrix() -> None:
    assert linexpr.empty(linexpr.Matrix(jnp.zeros((0, 3))))
    assert linexpr.num_elements(linexpr.Matrix(jnp.zeros((0, 3)))) == 0
