# test_qr.py

"""Tests for the QR and QL decompositions."""

import jax.numpy as jnp
import pytest
import pytest_cases

import linexpr
from linexpr._errors import BadSizeError, ExternalLogicError
from tests.test_linexpr_cases._matrix_cases import expression_cases, square_cases

SCENARIO = jnp.array([[12.0, -51.0, 4.0], [6.0, 167.0, -68.0], [-4.0, 24.0, -41.0]])


def _adjoint(x: jnp.ndarray) -> jnp.ndarray:
    return jnp.conj(x).T


def test_qr_scenario() -> None:
    q, r = linexpr.qr_decompose(linexpr.Matrix(SCENARIO))
    q, r = q.todense(), r.todense()
    assert jnp.allclose(q @ q.T, jnp.eye(3), atol=1e-12)
    assert jnp.allclose(q @ r, SCENARIO, atol=1e-10)
    assert jnp.allclose(jnp.tril(r, -1), 0.0)
    assert jnp.allclose(jnp.abs(jnp.diag(r)), jnp.array([14.0, 175.0, 35.0]))


@pytest_cases.parametrize_with_cases("m,matrix", cases=expression_cases)
@pytest.mark.parametrize("full", [True, False])
def test_qr_reconstruction(
    m: linexpr.MatrixExpression, matrix: jnp.ndarray, full: bool
) -> None:
    rows, cols = matrix.shape
    k = min(rows, cols)
    q, r = linexpr.qr_decompose(m, full)
    assert q.shape == ((rows, rows) if full else (rows, k))
    assert r.shape == ((rows, cols) if full else (k, cols))
    assert jnp.allclose(_adjoint(q.todense()) @ q.todense(), jnp.eye(q.shape[1]), atol=1e-10)
    assert jnp.allclose(q.todense() @ r.todense(), matrix, atol=1e-10)


@pytest_cases.parametrize_with_cases("m,matrix", cases=square_cases)
def test_qr_products(m: linexpr.MatrixExpression, matrix: jnp.ndarray) -> None:
    qr = linexpr.QRDecomposition(m)
    q = qr.Q().todense()
    n = matrix.shape[0]
    c = linexpr.Matrix(jnp.arange(1.0, n * 2 + 1.0).reshape(n, 2))
    assert jnp.allclose(qr.lprod(c).todense(), q @ c.todense(), atol=1e-10)
    assert jnp.allclose(qr.tlprod(c).todense(), _adjoint(q) @ c.todense(), atol=1e-10)
    d = linexpr.Matrix(jnp.arange(1.0, n * 2 + 1.0).reshape(2, n))
    assert jnp.allclose(qr.rprod(d).todense(), d.todense() @ q, atol=1e-10)
    assert jnp.allclose(qr.trprod(d).todense(), d.todense() @ _adjoint(q), atol=1e-10)
    v = linexpr.Vector(jnp.ones(n))
    assert jnp.allclose(qr.lprod(v).todense(), q @ jnp.ones(n), atol=1e-10)


def test_qr_inplace_products_and_errors() -> None:
    qr = linexpr.QRDecomposition(linexpr.Matrix(SCENARIO))
    c = linexpr.Vector(jnp.array([1.0, 2.0, 3.0]))
    expected = _adjoint(qr.Q().todense()) @ c.todense()
    qr.tlprod_inplace(c)
    assert jnp.allclose(c.todense(), expected)
    qr.lprod_inplace(c)
    assert jnp.allclose(c.todense(), jnp.array([1.0, 2.0, 3.0]))
    with pytest.raises(BadSizeError):
        qr.lprod(linexpr.Vector(jnp.ones(2)))
    with pytest.raises(ExternalLogicError):
        linexpr.QRDecomposition().R()


@pytest_cases.parametrize_with_cases("m,matrix", cases=expression_cases)
@pytest.mark.parametrize("full", [True, False])
def test_ql_reconstruction(
    m: linexpr.MatrixExpression, matrix: jnp.ndarray, full: bool
) -> None:
    q, lower = linexpr.ql_decompose(m, full)
    assert jnp.allclose(_adjoint(q.todense()) @ q.todense(), jnp.eye(q.shape[1]), atol=1e-10)
    assert jnp.allclose(q.todense() @ lower.todense(), matrix, atol=1e-10)


def test_ql_factor_is_lower() -> None:
    q, lower = linexpr.ql_decompose(linexpr.Matrix(SCENARIO))
    assert jnp.allclose(jnp.triu(lower.todense(), 1), 0.0)
    tall = jnp.arange(1.0, 13.0).reshape(4, 3) + jnp.eye(4, 3)
    _, lower = linexpr.ql_decompose(linexpr.Matrix(tall))
    # the triangle sits in the last rows
    assert jnp.allclose(lower.todense()[0], 0.0)
    assert jnp.allclose(jnp.triu(lower.todense()[1:], 1), 0.0)


@pytest_cases.parametrize_with_cases("m,matrix", cases=square_cases)
def test_ql_products(m: linexpr.MatrixExpression, matrix: jnp.ndarray) -> None:
    ql = linexpr.QLDecomposition(m)
    q = ql.Q().todense()
    n = matrix.shape[0]
    c = linexpr.Matrix(jnp.arange(1.0, n * 2 + 1.0).reshape(n, 2))
    assert jnp.allclose(ql.lprod(c).todense(), q @ c.todense(), atol=1e-10)
    assert jnp.allclose(ql.tlprod(c).todense(), _adjoint(q) @ c.todense(), atol=1e-10)
    d = linexpr.Matrix(jnp.arange(1.0, n * 2 + 1.0).reshape(2, n))
    assert jnp.allclose(ql.rprod(d).todense(), d.todense() @ q, atol=1e-10)
    assert jnp.allclose(ql.trprod(d).todense(), d.todense() @ _adjoint(q), atol=1e-10)
