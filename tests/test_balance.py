# test_balance.py

"""Tests for matrix and pencil balancing."""

import jax.numpy as jnp
import numpy as np
import pytest
import scipy.linalg

import linexpr
from linexpr._errors import BadArgumentError, BadSizeError, UnsupportedError

BADLY_SCALED = np.array(
    [[1.0, 100.0, 10000.0], [0.01, 2.0, 100.0], [0.0001, 0.01, 3.0]]
)
# row 0 and column 3 isolate eigenvalues
REDUCIBLE = np.array(
    [[5.0, 0.0, 0.0, 0.0], [1.0, 1.0, 1e4, 0.0], [2.0, 1e-4, 2.0, 0.0], [3.0, 4.0, 5.0, 6.0]]
)


@pytest.mark.parametrize("a", [BADLY_SCALED, REDUCIBLE])
def test_similarity(a: np.ndarray) -> None:
    b, t = linexpr.balance(linexpr.Matrix(a), return_matrix=True)
    b, t = np.asarray(b.todense()), np.asarray(t.todense())
    assert np.allclose(np.linalg.solve(t, a @ t), b)
    expected, _ = scipy.linalg.matrix_balance(a)
    assert np.allclose(b, expected)
    eigenvalues = np.sort(np.linalg.eigvals(a))
    assert np.allclose(np.sort(np.linalg.eigvals(b)), eigenvalues, atol=1e-6)


def test_scaling_and_permutation() -> None:
    a = linexpr.Matrix(REDUCIBLE)
    b, scaling, permutation = linexpr.balance(
        a, return_scaling=True, return_permutation=True
    )
    _, (expected_scaling, _) = scipy.linalg.matrix_balance(REDUCIBLE, separate=True)
    assert np.allclose(scaling.todense(), expected_scaling)
    assert sorted(np.asarray(permutation.todense()).tolist()) == [0, 1, 2, 3]
    assert isinstance(b, linexpr.Matrix)


def test_flags() -> None:
    a = linexpr.Matrix(BADLY_SCALED)
    unchanged = linexpr.balance(a, False, False)
    assert jnp.allclose(unchanged.todense(), a.todense())
    b, scaling = linexpr.balance(a, True, False, return_scaling=True)
    assert not jnp.allclose(scaling.todense(), 1.0)
    assert jnp.max(jnp.abs(b.todense())) < jnp.max(jnp.abs(a.todense()))


def test_pencil() -> None:
    a = linexpr.Matrix(BADLY_SCALED)
    bm = linexpr.Matrix(np.diag([1.0, 2.0, 3.0]))
    aa, bb, t = linexpr.balance(a, bm, return_matrix=True)
    t = np.asarray(t.todense())
    assert np.allclose(np.linalg.solve(t, BADLY_SCALED @ t), aa.todense())
    assert np.allclose(np.linalg.solve(t, np.diag([1.0, 2.0, 3.0]) @ t), bb.todense())
    with pytest.raises(BadArgumentError):
        linexpr.balance(a, linexpr.Matrix(jnp.eye(2)))


def test_balance_inplace() -> None:
    a = linexpr.Matrix(BADLY_SCALED)
    expected = linexpr.balance(a).todense()
    assert linexpr.balance_inplace(a) is None
    assert jnp.allclose(a.todense(), expected)
    (scaling,) = linexpr.balance_inplace(linexpr.Matrix(REDUCIBLE), return_scaling=True)
    assert scaling.size == 4
    with pytest.raises(UnsupportedError):
        linexpr.balance_inplace(a + 1.0)


def test_non_square() -> None:
    with pytest.raises(BadSizeError):
        linexpr.balance(linexpr.Matrix(jnp.ones((2, 3))))


def test_empty() -> None:
    b = linexpr.balance(linexpr.Matrix(jnp.zeros((0, 0))))
    assert b.shape == (0, 0)
