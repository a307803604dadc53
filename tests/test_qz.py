# test_qz.py

"""Tests for the generalized Schur (QZ) decomposition."""

import jax
import jax.numpy as jnp
import numpy as np
import pytest

import linexpr
from linexpr._errors import (
    BadArgumentError,
    BadSizeError,
    ExternalLogicError,
    UnsupportedError,
)


def _random(n: int, seed: int) -> np.ndarray:
    return np.asarray(jax.random.normal(jax.random.PRNGKey(seed), (n, n), dtype=jnp.float64))


def _pencil(d: np.ndarray, seed: int = 0) -> tuple[np.ndarray, np.ndarray]:
    """Pencil ``(M D N, M N)`` whose eigenvalues are those of ``d``."""
    n = d.shape[0]
    m = _random(n, seed) + n * np.eye(n)
    k = _random(n, seed + 1) + n * np.eye(n)
    return m @ d @ k, m @ k


def _dense(*matrices: linexpr.Matrix) -> list[np.ndarray]:
    return [np.asarray(x.todense()) for x in matrices]


def _assert_reproduces(
    a: np.ndarray, b: np.ndarray, s: np.ndarray, t: np.ndarray, q: np.ndarray, z: np.ndarray
) -> None:
    n = a.shape[0]
    assert np.allclose(q @ s @ z.conj().T, a, atol=1e-8)
    assert np.allclose(q @ t @ z.conj().T, b, atol=1e-8)
    assert np.allclose(q.conj().T @ q, np.eye(n), atol=1e-10)
    assert np.allclose(z.conj().T @ z, np.eye(n), atol=1e-10)
    assert np.allclose(np.tril(t, -1), 0.0)


def _leading_eigenvalues(s: np.ndarray, t: np.ndarray, k: int) -> np.ndarray:
    return np.linalg.eigvals(np.linalg.solve(t[:k, :k], s[:k, :k]))


DIAGONAL = np.diag([1.5, -2.0, 3.0, -0.5])
ROTATION = np.array(
    [
        [0.0, -0.5, 0.0, 0.0],
        [0.5, 0.0, 0.0, 0.0],
        [0.0, 0.0, 3.0, 0.0],
        [0.0, 0.0, 0.0, -2.0],
    ]
)


@pytest.mark.parametrize("seed", [0, 3])
def test_real_reconstruction(seed: int) -> None:
    a, b = _random(5, seed), _random(5, seed + 10)
    s, t, q, z = _dense(*linexpr.qz_decompose(linexpr.Matrix(a), linexpr.Matrix(b)))
    _assert_reproduces(a, b, s, t, q, z)
    assert np.allclose(np.tril(s, -2), 0.0)


def test_complex_reconstruction() -> None:
    a = _random(4, 1) + 1j * _random(4, 2)
    b = _random(4, 3) + 1j * _random(4, 4)
    decomposition = linexpr.qz(linexpr.Matrix(a), linexpr.Matrix(b))
    s, t, q, z = _dense(*decomposition.factors())
    _assert_reproduces(a, b, s, t, q, z)
    assert np.allclose(np.tril(s, -1), 0.0)
    alpha, beta = _dense(decomposition.alpha, decomposition.beta)
    assert np.allclose(alpha, np.diag(s))
    assert np.allclose(beta, np.diag(t))


def test_eigenvalues_match_generalized_problem() -> None:
    a, b = _pencil(ROTATION)
    decomposition = linexpr.QZDecomposition(linexpr.Matrix(a), linexpr.Matrix(b))
    w = np.asarray(decomposition.eigenvalues().todense())
    assert np.allclose(np.sort_complex(w), np.sort_complex([-0.5j, 0.5j, 3.0, -2.0]))
    expected = np.asarray(linexpr.eigen_values(linexpr.Matrix(a), linexpr.Matrix(b)).todense())
    assert np.allclose(np.sort_complex(w), np.sort_complex(expected))


@pytest.mark.parametrize(
    ("selection", "count", "predicate"),
    [
        ("lhp", 2, lambda w: w.real < 0),
        ("rhp", 2, lambda w: w.real > 0),
        ("udi", 1, lambda w: np.abs(w) < 1),
        ("udo", 3, lambda w: np.abs(w) >= 1),
    ],
)
def test_selection_moves_eigenvalues_first(selection: str, count: int, predicate) -> None:  # noqa: ANN001
    a, b = _pencil(DIAGONAL)
    decomposition = linexpr.qz(linexpr.Matrix(a), linexpr.Matrix(b), selection)
    s, t, q, z = _dense(*decomposition.factors())
    _assert_reproduces(a, b, s, t, q, z)
    w = np.asarray(decomposition.eigenvalues().todense())
    assert np.all(predicate(w[:count]))
    assert not np.any(predicate(w[count:]))


def test_complex_pair_is_moved_as_block() -> None:
    a, b = _pencil(ROTATION, seed=4)
    s, t, q, z = linexpr.qz_decompose(linexpr.Matrix(a), linexpr.Matrix(b))
    s, t, q, z = _dense(*linexpr.qz_reorder(s, t, q, z, "udi"))
    _assert_reproduces(a, b, s, t, q, z)
    leading = _leading_eigenvalues(s, t, 2)
    assert np.allclose(np.sort_complex(leading), [-0.5j, 0.5j])


def test_mask_selection() -> None:
    a, b = _pencil(DIAGONAL, seed=2)
    decomposition = linexpr.qz(linexpr.Matrix(a), linexpr.Matrix(b))
    w = np.asarray(decomposition.eigenvalues().todense())
    target = int(np.argmin(np.abs(w - 3.0)))
    mask = np.zeros(4, dtype=bool)
    mask[target] = True
    decomposition.reorder(linexpr.Vector(jnp.asarray(mask)))
    assert np.isclose(decomposition.eigenvalues().todense()[0], 3.0)
    with pytest.raises(BadSizeError):
        decomposition.reorder([True, False])


def test_inplace() -> None:
    a, b = _pencil(DIAGONAL, seed=6)
    s, t = linexpr.Matrix(jnp.asarray(a)), linexpr.Matrix(jnp.asarray(b))
    q, z = linexpr.Matrix(jnp.zeros((1, 1))), linexpr.Matrix(jnp.zeros((1, 1)))
    linexpr.qz_decompose_inplace(s, t, q, z)
    assert q.shape == (4, 4)
    _assert_reproduces(a, b, *_dense(s, t, q, z))

    linexpr.qz_reorder_inplace(s, t, q, z, "lhp")
    s_d, t_d, q_d, z_d = _dense(s, t, q, z)
    _assert_reproduces(a, b, s_d, t_d, q_d, z_d)
    assert np.all(np.diag(s_d)[:2] / np.diag(t_d)[:2] < 0)
    with pytest.raises(UnsupportedError):
        linexpr.qz_reorder_inplace(s, t, q, jnp.asarray(z_d), "lhp")


def test_infinite_eigenvalue() -> None:
    a = linexpr.Matrix(jnp.diag(jnp.array([1.0, 2.0])))
    b = linexpr.Matrix(jnp.diag(jnp.array([0.0, 1.0])))
    w = np.asarray(linexpr.qz(a, b).eigenvalues().todense())
    assert np.sum(np.isinf(w)) == 1
    assert np.any(np.isclose(w, 2.0))


def test_errors() -> None:
    with pytest.raises(ExternalLogicError):
        _ = linexpr.QZDecomposition().S
    with pytest.raises(BadArgumentError):
        linexpr.QZDecomposition(linexpr.Matrix(jnp.eye(2)))
    with pytest.raises(BadArgumentError):
        linexpr.qz(linexpr.Matrix(jnp.ones((2, 3))), linexpr.Matrix(jnp.ones((2, 3))))
    with pytest.raises(BadSizeError):
        linexpr.qz(linexpr.Matrix(jnp.eye(2)), linexpr.Matrix(jnp.eye(3)))
    with pytest.raises(BadArgumentError):
        linexpr.qz(linexpr.Matrix(jnp.eye(2)), linexpr.Matrix(jnp.eye(2)), "left")


def test_empty_pencil() -> None:
    empty = linexpr.Matrix(jnp.zeros((0, 0)))
    s, t, q, z = linexpr.qz_decompose(empty, empty, "lhp")
    assert s.shape == t.shape == q.shape == z.shape == (0, 0)
