# test_numeric.py

import jax.numpy as jnp
import numpy as np
import pytest

import linexpr


def test_eps_defaults_to_double() -> None:
    assert linexpr.eps() == np.finfo(np.float64).eps
    assert linexpr.eps(jnp.float32) == np.finfo(np.float32).eps
    assert linexpr.eps(np.dtype(np.complex128)) == np.finfo(np.float64).eps


@pytest.mark.parametrize(
    ("x", "expected"),
    [
        (1.0, 2.0**-52),
        (-1.0, 2.0**-52),
        (2.0, 2.0**-51),
        (1000.0, 2.0**-43),
    ],
)
def test_eps_of_value(x, expected) -> None:
    assert linexpr.eps(x) == expected


def test_eps_edge_values() -> None:
    assert np.isnan(linexpr.eps(float("inf")))
    assert np.isnan(linexpr.eps(float("nan")))
    assert linexpr.eps(0.0) == np.finfo(np.float64).smallest_subnormal
    assert linexpr.eps(np.float32(1.0)) == np.finfo(np.float32).eps


def test_realmin_and_realmax() -> None:
    assert linexpr.realmin() == np.finfo(np.float64).tiny
    assert linexpr.realmax() == np.finfo(np.float64).max
    assert linexpr.realmax(jnp.float32) == np.finfo(np.float32).max
    assert linexpr.realmin(jnp.complex64) == np.finfo(np.float32).tiny
