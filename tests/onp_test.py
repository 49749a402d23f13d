import jax
import jax.numpy as jnp
import numpy as np
import pytest

from oddeven import onp
from oddeven.utils import is_cpu_platform


def test_sort():
    interpret = is_cpu_platform()
    key = jax.random.PRNGKey(0)
    a = jax.random.randint(key, (2, 16), 0, 100)

    expected = jnp.sort(a, axis=-1)
    result = onp.sort(a, axis=-1, interpret=interpret)

    np.testing.assert_array_equal(result, expected)


def test_multidimensional_reshape():
    interpret = is_cpu_platform()
    key = jax.random.PRNGKey(2)
    shape = (2, 2, 2, 16)
    a = jax.random.randint(key, shape, 0, 100)

    expected = jnp.sort(a, axis=-1)
    result = onp.sort(a, axis=-1, interpret=interpret)

    assert result.shape == shape
    np.testing.assert_array_equal(result, expected)


def test_1d_array():
    interpret = is_cpu_platform()
    a = jax.random.randint(jax.random.PRNGKey(3), (17,), 0, 100)

    result = onp.sort(a, interpret=interpret)

    assert result.shape == (17,)
    np.testing.assert_array_equal(result, jnp.sort(a))


def test_axis_none_flattens():
    interpret = is_cpu_platform()
    a = jax.random.randint(jax.random.PRNGKey(4), (3, 5), 0, 100)

    result = onp.sort(a, axis=None, interpret=interpret)

    assert result.shape == (15,)
    np.testing.assert_array_equal(result, jnp.sort(a, axis=None))


def test_kind_and_order_ignored():
    interpret = is_cpu_platform()
    a = jnp.array([3, 1, 2], dtype=jnp.int32)
    result = onp.sort(a, kind="stable", order=None, interpret=interpret)
    np.testing.assert_array_equal(result, [1, 2, 3])


def test_empty_array():
    a = jnp.zeros((2, 0), dtype=jnp.int32)
    assert onp.sort(a).shape == (2, 0)


def test_invalid_inputs():
    with pytest.raises(ValueError, match="scalar"):
        onp.sort(jnp.array(1))
    with pytest.raises(ValueError, match="last axis"):
        onp.sort(jnp.zeros((4, 4)), axis=0)
