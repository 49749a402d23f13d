import math
import warnings

import jax
import jax.numpy as jnp
import numpy as np
from jax import lax

# Conservative accelerator limits, also the WebGPU/Vulkan defaults
MAX_LANES_PER_GROUP = 256
MAX_GROUPS_PER_AXIS = 65535

DEFAULT_LANES_PER_GROUP = 256

# Lane indices are computed in int32
MAX_LENGTH = int(np.iinfo(np.int32).max)


def is_cpu_platform():
  is_cpu = jax.default_backend() == "cpu"
  if is_cpu:
    warnings.warn("Running on CPU, interpret=True will be used.")
  return is_cpu


def cdiv(a: int, b: int) -> int:
  """Ceiling division of non-negative ints."""
  return -(-a // b)


def log2(x: int) -> int:
  """Returns ceiling of log2(x)."""
  return math.ceil(math.log2(x))


def get_dtype_info(x):
  """Get finfo or iinfo for array dtype."""
  dtype = x.dtype
  if jnp.issubdtype(dtype, jnp.floating):
    return jnp.finfo(dtype)
  elif jnp.issubdtype(dtype, jnp.integer):
    return jnp.iinfo(dtype)
  else:
    raise ValueError('Only int and float supported')


def is_sortable_dtype(dtype) -> bool:
  """Fixed-width integer and floating dtypes can be compare-swapped."""
  return (jnp.issubdtype(dtype, jnp.integer)
          or jnp.issubdtype(dtype, jnp.floating))


def canonicalize_operand(operand):
  """Convert operand to a 2D (rows, length) array.

  A 1D operand becomes a single row. Each row is sorted independently.

  Returns:
    Tuple of (2D array, original shape).
  """
  x = jnp.asarray(operand)
  shape = x.shape
  if x.ndim == 1:
    x = x[None, :]
  elif x.ndim != 2:
    raise ValueError(f'Only 1D or 2D inputs supported, got {x.ndim}D')
  return x, shape


### Float-Int Conversion for Sortable Representation

def _int_dtype_for(dtype):
  return jnp.dtype(f'int{jnp.dtype(dtype).itemsize * 8}')


def standardize(x):
  """Standardize float values for sorting.

  Every NaN becomes the canonical positive quiet NaN, so NaNs sort last.
  """
  return jnp.where(jnp.isnan(x), jnp.array(jnp.nan, x.dtype), x)


def float_to_sortable_int(x: jax.Array, standardize_input=True) -> jax.Array:
  """Transform float bits into a same-width int with the same ordering.

  Non-negative floats keep their bit pattern. Negative floats have their
  magnitude bits flipped, so larger magnitudes map to smaller ints and
  -0.0 maps just below +0.0.
  """
  if standardize_input:
    x = standardize(x)
  int_dtype = _int_dtype_for(x.dtype)
  i = lax.bitcast_convert_type(x, int_dtype)
  magnitude_bits = jnp.array(jnp.iinfo(int_dtype).max, int_dtype)
  return jnp.where(i < 0, i ^ magnitude_bits, i)


def sortable_int_to_float(i: jax.Array, dtype) -> jax.Array:
  """Inverse transformation from sortable int back to `dtype`."""
  magnitude_bits = jnp.array(jnp.iinfo(i.dtype).max, i.dtype)
  i = jnp.where(i < 0, i ^ magnitude_bits, i)
  return lax.bitcast_convert_type(i, dtype)
