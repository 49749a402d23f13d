import functools
import logging

import jax
import jax.numpy as jnp
import numpy as np
from jax import lax

from oddeven._src.descriptor import PassDescriptor, make_pass_descriptor
from oddeven._src.device import DeviceLimits, synchronize
from oddeven._src.errors import ConfigurationError
from oddeven._src.kernel import transposition_pass
from oddeven._src.utils import (
    canonicalize_operand,
    float_to_sortable_int,
    is_cpu_platform,
    is_sortable_dtype,
    sortable_int_to_float,
)

logger = logging.getLogger(__name__)


@functools.partial(
    jax.jit,
    static_argnames=('descriptor', 'num_launches', 'interpret')
)
def _run_launches(
    operand: jax.Array,
    descriptor: PassDescriptor,
    num_launches: int,
    interpret: bool,
) -> jax.Array:
  """Issue `num_launches` kernel launches back to back.

  Each launch consumes the buffer produced by the previous one, so
  launches never overlap or reorder.
  """
  def _launch(i, x):
    del i
    return transposition_pass(x, descriptor, interpret=interpret)

  return lax.fori_loop(0, num_launches, _launch, operand)


def _prepare(operand, num_lanes_per_group, limits, num_launches):
  """Validate everything up front so a bad call performs no device work."""
  if np.ndim(operand) not in (1, 2):
    raise ConfigurationError(
        f'Element buffers must be 1D or 2D, got {np.ndim(operand)}D')
  x, shape = canonicalize_operand(operand)
  if not is_sortable_dtype(x.dtype):
    raise ConfigurationError(f'Cannot sort elements of dtype {x.dtype}')

  descriptor = make_pass_descriptor(
      shape[-1],
      num_lanes_per_group=num_lanes_per_group,
      limits=limits,
  )
  if num_launches is None:
    num_launches = descriptor.num_launches
  elif num_launches < 0:
    raise ConfigurationError(
        f'num_launches must be non-negative, got {num_launches}')
  return x, shape, descriptor, num_launches


def _to_keys(x):
  if jnp.issubdtype(x.dtype, jnp.floating):
    return float_to_sortable_int(x)
  return x


def _from_keys(keys, dtype, shape):
  if jnp.issubdtype(dtype, jnp.floating):
    keys = sortable_int_to_float(keys, dtype)
  return keys.reshape(shape)


def sort(
    operand,
    *,
    num_lanes_per_group: int | None = None,
    limits: DeviceLimits | None = None,
    num_launches: int | None = None,
    timeout: float | None = None,
    interpret: bool | None = None,
) -> jax.Array:
  """Sort elements with the odd-even transposition network.

  A 1D operand is one element buffer. A 2D operand holds one buffer per
  row; every row is sorted independently along the last axis.

  Args:
    operand: Integer or floating array of rank 1 or 2.
    num_lanes_per_group: Lanes per group. Must evenly divide the platform
      group capacity. Defaults to DEFAULT_LANES_PER_GROUP.
    limits: Platform dispatch limits. Queried from the default device when
      omitted.
    num_launches: Override the number of launches. The default,
      ceil(length / 2), sorts every input.
    timeout: Seconds to wait for the final synchronization.
    interpret: Run kernels through the Pallas interpreter. Defaults to
      True on CPU.

  Returns:
    Array with the shape and dtype of `operand`, sorted ascending. NaNs
    sort last and -0.0 sorts before +0.0.

  Raises:
    ConfigurationError: Before any launch, if the parameters are invalid.
    DeviceLostError: If the device fails before the launches complete.
  """
  x, shape, descriptor, num_launches = _prepare(
      operand, num_lanes_per_group, limits, num_launches)
  if num_launches == 0 or x.size == 0:
    logger.debug('length=%d needs no launches', descriptor.length)
    return jnp.asarray(operand)

  if interpret is None:
    interpret = is_cpu_platform()

  logger.debug(
      'sorting %d row(s) of length %d: %d launch(es) over grid %s',
      x.shape[0], descriptor.length, num_launches, descriptor.grid)
  keys = _run_launches(_to_keys(x), descriptor, num_launches, interpret)
  return synchronize(_from_keys(keys, x.dtype, shape), timeout=timeout)


def trace_passes(
    operand,
    *,
    num_lanes_per_group: int | None = None,
    limits: DeviceLimits | None = None,
    num_launches: int | None = None,
    timeout: float | None = None,
    interpret: bool | None = None,
) -> list[jax.Array]:
  """Sort like `sort`, synchronizing after every launch.

  Returns:
    The buffer state after each launch, in launch order. Empty when no
    launches are needed.
  """
  x, shape, descriptor, num_launches = _prepare(
      operand, num_lanes_per_group, limits, num_launches)
  if num_launches == 0 or x.size == 0:
    return []

  if interpret is None:
    interpret = is_cpu_platform()

  keys = _to_keys(x)
  states = []
  for i in range(num_launches):
    keys = synchronize(
        transposition_pass(keys, descriptor, interpret=interpret),
        timeout=timeout)
    logger.debug('launch %d/%d complete', i + 1, num_launches)
    states.append(_from_keys(keys, x.dtype, shape))
  return states
