import functools

import jax
import jax.numpy as jnp
from jax import lax
from jax.experimental import pallas as pl

from oddeven._src.descriptor import EVEN_PHASE, ODD_PHASE, PassDescriptor


### Compare-Swap Phase

def compare_swap_phase(x, phase: int, num_lanes: int):
  """One phase of the odd-even transposition network.

  Lane `i` owns the pair `(2*i + phase, 2*i + phase + 1)` along the last
  axis and swaps it when the left element is greater. Pairs reaching past
  the end of the buffer, and lanes beyond `num_lanes`, leave their
  elements untouched. No two lanes share an index within a phase, so the
  result does not depend on lane order.

  Args:
    x: Array of shape (rows, length). Each row is an independent buffer.
    phase: ODD_PHASE or EVEN_PHASE, fixed at trace time.
    num_lanes: Lanes in the launch grid.

  Returns:
    Array with the same shape and dtype as `x`.
  """
  length = x.shape[-1]
  index = lax.broadcasted_iota(jnp.int32, x.shape, x.ndim - 1)
  offset = index - phase
  lane = offset // 2
  is_left = (offset % 2) == 0
  partner = jnp.where(is_left, index + 1, index - 1)

  active = (
      (lane >= 0) & (lane < num_lanes)
      & (partner >= 0) & (partner < length)
  )
  partner_vals = jnp.take_along_axis(x, partner % length, axis=-1)
  swap = jnp.where(is_left, x > partner_vals, partner_vals > x)
  return jnp.where(active & swap, partner_vals, x)


### Kernel

def _transposition_pass_refs(x_ref, o_ref, *, num_lanes: int):
  """Pallas kernel for one launch: odd phase, barrier, even phase."""
  # Barrier: the even phase consumes the whole odd-phase result, including
  # pairs written by neighbouring lanes.
  odd = compare_swap_phase(x_ref[...], ODD_PHASE, num_lanes)
  o_ref[...] = compare_swap_phase(odd, EVEN_PHASE, num_lanes)


@functools.partial(
    jax.jit,
    static_argnames=('descriptor', 'interpret'),
)
def transposition_pass(
    operand: jax.Array,
    descriptor: PassDescriptor,
    interpret: bool = False,
) -> jax.Array:
  """Launch the compare-swap kernel once over every row of `operand`.

  The element buffer is aliased to the kernel output, so within a traced
  loop of launches XLA updates it in place.

  Args:
    operand: Array of shape (rows, descriptor.length).
    descriptor: Launch parameters.
    interpret: Run the kernel through the Pallas interpreter.

  Returns:
    The buffer after one odd and one even phase.
  """
  if operand.shape[-1] != descriptor.length:
    raise ValueError(
        f'Buffer length {operand.shape[-1]} does not match descriptor '
        f'length {descriptor.length}')
  return pl.pallas_call(
      functools.partial(_transposition_pass_refs,
                        num_lanes=descriptor.num_lanes),
      out_shape=jax.ShapeDtypeStruct(operand.shape, operand.dtype),
      input_output_aliases={0: 0},
      interpret=interpret,
  )(operand)
