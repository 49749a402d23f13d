"""Host-side reference executors for the transposition network.

`emulate_launch` runs the kernel program one lane at a time, suspending
each lane at the barrier, so lane scheduling can be shuffled to check
that results do not depend on it. `transposition_sort_reference` applies
whole phases with NumPy and is used to check the Pallas kernel.
"""

import numpy as np

from oddeven._src.descriptor import (
    EVEN_PHASE,
    LAUNCH_PHASES,
    ODD_PHASE,
    PassDescriptor,
    lane_pairs,
    make_pass_descriptor,
)


def _compare_swap(buffer, a, b, length):
  if a < length and b < length and buffer[a] > buffer[b]:
    buffer[a], buffer[b] = buffer[b], buffer[a]


def lane_program(buffer: np.ndarray, lane: int, length: int):
  """Kernel program for one lane. Yields once, at the barrier."""
  _compare_swap(buffer, *lane_pairs(lane, ODD_PHASE), length)
  yield
  _compare_swap(buffer, *lane_pairs(lane, EVEN_PHASE), length)


def _lane_order(rng, num_lanes, lane_order=None):
  if lane_order is not None:
    return lane_order
  if rng is None:
    return range(num_lanes)
  return rng.permutation(num_lanes)


def emulate_launch(
    buffer: np.ndarray,
    descriptor: PassDescriptor,
    rng: np.random.Generator | None = None,
    barrier: bool = True,
    lane_order=None,
) -> np.ndarray:
  """Run one launch over a 1D host buffer, in place.

  Args:
    buffer: 1D array of `descriptor.length` elements. Mutated.
    descriptor: Launch parameters.
    rng: Shuffles the order lanes run in, independently per phase. Lanes
      run in index order when omitted.
    barrier: When False, each lane runs both phases before the next lane
      starts, as if the barrier were missing.
    lane_order: Explicit order to run lanes in, used for both phases.
      Takes precedence over `rng`.

  Returns:
    `buffer`.
  """
  lanes = [lane_program(buffer, lane, descriptor.length)
           for lane in range(descriptor.num_lanes)]

  if not barrier:
    for lane in _lane_order(rng, len(lanes), lane_order):
      for _ in lanes[lane]:
        pass
    return buffer

  for _ in LAUNCH_PHASES:
    for lane in _lane_order(rng, len(lanes), lane_order):
      next(lanes[lane], None)
  return buffer


def emulate_sort(
    values,
    num_lanes_per_group: int | None = None,
    num_launches: int | None = None,
    rng: np.random.Generator | None = None,
    barrier: bool = True,
) -> np.ndarray:
  """Run the full pass sequence lane by lane on a copy of `values`."""
  buffer = np.array(values, copy=True)
  if buffer.ndim != 1:
    raise ValueError(f'emulate_sort expects a 1D buffer, got {buffer.ndim}D')
  descriptor = make_pass_descriptor(
      buffer.shape[0], num_lanes_per_group=num_lanes_per_group)
  if num_launches is None:
    num_launches = descriptor.num_launches
  for _ in range(num_launches):
    emulate_launch(buffer, descriptor, rng=rng, barrier=barrier)
  return buffer


def apply_phase(x: np.ndarray, phase: int) -> np.ndarray:
  """Apply one whole phase along the last axis of `x`, in place."""
  a = np.arange(phase, x.shape[-1] - 1, 2)
  b = a + 1
  left, right = x[..., a], x[..., b]
  swap = left > right
  x[..., a] = np.where(swap, right, left)
  x[..., b] = np.where(swap, left, right)
  return x


def phase_states(values, num_launches: int | None = None) -> list[np.ndarray]:
  """Buffer state after every phase, odd phase first within a launch."""
  x = np.array(values, copy=True)
  if num_launches is None:
    num_launches = make_pass_descriptor(x.shape[-1]).num_launches
  states = []
  for _ in range(num_launches):
    for phase in LAUNCH_PHASES:
      states.append(apply_phase(x, phase).copy())
  return states


def transposition_sort_reference(values, num_launches: int | None = None):
  """Sort along the last axis by applying whole phases with NumPy."""
  x = np.array(values, copy=True)
  if num_launches is None:
    num_launches = make_pass_descriptor(x.shape[-1]).num_launches
  for _ in range(num_launches):
    for phase in LAUNCH_PHASES:
      apply_phase(x, phase)
  return x
