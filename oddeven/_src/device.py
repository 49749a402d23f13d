import concurrent.futures
import dataclasses
import logging

import jax

from oddeven._src.errors import DeviceLostError, SynchronizationTimeout
from oddeven._src.utils import MAX_GROUPS_PER_AXIS, MAX_LANES_PER_GROUP

logger = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True)
class DeviceLimits:
  """Dispatch limits of an accelerator.

  Attributes:
    max_lanes_per_group: Largest number of lanes that can share a barrier.
    max_groups_per_axis: Largest number of groups along one grid axis.
  """
  max_lanes_per_group: int = MAX_LANES_PER_GROUP
  max_groups_per_axis: int = MAX_GROUPS_PER_AXIS


# JAX does not report workgroup limits, so every platform gets the
# conservative bound.
_PLATFORM_LIMITS = {
    'cpu': DeviceLimits(),
    'gpu': DeviceLimits(),
    'cuda': DeviceLimits(),
    'rocm': DeviceLimits(),
    'tpu': DeviceLimits(),
}


def query_device_limits(device: jax.Device | None = None) -> DeviceLimits:
  """Return dispatch limits for `device` (default: first local device)."""
  if device is None:
    device = jax.local_devices()[0]
  return _PLATFORM_LIMITS.get(device.platform, DeviceLimits())


def _block(buffer):
  try:
    return jax.block_until_ready(buffer)
  except jax.errors.JaxRuntimeError as e:
    raise DeviceLostError(f'Device failed before work completed: {e}') from e


def synchronize(buffer, timeout: float | None = None):
  """Wait until all device work producing `buffer` has completed.

  Args:
    buffer: Device array (or pytree of arrays) to wait on.
    timeout: Seconds to wait before giving up. None waits forever.

  Returns:
    `buffer`, now safe to read.

  Raises:
    DeviceLostError: The runtime reported a failure.
    SynchronizationTimeout: `timeout` expired first.
  """
  if timeout is None:
    return _block(buffer)

  executor = concurrent.futures.ThreadPoolExecutor(max_workers=1)
  try:
    future = executor.submit(_block, buffer)
    try:
      return future.result(timeout=timeout)
    except concurrent.futures.TimeoutError as e:
      logger.debug('synchronize timed out after %ss', timeout)
      raise SynchronizationTimeout(
          f'Device work did not complete within {timeout}s') from e
  finally:
    executor.shutdown(wait=False)
