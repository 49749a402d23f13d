import concurrent.futures
import logging

import jax
import numpy as np

from oddeven._src.device import synchronize
from oddeven._src.errors import MappingError

logger = logging.getLogger(__name__)


def _map_host_view(source: jax.Array) -> np.ndarray:
  try:
    host = np.asarray(source)
  except jax.errors.JaxRuntimeError as e:
    raise MappingError(f'Failed to map staging buffer: {e}') from e
  view = host.view()
  view.flags.writeable = False
  return view


class StagingBuffer:
  """Host-visible mirror of a device element buffer.

  Usage::

    staging = StagingBuffer(out.shape, out.dtype)
    staging.copy_from(out)
    with staging:
      future = staging.map_read()
      values = future.result()

  The mapped view is read-only and becomes invalid after `unmap`.
  """

  def __init__(self, shape, dtype):
    self.shape = tuple(shape)
    self.dtype = np.dtype(dtype)
    self._source = None
    self._future = None

  @property
  def is_mapped(self) -> bool:
    return self._future is not None

  def copy_from(self, buffer: jax.Array, timeout: float | None = None):
    """Copy a device buffer into this staging buffer.

    Waits for all device work producing `buffer` first, so the copy can
    never observe a launch in flight.

    Raises:
      MappingError: The staging buffer is currently mapped.
      ValueError: `buffer` has a different shape or dtype.
      DeviceLostError: The device failed before `buffer` was complete.
    """
    if self.is_mapped:
      raise MappingError('Cannot copy into a mapped staging buffer')
    if tuple(buffer.shape) != self.shape or buffer.dtype != self.dtype:
      raise ValueError(
          f'Staging buffer is {self.shape} {self.dtype}, '
          f'got {buffer.shape} {buffer.dtype}')
    buffer = synchronize(buffer, timeout=timeout)
    buffer.copy_to_host_async()
    self._source = buffer

  def map_read(self) -> concurrent.futures.Future:
    """Request read access. Poll or wait on the returned future.

    The future resolves to a read-only NumPy view, or raises MappingError.
    """
    if self._source is None:
      raise MappingError('Nothing has been copied into the staging buffer')
    if self.is_mapped:
      raise MappingError('Staging buffer is already mapped')
    logger.debug('mapping staging buffer %s %s', self.shape, self.dtype)
    # One worker per request, so a hung map never delays a later retry
    executor = concurrent.futures.ThreadPoolExecutor(
        max_workers=1, thread_name_prefix='oddeven-map')
    try:
      self._future = executor.submit(_map_host_view, self._source)
    finally:
      executor.shutdown(wait=False)
    return self._future

  def poll(self) -> bool:
    """True once a pending map request has resolved."""
    return self._future is not None and self._future.done()

  @property
  def mapped(self) -> np.ndarray:
    if not self.poll():
      raise MappingError('Staging buffer is not mapped')
    return self._future.result()

  def unmap(self):
    """Release the mapped view. The staging buffer can then be reused.

    A map request still pending is cancelled if it has not started, and
    its result is discarded otherwise.
    """
    if self._future is not None:
      self._future.cancel()
    self._future = None

  def __enter__(self):
    return self

  def __exit__(self, *exc_info):
    self.unmap()


def retrieve(
    buffer: jax.Array,
    *,
    timeout: float | None = None,
    staging: StagingBuffer | None = None,
) -> np.ndarray:
  """Copy a device buffer back to host memory.

  Args:
    buffer: Device array, typically the output of `sort`.
    timeout: Seconds to wait for device work and again for the mapping.
    staging: Staging buffer to reuse. A new one is created if omitted.

  Returns:
    A host-owned NumPy copy of `buffer`.

  Raises:
    DeviceLostError: The device failed; `buffer` must not be read.
    SynchronizationTimeout: Device work did not finish within `timeout`.
    MappingError: The map request failed or timed out. `buffer` is
      unchanged and retrieval may be retried.
  """
  buffer = synchronize(buffer, timeout=timeout)
  if staging is None:
    staging = StagingBuffer(buffer.shape, buffer.dtype)

  staging.copy_from(buffer)
  future = staging.map_read()
  try:
    try:
      mapped = future.result(timeout=timeout)
    except concurrent.futures.TimeoutError as e:
      raise MappingError(
          f'Staging buffer was not mapped within {timeout}s') from e
    return np.array(mapped, copy=True)
  finally:
    staging.unmap()
