"""Errors raised by the sort engine.

Configuration problems are detected before any launch is issued.
Device failures surface at the next synchronization point. Readback
failures leave the device buffer untouched and may be retried.
"""


class SortError(Exception):
  """Base class for sort engine errors."""


class ConfigurationError(SortError, ValueError):
  """Launch parameters cannot be satisfied by the target accelerator."""


class DeviceLostError(SortError, RuntimeError):
  """The accelerator failed while work was in flight.

  The contents of the element buffer are undefined after this error.
  """


class SynchronizationTimeout(DeviceLostError):
  """The host gave up waiting for device work to complete."""


class MappingError(SortError, RuntimeError):
  """A staging buffer could not be mapped for reading."""
