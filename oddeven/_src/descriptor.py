import dataclasses
import logging

from oddeven._src.device import DeviceLimits, query_device_limits
from oddeven._src.errors import ConfigurationError
from oddeven._src.utils import DEFAULT_LANES_PER_GROUP, MAX_LENGTH, cdiv

logger = logging.getLogger(__name__)

EVEN_PHASE = 0
ODD_PHASE = 1

# Order of phases within one launch
LAUNCH_PHASES = (ODD_PHASE, EVEN_PHASE)


def num_launches_required(length: int) -> int:
  """Launches needed to sort any permutation of `length` elements.

  Each launch runs two phases and `length` phases always suffice.
  """
  if length <= 1:
    return 0
  return cdiv(length, 2)


def lane_pairs(lane: int, phase: int) -> tuple[int, int]:
  """Buffer indices compared by `lane` in `phase`."""
  a = 2 * lane + phase
  return a, a + 1


@dataclasses.dataclass(frozen=True)
class PassDescriptor:
  """Launch parameters for sorting a buffer of `length` elements.

  Attributes:
    length: Number of elements in each buffer.
    num_lanes_per_group: Lanes sharing one barrier.
    num_groups: Groups along the single grid axis.
    num_phases: Phases of the transposition network that sort any input.
    num_launches: Kernel launches issued, two phases per launch.
  """
  length: int
  num_lanes_per_group: int
  num_groups: int
  num_phases: int
  num_launches: int

  def __post_init__(self):
    if self.num_groups * self.num_lanes_per_group * 2 < self.length:
      raise ConfigurationError(
          f'{self.num_groups} groups of {self.num_lanes_per_group} lanes '
          f'cannot cover {self.length} elements')

  @property
  def num_lanes(self) -> int:
    return self.num_groups * self.num_lanes_per_group

  @property
  def grid(self) -> tuple[int, int, int]:
    return (self.num_groups, 1, 1)


def make_pass_descriptor(
    length: int,
    num_lanes_per_group: int | None = None,
    limits: DeviceLimits | None = None,
) -> PassDescriptor:
  """Validate launch parameters for `length` and build a descriptor.

  Raises:
    ConfigurationError: The group size or grid exceeds `limits`, or
      `length` is outside the lane index range.
  """
  if limits is None:
    limits = query_device_limits()
  if num_lanes_per_group is None:
    num_lanes_per_group = min(DEFAULT_LANES_PER_GROUP,
                              limits.max_lanes_per_group)

  if num_lanes_per_group < 1:
    raise ConfigurationError(
        f'num_lanes_per_group must be positive, got {num_lanes_per_group}')
  if num_lanes_per_group > limits.max_lanes_per_group:
    raise ConfigurationError(
        f'num_lanes_per_group={num_lanes_per_group} exceeds the platform '
        f'maximum of {limits.max_lanes_per_group}')
  if limits.max_lanes_per_group % num_lanes_per_group:
    raise ConfigurationError(
        f'num_lanes_per_group={num_lanes_per_group} must evenly divide '
        f'{limits.max_lanes_per_group}')
  if length < 0 or length > MAX_LENGTH:
    raise ConfigurationError(
        f'length={length} is not representable by the lane index type')

  num_launches = num_launches_required(length)
  num_groups = cdiv(length, 2 * num_lanes_per_group)
  if num_groups > limits.max_groups_per_axis:
    raise ConfigurationError(
        f'length={length} needs {num_groups} groups of '
        f'{num_lanes_per_group} lanes, more than the platform maximum of '
        f'{limits.max_groups_per_axis}')

  descriptor = PassDescriptor(
      length=length,
      num_lanes_per_group=num_lanes_per_group,
      num_groups=num_groups,
      num_phases=length,
      num_launches=num_launches,
  )
  logger.debug('built %s', descriptor)
  return descriptor
