"""Odd-even transposition sort on accelerators, written in Pallas.

The host schedules ceil(N/2) launches of a compare-swap kernel. Each
launch runs an odd phase and an even phase of the transposition
network, separated by a barrier.
"""

from oddeven._src.descriptor import EVEN_PHASE as EVEN_PHASE
from oddeven._src.descriptor import ODD_PHASE as ODD_PHASE
from oddeven._src.descriptor import PassDescriptor as PassDescriptor
from oddeven._src.descriptor import lane_pairs as lane_pairs
from oddeven._src.descriptor import make_pass_descriptor as make_pass_descriptor
from oddeven._src.descriptor import num_launches_required as num_launches_required
from oddeven._src.device import DeviceLimits as DeviceLimits
from oddeven._src.device import query_device_limits as query_device_limits
from oddeven._src.device import synchronize as synchronize
from oddeven._src.errors import SortError as SortError
from oddeven._src.errors import ConfigurationError as ConfigurationError
from oddeven._src.errors import DeviceLostError as DeviceLostError
from oddeven._src.errors import SynchronizationTimeout as SynchronizationTimeout
from oddeven._src.errors import MappingError as MappingError
from oddeven._src.kernel import compare_swap_phase as compare_swap_phase
from oddeven._src.kernel import transposition_pass as transposition_pass
from oddeven._src.retrieve import StagingBuffer as StagingBuffer
from oddeven._src.retrieve import retrieve as retrieve
from oddeven._src.schedule import sort as sort
from oddeven._src.schedule import trace_passes as trace_passes

__all__ = [
    "EVEN_PHASE",
    "ODD_PHASE",
    "PassDescriptor",
    "lane_pairs",
    "make_pass_descriptor",
    "num_launches_required",
    "DeviceLimits",
    "query_device_limits",
    "synchronize",
    "SortError",
    "ConfigurationError",
    "DeviceLostError",
    "SynchronizationTimeout",
    "MappingError",
    "compare_swap_phase",
    "transposition_pass",
    "StagingBuffer",
    "retrieve",
    "sort",
    "trace_passes",
]
