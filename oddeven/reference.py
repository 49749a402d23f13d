"""Host-side reference executors for the transposition network."""

from oddeven._src.reference import lane_program as lane_program
from oddeven._src.reference import emulate_launch as emulate_launch
from oddeven._src.reference import emulate_sort as emulate_sort
from oddeven._src.reference import apply_phase as apply_phase
from oddeven._src.reference import phase_states as phase_states
from oddeven._src.reference import transposition_sort_reference as transposition_sort_reference

__all__ = [
    "lane_program",
    "emulate_launch",
    "emulate_sort",
    "apply_phase",
    "phase_states",
    "transposition_sort_reference",
]
