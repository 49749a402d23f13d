"""Oddeven utilities module.

Public API for utility functions and constants.
"""

# The "as <name>" syntax is required for proper re-export
from oddeven._src.utils import MAX_LANES_PER_GROUP as MAX_LANES_PER_GROUP
from oddeven._src.utils import MAX_GROUPS_PER_AXIS as MAX_GROUPS_PER_AXIS
from oddeven._src.utils import DEFAULT_LANES_PER_GROUP as DEFAULT_LANES_PER_GROUP
from oddeven._src.utils import MAX_LENGTH as MAX_LENGTH
from oddeven._src.utils import is_cpu_platform as is_cpu_platform
from oddeven._src.utils import cdiv as cdiv
from oddeven._src.utils import log2 as log2
from oddeven._src.utils import get_dtype_info as get_dtype_info
from oddeven._src.utils import is_sortable_dtype as is_sortable_dtype
from oddeven._src.utils import canonicalize_operand as canonicalize_operand
from oddeven._src.utils import standardize as standardize
from oddeven._src.utils import float_to_sortable_int as float_to_sortable_int
from oddeven._src.utils import sortable_int_to_float as sortable_int_to_float

__all__ = [
    "MAX_LANES_PER_GROUP",
    "MAX_GROUPS_PER_AXIS",
    "DEFAULT_LANES_PER_GROUP",
    "MAX_LENGTH",
    "is_cpu_platform",
    "cdiv",
    "log2",
    "get_dtype_info",
    "is_sortable_dtype",
    "canonicalize_operand",
    "standardize",
    "float_to_sortable_int",
    "sortable_int_to_float",
]
