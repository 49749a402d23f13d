import numpy as np
import pytest

import oddeven
from oddeven import make_pass_descriptor
from oddeven.reference import (
    emulate_launch,
    emulate_sort,
    lane_program,
    phase_states,
    transposition_sort_reference,
)
from oddeven.test_utils import is_permutation, is_sorted
from oddeven.utils import is_cpu_platform


def test_lane_program_stops_at_barrier():
    buffer = np.array([3, 2, 1, 0], dtype=np.int32)
    program = lane_program(buffer, 0, 4)
    next(program)
    # Odd pair (1, 2) done, even pair (0, 1) not yet
    np.testing.assert_array_equal(buffer, [3, 1, 2, 0])
    with pytest.raises(StopIteration):
        next(program)
    np.testing.assert_array_equal(buffer, [1, 3, 2, 0])


@pytest.mark.parametrize("length", [0, 1, 2, 3, 6, 7])
def test_emulate_sort_shuffled_small(length):
    for perm in np.random.default_rng(length).permuted(
            np.tile(np.arange(length), (20, 1)), axis=1):
        np.testing.assert_array_equal(
            emulate_sort(perm, num_lanes_per_group=2), np.arange(length))


@pytest.mark.parametrize("seed", range(8))
@pytest.mark.parametrize("length,num_lanes_per_group", [(9, 1), (16, 2), (31, 4)])
def test_lane_order_does_not_change_results(seed, length, num_lanes_per_group):
    rng = np.random.default_rng(seed)
    values = rng.integers(0, 5, size=length).astype(np.int32)
    descriptor = make_pass_descriptor(length, num_lanes_per_group=num_lanes_per_group)

    in_order = values.copy()
    shuffled = values.copy()
    for _ in range(descriptor.num_launches):
        emulate_launch(in_order, descriptor)
        emulate_launch(shuffled, descriptor, rng=rng)
        # Intermediate state after every launch is schedule independent
        np.testing.assert_array_equal(shuffled, in_order)
    assert is_sorted(shuffled)


@pytest.mark.parametrize("seed", range(4))
def test_emulation_matches_kernel_launch_by_launch(seed):
    rng = np.random.default_rng(seed)
    values = rng.permutation(23).astype(np.int32)
    descriptor = make_pass_descriptor(23, num_lanes_per_group=2)

    states = oddeven.trace_passes(values, num_lanes_per_group=2,
                                  interpret=is_cpu_platform())
    buffer = values.copy()
    for state in states:
        emulate_launch(buffer, descriptor, rng=rng)
        np.testing.assert_array_equal(state, buffer)


def test_missing_barrier_still_permutes():
    rng = np.random.default_rng(0)
    values = rng.permutation(32).astype(np.int32)
    out = emulate_sort(values, num_lanes_per_group=4, rng=rng, barrier=False)
    assert is_permutation(out, values)


def test_missing_barrier_changes_the_network():
    values = np.array([5, 4, 3, 2, 1, 0], dtype=np.int32)
    descriptor = make_pass_descriptor(6, num_lanes_per_group=2)
    reverse = list(range(descriptor.num_lanes))[::-1]

    with_barrier = emulate_launch(values.copy(), descriptor, lane_order=reverse)
    np.testing.assert_array_equal(with_barrier, [3, 5, 1, 4, 0, 2])

    # Lane 0 reads index 2 after lane 1 already moved 0 into it
    without = emulate_launch(values.copy(), descriptor, barrier=False,
                             lane_order=reverse)
    np.testing.assert_array_equal(without, [0, 5, 4, 3, 2, 1])


def test_phase_states_odd_first():
    states = phase_states([7, 6, 5, 4, 3, 2, 1, 0])
    assert len(states) == 8
    np.testing.assert_array_equal(states[0], [7, 5, 6, 3, 4, 1, 2, 0])
    np.testing.assert_array_equal(states[-1], np.arange(8))
    assert not is_sorted(states[-2])


def test_reference_rows():
    x = np.array([[2, 1, 0], [0, 2, 1]], dtype=np.int32)
    np.testing.assert_array_equal(
        transposition_sort_reference(x), [[0, 1, 2], [0, 1, 2]])


def test_emulate_sort_rejects_rows():
    with pytest.raises(ValueError):
        emulate_sort(np.zeros((2, 3), np.int32))
