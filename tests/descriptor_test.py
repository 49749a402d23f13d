import pytest

from oddeven import (
    ConfigurationError,
    DeviceLimits,
    EVEN_PHASE,
    ODD_PHASE,
    PassDescriptor,
    lane_pairs,
    make_pass_descriptor,
    num_launches_required,
    query_device_limits,
)
from oddeven.utils import DEFAULT_LANES_PER_GROUP, MAX_LENGTH


@pytest.mark.parametrize("length,expected", [
    (0, 0), (1, 0), (2, 1), (3, 2), (7, 4), (8, 4), (9, 5), (1000, 500),
])
def test_num_launches_required(length, expected):
    assert num_launches_required(length) == expected


@pytest.mark.parametrize("length", [0, 1, 2, 5, 511, 512, 513, 100_000])
@pytest.mark.parametrize("num_lanes_per_group", [1, 2, 64, 256])
def test_descriptor_covers_every_pair(length, num_lanes_per_group):
    d = make_pass_descriptor(length, num_lanes_per_group=num_lanes_per_group)
    assert d.num_groups * d.num_lanes_per_group * 2 >= length
    assert d.num_groups == -(-length // (2 * num_lanes_per_group))
    assert d.num_phases == length
    assert d.num_launches == num_launches_required(length)
    assert d.grid == (d.num_groups, 1, 1)
    assert d.num_lanes == d.num_groups * num_lanes_per_group


def test_default_group_size():
    d = make_pass_descriptor(10)
    assert d.num_lanes_per_group == DEFAULT_LANES_PER_GROUP
    assert d.num_groups == 1


def test_descriptor_is_recomputed_per_length():
    small = make_pass_descriptor(8, num_lanes_per_group=2)
    large = make_pass_descriptor(64, num_lanes_per_group=2)
    assert small.num_groups == 2
    assert large.num_groups == 16
    assert small == make_pass_descriptor(8, num_lanes_per_group=2)


def test_descriptor_is_immutable_and_hashable():
    d = make_pass_descriptor(16)
    with pytest.raises(Exception):
        d.length = 3
    assert hash(d) == hash(make_pass_descriptor(16))


def test_descriptor_rejects_uncovered_grid():
    with pytest.raises(ConfigurationError):
        PassDescriptor(length=10, num_lanes_per_group=2, num_groups=2,
                       num_phases=10, num_launches=5)


@pytest.mark.parametrize("num_lanes_per_group", [0, -4, 512, 3, 96])
def test_invalid_group_size(num_lanes_per_group):
    with pytest.raises(ConfigurationError):
        make_pass_descriptor(16, num_lanes_per_group=num_lanes_per_group)


def test_too_many_groups():
    limits = DeviceLimits(max_lanes_per_group=4, max_groups_per_axis=3)
    make_pass_descriptor(24, num_lanes_per_group=4, limits=limits)
    with pytest.raises(ConfigurationError, match="groups"):
        make_pass_descriptor(25, num_lanes_per_group=4, limits=limits)


def test_default_group_size_follows_small_limits():
    limits = DeviceLimits(max_lanes_per_group=64)
    d = make_pass_descriptor(1000, limits=limits)
    assert d.num_lanes_per_group == 64


def test_length_out_of_lane_index_range():
    with pytest.raises(ConfigurationError):
        make_pass_descriptor(MAX_LENGTH + 1)
    with pytest.raises(ConfigurationError):
        make_pass_descriptor(-1)


def test_configuration_error_is_value_error():
    with pytest.raises(ValueError):
        make_pass_descriptor(8, num_lanes_per_group=1024)


def test_query_device_limits():
    limits = query_device_limits()
    assert limits.max_lanes_per_group == 256
    assert limits.max_groups_per_axis == 65535


def test_lane_pairs():
    assert lane_pairs(0, ODD_PHASE) == (1, 2)
    assert lane_pairs(0, EVEN_PHASE) == (0, 1)
    assert lane_pairs(3, ODD_PHASE) == (7, 8)
    assert lane_pairs(3, EVEN_PHASE) == (6, 7)


@pytest.mark.parametrize("phase", [ODD_PHASE, EVEN_PHASE])
def test_lane_pairs_are_disjoint_within_phase(phase):
    touched = [i for lane in range(64) for i in lane_pairs(lane, phase)]
    assert len(touched) == len(set(touched))
