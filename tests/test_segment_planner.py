from __future__ import annotations

import math

import pytest

from audioscribe.exceptions import AudioSplitError
from audioscribe.segment_planner import plan_segments
from audioscribe.utils import MIB


def test_plan_for_1000_seconds_and_100_mib() -> None:
    plan = plan_segments(1000.0, 100 * MIB)

    assert plan.segment_duration_seconds == 200
    assert plan.segment_count == 5
    assert plan.total_duration_seconds == 1000.0


@pytest.mark.parametrize(
    ("duration", "size"),
    [
        (30.0, 26 * MIB),
        (59.5, 400 * MIB),
        (3600.0, 26 * MIB),
        (7200.0, 30 * MIB),
        (12345.6, 1024 * MIB),
        (0.4, 1),
    ],
)
def test_segment_duration_is_clamped_and_count_covers_duration(duration: float, size: int) -> None:
    plan = plan_segments(duration, size)

    assert 60 <= plan.segment_duration_seconds <= 600
    assert plan.segment_count == math.ceil(duration / plan.segment_duration_seconds)
    assert plan.segment_count >= 1


def test_short_high_bitrate_file_uses_minimum_segment_length() -> None:
    plan = plan_segments(300.0, 500 * MIB)

    assert plan.segment_duration_seconds == 60
    assert plan.segment_count == 5


def test_long_low_bitrate_file_uses_maximum_segment_length() -> None:
    plan = plan_segments(3600.0, 30 * MIB)

    assert plan.segment_duration_seconds == 600
    assert plan.segment_count == 6


def test_segment_bounds_start_at_multiples_of_segment_length() -> None:
    plan = plan_segments(1000.0, 100 * MIB)

    assert list(plan.segment_bounds()) == [(0, 0), (1, 200), (2, 400), (3, 600), (4, 800)]


@pytest.mark.parametrize("duration", [0.0, -1.0])
def test_non_positive_duration_fails(duration: float) -> None:
    with pytest.raises(AudioSplitError):
        plan_segments(duration, 100 * MIB)


def test_non_positive_size_fails() -> None:
    with pytest.raises(AudioSplitError):
        plan_segments(100.0, 0)


def test_inverted_bounds_are_rejected() -> None:
    with pytest.raises(ValueError):
        plan_segments(100.0, MIB, min_segment_seconds=600, max_segment_seconds=60)
