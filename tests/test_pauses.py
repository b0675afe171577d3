import datetime as dt

import pytest

from trackstamp.analyze.pauses import detect_pauses, durations, find_pauses
from trackstamp.config import PausePolicy
from trackstamp.models import Activity

CYCLING = PausePolicy().thresholds_for(Activity.CYCLING)


def test_cycling_profile_values():
    assert CYCLING.duration_gap == dt.timedelta(minutes=2)
    assert CYCLING.distance_gap_m == pytest.approx(166.67, abs=0.01)


def test_long_gap_with_small_drift_is_a_pause(make_sample):
    samples = [make_sample(0, seconds=0), make_sample(50, seconds=9 * 60)]

    pauses = detect_pauses(samples, CYCLING)

    assert len(pauses) == 1
    assert pauses[0].duration == dt.timedelta(minutes=9)
    assert pauses[0].start is samples[0]
    assert pauses[0].end is samples[1]
    assert pauses[0].distance_m == pytest.approx(50.0, abs=0.01)


def test_long_gap_with_large_displacement_is_not_a_pause(make_sample):
    samples = [make_sample(0, seconds=0), make_sample(500, seconds=9 * 60)]
    assert detect_pauses(samples, CYCLING) == []


def test_short_gap_is_not_a_pause(make_sample):
    samples = [make_sample(0, seconds=0), make_sample(0, seconds=60)]
    assert detect_pauses(samples, CYCLING) == []


def test_thresholds_are_inclusive(make_sample):
    samples = [make_sample(0, seconds=0), make_sample(100, seconds=120)]
    pauses = find_pauses(samples, dt.timedelta(seconds=120), 100.5)
    assert len(pauses) == 1


def test_pairs_without_timestamps_are_skipped(make_sample):
    samples = [
        make_sample(0, seconds=0),
        make_sample(10, seconds=None),
        make_sample(20, seconds=600),
        make_sample(30, seconds=1200),
    ]

    pauses = detect_pauses(samples, CYCLING)

    assert [p.duration for p in pauses] == [dt.timedelta(minutes=10)]


def test_out_of_order_timestamps_use_absolute_gap(make_sample):
    samples = [make_sample(0, seconds=600), make_sample(10, seconds=0)]
    pauses = detect_pauses(samples, CYCLING)
    assert pauses[0].duration == dt.timedelta(minutes=10)


def test_durations_subtract_pauses(make_sample):
    samples = [
        make_sample(0, seconds=0),
        make_sample(300, seconds=60),
        make_sample(350, seconds=600),
        make_sample(650, seconds=660),
    ]

    total, pure = durations(samples, CYCLING)

    assert total == dt.timedelta(seconds=660)
    assert pure == dt.timedelta(seconds=120)


def test_durations_need_end_timestamps(make_sample):
    samples = [make_sample(0, seconds=0), make_sample(300, seconds=60), make_sample(600, seconds=None)]
    assert durations(samples, CYCLING) is None


def test_durations_ignore_missing_interior_timestamps(make_sample):
    samples = [make_sample(0, seconds=0), make_sample(300, seconds=None), make_sample(600, seconds=90)]
    total, pure = durations(samples, CYCLING)
    assert total == pure == dt.timedelta(seconds=90)
