import pytest

from trackstamp.analyze.speed import average_speed, max_speed
from trackstamp.config import PausePolicy
from trackstamp.models import Activity

CYCLING = PausePolicy().thresholds_for(Activity.CYCLING)


def test_max_speed_is_fastest_step_in_meters_per_hour(make_sample):
    samples = [
        make_sample(0, seconds=0),
        make_sample(100, seconds=60),     # 6 km/h
        make_sample(600, seconds=120),    # 30 km/h
        make_sample(800, seconds=180),    # 12 km/h
    ]
    assert max_speed(samples) == pytest.approx(30_000.0, rel=1e-6)


def test_max_speed_fails_on_any_missing_timestamp(make_sample):
    samples = [
        make_sample(0, seconds=0),
        make_sample(100, seconds=60),
        make_sample(200, seconds=None),
        make_sample(300, seconds=180),
    ]
    assert max_speed(samples) is None


def test_max_speed_skips_zero_duration_pairs(make_sample):
    samples = [
        make_sample(0, seconds=0),
        make_sample(5, seconds=0),
        make_sample(105, seconds=60),
    ]
    assert max_speed(samples) == pytest.approx(6_000.0, rel=1e-6)


def test_max_speed_needs_two_samples(make_sample):
    assert max_speed([make_sample(0)]) is None


def test_average_speed_excludes_pause_time_and_distance(make_sample):
    samples = [
        make_sample(0, seconds=0),
        make_sample(300, seconds=60),
        make_sample(350, seconds=600),    # 9 minute stop, 50 m drift
        make_sample(650, seconds=660),
    ]
    # 600 m over 120 s of riding
    assert average_speed(samples, CYCLING) == pytest.approx(18_000.0, rel=1e-6)


def test_average_speed_without_pauses(make_sample):
    samples = [make_sample(0, seconds=0), make_sample(500, seconds=60), make_sample(1000, seconds=120)]
    assert average_speed(samples, CYCLING) == pytest.approx(30_000.0, rel=1e-6)


def test_average_speed_needs_end_timestamps(make_sample):
    samples = [make_sample(0, seconds=None), make_sample(500, seconds=60)]
    assert average_speed(samples, CYCLING) is None


def test_average_speed_rejects_zero_clean_duration(make_sample):
    # the whole track is one pause: nothing left to divide by
    samples = [make_sample(0, seconds=0), make_sample(10, seconds=300)]
    assert average_speed(samples, CYCLING) is None


def test_average_speed_rejects_zero_total_duration(make_sample):
    samples = [make_sample(0, seconds=0), make_sample(10, seconds=0)]
    assert average_speed(samples, CYCLING) is None


def test_max_speed_skips_sub_second_pairs(make_sample):
    samples = [
        make_sample(0, seconds=0),
        make_sample(100, seconds=60),     # 6 km/h
        make_sample(110, seconds=60.4),   # jitter: 10 m in 0.4 s
    ]
    assert max_speed(samples) == pytest.approx(6_000.0, rel=1e-6)


def test_max_speed_truncates_to_whole_seconds(make_sample):
    samples = [make_sample(0, seconds=0), make_sample(100, seconds=1.9)]
    # 100 m over 1 whole second
    assert max_speed(samples) == pytest.approx(360_000.0, rel=1e-6)


def test_average_speed_rejects_sub_second_clean_duration(make_sample):
    samples = [make_sample(0, seconds=0), make_sample(5, seconds=0.6)]
    assert average_speed(samples, CYCLING) is None
