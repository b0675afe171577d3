# trackstamp/analyze/speed.py
"""
Speed statistics for trackstamp

Speeds are in meters per hour.
"""

from __future__ import annotations

import datetime as _dt
from typing import Optional, Sequence

from trackstamp.analyze.pauses import detect_pauses
from trackstamp.analyze.track import step_distance, track_distance
from trackstamp.models import PauseThresholds, Sample

SECONDS_PER_HOUR = 3600.0


def _whole_seconds(delta: _dt.timedelta) -> int:
    """Elapsed time truncated to whole seconds; sub-second jitter counts as 0."""
    return int(delta.total_seconds())


def max_speed(samples: Sequence[Sample]) -> Optional[float]:
    """
    Highest speed between two consecutive samples, or None.

    Any sample without a timestamp makes the whole result None. Pairs
    less than a whole second apart have no speed and are passed over.
    """
    if len(samples) < 2:
        return None

    best = 0.0
    for p0, p1 in zip(samples, samples[1:]):
        if p0.time is None or p1.time is None:
            return None

        dt_s = _whole_seconds(abs(p1.time - p0.time))
        if dt_s <= 0:
            continue

        v = step_distance(p0, p1) / (dt_s / SECONDS_PER_HOUR)
        if v > best:
            best = v

    return best


def average_speed(samples: Sequence[Sample], thresholds: PauseThresholds) -> Optional[float]:
    """
    Average moving speed with pauses taken out, or None.

    (total distance - pause distances) / (total time - pause durations).
    Needs timestamps on the first and last sample. A clean duration that
    is zero or negative gives None rather than a meaningless speed.
    """
    if len(samples) < 2:
        return None

    start, finish = samples[0].time, samples[-1].time
    if start is None or finish is None:
        return None

    distance_m = track_distance(samples)
    clean = finish - start
    for pause in detect_pauses(samples, thresholds):
        distance_m -= pause.distance_m
        clean -= pause.duration

    clean_s = _whole_seconds(clean)
    if clean_s <= 0:
        return None

    return distance_m / (clean_s / SECONDS_PER_HOUR)
