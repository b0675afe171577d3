# trackstamp/analyze/pauses.py
"""
Pause detection for trackstamp

A pause is a consecutive pair of samples far apart in time but close in
space: the rider stood still. A long gap that also covers a long distance
is a tracker dropout and is not a pause.
"""

from __future__ import annotations

import datetime as _dt
from typing import Optional, Sequence

from trackstamp.analyze.track import step_distance
from trackstamp.models import PauseInterval, PauseThresholds, Sample


def find_pauses(
        samples: Sequence[Sample],
        duration_gap: _dt.timedelta,
        distance_gap_m: float,
) -> list[PauseInterval]:
    """Return every consecutive pair that is at least `duration_gap` long and at most `distance_gap_m` apart."""
    pauses: list[PauseInterval] = []

    for p0, p1 in zip(samples, samples[1:]):
        # pairs without both timestamps can't be judged; skip them
        if p0.time is None or p1.time is None:
            continue

        elapsed = abs(p1.time - p0.time)
        if elapsed < duration_gap:
            continue

        d_m = step_distance(p0, p1)
        if d_m <= distance_gap_m:
            pauses.append(PauseInterval(duration=elapsed, start=p0, end=p1, distance_m=d_m))

    return pauses


def detect_pauses(samples: Sequence[Sample], thresholds: PauseThresholds) -> list[PauseInterval]:
    return find_pauses(samples, thresholds.duration_gap, thresholds.distance_gap_m)


def durations(
        samples: Sequence[Sample],
        thresholds: PauseThresholds,
) -> Optional[tuple[_dt.timedelta, _dt.timedelta]]:
    """
    Return (total, pure) elapsed time, or None.

    total is last timestamp minus first; pure subtracts every detected
    pause. Needs at least two samples and timestamps on both ends.
    """
    if len(samples) < 2:
        return None

    start, finish = samples[0].time, samples[-1].time
    if start is None or finish is None:
        return None

    total = finish - start
    pure = total - sum((p.duration for p in detect_pauses(samples, thresholds)), _dt.timedelta())
    return total, pure
