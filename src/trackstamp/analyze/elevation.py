# trackstamp/analyze/elevation.py
"""
Elevation gain for trackstamp
"""

from __future__ import annotations

from typing import Optional, Sequence

from trackstamp.models import Sample


def elevation_stats(samples: Sequence[Sample]) -> Optional[tuple[float, float]]:
    """
    Return (total_gain_m, max_contiguous_gain_m), or None.

    A run of climbing steps ends at the first step that is flat or going
    down, so a plateau never joins two climbs. One sample without an
    elevation anywhere in the track makes the whole result None.
    """
    if len(samples) < 2:
        return None

    total_gain = 0.0
    current_run = 0.0
    max_gain = 0.0

    for p0, p1 in zip(samples, samples[1:]):
        if p0.ele is None or p1.ele is None:
            return None

        diff = p1.ele - p0.ele
        if diff > 0:
            total_gain += diff
            current_run += diff
            max_gain = max(max_gain, current_run)
        else:
            current_run = 0.0

    return total_gain, max_gain
