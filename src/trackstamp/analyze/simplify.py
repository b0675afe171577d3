# trackstamp/analyze/simplify.py
"""
Turning-angle budget simplification.

Walk the track three points at a time and spend a budget of turning angle
on each triple. Whenever the budget runs out, keep the triple's last point
and refill the budget. Straight stretches spend almost nothing and lose
most of their points; curvy stretches drain the budget quickly and keep
theirs.

For a triple (p0, p1, p2) both vectors end at p2:

    v1 = p2 - p0
    v2 = p2 - p1

and the angle between them is what gets spent. This is not the usual
tangent turn at p1 (the angle between p1 - p0 and p2 - p1); it is
roughly half of it for evenly spaced points. Do not swap in the
tangent form; existing outputs depend on this one.

Coordinates are treated as a plane (x = lon, y = lat).
"""

from __future__ import annotations

import math
from typing import Sequence

from trackstamp.models import Sample, SimplifiedPath

MIN_SIMPLIFY_POINTS = 6


def angle_limit(angle_fraction: float) -> float:
    """Map a budget fraction in (0, 1] to radians in (0, pi/2]."""
    if not 0.0 < angle_fraction <= 1.0:
        raise ValueError(f"angle_fraction must be in (0, 1], got {angle_fraction}")
    return (math.pi / 2.0) * angle_fraction


def _trailing_angle(p0: Sample, p1: Sample, p2: Sample) -> float | None:
    """Unsigned angle between p2 - p0 and p2 - p1, or None if either is zero."""
    v1x, v1y = p2.lon - p0.lon, p2.lat - p0.lat
    v2x, v2y = p2.lon - p1.lon, p2.lat - p1.lat

    if (v1x == 0.0 and v1y == 0.0) or (v2x == 0.0 and v2y == 0.0):
        return None

    cross = v1x * v2y - v1y * v2x
    dot = v1x * v2x + v1y * v2y
    return abs(math.atan2(cross, dot))


def simplify(samples: Sequence[Sample], angle_fraction: float) -> SimplifiedPath:
    """
    Reduce `samples` to the points where the turning budget ran out.

    The first two and the last sample are always kept, indices stay
    strictly increasing, and inputs shorter than MIN_SIMPLIFY_POINTS come
    back unchanged.
    """
    limit = angle_limit(angle_fraction)
    points = tuple(samples)
    n = len(points)

    if n < MIN_SIMPLIFY_POINTS:
        return SimplifiedPath(samples=points, angle_fraction=angle_fraction, source_len=n)

    kept = [points[0], points[1]]
    last_kept = 1
    budget = limit

    for i in range(n - 2):
        angle = _trailing_angle(points[i], points[i + 1], points[i + 2])
        if angle is None:
            # duplicate coordinates: nothing to measure, budget untouched
            continue

        budget -= angle
        if budget <= 0.0:
            kept.append(points[i + 2])
            last_kept = i + 2
            budget = limit

    if last_kept != n - 1:
        kept.append(points[-1])

    return SimplifiedPath(samples=tuple(kept), angle_fraction=angle_fraction, source_len=n)
