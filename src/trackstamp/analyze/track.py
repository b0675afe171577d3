# trackstamp/analyze/track.py
"""
Distance functions for trackstamp
"""

from __future__ import annotations

from typing import Sequence

from haversine import haversine, Unit

from trackstamp.models import Sample


def step_distance(p0: Sample, p1: Sample) -> float:
    """Great-circle distance (m) between two samples; elevation is ignored."""
    return haversine((p0.lat, p0.lon), (p1.lat, p1.lon), unit=Unit.METERS)


def track_distance(samples: Sequence[Sample]) -> float:
    """Sum of step distances (m). 0.0 for fewer than two samples."""
    return sum(step_distance(p0, p1) for p0, p1 in zip(samples, samples[1:]))
