# trackstamp/models.py
"""
Value types shared by the reader, the analyzers and the renderers.

Everything here is immutable. A Track is produced once by a reader and is
then only read; every analyzer result is a new value.
"""

from __future__ import annotations

import datetime as _dt
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Optional


class Activity(str, Enum):
    """Activity classification; the value is the pause-policy key."""

    CYCLING = "cycling"
    RUNNING = "running"

    def __str__(self) -> str:
        return self.value.capitalize()


@dataclass(frozen=True)
class Sample:
    lat: float
    lon: float
    ele: Optional[float] = None
    time: Optional[_dt.datetime] = None


@dataclass(frozen=True)
class Track:
    """
    An ordered sample sequence plus the track-level metadata.

    Only the first segment of the first track in a file ends up here.
    """

    samples: tuple[Sample, ...]
    name: Optional[str] = None
    creator: Optional[str] = None
    activity: Activity = Activity.CYCLING

    def __len__(self) -> int:
        return len(self.samples)


@dataclass(frozen=True)
class PauseThresholds:
    """A consecutive pair is a pause when it is at least this long and at most this far."""

    duration_gap: _dt.timedelta
    distance_gap_m: float


@dataclass(frozen=True)
class PauseInterval:
    duration: _dt.timedelta
    start: Sample
    end: Sample
    distance_m: float


@dataclass(frozen=True)
class SimplifiedPath:
    """Subsequence of the original samples kept by the angle-budget simplifier."""

    samples: tuple[Sample, ...]
    angle_fraction: float
    source_len: int

    def __len__(self) -> int:
        return len(self.samples)

    def __iter__(self) -> Iterator[Sample]:
        return iter(self.samples)

    @property
    def first(self) -> Sample:
        return self.samples[0]

    @property
    def last(self) -> Sample:
        return self.samples[-1]

    @property
    def reduction(self) -> float:
        """Share of the source samples that were dropped (0.0 .. 1.0)."""
        if not self.source_len:
            return 0.0
        return 1.0 - len(self.samples) / self.source_len


# ---------------------------------------------------------------------------
# Summary blocks
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class Header:
    track: Optional[str]
    date: Optional[_dt.datetime]
    activity: Activity
    length_m: float
    device: Optional[str]
    gps_density: Optional[float]  # samples per km; None for a zero-length track


@dataclass(frozen=True)
class Timing:
    total: _dt.timedelta
    pure: _dt.timedelta  # total minus detected pauses


@dataclass(frozen=True)
class Velocity:
    average_kmh: float
    maximum_kmh: float


@dataclass(frozen=True)
class Elevation:
    total_m: float
    maximum_m: float  # largest contiguous climb


@dataclass(frozen=True)
class TrackSummary:
    """
    Header is always present. Each other block is None when its analyzer
    could not produce a result for the whole track.
    """

    header: Header
    timing: Optional[Timing] = None
    velocity: Optional[Velocity] = None
    elevation: Optional[Elevation] = None
