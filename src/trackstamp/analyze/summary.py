# trackstamp/analyze/summary.py
"""
TrackSummary assembly.

Two layers of failure handling:

  - The analyzers (elevation_stats, durations, max_speed, average_speed)
    are all-or-nothing over the whole track and return None on any gap.
  - The build_* functions below turn that None into a specific
    AnalysisError. summarize() catches AnalysisError per block and drops
    the block, so one missing elevation reading removes the Elevation
    block and nothing else.

Call the build_* functions directly when a failure should surface.
"""

from __future__ import annotations

from typing import Callable, Optional, TypeVar

from trackstamp.analyze.elevation import elevation_stats
from trackstamp.analyze.pauses import durations
from trackstamp.analyze.speed import average_speed, max_speed
from trackstamp.analyze.track import track_distance
from trackstamp.config import PausePolicy
from trackstamp.errors import (
    AnalysisError,
    InsufficientDataError,
    MissingFieldError,
    UnsupportedActivityError,
)
from trackstamp.models import (
    Elevation,
    Header,
    PauseThresholds,
    Timing,
    Track,
    TrackSummary,
    Velocity,
)
from trackstamp.util.logging import debug

T = TypeVar("T")


def build_header(track: Track) -> Header:
    if len(track) < 1:
        raise InsufficientDataError("a header needs at least one sample")

    length_m = track_distance(track.samples)
    density = len(track) / (length_m / 1000.0) if length_m > 0 else None

    return Header(
        track=track.name,
        date=track.samples[0].time,
        activity=track.activity,
        length_m=length_m,
        device=track.creator,
        gps_density=density,
    )


def _require_pairs(track: Track, what: str) -> None:
    if len(track) < 2:
        raise InsufficientDataError(f"{what} needs at least two samples, got {len(track)}")


def _thresholds(track: Track, policy: PausePolicy) -> PauseThresholds:
    thresholds = policy.thresholds_for(track.activity)
    if thresholds is None:
        raise UnsupportedActivityError(
            f"no pause thresholds configured for activity '{track.activity.value}'"
        )
    return thresholds


def build_timing(track: Track, policy: PausePolicy) -> Timing:
    _require_pairs(track, "timing")
    result = durations(track.samples, _thresholds(track, policy))
    if result is None:
        raise MissingFieldError("timing needs timestamps on the first and last sample")
    total, pure = result
    return Timing(total=total, pure=pure)


def build_velocity(track: Track, policy: PausePolicy) -> Velocity:
    _require_pairs(track, "velocity")
    thresholds = _thresholds(track, policy)

    maximum = max_speed(track.samples)
    if maximum is None:
        raise MissingFieldError("maximum speed needs a timestamp on every sample")

    average = average_speed(track.samples, thresholds)
    if average is None:
        raise MissingFieldError(
            "average speed needs end timestamps and a positive moving duration"
        )

    return Velocity(average_kmh=average / 1000.0, maximum_kmh=maximum / 1000.0)


def build_elevation(track: Track) -> Elevation:
    _require_pairs(track, "elevation")
    result = elevation_stats(track.samples)
    if result is None:
        raise MissingFieldError("elevation needs an elevation on every sample")
    total, maximum = result
    return Elevation(total_m=total, maximum_m=maximum)


def _optional(label: str, build: Callable[[], T]) -> Optional[T]:
    try:
        return build()
    except AnalysisError as e:
        debug(f"Omitting {label}: {e}")
        return None


def summarize(track: Track, policy: PausePolicy) -> TrackSummary:
    """
    Build the full summary for a track.

    The header is always built (and raises InsufficientDataError for an
    empty track). Timing, velocity and elevation are each None when their
    analyzer could not cover the whole track.
    """
    return TrackSummary(
        header=build_header(track),
        timing=_optional("timing", lambda: build_timing(track, policy)),
        velocity=_optional("velocity", lambda: build_velocity(track, policy)),
        elevation=_optional("elevation", lambda: build_elevation(track)),
    )
