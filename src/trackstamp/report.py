# trackstamp/report.py
"""
Plain-text rendering of a TrackSummary.
"""

from __future__ import annotations

import datetime as _dt
from pathlib import Path
from typing import Optional

from trackstamp.models import TrackSummary

UNKNOWN = "unknown"

TSV_HEADER = (
    "file\ttrack\tdate_utc\tactivity\tlength_km\tgps_per_km\t"
    "total_time\tpure_time\tavg_kmh\tmax_kmh\televation_total_m\televation_max_m"
)


def format_duration(d: _dt.timedelta) -> str:
    """HH:MM:SS; hours may exceed 24. Negative spans get a leading '-'."""
    secs = int(d.total_seconds())
    sign = "-" if secs < 0 else ""
    secs = abs(secs)
    hours, rem = divmod(secs, 3600)
    minutes, seconds = divmod(rem, 60)
    return f"{sign}{hours:02d}:{minutes:02d}:{seconds:02d}"


def _or_unknown(v: Optional[str]) -> str:
    return v if v else UNKNOWN


def _fields(summary: TrackSummary) -> dict[str, str]:
    head = summary.header
    f = {
        "track": _or_unknown(head.track),
        "date": head.date.isoformat() if head.date else UNKNOWN,
        "activity": str(head.activity),
        "length_km": f"{head.length_m / 1000.0:.2f}",
        "gps_per_km": f"{head.gps_density:.0f}" if head.gps_density is not None else UNKNOWN,
        "device": _or_unknown(head.device),
        "total_time": UNKNOWN,
        "pure_time": UNKNOWN,
        "avg_kmh": UNKNOWN,
        "max_kmh": UNKNOWN,
        "elevation_total_m": UNKNOWN,
        "elevation_max_m": UNKNOWN,
    }

    if summary.timing is not None:
        f["total_time"] = format_duration(summary.timing.total)
        f["pure_time"] = format_duration(summary.timing.pure)
    if summary.velocity is not None:
        f["avg_kmh"] = f"{summary.velocity.average_kmh:.2f}"
        f["max_kmh"] = f"{summary.velocity.maximum_kmh:.2f}"
    if summary.elevation is not None:
        f["elevation_total_m"] = f"{summary.elevation.total_m:.0f}"
        f["elevation_max_m"] = f"{summary.elevation.maximum_m:.0f}"

    return f


def to_text(summary: TrackSummary) -> str:
    f = _fields(summary)
    lines = [
        f"Track         : {f['track']}",
        f"Date (UTC)    : {f['date']}",
        f"Activity      : {f['activity']}",
        f"Length        : {f['length_km']} km",
        f"GPS points/km : {f['gps_per_km']}",
        f"Created by    : {f['device']}",
        "",
        "Time:",
        f"  total       : {f['total_time']}",
        f"  moving      : {f['pure_time']}",
        "",
        "Speed:",
        f"  average     : {f['avg_kmh']} km/h",
        f"  maximum     : {f['max_kmh']} km/h",
        "",
        "Climb:",
        f"  total       : {f['elevation_total_m']} m",
        f"  max (contig): {f['elevation_max_m']} m",
    ]
    return "\n".join(lines)


def to_tsv_row(path: Path, summary: TrackSummary) -> str:
    f = _fields(summary)
    cols = [
        str(path), f["track"], f["date"], f["activity"], f["length_km"], f["gps_per_km"],
        f["total_time"], f["pure_time"], f["avg_kmh"], f["max_kmh"],
        f["elevation_total_m"], f["elevation_max_m"],
    ]
    return "\t".join(cols)
