# trackstamp/formats/gpx.py
"""
GPX reader for trackstamp

This module is intentionally format-focused:
- GPX namespace handling (1.1, with 1.0 and no xmlns accepted)
- safely reading ElementTree
- turning the first track segment into a Track

Only the first <trk> and its first <trkseg> are read. Per-point <ele> and
<time> are optional; a point missing them (or holding unparsable text)
still becomes a Sample, with None in that field. Whether that is fatal
is for the analyzers to decide.
"""

from __future__ import annotations

import datetime as _dt
from pathlib import Path
from typing import Optional
from xml.etree import ElementTree as ET

from trackstamp.errors import InvalidGpxError
from trackstamp.models import Activity, Sample, Track

GPX_NS_11 = "http://www.topografix.com/GPX/1/1"
GPX_NS_10 = "http://www.topografix.com/GPX/1/0"


def _namespace_of(root: ET.Element) -> dict[str, str]:
    """
    Return the {"gpx": uri} map for the document's root namespace.

    ElementTree represents namespaced tags internally as
      "{namespace-uri}tag"

    A root without xmlns maps "gpx" to "", so "gpx:trk" matches a
    plain <trk>.
    """
    if not root.tag.startswith("{"):
        return {"gpx": ""}

    uri = root.tag[1:].split("}", 1)[0]
    if uri not in (GPX_NS_11, GPX_NS_10):
        raise InvalidGpxError(f"Unsupported GPX namespace: {uri}")
    return {"gpx": uri}


def _parse_gpx_time(text: str) -> Optional[_dt.datetime]:
    """
    Parse an ISO-8601 timestamp commonly found in GPX <time> nodes.

    Expected examples:
      - "2026-01-02T21:14:44Z"
      - "2026-01-02T21:14:44.123Z"
      - "2026-01-02T21:14:44+00:00"
    """
    if not text:
        return None
    s = text.strip()
    if not s:
        return None

    if s.endswith("Z"):
        s = s[:-1] + "+00:00"

    try:
        dt = _dt.datetime.fromisoformat(s)
    except ValueError:
        return None

    # Ensure tz-aware; if naive, assume UTC (conservative for GPX sources)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=_dt.timezone.utc)

    return dt.astimezone(_dt.timezone.utc)


def _parse_float(text: Optional[str]) -> Optional[float]:
    if text is None or not text.strip():
        return None
    try:
        return float(text)
    except ValueError:
        return None


def read_gpx(path: Path) -> ET.ElementTree:
    """
    Read a GPX file into an ElementTree.

    Raises:
      InvalidGpxError (wrapping ET.ParseError / OSError)
    """
    try:
        return ET.parse(path)
    except (ET.ParseError, OSError) as e:
        raise InvalidGpxError(f"Could not read GPX file {path}: {e}") from e


def extract_samples(trkseg: ET.Element, ns: dict[str, str]) -> list[Sample]:
    """Extract ordered samples from a <trkseg>."""
    samples: list[Sample] = []

    for trkpt in trkseg.findall("gpx:trkpt", ns):
        lat = _parse_float(trkpt.get("lat"))
        lon = _parse_float(trkpt.get("lon"))
        if lat is None or lon is None:
            raise InvalidGpxError("<trkpt> without usable lat/lon attributes")

        ele = _parse_float(trkpt.findtext("gpx:ele", namespaces=ns))
        time = _parse_gpx_time(trkpt.findtext("gpx:time", default="", namespaces=ns))

        samples.append(Sample(lat=lat, lon=lon, ele=ele, time=time))

    return samples


def track_from_tree(tree: ET.ElementTree, *, activity: Activity = Activity.CYCLING) -> Track:
    root = tree.getroot()
    ns = _namespace_of(root)

    trk = root.find("gpx:trk", ns)
    if trk is None:
        raise InvalidGpxError("GPX document has no <trk>")

    trkseg = trk.find("gpx:trkseg", ns)
    if trkseg is None:
        raise InvalidGpxError("First <trk> has no <trkseg>")

    samples = extract_samples(trkseg, ns)
    if not samples:
        raise InvalidGpxError("First <trkseg> has no <trkpt>")

    name = (trk.findtext("gpx:name", default="", namespaces=ns) or "").strip() or None
    creator = (root.get("creator") or "").strip() or None

    return Track(samples=tuple(samples), name=name, creator=creator, activity=activity)


def read_track(path: Path, *, activity: Activity = Activity.CYCLING) -> Track:
    """
    Read the first segment of the first track in a GPX file.

    Raises:
      InvalidGpxError
    """
    return track_from_tree(read_gpx(path), activity=activity)
