# trackstamp/visualize/plot.py
"""
Plotting routines for trackstamp
"""

from __future__ import annotations

from pathlib import Path

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt

from trackstamp.models import SimplifiedPath, TrackSummary


def plot_track(path: SimplifiedPath, summary: TrackSummary, out_path: Path) -> Path:
    """
    Save the simplified route and, when every kept point has an
    elevation, an elevation profile below it. The format follows the
    suffix of `out_path` (.svg or .png). Returns `out_path`.
    """
    lons = [p.lon for p in path]
    lats = [p.lat for p in path]
    eles = [p.ele for p in path]
    has_profile = all(e is not None for e in eles)

    nrows = 2 if has_profile else 1
    fig, axes = plt.subplots(
        nrows, 1, figsize=(6, 8 if has_profile else 6),
        gridspec_kw={"height_ratios": [3, 1]} if has_profile else None,
        squeeze=False,
    )

    route = axes[0][0]
    route.plot(lons, lats, color="purple", linewidth=0.8,
               solid_capstyle="round", solid_joinstyle="round")
    route.set_aspect("equal", adjustable="datalim")
    route.set_facecolor("lavender")
    route.set_xlabel("Longitude")
    route.set_ylabel("Latitude")
    route.set_title(summary.header.track or "Track")

    if has_profile:
        profile = axes[1][0]
        steps = list(range(len(eles)))
        profile.fill_between(steps, eles, color="purple")
        profile.set_facecolor("lavender")
        profile.set_xlabel("Point")
        profile.set_ylabel("Elevation (m)")

    fig.tight_layout()
    out_path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(out_path)
    plt.close(fig)
    return out_path
