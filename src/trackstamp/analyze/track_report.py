#!/usr/bin/env python3
"""
trackstamp: summarize GPX track(s).

For each file: read the first track segment, build the TrackSummary,
print it (text or TSV), and optionally save a plot of the simplified
route. Configuration is loaded once here and passed down.
"""

from __future__ import annotations

import argparse
from pathlib import Path

from trackstamp.analyze.simplify import simplify
from trackstamp.analyze.summary import summarize
from trackstamp.config import TrackstampConfig, load_config
from trackstamp.errors import ConfigError, InvalidGpxError
from trackstamp.formats.gpx import read_track
from trackstamp.models import Activity
from trackstamp.report import TSV_HEADER, to_text, to_tsv_row
from trackstamp.util.logging import debug, log, set_verbose
from trackstamp.visualize.plot import plot_track


def report_file(path: Path, cfg: TrackstampConfig, *, activity: Activity,
                angle_fraction: float, tsv: bool, plot_dir: Path | None,
                plot_format: str = "svg") -> None:
    track = read_track(path, activity=activity)
    debug(f"Read {len(track)} point(s) from {path}")

    summary = summarize(track, cfg.pauses)
    if tsv:
        print(to_tsv_row(path, summary))
    else:
        print(f"\n{path}")
        print(to_text(summary))

    if plot_dir is not None:
        simplified = simplify(track.samples, angle_fraction)
        debug(f"Simplified {len(track)} -> {len(simplified)} point(s) "
              f"({simplified.reduction:.0%} dropped)")
        out = plot_track(simplified, summary, plot_dir / f"{path.stem}.{plot_format}")
        log(f"Wrote: {out}")


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description="trackstamp: Summarize GPX file(s).")
    ap.add_argument("gpx", nargs="+",
                    help="One or more GPX files.")
    ap.add_argument("--activity", default=Activity.CYCLING.value,
                    choices=[a.value for a in Activity],
                    help="Activity of the track(s); selects the pause thresholds (default: cycling).")
    ap.add_argument("--angle-fraction", type=float, default=None,
                    help="Simplification budget in (0, 1] (default: from config, 0.125).")
    ap.add_argument("--config", default=None,
                    help="User config file (default: ~/.config/trackstamp/config.toml).")
    ap.add_argument("--tsv", action="store_true",
                    help="Print tab-separated output (good for piping).")
    ap.add_argument("--plot-dir", default=None,
                    help="Save <name>.svg route plots into this directory.")
    ap.add_argument("--plot-format", default="svg", choices=["svg", "png"],
                    help="File format for --plot-dir (default: svg).")
    ap.add_argument("--verbose", action="store_true",
                    help="More logging.")
    args = ap.parse_args(argv)

    set_verbose(args.verbose)

    try:
        cfg = load_config(
            user_config_path=Path(args.config).expanduser() if args.config else None,
        )
    except ConfigError as e:
        log(f"ERROR: {e}")
        return 2

    for key, origin in sorted(cfg.source.items()):
        debug(f"config {key} <- {origin}")

    angle_fraction = cfg.simplify.angle_fraction
    if args.angle_fraction is not None:
        if not 0.0 < args.angle_fraction <= 1.0:
            ap.error("--angle-fraction must be in (0, 1]")
        angle_fraction = args.angle_fraction

    activity = Activity(args.activity)
    if cfg.pauses.thresholds_for(activity) is None:
        log(f"No pause thresholds for '{activity.value}'; timing and speed will be unknown.")

    plot_dir = Path(args.plot_dir).expanduser() if args.plot_dir else None

    if args.tsv:
        print(TSV_HEADER)

    failed = 0
    for raw in args.gpx:
        path = Path(raw).expanduser()
        if not path.is_file():
            log(f"Skipping (not a file): {path}")
            failed += 1
            continue
        try:
            report_file(path, cfg, activity=activity, angle_fraction=angle_fraction,
                        tsv=args.tsv, plot_dir=plot_dir,
                        plot_format=args.plot_format)
        except InvalidGpxError as e:
            log(f"ERROR: {e}")
            failed += 1

    return 1 if failed else 0


if __name__ == "__main__":
    raise SystemExit(main())
