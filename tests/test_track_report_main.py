from pathlib import Path

import pytest

import trackstamp.analyze.track_report as tr
from trackstamp.config import PausePolicy, SimplifyConfig, TrackstampConfig


@pytest.fixture(autouse=True)
def fixed_config(monkeypatch):
    # Keep the developer's own config files out of the run
    monkeypatch.setattr(
        tr,
        "load_config",
        lambda user_config_path=None: TrackstampConfig(
            simplify=SimplifyConfig(), pauses=PausePolicy(), source={},
        ),
    )


def test_main_prints_text_report(sample_gpx_path, capsys):
    rc = tr.main([str(sample_gpx_path)])
    out = capsys.readouterr().out

    assert rc == 0
    assert "Morning Ride" in out
    assert "moving      : 00:01:40" in out
    # one trackpoint has no <ele>
    assert "max (contig): unknown m" in out


def test_main_tsv(sample_gpx_path, capsys):
    rc = tr.main([str(sample_gpx_path), "--tsv"])
    lines = capsys.readouterr().out.splitlines()

    assert rc == 0
    assert lines[0].startswith("file\t")
    assert lines[1].startswith(str(sample_gpx_path))
    assert "00:05:40" in lines[1].split("\t")


def test_main_writes_svg_plot(sample_gpx_path, tmp_path: Path, capsys):
    rc = tr.main([str(sample_gpx_path), "--plot-dir", str(tmp_path / "plots")])

    assert rc == 0
    svg = tmp_path / "plots" / "sample.svg"
    assert svg.is_file()
    assert "<svg" in svg.read_text(encoding="utf-8")


def test_main_writes_png_plot_on_request(sample_gpx_path, tmp_path: Path, capsys):
    rc = tr.main([str(sample_gpx_path), "--plot-dir", str(tmp_path), "--plot-format", "png"])

    assert rc == 0
    assert (tmp_path / "sample.png").read_bytes()[:8] == b"\x89PNG\r\n\x1a\n"


def test_main_reports_failures(tmp_path: Path, sample_gpx_path, capsys):
    bad = tmp_path / "bad.gpx"
    bad.write_text("<gpx", encoding="utf-8")

    rc = tr.main([str(tmp_path / "missing.gpx"), str(bad), str(sample_gpx_path)])

    assert rc == 1
    assert "Morning Ride" in capsys.readouterr().out


def test_main_rejects_bad_angle_fraction(sample_gpx_path):
    with pytest.raises(SystemExit):
        tr.main([str(sample_gpx_path), "--angle-fraction", "2"])
