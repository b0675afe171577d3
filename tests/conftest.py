import datetime as dt
import math
from pathlib import Path

import pytest

from trackstamp.config import PausePolicy
from trackstamp.models import Activity, Sample, Track

# haversine's mean earth radius; along a meridian distance == R * dlat
EARTH_RADIUS_M = 6371008.8
M_PER_DEG_LAT = EARTH_RADIUS_M * math.pi / 180.0

T0 = dt.datetime(2024, 5, 12, 7, 30, tzinfo=dt.timezone.utc)


@pytest.fixture
def sample_gpx_path() -> Path:
    return Path(__file__).parent / "data" / "sample.gpx"


@pytest.fixture
def cycling_policy() -> PausePolicy:
    return PausePolicy()


@pytest.fixture
def make_sample():
    """
    Build a Sample `north_m` meters north of (50, 8), `seconds` after T0.

    Pass seconds=None / ele=None for a sample missing that field.
    """
    def _make(north_m: float = 0.0, seconds: float | None = 0.0, ele: float | None = None) -> Sample:
        time = T0 + dt.timedelta(seconds=seconds) if seconds is not None else None
        return Sample(lat=50.0 + north_m / M_PER_DEG_LAT, lon=8.0, ele=ele, time=time)
    return _make


@pytest.fixture
def make_track():
    def _make(samples, activity: Activity = Activity.CYCLING, name: str = "Test ride") -> Track:
        return Track(samples=tuple(samples), name=name, creator="pytest", activity=activity)
    return _make
