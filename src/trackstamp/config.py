"""
trackstamp configuration loader

This module centralizes *all* configuration handling for trackstamp.

Design goals:
- Keep the CLI Unix-friendly: flags override everything.
- Provide sensible defaults if no config exists.
- Allow per-machine config without committing personal settings:
    ~/.config/trackstamp/config.toml
- Allow repo-local config:
    <repo_root>/config/config.toml
- Allow environment variable overrides for automation.

Precedence (highest to lowest) for any given value:
1) CLI argument (handled by the CLI)
2) Environment variables (TRACKSTAMP_*)
3) User config: ~/.config/trackstamp/config.toml
4) Repo config: <repo_root>/config/config.toml
5) Hard defaults (cycling pause profile, angle fraction 0.125)

This module uses Python's built-in tomllib on Python 3.11+, or `tomli` if installed.

The pause policy (activity -> thresholds) lives here and nowhere else.
It is built once by load_config() and then handed to the analyzers as an
argument; analyzers never look it up on their own.
"""

from __future__ import annotations

import datetime as _dt
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping, Optional, Union

from trackstamp.errors import ConfigError
from trackstamp.models import Activity, PauseThresholds

# Cycling: 2 minutes standing still, allowing the drift a 5 km/h crawl
# would cover in that time.
DEFAULT_PAUSE_PROFILES: dict[str, PauseThresholds] = {
    Activity.CYCLING.value: PauseThresholds(
        duration_gap=_dt.timedelta(minutes=2),
        distance_gap_m=5000.0 * (2.0 / 60.0),
    ),
}

DEFAULT_ANGLE_FRACTION = 0.125


# ---------------------------------------------------------------------------
# TOML loading helpers
# ---------------------------------------------------------------------------
def _load_toml(path: Path) -> dict[str, Any]:
    """
    Parse a TOML file at `path`.

    Behavior:
    - If the file does not exist, return an empty dict (non-fatal).
    - If the file exists but is invalid TOML, raise ConfigError
      with a clear, user-facing message.
    """
    if not path.is_file():
        return {}

    try:
        import tomllib
    except ModuleNotFoundError:
        import tomli as tomllib

    try:
        return tomllib.loads(path.read_text(encoding="utf-8")) or {}
    except (tomllib.TOMLDecodeError, OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"Failed to parse TOML config: {path} ({e})") from e


# ---------------------------------------------------------------------------
# Generic coercion helpers
# ---------------------------------------------------------------------------
def _deep_get(d: dict[str, Any], dotted_key: str) -> Any:
    """
    Fetch nested dictionary values using dot-separated keys.

    Example:
        _deep_get(cfg, "simplify.angle_fraction")

    Returns None if any part of the path is missing.
    """
    cur: Any = d
    for part in dotted_key.split("."):
        if not isinstance(cur, dict) or part not in cur:
            return None
        cur = cur[part]
    return cur


def _as_float(v: Any, key: str, origin: str) -> Optional[float]:
    """
    Coerce a config value into a float.

    Returns None for a missing value. Anything present but not numeric is
    a user mistake and raises ConfigError naming the key and its origin.
    """
    if v is None:
        return None
    if isinstance(v, bool):
        raise ConfigError(f"{key} must be a number, got a boolean ({origin})")
    try:
        return float(v)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"{key} must be a number, got {v!r} ({origin})") from e


def _check_angle_fraction(value: float, origin: str) -> float:
    if not 0.0 < value <= 1.0:
        raise ConfigError(f"simplify.angle_fraction must be in (0, 1], got {value} ({origin})")
    return value


# ---------------------------------------------------------------------------
# Pause policy
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class PausePolicy:
    """
    Mapping from activity label to pause thresholds.

    A missing entry is a configuration gap, not an error: callers get
    None back and treat the pause-dependent statistics as absent.
    """

    profiles: Mapping[str, PauseThresholds] = field(
        default_factory=lambda: dict(DEFAULT_PAUSE_PROFILES)
    )

    def thresholds_for(self, activity: Union[Activity, str]) -> Optional[PauseThresholds]:
        key = activity.value if isinstance(activity, Activity) else str(activity).strip().lower()
        return self.profiles.get(key)

    def activities(self) -> list[str]:
        return sorted(self.profiles)


def _parse_pause_section(cfg: dict[str, Any], origin: str) -> dict[str, PauseThresholds]:
    """
    Extract [pauses.<activity>] blocks from raw TOML.

    Each block needs both `duration_gap_s` and `distance_gap_m`; a block
    missing one of them, or holding a negative value, raises ConfigError.
    """
    raw = cfg.get("pauses", {}) or {}
    if not isinstance(raw, dict):
        raise ConfigError(f"[pauses] must be a table ({origin})")

    profiles: dict[str, PauseThresholds] = {}
    for name, block in raw.items():
        if not isinstance(block, dict):
            raise ConfigError(f"[pauses.{name}] must be a table ({origin})")

        dur = _as_float(block.get("duration_gap_s"), f"pauses.{name}.duration_gap_s", origin)
        dist = _as_float(block.get("distance_gap_m"), f"pauses.{name}.distance_gap_m", origin)
        if dur is None or dist is None:
            raise ConfigError(
                f"[pauses.{name}] needs both duration_gap_s and distance_gap_m ({origin})"
            )
        if dur < 0 or dist < 0:
            raise ConfigError(f"[pauses.{name}] thresholds must not be negative ({origin})")

        profiles[str(name).strip().lower()] = PauseThresholds(
            duration_gap=_dt.timedelta(seconds=dur),
            distance_gap_m=dist,
        )
    return profiles


# ---------------------------------------------------------------------------
# Repo discovery
# ---------------------------------------------------------------------------
def find_repo_root(start: Path) -> Optional[Path]:
    """
    Walk upward from `start` looking for the trackstamp repo root.

    The presence of a `config/` directory marks the repo root.
    """
    start = start.resolve()
    for p in [start] + list(start.parents):
        if (p / "config").is_dir():
            return p
    return None


# ---------------------------------------------------------------------------
# Typed config dataclasses
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class SimplifyConfig:
    angle_fraction: float = DEFAULT_ANGLE_FRACTION


@dataclass(frozen=True)
class TrackstampConfig:
    """
    Fully merged trackstamp configuration.

    Attributes:
    - simplify: polyline simplification settings
    - pauses: activity -> pause thresholds
    - source: provenance map showing where each value came from
    """

    simplify: SimplifyConfig
    pauses: PausePolicy
    source: dict[str, str]


# ---------------------------------------------------------------------------
# Main config loader
# ---------------------------------------------------------------------------
def load_config(
    repo_root: Optional[Path] = None,
    repo_config_path: Optional[Path] = None,
    user_config_path: Optional[Path] = None,
) -> TrackstampConfig:
    """
    Load, merge, and validate all trackstamp configuration.

    This function is the single authoritative entry point
    for configuration access. Call it once at startup.
    """

    # Locate repo and config files
    if repo_root is None:
        repo_root = find_repo_root(Path(__file__).resolve())
    if repo_config_path is None and repo_root is not None:
        repo_config_path = repo_root / "config" / "config.toml"
    if user_config_path is None:
        user_config_path = Path.home() / ".config" / "trackstamp" / "config.toml"

    layers = []
    if repo_config_path:
        layers.append((_load_toml(repo_config_path), f"repo:{repo_config_path}"))
    if user_config_path:
        layers.append((_load_toml(user_config_path), f"user:{user_config_path}"))

    angle_fraction = DEFAULT_ANGLE_FRACTION
    profiles: dict[str, PauseThresholds] = dict(DEFAULT_PAUSE_PROFILES)

    src = {"simplify.angle_fraction": "default"}
    for name in profiles:
        src[f"pauses.{name}"] = "default"

    # Repo first, then user (user overrides repo, per profile)
    for cfg, origin in layers:
        v = _as_float(_deep_get(cfg, "simplify.angle_fraction"), "simplify.angle_fraction", origin)
        if v is not None:
            angle_fraction = _check_angle_fraction(v, origin)
            src["simplify.angle_fraction"] = origin

        for name, thresholds in _parse_pause_section(cfg, origin).items():
            profiles[name] = thresholds
            src[f"pauses.{name}"] = origin

    # Environment variable overrides (highest non-CLI precedence)
    env_val = os.environ.get("TRACKSTAMP_ANGLE_FRACTION")
    if env_val:
        origin = "env:TRACKSTAMP_ANGLE_FRACTION"
        angle_fraction = _check_angle_fraction(
            _as_float(env_val, "TRACKSTAMP_ANGLE_FRACTION", origin), origin
        )
        src["simplify.angle_fraction"] = origin

    return TrackstampConfig(
        simplify=SimplifyConfig(angle_fraction=angle_fraction),
        pauses=PausePolicy(profiles=profiles),
        source=src,
    )
