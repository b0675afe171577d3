# trackstamp/util/logging.py
from __future__ import annotations

import datetime
import sys

_verbose = False


def set_verbose(enabled: bool) -> None:
    """Turn debug() output on or off for the rest of the process."""
    global _verbose
    _verbose = bool(enabled)


def log(msg: str) -> None:
    """Print a timestamped log line (local time with timezone) to stderr."""
    ts = datetime.datetime.now().astimezone().isoformat(timespec="seconds")
    print(f"{ts}  {msg}", file=sys.stderr)


def debug(msg: str) -> None:
    """Like log(), but only when verbose output was requested."""
    if _verbose:
        log(msg)
