# trackstamp/errors

"""
trackstamp.errors

Central exception hierarchy for trackstamp.

  - Readers and config code raise specific, meaningful errors.
  - Callers can catch TrackstampError (broad) or specific subclasses (narrow).
  - AnalysisError and its subclasses never escape summarize(); a failing
    block builder is turned into an absent block there.
"""


class TrackstampError(RuntimeError):
    """Base class for all trackstamp runtime errors."""


# ---- Input / format errors ---------------------

class InvalidGpxError(TrackstampError):
    """GPX file could not be parsed or did not contain a usable track segment."""


# ---- Configuration errors ----------------------

class ConfigError(TrackstampError):
    """Config file is malformed or holds values outside their allowed range."""


# ---- Analysis errors ---------------------------

class AnalysisError(TrackstampError):
    """An analyzer could not produce its result block for the whole track."""

class InsufficientDataError(AnalysisError):
    """Too few samples for the requested statistic."""

class MissingFieldError(AnalysisError):
    """A sample lacks the elevation or timestamp the statistic needs."""

class UnsupportedActivityError(AnalysisError):
    """No pause thresholds are configured for the track's activity."""
