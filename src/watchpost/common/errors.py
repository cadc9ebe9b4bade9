"""Error types raised while defining monitored resources."""

from __future__ import annotations


class WatchpostError(Exception):
    """Base class for all Watchpost errors."""


class ConfigurationError(WatchpostError, ValueError):
    """An alarm declaration cannot be turned into an alarm.

    Raised at definition time and never retried: missing threshold,
    duplicate alarm identity, missing timeout for a derived threshold, or a
    malformed declaration.
    """


class CollaboratorError(WatchpostError):
    """A metric source or alarm sink failed to do its part."""


__all__ = ["WatchpostError", "ConfigurationError", "CollaboratorError"]
