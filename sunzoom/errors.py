"""Exceptions raised to callers of the engine.

Data-shape problems in the input are never raised; they are recovered
locally and logged.
"""


class SunzoomError(Exception):
    """Base class for sunzoom errors."""


class UnknownNodeError(SunzoomError, KeyError):
    """A node id or name path does not exist in the current layout."""


class ConfigError(SunzoomError, ValueError):
    """A configuration value is present but invalid."""
