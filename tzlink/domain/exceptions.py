"""
Domain-specific exception hierarchy for tzlink.

Unrecognized natural-language input is not an error and never raises; it
yields ``None`` from the parser. Unknown IANA zone names inside the engine
propagate pendulum's ``InvalidTimezone`` unchanged.
"""


class TzLinkError(Exception):
    """Base class for all application-level errors."""


class ConfigurationError(TzLinkError):
    """Raised when a configuration file cannot be read or has the wrong shape."""
