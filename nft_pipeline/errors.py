"""Custom exceptions for the Niagara Falls Transit adapter."""


class AdapterError(Exception):
    """Base class for adapter failures."""
    pass


class ConfigurationError(AdapterError):
    """Raised when the static tables do not cover a live feed record."""

    def __init__(self, message: str, record=None):
        super().__init__(message)
        self.record = record


class UnknownRouteError(ConfigurationError):
    """Raised when a route number has no color or long name entry."""
    pass


class UnresolvableStopError(ConfigurationError):
    """Raised when no rule can turn a stop code into an integer ID."""
    pass


class HeadsignMergeError(ConfigurationError):
    """Raised when two trip headsigns have no merge rule."""
    pass


class FeedLoadingError(AdapterError):
    """Raised when the GTFS feed cannot be read."""
    pass


class TransformError(AdapterError):
    """Raised when a pipeline stage fails."""
    pass
