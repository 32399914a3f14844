class RadarError(Exception):
    """Base error for the radar pipeline."""


class ConfigurationError(RadarError):
    """
    Fatal configuration problem (missing credentials, unreadable config).
    Raised before any batch work starts.
    """
