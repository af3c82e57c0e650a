"""Exception types raised by the prize wheel engine."""


class WheelError(Exception):
    """Base class for all prize wheel errors."""


class ConfigurationError(WheelError):
    """Prize list is unusable (empty, inactive entries, or no weight).

    Raised by configure() and spin(). The caller is expected to re-fetch
    or re-validate prize data and try again.
    """


class RenderSurfaceError(WheelError):
    """Drawable surface is not available (not mounted or already closed)."""
