"""Exception types for Tonal Tuner components."""


class ConfigurationError(ValueError):
    """Raised when a component is constructed with invalid settings.

    These are precondition violations caught at construction time, never
    during per-block processing.
    """
