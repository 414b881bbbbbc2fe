"""Configuration errors."""


class ConfigurationError(Exception):
    """Required settings are missing or invalid.

    Raised while loading settings, before any provider call is made.

    Attributes:
        missing: dotted names of the missing options, when known
    """

    def __init__(self, message: str, missing: tuple[str, ...] = ()):
        super().__init__(message)
        self.missing = missing
