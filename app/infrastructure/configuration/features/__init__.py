"""Feature settings."""

from infrastructure.configuration.features.resources import LocalProjectSettings

__all__ = ["LocalProjectSettings"]
