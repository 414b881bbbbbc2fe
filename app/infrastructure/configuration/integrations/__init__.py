"""Integration settings."""

from infrastructure.configuration.integrations.transifex import (
    TransifexAuth,
    TransifexSettings,
)

__all__ = ["TransifexAuth", "TransifexSettings"]
