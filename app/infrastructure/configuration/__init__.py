"""Infrastructure configuration module - public API.

Configuration is loaded once per command with load_settings() and passed
explicitly to the components that need it.

Example:
    ```python
    from infrastructure.configuration import load_settings

    settings = load_settings("transifex-config.resjson")
    settings.transifex.api
    settings.local_project.strings_path
    ```
"""

from infrastructure.configuration.errors import ConfigurationError
from infrastructure.configuration.features import LocalProjectSettings
from infrastructure.configuration.integrations import TransifexAuth, TransifexSettings
from infrastructure.configuration.settings import (
    DEFAULT_CONFIG_FILE,
    Settings,
    load_settings,
)

__all__ = [
    "ConfigurationError",
    "DEFAULT_CONFIG_FILE",
    "LocalProjectSettings",
    "Settings",
    "TransifexAuth",
    "TransifexSettings",
    "load_settings",
]
