"""resjson-sync configuration settings - main aggregator."""

from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import json5
from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from infrastructure.configuration.errors import ConfigurationError
from infrastructure.configuration.features import LocalProjectSettings
from infrastructure.configuration.integrations import TransifexSettings
from infrastructure.logging import get_module_logger

logger = get_module_logger()

DEFAULT_CONFIG_FILE = "transifex-config.resjson"


class Settings(BaseSettings):
    """resjson-sync configuration - main aggregator.

    A Settings instance is immutable and is passed explicitly to every
    component that needs it; there is no module-level settings object.

    Sources, highest priority first:
        1. keyword arguments (command line overrides)
        2. the RESJSON config file, see load_settings()
        3. environment variables, nested with ``__``
           (e.g. TRANSIFEX__AUTH__PASS)
        4. ``.env``

    Environment Variables:
        LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR)
        LOG_JSON: Render logs as JSON lines

    Example:
        ```python
        from infrastructure.configuration import load_settings

        settings = load_settings("transifex-config.resjson")
        project = settings.transifex.project_slug
        strings = settings.local_project.strings_path
        ```
    """

    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False
    max_workers: int = Field(default=8, alias="maxWorkers", gt=0)

    transifex: TransifexSettings
    local_project: LocalProjectSettings = Field(alias="localProject")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
        populate_by_name=True,
    )


def deep_merge(base: Mapping[str, Any], overrides: Mapping[str, Any]) -> Dict[str, Any]:
    """Return ``base`` updated recursively with ``overrides``."""
    merged: Dict[str, Any] = dict(base)
    for key, value in overrides.items():
        if isinstance(value, Mapping) and isinstance(merged.get(key), Mapping):
            merged[key] = deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def read_config_file(config_file: Path) -> Dict[str, Any]:
    """Parse a RESJSON configuration file.

    Raises:
        ConfigurationError: If the file is missing or not a relaxed-JSON object.
    """
    if not config_file.is_file():
        raise ConfigurationError(f"could not find config file {config_file}")
    try:
        data = json5.loads(config_file.read_text(encoding="utf-8-sig"))
    except ValueError as e:
        raise ConfigurationError(f"could not parse config file {config_file}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigurationError(f"config file {config_file} must contain an object")
    return data


def load_settings(
    config_file: Optional[Path | str] = None,
    overrides: Optional[Mapping[str, Any]] = None,
) -> Settings:
    """Build the Settings for one command invocation.

    Args:
        config_file: Optional RESJSON configuration file.
        overrides: Values that take precedence over the file, keyed like the
            file (``{"transifex": {"translationMode": "reviewed"}}``).

    Returns:
        Validated, immutable Settings.

    Raises:
        ConfigurationError: If the file cannot be read or required options
            are missing. Every missing option is listed.
    """
    data: Dict[str, Any] = {}
    if config_file is not None:
        data = read_config_file(Path(config_file))
    if overrides:
        data = deep_merge(data, overrides)

    try:
        settings = Settings(**data)
    except ValidationError as e:
        missing = tuple(
            ".".join(str(part) for part in error["loc"])
            for error in e.errors()
            if error["type"] == "missing"
        )
        if missing:
            raise ConfigurationError(
                "missing option(s): " + ", ".join(missing), missing=missing
            ) from e
        raise ConfigurationError(f"invalid configuration: {e}") from e

    logger.debug(
        "settings_loaded",
        config_file=str(config_file) if config_file else None,
        project_slug=settings.transifex.project_slug,
    )
    return settings
