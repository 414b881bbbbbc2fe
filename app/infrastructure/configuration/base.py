"""Shared base classes for settings sections."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class SettingsSection(BaseModel):
    """Base class for a nested section of the configuration file.

    Sections are immutable and read their keys in camelCase, the spelling
    used by ``transifex-config.resjson`` (``projectSlug``,
    ``sourceLangStringsPath``...). Snake case field names are accepted too.
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )
