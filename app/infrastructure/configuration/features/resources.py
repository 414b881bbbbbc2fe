"""Local project settings for the resources module."""

from pathlib import Path
from typing import Tuple

from infrastructure.configuration.base import SettingsSection


class LocalProjectSettings(SettingsSection):
    """Layout of the local RESJSON tree.

    Config file keys (``localProject`` section):
        stringsPath: Directory holding one sub-directory per locale
        sourceLangStringsPath: Directory of the source language resources
        ignoredResources: File names excluded from every operation
    """

    strings_path: Path
    source_lang_strings_path: Path
    ignored_resources: Tuple[str, ...] = ()
