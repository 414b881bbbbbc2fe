"""Transifex integration settings."""

from typing import Tuple

from pydantic import Field

from infrastructure.configuration.base import SettingsSection


class TransifexAuth(SettingsSection):
    """Basic-auth credentials of the Transifex API.

    Environment Variables:
        TRANSIFEX__AUTH__USER: API user
        TRANSIFEX__AUTH__PASS: API password or token
    """

    user: str
    password: str = Field(alias="pass", repr=False)


class TransifexSettings(SettingsSection):
    """Transifex project configuration.

    Config file keys (``transifex`` section):
        api: API root, e.g. https://www.transifex.com/api/2
        auth: {user, pass}
        projectSlug: Project slug in Transifex
        langCoordinators: Users set as coordinators of created languages
        sourceLanguage: Provider code of the source language (e.g. en_US)
        translationMode: Download mode for pulled translations
            (default, reviewed, translator, ...)
        requestTimeout: Seconds to wait for a single API response
    """

    api: str
    auth: TransifexAuth
    project_slug: str
    lang_coordinators: Tuple[str, ...]
    source_language: str
    translation_mode: str = "default"
    request_timeout: int = Field(default=60, gt=0)
