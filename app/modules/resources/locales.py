"""Mapping between local locale tags and provider language codes.

Local translation directories are named ``xx-YY`` (or ``xx-latn`` for Latin
script variants) while the provider uses ``xx_YY`` and ``xx@latin``.
"""

import re
from typing import Optional

LOCALE_TAG_PATTERN = re.compile(r"([a-z]{2})-([A-Z]{2}|latn)$")


def to_provider_code(locale_tag: str) -> Optional[str]:
    """Return the provider language code for a local locale tag.

    Only the trailing ``xx-YY`` segment is inspected, so a directory path such
    as ``strings/fi-FI`` is accepted.

    Args:
        locale_tag: Local tag or a path ending with one.

    Returns:
        ``xx_YY`` / ``xx@latin``, or None when the string is not a locale tag
        (e.g. a directory that does not hold translations).
    """
    match = LOCALE_TAG_PATTERN.search(locale_tag)
    if not match:
        return None
    language, region = match.groups()
    if region == "latn":
        return f"{language}@latin"
    return f"{language}_{region}"


def from_provider_code(provider_code: str) -> str:
    """Map a provider language code back to the local tag."""
    return (
        provider_code.replace("_", "-", 1)
        .replace("@", "-", 1)
        .replace("latin", "latn", 1)
    )


def is_locale_tag(name: str) -> bool:
    return LOCALE_TAG_PATTERN.fullmatch(name) is not None
