"""Local file tree of RESJSON resources.

Layout::

    <source_path>/<slug>.resjson            source language resources
    <strings_path>/<xx-YY>/<slug>.resjson   one directory per translation

Directories under ``strings_path`` whose name is not a locale tag are not
translation directories and are skipped. The source language directory may
live under ``strings_path`` too; it is never treated as a translation.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from infrastructure.configuration import Settings
from modules.resources.errors import MalformedResourceError
from modules.resources.locales import to_provider_code

RESOURCE_SUFFIX = ".resjson"


def slug_for(filename: str) -> str:
    """Resource slug is the file name without the .resjson extension."""
    return filename[: -len(RESOURCE_SUFFIX)] if filename.endswith(RESOURCE_SUFFIX) else filename


@dataclass(frozen=True)
class ResourceWorkspace:
    """Resolved paths and ignore-list of the local project.

    Attributes:
        strings_path: Root of the per-locale translation directories.
        source_path: Directory holding the source language resources.
        source_language: Provider code of the source language (e.g. en_US).
        ignored_resources: File names excluded from every operation.
    """

    strings_path: Path
    source_path: Path
    source_language: str
    ignored_resources: Tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def from_settings(cls, settings: Settings) -> "ResourceWorkspace":
        project = settings.local_project
        return cls(
            strings_path=project.strings_path,
            source_path=project.source_lang_strings_path,
            source_language=settings.transifex.source_language,
            ignored_resources=tuple(project.ignored_resources),
        )

    def is_ignored(self, filename: str) -> bool:
        return filename in self.ignored_resources

    def source_resource_path(self, slug: str) -> Path:
        return self.source_path / f"{slug}{RESOURCE_SUFFIX}"

    def source_resource_exists(self, slug: str) -> bool:
        return self.source_resource_path(slug).is_file()

    def source_resource_slugs(self, include_ignored: bool = False) -> List[str]:
        """Return the slugs of every source resource, sorted by file name."""
        if not self.source_path.is_dir():
            return []
        return [
            slug_for(path.name)
            for path in sorted(self.source_path.glob(f"*{RESOURCE_SUFFIX}"))
            if path.is_file() and (include_ignored or not self.is_ignored(path.name))
        ]

    def translation_path(self, locale_tag: str, slug: str) -> Path:
        return self.strings_path / locale_tag / f"{slug}{RESOURCE_SUFFIX}"

    def locale_tags(self, only: Optional[Sequence[str]] = None) -> List[str]:
        """Return the translation directories under ``strings_path``.

        Args:
            only: Optional subset of tags to keep.

        Returns:
            Sorted directory names that map to a provider code other than
            the source language.
        """
        if not self.strings_path.is_dir():
            return []
        tags = []
        for path in sorted(self.strings_path.iterdir()):
            if not path.is_dir():
                continue
            provider_code = to_provider_code(path.name)
            if not provider_code or provider_code == self.source_language:
                continue
            if only is not None and path.name not in only:
                continue
            tags.append(path.name)
        return tags

    def translation_slugs(self, locale_tag: str) -> List[str]:
        """Return the non-ignored resource slugs present for one locale."""
        directory = self.strings_path / locale_tag
        if not directory.is_dir():
            return []
        return [
            slug_for(path.name)
            for path in sorted(directory.glob(f"*{RESOURCE_SUFFIX}"))
            if path.is_file() and not self.is_ignored(path.name)
        ]


def read_text(path: Path) -> str:
    """Read a resource file without newline translation.

    Raises:
        MalformedResourceError: If the file is not valid UTF-8.
    """
    try:
        with open(path, "r", encoding="utf-8", newline="") as f:
            return f.read()
    except UnicodeDecodeError as e:
        raise MalformedResourceError(f"not valid UTF-8: {e}", source=str(path)) from e


def write_text(path: Path, text: str) -> None:
    """Write a resource file, creating parent directories as needed."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write(text)
