"""Translation provider contract.

The synchronizer talks to the translation-management service only through
this interface. Implementations raise TransportError when the service cannot
be reached and ProviderRejectedError when it answers with an unexpected
status; they never return error sentinels.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Sequence

RESJSON_I18N_TYPE = "RESJSON"


class TranslationProvider(ABC):
    """Abstract Base Class for translation providers."""

    @abstractmethod
    def list_resources(self) -> List[Dict[str, Any]]:
        """Return the resources registered in the project."""

    @abstractmethod
    def get_project_details(self) -> Dict[str, Any]:
        """Return project details; must contain ``teams`` and ``resources``."""

    @abstractmethod
    def create_resource(self, name: str, slug: str, content: str) -> Any:
        """Register a new resource with its source content."""

    @abstractmethod
    def update_resource_content(self, slug: str, content: str) -> Dict[str, Any]:
        """Replace the source content of a resource.

        Returns:
            Counts with keys ``strings_added``, ``strings_updated`` and
            ``strings_delete``.
        """

    @abstractmethod
    def update_translation_content(
        self, slug: str, language_code: str, content: str
    ) -> Dict[str, Any]:
        """Replace the whole translation of a resource for one language."""

    @abstractmethod
    def get_translation_file(self, slug: str, language_code: str, mode: str) -> str:
        """Download the translated resource file as raw text."""

    @abstractmethod
    def update_string_translation(
        self, slug: str, language_code: str, string_hash: str, translation: Any
    ) -> Any:
        """Set the translation of a single string addressed by its hash."""

    @abstractmethod
    def update_source_comment(self, slug: str, string_hash: str, comment: str) -> Any:
        """Set the translator instruction of a single source string."""

    @abstractmethod
    def create_language(self, language_code: str, coordinators: Sequence[str]) -> Any:
        """Create a language team in the project."""
