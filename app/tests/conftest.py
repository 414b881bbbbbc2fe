import sys
import threading
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple

# Ensure the application package root is on sys.path so importing application
# modules (e.g. `modules.resources`) works during pytest collection.
project_root = str(Path(__file__).resolve().parents[1])
if project_root not in sys.path:
    sys.path.insert(0, project_root)

import pytest

from infrastructure.configuration import Settings, load_settings
from modules.resources.provider import TranslationProvider
from modules.resources.workspace import ResourceWorkspace

SOURCE_MAIN = """{
    // Main application strings
    "app.title"   :  "My App",
    "_app.title.comment": "Shown in the title bar",

    "app.greeting": "Hello",
    "_app.farewell.comment": "Describes a removed string",
    "app.empty": "",
}
"""

SOURCE_OTHER = """{
    "other.ok": "OK",
    "other.cancel": "Cancel"
}
"""

FI_MAIN = """{
  "app.greeting": "Hei",
  "app.title": "Sovellukseni",
  "_app.title.comment": "Shown in the title bar"
}
"""

SV_MAIN = """{
  "app.title": "Min app",
  "app.greeting": ""
}
"""


class FakeProvider(TranslationProvider):
    """In-memory TranslationProvider recording every call.

    Attributes:
        calls: (method, args) tuples in call order
        failures: (method, first_arg) -> exception to raise
        details: project details returned by get_project_details
        files: (slug, language_code) -> translation body
    """

    def __init__(
        self,
        details: Optional[Dict[str, Any]] = None,
        files: Optional[Dict[Tuple[str, str], str]] = None,
        failures: Optional[Dict[Tuple[str, str], Exception]] = None,
    ):
        self.calls: List[Tuple[str, tuple]] = []
        self.details = details or {"teams": [], "resources": []}
        self.files = files or {}
        self.failures = failures or {}
        self._lock = threading.Lock()

    def _record(self, method: str, *args: Any) -> None:
        with self._lock:
            self.calls.append((method, args))
        error = self.failures.get((method, str(args[0]) if args else ""))
        if error is not None:
            raise error

    def calls_to(self, method: str) -> List[tuple]:
        return [args for name, args in self.calls if name == method]

    def list_resources(self) -> List[Dict[str, Any]]:
        self._record("list_resources")
        return list(self.details.get("resources", []))

    def get_project_details(self) -> Dict[str, Any]:
        self._record("get_project_details")
        return self.details

    def create_resource(self, name: str, slug: str, content: str) -> Any:
        self._record("create_resource", slug, name, content)
        return {"slug": slug}

    def update_resource_content(self, slug: str, content: str) -> Dict[str, Any]:
        self._record("update_resource_content", slug, content)
        return {"strings_added": 1, "strings_updated": 2, "strings_delete": 0}

    def update_translation_content(
        self, slug: str, language_code: str, content: str
    ) -> Dict[str, Any]:
        self._record("update_translation_content", slug, language_code, content)
        return {"strings_added": 0, "strings_updated": 1, "strings_delete": 0}

    def get_translation_file(self, slug: str, language_code: str, mode: str) -> str:
        self._record("get_translation_file", slug, language_code, mode)
        return self.files[(slug, language_code)]

    def update_string_translation(
        self, slug: str, language_code: str, string_hash: str, translation: Any
    ) -> Any:
        self._record("update_string_translation", slug, language_code, string_hash, translation)
        return None

    def update_source_comment(self, slug: str, string_hash: str, comment: str) -> Any:
        self._record("update_source_comment", slug, string_hash, comment)
        return None

    def create_language(self, language_code: str, coordinators: Sequence[str]) -> Any:
        self._record("create_language", language_code, tuple(coordinators))
        return {"language_code": language_code}


@pytest.fixture
def strings_dir(tmp_path):
    """Create a local RESJSON tree.

    Returns the strings directory laid out like:
    - en-US/main.resjson, en-US/other.resjson, en-US/ignored.resjson (source)
    - fi-FI/main.resjson
    - sv-SE/main.resjson
    - images/ (not a locale directory)
    """
    strings = tmp_path / "strings"
    source = strings / "en-US"
    source.mkdir(parents=True)
    (source / "main.resjson").write_text(SOURCE_MAIN, encoding="utf-8")
    (source / "other.resjson").write_text(SOURCE_OTHER, encoding="utf-8")
    (source / "ignored.resjson").write_text('{"x": "y"}', encoding="utf-8")

    (strings / "fi-FI").mkdir()
    (strings / "fi-FI" / "main.resjson").write_text(FI_MAIN, encoding="utf-8")
    (strings / "sv-SE").mkdir()
    (strings / "sv-SE" / "main.resjson").write_text(SV_MAIN, encoding="utf-8")
    (strings / "images").mkdir()
    return strings


@pytest.fixture
def settings_data(strings_dir) -> Dict[str, Any]:
    """Configuration as it would appear in transifex-config.resjson."""
    return {
        "transifex": {
            "api": "https://tx.example.com/api/2/",
            "auth": {"user": "bot", "pass": "s3cret"},
            "projectSlug": "my-app",
            "langCoordinators": ["coordinator"],
            "sourceLanguage": "en_US",
        },
        "localProject": {
            "stringsPath": str(strings_dir),
            "sourceLangStringsPath": str(strings_dir / "en-US"),
            "ignoredResources": ["ignored.resjson"],
        },
        "maxWorkers": 4,
    }


@pytest.fixture
def settings(settings_data) -> Settings:
    return load_settings(overrides=settings_data)


@pytest.fixture
def workspace(settings) -> ResourceWorkspace:
    return ResourceWorkspace.from_settings(settings)


@pytest.fixture
def fake_provider() -> FakeProvider:
    return FakeProvider()


@pytest.fixture
def make_provider():
    """Factory for a FakeProvider with canned details, files or failures."""
    return FakeProvider
