"""Transifex API client.

Implements the TranslationProvider contract over the Transifex REST API (v2)
with HTTP basic auth. Every call either returns the decoded response or
raises:

- TransportError when no response was received (connection, timeout)
- ProviderRejectedError when the status code is not the expected one

Usage:
    from integrations.transifex import TransifexClient

    client = TransifexClient(settings.transifex)
    details = client.get_project_details()
"""

import json
from typing import Any, Dict, List, Optional, Sequence
from urllib.parse import quote

import requests

from infrastructure.configuration import TransifexSettings
from infrastructure.logging import get_module_logger
from modules.resources.errors import ProviderRejectedError, TransportError
from modules.resources.provider import RESJSON_I18N_TYPE, TranslationProvider

logger = get_module_logger()


def _segment(value: str) -> str:
    """Quote a value used as a single URL path segment (e.g. sr@latin)."""
    return quote(value, safe="")


class TransifexClient(TranslationProvider):
    """Transifex project client.

    Attributes:
        base_url: API root followed by ``/project/<slug>``
        timeout: Default timeout in seconds
        session: Requests session with connection pooling and auth
    """

    def __init__(
        self,
        settings: TransifexSettings,
        session: Optional[requests.Session] = None,
    ) -> None:
        """Initialize the client.

        Args:
            settings: Transifex section of the command settings
            session: Optional pre-built session (tests)
        """
        self.base_url = f"{settings.api.rstrip('/')}/project/{_segment(settings.project_slug)}"
        self.timeout = settings.request_timeout
        self._session = session or requests.Session()
        self._session.auth = (settings.auth.user, settings.auth.password)
        self._session.headers.update(
            {
                "User-Agent": "resjson-sync/1.0",
                "Accept": "application/json",
            }
        )
        self._logger = logger.bind(project_slug=settings.project_slug)

    def _request(
        self,
        method: str,
        path: str,
        expected_status: int = 200,
        json_data: Optional[Dict[str, Any]] = None,
    ) -> requests.Response:
        """Send a request and check its status.

        Args:
            method: HTTP method (GET, POST, PUT)
            path: Path below the project URL, query string included
            expected_status: The only status treated as success
            json_data: JSON request body

        Returns:
            The response

        Raises:
            TransportError: If no response was received
            ProviderRejectedError: If the status differs from expected_status
        """
        url = f"{self.base_url}{path}"
        log = self._logger.bind(method=method, url=url)
        log.debug("transifex_request")

        try:
            response = self._session.request(
                method=method,
                url=url,
                json=json_data,
                timeout=self.timeout,
            )
        except requests.Timeout as e:
            log.error("transifex_timeout", timeout=self.timeout)
            raise TransportError(f"Request timeout after {self.timeout}s: {method} {url}") from e
        except requests.ConnectionError as e:
            log.error("transifex_connection_error", error=str(e))
            raise TransportError(f"Connection error: {method} {url}: {e}") from e
        except requests.RequestException as e:
            log.error("transifex_request_error", error=str(e))
            raise TransportError(f"Request failed: {method} {url}: {e}") from e

        log = log.bind(status_code=response.status_code)
        if response.status_code != expected_status:
            log.debug("transifex_unexpected_status", body=response.text[:200])
            raise ProviderRejectedError(response.status_code, response.text, url=url)

        log.debug("transifex_response")
        return response

    @staticmethod
    def _decode(response: requests.Response) -> Any:
        """Decode a JSON body, falling back to the raw text."""
        if not response.content:
            return None
        try:
            return response.json()
        except (json.JSONDecodeError, ValueError):
            return response.text

    def list_resources(self) -> List[Dict[str, Any]]:
        return self._decode(self._request("GET", "/resources/")) or []

    def get_project_details(self) -> Dict[str, Any]:
        return self._decode(self._request("GET", "/?details")) or {}

    def create_resource(self, name: str, slug: str, content: str) -> Any:
        response = self._request(
            "POST",
            "/resources/",
            expected_status=201,
            json_data={
                "name": name,
                "slug": slug,
                "content": content,
                "i18n_type": RESJSON_I18N_TYPE,
            },
        )
        return self._decode(response)

    def update_resource_content(self, slug: str, content: str) -> Dict[str, Any]:
        response = self._request(
            "PUT",
            f"/resource/{_segment(slug)}/content",
            json_data={"content": content, "i18n_type": RESJSON_I18N_TYPE},
        )
        return self._decode(response)

    def update_translation_content(
        self, slug: str, language_code: str, content: str
    ) -> Dict[str, Any]:
        response = self._request(
            "PUT",
            f"/resource/{_segment(slug)}/translation/{_segment(language_code)}/",
            json_data={"content": content, "i18n_type": RESJSON_I18N_TYPE},
        )
        return self._decode(response)

    def get_translation_file(self, slug: str, language_code: str, mode: str) -> str:
        """Download a translation as the raw RESJSON file body."""
        response = self._request(
            "GET",
            f"/resource/{_segment(slug)}/translation/{_segment(language_code)}/"
            f"?file&mode={quote(mode)}",
        )
        return response.content.decode("utf-8")

    def update_string_translation(
        self, slug: str, language_code: str, string_hash: str, translation: Any
    ) -> Any:
        response = self._request(
            "PUT",
            f"/resource/{_segment(slug)}/translation/{_segment(language_code)}"
            f"/string/{string_hash}/",
            json_data={"translation": translation},
        )
        return self._decode(response)

    def update_source_comment(self, slug: str, string_hash: str, comment: str) -> Any:
        response = self._request(
            "PUT",
            f"/resource/{_segment(slug)}/source/{string_hash}/",
            json_data={"comment": comment},
        )
        return self._decode(response)

    def create_language(self, language_code: str, coordinators: Sequence[str]) -> Any:
        response = self._request(
            "POST",
            "/languages/",
            expected_status=201,
            json_data={
                "language_code": language_code,
                "coordinators": list(coordinators),
            },
        )
        return self._decode(response)
