"""Errors for the resources module."""

from typing import Any, Optional, Tuple

from infrastructure.configuration.errors import ConfigurationError

__all__ = [
    "ConfigurationError",
    "InvalidAnnotationKeyError",
    "MalformedResourceError",
    "ProviderError",
    "ProviderRejectedError",
    "ResourceSyncError",
    "TransportError",
    "UsageError",
    "classify_sync_error",
]


class ResourceSyncError(Exception):
    """Base class for resource parsing, usage and provider errors."""


class MalformedResourceError(ResourceSyncError):
    """A resource file cannot be parsed into a key-value object.

    Attributes:
        source: path or label of the offending text, when known
    """

    def __init__(self, message: str, source: Optional[str] = None):
        super().__init__(f"{source}: {message}" if source else message)
        self.source = source


class InvalidAnnotationKeyError(ResourceSyncError):
    """An annotation key does not have the ``_<name>.comment`` shape."""

    def __init__(self, key: str):
        super().__init__(f"Not an annotation key of the form '_<key>.comment': {key!r}")
        self.key = key


class UsageError(ResourceSyncError):
    """The command was invoked with arguments that cannot be satisfied."""


class ProviderError(ResourceSyncError):
    """Base class for errors reported while talking to the provider."""


class TransportError(ProviderError):
    """The provider could not be reached or did not answer."""


class ProviderRejectedError(ProviderError):
    """The provider answered with an unexpected status code.

    Attributes:
        status_code: HTTP status returned by the provider
        body: response body, for troubleshooting
    """

    def __init__(self, status_code: int, body: Any = None, url: Optional[str] = None):
        detail = f"[{status_code}]: {body}" if body else f"[{status_code}]"
        super().__init__(f"{url} {detail}" if url else detail)
        self.status_code = status_code
        self.body = body
        self.url = url


def classify_sync_error(exc: Exception) -> Tuple[str, str]:
    """Classify an exception raised by a unit of work into (message, error_code).

    Status Code Mapping:
    - no response: TRANSPORT_ERROR
    - 401/403: UNAUTHORIZED
    - 404: NOT_FOUND
    - 429, 5xx: PROVIDER_UNAVAILABLE
    - other statuses: PROVIDER_REJECTED
    - local parse errors: MALFORMED_RESOURCE

    Args:
        exc: Exception raised by the unit

    Returns:
        Tuple of human-friendly message and machine error code
    """
    if isinstance(exc, TransportError):
        return f"Connection error: {exc}", "TRANSPORT_ERROR"

    if isinstance(exc, ProviderRejectedError):
        status_code = exc.status_code
        if status_code in (401, 403):
            return f"Provider denied access {exc}", "UNAUTHORIZED"
        if status_code == 404:
            return f"Provider resource not found {exc}", "NOT_FOUND"
        if status_code == 429 or 500 <= status_code < 600:
            return f"Provider unavailable {exc}", "PROVIDER_UNAVAILABLE"
        return f"Provider rejected request {exc}", "PROVIDER_REJECTED"

    if isinstance(exc, (MalformedResourceError, InvalidAnnotationKeyError)):
        return str(exc), "MALFORMED_RESOURCE"

    if isinstance(exc, OSError):
        return f"File error: {exc}", "FILE_ERROR"

    return f"{type(exc).__name__}: {exc}", "UNKNOWN_ERROR"
