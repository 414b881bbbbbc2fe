"""RESJSON resource synchronization module.

This module keeps a local tree of RESJSON string resources in sync with a
translation-management provider.

Features:
- Relaxed-JSON resource parsing with annotation (``_key.comment``) entries
- Pruning of empty strings and orphan annotations before upload
- Provider string identity hashes for single-key updates
- Structural merge of pulled translations into the source file layout
- Locale tag mapping between ``xx-YY`` directories and ``xx_YY`` codes
- Concurrent, partial-failure tolerant push/pull against the provider
"""

from modules.resources.document import (
    ResourceDocument,
    data_key_for_annotation,
    is_annotation_key,
    is_empty_value,
    parse,
)
from modules.resources.errors import (
    ConfigurationError,
    InvalidAnnotationKeyError,
    MalformedResourceError,
    ProviderError,
    ProviderRejectedError,
    ResourceSyncError,
    TransportError,
    UsageError,
)
from modules.resources.hashing import source_string_hash
from modules.resources.locales import from_provider_code, to_provider_code
from modules.resources.merge import MergeResult, reorder_and_replace
from modules.resources.provider import TranslationProvider
from modules.resources.sanitizer import (
    prune_empty_values,
    prune_orphan_annotations,
    sanitize,
)
from modules.resources.synchronizer import ResourceSynchronizer
from modules.resources.workspace import ResourceWorkspace

__all__ = [
    "ConfigurationError",
    "InvalidAnnotationKeyError",
    "MalformedResourceError",
    "MergeResult",
    "ProviderError",
    "ProviderRejectedError",
    "ResourceDocument",
    "ResourceSyncError",
    "ResourceSynchronizer",
    "ResourceWorkspace",
    "TranslationProvider",
    "TransportError",
    "UsageError",
    "data_key_for_annotation",
    "from_provider_code",
    "is_annotation_key",
    "is_empty_value",
    "parse",
    "prune_empty_values",
    "prune_orphan_annotations",
    "reorder_and_replace",
    "sanitize",
    "source_string_hash",
    "to_provider_code",
]
