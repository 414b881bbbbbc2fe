"""RESJSON resource document model.

RESJSON is relaxed JSON: comments, trailing commas and unquoted keys are
allowed. A resource file is a flat object of string entries. Keys starting
with ``_`` are annotations (translator comments), conventionally named
``_<key>.comment`` after the data key they describe.

Usage:
    from modules.resources.document import parse

    doc = parse(path.read_text(encoding="utf-8"))
    for key in doc.data_keys():
        ...
"""

import json
import re
from collections.abc import MutableMapping
from typing import Any, Dict, Iterator, List, Optional, Tuple

import json5

from modules.resources.errors import InvalidAnnotationKeyError, MalformedResourceError

ANNOTATION_PREFIX = "_"
ANNOTATION_KEY_PATTERN = re.compile(r"^_(.*)\.comment$")


def is_annotation_key(key: str) -> bool:
    """All keys beginning with an underscore are annotations."""
    return key.startswith(ANNOTATION_PREFIX)


def data_key_for_annotation(key: str) -> str:
    """Return the data key an annotation belongs to.

    Raises:
        InvalidAnnotationKeyError: If key is not of the form ``_<key>.comment``.
    """
    match = ANNOTATION_KEY_PATTERN.match(key)
    if not match:
        raise InvalidAnnotationKeyError(key)
    return match.group(1)


def annotation_key_for(data_key: str) -> str:
    return f"{ANNOTATION_PREFIX}{data_key}.comment"


def is_empty_value(value: Any) -> bool:
    """Explicit emptiness predicate used for pruning.

    Empty strings, empty lists, empty objects and null are empty. Numbers and
    booleans never are.
    """
    if value is None:
        return True
    if isinstance(value, (bool, int, float)):
        return False
    if isinstance(value, (str, list, tuple, dict)):
        return len(value) == 0
    return False


class ResourceDocument(MutableMapping):
    """Ordered key/value entries of a resource file.

    Keys keep their first-seen order. Deleting entries never reorders the
    remaining ones.
    """

    def __init__(self, entries: Optional[Dict[str, Any]] = None):
        self._entries: Dict[str, Any] = dict(entries or {})

    def __getitem__(self, key: str) -> Any:
        return self._entries[key]

    def __setitem__(self, key: str, value: Any) -> None:
        self._entries[key] = value

    def __delitem__(self, key: str) -> None:
        del self._entries[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"ResourceDocument({self._entries!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ResourceDocument):
            return list(self._entries.items()) == list(other._entries.items())
        return NotImplemented

    def data_keys(self) -> List[str]:
        return [k for k in self._entries if not is_annotation_key(k)]

    def annotation_keys(self) -> List[str]:
        return [k for k in self._entries if is_annotation_key(k)]

    def data_items(self) -> List[Tuple[str, Any]]:
        return [(k, v) for k, v in self._entries.items() if not is_annotation_key(k)]

    def to_dict(self) -> Dict[str, Any]:
        return dict(self._entries)

    def to_json(self) -> str:
        """Serialize as indented JSON, the format uploaded to the provider."""
        return json.dumps(self._entries, indent=2, ensure_ascii=False)


def parse(text: str, source: Optional[str] = None) -> ResourceDocument:
    """Parse RESJSON text into a ResourceDocument.

    Args:
        text: Raw file content. A leading byte order mark is ignored.
        source: Optional file name used in error messages.

    Returns:
        ResourceDocument with entries in file order.

    Raises:
        MalformedResourceError: If the text is not a relaxed-JSON object.
    """
    if text.startswith("\ufeff"):
        text = text[1:]
    try:
        data = json5.loads(text, object_pairs_hook=dict)
    except ValueError as e:
        raise MalformedResourceError(f"invalid RESJSON: {e}", source=source) from e

    if not isinstance(data, dict):
        raise MalformedResourceError(
            f"expected a key-value object, got {type(data).__name__}",
            source=source,
        )
    return ResourceDocument(data)
