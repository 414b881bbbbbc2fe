"""Structural merge of translations into the source resource layout.

Translated files pulled from the provider lose the source file's key order,
blank lines and comments. The merge takes the source text as a template and
substitutes, key by key, the quoted value of each assignment with the
translated value. Everything outside matched values is kept verbatim.

Usage:
    from modules.resources.merge import reorder_and_replace

    result = reorder_and_replace(source_text, parse(translation_text))
    if result.unmatched_keys:
        ...
    path.write_text(result.text, encoding="utf-8")
"""

import json
import re
from dataclasses import dataclass, field
from typing import Any, List, Optional, Tuple

from infrastructure.logging import get_module_logger
from modules.resources.document import ResourceDocument, parse

logger = get_module_logger()

# A complete JSON string literal, escapes included.
_STRING_LITERAL = r'"(?:[^"\\]|\\.)*"'


@dataclass
class MergeResult:
    """Result of a structural merge.

    Attributes:
        text: The merged text; equals the template when nothing matched.
        replaced_keys: Keys whose value was substituted.
        unmatched_keys: Translated keys with no assignment in the template.
    """

    text: str
    replaced_keys: List[str] = field(default_factory=list)
    unmatched_keys: List[str] = field(default_factory=list)

    @property
    def is_degraded(self) -> bool:
        return bool(self.unmatched_keys)


def _assignment_pattern(key: str) -> "re.Pattern[str]":
    return re.compile(r'("' + re.escape(key) + r'\s*"\s*:\s*)' + _STRING_LITERAL)


def replace_value(text: str, key: str, value: Any) -> Tuple[str, int]:
    """Replace the value assigned to ``key`` with the JSON form of ``value``.

    Returns:
        The new text and the number of substitutions made.
    """
    replacement = json.dumps(value, ensure_ascii=False)
    return _assignment_pattern(key).subn(
        lambda match: match.group(1) + replacement, text
    )


def reorder_and_replace(
    original_raw_text: str,
    translated_doc: ResourceDocument,
    source: Optional[str] = None,
) -> MergeResult:
    """Produce the original text with the translated values substituted.

    Annotation keys of the translation are skipped; the template keeps its
    own comments. Keys missing from the template are reported in
    ``unmatched_keys`` and logged, and the merge still completes.

    Args:
        original_raw_text: Source-language file content (layout template).
        translated_doc: Parsed translation.
        source: Optional label for log entries.

    Returns:
        MergeResult with the full new text.
    """
    result = MergeResult(text=original_raw_text)
    if not translated_doc:
        return result

    text = original_raw_text
    for key, value in translated_doc.data_items():
        text, count = replace_value(text, key, value)
        if count:
            result.replaced_keys.append(key)
        else:
            result.unmatched_keys.append(key)

    result.text = text
    if result.unmatched_keys:
        logger.warning(
            "merge_keys_unmatched",
            source=source,
            unmatched_keys=result.unmatched_keys,
        )
    return result


def translate_resource_content(
    translation_text: str, base_text: str, source: Optional[str] = None
) -> MergeResult:
    """Parse a translation file and merge it into the source layout."""
    return reorder_and_replace(base_text, parse(translation_text, source=source), source)
