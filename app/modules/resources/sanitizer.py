"""Pruning of resource documents before upload.

The provider rejects empty strings and annotations that do not describe an
existing string, so both are removed from the uploaded copy. Local files are
never modified by pruning.
"""

from modules.resources.document import (
    ANNOTATION_KEY_PATTERN,
    ResourceDocument,
    data_key_for_annotation,
    is_annotation_key,
    is_empty_value,
)
from infrastructure.logging import get_module_logger

logger = get_module_logger()


def prune_empty_values(doc: ResourceDocument) -> ResourceDocument:
    """Remove every entry, data or annotation, whose value is empty."""
    for key in [k for k, v in doc.items() if is_empty_value(v)]:
        logger.debug("pruned_empty_value", key=key)
        del doc[key]
    return doc


def prune_orphan_annotations(doc: ResourceDocument) -> ResourceDocument:
    """Remove annotations whose data key does not exist in the document.

    The key set is taken once, before any entry is removed, so the outcome
    does not depend on entry order.
    """
    live_keys = set(doc.keys())
    orphans = []
    for key in doc.keys():
        if not is_annotation_key(key):
            continue
        if not ANNOTATION_KEY_PATTERN.match(key):
            logger.debug("unassociated_annotation_kept", key=key)
            continue
        if data_key_for_annotation(key) not in live_keys:
            orphans.append(key)

    for key in orphans:
        logger.debug("pruned_orphan_annotation", key=key)
        del doc[key]
    return doc


def sanitize(doc: ResourceDocument) -> ResourceDocument:
    """Prune empty values, then orphan annotations."""
    return prune_orphan_annotations(prune_empty_values(doc))
