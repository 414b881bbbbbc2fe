"""Source string identity hash.

The provider addresses a single source string by the MD5 digest of
``key + ":" + context``. RESJSON strings have no context, so the digest is
taken over ``key + ":"``. MD5 is mandated by the provider protocol.
"""

import hashlib


def source_string_hash(key: str) -> str:
    """Return the provider hash (32 lowercase hex chars) for a string key."""
    return hashlib.md5(f"{key}:".encode("utf-8")).hexdigest()  # nosec - protocol hash
