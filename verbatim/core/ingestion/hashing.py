"""Content hashing for change detection."""

import hashlib


def hash_content(raw: bytes | str) -> str:
    """SHA-256 hex digest of raw file content.

    Strings are hashed as UTF-8. The digest is only ever compared for
    equality against the stored one.
    """
    if isinstance(raw, str):
        raw = raw.encode("utf-8")
    return hashlib.sha256(raw).hexdigest()


def is_unchanged(stored_hash: str | None, raw: bytes | str) -> bool:
    """Whether raw content matches a previously stored hash."""
    return stored_hash is not None and stored_hash == hash_content(raw)
