"""SHA-256 digests of output payloads."""

from __future__ import annotations

import hashlib


def hash_sha256_hex(payload: bytes, *, length: int | None = None) -> str:
    """Return the SHA-256 hex digest of ``payload``, optionally truncated.

    Parameters
    ----------
    payload
        Bytes as written to disk.
    length
        Number of leading hex characters to keep.

    Returns:
    -------
    str
        Hex digest string.
    """
    digest = hashlib.sha256(payload).hexdigest()
    return digest if length is None else digest[:length]


__all__ = [
    "hash_sha256_hex",
]
