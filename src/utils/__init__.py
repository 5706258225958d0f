"""Shared utilities for ideinfo."""

from utils.hashing import hash_sha256_hex

__all__ = [
    "hash_sha256_hex",
]
