"""Tests for SHA-256 hashing helpers."""

from __future__ import annotations

from utils.hashing import hash_sha256_hex


def test_sha256_hex_truncation() -> None:
    """Ensure digests can be truncated."""
    digest = hash_sha256_hex(b"ideinfo")
    assert len(digest) == 64
    assert hash_sha256_hex(b"ideinfo", length=12) == digest[:12]
