"""
Common test fixtures shared by all modules.

Provides factory functions for Merkle test data:
- Sample e-mail addresses (the end-to-end scenario)
- Leaf digest lists of arbitrary size
- Bit-flipping helper for tamper tests
"""

from typing import Any, Sequence

from core.crypto.hashing import sha256


SAMPLE_EMAILS = ["marco@example.com", "jenna@example.com", "tanay@example.com"]


def make_items(count: int, prefix: str = "leaf") -> list[str]:
    """`count` distinct string items."""
    return [f"{prefix}{i}" for i in range(count)]


def make_leaves(count: int, prefix: str = "leaf") -> list[bytes]:
    """SHA-256 leaf digests of make_items(count)."""
    return [sha256(item.encode("utf-8")) for item in make_items(count, prefix)]


def hash_strings(items: Sequence[Any]) -> list[bytes]:
    """SHA-256 of each string's UTF-8 bytes."""
    return [sha256(item.encode("utf-8")) for item in items]


def flip_bit(data: bytes, bit: int = 0) -> bytes:
    """Copy of `data` with one bit inverted."""
    buf = bytearray(data)
    buf[bit // 8] ^= 1 << (bit % 8)
    return bytes(buf)
