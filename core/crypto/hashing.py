"""
Crypto - Hashing Utilities
Hash functions, leaf encodings and hex helpers for Merkle commitments.

This module provides:
- A registry of named hash functions (hashlib-backed, sha256 default)
- Leaf encodings: raw item -> bytes before hashing
- Hex encoding/decoding with 0x prefix

Security/Determinism Notes:
- Always hash raw bytes exactly as given
- No auto-stripping of whitespace from items
- The same hash function must be used for leaves and internal nodes
"""
from __future__ import annotations

import hashlib
from functools import partial
from typing import Any, Callable

from core.schemas.canonical import encode_canonical
from core.schemas.errors import InvalidInputException, UnsupportedAlgorithmException


HashFunction = Callable[[bytes], bytes]

DEFAULT_ALGORITHM = "sha256"
DEFAULT_ENCODING = "utf8"

SUPPORTED_ALGORITHMS: tuple[str, ...] = (
    "sha256",
    "sha512",
    "sha3_256",
    "blake2b",
    "blake2s",
)

SUPPORTED_ENCODINGS: tuple[str, ...] = ("utf8", "canonical_json")


def sha256(data: bytes) -> bytes:
    """
    Compute SHA-256 hash of raw bytes.

    Example:
        >>> sha256(b"hello").hex()
        '2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824'
    """
    return hashlib.sha256(data).digest()


def _hashlib_digest(algorithm: str, data: bytes) -> bytes:
    h = hashlib.new(algorithm)
    h.update(data)
    return h.digest()


def normalize_algorithm(algorithm: str) -> str:
    """Registry spelling of an algorithm name: lower case, "_" for "-"."""
    return algorithm.lower().replace("-", "_")


def get_hash_function(algorithm: str = DEFAULT_ALGORITHM) -> HashFunction:
    """
    Resolve an algorithm name to a `bytes -> bytes` digest function.

    Args:
        algorithm: One of SUPPORTED_ALGORITHMS (case-insensitive, "-" allowed
                   in place of "_", e.g. "SHA3-256")

    Returns:
        Hash function producing the algorithm's full-length digest

    Raises:
        UnsupportedAlgorithmException: If the name is not registered
    """
    name = normalize_algorithm(algorithm)
    if name not in SUPPORTED_ALGORITHMS:
        raise UnsupportedAlgorithmException(
            algorithm, details={"supported": list(SUPPORTED_ALGORITHMS)}
        )
    if name == "sha256":
        return sha256
    return partial(_hashlib_digest, name)


def digest_size(algorithm: str = DEFAULT_ALGORITHM) -> int:
    """Digest length in bytes for a registered algorithm."""
    return len(get_hash_function(algorithm)(b""))


def encode_item(item: Any, encoding: str = DEFAULT_ENCODING) -> bytes:
    """
    Map a raw item to the bytes that get hashed into its leaf.

    Encodings:
        utf8:           str -> UTF-8 bytes; bytes pass through unchanged
        canonical_json: any JSON-able value -> canonical JSON UTF-8 bytes

    Raises:
        InvalidInputException: Unknown encoding, or a non-str/bytes item
                               under utf8
        CanonicalizationException: Item has no canonical JSON form
    """
    if encoding == "utf8":
        if isinstance(item, bytes):
            return item
        if isinstance(item, str):
            return item.encode("utf-8")
        raise InvalidInputException(
            f"utf8 encoding expects str or bytes, got {type(item).__name__}",
            details={"encoding": encoding, "type": type(item).__name__},
        )
    if encoding == "canonical_json":
        return encode_canonical(item)
    raise InvalidInputException(
        f"Unknown leaf encoding: {encoding!r}",
        details={"supported": list(SUPPORTED_ENCODINGS)},
    )


def hash_item(
    item: Any,
    encoding: str = DEFAULT_ENCODING,
    algorithm: str = DEFAULT_ALGORITHM,
) -> bytes:
    """Leaf digest of one raw item: H(encode_item(item))."""
    return get_hash_function(algorithm)(encode_item(item, encoding))


def to_hex(data: bytes) -> str:
    """
    Convert bytes to hexadecimal string with 0x prefix.

    Example:
        >>> to_hex(bytes.fromhex("deadbeef"))
        '0xdeadbeef'
    """
    return "0x" + data.hex()


def from_hex(hex_string: str) -> bytes:
    """
    Convert hexadecimal string (with 0x prefix) to bytes.

    Raises:
        ValueError: If string doesn't start with 0x, has odd length,
                   or contains invalid hex characters
    """
    if not hex_string.startswith("0x"):
        raise ValueError(
            f"Hex string must start with '0x' prefix, got: {hex_string[:10]}..."
        )

    hex_content = hex_string[2:]

    if len(hex_content) % 2 != 0:
        raise ValueError(
            f"Hex string must have even length after 0x prefix, "
            f"got length {len(hex_content)}"
        )

    try:
        return bytes.fromhex(hex_content)
    except ValueError as e:
        raise ValueError(f"Invalid hex characters in string: {e}") from e


__all__ = [
    "HashFunction",
    "DEFAULT_ALGORITHM",
    "DEFAULT_ENCODING",
    "SUPPORTED_ALGORITHMS",
    "SUPPORTED_ENCODINGS",
    "sha256",
    "get_hash_function",
    "digest_size",
    "encode_item",
    "hash_item",
    "to_hex",
    "from_hex",
]
