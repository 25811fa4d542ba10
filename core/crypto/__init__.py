"""
Core cryptographic utilities.

Named hash functions, leaf encodings and hex helpers shared by the
Merkle tree and the command line.
"""
from .hashing import (
    HashFunction,
    DEFAULT_ALGORITHM,
    DEFAULT_ENCODING,
    SUPPORTED_ALGORITHMS,
    SUPPORTED_ENCODINGS,
    sha256,
    normalize_algorithm,
    get_hash_function,
    digest_size,
    encode_item,
    hash_item,
    to_hex,
    from_hex,
)

__all__ = [
    "HashFunction",
    "DEFAULT_ALGORITHM",
    "DEFAULT_ENCODING",
    "SUPPORTED_ALGORITHMS",
    "SUPPORTED_ENCODINGS",
    "sha256",
    "normalize_algorithm",
    "get_hash_function",
    "digest_size",
    "encode_item",
    "hash_item",
    "to_hex",
    "from_hex",
]
