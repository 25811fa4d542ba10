"""
Schemas - Errors & Canonicalization
File: __init__.py

Purpose: Export the error taxonomy and canonical serialization API.
The proof document lives in core.schemas.proof and is imported from there
directly, since it depends on core.merkle which itself depends on this
package.
"""

# Canonical serialization API
from .canonical import (
    CANONICAL_JSON_SEPARATORS,
    canonicalize_value,
    dumps_canonical,
    encode_canonical,
    format_datetime_canonical,
)

# Error models and exceptions
from .errors import (
    CanonicalizationException,
    ErrorCodes,
    InvalidInputException,
    InvalidProofException,
    MerkleError,
    MerkleException,
    UnsupportedAlgorithmException,
)

__all__ = [
    "CANONICAL_JSON_SEPARATORS",
    "canonicalize_value",
    "dumps_canonical",
    "encode_canonical",
    "format_datetime_canonical",
    "CanonicalizationException",
    "ErrorCodes",
    "InvalidInputException",
    "InvalidProofException",
    "MerkleError",
    "MerkleException",
    "UnsupportedAlgorithmException",
]
