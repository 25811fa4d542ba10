"""
Merkle Proofs Convenience Wrappers
Item-level API over the digest-level functions in merkle_tree.py.

This module provides class-based interfaces:
- MerkleProver: hash raw items into leaves, build roots, cut proofs
- MerkleVerifier: check that a raw item is committed to by a root

Both are configured with a leaf encoding and a hash algorithm name, which
must match between the party that builds and the party that verifies.
"""
from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

from core.crypto.hashing import (
    DEFAULT_ALGORITHM,
    DEFAULT_ENCODING,
    encode_item,
    get_hash_function,
)
from core.merkle.merkle_tree import (
    MerkleTree,
    Proof,
    build_merkle_root,
    build_merkle_tree,
    generate_proof,
    verify_proof,
)
from core.schemas.errors import ErrorCodes, InvalidProofException


logger = logging.getLogger(__name__)


class MerkleProver:
    """
    Generates roots and proofs for raw items.

    Example:
        >>> prover = MerkleProver()
        >>> emails = ["marco@example.com", "jenna@example.com", "tanay@example.com"]
        >>> proof = prover.prove_item(emails, "marco@example.com")
        >>> len(proof)
        2
    """

    def __init__(
        self,
        algorithm: str = DEFAULT_ALGORITHM,
        encoding: str = DEFAULT_ENCODING,
    ) -> None:
        self.algorithm = algorithm
        self.encoding = encoding
        self.hash_fn = get_hash_function(algorithm)

    def hash_item(self, item: Any) -> bytes:
        """Leaf digest for one item."""
        return self.hash_fn(encode_item(item, self.encoding))

    def hash_items(self, items: Sequence[Any]) -> list[bytes]:
        """Leaf digests for items, order preserved."""
        return [self.hash_item(item) for item in items]

    def compute_root(self, items: Sequence[Any]) -> bytes:
        """
        Root committing to `items` in order.

        Raises:
            InvalidInputException: If items is empty
        """
        return build_merkle_root(self.hash_items(items), self.hash_fn)

    def build_tree(self, items: Sequence[Any]) -> MerkleTree:
        """Full tree over `items`; keep it to cut many proofs cheaply."""
        return build_merkle_tree(self.hash_items(items), self.hash_fn)

    def prove_item(self, items: Sequence[Any], target: Any) -> Optional[Proof]:
        """
        Proof that `target` is among `items`, or None if it is not.

        If `target` occurs more than once, the first occurrence is proven.
        """
        return generate_proof(self.hash_item(target), self.hash_items(items), self.hash_fn)

    def prove_checked(
        self,
        items: Sequence[Any],
        target: Any,
        root: bytes,
    ) -> Optional[Proof]:
        """
        Like prove_item, then verify the proof against `root` before returning.

        Raises:
            InvalidProofException: If the generated proof does not reproduce
                `root` (the items are not the ones `root` commits to)
        """
        proof = self.prove_item(items, target)
        if proof is None:
            return None
        if not verify_proof(self.hash_item(target), proof, root, self.hash_fn):
            logger.warning("Generated proof does not reproduce the supplied root")
            raise InvalidProofException(
                "Generated proof does not match the supplied root",
                details={"reason": ErrorCodes.ROOT_MISMATCH, "steps": len(proof)},
            )
        return proof


class MerkleVerifier:
    """
    Verifies inclusion of raw items.

    Example:
        >>> verifier = MerkleVerifier()
        >>> verifier.verify_item("marco@example.com", proof, root)
        True
    """

    def __init__(
        self,
        algorithm: str = DEFAULT_ALGORITHM,
        encoding: str = DEFAULT_ENCODING,
    ) -> None:
        self.algorithm = algorithm
        self.encoding = encoding
        self.hash_fn = get_hash_function(algorithm)

    def verify(self, item_digest: bytes, proof: Sequence[Any], root: bytes) -> bool:
        """Verify a proof for an already-hashed item."""
        return verify_proof(item_digest, proof, root, self.hash_fn)

    def verify_item(self, item: Any, proof: Sequence[Any], root: bytes) -> bool:
        """
        Verify that `item` is committed to by `root`.

        Args:
            item: Raw item; encoded and hashed with this verifier's settings
            proof: Proof steps, leaf level first
            root: Trusted root digest

        Returns:
            True if the proof reproduces `root`, False otherwise
        """
        leaf = self.hash_fn(encode_item(item, self.encoding))
        return verify_proof(leaf, proof, root, self.hash_fn)


__all__ = [
    "MerkleProver",
    "MerkleVerifier",
]
