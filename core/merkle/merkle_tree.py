"""
Merkle Tree Implementation
Deterministic Merkle tree construction, proof generation, and verification.

This module provides:
- next_level: the single pairing+combination fold shared by builder and prover
- Merkle root / full tree construction from ordered leaf digests
- Inclusion proof generation as (sibling digest, side) steps
- Inclusion proof verification

Canonical Commitment Rules (Hard Contracts):
1. Parent hashing: parent = H(left + right), left bytes first, no prefixes
2. Padding rule: an odd tail node is paired with itself at every level
3. Single leaf: root = leaf (the leaf digest itself, not H(leaf + leaf))
4. Empty leaves: rejected with InvalidInputException
5. Proof steps are ordered leaf level first; side is the SIBLING's operand
   position. A self-paired node records side "left".

Determinism Notes:
- No randomness or non-deterministic ordering
- This module never sorts leaves - it trusts input order
- Duplicate leaf digests resolve to the first (lowest) index
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, Optional, Sequence

from core.crypto.hashing import HashFunction, sha256
from core.schemas.errors import InvalidInputException, InvalidProofException


logger = logging.getLogger(__name__)


class Side(str, Enum):
    """Operand position of a sibling digest when hashing its parent."""

    LEFT = "left"
    RIGHT = "right"

    @classmethod
    def parse(cls, value: Any, step_index: int | None = None) -> "Side":
        """Coerce a Side or its exact lower-case tag; anything else is InvalidProof."""
        if isinstance(value, Side):
            return value
        if isinstance(value, str):
            try:
                return cls(value)
            except ValueError:
                pass
        raise InvalidProofException(
            f"Invalid proof step side: {value!r} (expected 'left' or 'right')",
            step_index=step_index,
        )


@dataclass(frozen=True)
class ProofStep:
    """
    One level of an inclusion proof.

    Attributes:
        digest: The sibling digest at this level
        side: Whether the sibling is the left or right operand
    """
    digest: bytes
    side: Side

    def __post_init__(self) -> None:
        if not isinstance(self.digest, (bytes, bytearray)):
            raise InvalidProofException(
                f"Proof step digest must be bytes, got {type(self.digest).__name__}"
            )
        object.__setattr__(self, "digest", bytes(self.digest))
        object.__setattr__(self, "side", Side.parse(self.side))

    @classmethod
    def coerce(cls, step: Any, step_index: int | None = None) -> "ProofStep":
        """
        Accept a ProofStep, a (digest, side) pair, or a mapping with
        digest/side keys ("hash"/"position" are accepted as aliases).
        """
        if isinstance(step, ProofStep):
            return step
        if isinstance(step, dict):
            digest = step.get("digest", step.get("hash"))
            side = step.get("side", step.get("position"))
        elif isinstance(step, (tuple, list)) and len(step) == 2:
            digest, side = step
        else:
            raise InvalidProofException(
                f"Malformed proof step: {type(step).__name__}",
                step_index=step_index,
            )
        if not isinstance(digest, (bytes, bytearray)):
            raise InvalidProofException(
                "Proof step digest must be bytes",
                step_index=step_index,
            )
        return cls(bytes(digest), Side.parse(side, step_index))


Proof = list[ProofStep]


def merkle_parent(left: bytes, right: bytes, hash_fn: HashFunction = sha256) -> bytes:
    """
    Compute the parent hash of two child nodes.

    Parent hash is strictly ordered: H(left + right) != H(right + left).
    """
    return hash_fn(left + right)


def next_level(level: Sequence[bytes], hash_fn: HashFunction = sha256) -> list[bytes]:
    """
    Fold one level into the next.

    Consecutive pairs (2i, 2i+1) are combined with merkle_parent. If the
    level has odd length the last node is combined with itself.

    Example: [a, b, c] -> [H(a + b), H(c + c)]
    """
    parents: list[bytes] = []
    for i in range(0, len(level), 2):
        left = level[i]
        right = level[i + 1] if i + 1 < len(level) else left
        parents.append(merkle_parent(left, right, hash_fn))
    return parents


def sibling_step(level: Sequence[bytes], index: int) -> tuple[int, ProofStep]:
    """
    Locate the sibling of `index` within `level`.

    Returns:
        (sibling_index, ProofStep). For an unpaired odd tail the sibling is
        the node itself and the side resolves to LEFT.
    """
    sibling_index = index + 1 if index % 2 == 0 else index - 1
    if sibling_index >= len(level):
        sibling_index = index
    side = Side.RIGHT if sibling_index > index else Side.LEFT
    return sibling_index, ProofStep(level[sibling_index], side)


def _require_leaves(leaves: Sequence[bytes]) -> None:
    if len(leaves) == 0:
        raise InvalidInputException("Cannot build a Merkle tree from an empty leaf list")


@dataclass(frozen=True)
class MerkleTree:
    """
    Every level of a built Merkle tree, leaves first, root last.

    Retain one of these to cut several proofs without re-hashing: proofs
    replay the stored levels. Instances are never mutated.
    """
    levels: tuple[tuple[bytes, ...], ...]
    hash_fn: HashFunction = sha256

    @property
    def root(self) -> bytes:
        return self.levels[-1][0]

    @property
    def leaves(self) -> tuple[bytes, ...]:
        return self.levels[0]

    @property
    def leaf_count(self) -> int:
        return len(self.levels[0])

    @property
    def depth(self) -> int:
        """Number of levels including leaves and root."""
        return len(self.levels)

    def index_of(self, digest: bytes) -> Optional[int]:
        """Lowest index holding `digest`, or None."""
        try:
            return self.leaves.index(digest)
        except ValueError:
            return None

    def prove_index(self, index: int) -> Proof:
        """
        Proof for the leaf at `index`.

        Raises:
            IndexError: If index is out of range
        """
        if index < 0 or index >= self.leaf_count:
            raise IndexError(
                f"Leaf index {index} out of range for {self.leaf_count} leaves"
            )
        proof: Proof = []
        for level in self.levels[:-1]:
            _, step = sibling_step(level, index)
            proof.append(step)
            index //= 2
        return proof

    def prove(self, digest: bytes) -> Optional[Proof]:
        """Proof for the first leaf equal to `digest`, or None when absent."""
        index = self.index_of(digest)
        if index is None:
            return None
        return self.prove_index(index)


def build_merkle_tree(leaves: Sequence[bytes], hash_fn: HashFunction = sha256) -> MerkleTree:
    """
    Build every level of the tree from ordered leaf digests.

    Raises:
        InvalidInputException: If leaves is empty
    """
    _require_leaves(leaves)

    levels: list[tuple[bytes, ...]] = [tuple(leaves)]
    while len(levels[-1]) > 1:
        levels.append(tuple(next_level(levels[-1], hash_fn)))

    logger.debug(f"Built Merkle tree: {len(leaves)} leaves, {len(levels)} levels")
    return MerkleTree(levels=tuple(levels), hash_fn=hash_fn)


def build_merkle_root(leaves: Sequence[bytes], hash_fn: HashFunction = sha256) -> bytes:
    """
    Build a Merkle root from a sequence of leaf digests.

    Algorithm:
    1. If empty: raise InvalidInputException
    2. If single leaf: return the leaf itself
    3. Otherwise fold with next_level until one node remains

    Only the current level is kept in memory.

    Example:
        >>> leaves = [sha256(b"a"), sha256(b"b"), sha256(b"c")]
        >>> root = build_merkle_root(leaves)
        >>> len(root)
        32
    """
    _require_leaves(leaves)

    current_level: list[bytes] = list(leaves)
    while len(current_level) > 1:
        current_level = next_level(current_level, hash_fn)

    return current_level[0]


def generate_proof(
    target: bytes,
    leaves: Sequence[bytes],
    hash_fn: HashFunction = sha256,
) -> Optional[Proof]:
    """
    Generate an inclusion proof for `target` among `leaves`.

    The first leaf equal to `target` is proven. The proof is NOT checked
    against any root here; round-trip through verify_proof() for that.

    Args:
        target: Leaf digest to prove
        leaves: Ordered leaf digests the tree is built from
        hash_fn: Hash function for internal nodes

    Returns:
        Ordered proof steps (leaf level first), or None if target is absent.
        An empty list is a valid proof only for a single-leaf tree.

    Raises:
        InvalidInputException: If leaves is empty
    """
    _require_leaves(leaves)

    try:
        index = list(leaves).index(target)
    except ValueError:
        logger.debug("Proof target not found among leaves")
        return None

    proof: Proof = []
    current_level: list[bytes] = list(leaves)
    while len(current_level) > 1:
        _, step = sibling_step(current_level, index)
        proof.append(step)
        index //= 2
        current_level = next_level(current_level, hash_fn)

    logger.debug(f"Generated proof with {len(proof)} steps")
    return proof


def compute_root_from_proof(
    item_digest: bytes,
    proof: Iterable[Any],
    hash_fn: HashFunction = sha256,
) -> bytes:
    """
    Replay a proof from `item_digest` up to the root it implies.

    Raises:
        InvalidProofException: If any step is malformed
    """
    computed = item_digest
    for i, raw_step in enumerate(proof):
        step = ProofStep.coerce(raw_step, step_index=i)
        if step.side is Side.LEFT:
            computed = merkle_parent(step.digest, computed, hash_fn)
        else:
            computed = merkle_parent(computed, step.digest, hash_fn)
    return computed


def verify_proof(
    item_digest: bytes,
    proof: Iterable[Any],
    root: bytes,
    hash_fn: HashFunction = sha256,
) -> bool:
    """
    Verify an inclusion proof against a claimed root.

    A mismatch returns False; it is an ordinary outcome, not an error.
    An empty proof verifies iff item_digest == root.

    Raises:
        InvalidProofException: If a step has an unknown side or non-bytes digest
    """
    proof = list(proof)
    ok = compute_root_from_proof(item_digest, proof, hash_fn) == root
    logger.debug(f"Proof verification ({len(proof)} steps): {'ok' if ok else 'mismatch'}")
    return ok


def compute_tree_depth(num_leaves: int) -> int:
    """
    Number of levels (leaves and root inclusive) for `num_leaves` leaves.

    A single leaf has depth 1, two leaves have depth 2, three have 3.
    Returns 0 for an empty tree.
    """
    if num_leaves <= 0:
        return 0

    depth = 1
    n = num_leaves
    while n > 1:
        n = (n + 1) // 2
        depth += 1

    return depth


def expected_proof_length(num_leaves: int) -> int:
    """ceil(log2(num_leaves)); 0 for a single leaf."""
    return max(compute_tree_depth(num_leaves) - 1, 0)


__all__ = [
    "Side",
    "ProofStep",
    "Proof",
    "MerkleTree",
    "merkle_parent",
    "next_level",
    "sibling_step",
    "build_merkle_tree",
    "build_merkle_root",
    "generate_proof",
    "compute_root_from_proof",
    "verify_proof",
    "compute_tree_depth",
    "expected_proof_length",
]
