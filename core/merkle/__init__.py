"""
Merkle Tree and Inclusion Proofs
Deterministic Merkle tree construction + proof generation/verification.

This module provides:
- Side / ProofStep: one (sibling digest, side) entry of a proof
- MerkleTree: every level of a built tree, for cutting many proofs
- next_level: the shared pairing+combination fold
- build_merkle_root / build_merkle_tree: commit to ordered leaf digests
- generate_proof: inclusion proof for a digest, None when absent
- verify_proof: replay a proof against a claimed root

Canonical Commitment Rules:
1. Parent hashing: H(left + right)
2. Padding: odd tail node is paired with itself at every level
3. Single leaf: root = leaf
4. Empty tree: InvalidInputException

Usage:
    from core.crypto import sha256
    from core.merkle import build_merkle_root, generate_proof, verify_proof

    leaves = [sha256(e.encode()) for e in emails]
    root = build_merkle_root(leaves)

    proof = generate_proof(leaves[0], leaves)
    if proof is not None:
        assert verify_proof(leaves[0], proof, root)
"""
from .merkle_tree import (
    Side,
    ProofStep,
    Proof,
    MerkleTree,
    merkle_parent,
    next_level,
    sibling_step,
    build_merkle_tree,
    build_merkle_root,
    generate_proof,
    compute_root_from_proof,
    verify_proof,
    compute_tree_depth,
    expected_proof_length,
)

from .merkle_proofs import (
    MerkleProver,
    MerkleVerifier,
)


__all__ = [
    # Core types
    "Side",
    "ProofStep",
    "Proof",
    "MerkleTree",
    # Core functions
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
    # Convenience classes
    "MerkleProver",
    "MerkleVerifier",
]
