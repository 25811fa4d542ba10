"""
Merkle Proofs Unit Tests
Tests for core/merkle/merkle_proofs.py (item-level prover and verifier)
"""
import pytest

from core.crypto.hashing import get_hash_function, sha256
from core.merkle import MerkleProver, MerkleVerifier, build_merkle_root, merkle_parent
from core.schemas.errors import (
    CanonicalizationException,
    InvalidInputException,
    InvalidProofException,
    UnsupportedAlgorithmException,
)


class TestMerkleProver:
    """Tests for MerkleProver."""

    def test_hash_item_utf8(self):
        assert MerkleProver().hash_item("marco@example.com") == sha256(b"marco@example.com")

    def test_hash_item_bytes_passthrough(self):
        assert MerkleProver().hash_item(b"\xff\x00") == sha256(b"\xff\x00")

    def test_compute_root_matches_manual(self, sample_emails, email_leaves):
        assert MerkleProver().compute_root(sample_emails) == build_merkle_root(email_leaves)

    def test_compute_root_abc(self):
        a, b, c = (sha256(x) for x in (b"A", b"B", b"C"))
        expected = sha256(merkle_parent(a, b) + merkle_parent(c, c))
        assert MerkleProver().compute_root(["A", "B", "C"]) == expected

    def test_compute_root_empty_raises(self):
        with pytest.raises(InvalidInputException):
            MerkleProver().compute_root([])

    def test_prove_item_two_steps(self, sample_emails):
        proof = MerkleProver().prove_item(sample_emails, "marco@example.com")
        assert proof is not None
        assert len(proof) == 2

    def test_prove_item_absent(self, sample_emails):
        assert MerkleProver().prove_item(sample_emails, "nobody@example.com") is None

    def test_build_tree_levels(self, sample_emails):
        tree = MerkleProver().build_tree(sample_emails)
        assert [len(level) for level in tree.levels] == [3, 2, 1]

    def test_prove_checked_returns_proof(self, sample_emails):
        prover = MerkleProver()
        root = prover.compute_root(sample_emails)
        proof = prover.prove_checked(sample_emails, "jenna@example.com", root)
        assert proof == prover.prove_item(sample_emails, "jenna@example.com")

    def test_prove_checked_wrong_root_raises(self, sample_emails):
        with pytest.raises(InvalidProofException, match="does not match"):
            MerkleProver().prove_checked(sample_emails, "jenna@example.com", sha256(b"bogus"))

    def test_prove_checked_absent(self, sample_emails):
        prover = MerkleProver()
        root = prover.compute_root(sample_emails)
        assert prover.prove_checked(sample_emails, "nobody@example.com", root) is None

    def test_unknown_algorithm_raises(self):
        with pytest.raises(UnsupportedAlgorithmException):
            MerkleProver(algorithm="md5")

    def test_algorithm_changes_root(self, sample_emails):
        assert MerkleProver("sha256").compute_root(sample_emails) != MerkleProver("sha3_256").compute_root(sample_emails)

    def test_canonical_json_items(self):
        prover = MerkleProver(encoding="canonical_json")
        records = [{"id": 1, "email": "a@example.com"}, {"id": 2, "email": "b@example.com"}]
        reordered = [{"email": "a@example.com", "id": 1}, {"email": "b@example.com", "id": 2}]
        assert prover.compute_root(records) == prover.compute_root(reordered)

    def test_canonical_json_rejects_nan(self):
        with pytest.raises(CanonicalizationException):
            MerkleProver(encoding="canonical_json").hash_item({"x": float("nan")})

    def test_utf8_rejects_non_string(self):
        with pytest.raises(InvalidInputException):
            MerkleProver().hash_item(42)


class TestMerkleVerifier:
    """Tests for MerkleVerifier."""

    def test_round_trip_every_item(self):
        items = [f"user{i}@example.com" for i in range(11)]
        prover, verifier = MerkleProver(), MerkleVerifier()
        root = prover.compute_root(items)
        for item in items:
            assert verifier.verify_item(item, prover.prove_item(items, item), root)

    def test_wrong_item_fails(self, sample_emails):
        prover, verifier = MerkleProver(), MerkleVerifier()
        root = prover.compute_root(sample_emails)
        proof = prover.prove_item(sample_emails, "marco@example.com")
        assert not verifier.verify_item("jenna@example.com", proof, root)

    def test_unrelated_root_fails(self, sample_emails):
        prover, verifier = MerkleProver(), MerkleVerifier()
        proof = prover.prove_item(sample_emails, "marco@example.com")
        assert not verifier.verify_item("marco@example.com", proof, sha256(b"unrelated"))

    def test_verify_digest(self, sample_emails, email_leaves):
        prover, verifier = MerkleProver(), MerkleVerifier()
        root = prover.compute_root(sample_emails)
        proof = prover.prove_item(sample_emails, "tanay@example.com")
        assert verifier.verify(email_leaves[2], proof, root)

    def test_mismatched_algorithm_fails(self, sample_emails):
        prover = MerkleProver("blake2s")
        root = prover.compute_root(sample_emails)
        proof = prover.prove_item(sample_emails, "marco@example.com")
        assert MerkleVerifier("blake2s").verify_item("marco@example.com", proof, root)
        assert not MerkleVerifier("sha256").verify_item("marco@example.com", proof, root)

    def test_hash_function_exposed(self):
        assert MerkleVerifier("sha512").hash_fn(b"x") == get_hash_function("sha512")(b"x")


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
