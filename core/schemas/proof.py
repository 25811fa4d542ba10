"""
Schemas - Proof document
File: proof.py

Purpose: JSON shape of an inclusion proof as exchanged on the command line.
Digests are 0x-prefixed hex; steps are ordered leaf level first.
"""

from __future__ import annotations

from typing import Literal, Sequence

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from core.crypto.hashing import DEFAULT_ALGORITHM, from_hex, get_hash_function, to_hex
from core.merkle.merkle_tree import ProofStep, Side, verify_proof

from .errors import InvalidProofException


PROOF_SCHEMA_VERSION = "1.0"


def _check_hex(value: str) -> str:
    # from_hex raises ValueError, which pydantic reports as a validation error
    from_hex(value)
    return value.lower()


class ProofStepModel(BaseModel):
    """One sibling digest and the side it is combined on."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    digest: str = Field(..., description="Sibling digest, 0x-prefixed hex")
    side: Literal["left", "right"] = Field(..., description="Sibling's operand position")

    @field_validator("digest")
    @classmethod
    def _validate_digest(cls, v: str) -> str:
        return _check_hex(v)


class ProofDocument(BaseModel):
    """
    Self-describing inclusion proof.

    Carries the hash algorithm name so a verifier never has to guess which
    function produced the digests.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    schema_version: str = Field(default=PROOF_SCHEMA_VERSION)
    algorithm: str = Field(default=DEFAULT_ALGORITHM, min_length=1)
    item_digest: str = Field(..., description="Digest of the proven item, 0x hex")
    root: str = Field(..., description="Root the proof was cut from, 0x hex")
    steps: list[ProofStepModel] = Field(default_factory=list)
    leaf_count: int | None = Field(default=None, ge=1)

    @field_validator("item_digest", "root")
    @classmethod
    def _validate_hex(cls, v: str) -> str:
        return _check_hex(v)

    @classmethod
    def from_proof(
        cls,
        item_digest: bytes,
        proof: Sequence[ProofStep],
        root: bytes,
        algorithm: str = DEFAULT_ALGORITHM,
        leaf_count: int | None = None,
    ) -> "ProofDocument":
        return cls(
            algorithm=algorithm,
            item_digest=to_hex(item_digest),
            root=to_hex(root),
            steps=[
                ProofStepModel(digest=to_hex(step.digest), side=step.side.value)
                for step in proof
            ],
            leaf_count=leaf_count,
        )

    def to_proof(self) -> list[ProofStep]:
        """Decode the steps back into ProofStep values."""
        return [ProofStep(from_hex(s.digest), Side(s.side)) for s in self.steps]

    def verify(self, root: bytes | None = None) -> bool:
        """
        Replay the proof against `root` (defaults to the embedded root).

        Checking against the embedded root only proves internal consistency.
        Pass the trusted root from elsewhere to prove membership.
        """
        expected = root if root is not None else from_hex(self.root)
        return verify_proof(
            from_hex(self.item_digest),
            self.to_proof(),
            expected,
            hash_fn=get_hash_function(self.algorithm),
        )

    def to_json(self, indent: int | None = 2) -> str:
        return self.model_dump_json(indent=indent, exclude_none=True)

    @classmethod
    def from_json(cls, data: str | bytes) -> "ProofDocument":
        """Parse a proof document, reporting schema problems as InvalidProof."""
        try:
            return cls.model_validate_json(data)
        except ValidationError as e:
            raise InvalidProofException(
                f"Malformed proof document: {e.error_count()} validation error(s)",
                details={"errors": [err["msg"] for err in e.errors()]},
            ) from e


__all__ = [
    "PROOF_SCHEMA_VERSION",
    "ProofStepModel",
    "ProofDocument",
]
