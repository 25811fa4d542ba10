"""
Schemas - Error taxonomy
File: errors.py

Purpose: Standard error taxonomy for Merkle tree construction, proof
generation and proof verification.
Defines both Pydantic models for structured error communication
and Python exceptions for control flow.

Note: a proof that fails to verify is NOT an error. verify_proof() returns
False for it. The exceptions below are contract violations (malformed input).
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Error Codes (Machine-Readable Constants)
# =============================================================================

class ErrorCodes:
    """Stable machine-readable error codes."""

    # Input errors
    INVALID_INPUT = "INVALID_INPUT"
    CANONICALIZATION_ERROR = "CANONICALIZATION_ERROR"
    UNSUPPORTED_ALGORITHM = "UNSUPPORTED_ALGORITHM"

    # Proof errors
    INVALID_PROOF = "INVALID_PROOF"
    ROOT_MISMATCH = "ROOT_MISMATCH"

    # Configuration errors
    CONFIG_ERROR = "CONFIG_ERROR"


# =============================================================================
# Pydantic Error Models (Structured Communication)
# =============================================================================

class MerkleError(BaseModel):
    """
    Base error model for structured error reporting.

    Used by the CLI's JSON output so failures can be serialized
    without losing the machine-readable code.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=False,
        validate_assignment=True,
    )

    code: str = Field(
        ...,
        description="Stable machine-readable error code",
        examples=[ErrorCodes.INVALID_INPUT],
    )
    message: str = Field(
        ...,
        description="Human-readable error message",
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional structured details about the error",
    )

    def to_exception(self) -> "MerkleException":
        """Convert this error model to a raised exception."""
        return MerkleException(
            code=self.code,
            message=self.message,
            details=self.details,
        )


# =============================================================================
# Python Exceptions (Control Flow)
# =============================================================================

class MerkleException(Exception):
    """
    Base exception for all Merkle errors.

    This exception carries structured error information and can be
    converted to/from MerkleError models.
    """

    def __init__(
        self,
        message: str,
        code: str = "MERKLE_ERROR",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}

    def to_error_model(self) -> MerkleError:
        """Convert this exception to a MerkleError model."""
        return MerkleError(
            code=self.code,
            message=self.message,
            details=self.details,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class InvalidInputException(MerkleException):
    """Raised when a builder or generator receives input it cannot use."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.INVALID_INPUT,
            details=details,
        )


class InvalidProofException(MerkleException):
    """Raised when a proof is structurally malformed (e.g. unknown side tag)."""

    def __init__(
        self,
        message: str,
        step_index: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if step_index is not None:
            full_details["step_index"] = step_index
        super().__init__(
            message=message,
            code=ErrorCodes.INVALID_PROOF,
            details=full_details,
        )


class UnsupportedAlgorithmException(MerkleException):
    """Raised when a hash algorithm name is not in the registry."""

    def __init__(
        self,
        algorithm: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        full_details["algorithm"] = algorithm
        super().__init__(
            message=f"Unsupported hash algorithm: {algorithm!r}",
            code=ErrorCodes.UNSUPPORTED_ALGORITHM,
            details=full_details,
        )


class CanonicalizationException(MerkleException):
    """Exception raised when canonical serialization fails."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.CANONICALIZATION_ERROR,
            details=details,
        )


__all__ = [
    "ErrorCodes",
    "MerkleError",
    "MerkleException",
    "InvalidInputException",
    "InvalidProofException",
    "UnsupportedAlgorithmException",
    "CanonicalizationException",
]
