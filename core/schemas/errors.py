"""
Schemas & Errors
File: errors.py

Purpose: Standard error taxonomy for the allocation tree engine.
Defines both Pydantic models for structured error communication
and Python exceptions for control flow.

Propagation:
- INVALID_ADDRESS / INVALID_AMOUNT are per-row and never escape a batch
  normalization; they are reported through RowResult diagnostics.
- EMPTY_DATASET aborts a build; the published dataset is left untouched.
- DATASET_FORMAT_ERROR is raised for unparseable CSV input or snapshots.
- NOT_FOUND is raised by lookups (root, proof, export).
"""

from typing import Any, Sequence

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Error Codes (Machine-Readable Constants)
# =============================================================================

class ErrorCodes:
    """Stable machine-readable error codes used across the engine."""

    # Row-level normalization errors
    INVALID_ADDRESS = "INVALID_ADDRESS"
    INVALID_AMOUNT = "INVALID_AMOUNT"

    # Dataset-level errors
    EMPTY_DATASET = "EMPTY_DATASET"
    DATASET_FORMAT_ERROR = "DATASET_FORMAT_ERROR"

    # Lookup errors
    NOT_FOUND = "NOT_FOUND"

    # Merkle & commitment errors
    MERKLE_PROOF_INVALID = "MERKLE_PROOF_INVALID"


# =============================================================================
# Pydantic Error Models (Structured Communication)
# =============================================================================

class MerkleDropError(BaseModel):
    """
    Base error model for structured error communication.

    Used for passing errors between layers without exceptions,
    e.g. the per-row diagnostics collected during normalization.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=True,
    )

    code: str = Field(
        ...,
        description="Stable machine-readable error code",
        examples=[ErrorCodes.INVALID_ADDRESS],
    )
    message: str = Field(
        ...,
        description="Human-readable error message",
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional structured details about the error",
    )


# =============================================================================
# Python Exceptions (Control Flow)
# =============================================================================

class MerkleDropException(Exception):
    """
    Base exception for all allocation engine errors.

    This exception carries structured error information and can be
    converted to a MerkleDropError model.
    """

    def __init__(
        self,
        message: str,
        code: str = "MERKLEDROP_ERROR",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}

    def to_error_model(self) -> MerkleDropError:
        """Convert this exception to a MerkleDropError model."""
        return MerkleDropError(
            code=self.code,
            message=self.message,
            details=self.details,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class InvalidAddressException(MerkleDropException):
    """Raised when an address is not a valid 20-byte hex value."""

    def __init__(
        self,
        message: str,
        address: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if address is not None:
            full_details["address"] = address
        super().__init__(
            message=message,
            code=ErrorCodes.INVALID_ADDRESS,
            details=full_details,
        )


class InvalidAmountException(MerkleDropException):
    """Raised when an amount string cannot be converted to wei."""

    def __init__(
        self,
        message: str,
        amount: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if amount is not None:
            full_details["amount"] = amount
        super().__init__(
            message=message,
            code=ErrorCodes.INVALID_AMOUNT,
            details=full_details,
        )


class EmptyDatasetException(MerkleDropException):
    """Raised when a build yields zero valid allocation records."""

    def __init__(
        self,
        message: str = "No valid rows found in CSV",
        skipped: int = 0,
        diagnostics: Sequence[Any] = (),
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        full_details["skipped"] = skipped
        # Dropped RowResults for reporting
        self.diagnostics = tuple(diagnostics)
        super().__init__(
            message=message,
            code=ErrorCodes.EMPTY_DATASET,
            details=full_details,
        )


class NotFoundException(MerkleDropException):
    """Raised when no dataset is published or an address has no entry."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.NOT_FOUND,
            details=details,
        )


class DatasetFormatException(MerkleDropException):
    """Raised when CSV input or a persisted snapshot cannot be parsed."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.DATASET_FORMAT_ERROR,
            details=details,
        )
