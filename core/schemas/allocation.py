"""
Schemas & Allocation Models
File: allocation.py

Purpose: Data model for allocation records and the published dataset
snapshot.

Field names of the serialized snapshot are an external contract relied on
by the HTTP layer and by anyone reading merkle.json:

    { root, totalAllocated, count, timestamp,
      entries: [{address, amount, proof}],
      proofs: {lowercaseAddress: {amount, proof}} }

Amounts are rendered as decimal strings so that values above 2**53 survive
JSON round-trips in every consumer.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import DatasetFormatException, MerkleDropError, NotFoundException


MAX_UINT256 = 2**256 - 1


class AllocationRecord(BaseModel):
    """A canonical (address, amount) allocation."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    address: str = Field(
        ...,
        description="EIP-55 checksum address",
        min_length=42,
        max_length=42,
    )
    amount_wei: int = Field(
        ...,
        ge=0,
        le=MAX_UINT256,
        description="Amount in base units",
    )


class RowResult(BaseModel):
    """
    Tagged outcome of normalizing one input row.

    Exactly one of ``record`` / ``error`` is set.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    row_number: int = Field(..., ge=1, description="1-based row number in the input")
    raw: tuple[str, ...] = Field(default_factory=tuple)
    record: AllocationRecord | None = None
    error: MerkleDropError | None = None

    @property
    def ok(self) -> bool:
        return self.record is not None


class ProofEntry(BaseModel):
    """Index value for a single address."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    amount: str = Field(..., description="Amount in wei as a decimal string")
    proof: tuple[str, ...] = Field(default_factory=tuple)


class DatasetEntry(BaseModel):
    """One row of the ordered entries list."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    address: str = Field(..., description="EIP-55 checksum address")
    amount: str = Field(..., description="Amount in wei as a decimal string")
    proof: tuple[str, ...] = Field(default_factory=tuple)


class Dataset(BaseModel):
    """
    Immutable snapshot produced by one build.

    A new build produces a new Dataset which replaces the previous one
    wholesale; datasets are never updated in place.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=True,
        populate_by_name=True,
    )

    root: str = Field(..., description="Merkle root as 0x hex")
    total_allocated: str = Field(
        ...,
        alias="totalAllocated",
        description="Sum of all amounts in wei, duplicates included",
    )
    count: int = Field(..., ge=1)
    timestamp: int = Field(..., description="Build time, ms since epoch")
    entries: tuple[DatasetEntry, ...]
    proofs: dict[str, ProofEntry]

    @property
    def total_allocated_wei(self) -> int:
        return int(self.total_allocated)

    def lookup(self, address: str) -> ProofEntry:
        """Case-insensitive index lookup; raises NotFoundException."""
        entry = self.proofs.get(address.strip().lower())
        if entry is None:
            raise NotFoundException(
                "Address not found in tree",
                details={"address": address},
            )
        return entry

    def summary(self) -> dict[str, Any]:
        """Root metadata without entries or proofs."""
        return {
            "root": self.root,
            "totalAllocated": self.total_allocated,
            "count": self.count,
            "timestamp": self.timestamp,
        }

    def to_snapshot(self) -> dict[str, Any]:
        """Serialize to the merkle.json shape."""
        return self.model_dump(mode="json", by_alias=True)

    @classmethod
    def from_snapshot(cls, data: Any) -> "Dataset":
        """Parse a merkle.json payload."""
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise DatasetFormatException(
                f"Invalid dataset snapshot: {e.error_count()} validation error(s)",
                details={
                    "errors": [
                        f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}"
                        for err in e.errors()
                    ]
                },
            ) from e
