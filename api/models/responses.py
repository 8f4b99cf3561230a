"""
API Response Models

Pydantic models for API response serialization. Field aliases match the
camelCase names of the merkle.json snapshot.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class HealthResponse(BaseModel):
    """Response for GET /health endpoint."""

    ok: bool = True
    service: str = "merkledrop-api"
    version: str = "v1"


class UploadResponse(BaseModel):
    """Response for POST /upload endpoint."""

    model_config = ConfigDict(populate_by_name=True)

    root: str = Field(..., description="Merkle root as 0x hex")
    count: int = Field(..., description="Number of records in the tree")
    total_allocated: str = Field(
        ...,
        alias="totalAllocated",
        description="Sum of all amounts in wei",
    )
    skipped: int = Field(default=0, description="Rows dropped as invalid")


class RootResponse(BaseModel):
    """Response for GET /root endpoint."""

    model_config = ConfigDict(populate_by_name=True)

    root: str
    total_allocated: str = Field(..., alias="totalAllocated")
    count: int
    timestamp: int = Field(..., description="Build time, ms since epoch")


class EntryModel(BaseModel):
    """One allocation entry with its proof."""

    address: str
    amount: str
    proof: list[str] = Field(default_factory=list)


class ResultsResponse(RootResponse):
    """Response for GET /results endpoint."""

    entries: list[EntryModel] = Field(default_factory=list)


class ProofResponse(BaseModel):
    """Response for GET /proof/{address} endpoint."""

    amount: str = Field(..., description="Amount in wei as a decimal string")
    proof: list[str] = Field(default_factory=list)
    root: str


class ErrorDetail(BaseModel):
    """Detailed error information."""

    code: str = Field(..., description="Error code")
    message: str = Field(..., description="Human-readable error message")
    details: dict[str, Any] = Field(default_factory=dict)


class ErrorResponse(BaseModel):
    """Standard error response."""

    ok: bool = False
    error: ErrorDetail = Field(..., description="Error details")
