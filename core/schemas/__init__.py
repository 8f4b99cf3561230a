"""
Schemas & Errors
File: __init__.py

Purpose: Export the public API for the schemas module.
"""

from .allocation import (
    MAX_UINT256,
    AllocationRecord,
    Dataset,
    DatasetEntry,
    ProofEntry,
    RowResult,
)

from .errors import (
    DatasetFormatException,
    EmptyDatasetException,
    ErrorCodes,
    InvalidAddressException,
    InvalidAmountException,
    MerkleDropError,
    MerkleDropException,
    NotFoundException,
)

__all__ = [
    # Allocation models
    "MAX_UINT256",
    "AllocationRecord",
    "Dataset",
    "DatasetEntry",
    "ProofEntry",
    "RowResult",
    # Errors
    "DatasetFormatException",
    "EmptyDatasetException",
    "ErrorCodes",
    "InvalidAddressException",
    "InvalidAmountException",
    "MerkleDropError",
    "MerkleDropException",
    "NotFoundException",
]
