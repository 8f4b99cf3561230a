"""API response models."""

from api.models.responses import (
    HealthResponse,
    UploadResponse,
    RootResponse,
    EntryModel,
    ResultsResponse,
    ProofResponse,
    ErrorDetail,
    ErrorResponse,
)

__all__ = [
    "HealthResponse",
    "UploadResponse",
    "RootResponse",
    "EntryModel",
    "ResultsResponse",
    "ProofResponse",
    "ErrorDetail",
    "ErrorResponse",
]
