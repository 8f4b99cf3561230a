"""
API Error Handling

Standardized error handling for the API.
"""

from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse

from api.models.responses import ErrorResponse, ErrorDetail
from core.schemas.errors import ErrorCodes, MerkleDropException


class APIError(Exception):
    """Base API error with structured response."""

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = 400,
        details: dict[str, Any] | None = None,
    ):
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(message)

    def to_response(self) -> ErrorResponse:
        return ErrorResponse(
            ok=False,
            error=ErrorDetail(
                code=self.code,
                message=self.message,
                details=self.details,
            ),
        )

    @classmethod
    def from_exception(cls, exc: MerkleDropException) -> "APIError":
        """Map an engine exception to its HTTP error."""
        if exc.code == ErrorCodes.NOT_FOUND:
            return NotFoundError(exc.message, details=exc.details)
        if exc.code == ErrorCodes.EMPTY_DATASET:
            return EmptyDatasetError(exc.message, details=exc.details)
        if exc.code in (
            ErrorCodes.INVALID_ADDRESS,
            ErrorCodes.INVALID_AMOUNT,
            ErrorCodes.DATASET_FORMAT_ERROR,
        ):
            return InvalidRequestError(exc.message, details=exc.details)
        return InternalError(exc.message, details=exc.details)


class InvalidRequestError(APIError):
    """Invalid request parameters."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(
            code="INVALID_REQUEST",
            message=message,
            status_code=400,
            details=details,
        )


class MissingFileError(APIError):
    """Required file not provided."""

    def __init__(self, message: str = "No file uploaded"):
        super().__init__(
            code="MISSING_FILE",
            message=message,
            status_code=400,
        )


class UploadTooLargeError(APIError):
    """Uploaded file exceeds the configured size limit."""

    def __init__(self, limit: int):
        super().__init__(
            code="UPLOAD_TOO_LARGE",
            message=f"Uploaded file exceeds {limit} bytes",
            status_code=413,
            details={"max_upload_bytes": limit},
        )


class EmptyDatasetError(APIError):
    """Upload produced no valid allocation rows."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(
            code=ErrorCodes.EMPTY_DATASET,
            message=message,
            status_code=400,
            details=details,
        )


class NotFoundError(APIError):
    """No dataset published, or address not in the tree."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(
            code=ErrorCodes.NOT_FOUND,
            message=message,
            status_code=404,
            details=details,
        )


class InternalError(APIError):
    """Internal server error."""

    def __init__(self, message: str = "Internal server error", details: dict[str, Any] | None = None):
        super().__init__(
            code="INTERNAL_ERROR",
            message=message,
            status_code=500,
            details=details,
        )


async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
    """Handle APIError exceptions."""
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_response().model_dump(),
    )


async def engine_error_handler(request: Request, exc: MerkleDropException) -> JSONResponse:
    """Handle engine exceptions that escaped a route."""
    return await api_error_handler(request, APIError.from_exception(exc))


async def generic_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions."""
    return JSONResponse(
        status_code=500,
        content=ErrorResponse(
            ok=False,
            error=ErrorDetail(
                code="INTERNAL_ERROR",
                message="An unexpected error occurred",
                details={"type": type(exc).__name__},
            ),
        ).model_dump(),
    )
