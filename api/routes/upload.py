"""
Upload Route

Accepts an address,amount CSV, builds the Merkle tree and publishes it.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, File, UploadFile

from api.deps import get_runtime_config, get_store
from api.errors import APIError, MissingFileError, UploadTooLargeError
from api.models.responses import UploadResponse
from core.config.runtime import RuntimeConfig
from core.schemas.errors import MerkleDropException
from orchestrator.store import DatasetStore


logger = logging.getLogger(__name__)

router = APIRouter(tags=["allocations"])


@router.post("/upload", response_model=UploadResponse)
def upload_allocations(
    file: UploadFile | None = File(default=None, description="CSV file with address,amount rows"),
    store: DatasetStore = Depends(get_store),
    config: RuntimeConfig = Depends(get_runtime_config),
) -> UploadResponse:
    """
    Build and publish a new dataset from an uploaded CSV.

    Invalid rows are skipped with a warning. If no valid row remains the
    upload is rejected and the previously published dataset stays in place.
    The same holds for a file that is not parseable as CSV.
    """
    if file is None or not file.filename:
        raise MissingFileError()

    limit = config.server.max_upload_bytes
    content = file.file.read(limit + 1)
    if len(content) > limit:
        raise UploadTooLargeError(limit)

    logger.info(f"Building dataset from upload: {file.filename} ({len(content)} bytes)")

    try:
        result = store.build_and_publish_csv(content)
    except MerkleDropException as e:
        raise APIError.from_exception(e)

    return UploadResponse(
        root=result.dataset.root,
        count=result.dataset.count,
        total_allocated=result.dataset.total_allocated,
        skipped=result.skipped,
    )
