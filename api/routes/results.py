"""
Results Routes

Read-only views of the published dataset: root metadata, entries,
CSV export and the raw merkle.json snapshot.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse, Response

from api.deps import get_store
from api.errors import APIError
from api.models.responses import ResultsResponse, RootResponse
from core.schemas.allocation import Dataset
from core.schemas.errors import NotFoundException
from core.allocations.export import export_csv
from orchestrator.store import DatasetStore


router = APIRouter(tags=["results"])

RESULTS_CSV_FILENAME = "merkledropper_results.csv"


def current_dataset(store: DatasetStore = Depends(get_store)) -> Dataset:
    """Resolve the published dataset or fail with 404."""
    try:
        return store.current()
    except NotFoundException as e:
        raise APIError.from_exception(e)


@router.get("/root", response_model=RootResponse)
async def get_root(dataset: Dataset = Depends(current_dataset)) -> RootResponse:
    """Root, total, count and timestamp of the published tree."""
    return RootResponse.model_validate(dataset.summary())


@router.get("/results", response_model=ResultsResponse)
async def get_results(dataset: Dataset = Depends(current_dataset)) -> ResultsResponse:
    """Full ordered entries list."""
    payload = dataset.summary()
    payload["entries"] = [entry.model_dump(mode="json") for entry in dataset.entries]
    return ResultsResponse.model_validate(payload)


@router.get("/results/csv")
async def get_results_csv(dataset: Dataset = Depends(current_dataset)) -> Response:
    """Results as merkle_root,address,amount,proof CSV."""
    return Response(
        content=export_csv(dataset),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{RESULTS_CSV_FILENAME}"'},
    )


@router.get("/merkle.json")
async def get_snapshot(dataset: Dataset = Depends(current_dataset)) -> JSONResponse:
    """The complete snapshot, including the lowercase proofs index."""
    return JSONResponse(content=dataset.to_snapshot())
