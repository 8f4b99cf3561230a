"""
Proof Route

Per-address proof lookup against the published dataset.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from api.deps import get_store
from api.errors import APIError
from api.models.responses import ProofResponse
from core.schemas.errors import NotFoundException
from orchestrator.store import DatasetStore


router = APIRouter(tags=["results"])


@router.get("/proof/{address}", response_model=ProofResponse)
async def get_proof(address: str, store: DatasetStore = Depends(get_store)) -> ProofResponse:
    """
    Amount and proof for an address (case-insensitive), plus the root.

    For an address listed more than once this is its last occurrence.
    """
    try:
        entry, root = store.proof_for(address)
    except NotFoundException as e:
        raise APIError.from_exception(e)

    return ProofResponse(amount=entry.amount, proof=list(entry.proof), root=root)
