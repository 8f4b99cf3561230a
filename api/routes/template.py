"""
Template Route

Sample CSV for users to download and fill.
"""

from fastapi import APIRouter
from fastapi.responses import Response

from core.allocations.export import template_csv


router = APIRouter(tags=["allocations"])

TEMPLATE_FILENAME = "merkledropper_template.csv"


@router.get("/template")
async def get_template() -> Response:
    return Response(
        content=template_csv(),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{TEMPLATE_FILENAME}"'},
    )
