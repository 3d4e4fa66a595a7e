"""
Reference data endpoints for the filter sidebar.

GET /api/v1/reference/ipc-codes  → classification codes present in the data
GET /api/v1/reference/years      → publication years present in the data
"""

from collections import Counter

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from api.models import IpcCodeOptionOut, YearOptionOut
from api.state import require_loaded
from patents.dashboard import DashboardController

router = APIRouter(prefix="/reference", tags=["reference"])

# The working set only changes on restart.
_CACHE_HEADER = {"Cache-Control": "max-age=3600"}


@router.get(
    "/ipc-codes",
    response_model=list[IpcCodeOptionOut],
    summary="List classification codes",
)
def list_ipc_codes(controller: DashboardController = Depends(require_loaded)) -> JSONResponse:
    """Return every code in the working set, sorted, without the "not specified" sentinel."""
    data = [
        {"code": opt.code, "description": opt.description}
        for opt in controller.code_options()
    ]
    return JSONResponse(content=data, headers=_CACHE_HEADER)


@router.get(
    "/years",
    response_model=list[YearOptionOut],
    summary="List publication years",
)
def list_years(controller: DashboardController = Depends(require_loaded)) -> JSONResponse:
    """Return every publication year in the working set, ascending."""
    counts = Counter(p.year for p in controller.patents)
    data = [
        {"year": year, "row_count": counts[year]}
        for year in controller.year_options()
    ]
    return JSONResponse(content=data, headers=_CACHE_HEADER)
