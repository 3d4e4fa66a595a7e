"""
GET /api/v1/patents: the filtered raw-data table.

Rows keep the working-set order; pagination slices the filtered list.
"""

from fastapi import APIRouter, Depends, Query

from api.models import PatentListResponse, PatentOut
from api.state import filter_params, require_loaded
from patents.dashboard import DashboardController
from patents.enrich import EnrichedPatent
from patents.filters import FilterState, apply_filters

router = APIRouter(prefix="/patents", tags=["patents"])


def patent_row(patent: EnrichedPatent) -> PatentOut:
    return PatentOut(
        index=patent.index,
        title=patent.title,
        authors=patent.authors_raw,
        ipc=patent.ipc_raw,
        ipc_code=patent.ipc_code,
        direction=patent.direction,
        year=patent.year,
        number=patent.number,
        link=patent.link or None,
    )


@router.get(
    "",
    response_model=PatentListResponse,
    summary="List filtered patents",
    responses={
        503: {"description": "patents.csv could not be loaded"},
    },
)
def list_patents(
    state: FilterState = Depends(filter_params),
    limit: int = Query(100, ge=1, le=5000, description="Max rows to return"),
    offset: int = Query(0, ge=0, description="Row offset for pagination"),
    controller: DashboardController = Depends(require_loaded),
) -> PatentListResponse:
    """Return the patents matching the filters, in source-file order."""
    matched = apply_filters(controller.patents, state)
    page = matched[offset:offset + limit]
    return PatentListResponse(
        total=len(matched),
        limit=limit,
        offset=offset,
        no_results=not matched,
        items=[patent_row(p) for p in page],
    )
