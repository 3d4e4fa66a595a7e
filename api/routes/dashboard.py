"""
GET /api/v1/dashboard: the four chart series for the current filters.

Every call filters the full working set and recomputes all series; the
browser calls it again after each filter change and redraws the charts.
"""

from fastapi import APIRouter, Depends

from api.models import (
    DashboardResponse,
    FiltersOut,
    IpcCountOut,
    LabelCountOut,
    YearCountOut,
)
from api.state import filter_params, require_loaded
from patents.aggregations import CountRow
from patents.codes import CodeDictionary
from patents.dashboard import DashboardController, DashboardView
from patents.enrich import describe_code
from patents.filters import FilterState
from utils.formatting import chart_palette, code_label, percent_of

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


def ipc_series(rows: list[CountRow], codes: CodeDictionary) -> list[IpcCountOut]:
    """Decorate code counts with legend labels, colours and percentages."""
    total = sum(r.count for r in rows)
    colors = chart_palette(len(rows))
    series = []
    for row, color in zip(rows, colors):
        description = describe_code(row.label, codes)
        series.append(IpcCountOut(
            code=row.label,
            description=description,
            label=code_label(row.label, description),
            count=row.count,
            pct_of_total=percent_of(row.count, total),
            color=color,
        ))
    return series


def build_dashboard_response(
    view: DashboardView,
    state: FilterState,
    codes: CodeDictionary,
) -> DashboardResponse:
    return DashboardResponse(
        total=view.total,
        matched=len(view.patents),
        no_results=view.no_results,
        filters=FiltersOut(
            q=state.search_term,
            ipc_code=sorted(state.selected_codes),
            year=sorted(state.selected_years),
        ),
        by_year=[YearCountOut(year=r.label, count=r.count) for r in view.by_year],
        by_author=[LabelCountOut(label=r.label, count=r.count) for r in view.by_author],
        by_direction=[LabelCountOut(label=r.label, count=r.count) for r in view.by_direction],
        by_ipc_code=ipc_series(view.by_ipc_code, codes),
    )


@router.get(
    "",
    response_model=DashboardResponse,
    summary="Chart series for the filtered patents",
    responses={
        503: {"description": "patents.csv could not be loaded"},
    },
)
def dashboard(
    state: FilterState = Depends(filter_params),
    controller: DashboardController = Depends(require_loaded),
) -> DashboardResponse:
    """Return patents per year, top authors, top directions and code shares.

    Search, code and year criteria combine with AND; repeat ``ipc_code`` or
    ``year`` to select several values (OR within one criterion).
    """
    view = controller.recompute(state)
    return build_dashboard_response(view, state, controller.codes)
