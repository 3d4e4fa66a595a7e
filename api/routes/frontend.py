"""
Frontend HTML routes.

Serves the Jinja2 dashboard page and the HTMX partial that re-renders the
directions table and the data table when a filter changes.  The charts are
drawn in the browser from GET /api/v1/dashboard (see static/dashboard.js).

Routes:
    GET /                   → index.html (filter sidebar, charts, tables)
    GET /partials/results   → partials/results.html (HTMX swap target; full
                              page when requested outside htmx)

When patents.csv failed to load, both routes still return 200 and render
the error message in every chart and table region.
"""

from typing import Any

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from api.state import filter_params, get_controller
from patents.dashboard import DashboardController
from patents.filters import FilterState

router = APIRouter(tags=["frontend"])

# Templates instance is set by create_app() after mounting.
_templates: Jinja2Templates | None = None


def set_templates(t: Jinja2Templates) -> None:
    global _templates
    _templates = t


def _tmpl() -> Jinja2Templates:
    if _templates is None:
        raise RuntimeError("Templates not initialised; call set_templates() first")
    return _templates


def _page_url(request: Request) -> str:
    """The dashboard page URL carrying the same filter query."""
    query = request.url.query
    return f"/?{query}" if query else "/"


def _results_context(controller: DashboardController, state: FilterState) -> dict[str, Any]:
    view = controller.recompute(state)
    return {
        "view": view,
        "error": view.error,
    }


def _render_page(
    request: Request,
    state: FilterState,
    controller: DashboardController,
) -> HTMLResponse:
    return _tmpl().TemplateResponse(
        request,
        "index.html",
        {
            "filters": state,
            "code_options": controller.code_options(),
            "year_options": controller.year_options(),
            **_results_context(controller, state),
        },
    )


# ── Routes ────────────────────────────────────────────────────────────────────

@router.get("/", response_class=HTMLResponse, include_in_schema=False)
def index(
    request: Request,
    state: FilterState = Depends(filter_params),
    controller: DashboardController = Depends(get_controller),
) -> HTMLResponse:
    """Dashboard page."""
    return _render_page(request, state, controller)


@router.get("/partials/results", response_class=HTMLResponse, include_in_schema=False)
def results_partial(
    request: Request,
    state: FilterState = Depends(filter_params),
    controller: DashboardController = Depends(get_controller),
) -> HTMLResponse:
    """HTMX partial: directions table and data table for the current filters.

    htmx records the page URL (not this one) in browser history through the
    HX-Push-Url header.  A request without the HX-Request header, such as a
    reload or a bookmark of an older history entry, gets the full page.
    """
    if request.headers.get("HX-Request") != "true":
        return _render_page(request, state, controller)
    response = _tmpl().TemplateResponse(
        request,
        "partials/results.html",
        _results_context(controller, state),
    )
    response.headers["HX-Push-Url"] = _page_url(request)
    return response
