"""
Dashboard state access for the API.

create_app() loads a DashboardController during the lifespan startup and
stores it on ``app.state``.  Routes obtain it through the dependencies
below; JSON routes use require_loaded() so a failed patent load becomes a
503 instead of an empty response.

Filter criteria arrive as query parameters and are turned into a fresh
FilterState per request, so concurrent requests never share filter state.
"""

from fastapi import HTTPException, Query, Request

from patents.dashboard import DashboardController
from patents.filters import FilterState


def get_controller(request: Request) -> DashboardController:
    """FastAPI dependency: the controller loaded at startup."""
    controller = getattr(request.app.state, "controller", None)
    if controller is None:
        raise RuntimeError("Dashboard not initialised; app lifespan has not run")
    return controller


def require_loaded(request: Request) -> DashboardController:
    """FastAPI dependency: like get_controller(), but 503 if loading failed."""
    controller = get_controller(request)
    if controller.load_error is not None:
        raise HTTPException(status_code=503, detail=controller.load_error)
    return controller


def filter_params(
    q: str = Query("", description="Substring searched in title and authors (case-insensitive)"),
    ipc_code: list[str] | None = Query(None, description="Keep only these classification codes"),
    year: list[int] | None = Query(None, description="Keep only these publication years"),
) -> FilterState:
    """FastAPI dependency: build the request's FilterState from query params."""
    return FilterState.from_params(q=q, codes=ipc_code, years=year)
