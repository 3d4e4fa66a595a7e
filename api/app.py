"""
FastAPI application factory for the patent dashboard.

Usage:
    python -m api.app                                  # Dev server on port 8000
    APP_PATENTS_SOURCE=/data/patents.csv python -m api.app

OpenAPI docs available at http://localhost:8000/docs after starting.

Startup loads the classification dictionary first and the patent records
second; both are read exactly once per process.  A missing dictionary only
costs the code descriptions.  A missing patents file leaves the app running
in an error state: JSON routes answer 503 and the HTML page shows the error
in every region.
"""

import json
import logging
import time
import uuid
from collections.abc import Callable
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates
from starlette.concurrency import run_in_threadpool
from starlette.exceptions import HTTPException as StarletteHTTPException

from api.routes import dashboard, patents, reference
from api.routes import frontend as frontend_routes
from patents.dashboard import DashboardController
from utils.config import AppConfig
from utils.formatting import truncate_text
from utils.http import SourceFetcher

# ── Configuration ─────────────────────────────────────────────────────────────
_cfg = AppConfig.from_env()

_logger = logging.getLogger("patent_dashboard_api")

# ── Structured JSON logging ─────────────────────────────────────────


class _JsonFormatter(logging.Formatter):
    """Emit log records as newline-delimited JSON."""

    def format(self, record: logging.LogRecord) -> str:
        data: dict = {
            "timestamp": self.formatTime(record, "%Y-%m-%dT%H:%M:%S"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        # Merge extra fields added via logger.info("...", extra={...})
        for key in ("method", "path", "status", "duration_ms", "request_id"):
            if hasattr(record, key):
                data[key] = getattr(record, key)
        if record.exc_info:
            data["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(data, ensure_ascii=False)


def configure_logging(cfg: AppConfig) -> None:
    """Install a single stream handler on the root logger."""
    handler = logging.StreamHandler()
    if cfg.log_format == "json":
        handler.setFormatter(_JsonFormatter())
    else:
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s")
        )
    logging.basicConfig(handlers=[handler], level=cfg.log_level, force=True)


def create_app(
    patents_source: str | None = None,
    codes_source: str | None = None,
    fetch: Callable[[str], str] | None = None,
    config: AppConfig | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        patents_source: Override the patents.csv path or URL (useful for testing).
        codes_source: Override the mpk_codes.csv path or URL.
        fetch: Override how sources are read; defaults to SourceFetcher.fetch.
        config: Override the environment-derived configuration.

    Returns:
        Configured FastAPI application instance.  Data is loaded when the
        lifespan starts, so tests must enter ``with TestClient(app)``.
    """
    cfg = config or _cfg
    configure_logging(cfg)
    patents_source = patents_source or cfg.patents_source
    codes_source = codes_source or cfg.codes_source

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Load the dictionary and patent records once, before serving."""
        with SourceFetcher(timeout=cfg.fetch_timeout) as fetcher:
            controller = DashboardController(
                fetch=fetch or fetcher.fetch,
                top_n=cfg.top_n,
            )
            # File and HTTP reads block; keep them off the event loop.
            await run_in_threadpool(controller.load, patents_source, codes_source)
        app.state.controller = controller
        yield

    app = FastAPI(
        title="Patent Dashboard API",
        summary="Aggregates and filters a patent register export for dashboard charts.",
        description=(
            "## Patent Dashboard API\n\n"
            "Serves chart series and table rows computed from `patents.csv`, "
            "joined with the classification descriptions in `mpk_codes.csv`.\n\n"
            "### Filters\n"
            "- `q`: case-insensitive substring of the title or the authors\n"
            "- `ipc_code`: repeatable; classification codes to keep\n"
            "- `year`: repeatable; publication years to keep\n\n"
            "Different filters combine with AND; repeated values of one filter "
            "combine with OR.  Omitted filters place no constraint."
        ),
        version="1.0.0",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_tags=[
            {
                "name": "dashboard",
                "description": "Chart series: per year, top authors, top directions, code shares.",
            },
            {
                "name": "patents",
                "description": "Filtered raw-data table.",
            },
            {
                "name": "reference",
                "description": "Filter options: classification codes and publication years.",
            },
            {
                "name": "meta",
                "description": "Health check.",
            },
        ],
    )

    # ── CORS middleware ───────────────────────────────────────────────
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cfg.cors_origins,
        allow_credentials=False,
        allow_methods=["GET", "HEAD", "OPTIONS"],
        allow_headers=["*"],
    )

    # ── Request logging middleware ────────────────────────────────────────────

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        """Log each request with its duration and a short request id."""
        request_id = str(uuid.uuid4())[:8]
        start = time.monotonic()
        response = await call_next(request)
        duration_ms = (time.monotonic() - start) * 1000
        response.headers["X-Request-ID"] = request_id

        if cfg.log_format == "json":
            _logger.info(
                "request",
                extra={
                    "method": request.method,
                    "path": request.url.path,
                    "status": response.status_code,
                    "duration_ms": round(duration_ms, 1),
                    "request_id": request_id,
                },
            )
        else:
            _logger.info(
                "method=%s path=%s status=%d duration_ms=%.1f rid=%s",
                request.method, request.url.path, response.status_code,
                duration_ms, request_id,
            )
        return response

    # ── Content Security Policy + security headers ───────────────────────────

    @app.middleware("http")
    async def security_headers(request: Request, call_next):
        """Add Content-Security-Policy, X-Content-Type-Options, and X-Frame-Options."""
        response = await call_next(request)
        # CSP: allow self + CDN origins used by HTMX and Chart.js.
        response.headers["Content-Security-Policy"] = (
            "default-src 'self'; "
            "script-src 'self' unpkg.com cdn.jsdelivr.net; "
            "style-src 'self' 'unsafe-inline' cdn.jsdelivr.net; "
            "img-src 'self' data:; "
            "font-src 'self'; "
            "connect-src 'self';"
        )
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        return response

    # ── Error handling ────────────────────────────────────────────────────────

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """Return HTTP errors in the ErrorResponse shape."""
        error = "Data unavailable" if exc.status_code == 503 else "Request failed"
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": error, "detail": str(exc.detail), "status_code": exc.status_code},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception):
        """Catch unhandled exceptions and return JSON instead of HTML traceback."""
        _logger.exception("unhandled error on %s", request.url.path)
        return JSONResponse(
            status_code=500,
            content={
                "error": "Internal server error",
                "detail": str(exc),
                "status_code": 500,
            },
        )

    @app.exception_handler(ValueError)
    async def value_error_handler(request: Request, exc: ValueError):
        return JSONResponse(
            status_code=400,
            content={"error": "Bad request", "detail": str(exc), "status_code": 400},
        )

    # ── Health check ──────────────────────────────────────────────────────────

    @app.get("/health", tags=["meta"], summary="Health check")
    def health(request: Request):
        """Return 200 when patents are loaded, 503 when loading failed."""
        controller: DashboardController | None = getattr(request.app.state, "controller", None)
        if controller is None:
            return JSONResponse(status_code=503, content={"status": "starting"})
        if controller.load_error is not None:
            return JSONResponse(
                status_code=503,
                content={"status": "no_data", "error": controller.load_error,
                         "source": patents_source},
            )
        return {
            "status": "ok",
            "patents": len(controller.patents),
            "ipc_descriptions": len(controller.codes),
        }

    # ── Register routers ──────────────────────────────────────────────────────

    prefix = "/api/v1"
    app.include_router(dashboard.router, prefix=prefix)
    app.include_router(patents.router,   prefix=prefix)
    app.include_router(reference.router, prefix=prefix)

    # ── Static files + Jinja2 templates ───────────────────────────────────────
    _here = Path(__file__).parent.parent  # project root

    static_dir = _here / "static"
    templates_dir = _here / "templates"

    if static_dir.exists():
        app.mount("/static", StaticFiles(directory=str(static_dir)), name="static")

    if templates_dir.exists():
        templates = Jinja2Templates(directory=str(templates_dir))
        templates.env.filters["truncate_text"] = truncate_text

        # Wire templates into the frontend router
        frontend_routes.set_templates(templates)
        app.include_router(frontend_routes.router)

    return app


# Singleton instance for uvicorn
app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "api.app:app",
        host=_cfg.api_host,
        port=_cfg.api_port,
        reload=True,
        log_level="info",
    )
