from contextlib import asynccontextmanager
from collections.abc import AsyncGenerator

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from graphmapper.api.middleware import RequestLoggingMiddleware
from graphmapper.api.routes import analysis, datasets, filters
from graphmapper.config import settings

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    logger.info(
        "starting_up",
        app=settings.app_name,
        version=settings.app_version,
        max_traversal_bound=settings.max_traversal_bound,
        max_paths=settings.max_paths,
    )
    yield
    logger.info("shutdown_complete")


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="Build typed graphs from tabular data and analyse paths and impact.",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

# ── Middleware ────────────────────────────────────────────
# Order matters: outermost middleware runs first on request, last on response.

app.add_middleware(RequestLoggingMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


# ── Exception Handlers ───────────────────────────────────

@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("unhandled_exception", path=request.url.path, error=str(exc))
    return JSONResponse(
        status_code=500,
        content={
            "error": "Internal Server Error",
            "detail": str(exc) if settings.debug else "An unexpected error occurred.",
            "code": "INTERNAL_ERROR",
        },
    )


# ── Health Check ─────────────────────────────────────────

@app.get("/health", tags=["Health"])
async def health_check() -> dict:
    return {
        "status": "healthy",
        "app": settings.app_name,
        "version": settings.app_version,
    }


# ── Routers ──────────────────────────────────────────────

app.include_router(datasets.router, prefix="/datasets", tags=["Datasets"])
app.include_router(analysis.router, prefix="/analysis", tags=["Analysis"])
app.include_router(filters.router,  prefix="/filter",   tags=["Filter"])
