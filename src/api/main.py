"""FastAPI application entry point for empire-rules.

Exposes the selection rules service over HTTP. The catalog is loaded once,
lazily, through the dependency factories in ``src.api.dependencies``.
"""

import logging

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.api.dependencies import get_catalog
from src.api.selection import catalog_router
from src.api.selection import router as selection_router
from src.config.settings import get_settings
from src.engine.rules.errors import RulesEngineError

APP_VERSION = "0.1.0"

settings = get_settings()

_LOG_NAME_TO_LEVEL: dict[str, int] = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}

# --- Structured logging ---
structlog.configure(
    processors=[
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.dev.ConsoleRenderer() if settings.ENVIRONMENT == "dev"
        else structlog.processors.JSONRenderer(),
    ],
    wrapper_class=structlog.make_filtering_bound_logger(
        _LOG_NAME_TO_LEVEL[settings.LOG_LEVEL.value],
    ),
    context_class=dict,
    logger_factory=structlog.PrintLoggerFactory(),
    cache_logger_on_first_use=True,
)

# Engine modules log through stdlib logging
logging.basicConfig(level=_LOG_NAME_TO_LEVEL[settings.LOG_LEVEL.value])

logger: structlog.stdlib.BoundLogger = structlog.get_logger()

# --- FastAPI app ---
app = FastAPI(
    title="Empire Rules API",
    description="Legality, completability and availability checks for empire selections.",
    version=APP_VERSION,
)

# --- CORS middleware ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if settings.ENVIRONMENT == "dev" else [],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# --- Routers ---
app.include_router(catalog_router)
app.include_router(selection_router)


# --- Infrastructure Endpoints (global) ---


@app.get("/health")
async def health_check() -> dict:
    """Liveness probe with component health checks.

    Returns 200 always (degraded status if the catalog cannot be loaded).
    The catalog is fetched outside dependency injection so a load failure
    is reported rather than raised, but an override of ``get_catalog``
    still applies.
    """
    checks: dict[str, bool] = {"api": True}
    catalog_version: str | None = None
    load = app.dependency_overrides.get(get_catalog, get_catalog)

    try:
        catalog = load()
        checks["catalog"] = len(catalog) > 0
        catalog_version = catalog.version
    except (OSError, ValueError, RulesEngineError) as exc:
        logger.warning("catalog_unavailable", error=str(exc))
        checks["catalog"] = False

    all_ok = all(checks.values())

    return {
        "status": "ok" if all_ok else "degraded",
        "version": APP_VERSION,
        "environment": settings.ENVIRONMENT.value,
        "catalog_version": catalog_version,
        "checks": checks,
    }


@app.get("/api/version")
async def get_version() -> dict[str, str]:
    """Return application name, version, and environment."""
    return {
        "name": "empire-rules",
        "version": APP_VERSION,
        "environment": settings.ENVIRONMENT.value,
    }
