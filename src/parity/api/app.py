"""FastAPI application factory."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from parity import __version__
from parity.config import get_settings
from parity.curve.factory import close_curve_client
from parity.errors import CurveClientError, LaunchError
from parity.ledger.database import close_db, init_db
from parity.utils.locks import LockTimeoutError
from parity.web.dependencies import close_clients

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup
    await init_db()
    yield
    # Shutdown
    await close_curve_client()
    await close_clients()
    await close_db()


async def launch_error_handler(request: Request, exc: LaunchError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"detail": str(exc)})


async def curve_error_handler(request: Request, exc: CurveClientError) -> JSONResponse:
    logger.error(f"Curve client error on {request.url.path}: {exc}")
    return JSONResponse(status_code=exc.status_code, content={"detail": str(exc)})


async def lock_timeout_handler(request: Request, exc: LockTimeoutError) -> JSONResponse:
    logger.warning(f"Lock timeout on {request.url.path}: {exc}")
    return JSONResponse(
        status_code=423,
        content={"detail": "Launch is busy with another operation, retry shortly"},
    )


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title="Parity API",
        description="Solana token launchpad with charity fee sharing",
        version=__version__,
        lifespan=lifespan,
        debug=settings.debug,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if settings.debug else settings.allowed_origins,
        allow_credentials=not settings.debug,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(LaunchError, launch_error_handler)
    app.add_exception_handler(CurveClientError, curve_error_handler)
    app.add_exception_handler(LockTimeoutError, lock_timeout_handler)

    # Register routes
    from parity.api.routes import health, metadata
    from parity.web.controllers import (
        chain_router,
        config_router,
        explore_router,
        launches_router,
        pools_router,
    )

    app.include_router(health.router, tags=["Health"])
    app.include_router(metadata.router, tags=["Metadata"])
    app.include_router(launches_router, prefix="/api/v1")
    app.include_router(explore_router, prefix="/api/v1")
    app.include_router(pools_router, prefix="/api/v1")
    app.include_router(chain_router, prefix="/api/v1")
    app.include_router(config_router, prefix="/api/v1")

    return app


# Default app instance
app = create_app()
