"""FastAPI application for the fit-journey JSON API."""

import logging
from collections.abc import Callable
from contextlib import asynccontextmanager
from datetime import datetime
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from .. import __version__
from ..db.engine import get_db_path, init_db
from ..errors import ActiveGoalExistsError, ForbiddenError, InvalidInputError, NotFoundError
from ..utils.time import utcnow
from .routers import goals, measurements, streaks

logger = logging.getLogger(__name__)


def create_app(
    db_path: Path | None = None,
    clock: Callable[[], datetime] = utcnow,
) -> FastAPI:
    """Create and configure the FastAPI application."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Startup: make sure the schema exists
        await init_db(app.state.db_path)
        yield

    app = FastAPI(
        title="fit-journey",
        description="Goal progress and workout streak tracking",
        version=__version__,
        lifespan=lifespan,
    )

    app.state.db_path = db_path or get_db_path()
    app.state.clock = clock

    app.include_router(goals.router)
    app.include_router(measurements.router)
    app.include_router(streaks.router)

    @app.exception_handler(NotFoundError)
    async def not_found(request: Request, exc: NotFoundError):
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(ForbiddenError)
    async def forbidden(request: Request, exc: ForbiddenError):
        return JSONResponse(status_code=403, content={"detail": str(exc)})

    @app.exception_handler(InvalidInputError)
    async def invalid_input(request: Request, exc: InvalidInputError):
        status_code = 409 if isinstance(exc, ActiveGoalExistsError) else 400
        logger.debug("Rejected request to %s: %s", request.url.path, exc)
        return JSONResponse(status_code=status_code, content={"detail": str(exc)})

    @app.get("/health")
    async def health():
        """Health check endpoint."""
        return {"status": "healthy", "version": __version__}

    return app

