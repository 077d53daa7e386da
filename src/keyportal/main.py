"""FastAPI application factory.

Learn: App factory pattern. create_app() returns a configured FastAPI
instance. Lifespan manages startup/shutdown of the database pool.
Middleware, CORS, error handlers and routers are all registered here.

The Database (pool + session factory) and Settings are attached to
app.state; dependencies read them from there. Passing a different
Settings object gives a fully separate app, which is how tests run
against an in-memory store.
"""

from contextlib import asynccontextmanager
from typing import Optional

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from keyportal import __version__
from keyportal.api import api_router
from keyportal.config import Settings
from keyportal.config import settings as default_settings
from keyportal.db.engine import Database

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown lifecycle.

    Anything before `yield` runs at startup, after `yield` runs at shutdown.
    """
    settings: Settings = app.state.settings
    logger.info(
        "keyportal.starting",
        version=__version__,
        environment=settings.environment,
        port=settings.port,
        api_prefix=settings.prefix or "/",
        db_host=settings.db_host if not settings.database_url else None,
    )

    yield

    logger.info("keyportal.shutdown")
    await app.state.db.dispose()


async def _validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Missing/empty/mistyped body fields → 400 instead of FastAPI's 422."""
    errors = [
        {
            "field": ".".join(str(part) for part in err.get("loc", ())[1:]) or "body",
            "message": err.get("msg", "invalid"),
        }
        for err in exc.errors()
    ]
    return JSONResponse(
        status_code=400,
        content={"detail": "Invalid request body", "errors": errors},
    )


async def _unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("keyportal.unhandled_error", exc_info=exc)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


def create_app(
    settings: Optional[Settings] = None,
    database: Optional[Database] = None,
) -> FastAPI:
    """Build and return the FastAPI application."""
    settings = settings or default_settings

    app = FastAPI(
        title="Keyportal",
        description="Admin dashboard and self-service API key issuance",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.db = database or Database.from_settings(settings)

    # ── Middleware stack ──────────────────────────────────────
    # Note: Starlette middleware executes in reverse order of registration.
    # Request flow: RequestId → Security → CORS → handler

    from keyportal.middleware.request_id import RequestIdMiddleware
    from keyportal.middleware.security import SecurityHeadersMiddleware

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestIdMiddleware)

    app.add_exception_handler(RequestValidationError, _validation_error_handler)
    app.add_exception_handler(Exception, _unhandled_error_handler)

    app.include_router(api_router, prefix=settings.prefix)

    return app


# Default app instance (used by uvicorn: keyportal.main:app)
app = create_app()
