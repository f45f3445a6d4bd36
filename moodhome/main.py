from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import OperationalError, IntegrityError
from moodhome.core.config import Settings, settings
from moodhome.core.errors import GeneratorFailure, InvalidInput, StoreUnavailable
from moodhome.core.logging import configure_logging
from moodhome.api.routes import analytics, checkins, contacts, feed, health, suggestions
from moodhome.db.session import Database
from moodhome.repositories.checkin_repo import latest_created_at
from moodhome.schemas.common import ErrorResponse
from moodhome.services.clock import clock
import logging

logger = logging.getLogger(__name__)


def _error(status_code: int, error: str, detail: str, error_code: str) -> JSONResponse:
    body = ErrorResponse(error=error, detail=detail, error_code=error_code)
    return JSONResponse(status_code=status_code, content=body.model_dump())


def create_app(app_settings: Settings | None = None, database: Database | None = None) -> FastAPI:
    """
    Build the application. The store handle is created here (or injected by
    tests) and lives on ``app.state.database`` for the app's lifetime.
    """
    cfg = app_settings or settings
    configure_logging(cfg.LOG_LEVEL)
    owns_database = database is None
    db = database or Database(cfg.DATABASE_URL)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if cfg.AUTO_CREATE_TABLES:
            db.create_all()
        with db.session() as s:
            latest = latest_created_at(s)
        if latest is not None:
            clock.observe(latest)
        logger.info("%s started (env=%s)", cfg.APP_NAME, cfg.APP_ENV)
        yield
        if owns_database:
            db.dispose()

    app = FastAPI(title=cfg.APP_NAME, lifespan=lifespan)
    app.state.database = db

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"], allow_credentials=True,
        allow_methods=["*"], allow_headers=["*"],
    )

    # Exception handlers
    @app.exception_handler(OperationalError)
    async def operational_error_handler(request: Request, exc: OperationalError):
        logger.error(f"Database operational error: {exc}")
        return _error(503, "Database connection error",
                      "Unable to reach the database. Please try again later.", "DATABASE_CONNECTION_ERROR")

    @app.exception_handler(IntegrityError)
    async def integrity_error_handler(request: Request, exc: IntegrityError):
        logger.error(f"Database integrity error: {exc}")
        return _error(400, "Data integrity violation",
                      "The operation violates database constraints", "DATA_INTEGRITY_ERROR")

    @app.exception_handler(StoreUnavailable)
    async def store_unavailable_handler(request: Request, exc: StoreUnavailable):
        return _error(503, "Store unavailable", str(exc), exc.error_code)

    @app.exception_handler(GeneratorFailure)
    async def generator_failure_handler(request: Request, exc: GeneratorFailure):
        logger.warning(f"Suggestion generator failed: {exc}")
        return _error(502, "Suggestion generator failed", str(exc), exc.error_code)

    @app.exception_handler(InvalidInput)
    async def invalid_input_handler(request: Request, exc: InvalidInput):
        return _error(422, "Invalid input", str(exc), exc.error_code)

    # routes
    app.include_router(health.router)
    app.include_router(checkins.router)
    app.include_router(analytics.router)
    app.include_router(suggestions.router)
    app.include_router(contacts.router)
    app.include_router(feed.router)
    return app

app = create_app()
