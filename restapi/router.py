"""Application configuration and router setup."""

from contextlib import asynccontextmanager
from typing import Optional

import fastapi
from fastapi import status
from fastapi.middleware import cors
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from components.core import init_db
from components.core.config import Settings, get_settings
from components.core.database import DatabaseManager
from components.core.exceptions import RecordNotFoundError, StoreFailureError, ValidationError
from components.core.logger import configure_logging, get_logger
from restapi.endpoints import budget, category, charts, dashboard, goal, health_check, transaction

logger = get_logger(__name__)


def register_exception_handlers(app: fastapi.FastAPI) -> None:
    """Map domain errors onto HTTP responses."""

    @app.exception_handler(RecordNotFoundError)
    async def not_found_handler(request: fastapi.Request, exc: RecordNotFoundError) -> JSONResponse:
        return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": str(exc)})

    @app.exception_handler(ValidationError)
    async def validation_handler(request: fastapi.Request, exc: ValidationError) -> JSONResponse:
        return JSONResponse(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, content={"detail": str(exc)})

    @app.exception_handler(StoreFailureError)
    @app.exception_handler(SQLAlchemyError)
    async def store_failure_handler(request: fastapi.Request, exc: Exception) -> JSONResponse:
        logger.error("Store failure on %s %s", request.method, request.url.path, exc_info=exc)
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"detail": "The record store is unavailable"},
        )


def create_app(
    settings: Optional[Settings] = None,
    db_manager: Optional[DatabaseManager] = None,
) -> fastapi.FastAPI:
    """Create and configure the FastAPI application."""
    settings = settings or get_settings()
    configure_logging(settings)
    db_manager = db_manager or DatabaseManager(settings=settings)

    @asynccontextmanager
    async def lifespan(app: fastapi.FastAPI):
        await init_db.prepare_database(db_manager, settings)
        logger.info("Finance tracker started (database: %s)", db_manager.engine.url)
        yield
        await db_manager.dispose()

    app = fastapi.FastAPI(
        title="Finance Tracker",
        description="Personal finance tracking: transactions, budgets, goals and charts",
        version="1.0.0",
        debug=settings.DEBUG,
        lifespan=lifespan,
    )

    # Initialize database
    init_db.init_db(app, db_manager, settings)

    # Add CORS middleware
    app.add_middleware(
        cors.CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # Include routers
    app.include_router(health_check.router)
    app.include_router(category.router)
    app.include_router(transaction.router)
    app.include_router(budget.router)
    app.include_router(goal.router)
    app.include_router(dashboard.router)
    app.include_router(charts.router)

    return app
