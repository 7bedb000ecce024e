"""Database initialization and dependency injection."""

from typing import AsyncGenerator

import fastapi
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from components.core.config import Settings
from components.core.database import DatabaseManager
from components.core.exceptions import StoreFailureError
from components.core.logger import get_logger
from components.category.repository import CategoryRepository
# Import all models to ensure they're registered
import components.category.models
import components.transaction.models
import components.budget.models
import components.goal.models

logger = get_logger(__name__)


async def get_db(request: fastapi.Request) -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency for getting database sessions."""
    db_manager: DatabaseManager = request.app.state.db_manager
    async with db_manager.get_db() as session:
        yield session


def get_app_settings(request: fastapi.Request) -> Settings:
    """FastAPI dependency returning the settings the app was built with."""
    return request.app.state.settings


async def prepare_database(db_manager: DatabaseManager, settings: Settings) -> None:
    """Create tables and seed the default categories on an empty store."""
    try:
        await db_manager.create_all()
    except SQLAlchemyError as e:
        logger.exception("Could not create tables at %s", db_manager.engine.url)
        raise StoreFailureError("Could not prepare the database") from e

    if not settings.SEED_DEFAULT_CATEGORIES:
        return
    async with db_manager.get_db() as session:
        created = await CategoryRepository(session).seed_defaults()
        if created:
            logger.info("Seeded %d default categories", created)


def init_db(app: fastapi.FastAPI, db_manager: DatabaseManager, settings: Settings) -> None:
    """Attach the database manager and settings to the application."""
    app.state.db_manager = db_manager
    app.state.settings = settings
