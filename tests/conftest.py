import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

from components.core.config import Settings
from components.core.database import DatabaseManager
from components.core.init_db import prepare_database
from restapi.router import create_app


@pytest.fixture
def settings(tmp_path):
    return Settings(DB_PATH=str(tmp_path / "finance_tracker_test.db"), LOG_LEVEL="WARNING")


@pytest_asyncio.fixture
async def db_manager(settings):
    manager = DatabaseManager(settings=settings)
    await prepare_database(manager, settings)
    yield manager
    await manager.dispose()


@pytest_asyncio.fixture
async def session(db_manager):
    async with db_manager.get_db() as db:
        yield db


@pytest.fixture
def client(settings):
    app = create_app(settings=settings)
    with TestClient(app) as test_client:
        yield test_client