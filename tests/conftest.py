"""
Shared fixtures: every test gets its own SQLite file database.
"""

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from sqlalchemy import func
from sqlmodel import select

from shortener.core.exceptions import StoreUnavailableError
from shortener.core.setting import Settings
from shortener.db.models import UrlMapping
from shortener.db.session import create_engine, create_session_maker
from shortener.main import create_app
from shortener.services.mapping_store import MappingStore

TEST_BASE_URL = "http://short.test"


@pytest.fixture
def test_settings(tmp_path) -> Settings:
    return Settings(
        _env_file=None,
        DATABASE_URL=f"sqlite+aiosqlite:///{tmp_path / 'shortener.db'}",
        BASE_URL=TEST_BASE_URL,
    )


def build_store(settings: Settings) -> MappingStore:
    engine = create_engine(settings)
    return MappingStore(engine, create_session_maker(engine))


@pytest_asyncio.fixture
async def store(test_settings):
    mapping_store = build_store(test_settings)
    await mapping_store.initialize()
    yield mapping_store
    await mapping_store.close()


@pytest.fixture
def app(test_settings):
    return create_app(test_settings)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


async def count_mappings(mapping_store: MappingStore) -> int:
    async with mapping_store.session_maker() as session:
        result = await session.exec(select(func.count(UrlMapping.id)))
        return result.one()


class UnavailableStore:
    """Stands in for a MappingStore whose database is down."""

    def __init__(self):
        self.insert_calls = 0
        self.lookup_calls = 0

    async def insert(self, short_code, long_url):
        self.insert_calls += 1
        raise StoreUnavailableError("connection refused", original_error=ConnectionRefusedError())

    async def lookup(self, short_code):
        self.lookup_calls += 1
        raise StoreUnavailableError("connection refused", original_error=ConnectionRefusedError())
