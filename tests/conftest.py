"""
Shared fixtures: a throwaway SQLite store per test (file-backed, foreign keys on),
a session on it, and an httpx client bound to an app built on the same store.
"""
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from catalog_admin.config import get_settings
from catalog_admin.db import Store
from catalog_admin.main import create_app


@pytest_asyncio.fixture
async def store(tmp_path):
    s = Store(f"sqlite+aiosqlite:///{tmp_path / 'catalog.db'}")
    await s.create_all()
    yield s
    await s.dispose()


@pytest_asyncio.fixture
async def db(store):
    """Open session; tests commit explicitly when they need a second session to see rows."""
    async with store.session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(store):
    app = create_app(store)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.fixture
def cli_env(tmp_path, monkeypatch):
    """Point the CLI at a fresh SQLite file through DATABASE_URL."""
    monkeypatch.setenv("DATABASE_URL", f"sqlite+aiosqlite:///{tmp_path / 'cli.db'}")
    monkeypatch.setenv("APP_ENV", "test")
    monkeypatch.setenv("COLUMNS", "200")
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
