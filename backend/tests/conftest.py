"""
PWAcommerce Backend - Test Configuration (conftest.py)
========================================================

Shared pytest fixtures for the whole suite.

Fixture Hierarchy:
    Database (real SQLite in memory, fresh per test):
    ├── db_engine: async engine with all tables created
    └── db_session: AsyncSession bound to db_engine

    Collaborator doubles:
    ├── store_options: StoreOptions with credentials (override per module)
    ├── fake_commerce_client: MagicMock with an AsyncMock `get`
    └── fake_cart: MagicMock implementing the CartService members

    HTTP clients (HTTPX AsyncClient over ASGITransport, no server):
    ├── test_client: commerce routes with the doubles above injected
    ├── cart_client: commerce routes with the real session cart on db_session
    └── admin_client: admin routes backed by db_session
"""

import os
import tempfile

# Must be set before any pwacommerce import: settings are read at import time
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["SITE_URL"] = "https://shop.test"
os.environ["SITE_NAME"] = "Test Shop"
os.environ["ADMIN_API_KEY"] = "test-admin-key"
os.environ["STORAGE_ROOT"] = tempfile.mkdtemp(prefix="pwacommerce_test_")
os.environ["LOG_LEVEL"] = "WARNING"

import io
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from PIL import Image
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from pwacommerce.database import Base
from pwacommerce.models.cart import CartItem  # noqa: F401
from pwacommerce.models.option import Option  # noqa: F401
from pwacommerce.schemas.store import StoreOptions


# ══════════════════════════════════════════════════════════════════════════
# Database
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def db_engine():
    # StaticPool: every session shares the one in-memory database
    engine = create_async_engine("sqlite+aiosqlite://", poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(db_engine):
    factory = async_sessionmaker(db_engine, expire_on_commit=False)
    async with factory() as session:
        yield session


# ══════════════════════════════════════════════════════════════════════════
# Collaborator doubles
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def store_options():
    return StoreOptions(consumer_key="ck_test", consumer_secret="cs_test", icon="")


@pytest.fixture
def fake_commerce_client():
    """Store client double; set .get.return_value / .side_effect per test."""
    client = MagicMock()
    client.get = AsyncMock(return_value=[])
    return client


@pytest.fixture
def fake_cart():
    """
    Cart double with the CartService members.

    Usage:
        fake_cart.add_to_cart.assert_has_awaits([call(1, 2), call(3, 1, 7)])
    """
    cart = MagicMock()
    cart.session_id = "session-abc"
    cart.set_cookies = AsyncMock()
    cart.add_to_cart = AsyncMock(return_value=True)
    cart.get_checkout_url = AsyncMock(return_value="https://shop.test/checkout/")
    return cart


@pytest.fixture
def square_png_bytes():
    """A 512x512 PNG, the smallest icon the upload service accepts."""
    output = io.BytesIO()
    Image.new("RGBA", (512, 512), (163, 51, 200, 255)).save(output, format="PNG")
    return output.getvalue()


# ══════════════════════════════════════════════════════════════════════════
# HTTP clients
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def test_client(store_options, fake_commerce_client, fake_cart):
    """
    Client for the commerce routes with options, store client and cart
    replaced by the fixtures above.

    raise_app_exceptions=False lets tests see the 500 the catch-all
    handler renders instead of the raw exception.
    """
    from pwacommerce.main import app
    from pwacommerce.routes import dependencies as deps

    async def _commerce_client():
        yield fake_commerce_client

    app.dependency_overrides[deps.get_store_options] = lambda: store_options
    app.dependency_overrides[deps.get_commerce_client] = _commerce_client
    app.dependency_overrides[deps.get_cart_service] = lambda: fake_cart

    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def cart_client(store_options, db_session):
    """Commerce routes with the real session cart backed by db_session."""
    from pwacommerce.database import get_db_session
    from pwacommerce.main import app
    from pwacommerce.routes import dependencies as deps

    async def _db_session():
        yield db_session

    app.dependency_overrides[deps.get_store_options] = lambda: store_options
    app.dependency_overrides[get_db_session] = _db_session

    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def admin_client(db_session):
    from pwacommerce.database import get_db_session
    from pwacommerce.main import app

    async def _db_session():
        yield db_session

    app.dependency_overrides[get_db_session] = _db_session

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()
