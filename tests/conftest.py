"""
Shared fixtures: in-memory SQLite store, seeded catalog, HTTP client.

The app's ``get_db`` dependency is overridden so every request gets a session
on the test engine; nothing here touches PostgreSQL.
"""
import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from main import app
from services.product_service.models import Product
from shared.config.database import Base, get_db

SESSION_ID = "session-a"


@pytest.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, expire_on_commit=False)


@pytest.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
async def products(session_factory) -> list[Product]:
    """Four products over two categories and three warehouses."""
    rows = [
        Product(name="Gaming Laptop", price=899.99, image="https://img.example/laptop.png",
                category="electronics", rating=4.7, reviews=120, warehouse="Cikarang",
                delivery_days=2, stock=5),
        Product(name="Wireless Mouse", price=19.5, image="https://img.example/mouse.png",
                category="electronics", rating=4.2, reviews=310, warehouse="Jakarta",
                delivery_days=1, stock=40),
        Product(name="Football", price=25.0, image="https://img.example/ball.png",
                category="sports", rating=4.9, reviews=88, warehouse="Cikarang",
                delivery_days=1, stock=12),
        Product(name="Yoga Mat", price=15.0, image="https://img.example/mat.png",
                category="sports", rating=3.8, reviews=45, warehouse="Bandung",
                delivery_days=4, stock=0),
    ]
    async with session_factory() as session:
        session.add_all(rows)
        await session.commit()
    return rows


@pytest.fixture
async def client(session_factory):
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    transport = ASGITransport(app=app)
    async with AsyncClient(
        transport=transport, base_url="http://test", headers={"X-Session-Id": SESSION_ID}
    ) as client:
        yield client
    app.dependency_overrides.clear()
