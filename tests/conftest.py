"""Shared fixtures: temp SQLite database, app client, zero-latency payments"""

import os

os.environ.setdefault("PAYMENT_MODE", "demo")
os.environ.setdefault("DATABASE_URL", "sqlite:///./storefront-test.db")

from decimal import Decimal
import uuid

import httpx
import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from storefront.api.v1.payments.mock_gateway import MockPaymentGateway
from storefront.api.v1.payments.services import PaymentService
from storefront.core.database import get_db
from storefront.main import app
from storefront.models import Base, Product


@pytest.fixture
async def engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}", poolclass=NullPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


@pytest.fixture
def payment_service():
    return PaymentService(MockPaymentGateway(latency_scale=0), mode="demo")


@pytest.fixture
async def client(session_factory, payment_service):
    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    previous_service = app.state.payment_service
    app.dependency_overrides[get_db] = override_get_db
    app.state.payment_service = payment_service

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
    app.state.payment_service = previous_service


@pytest.fixture
def user_id():
    return str(uuid.uuid4())


@pytest.fixture
def make_product(session_factory):
    async def _make(**overrides):
        data = {
            "title": "Linen Shirt",
            "description": "Relaxed fit",
            "image": "https://img.example.com/shirt.png",
            "category": "men",
            "brand": "levi",
            "price": Decimal("100.00"),
            "sale_price": Decimal("0"),
            "total_stock": 10,
        }
        data.update(overrides)
        async with session_factory() as session:
            product = Product(**data)
            session.add(product)
            await session.commit()
            return product

    return _make


@pytest.fixture
def fetch(session_factory):
    """Load a row in a fresh session, bypassing anything the app cached"""
    async def _fetch(model, pk):
        async with session_factory() as session:
            return await session.get(model, pk)

    return _fetch
