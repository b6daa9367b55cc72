import os
from datetime import datetime

# Settings are read at import time; point them at throwaway values first.
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret-key")

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine

from app.core.auth import User, create_access_token
from app.core.clock import FixedClock, get_clock
from app.core.database import Base, get_async_session
from app.main import app
from app.models.bill import Bill


@pytest.fixture
def clock():
    # Sunday 10 March 2024
    return FixedClock(datetime(2024, 3, 10, 9, 30))


@pytest_asyncio.fixture
async def engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(bind=engine, expire_on_commit=False)


@pytest_asyncio.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


async def _make_user(db, email):
    user = User(email=email, hashed_password="not-a-real-hash", is_active=True)
    db.add(user)
    await db.commit()
    await db.refresh(user)
    return user


@pytest_asyncio.fixture
async def user(db):
    return await _make_user(db, "asha@example.com")


@pytest_asyncio.fixture
async def other_user(db):
    return await _make_user(db, "ravi@example.com")


@pytest_asyncio.fixture
async def wifi_bill(db, user):
    bill = Bill(user_id=user.id, name="WiFi", amount=599, due_date=15, category="personal")
    db.add(bill)
    await db.commit()
    await db.refresh(bill)
    return bill


def _auth_headers(user):
    return {"Authorization": f"Bearer {create_access_token(str(user.id))}"}


@pytest.fixture
def auth_headers():
    return _auth_headers


@pytest_asyncio.fixture
async def anon_client(session_factory, clock):
    async def override_session():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_async_session] = override_session
    app.dependency_overrides[get_clock] = lambda: clock
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def client(anon_client, user):
    anon_client.headers.update(_auth_headers(user))
    return anon_client
