"""
Shared fixtures: in-memory SQLite database, auth components, HTTP client.
"""

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

from auth.jwt import TokenIssuer, TokenValidator
from auth.password import PasswordHasher
from database.session import Database
from tests.helpers import make_settings


@pytest.fixture
def settings():
    return make_settings()


@pytest.fixture
def hasher() -> PasswordHasher:
    return PasswordHasher(rounds=4)


@pytest.fixture
def issuer(settings) -> TokenIssuer:
    return TokenIssuer(settings)


@pytest.fixture
def validator(settings) -> TokenValidator:
    return TokenValidator(settings)


@pytest_asyncio.fixture
async def database():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    db = Database(engine)
    await db.create_all()
    yield db
    await db.dispose()


@pytest_asyncio.fixture
async def session(database):
    async with database.session_factory() as s:
        yield s


@pytest_asyncio.fixture
async def client(settings, database):
    from main import create_app

    app = create_app(settings, database)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
