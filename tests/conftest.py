"""
Test fixtures using async SQLite for fast, isolated tests.
No PostgreSQL or object store required.
"""
from typing import Any, BinaryIO

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from imgupper.auth.models import User  # noqa: F401
from imgupper.config import Settings
from imgupper.core.dependencies import get_db, get_storage
from imgupper.core.exceptions import StorageError
from imgupper.db.base import Base
from imgupper.files.models import StoredFile  # noqa: F401
from imgupper.main import create_app

TEST_SECRET = "test-secret"


class RecordingStorage:
    """In-memory stand-in for ObjectStorage that records every write."""

    bucket_name = "test-bucket"

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.puts: list[dict[str, Any]] = []

    async def put_object(
        self, key: str, body: BinaryIO, content_type: str, public_read: bool = True
    ) -> None:
        if self.fail:
            raise StorageError("simulated outage")
        self.puts.append(
            {
                "key": key,
                "body": body.read(),
                "content_type": content_type,
                "public_read": public_read,
            }
        )


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        database_url="sqlite+aiosqlite:///:memory:",
        secret_key=TEST_SECRET,
        public_base_url="https://cdn.test/",
    )


@pytest_asyncio.fixture
async def db():
    """Create a fresh in-memory SQLite database for each test."""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", echo=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async with session_factory() as session:
        yield session

    await engine.dispose()


@pytest.fixture
def storage() -> RecordingStorage:
    return RecordingStorage()


@pytest_asyncio.fixture
async def client(db: AsyncSession, storage: RecordingStorage, settings: Settings):
    app = create_app(settings)

    async def _get_db():
        yield db

    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[get_storage] = lambda: storage
    try:
        async with AsyncClient(
            transport=ASGITransport(app=app),
            base_url="http://testserver",
        ) as ac:
            yield ac
    finally:
        app.dependency_overrides.clear()
        await app.state.engine.dispose()


async def register(client: AsyncClient, name: str, email: str, password: str = "secretpw") -> dict:
    response = await client.post(
        "/api/v1/auth/register",
        json={"name": name, "email": email, "password": password},
    )
    assert response.status_code == 201, response.text
    return response.json()


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}
