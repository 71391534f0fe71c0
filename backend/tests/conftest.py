"""Pytest fixtures for the pawposts backend."""

from collections.abc import AsyncIterator
from dataclasses import dataclass, field
from pathlib import Path

from alembic import command
from alembic.config import Config
import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel

from app import create_app
from core import CredentialConfig
from core.config import settings
from db import StoreHandle
from services import storage

TEST_SECRET_KEY = "pawposts-test-secret"


def _run_alembic_migrations(database_url: str) -> None:
    """Apply Alembic migrations to the given database URL."""
    backend_dir = Path(__file__).resolve().parents[1]
    alembic_cfg = Config(str(backend_dir / "alembic.ini"))
    alembic_cfg.set_main_option("script_location", str(backend_dir / "alembic"))
    alembic_cfg.attributes["configure_logger"] = False

    original_database_url = settings.database_url
    try:
        settings.database_url = database_url
        command.upgrade(alembic_cfg, "head")
    finally:
        settings.database_url = original_database_url


@pytest.fixture(scope="session")
def test_database_url(tmp_path_factory) -> str:
    """Create and migrate a file-backed SQLite database for tests."""
    db_dir = tmp_path_factory.mktemp("sqlite")
    db_path = db_dir / "backend-test.db"
    database_url = f"sqlite+aiosqlite:///{db_path}"
    _run_alembic_migrations(database_url)
    return database_url


@pytest.fixture(scope="session")
def credential_config() -> CredentialConfig:
    return CredentialConfig(secret_key=TEST_SECRET_KEY)


@pytest_asyncio.fixture()
async def store(test_database_url: str) -> AsyncIterator[StoreHandle]:
    """Store handle bound to the migrated database, emptied before each test."""
    handle = StoreHandle(
        test_database_url,
        connect_args={"check_same_thread": False},
    )
    handle.init()
    async with handle.session() as session:
        for table in reversed(SQLModel.metadata.sorted_tables):
            await session.execute(table.delete())
        await session.commit()
    yield handle
    await handle.dispose()


@pytest.fixture()
def app(store: StoreHandle, credential_config: CredentialConfig) -> FastAPI:
    """Create the FastAPI app around the test store and signing config."""
    return create_app(store=store, credential_config=credential_config)


@pytest_asyncio.fixture()
async def async_client(app: FastAPI) -> AsyncIterator[AsyncClient]:
    """Return an HTTPX async client bound to the FastAPI app."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client


@pytest_asyncio.fixture()
async def db_session(store: StoreHandle) -> AsyncIterator[AsyncSession]:
    """Provide a raw database session to tests."""
    async with store.session() as session:
        yield session


@dataclass
class FakeBlobStore:
    objects: dict[str, bytes] = field(default_factory=dict)
    content_types: dict[str, str] = field(default_factory=dict)
    deleted: list[str] = field(default_factory=list)
    fail_deletes: bool = False

    def upload_object(self, object_key, data, content_type, client=None) -> None:
        self.objects[object_key] = data
        self.content_types[object_key] = content_type

    def delete_object(self, object_key, client=None) -> None:
        if self.fail_deletes:
            raise RuntimeError("blob store unavailable")
        self.deleted.append(object_key)
        self.objects.pop(object_key, None)

    def create_presigned_get_url(self, object_key, *, expires_seconds=120, client=None) -> str:
        return f"https://blobs.example.com/{object_key}?expires={expires_seconds}"


@pytest.fixture(autouse=True)
def blob_store(monkeypatch: pytest.MonkeyPatch) -> FakeBlobStore:
    """Replace MinIO calls with an in-memory store."""
    fake = FakeBlobStore()
    monkeypatch.setattr(storage, "upload_object", fake.upload_object)
    monkeypatch.setattr(storage, "delete_object", fake.delete_object)
    monkeypatch.setattr(storage, "create_presigned_get_url", fake.create_presigned_get_url)
    return fake

