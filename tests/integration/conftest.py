from typing import Optional

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession
from src.depends import get_delivery_service, get_session, get_storage_service
from src.adapter.services.notification_service import LoggingNotificationService
from src.app.services.storage_service import StorageService, StoredFile


class InMemoryStorageService(StorageService):
    """Keeps uploaded files in a dict instead of calling the image host"""

    def __init__(self):
        self.files = {}

    async def upload(self, content: bytes, file_name: str) -> StoredFile:
        url = f"https://files.test/{len(self.files) + 1}/{file_name}"
        self.files[url] = content
        return StoredFile(url=url, delete_url=f"{url}/delete")

    async def delete(self, url: str, delete_url: Optional[str] = None) -> bool:
        return self.files.pop(url, None) is not None


@pytest_asyncio.fixture(scope="function")
async def engine():
    """In-memory SQLite database, rebuilt for every test"""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        echo=False,
        future=True,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(engine):
    """Create a new database session for each test"""
    Session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)
    async with Session() as session:
        yield session


@pytest.fixture
def storage():
    return InMemoryStorageService()


@pytest_asyncio.fixture
async def client(db_session, storage):
    """Create test client with database session and external service overrides"""
    from src.api.app import create_app
    from config import ApplicationConfig

    app = create_app(ApplicationConfig)

    async def override_get_session():
        yield db_session

    app.dependency_overrides[get_session] = override_get_session
    app.dependency_overrides[get_storage_service] = lambda: storage
    app.dependency_overrides[get_delivery_service] = LoggingNotificationService

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
