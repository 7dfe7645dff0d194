"""Pytest configuration and fixtures."""

import os
import sys
from collections.abc import AsyncGenerator
from pathlib import Path
from typing import Any
from uuid import uuid4

# Disable rate limiting and keep portfolio files local in tests
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["STORAGE_BACKEND"] = "local"

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.ext.compiler import compiles
from sqlalchemy.pool import StaticPool

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from infrastructure.auth.jwt_provider import JWTAuthProvider
from infrastructure.auth.provider import TokenUser
from infrastructure.database.models import Base, UserModel
from infrastructure.storage.local_storage import LocalBlobStorage


# Compile JSONB as JSON for SQLite (used in tests)
@compiles(JSONB, "sqlite")
def _compile_jsonb_sqlite(type_: Any, compiler: Any, **kw: Any) -> str:
    return "JSON"


# Test database URL (SQLite in memory)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

# Fixed user IDs for consistency
TEST_USER_ID = uuid4()
OTHER_USER_ID = uuid4()


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """Create a fresh in-memory database with all tables for each test."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
async def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create session factory with both test users seeded."""
    factory = async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
    async with factory() as session:
        session.add_all(
            [
                UserModel(id=TEST_USER_ID, email="test@example.com", name="Test User"),
                UserModel(id=OTHER_USER_ID, email="other@example.com", name="Other User"),
            ]
        )
        await session.commit()
    return factory


@pytest.fixture
async def db_session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    """Create a database session for direct assertions."""
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
def test_user() -> TokenUser:
    """Create a test user with fixed ID."""
    return TokenUser(
        id=TEST_USER_ID,
        email="test@example.com",
        display_name="Test User",
    )


@pytest.fixture
def other_user() -> TokenUser:
    """A second, unrelated user."""
    return TokenUser(
        id=OTHER_USER_ID,
        email="other@example.com",
        display_name="Other User",
    )


@pytest.fixture
def auth_provider() -> JWTAuthProvider:
    """Create auth provider for testing."""
    return JWTAuthProvider(
        secret_key="test-secret-key",
        algorithm="HS256",
        expire_minutes=30,
    )


@pytest.fixture
def auth_token(auth_provider: JWTAuthProvider, test_user: TokenUser) -> str:
    """Create auth token for test user."""
    return str(auth_provider.create_token(test_user))


@pytest.fixture
def auth_headers(auth_token: str) -> dict[str, str]:
    """Create authorization headers."""
    return {"Authorization": f"Bearer {auth_token}"}


@pytest.fixture
def blob_storage(tmp_path: Path) -> LocalBlobStorage:
    """Local blob storage rooted in a per-test directory."""
    return LocalBlobStorage(root_dir=str(tmp_path / "uploads"), url_prefix="/uploads")


@pytest.fixture
async def client() -> AsyncGenerator[AsyncClient, None]:
    """Create async test client (no auth, no overrides)."""
    from main import app

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


def _build_app(
    session_factory: async_sessionmaker[AsyncSession],
    user: TokenUser,
    auth_provider: JWTAuthProvider,
    blob_storage: LocalBlobStorage,
    tmp_dir: Path,
) -> Any:
    """Create an app whose auth and services point at the test database."""
    from api.dependencies.auth import get_auth_provider, get_current_user
    from api.v1.dependencies import (
        get_dashboard_service,
        get_exchange_service,
        get_portfolio_service,
        get_profile_service,
        get_review_service,
        get_service_request_service,
    )
    from domain.services.dashboard_service import DashboardService
    from domain.services.exchange_service import ExchangeService
    from domain.services.portfolio_service import PortfolioService
    from domain.services.profile_service import ProfileService
    from domain.services.review_service import ReviewService
    from domain.services.service_request_service import ServiceRequestService
    from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork
    from main import create_app

    app = create_app()

    def test_uow_factory() -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork(session_factory)

    async def override_get_user() -> TokenUser:
        return user

    app.dependency_overrides[get_current_user] = override_get_user
    app.dependency_overrides[get_auth_provider] = lambda: auth_provider
    app.dependency_overrides[get_profile_service] = lambda: ProfileService(
        test_uow_factory, blob_storage
    )
    app.dependency_overrides[get_review_service] = lambda: ReviewService(test_uow_factory)
    app.dependency_overrides[get_portfolio_service] = lambda: PortfolioService(
        test_uow_factory, blob_storage, tmp_dir=str(tmp_dir)
    )
    app.dependency_overrides[get_service_request_service] = lambda: ServiceRequestService(
        test_uow_factory
    )
    app.dependency_overrides[get_exchange_service] = lambda: ExchangeService(test_uow_factory)
    app.dependency_overrides[get_dashboard_service] = lambda: DashboardService(test_uow_factory)
    return app


@pytest.fixture
def upload_tmp_dir(tmp_path: Path) -> Path:
    """Staging directory for uploads; empty once every request finishes."""
    path = tmp_path / "staging"
    path.mkdir()
    return path


@pytest.fixture
async def authenticated_client(
    session_factory: async_sessionmaker[AsyncSession],
    test_user: TokenUser,
    auth_provider: JWTAuthProvider,
    blob_storage: LocalBlobStorage,
    upload_tmp_dir: Path,
) -> AsyncGenerator[AsyncClient, None]:
    """
    Create authenticated test client with proper database and auth overrides.

    This client:
    - Uses an in-memory SQLite database with the test users seeded
    - Overrides auth dependency to return the test user
    - Wires every service to the test database and a temporary blob store
    """
    app = _build_app(session_factory, test_user, auth_provider, blob_storage, upload_tmp_dir)

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture
async def other_client(
    session_factory: async_sessionmaker[AsyncSession],
    other_user: TokenUser,
    auth_provider: JWTAuthProvider,
    blob_storage: LocalBlobStorage,
    upload_tmp_dir: Path,
) -> AsyncGenerator[AsyncClient, None]:
    """Client authenticated as the second user, sharing the same database."""
    app = _build_app(session_factory, other_user, auth_provider, blob_storage, upload_tmp_dir)

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c

    app.dependency_overrides.clear()
